"""
Slide-position state for the public page.

``Carousel`` backs project galleries (autoplay, arrows, dots).
``TestimonialRotator`` backs the testimonials section: it rotates only when
there is more than one item. Both render server-side from a ``?slide=`` /
``?t=`` index; ``static/site.js`` runs the clock, follows the rendered
``next_index`` on every interval and pauses a hovered carousel.
"""


class Carousel:

    def __init__(self, total, autoplay=False, interval=3.0, show_arrows=True, show_dots=True, start=0):
        self.total = max(int(total), 0)
        self.autoplay = autoplay
        self.interval = interval
        self.show_arrows = show_arrows
        self.show_dots = show_dots
        self.index = 0
        if self.total:
            self.go_to(start)

    @property
    def has_arrows(self):
        return self.show_arrows and self.total > 1

    @property
    def has_dots(self):
        return self.show_dots and self.total > 1

    @property
    def playing(self):
        return self.autoplay and self.total > 1

    @property
    def previous_index(self):
        return (self.index - 1) % self.total if self.total else 0

    @property
    def next_index(self):
        return (self.index + 1) % self.total if self.total else 0

    def go_to(self, index):
        if self.total:
            self.index = int(index) % self.total
        return self.index


class TestimonialRotator:
    __test__ = False

    INTERVAL = 6.0

    def __init__(self, count, interval=INTERVAL, start=0):
        self.count = max(int(count), 0)
        self.interval = interval
        self.index = int(start) % self.count if self.count else 0

    @property
    def rotating(self):
        return self.count > 1

    @property
    def previous_index(self):
        return (self.index - 1) % self.count if self.count else 0

    @property
    def next_index(self):
        return (self.index + 1) % self.count if self.count else 0
