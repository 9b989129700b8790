import unittest

from widgets import Carousel, TestimonialRotator


class TestCarousel(unittest.TestCase):

    def test_arrow_indices_wrap(self):
        carousel = Carousel(3)
        self.assertEqual(carousel.previous_index, 2)
        self.assertEqual(carousel.next_index, 1)
        carousel.go_to(2)
        self.assertEqual(carousel.next_index, 0)

    def test_dot_navigation(self):
        carousel = Carousel(4)
        self.assertEqual(carousel.go_to(2), 2)
        self.assertEqual(carousel.go_to(6), 2)

    def test_start_index_is_wrapped(self):
        self.assertEqual(Carousel(3, start=5).index, 2)

    def test_plays_only_with_autoplay_and_several_slides(self):
        self.assertTrue(Carousel(3, autoplay=True).playing)
        self.assertFalse(Carousel(3).playing)
        self.assertFalse(Carousel(1, autoplay=True).playing)

    def test_single_slide_has_no_controls(self):
        carousel = Carousel(1, autoplay=True)
        self.assertFalse(carousel.has_arrows)
        self.assertFalse(carousel.has_dots)

    def test_hidden_controls(self):
        carousel = Carousel(3, show_arrows=False, show_dots=False)
        self.assertFalse(carousel.has_arrows)
        self.assertFalse(carousel.has_dots)

    def test_empty_carousel(self):
        carousel = Carousel(0)
        self.assertEqual(carousel.go_to(4), 0)
        self.assertEqual(carousel.next_index, 0)
        self.assertEqual(carousel.previous_index, 0)


class TestTestimonialRotator(unittest.TestCase):

    def test_default_interval(self):
        self.assertEqual(TestimonialRotator(3).interval, 6.0)

    def test_neighbours_wrap(self):
        rotator = TestimonialRotator(3, start=2)
        self.assertEqual(rotator.next_index, 0)
        self.assertEqual(rotator.previous_index, 1)

    def test_start_is_wrapped(self):
        self.assertEqual(TestimonialRotator(3, start=4).index, 1)

    def test_single_or_empty_never_rotates(self):
        for count in (0, 1):
            rotator = TestimonialRotator(count, start=3)
            self.assertFalse(rotator.rotating)
            self.assertEqual(rotator.index, 0)


if __name__ == "__main__":
    unittest.main()
