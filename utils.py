import json

# Positional defaults applied to legacy string achievements
DEFAULT_ACHIEVEMENT_ICONS = ["Award", "Users", "Building", "Palette"]
DEFAULT_ACHIEVEMENT_DESCRIPTIONS = [
    "Multiple awards for innovative architectural solutions",
    "Successfully completed projects for diverse clientele",
    "Specialized in large-scale commercial developments",
    "Expert in creating beautiful and functional spaces",
]
FALLBACK_ICON = "Star"
FALLBACK_DESCRIPTION = "Professional achievement in architectural design"

# Icons the about section knows how to draw
ACHIEVEMENT_ICONS = [
    "Award", "Users", "Building", "Palette", "Star",
    "Trophy", "Target", "Zap", "Heart", "Shield",
]


# ✅ TAGS
def parse_tags(raw):
    """'a, b,, c ' -> ['a', 'b', 'c']"""
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def format_tags(tags):
    return ", ".join(tags or [])


# ✅ ACHIEVEMENTS
def _is_structured(item):
    return (
        isinstance(item, dict)
        and bool(item.get("icon"))
        and bool(item.get("title"))
        and bool(item.get("description"))
    )


def _from_legacy(title, index):
    return {
        "icon": DEFAULT_ACHIEVEMENT_ICONS[index] if index < len(DEFAULT_ACHIEVEMENT_ICONS) else FALLBACK_ICON,
        "title": title,
        "description": (
            DEFAULT_ACHIEVEMENT_DESCRIPTIONS[index]
            if index < len(DEFAULT_ACHIEVEMENT_DESCRIPTIONS)
            else FALLBACK_DESCRIPTION
        ),
    }


def migrate_achievements(raw):
    """
    Reshape stored achievements into ``{icon, title, description}`` dicts.

    Handles three stored shapes: structured dicts (kept), JSON-encoded dicts
    (decoded), and plain title strings (legacy rows, given the positional
    default icon and description). Returns ``(achievements, migrated)`` where
    ``migrated`` tells whether anything had to be reshaped. Nothing is written
    back; callers persist the new shape only on an explicit save.
    """
    result = []
    migrated = False
    for index, item in enumerate(raw or []):
        if _is_structured(item):
            result.append({"icon": item["icon"], "title": item["title"], "description": item["description"]})
            continue

        migrated = True
        if isinstance(item, str):
            try:
                parsed = json.loads(item)
            except ValueError:
                parsed = None
            if _is_structured(parsed):
                result.append({"icon": parsed["icon"], "title": parsed["title"], "description": parsed["description"]})
            else:
                result.append(_from_legacy(item, index))
        else:
            result.append({"icon": FALLBACK_ICON, "title": "Achievement", "description": FALLBACK_DESCRIPTION})
    return result, migrated


def normalize_achievements(raw):
    return migrate_achievements(raw)[0]
