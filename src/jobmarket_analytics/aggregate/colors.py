"""Static category slug -> chart color lookup.

Unknown slugs get a neutral gray so every category can be drawn.
"""
from __future__ import annotations

from types import MappingProxyType

from jobmarket_analytics.models import CategoryColor


def _color(slug: str, red: int, green: int, blue: int, primary: str) -> CategoryColor:
    return CategoryColor(
        slug=slug,
        primary=primary,
        gradient=f"rgba({red}, {green}, {blue}, 0.2)",
        glow=f"rgba({red}, {green}, {blue}, 0.4)",
    )


CATEGORY_COLORS = MappingProxyType({
    "java": _color("java", 0, 212, 255, "#00d4ff"),
    "python": _color("python", 255, 215, 0, "#ffd700"),
    "devops": _color("devops", 255, 107, 53, "#ff6b35"),
    "data": _color("data", 168, 85, 247, "#a855f7"),
    "ai": _color("ai", 0, 255, 136, "#00ff88"),
    "testing": _color("testing", 255, 51, 102, "#ff3366"),
})

FALLBACK_PRIMARY = "#9e9e9e"
FALLBACK_GRADIENT = "rgba(158, 158, 158, 0.2)"
FALLBACK_GLOW = "rgba(158, 158, 158, 0.4)"


def resolve_color(slug: str) -> CategoryColor:
    """Return the color triple for a category slug.

    Args:
        slug: Category slug (any string).

    Returns:
        The curated `CategoryColor` for known slugs, otherwise the neutral
        gray triple carrying the requested slug.
    """
    known = CATEGORY_COLORS.get(slug)
    if known is not None:
        return known
    return CategoryColor(
        slug=slug,
        primary=FALLBACK_PRIMARY,
        gradient=FALLBACK_GRADIENT,
        glow=FALLBACK_GLOW,
    )
