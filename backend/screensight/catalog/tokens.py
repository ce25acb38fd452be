"""Catalog design tokens. Style values are snapped onto these by the TokenMapper."""

COLORS = {
    "primary": {
        "base": "#005ea2",
        "vivid": "#0050d8",
        "dark": "#1a4480",
        "darker": "#162e51",
        "light": "#73b3e7",
        "lighter": "#eff6fb",
    },
    "secondary": {
        "base": "#d83933",
        "vivid": "#e41d3d",
        "dark": "#b50909",
        "darker": "#8b0a03",
        "light": "#f39268",
        "lighter": "#f9dede",
    },
    "accent": {
        "cool": "#00bde3",
        "warm": "#fa9441",
    },
    "base": {
        "lightest": "#f0f0f0",
        "lighter": "#dfe1e2",
        "light": "#a9aeb1",
        "base": "#71767a",
        "dark": "#565c65",
        "darker": "#3d4551",
        "darkest": "#1b1b1b",
        "black": "#000000",
        "white": "#ffffff",
    },
    "info": {
        "base": "#00bde3",
        "light": "#99deea",
        "lighter": "#e7f6f8",
        "dark": "#009ec1",
        "darker": "#0081a1",
    },
    "success": {
        "base": "#00a91c",
        "light": "#70e17b",
        "lighter": "#ecf3ec",
        "dark": "#008817",
        "darker": "#216e1f",
    },
    "warning": {
        "base": "#ffbe2e",
        "light": "#fee685",
        "lighter": "#faf3d1",
        "dark": "#e5a000",
        "darker": "#936f38",
    },
    "error": {
        "base": "#d54309",
        "light": "#f4e3db",
        "lighter": "#f4e3db",
        "dark": "#b50909",
        "darker": "#6f3331",
    },
}

SPACING = [4, 8, 12, 16, 20, 24, 32, 40, 48, 56, 64, 72, 80]

BORDER_RADIUS = {
    "none": 0,
    "sm": 2,
    "md": 4,
    "lg": 8,
    "pill": 9999,
}
PILL_THRESHOLD = 9999

FONT_SIZE = [10, 11, 12, 13, 14, 16, 18, 20, 24, 28, 32, 40, 48, 56, 64]

FONT_WEIGHT = {
    "light": 300,
    "normal": 400,
    "medium": 500,
    "semibold": 600,
    "bold": 700,
}


def all_colors() -> list[str]:
    """Every catalog color in declaration order, deduplicated."""
    seen: dict[str, None] = {}
    for group in COLORS.values():
        for value in group.values():
            seen.setdefault(value.lower(), None)
    return list(seen)
