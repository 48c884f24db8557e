"""
Composer Kernel — Style Resolver

Pure function: style attributes → ordered Tailwind class tokens.
No state. No IO. Deterministic.

Style attributes are semantic ({"padding": "medium", "textColor": "primary"});
tokens are their utility-class spelling ("p-4", "text-blue-600"). Each
category yields at most one token, and tokens come out in a fixed order:

  layout → spacing → typography → color → effects

then by category order inside each group. Insertion order of the attribute
dict never matters, so the same attributes always give the same class string.

Unknown values inside a known category produce no token (fail closed).
Unknown categories are rejected by the tree before they get here.
"""

from __future__ import annotations

from typing import Any

# ---------------------------------------------------------------------------
# Scales
# ---------------------------------------------------------------------------

SPACING_SCALE: dict[str, str] = {
    "none": "0",
    "xsmall": "1",
    "small": "2",
    "medium": "4",
    "large": "6",
    "xlarge": "8",
}

COLOR_SCALE: dict[str, str] = {
    "primary": "blue-600",
    "secondary": "gray-600",
    "muted": "gray-400",
    "accent": "indigo-500",
    "danger": "red-600",
    "success": "green-600",
    "white": "white",
    "black": "black",
    "transparent": "transparent",
}

# Light surfaces for backgrounds; text colors keep the stronger shade.
BACKGROUND_SCALE: dict[str, str] = {
    "primary": "blue-600",
    "secondary": "gray-100",
    "muted": "gray-50",
    "accent": "indigo-500",
    "danger": "red-50",
    "success": "green-50",
    "white": "white",
    "black": "black",
    "transparent": "transparent",
}


def _scaled(prefix: str, scale: dict[str, str]) -> dict[str, str]:
    return {name: f"{prefix}-{step}" for name, step in scale.items()}


# ---------------------------------------------------------------------------
# Vocabulary: group → category → value → token
# ---------------------------------------------------------------------------

GROUP_ORDER: tuple[str, ...] = ("layout", "spacing", "typography", "color", "effects")

STYLE_VOCABULARY: dict[str, dict[str, dict[str, str]]] = {
    "layout": {
        "display": {
            "block": "block",
            "inline": "inline",
            "inlineBlock": "inline-block",
            "flex": "flex",
            "inlineFlex": "inline-flex",
            "grid": "grid",
            "hidden": "hidden",
        },
        "flexDirection": {
            "row": "flex-row",
            "rowReverse": "flex-row-reverse",
            "column": "flex-col",
            "columnReverse": "flex-col-reverse",
        },
        "justify": {
            "start": "justify-start",
            "center": "justify-center",
            "end": "justify-end",
            "between": "justify-between",
            "around": "justify-around",
            "evenly": "justify-evenly",
        },
        "align": {
            "start": "items-start",
            "center": "items-center",
            "end": "items-end",
            "baseline": "items-baseline",
            "stretch": "items-stretch",
        },
        "width": {
            "auto": "w-auto",
            "full": "w-full",
            "half": "w-1/2",
            "third": "w-1/3",
            "quarter": "w-1/4",
            "screen": "w-screen",
            "fit": "w-fit",
        },
        "height": {
            "auto": "h-auto",
            "full": "h-full",
            "screen": "h-screen",
            "fit": "h-fit",
        },
        "gridColumns": {str(n): f"grid-cols-{n}" for n in (1, 2, 3, 4, 6, 12)},
    },
    "spacing": {
        "padding": _scaled("p", SPACING_SCALE),
        "paddingX": _scaled("px", SPACING_SCALE),
        "paddingY": _scaled("py", SPACING_SCALE),
        "margin": _scaled("m", SPACING_SCALE),
        "marginX": _scaled("mx", SPACING_SCALE),
        "marginY": _scaled("my", SPACING_SCALE),
        "gap": _scaled("gap", SPACING_SCALE),
    },
    "typography": {
        "fontSize": {
            "xsmall": "text-xs",
            "small": "text-sm",
            "base": "text-base",
            "large": "text-lg",
            "xlarge": "text-xl",
            "2xlarge": "text-2xl",
            "3xlarge": "text-3xl",
            "4xlarge": "text-4xl",
        },
        "fontWeight": {
            "light": "font-light",
            "normal": "font-normal",
            "medium": "font-medium",
            "semibold": "font-semibold",
            "bold": "font-bold",
        },
        "textAlign": {
            "left": "text-left",
            "center": "text-center",
            "right": "text-right",
            "justify": "text-justify",
        },
    },
    "color": {
        "textColor": _scaled("text", COLOR_SCALE),
        "background": _scaled("bg", BACKGROUND_SCALE),
        "borderColor": _scaled("border", COLOR_SCALE),
    },
    "effects": {
        "borderWidth": {
            "none": "border-0",
            "thin": "border",
            "medium": "border-2",
            "thick": "border-4",
        },
        "borderRadius": {
            "none": "rounded-none",
            "small": "rounded-sm",
            "medium": "rounded-md",
            "large": "rounded-lg",
            "xlarge": "rounded-xl",
            "full": "rounded-full",
        },
        "shadow": {
            "none": "shadow-none",
            "small": "shadow-sm",
            "medium": "shadow-md",
            "large": "shadow-lg",
            "xlarge": "shadow-xl",
        },
        "opacity": {
            "0": "opacity-0",
            "25": "opacity-25",
            "50": "opacity-50",
            "75": "opacity-75",
            "100": "opacity-100",
        },
    },
}

# Flattened category order: every category once, in emission order.
CATEGORY_ORDER: tuple[str, ...] = tuple(
    category for group in GROUP_ORDER for category in STYLE_VOCABULARY[group]
)

_CATEGORY_TOKENS: dict[str, dict[str, str]] = {
    category: tokens for group in GROUP_ORDER for category, tokens in STYLE_VOCABULARY[group].items()
}

# Categories that only mean something for flex/grid boxes. A hidden element
# emits none of them, so "hidden" never sits next to "flex-col".
_SUPPRESSED_BY_HIDDEN: frozenset[str] = frozenset({"flexDirection", "justify", "align", "gap", "gridColumns"})


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def is_known_category(category: str) -> bool:
    return category in _CATEGORY_TOKENS


def known_values(category: str) -> tuple[str, ...]:
    """Recognized values for a category, in vocabulary order. Empty if unknown."""
    return tuple(_CATEGORY_TOKENS.get(category, {}))


def resolve(style: dict[str, Any]) -> list[str]:
    """
    Map style attributes to an ordered list of class tokens.

    Pure and total: unknown values are skipped, unknown categories ignored.
    """
    hidden = style.get("display") == "hidden"
    tokens: list[str] = []
    for category in CATEGORY_ORDER:
        value = style.get(category)
        if value is None:
            continue
        if hidden and category in _SUPPRESSED_BY_HIDDEN:
            continue
        token = _CATEGORY_TOKENS[category].get(str(value))
        if token is not None:
            tokens.append(token)
    return tokens


def class_name(style: dict[str, Any]) -> str:
    """Tokens joined into a single class attribute value."""
    return " ".join(resolve(style))
