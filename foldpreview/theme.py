"""Style-tag palettes for fold preview output.

Tags are resolved most-specific first: ``@function.call.go`` falls back to
``@function.call`` and then ``@function`` before giving up.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .types import DEFAULT_TAG, SUFFIX_TAG

RESET = "\033[0m"

ORANGE = "#cc7832"
PUBLIC_METHOD = "#e2c543"
TYPE_BUILTIN = "#e2a069"
TYPE_CUSTOM = "#657a47"
VARIABLE = "#6483A5"
UNEXPORTED_VARIABLE = "#A76969"
STRING = "#5f7c5e"
PACKAGE = "#a49779"
GRAY = "#928a79"
PRIVATE_METHOD = "#89703F"


def hex_to_sgr(color: str) -> str:
    """Return a 24-bit foreground SGR sequence for ``#rrggbb``."""
    value = color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"expected #rrggbb color, got {color!r}")
    red, green, blue = (int(value[i : i + 2], 16) for i in (0, 2, 4))
    return f"\033[38;2;{red};{green};{blue}m"


@dataclass(frozen=True)
class FoldTheme:
    """Mapping from style tags to ANSI SGR prefixes."""

    name: str
    styles: dict[str, str] = field(default_factory=dict)
    reset: str = RESET

    def sgr_for(self, tag: str) -> str:
        """Return SGR for ``tag``, trimming dotted suffixes until a match is found."""
        candidate = tag
        while candidate:
            sgr = self.styles.get(candidate)
            if sgr is not None:
                return sgr
            if "." not in candidate:
                break
            candidate = candidate.rsplit(".", 1)[0]
        return ""


def _palette(colors: dict[str, str]) -> dict[str, str]:
    return {tag: hex_to_sgr(color) for tag, color in colors.items()}


DEFAULT_THEME = FoldTheme(
    name="default",
    styles=_palette(
        {
            DEFAULT_TAG: GRAY,
            SUFFIX_TAG: GRAY,
            "@keyword": ORANGE,
            "@conditional": ORANGE,
            "@repeat": ORANGE,
            "@function": PUBLIC_METHOD,
            "@method": PUBLIC_METHOD,
            "@function.private": PRIVATE_METHOD,
            "@method.private": PRIVATE_METHOD,
            "@constructor": PUBLIC_METHOD,
            "@type.builtin": ORANGE,
            "@type": TYPE_CUSTOM,
            "@variable": VARIABLE,
            "@property": UNEXPORTED_VARIABLE,
            "@string": STRING,
            "@module": PACKAGE,
            "@namespace": PACKAGE,
            "@constant": PUBLIC_METHOD,
            "@constant.builtin": ORANGE,
            "@number": TYPE_BUILTIN,
            "@comment": GRAY,
        }
    ),
)

PLAIN_THEME = FoldTheme(name="plain", reset="")

_THEMES: dict[str, FoldTheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def resolve_theme(name: str | None, *, no_color: bool = False) -> FoldTheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    candidate = str(name or "").strip().lower()
    return _THEMES.get(candidate, DEFAULT_THEME)
