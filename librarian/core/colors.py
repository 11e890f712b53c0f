"""Deterministic tag colors.

Every tag name maps to one of a fixed palette of hues so that the same tag
is always drawn the same way. The hash runs over UTF-16 code units with
32-bit wrapping on the shift, which gives the same palette index a browser
computes with ``charCodeAt`` for the same string.
"""

import msgspec


class TagColor(msgspec.Struct, frozen=True):
    """A palette entry."""

    name: str
    style: str

    def __str__(self) -> str:
        return self.name


PALETTE: tuple[TagColor, ...] = (
    TagColor("red", "red"),
    TagColor("orange", "dark_orange"),
    TagColor("amber", "orange1"),
    TagColor("yellow", "yellow"),
    TagColor("lime", "chartreuse3"),
    TagColor("green", "green"),
    TagColor("emerald", "spring_green3"),
    TagColor("teal", "dark_cyan"),
    TagColor("cyan", "cyan"),
    TagColor("sky", "deep_sky_blue1"),
    TagColor("blue", "blue"),
    TagColor("indigo", "slate_blue1"),
    TagColor("violet", "medium_purple"),
    TagColor("purple", "purple"),
    TagColor("fuchsia", "magenta"),
    TagColor("pink", "hot_pink"),
    TagColor("rose", "light_coral"),
)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _code_units(text: str) -> list[int]:
    encoded = text.encode("utf-16-le", errors="surrogatepass")
    return [int.from_bytes(encoded[i : i + 2], "little") for i in range(0, len(encoded), 2)]


def string_hash(text: str) -> int:
    """Compute the palette hash of a string."""
    h = 0
    for unit in _code_units(text):
        h = unit + (_to_int32(_to_int32(h) << 5) - h)
    return h


def color_index(text: str) -> int:
    """Return the palette index for a string."""
    return abs(string_hash(text)) % len(PALETTE)


def tag_color(text: str) -> TagColor:
    """Return the palette color for a tag name."""
    return PALETTE[color_index(text)]
