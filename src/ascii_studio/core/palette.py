"""Shared palette constants for the 16-colour DOS text mode."""

# DOS colour indices (attribute nibble order, not ANSI order)
DOS_COLORS = {
    "black": 0,
    "blue": 1,
    "green": 2,
    "cyan": 3,
    "red": 4,
    "magenta": 5,
    "brown": 6,
    "light_gray": 7,
    "dark_gray": 8,
    "light_blue": 9,
    "light_green": 10,
    "light_cyan": 11,
    "light_red": 12,
    "light_magenta": 13,
    "yellow": 14,
    "white": 15,
}

DOS_PALETTE_HEX: tuple[str, ...] = (
    "#000000",  # 0 - Black
    "#0000aa",  # 1 - Blue
    "#00aa00",  # 2 - Green
    "#00aaaa",  # 3 - Cyan
    "#aa0000",  # 4 - Red
    "#aa00aa",  # 5 - Magenta
    "#aa5500",  # 6 - Brown
    "#aaaaaa",  # 7 - Light Gray
    "#555555",  # 8 - Dark Gray
    "#5555ff",  # 9 - Light Blue
    "#55ff55",  # 10 - Light Green
    "#55ffff",  # 11 - Light Cyan
    "#ff5555",  # 12 - Light Red
    "#ff55ff",  # 13 - Light Magenta
    "#ffff55",  # 14 - Yellow
    "#ffffff",  # 15 - White
)

DOS_PALETTE_RGB: tuple[tuple[int, int, int], ...] = tuple(
    (int(h[1:3], 16), int(h[3:5], 16), int(h[5:7], 16)) for h in DOS_PALETTE_HEX
)

# DOS index (low 3 bits) -> ANSI colour offset. DOS puts blue at 1, ANSI at 4.
_DOS_TO_ANSI = (0, 4, 2, 6, 1, 5, 3, 7)

PALETTE_SIZE = 16


def is_palette_index(index: int) -> bool:
    """Check whether a value is a valid palette index (excludes the sentinel)."""
    return 0 <= index < PALETTE_SIZE


def palette_hex(index: int) -> str:
    """CSS colour for a palette index; out-of-range falls back to black."""
    return DOS_PALETTE_HEX[index] if is_palette_index(index) else DOS_PALETTE_HEX[0]


def palette_rgb(index: int) -> tuple[int, int, int]:
    """RGB tuple for a palette index; out-of-range falls back to black."""
    return DOS_PALETTE_RGB[index] if is_palette_index(index) else DOS_PALETTE_RGB[0]


def parse_color(value: str) -> int:
    """Palette index from a DOS colour name ("light-blue") or a number ("9").

    Raises ValueError for anything else.
    """
    key = value.strip().lower().replace('-', '_').replace(' ', '_')
    if key in DOS_COLORS:
        return DOS_COLORS[key]
    try:
        index = int(key)
    except ValueError:
        raise ValueError(f"Unknown colour {value!r}") from None
    if not is_palette_index(index):
        raise ValueError(f"Colour index {index} is outside 0-{PALETTE_SIZE - 1}")
    return index


def dos_to_sgr_fg(index: int) -> int:
    """Convert DOS palette index (0-15) to SGR foreground code."""
    base = _DOS_TO_ANSI[index & 7]
    return 30 + base if index < 8 else 90 + base


def dos_to_sgr_bg(index: int) -> int:
    """Convert DOS palette index (0-15) to SGR background code."""
    base = _DOS_TO_ANSI[index & 7]
    return 40 + base if index < 8 else 100 + base
