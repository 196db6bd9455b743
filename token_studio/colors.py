"""Color math for token derivation.

Colors are handled as normalized RGBA (0-1 per channel) so they can be sent
to the host as-is. Hex strings are always emitted as uppercase #RRGGBB.
"""

import math
import re
from dataclasses import dataclass
from typing import Any

from .errors import InvalidHexError

# 31-step scale used by the primitives generator.
FINE_SCALE: tuple[int, ...] = (
    25, 50, 75, 100, 125, 150, 175, 200, 225, 250,
    275, 300, 350, 400, 450, 500, 550, 600, 650, 700,
    725, 750, 775, 800, 825, 850, 875, 900, 925, 950, 975,
)  # fmt: skip

# Round-number scale kept for older palettes.
LEGACY_SCALE: tuple[int, ...] = (25, 100, 200, 300, 400, 500, 600, 700, 800, 900, 975)

BASE_STEP = 500

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


@dataclass(frozen=True)
class RGBA:
    """A color with channels normalized to 0-1."""

    r: float
    g: float
    b: float
    a: float = 1.0

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary for JSON serialization."""
        return {"r": self.r, "g": self.g, "b": self.b, "a": self.a}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RGBA":
        """Create from dictionary. Missing alpha defaults to 1."""
        return cls(
            r=float(data["r"]),
            g=float(data["g"]),
            b=float(data["b"]),
            a=float(data.get("a", 1.0)),
        )

    @property
    def lightness(self) -> float:
        """Sum of the RGB channels, used to order shades."""
        return self.r + self.g + self.b


@dataclass(frozen=True)
class ColorValue:
    """The value of a COLOR token: a hex string plus its RGBA channels."""

    hex: str
    rgba: RGBA

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"hex": self.hex, "rgba": self.rgba.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ColorValue":
        """Create from dictionary; the hex is re-derived from the channels."""
        rgba = RGBA.from_dict(data["rgba"])
        return cls(hex=rgba_to_hex(rgba), rgba=rgba)


def is_valid_hex(value: str) -> bool:
    """Check whether a string is a 3- or 6-digit hex color."""
    return bool(_HEX_RE.match(value.strip()))


def hex_to_rgba(hex_value: str, alpha: float = 1.0) -> RGBA:
    """Parse a hex color into normalized RGBA.

    Args:
        hex_value: ``RGB``, ``#RGB``, ``RRGGBB`` or ``#RRGGBB``.
        alpha: Alpha channel for the result.

    Returns:
        The parsed color.

    Raises:
        InvalidHexError: If the string is not a supported hex form.
    """
    match = _HEX_RE.match(hex_value.strip())
    if not match:
        raise InvalidHexError(hex_value)

    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)

    return RGBA(
        r=int(digits[0:2], 16) / 255,
        g=int(digits[2:4], 16) / 255,
        b=int(digits[4:6], 16) / 255,
        a=alpha,
    )


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up, as the host does."""
    return math.floor(value + 0.5)


def _channel_to_hex(channel: float) -> str:
    clamped = min(1.0, max(0.0, channel))
    return format(round_half_up(clamped * 255), "02X")


def rgba_to_hex(rgba: RGBA, include_alpha: bool = False) -> str:
    """Format a color as uppercase ``#RRGGBB`` (or ``#RRGGBBAA``)."""
    hex_value = "#" + "".join(_channel_to_hex(c) for c in (rgba.r, rgba.g, rgba.b))
    if include_alpha:
        hex_value += _channel_to_hex(rgba.a)
    return hex_value


def color_value(hex_value: str) -> ColorValue:
    """Build a ColorValue whose hex is normalized to uppercase #RRGGBB."""
    rgba = hex_to_rgba(hex_value)
    return ColorValue(hex=rgba_to_hex(rgba), rgba=rgba)


def blend(base: RGBA, overlay: RGBA, amount: float) -> RGBA:
    """Linearly interpolate from ``base`` toward ``overlay``.

    ``amount`` is not clamped; values outside [0, 1] extrapolate.
    """
    return RGBA(
        r=base.r * (1 - amount) + overlay.r * amount,
        g=base.g * (1 - amount) + overlay.g * amount,
        b=base.b * (1 - amount) + overlay.b * amount,
        a=1.0,
    )


WHITE = RGBA(1.0, 1.0, 1.0)
BLACK = RGBA(0.0, 0.0, 0.0)


def shade(base_hex: str, step: int) -> ColorValue:
    """Derive the shade of a base color at a scale step.

    Step 500 is the base color itself. Lower steps blend toward white by
    ``(500 - step) / 500``; higher steps blend toward black by
    ``(step - 500) / 500``.
    """
    base = hex_to_rgba(base_hex)

    if step == BASE_STEP:
        return ColorValue(hex=rgba_to_hex(base), rgba=base)

    if step < BASE_STEP:
        rgba = blend(base, WHITE, (BASE_STEP - step) / BASE_STEP)
    else:
        rgba = blend(base, BLACK, (step - BASE_STEP) / BASE_STEP)

    return ColorValue(hex=rgba_to_hex(rgba), rgba=rgba)


def shade_description(name: str, step: int) -> str:
    """Human-readable description of a palette step."""
    if step == BASE_STEP:
        return f"{name} base color"
    if step < BASE_STEP:
        return f"{name} lightened {round_half_up((BASE_STEP - step) / 5)}%"
    return f"{name} darkened {round_half_up((step - BASE_STEP) / 5)}%"


def generate_shades(
    base_hex: str, scale: tuple[int, ...] | list[int] = FINE_SCALE
) -> dict[int, ColorValue]:
    """Compute every shade of ``base_hex`` along ``scale``."""
    return {step: shade(base_hex, step) for step in scale}
