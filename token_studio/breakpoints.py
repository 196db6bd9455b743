"""Breakpoints and the device modes they materialize.

Responsive collections (Spacing, Gap, Icon Size, Radius, Typography) carry
one variable mode per breakpoint, named after the breakpoint and, when
``show_value_in_mode_name`` is set, its width: ``"Desktop (1440px)"``.
"""

from dataclasses import dataclass, field, replace
from typing import Any

from .errors import ValidationError
from .token_logging import LogCategory, get_category_logger

logger = get_category_logger(LogCategory.STORE)

# Device classes the responsive tables carry values for, widest first.
DEVICES: tuple[str, ...] = ("desktop", "tablet", "mobile")

# Minimum width (px) of each device class, used for breakpoints whose id
# is not a device class itself.
DEVICE_MIN_WIDTHS: tuple[tuple[str, int], ...] = (("desktop", 1024), ("tablet", 600))


@dataclass
class Breakpoint:
    """A named viewport width."""

    id: str  # e.g. "desktop"
    name: str  # e.g. "Desktop"
    value: int  # Width in px
    order: int = 0  # Column position in the host
    description: str | None = None
    unit: str = "px"

    @property
    def device(self) -> str:
        """Device class whose table values this breakpoint uses."""
        if self.id in DEVICES:
            return self.id
        for device, min_width in DEVICE_MIN_WIDTHS:
            if self.value >= min_width:
                return device
        return "mobile"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "value": self.value,
            "unit": self.unit,
            "order": self.order,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Breakpoint":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            value=int(data["value"]),
            order=data.get("order", 0),
            description=data.get("description"),
            unit=data.get("unit", "px"),
        )


def _preset(*rows: tuple[str, str, int, str]) -> tuple[Breakpoint, ...]:
    return tuple(
        Breakpoint(id=bp_id, name=name, value=value, order=i, description=description)
        for i, (bp_id, name, value, description) in enumerate(rows)
    )


BREAKPOINT_PRESETS: dict[str, tuple[Breakpoint, ...]] = {
    "web": _preset(
        ("desktop", "Desktop", 1440, "Large screens 1440px+"),
        ("tablet", "Tablet", 768, "Tablets 768px - 1439px"),
        ("mobile", "Mobile", 375, "Phones up to 767px"),
    ),
    "web-extended": _preset(
        ("desktop-wide", "Desktop Wide", 1920, "Wide screens 1920px+"),
        ("desktop", "Desktop", 1440, "Standard desktop 1440px+"),
        ("tablet", "Tablet", 768, "Tablets 768px - 1439px"),
        ("mobile", "Mobile", 375, "Standard phones 375px+"),
        ("mobile-small", "Mobile Small", 320, "Small phones 320px+"),
    ),
    "ios": _preset(
        ("ipad-pro-12", 'iPad Pro 12.9"', 1024, "iPad Pro 12.9 inch"),
        ("ipad-pro-11", 'iPad Pro 11"', 834, "iPad Pro 11 inch"),
        ("ipad-mini", "iPad Mini", 744, "iPad Mini"),
        ("iphone-max", "iPhone Pro Max", 430, "iPhone Pro Max"),
        ("iphone", "iPhone", 390, "iPhone 14/15"),
        ("iphone-se", "iPhone SE", 375, "iPhone SE / Mini"),
    ),
    "android": _preset(
        ("tablet-10", 'Tablet 10"', 800, "Android tablets 10 inch"),
        ("tablet-7", 'Tablet 7"', 600, "Android tablets 7 inch"),
        ("phone-large", "Phone Large", 480, "Large Android phones"),
        ("phone", "Phone Medium", 400, "Medium Android phones"),
        ("phone-small", "Phone Small", 360, "Small Android phones"),
    ),
}

DEFAULT_PRESET = "web"


def preset_breakpoints(preset: str) -> list[Breakpoint]:
    """Fresh copies of a preset's breakpoints.

    Raises:
        ValidationError: If the preset is unknown.
    """
    if preset not in BREAKPOINT_PRESETS:
        raise ValidationError(
            f"Unknown breakpoint preset: {preset}",
            suggestion=f"Use one of: {', '.join(BREAKPOINT_PRESETS)}",
        )
    return [replace(bp) for bp in BREAKPOINT_PRESETS[preset]]


@dataclass
class BreakpointConfig:
    """Ordered breakpoints plus how their host modes are named."""

    breakpoints: list[Breakpoint] = field(
        default_factory=lambda: preset_breakpoints(DEFAULT_PRESET)
    )
    default_breakpoint: str = "desktop"
    show_value_in_mode_name: bool = True

    def sorted(self) -> list[Breakpoint]:
        """Breakpoints in host column order."""
        return sorted(self.breakpoints, key=lambda bp: bp.order)

    def get(self, breakpoint_id: str) -> Breakpoint | None:
        for bp in self.breakpoints:
            if bp.id == breakpoint_id:
                return bp
        return None

    @property
    def default(self) -> Breakpoint | None:
        return self.get(self.default_breakpoint)

    def mode_name(self, breakpoint: Breakpoint, show_value: bool | None = None) -> str:
        show = self.show_value_in_mode_name if show_value is None else show_value
        if show:
            return f"{breakpoint.name} ({breakpoint.value}{breakpoint.unit})"
        return breakpoint.name

    def mode_names(self) -> list[str]:
        """Host mode names in column order."""
        return [self.mode_name(bp) for bp in self.sorted()]

    def breakpoint_for_mode(self, mode_name: str) -> Breakpoint | None:
        """Map a host mode name back to its breakpoint, with or without the width."""
        for bp in self.breakpoints:
            if mode_name in (bp.name, self.mode_name(bp, True), self.mode_name(bp, False)):
                return bp
        return None

    def add(
        self, breakpoint_id: str, name: str, value: int, description: str | None = None
    ) -> Breakpoint:
        """Append a breakpoint after the existing ones.

        Raises:
            ValidationError: On a duplicate id, an empty name or a
                non-positive width.
        """
        if self.get(breakpoint_id) is not None:
            raise ValidationError(f"Breakpoint '{breakpoint_id}' already exists")
        breakpoint = Breakpoint(
            id=breakpoint_id,
            name=name,
            value=value,
            order=len(self.breakpoints),
            description=description,
        )
        _validate(breakpoint)
        self.breakpoints.append(breakpoint)
        logger.info(f"Added breakpoint '{name}' ({value}px)")
        return breakpoint

    def update(self, breakpoint_id: str, **changes: Any) -> Breakpoint | None:
        """Edit a breakpoint. Returns None if the id is unknown."""
        for i, bp in enumerate(self.breakpoints):
            if bp.id == breakpoint_id:
                updated = replace(bp, **changes)
                _validate(updated)
                self.breakpoints[i] = updated
                return updated
        return None

    def remove(self, breakpoint_id: str) -> bool:
        """Remove a breakpoint and renumber the rest."""
        remaining = [bp for bp in self.sorted() if bp.id != breakpoint_id]
        if len(remaining) == len(self.breakpoints):
            return False
        for order, bp in enumerate(remaining):
            bp.order = order
        self.breakpoints = remaining
        return True

    def reorder(self, ordered_ids: list[str]) -> None:
        """Keep only the listed breakpoints, in the listed order."""
        reordered = []
        for order, breakpoint_id in enumerate(ordered_ids):
            bp = self.get(breakpoint_id)
            if bp is not None:
                reordered.append(replace(bp, order=order))
        self.breakpoints = reordered

    def apply_preset(self, preset: str) -> None:
        self.breakpoints = preset_breakpoints(preset)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "showValueInModeName": self.show_value_in_mode_name,
            "defaultBreakpoint": self.default_breakpoint,
            "breakpoints": [bp.to_dict() for bp in self.breakpoints],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BreakpointConfig":
        """Create from dictionary."""
        return cls(
            breakpoints=[Breakpoint.from_dict(bp) for bp in data.get("breakpoints", [])],
            default_breakpoint=data.get("defaultBreakpoint", "desktop"),
            show_value_in_mode_name=data.get("showValueInModeName", True),
        )


def _validate(breakpoint: Breakpoint) -> None:
    if not breakpoint.name.strip():
        raise ValidationError("Breakpoint name cannot be empty")
    if breakpoint.value <= 0:
        raise ValidationError(
            f"Breakpoint width must be positive, got {breakpoint.value}",
            details={"breakpoint": breakpoint.id},
        )
