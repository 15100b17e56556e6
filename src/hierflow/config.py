"""
Layout configuration.

GraphConfig holds the spacing, default flow direction, fine-tuning values
and edge options used by the measurer, placer and router. Every optional
field has its own default, so callers only set what they need.

Example:
    >>> config = GraphConfig.from_dict({
    ...     "gap": {"x": 20, "y": 60},
    ...     "direction": "vertical",
    ...     "tuning": {"indent": 40},
    ... })
    >>> config.tuning.indent, config.tuning.compression
    (40, 0.4)
"""

from dataclasses import dataclass, field, fields
from numbers import Real
from typing import Any, Mapping, Optional

from .models import FlowDirection, LayoutError

DEFAULT_INDENT = 60
DEFAULT_VERTICAL_SHIFT = -25
DEFAULT_COMPRESSION = 0.4
DEFAULT_SIBLING_FACTOR = 0.833
DEFAULT_SPINE_OFFSET = 0
DEFAULT_SPINE_GAP = 20


class ConfigError(LayoutError):
    """Raised when a configuration value is missing or malformed."""

    pass


@dataclass
class Gap:
    """Spacing between neighbouring nodes."""

    x: float
    y: float


@dataclass
class TuningConfig:
    """
    Fine-tuning of the placement algorithm.

    Attributes:
        indent: Rightward step of stacked (vertical) children.
        vertical_shift: Extra Y offset applied to stacked children.
        compression: Share of a stacked subtree's widest child that is
            reported to ancestors when measuring width.
        sibling_factor: Multiplier on gap.y between stacked siblings.
    """

    indent: float = DEFAULT_INDENT
    vertical_shift: float = DEFAULT_VERTICAL_SHIFT
    compression: float = DEFAULT_COMPRESSION
    sibling_factor: float = DEFAULT_SIBLING_FACTOR


@dataclass
class VerticalEdgeConfig:
    """Spine options for connectors under vertical flow."""

    spine_offset: float = DEFAULT_SPINE_OFFSET
    spine_gap: float = DEFAULT_SPINE_GAP


@dataclass
class EdgeConfig:
    vertical: VerticalEdgeConfig = field(default_factory=VerticalEdgeConfig)


@dataclass
class GraphConfig:
    """
    Configuration for the graph layout algorithm.

    Attributes:
        gap: Spacing between nodes (required).
        direction: Default flow direction (default: horizontal).
        tuning: Fine-tuning options.
        edges: Edge path options.
    """

    gap: Gap
    direction: FlowDirection = FlowDirection.HORIZONTAL
    tuning: TuningConfig = field(default_factory=TuningConfig)
    edges: EdgeConfig = field(default_factory=EdgeConfig)

    def __post_init__(self):
        if isinstance(self.gap, Mapping):
            self.gap = _gap_from_mapping(self.gap)
        elif isinstance(self.gap, (tuple, list)) and len(self.gap) == 2:
            self.gap = Gap(*self.gap)
        if self.direction is None:
            self.direction = FlowDirection.HORIZONTAL
        try:
            self.direction = FlowDirection.parse(self.direction)
        except LayoutError as e:
            raise ConfigError(str(e)) from None
        self.validate()

    def validate(self) -> None:
        """
        Check that every numeric field resolves to a number.

        Raises:
            ConfigError: If a value is missing or not numeric, or a gap is
                negative.
        """
        if not isinstance(self.gap, Gap):
            raise ConfigError(f"gap must have x and y values, got {self.gap!r}")

        _require_number("gap.x", self.gap.x)
        _require_number("gap.y", self.gap.y)
        if self.gap.x < 0 or self.gap.y < 0:
            raise ConfigError(
                f"gap must be non-negative, got x={self.gap.x}, y={self.gap.y}"
            )

        for f in fields(TuningConfig):
            _require_number(f"tuning.{f.name}", getattr(self.tuning, f.name))
        for f in fields(VerticalEdgeConfig):
            _require_number(
                f"edges.vertical.{f.name}", getattr(self.edges.vertical, f.name)
            )

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "GraphConfig":
        """
        Build a config from a nested mapping.

        Keys may be snake_case (``vertical_shift``) or camelCase
        (``verticalShift``). Omitted optional fields take their defaults.

        Raises:
            ConfigError: If ``gap`` is absent or any value is malformed.
        """
        if "gap" not in raw or raw["gap"] is None:
            raise ConfigError("gap is required")

        tuning_raw = raw.get("tuning") or {}
        edges_raw = raw.get("edges") or {}
        vertical_raw = edges_raw.get("vertical") or {}

        tuning = TuningConfig(
            indent=_lookup(tuning_raw, "indent", DEFAULT_INDENT),
            vertical_shift=_lookup(
                tuning_raw, "vertical_shift", DEFAULT_VERTICAL_SHIFT
            ),
            compression=_lookup(tuning_raw, "compression", DEFAULT_COMPRESSION),
            sibling_factor=_lookup(
                tuning_raw, "sibling_factor", DEFAULT_SIBLING_FACTOR
            ),
        )
        vertical = VerticalEdgeConfig(
            spine_offset=_lookup(vertical_raw, "spine_offset", DEFAULT_SPINE_OFFSET),
            spine_gap=_lookup(vertical_raw, "spine_gap", DEFAULT_SPINE_GAP),
        )

        return cls(
            gap=raw["gap"],
            direction=raw.get("direction"),
            tuning=tuning,
            edges=EdgeConfig(vertical=vertical),
        )


def _gap_from_mapping(raw: Mapping[str, Any]) -> Gap:
    if "x" not in raw or "y" not in raw:
        raise ConfigError(f"gap must have x and y values, got {dict(raw)!r}")
    return Gap(x=raw["x"], y=raw["y"])


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _lookup(raw: Mapping[str, Any], name: str, default: Any) -> Optional[Any]:
    """Read a snake_case or camelCase key, falling back to the default."""
    for key in (name, _camel(name)):
        if key in raw and raw[key] is not None:
            return raw[key]
    return default


def _require_number(name: str, value: Any) -> None:
    if value is None:
        raise ConfigError(f"{name} is undefined")
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ConfigError(f"{name} must be a number, got {value!r}")
