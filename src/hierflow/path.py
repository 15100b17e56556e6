"""
SVG path building for edge connectors.

Path commands:
- M (MoveTo): Move pen to a point without drawing
- L (LineTo): Draw a straight line to target
- Q (Quadratic): Draw a curved line with one control point

build_edge_path turns routed waypoints into path data, replacing each
orthogonal bend with a short quadratic curve.
"""

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from .models import Coordinate

BEND_RADIUS = 32


class PathError(Exception):
    """Raised when a draw command sequence cannot be compiled."""

    pass


@dataclass(frozen=True)
class MoveCommand:
    to: Coordinate
    cmd: str = "M"


@dataclass(frozen=True)
class LineCommand:
    to: Coordinate
    cmd: str = "L"


@dataclass(frozen=True)
class CurveCommand:
    control: Coordinate
    to: Coordinate
    cmd: str = "Q"


DrawCommand = Union[MoveCommand, LineCommand, CurveCommand]


def move_to(point: Coordinate) -> MoveCommand:
    """Create a move command (M)."""
    return MoveCommand(to=point)


def line_to(point: Coordinate) -> LineCommand:
    """Create a line command (L)."""
    return LineCommand(to=point)


def curve_to(control: Coordinate, end: Coordinate) -> CurveCommand:
    """Create a quadratic curve command (Q)."""
    return CurveCommand(control=control, to=end)


def _num(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value)


def compile_path(commands: Sequence[DrawCommand]) -> str:
    """
    Compile draw commands into an SVG path data string.

    Args:
        commands: Drawing commands, starting with a move.

    Returns:
        SVG path data string.

    Raises:
        PathError: If commands is empty or doesn't start with MoveTo.

    Example:
        >>> compile_path([
        ...     move_to(Coordinate(0, 0)),
        ...     line_to(Coordinate(100, 100)),
        ...     curve_to(Coordinate(150, 100), Coordinate(200, 150)),
        ... ])
        'M 0 0 L 100 100 Q 150 100 200 150'
    """
    if not commands:
        raise PathError("Cannot compile empty path - at least one command required")

    if not isinstance(commands[0], MoveCommand):
        raise PathError("Path must begin with MoveTo (M) command")

    parts = []
    for c in commands:
        if isinstance(c, (MoveCommand, LineCommand)):
            parts.append(f"{c.cmd} {_num(c.to.x)} {_num(c.to.y)}")
        elif isinstance(c, CurveCommand):
            parts.append(
                f"Q {_num(c.control.x)} {_num(c.control.y)} "
                f"{_num(c.to.x)} {_num(c.to.y)}"
            )
        else:
            raise PathError(f"Unknown command: {c!r}")

    return " ".join(parts)


def is_corner(a: Coordinate, b: Coordinate, c: Coordinate) -> bool:
    """True if a -> b -> c turns between a horizontal and a vertical segment."""
    dx1 = b.x - a.x
    dy1 = b.y - a.y
    dx2 = c.x - b.x
    dy2 = c.y - b.y

    return (dx1 != 0 and dy1 == 0 and dx2 == 0 and dy2 != 0) or (
        dx1 == 0 and dy1 != 0 and dx2 != 0 and dy2 == 0
    )


def round_corner(
    prev: Coordinate, corner: Coordinate, next_: Coordinate
) -> Tuple[LineCommand, CurveCommand]:
    """
    Commands replacing the sharp corner at ``corner`` with a curve.

    The radius on each side is BEND_RADIUS, capped at half that segment's
    length so the curve never passes a segment midpoint.
    """
    dx1 = corner.x - prev.x
    dy1 = corner.y - prev.y
    dx2 = next_.x - corner.x
    dy2 = next_.y - corner.y

    dist1 = math.hypot(dx1, dy1)
    r1 = min(BEND_RADIUS, dist1 / 2)
    t1 = (dist1 - r1) / dist1
    entry = Coordinate(prev.x + dx1 * t1, prev.y + dy1 * t1)

    dist2 = math.hypot(dx2, dy2)
    r2 = min(BEND_RADIUS, dist2 / 2)
    t2 = r2 / dist2
    exit_ = Coordinate(corner.x + dx2 * t2, corner.y + dy2 * t2)

    return line_to(entry), curve_to(corner, exit_)


def edge_commands(points: Sequence[Coordinate]) -> List[DrawCommand]:
    """Draw commands for a waypoint sequence with rounded corners."""
    if len(points) < 2:
        return []
    if len(points) == 2:
        return [move_to(points[0]), line_to(points[1])]

    commands: List[DrawCommand] = [move_to(points[0])]

    for i in range(len(points) - 1):
        curr = points[i]
        nxt = points[i + 1]

        if i + 2 >= len(points):
            commands.append(line_to(nxt))
        elif is_corner(curr, nxt, points[i + 2]):
            commands.extend(round_corner(curr, nxt, points[i + 2]))
        else:
            commands.append(line_to(nxt))

    return commands


def build_edge_path(points: Sequence[Coordinate]) -> str:
    """
    Build SVG path data with rounded corners at direction changes.

    Returns an empty string for fewer than two points.
    """
    commands = edge_commands(points)
    if not commands:
        return ""
    return compile_path(commands)
