"""Hex geometry on axial coordinates (q, r) with implicit s = -q - r."""
from __future__ import annotations

import math

from hexcolony.types import Coord

_HEX_DIRS = [(1, 0), (-1, 0), (0, 1), (0, -1), (1, -1), (-1, 1)]
_SQRT3 = math.sqrt(3.0)
_NUDGE = 1e-6

HEX_SIZE = 25.0
ORIGIN = (300.0, 200.0)


def _hex_distance(dq: int, dr: int) -> int:
    return (abs(dq) + abs(dq + dr) + abs(dr)) // 2


def coord_key(q: int, r: int) -> Coord:
    return (int(q), int(r))


def hex_distance(a: Coord, b: Coord) -> int:
    return _hex_distance(a[0] - b[0], a[1] - b[1])


def neighbors(coord: Coord) -> list[Coord]:
    q, r = coord
    return [(q + dq, r + dr) for dq, dr in _HEX_DIRS]


def hexes_in_radius(center: Coord, radius: int) -> list[Coord]:
    """All hexes within *radius* of *center*, ordered by q then r."""
    if radius < 0:
        return []
    cq, cr = center
    result: list[Coord] = []
    for dq in range(-radius, radius + 1):
        for dr in range(max(-radius, -dq - radius), min(radius, -dq + radius) + 1):
            result.append((cq + dq, cr + dr))
    return result


def ring(center: Coord, radius: int) -> list[Coord]:
    """Hexes at exactly *radius* from *center*."""
    if radius == 0:
        return [center]
    return [c for c in hexes_in_radius(center, radius) if hex_distance(center, c) == radius]


def cube_round(q: float, r: float) -> Coord:
    """Snap fractional axial coordinates to the nearest hex.

    Each cube component is rounded on its own; the one with the largest
    rounding error is then rebuilt from the other two so q + r + s == 0.
    """
    s = -q - r
    rq = round(q)
    rr = round(r)
    rs = round(s)

    q_diff = abs(rq - q)
    r_diff = abs(rr - r)
    s_diff = abs(rs - s)

    if q_diff > r_diff and q_diff > s_diff:
        rq = -rr - rs
    elif r_diff > s_diff:
        rr = -rq - rs
    return (int(rq), int(rr))


def hex_to_pixel(
    coord: Coord, size: float = HEX_SIZE, origin: tuple[float, float] = ORIGIN
) -> tuple[float, float]:
    q, r = coord
    x = origin[0] + size * _SQRT3 * (q + r / 2.0)
    y = origin[1] + size * 1.5 * r
    return (x, y)


def pixel_to_hex(
    x: float, y: float, size: float = HEX_SIZE, origin: tuple[float, float] = ORIGIN
) -> Coord:
    if size <= 0:
        raise ValueError(f"size must be positive, got {size}")
    px = (x - origin[0]) / size
    py = (y - origin[1]) / size
    q = px * _SQRT3 / 3.0 - py / 3.0
    r = py * 2.0 / 3.0
    return cube_round(q, r)


def path_hexes(origin: Coord, target: Coord) -> list[Coord]:
    """Hexes on the straight line from *origin* to *target*, both inclusive.

    Interpolates over N = max(|dq|, |dr|, |d(q+r)|) steps. Endpoints are
    nudged by a tiny offset so points landing exactly on a hex edge always
    round to the same side.
    """
    q0, r0 = origin
    q1, r1 = target
    n = max(abs(q1 - q0), abs(r1 - r0), abs((q1 + r1) - (q0 + r0)))
    if n == 0:
        return [(q0, r0)]

    aq, ar = q0 + _NUDGE, r0 + _NUDGE
    bq, br = q1 + _NUDGE, r1 + _NUDGE
    path: list[Coord] = []
    for i in range(n + 1):
        t = i / n
        q = aq * (1.0 - t) + bq * t
        r = ar * (1.0 - t) + br * t
        path.append(cube_round(q, r))
    return path
