"""
Severity Color Mapper
Maps per-segment current draw onto a green -> orange -> red scale and
positions the colors along the route by cumulative arc length
"""

import math
from typing import List, Optional, Sequence, Tuple

from models import CurveData, GradientStop
import config
import curves

RGB = Tuple[int, int, int]


def normalize_levels(values: Sequence[float]) -> List[float]:
    """
    Normalize values to [0, 1] between their min and max

    A flat input (max == min) maps every value to NEUTRAL_LEVEL.
    """
    if not values:
        return []

    lo = min(values)
    hi = max(values)
    if hi == lo:
        return [config.NEUTRAL_LEVEL] * len(values)

    return [min(1.0, max(0.0, (v - lo) / (hi - lo))) for v in values]


def mix_color(a: RGB, b: RGB, t: float) -> RGB:
    """Linear per-channel mix of two colors, t clamped to [0, 1]"""
    t = min(1.0, max(0.0, t))
    return tuple(int(math.floor(ca + (cb - ca) * t + 0.5)) for ca, cb in zip(a, b))


def severity_color(level: float) -> RGB:
    """
    Color for a normalized severity level

    Green at 0, orange at 0.5, red at 1, linear in between.
    """
    if level <= 0.5:
        return mix_color(config.SEVERITY_GREEN, config.SEVERITY_ORANGE, level / 0.5)
    return mix_color(config.SEVERITY_ORANGE, config.SEVERITY_RED, (level - 0.5) / 0.5)


def rgb_to_hex(rgb: RGB) -> str:
    return "#" + "".join(f"{v:02x}" for v in rgb)


def severity_hex(level: float) -> str:
    return rgb_to_hex(severity_color(level))


def flat_gradient() -> List[GradientStop]:
    """Single-color gradient used when there is nothing to grade"""
    color = rgb_to_hex(config.SEVERITY_GREEN)
    return [GradientStop(position=0.0, color=color), GradientStop(position=1.0, color=color)]


def build_gradient_stops(values: Sequence[float], curve: CurveData,
                         lengths: Optional[Sequence[float]] = None) -> List[GradientStop]:
    """
    Build color stops keyed by cumulative length fraction along the route

    The first stop sits at 0 with segment 0's color. Every segment then adds a
    stop at its end fraction, colored with the next segment's level (its own
    on the last segment), giving one transition per waypoint-to-waypoint
    segment.

    Args:
        values: Per-segment metric, e.g. average current
        curve: Dense curve whose segment ranges align with the values
        lengths: Precomputed segment lengths in meters

    Returns:
        Gradient stops; a flat green gradient when there are no segments,
        no values, or zero total length
    """
    if not curve.segment_ranges or not values:
        return flat_gradient()

    if lengths is None:
        lengths = curves.segment_lengths(curve)
    total_length = sum(lengths)
    if total_length == 0:
        return flat_gradient()

    levels = normalize_levels(values)

    def level_at(i: int) -> float:
        return levels[i] if i < len(levels) else config.NEUTRAL_LEVEL

    stops = [GradientStop(position=0.0, color=severity_hex(level_at(0)))]
    acc = 0.0
    for i, length in enumerate(lengths):
        acc += length
        next_level = level_at(i + 1) if i + 1 < len(levels) else level_at(i)
        stops.append(GradientStop(position=min(1.0, acc / total_length),
                                  color=severity_hex(next_level)))

    return stops
