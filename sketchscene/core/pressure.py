"""
Pressure helpers.

Pressure values are produced outside the engine (stylus, touch force or a
speed-based estimate for mice). The engine only clamps them and maps them
to stroke width and opacity.
"""

from typing import Optional


DEFAULT_PRESSURE = 0.5


def clamp_pressure(pressure: Optional[float]) -> float:
    """Clamp to [0, 1]. Missing pressure becomes DEFAULT_PRESSURE."""
    if pressure is None:
        return DEFAULT_PRESSURE
    return max(0.0, min(1.0, float(pressure)))


def normalize_pressure(pressure: Optional[float],
                       min_pressure: float = 0.1,
                       max_pressure: float = 1.0) -> float:
    """Map a raw [0, 1] pressure into the configured [min, max] range."""
    raw = clamp_pressure(pressure)
    low, high = sorted((clamp_pressure(min_pressure), clamp_pressure(max_pressure)))
    return low + raw * (high - low)


def pressure_width(base_width: float, pressure: float) -> float:
    """Stroke width for a normalised pressure."""
    return base_width * pressure


def pressure_opacity(base_opacity: float, pressure: float) -> float:
    """Opacity for a normalised pressure; light strokes stay visible."""
    return base_opacity * (0.7 + pressure * 0.3)
