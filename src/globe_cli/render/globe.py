"""Default globe collaborator: a plain lit sphere with a graticule.

The viewer only relies on the GlobeRenderer protocol; any object with a
mutable angle and camera and a render_on(canvas) method can be swapped in.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from globe_cli.core.camera import Camera
from globe_cli.core.canvas import Canvas

# Dark to bright.
SHADES = ".:-=+*%@"
GRID_GLYPH = '#'
GRID_SPACING = math.radians(30)
GRID_WIDTH = math.radians(2.5)
LIGHT = (-0.5, 0.5, 0.7071)


@runtime_checkable
class GlobeRenderer(Protocol):
    """What the render loop needs from a globe."""
    angle: float
    camera: Camera

    def render_on(self, canvas: Canvas) -> None:
        """Fill the canvas glyphs from the current angle and camera."""
        ...


@dataclass
class Globe:
    """
    Sphere seen from the camera, spun by angle around its polar axis.

    The apparent radius shrinks as camera.zoom grows; camera.z tilts the
    view towards a pole (radians).
    """
    angle: float = 0.0
    camera: Camera = field(default_factory=Camera)

    def render_on(self, canvas: Canvas) -> None:
        rows, cols = canvas.rows_count, canvas.cols
        if not rows or not cols:
            return

        radius = min(2.0, 1.8 / max(self.camera.zoom, 0.1))
        tilt_sin, tilt_cos = math.sin(self.camera.z), math.cos(self.camera.z)

        for row in range(rows):
            v = 1 - (row + 0.5) * 2 / rows
            for col in range(cols):
                u = (col + 0.5) * 2 / cols - 1
                d2 = (u * u + v * v) / (radius * radius)
                if d2 > 1:
                    continue
                x, y, z = u / radius, v / radius, math.sqrt(1 - d2)
                canvas.plot(col, row, self._glyph(x, y, z, tilt_sin, tilt_cos))

    def _glyph(self, x: float, y: float, z: float, tilt_sin: float, tilt_cos: float) -> str:
        # Undo the camera tilt to get globe-space coordinates
        gy = y * tilt_cos + z * tilt_sin
        gz = z * tilt_cos - y * tilt_sin

        lat = math.asin(max(-1.0, min(1.0, gy)))
        lon = math.atan2(x, gz) - self.angle
        if _near_grid(lat) or _near_grid(lon):
            return GRID_GLYPH

        light = max(0.0, x * LIGHT[0] + y * LIGHT[1] + z * LIGHT[2])
        return SHADES[min(len(SHADES) - 1, int(light * len(SHADES)))]


def _near_grid(value: float) -> bool:
    offset = value % GRID_SPACING
    return min(offset, GRID_SPACING - offset) < GRID_WIDTH


def build_globe() -> Globe:
    """Build the default globe facing the viewer."""
    return Globe()
