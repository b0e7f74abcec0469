"""Camera - the view parameters the globe renderer projects with."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Camera:
    """
    Immutable camera value handed to the renderer each frame.

    zoom is the viewing distance (larger is farther away), xy a horizontal
    offset and z the elevation of the eye above the equator plane.
    """
    zoom: float = 2.0
    xy: float = 0.0
    z: float = 0.0


@dataclass(slots=True)
class CameraState:
    """
    Mutable camera parameters owned by the render loop.

    Elevation (z) is bounded at the mutation site: a tilt step is only
    applied while z is still inside the limit on that side. Zoom and
    angle are unbounded; angle is in radians.
    """
    zoom: float = 2.0
    xy: float = 0.0
    z: float = 0.0
    angle: float = 0.0

    def zoom_by(self, delta: float) -> None:
        self.zoom += delta

    def rotate(self, delta: float) -> None:
        self.angle += delta

    def tilt_up(self, step: float, limit: float) -> None:
        """Raise the eye by one step unless already at the upper limit."""
        if self.z < limit:
            self.z = min(self.z + step, limit)

    def tilt_down(self, step: float, limit: float) -> None:
        """Lower the eye by one step unless already at the lower limit."""
        if self.z > -limit:
            self.z = max(self.z - step, -limit)

    def focus_on(self, cx: float, cy: float, limit: float) -> None:
        """
        Point the camera at (cx, cy) given in unit map coordinates.

        cy=0 is the bottom of the map (z=-limit), cx=0 the map's left
        edge, which faces the viewer at half a turn.
        """
        self.z = max(-limit, min(limit, cy * (2 * limit) - limit))
        self.angle = cx * (math.pi * 2) + math.pi

    def snapshot(self) -> Camera:
        """Build a fresh Camera value from the current parameters."""
        return Camera(zoom=self.zoom, xy=self.xy, z=self.z)
