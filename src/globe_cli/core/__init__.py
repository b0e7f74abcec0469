"""Core data structures: camera parameters and the glyph canvas."""

from globe_cli.core.camera import Camera, CameraState
from globe_cli.core.canvas import Canvas, canvas_for, canvas_size

__all__ = ["Camera", "CameraState", "Canvas", "canvas_for", "canvas_size"]
