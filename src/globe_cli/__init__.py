"""
globe-cli: render an ASCII globe in your terminal

Quick Start:
    $ globe-cli -i     # rotate with arrows or mouse drag, zoom with PgUp/PgDn
    $ globe-cli -s     # screensaver, any key quits

Library use:
    >>> from globe_cli import Canvas, build_globe
    >>> canvas = Canvas(160, 160)
    >>> globe = build_globe()
    >>> globe.render_on(canvas)
    >>> print("\\n".join("".join(row) for row in canvas.rows()))
"""

__version__ = "0.1.0"

# Core types
from globe_cli.core.camera import Camera, CameraState
from globe_cli.core.canvas import Canvas, canvas_size
from globe_cli.config import GlyphPacking, ViewerConfig

# Default renderer
from globe_cli.render.globe import Globe, GlobeRenderer, build_globe

__all__ = [
    # Version
    "__version__",
    # Core types
    "Camera",
    "CameraState",
    "Canvas",
    "canvas_size",
    "GlyphPacking",
    "ViewerConfig",
    # Rendering
    "Globe",
    "GlobeRenderer",
    "build_globe",
]
