"""Renderers that fill a canvas with a globe."""

from globe_cli.render.globe import Globe, GlobeRenderer, build_globe

__all__ = ["Globe", "GlobeRenderer", "build_globe"]
