"""Viewer configuration - step sizes, pacing and glyph packing."""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass(frozen=True)
class GlyphPacking:
    """
    How many canvas glyphs one terminal cell holds.

    Terminal cells are roughly twice as tall as they are wide, so a cell
    packs 4 glyph-columns and 8 glyph-rows by default. Fonts with a
    different aspect ratio can use other factors.
    """
    cols: int = 4
    rows: int = 8

    def __post_init__(self) -> None:
        if self.cols < 1 or self.rows < 1:
            raise ValueError(f"Packing factors must be positive, got {self.cols}x{self.rows}")

    @property
    def square_step(self) -> int:
        """Smallest side length divisible by both factors."""
        return math.lcm(self.cols, self.rows)


@dataclass(frozen=True)
class ViewerConfig:
    """Tunable constants for the render loop and input routers."""
    poll_timeout: float = 0.1  # seconds, also the frame pacer
    zoom_step: float = 0.1
    tilt_step: float = 0.1
    tilt_limit: float = 1.5
    key_rotate_step: float = math.pi / 30
    drag_rotate_step: float = math.pi / 30
    spin_step: float = -math.pi / 50
    initial_zoom: float = 2.0
    # Enter focuses this (x, y) point in unit map coordinates.
    # Nothing selects a point yet, so it stays at the origin.
    focus_target: tuple[float, float] = (0.0, 0.0)
    packing: GlyphPacking = field(default_factory=GlyphPacking)
