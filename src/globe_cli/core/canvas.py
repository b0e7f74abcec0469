"""Canvas - glyph buffer for one rendered frame."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator

from globe_cli.config import GlyphPacking

if TYPE_CHECKING:
    from globe_cli.cli.core.terminal import TerminalSize

BLANK = ' '


@dataclass
class Canvas:
    """
    A square-ish grid of glyphs in glyph space.

    width and height are measured in glyphs; every terminal cell packs
    packing.cols x packing.rows of them, so the printable matrix has
    height // packing.rows rows of width // packing.cols glyphs.
    A canvas is never resized: build a new one when the terminal changes.
    """
    width: int
    height: int
    packing: GlyphPacking = field(default_factory=GlyphPacking)
    matrix: list[list[str]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Canvas size must not be negative, got {self.width}x{self.height}")
        self.matrix = [[BLANK] * self.cols for _ in range(self.rows_count)]

    @property
    def cols(self) -> int:
        """Printable glyphs per row."""
        return self.width // self.packing.cols

    @property
    def rows_count(self) -> int:
        """Printable rows."""
        return self.height // self.packing.rows

    def get_size(self) -> tuple[int, int]:
        """Return (width, height) in glyph space."""
        return self.width, self.height

    def clear(self) -> None:
        """Blank every glyph in place."""
        for row in self.matrix:
            row[:] = [BLANK] * len(row)

    def plot(self, col: int, row: int, glyph: str) -> None:
        """Put a glyph at a printable position; positions off the grid are ignored."""
        if 0 <= row < self.rows_count and 0 <= col < self.cols:
            self.matrix[row][col] = glyph

    def __getitem__(self, pos: tuple[int, int]) -> str:
        """Get glyph using indexing: canvas[col, row]."""
        col, row = pos
        if col < 0 or col >= self.cols:
            raise IndexError(f"col={col} out of bounds (cols={self.cols})")
        if row < 0 or row >= self.rows_count:
            raise IndexError(f"row={row} out of bounds (rows={self.rows_count})")
        return self.matrix[row][col]

    def rows(self) -> Iterator[list[str]]:
        """Iterate over printable rows."""
        yield from self.matrix


def canvas_size(size: TerminalSize, packing: GlyphPacking | None = None) -> tuple[int, int]:
    """
    Compute the (width, height) of a canvas that fits the terminal.

    The globe stays square in glyph space and fits the narrower terminal
    dimension: landscape terminals are bounded by their rows, portrait and
    square ones by their columns. The side is rounded down so both
    dimensions divide evenly into terminal cells.
    """
    packing = packing or GlyphPacking()
    if size.cols > size.rows:
        side = size.rows * packing.rows
    else:
        side = size.cols * packing.cols
    side -= side % packing.square_step
    return side, side


def canvas_for(size: TerminalSize, packing: GlyphPacking | None = None) -> Canvas:
    """Build a fresh canvas sized for the terminal."""
    packing = packing or GlyphPacking()
    width, height = canvas_size(size, packing)
    return Canvas(width, height, packing)
