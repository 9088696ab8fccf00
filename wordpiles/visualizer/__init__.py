"""Text rendering of the presentation model."""

from .text import render_board, render_words, render_view

__all__ = ["render_board", "render_words", "render_view"]
