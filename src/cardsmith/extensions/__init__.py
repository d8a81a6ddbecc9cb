"""Markdown extensions bundled with cardsmith."""

from __future__ import annotations

from .boxes import BOX_CLASS, BOX_CUSTOM_FENCE, fence_box_format, render_box
from .math import MathExtension


__all__ = ["BOX_CLASS", "BOX_CUSTOM_FENCE", "MathExtension", "fence_box_format", "render_box"]
