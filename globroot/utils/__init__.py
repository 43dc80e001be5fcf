"""Numeric helpers."""

from globroot.utils.norms import (
    max_abs,
    relative_change,
    relative_step,
    scaled_gradient,
)

__all__ = [
    "max_abs",
    "relative_change",
    "relative_step",
    "scaled_gradient",
]
