"""Shared helpers."""

from bookertargets.utils.decorators import singleton

__all__ = ["singleton"]
