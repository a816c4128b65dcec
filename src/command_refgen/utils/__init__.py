"""Utility helpers."""

from .cancellation import CancellationToken

__all__ = ["CancellationToken"]
