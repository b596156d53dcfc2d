"""Utility modules for the JSON Bridge."""

from .validation import ValidationUtils

__all__ = ["ValidationUtils"]
