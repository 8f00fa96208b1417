"""Adaptive body-weight and energy expenditure tracking."""

__version__ = "0.1.0"
