"""Condottiere: tiered armies, a gold treasury and strength-based battles."""

__version__ = "0.1.0"
