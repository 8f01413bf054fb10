"""
Utility modules for the application.
"""

from .rounding import round_cents, round_half_up, to_decimal

__all__ = [
    'round_cents',
    'round_half_up',
    'to_decimal',
]
