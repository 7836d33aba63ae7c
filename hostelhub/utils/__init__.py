"""
Utility package initialization and exports
"""

from .datetime_utils import Clock, DateRangeCalculator, utcnow

__all__ = ["Clock", "DateRangeCalculator", "utcnow"]
