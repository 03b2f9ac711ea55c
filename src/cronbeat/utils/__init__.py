"""
Utility helpers for cronbeat.
"""

from .clock import Clock

__all__ = ["Clock"]
