"""Kernel value types — public re-export surface.

Modules:
  result.py — Ok, Err, Result, capture, acapture
"""

from txscope.kernel.types.result import Err, Ok, Result, acapture, capture

__all__ = ["Err", "Ok", "Result", "acapture", "capture"]
