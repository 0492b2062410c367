"""Ballistic turret range: lob shots at a target from a driveable robot."""
from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
