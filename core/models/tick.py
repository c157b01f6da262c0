"""
Tick model.
"""

from datetime import datetime
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Tick:
    """Single price observation (immutable)."""
    timestamp: datetime
    price: Any
