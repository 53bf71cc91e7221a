"""
Observatory data models.

Contains DTOs for observatory reference data.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Observatory:
    """Observatory reference entry."""

    code: str
    name: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    elevation: Optional[float] = None
    agency: Optional[str] = None
