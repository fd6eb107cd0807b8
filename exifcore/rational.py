# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exact rational values

Exif stores exposure times, apertures and GPS coordinates as
numerator/denominator pairs. They are kept exactly as stored: no
reduction and no float conversion at decode time.

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass
from fractions import Fraction
from typing import Optional


@dataclass(frozen=True)
class Rational:
    """A numerator/denominator pair as stored in a RATIONAL or SRATIONAL tag."""
    numerator: int
    denominator: int

    def is_zero(self) -> bool:
        return self.numerator == 0

    def is_valid(self) -> bool:
        """A zero denominator cannot be evaluated."""
        return self.denominator != 0

    def to_float(self) -> float:
        """Evaluate the fraction; a zero denominator yields 0.0."""
        if self.denominator == 0:
            return 0.0
        return self.numerator / self.denominator

    def to_fraction(self) -> Optional[Fraction]:
        if self.denominator == 0:
            return None
        return Fraction(self.numerator, self.denominator)

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"
