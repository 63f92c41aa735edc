"""Pitch model for Scala scale degrees.

A scale degree is written either as an integer ratio (N/D) or as a value in
cents. Both representations evaluate against a base frequency supplied by the
caller and render back to the text used in .scl files.
"""

from dataclasses import dataclass
from fractions import Fraction
from typing import Union

import consts
import utils


@dataclass(frozen=True)
class RatioPitch:
    """A pitch which is the ratio of two positive integers."""
    n: int = 1
    d: int = 1

    def freq(self, base: float) -> float:
        """Return the pitch frequency relative to the given base."""
        return utils.apply_ratio(base, self.n, self.d)

    def cents(self) -> float:
        return utils.ratio_to_cents(Fraction(self.n, self.d))

    def render(self) -> str:
        # The denominator is always written, even for whole numbers
        return f"{self.n}/{self.d}"

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class CentsPitch:
    """A pitch given in cents (1200 cents per octave)."""
    value: float = 0.0

    def freq(self, base: float) -> float:
        """Return the pitch frequency relative to the given base."""
        return utils.apply_cents(base, self.value)

    def cents(self) -> float:
        return float(self.value)

    def render(self) -> str:
        # The decimal point marks the entry as cents when read back
        return f"{self.value:.{consts.CENTS_DECIMALS}f}"

    def __str__(self) -> str:
        return self.render()


Pitch = Union[RatioPitch, CentsPitch]

UNISON = RatioPitch(1, 1)
