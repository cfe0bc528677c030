"""
Random Source Module

This module implements the RandomSource class, the source of randomness
passed explicitly to every stochastic genome operator.

Classes:
    RandomSource: Boolean, real and pick draws backed by a numpy Generator
"""

from typing import Sequence, TypeVar

import numpy as np

T = TypeVar("T")


class RandomSource:
    """
    Source of randomness for the genome operators.

    The genome never touches global random state: every stochastic operator
    receives a RandomSource and draws from it. Seeding the source therefore
    makes a whole evolutionary run reproducible, and tests can replace it with
    a stub returning a scripted sequence of draws.

    Public Methods:
        real(low, high, inclusive=False): Uniform real number in [low, high) (or [low, high])
        pick(seq):                        Uniformly chosen element of a sequence
        bool(p):                          True with probability p
    """

    def __init__(self, seed: int | None = None):
        """
        Parameters:
            seed: seed for the underlying numpy Generator (None for fresh entropy)
        """
        self._rng: np.random.Generator = np.random.default_rng(seed)

    def real(self, low: float, high: float, inclusive: bool = False) -> float:
        """
        Return a uniformly distributed real number.

        Parameters:
            low:       lower bound (always included)
            high:      upper bound
            inclusive: whether 'high' itself may be returned

        Returns:
            a float in [low, high) or, if 'inclusive', in [low, high]
        """
        if inclusive:
            value = self._rng.uniform(low, np.nextafter(high, np.inf))
            return float(np.minimum(value, high))
        return float(self._rng.uniform(low, high))

    def pick(self, seq: Sequence[T]) -> T:
        """
        Return an element of 'seq', chosen uniformly at random.

        Raises:
            ValueError: if the sequence is empty
        """
        if len(seq) == 0:
            raise ValueError("Cannot pick from an empty sequence")
        return seq[int(self._rng.integers(len(seq)))]

    def bool(self, p: float = 0.5) -> bool:
        """
        Return True with probability 'p'.
        Probabilities at or below 0 never fire; at or above 1 always fire.
        """
        if p <= 0.0:
            return False
        if p >= 1.0:
            return True
        return bool(self._rng.random() < p)
