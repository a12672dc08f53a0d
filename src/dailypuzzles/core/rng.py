"""
Deterministic pseudo-random generator shared by every daily puzzle.

Park-Miller minimal standard generator: the same integer seed always yields the
same sequence of floats in [0, 1), on every platform.
"""

MODULUS = 2147483647
MULTIPLIER = 16807


class SeededRandom:
    """Linear congruential generator with a Math.random-like interface."""

    def __init__(self, seed: int):
        self._state = 1
        self.seed(seed)

    def seed(self, value: int) -> None:
        """Reset the generator to the state derived from ``value``."""
        value = int(value)
        # Sign-preserving remainder, then fold into [1, MODULUS - 1]
        state = abs(value) % MODULUS
        if value < 0:
            state = -state
        if state <= 0:
            state += MODULUS - 1
        self._state = state

    def next(self) -> float:
        """Advance the state and return a float in [0, 1)."""
        self._state = (self._state * MULTIPLIER) % MODULUS
        return (self._state - 1) / (MODULUS - 1)

    def randint(self, n: int) -> int:
        """Return an integer in [0, n)."""
        if n <= 0:
            raise ValueError("Upper bound must be positive")
        return int(self.next() * n)
