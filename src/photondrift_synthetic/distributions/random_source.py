"""Deterministic random source.

This module provides the single source of randomness for a generation run.
Every draw advances a linear-congruential recurrence, so a run is exactly
reproducible from its seed and the order of calls made against it.

A source is owned by one run (or one parallel branch). Sharing an instance
between concurrently running branches breaks determinism; use fork() to give
each branch its own source.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TypeVar

from photondrift_synthetic.errors import EmptyDomainError

T = TypeVar("T")

# Linear-congruential parameters: state = (state * MULTIPLIER + INCREMENT) % MODULUS
MULTIPLIER = 9301
INCREMENT = 49297
MODULUS = 233280

TOKEN_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


class DeterministicRandomSource:
    """Seeded uniform generator with derived sampling helpers.

    All derived operations are built only from next(), so the number of
    draws each one consumes is part of the determinism contract.

    Attributes:
        seed: Seed the source was created from
        state: Current recurrence state

    Example:
        >>> rng = DeterministicRandomSource(seed=12345)
        >>> rng.choice(["low", "medium", "high", "critical"])
        'medium'
        >>> 0.0 <= rng.next() < 1.0
        True
    """

    def __init__(self, seed: int) -> None:
        """Initialize the source.

        Args:
            seed: Integer seed. Never derived from wall-clock time or OS entropy.
        """
        self.seed = seed
        self.state = seed

    def next(self) -> float:
        """Advance the recurrence and return a uniform float in [0, 1)."""
        self.state = (self.state * MULTIPLIER + INCREMENT) % MODULUS
        return self.state / MODULUS

    def choice(self, items: Sequence[T]) -> T:
        """Select one item uniformly.

        Args:
            items: Non-empty pool to select from

        Returns:
            items[floor(next() * len(items))]

        Raises:
            EmptyDomainError: If items is empty.
        """
        if not items:
            raise EmptyDomainError("choice")
        return items[math.floor(self.next() * len(items))]

    def uniform(self, minimum: float, maximum: float) -> float:
        """Return minimum + next() * (maximum - minimum)."""
        return minimum + self.next() * (maximum - minimum)

    def integer(self, minimum: float, maximum: float) -> int:
        """Return floor(uniform(minimum, maximum)), i.e. an int in [minimum, maximum)."""
        return math.floor(self.uniform(minimum, maximum))

    def chance(self, probability: float) -> bool:
        """Return True with the given probability (one draw)."""
        return self.next() < probability

    def gaussian(self, mean: float = 0.0, stddev: float = 1.0) -> float:
        """Sample a normal distribution using the Box-Muller transform.

        Zero draws are re-drawn so log(0) is never taken. Results are not
        clamped; callers clamp where their field requires it.

        Args:
            mean: Distribution mean
            stddev: Standard deviation

        Returns:
            z * stddev + mean
        """
        u = 0.0
        while u == 0.0:
            u = self.next()
        v = 0.0
        while v == 0.0:
            v = self.next()
        z = math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)
        return z * stddev + mean

    def token(self, length: int = 9) -> str:
        """Return a base-36 identifier token, one draw per character."""
        return "".join(self.choice(TOKEN_ALPHABET) for _ in range(length))

    def sample(self, items: Sequence[T], k: int) -> list[T]:
        """Select k distinct positions from items without replacement.

        Args:
            items: Pool to draw from
            k: Number of items (must not exceed len(items))

        Returns:
            Selected items in draw order

        Raises:
            EmptyDomainError: If more items are requested than the pool holds.
        """
        if k > len(items):
            raise EmptyDomainError(
                "sample",
                internal_details=f"requested {k} items from a pool of {len(items)}",
            )
        remaining = list(items)
        picked: list[T] = []
        for _ in range(k):
            index = math.floor(self.next() * len(remaining))
            picked.append(remaining.pop(index))
        return picked

    def fork(self, branch_index: int) -> DeterministicRandomSource:
        """Create an independent source for a parallel branch.

        Args:
            branch_index: Stable index of the branch

        Returns:
            New source seeded with seed + branch_index
        """
        return DeterministicRandomSource(self.seed + branch_index)
