"""Portable linear congruential generator.

Given the same seed, every conforming implementation (PHP, JavaScript,
Python, ...) produces the same sequence:

    increment = crc32(f"{counter}{state}{counter}")
    state     = (state * 1664525 + increment) mod 2**32
    counter  += 1
    value     = floor(state / 2**32 * (high - low + 1) + low)

The per-draw increment keyed on the draw index and current state replaces
the fixed ``c`` of a textbook LCG. The generator is NOT cryptographically
secure and must never be used where unpredictability matters.
"""

from __future__ import annotations

import logging
import math
import numbers
import operator
import time
from typing import Callable

from xprng.core.crc32 import crc32
from xprng.core.enums import SeedSource
from xprng.core.errors import InvalidLengthError, InvalidRangeError, InvalidSeedError
from xprng.core.snapshot import GeneratorSnapshot

logger = logging.getLogger(__name__)

Seed = str | bytes | bytearray | int | float | None


def derive_seed(seed: Seed, clock: Callable[[], float] = time.time) -> tuple[int, SeedSource]:
    """Map a user-supplied seed to the initial LCG state.

    - text / bytes -> CRC-32 of the UTF-8 (or raw) bytes
    - integer-like -> ``abs(int(seed))``, truncating toward zero; covers
      ``numbers.Real`` and any object with ``__index__`` or ``__int__``
      (``Decimal``, numpy scalars)
    - ``None``     -> current unix time in whole seconds

    Integer seeds are not range-checked; values above 32 bits are folded
    into range by the modulus on the first draw.
    """
    if seed is None:
        return int(clock()), SeedSource.CLOCK
    if isinstance(seed, bool):
        raise InvalidSeedError(f"Boolean seeds are ambiguous: {seed!r}")
    if isinstance(seed, (str, bytes, bytearray)):
        return crc32(seed), SeedSource.TEXT
    if isinstance(seed, numbers.Integral):
        return abs(int(seed)), SeedSource.INTEGER
    if isinstance(seed, numbers.Real):
        if not math.isfinite(seed):
            raise InvalidSeedError(f"Seed must be finite, got {seed!r}")
        return abs(int(seed)), SeedSource.INTEGER
    if hasattr(type(seed), "__index__"):
        return abs(operator.index(seed)), SeedSource.INTEGER
    if hasattr(type(seed), "__int__"):
        try:
            return abs(int(seed)), SeedSource.INTEGER
        except (ValueError, OverflowError) as exc:
            raise InvalidSeedError(f"Seed must be finite, got {seed!r}") from exc
    raise InvalidSeedError(f"Unsupported seed type: {type(seed).__name__}")


class PseudoRandom:
    """Seeded, reproducible pseudo-random number generator.

    Every instance owns its state; two instances never influence each
    other, even when built from the same seed.
    """

    __slots__ = (
        "_state",
        "_increment",
        "_counter",
        "_saved_state",
        "_seed_source",
        "_clock",
    )

    MULTIPLIER = 1664525
    MODULUS = 1 << 32
    INITIAL_INCREMENT = 1013904223

    def __init__(self, seed: Seed = None, *, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._saved_state: int | None = None
        self.reseed(seed)

    # -- introspection --

    @property
    def state(self) -> int:
        return self._state

    @property
    def counter(self) -> int:
        """Number of draws since construction or the last reseed."""
        return self._counter

    @property
    def increment(self) -> int:
        """Increment used by the most recent draw."""
        return self._increment

    @property
    def saved_state(self) -> int | None:
        return self._saved_state

    @property
    def seed_source(self) -> SeedSource:
        return self._seed_source

    def snapshot(self) -> GeneratorSnapshot:
        return GeneratorSnapshot.from_generator(self)

    # -- seeding --

    def reseed(self, seed: Seed = None) -> None:
        """Reset the stream from *seed*; a saved state survives the reseed."""
        state, source = derive_seed(seed, self._clock)
        self._state = state
        self._seed_source = source
        self._increment = self.INITIAL_INCREMENT
        self._counter = 0
        logger.debug("Reseeded from %s seed -> state=%d", source.name.lower(), state)

    # -- save / restore --

    def save_status(self) -> None:
        self._saved_state = self._state

    def restore_status(self) -> None:
        """Roll ``state`` back to the last save; no-op if nothing was saved.

        The draw counter is left alone, so draws after a restore are keyed
        on a different counter than the draws that followed the save and
        will not repeat them.
        """
        if self._saved_state is None:
            return
        self._state = self._saved_state
        logger.debug("Restored state=%d at counter=%d", self._state, self._counter)

    # -- generation --

    def _step(self) -> int:
        counter = self._counter
        self._increment = crc32(f"{counter}{self._state}{counter}")
        self._state = (self._state * self.MULTIPLIER + self._increment) % self.MODULUS
        self._counter = counter + 1
        return self._state

    def rand_int(self, low: int = 0, high: int = 255) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        if high < low:
            raise InvalidRangeError(f"high ({high}) must be >= low ({low})")
        state = self._step()
        return math.floor((state / self.MODULUS) * (high - low + 1) + low)

    def rand_bytes(
        self,
        length: int = 1,
        decimal: bool = False,
        readable: bool = False,
    ) -> str | list[int]:
        """Draw *length* byte values.

        Values span [32, 126] (printable ASCII) when *readable*, otherwise
        [0, 255]. Returns the raw values when *decimal*, otherwise a string
        with one character per value.
        """
        if length < 0:
            raise InvalidLengthError(f"length must be >= 0, got {length}")
        low, high = (32, 126) if readable else (0, 255)
        values = [self.rand_int(low, high) for _ in range(length)]
        if decimal:
            return values
        return "".join(map(chr, values))

    def __repr__(self) -> str:
        return (
            f"PseudoRandom(state={self._state}, counter={self._counter}, "
            f"saved_state={self._saved_state})"
        )
