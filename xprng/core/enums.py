"""Enumerations shared by the generator and its callers."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class SeedSource(IntEnum):
    """Which derivation rule produced a generator's current seed."""

    CLOCK = 0     # no seed given, unix seconds
    INTEGER = 1   # abs(int(seed))
    TEXT = 2      # crc32 of the text (or raw bytes)
