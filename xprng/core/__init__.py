"""Generator core: CRC-32 seed hashing, the LCG and its state snapshots."""

from xprng.core.crc32 import crc32
from xprng.core.enums import SeedSource
from xprng.core.errors import (
    InvalidLengthError,
    InvalidRangeError,
    InvalidSeedError,
    PRNGError,
)
from xprng.core.generator import PseudoRandom, derive_seed
from xprng.core.snapshot import GeneratorSnapshot

__all__ = [
    "GeneratorSnapshot",
    "InvalidLengthError",
    "InvalidRangeError",
    "InvalidSeedError",
    "PRNGError",
    "PseudoRandom",
    "SeedSource",
    "crc32",
    "derive_seed",
]
