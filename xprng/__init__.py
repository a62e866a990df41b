"""x-prng: a portable, seedable pseudo-random number generator.

Not cryptographically secure. Use it where reproducibility across
languages matters, never where unpredictability does.
"""

from xprng.core import PseudoRandom, crc32

__version__ = "0.9.0"

__all__ = ["PseudoRandom", "crc32", "__version__"]
