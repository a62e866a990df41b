"""CRC-32 used to turn text seeds and draw keys into integers.

This is the zlib/PNG/gzip checksum (CRC-32/ISO-HDLC, reflected polynomial
0xEDB88320), the same function PHP's ``crc32`` and the JavaScript port's
table-driven version compute. It is used purely as a mixing function,
never for integrity checking.
"""

from __future__ import annotations

import zlib


def crc32(data: str | bytes | bytearray) -> int:
    """Return the unsigned CRC-32 of *data*.

    Text is encoded as UTF-8 first, so ``crc32("abc") == crc32(b"abc")``.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return zlib.crc32(data) & 0xFFFFFFFF
