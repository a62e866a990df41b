"""Service and CLI configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GeneratorConfig:
    """Immutable configuration for the stream service and CLI."""

    # Seeding; None means each new stream is seeded from the clock
    default_seed: int | str | None = None

    # Stream service limits
    max_streams: int = 64
    max_draw_count: int = 10_000     # ints per /int request
    max_bytes_length: int = 65_536   # values per /bytes request

    # Default draw range (matches PseudoRandom.rand_int)
    default_low: int = 0
    default_high: int = 255

    # Logging
    log_level: str = "INFO"
    replay_file: str = "golden.json"
