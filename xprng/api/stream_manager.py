"""StreamManager: registry of named, independent generator streams.

Each stream owns its own PseudoRandom. A single lock serialises every
operation so concurrent requests never interleave draws on one stream.
"""

from __future__ import annotations

import itertools
import logging
import threading
from typing import TYPE_CHECKING

from xprng.core.errors import StreamExistsError, StreamLimitError, StreamNotFoundError
from xprng.core.generator import PseudoRandom, Seed
from xprng.core.snapshot import GeneratorSnapshot

if TYPE_CHECKING:
    from xprng.config import GeneratorConfig

logger = logging.getLogger(__name__)


class StreamManager:
    """Creates, looks up and drives generator streams by id."""

    def __init__(self, config: GeneratorConfig) -> None:
        self.config = config
        self._streams: dict[str, PseudoRandom] = {}
        self._lock = threading.Lock()
        self._ids = itertools.count(1)

    # -- public properties --

    @property
    def stream_count(self) -> int:
        with self._lock:
            return len(self._streams)

    # -- lifecycle --

    def create(self, stream_id: str | None = None, seed: Seed = None) -> tuple[str, GeneratorSnapshot]:
        """Register a new stream and return its id with its initial snapshot.

        *seed* falls back to ``config.default_seed``; an id is generated when
        *stream_id* is omitted.
        """
        if seed is None:
            seed = self.config.default_seed
        # Build outside the lock: seed validation may raise.
        rng = PseudoRandom(seed)

        with self._lock:
            if stream_id in self._streams:
                raise StreamExistsError(stream_id)
            if len(self._streams) >= self.config.max_streams:
                raise StreamLimitError(self.config.max_streams)
            if stream_id is None:
                stream_id = self._next_id()
            self._streams[stream_id] = rng
            snap = rng.snapshot()

        logger.info("Stream '%s' created (%s seed)", stream_id, snap.seed_source.name.lower())
        return stream_id, snap

    def delete(self, stream_id: str) -> None:
        with self._lock:
            if self._streams.pop(stream_id, None) is None:
                raise StreamNotFoundError(stream_id)
        logger.info("Stream '%s' deleted", stream_id)

    def clear(self) -> None:
        with self._lock:
            self._streams.clear()

    # -- queries --

    def ids(self) -> list[str]:
        with self._lock:
            return sorted(self._streams)

    def snapshot(self, stream_id: str) -> GeneratorSnapshot:
        with self._lock:
            return self._get(stream_id).snapshot()

    def snapshots(self) -> dict[str, GeneratorSnapshot]:
        with self._lock:
            return {sid: rng.snapshot() for sid, rng in sorted(self._streams.items())}

    # -- generator operations --

    def reseed(self, stream_id: str, seed: Seed = None) -> GeneratorSnapshot:
        with self._lock:
            rng = self._get(stream_id)
            rng.reseed(seed)
            return rng.snapshot()

    def draw_ints(self, stream_id: str, count: int, low: int, high: int) -> tuple[list[int], GeneratorSnapshot]:
        with self._lock:
            rng = self._get(stream_id)
            values = [rng.rand_int(low, high) for _ in range(count)]
            return values, rng.snapshot()

    def draw_bytes(
        self,
        stream_id: str,
        length: int,
        decimal: bool = False,
        readable: bool = False,
    ) -> tuple[str | list[int], GeneratorSnapshot]:
        with self._lock:
            rng = self._get(stream_id)
            data = rng.rand_bytes(length, decimal=decimal, readable=readable)
            return data, rng.snapshot()

    def save(self, stream_id: str) -> GeneratorSnapshot:
        with self._lock:
            rng = self._get(stream_id)
            rng.save_status()
            return rng.snapshot()

    def restore(self, stream_id: str) -> GeneratorSnapshot:
        with self._lock:
            rng = self._get(stream_id)
            rng.restore_status()
            return rng.snapshot()

    # -- internals --

    def _get(self, stream_id: str) -> PseudoRandom:
        try:
            return self._streams[stream_id]
        except KeyError:
            raise StreamNotFoundError(stream_id) from None

    def _next_id(self) -> str:
        while True:
            candidate = f"stream-{next(self._ids)}"
            if candidate not in self._streams:
                return candidate
