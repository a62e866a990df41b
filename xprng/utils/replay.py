"""Golden files: record generator operations and replay them for conformance.

A golden file captures a seed plus every operation applied to the generator
and its result. Any implementation can replay the file and compare; a
Python replay is available through :func:`verify_replay`.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import xxhash

from xprng.core.enums import SeedSource
from xprng.core.errors import ReplayError
from xprng.core.generator import PseudoRandom, Seed

logger = logging.getLogger(__name__)

REPLAY_VERSION = "1.0"


def sequence_digest(seed: Any, ops: list[dict[str, Any]]) -> str:
    """xxh64 hex digest of the canonical JSON form of *seed* and *ops*."""
    payload = json.dumps({"seed": seed, "ops": ops}, sort_keys=True, separators=(",", ":"))
    return xxhash.xxh64(payload.encode("utf-8")).hexdigest()


def _encode_seed(seed: Seed, rng: PseudoRandom) -> Any:
    # Clock seeds are stored as the state they produced so the file replays.
    if rng.seed_source is SeedSource.CLOCK:
        return rng.state
    if isinstance(seed, (bytes, bytearray)):
        return {"hex": bytes(seed).hex()}
    return seed


def _decode_seed(value: Any) -> Seed:
    if value is None:
        raise ReplayError("Clock seeds cannot be replayed; record the derived state instead")
    if isinstance(value, dict):
        try:
            return bytes.fromhex(value["hex"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ReplayError(f"Malformed bytes seed: {value!r}") from exc
    return value


@dataclass(frozen=True, slots=True)
class ReplayMismatch:
    """One operation whose replayed result differs from the recorded one."""

    index: int
    op: str
    expected: Any
    actual: Any


class DrawRecorder:
    """Drives a fresh generator and records each call for a golden file."""

    __slots__ = ("_path", "_seed", "_rng", "_ops")

    def __init__(
        self,
        path: str | Path,
        seed: Seed = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._path = Path(path)
        self._rng = PseudoRandom(seed, clock=clock)
        self._seed = _encode_seed(seed, self._rng)
        self._ops: list[dict[str, Any]] = []

    @property
    def rng(self) -> PseudoRandom:
        return self._rng

    @property
    def ops(self) -> list[dict[str, Any]]:
        return list(self._ops)

    def rand_int(self, low: int = 0, high: int = 255) -> int:
        value = self._rng.rand_int(low, high)
        self._ops.append({"op": "rand_int", "low": low, "high": high, "result": value})
        return value

    def rand_bytes(self, length: int = 1, decimal: bool = False, readable: bool = False) -> str | list[int]:
        values = self._rng.rand_bytes(length, decimal=True, readable=readable)
        self._ops.append(
            {"op": "rand_bytes", "length": length, "readable": readable, "result": values}
        )
        if decimal:
            return list(values)
        return "".join(map(chr, values))

    def reseed(self, seed: Seed = None) -> None:
        self._rng.reseed(seed)
        self._ops.append(
            {"op": "reseed", "seed": _encode_seed(seed, self._rng), "result": self._rng.state}
        )

    def save_status(self) -> None:
        self._rng.save_status()
        self._ops.append({"op": "save_status", "result": self._rng.state})

    def restore_status(self) -> None:
        self._rng.restore_status()
        self._ops.append({"op": "restore_status", "result": self._rng.state})

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": REPLAY_VERSION,
            "seed": self._seed,
            "total_ops": len(self._ops),
            "digest": sequence_digest(self._seed, self._ops),
            "ops": self._ops,
        }

    def flush(self) -> Path:
        """Write the golden file to disk and return its path."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        logger.info("Golden file saved to %s (%d ops)", self._path, len(self._ops))
        return self._path


def load_replay(path: str | Path) -> dict[str, Any]:
    """Read and integrity-check a golden file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ReplayError(f"Cannot read golden file {path}: {exc}") from exc

    if not isinstance(data, dict) or "ops" not in data or "seed" not in data:
        raise ReplayError(f"{path} is not a golden file")
    if data.get("version") != REPLAY_VERSION:
        raise ReplayError(f"Unsupported golden file version: {data.get('version')!r}")

    digest = sequence_digest(data["seed"], data["ops"])
    if data.get("digest") != digest:
        raise ReplayError(f"Digest mismatch in {path}: file was modified")
    return data


def replay_ops(seed: Any, ops: list[dict[str, Any]]) -> list[ReplayMismatch]:
    """Run *ops* on a generator seeded with *seed*; return every mismatch."""
    rng = PseudoRandom(_decode_seed(seed))
    mismatches: list[ReplayMismatch] = []

    for index, op in enumerate(ops):
        name = op.get("op")
        try:
            match name:
                case "rand_int":
                    actual: Any = rng.rand_int(op["low"], op["high"])
                case "rand_bytes":
                    actual = rng.rand_bytes(op["length"], decimal=True, readable=op["readable"])
                case "reseed":
                    rng.reseed(_decode_seed(op["seed"]))
                    actual = rng.state
                case "save_status":
                    rng.save_status()
                    actual = rng.state
                case "restore_status":
                    rng.restore_status()
                    actual = rng.state
                case _:
                    raise ReplayError(f"Unknown operation at index {index}: {name!r}")
        except KeyError as exc:
            raise ReplayError(f"Operation {index} ({name}) is missing {exc}") from exc

        if actual != op.get("result"):
            mismatches.append(ReplayMismatch(index, name, op.get("result"), actual))

    return mismatches


def verify_replay(path: str | Path) -> list[ReplayMismatch]:
    """Load a golden file and replay it; an empty list means it conforms."""
    data = load_replay(path)
    mismatches = replay_ops(data["seed"], data["ops"])
    if mismatches:
        logger.warning("%s: %d of %d ops diverged", path, len(mismatches), len(data["ops"]))
    else:
        logger.info("%s: all %d ops replayed identically", path, len(data["ops"]))
    return mismatches
