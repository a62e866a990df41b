"""Immutable view of a generator's internals."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

from xprng.core.enums import SeedSource

if TYPE_CHECKING:
    from xprng.core.generator import PseudoRandom


@dataclass(frozen=True, slots=True)
class GeneratorSnapshot:
    """Read-only copy of a generator's state, safe to hand to other threads.

    Taking a snapshot does not touch ``saved_state``; it is an inspection
    tool, not a save point.
    """

    state: int
    counter: int
    increment: int
    saved_state: int | None
    seed_source: SeedSource

    @classmethod
    def from_generator(cls, rng: PseudoRandom) -> GeneratorSnapshot:
        return cls(
            state=rng.state,
            counter=rng.counter,
            increment=rng.increment,
            saved_state=rng.saved_state,
            seed_source=rng.seed_source,
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["seed_source"] = self.seed_source.name.lower()
        return data
