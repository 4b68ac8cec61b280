"""Seeded random number generators for the combat engine.

Wraps Python's random.Random to provide reproducible randomness.  Every
engine call that needs randomness takes the generator as an explicit
argument; nothing reads a process-wide singleton.  Batch runs *fork* one
generator per match so that consuming random values in one match does not
perturb another.

``ScriptedRNG`` replays a fixed list of percentage rolls and is what tests
substitute to make a round's outcome exact.
"""

from __future__ import annotations

import hashlib
import random
from collections import deque
from typing import Iterable, Sequence, TypeVar

T = TypeVar("T")


class GameRNG:
    """Deterministic RNG that can be forked into independent sub-streams.

    Parameters
    ----------
    seed:
        Integer seed for the underlying Mersenne Twister.
    """

    def __init__(self, seed: int) -> None:
        self._seed = seed
        self._rng = random.Random(seed)

    # -- public properties ---------------------------------------------------

    @property
    def seed(self) -> int:
        """Return the seed this RNG was initialised with."""
        return self._seed

    # -- core random methods -------------------------------------------------

    def random_pct(self) -> int:
        """Return a uniform percentage roll in ``[0, 100)``.

        Every chance check in the engine (dodge, crit, AI rules) compares
        one fresh roll against a threshold: ``roll < chance`` succeeds.
        """
        return self._rng.randrange(100)

    def random_choice(self, seq: Sequence[T]) -> T:
        """Return a random element from a non-empty sequence."""
        return self._rng.choice(seq)

    # -- forking -------------------------------------------------------------

    def fork(self, name: str) -> GameRNG:
        """Create a child RNG whose seed is derived from this RNG's seed and
        *name*.

        The derivation is deterministic: forking with the same *name*
        always produces the same child seed.  The batch runner uses
        ``"match"``/``"agent_a"``/``"agent_b"`` forks so that the agents'
        choices and the resolver's rolls come from separate streams.
        """
        digest = hashlib.sha256(f"{self._seed}:{name}".encode()).digest()
        child_seed = int.from_bytes(digest[:8], "big")
        return GameRNG(child_seed)

    # -- dunder helpers ------------------------------------------------------

    def __repr__(self) -> str:
        return f"GameRNG(seed={self._seed})"


class ScriptedRNG(GameRNG):
    """RNG that replays a fixed sequence of percentage rolls.

    Parameters
    ----------
    rolls:
        Values returned, in order, by :meth:`random_pct`.
    fallback:
        Value returned once *rolls* is exhausted.  ``99`` fails every
        chance check in the engine (no dodge, no crit, every AI rule
        falls through).  ``None`` makes an exhausted script raise
        ``IndexError`` instead, which catches tests that consume more
        rolls than they expect.
    """

    def __init__(self, rolls: Iterable[int] = (), fallback: int | None = 99) -> None:
        super().__init__(seed=0)
        self._rolls: deque[int] = deque(rolls)
        self._fallback = fallback
        self.consumed = 0

    def random_pct(self) -> int:
        self.consumed += 1
        if self._rolls:
            return self._rolls.popleft()
        if self._fallback is None:
            raise IndexError("ScriptedRNG exhausted")
        return self._fallback

    @property
    def remaining(self) -> int:
        """Number of scripted rolls not yet consumed."""
        return len(self._rolls)

    def __repr__(self) -> str:
        return f"ScriptedRNG(remaining={len(self._rolls)}, fallback={self._fallback})"
