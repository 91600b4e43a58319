"""
Weighted random selection of one interaction channel per probe.

Every channel of a generator map is weighed by its total cross section, either
recomputed or looked up in a precomputed tabulation. One channel is then picked
by inverse-CDF sampling on the cumulative weights, in map order.

Invariants:
    - exactly one uniform draw is consumed per selection call, failed or not;
    - the selected channel is the first one whose cumulative weight exceeds the
      draw (first-match-wins), so zero-weight channels are never selected.
"""
from nu_events.errors import ConfigurationError
from nu_events.globals.random_source import RandomSource
from nu_events.interaction.interaction import Interaction
from nu_events.xsec.table import XSecTable

from dataclasses import dataclass
from enum import Enum
import logging
import math

import numpy as np


class SelectorState(Enum):
    IDLE = "idle"
    WEIGHTS_COMPUTED = "weights-computed"
    SELECTED = "selected"
    FAILED = "failed"


@dataclass(frozen=True)
class WeightTable:
    channels: tuple
    weights: np.ndarray
    cumulative: np.ndarray

    @classmethod
    def from_pairs(cls, pairs) -> "WeightTable":
        """Build from ordered (channel, weight) pairs."""
        pairs = list(pairs)
        channels = tuple(c for c, _ in pairs)
        weights = np.array([w for _, w in pairs], dtype=float)
        if not np.all(np.isfinite(weights)):
            raise ValueError(f"Non-finite channel weight in {dict(zip(channels, weights))}")
        if np.any(weights < 0.0):
            raise ValueError(f"Negative channel weight in {dict(zip(channels, weights))}")
        weights.flags.writeable = False
        cumulative = np.cumsum(weights)
        cumulative.flags.writeable = False
        return cls(channels=channels, weights=weights, cumulative=cumulative)

    @property
    def total(self) -> float:
        return float(self.cumulative[-1]) if len(self.cumulative) else 0.0

    def locate(self, u: float) -> int:
        """Index of the smallest i with u < cumulative[i]."""
        i = int(np.searchsorted(self.cumulative, u, side="right"))
        if i >= len(self.cumulative):
            # u rounded up to the total: fall back on the last channel with weight
            i = int(np.flatnonzero(self.weights > 0.0)[-1])
        return i

    def __len__(self):
        return len(self.channels)


@dataclass(frozen=True)
class EventSeed:
    """The selected channel, handed over to the event record builder."""
    channel: str
    interaction: Interaction
    probe_p4: tuple
    weight: float


@dataclass(frozen=True)
class SelectionOutcome:
    state: SelectorState
    table: WeightTable
    draw: float
    seed: EventSeed | None = None

    @property
    def selected(self) -> bool:
        return self.state is SelectorState.SELECTED


class InteractionSelector:
    """
    Parameters
    ----------
    use_cached_tabulation : bool
        Look channel weights up in ``tabulation`` instead of integrating them.
    tabulation : XSecTable, optional
        Required when ``use_cached_tabulation`` is set.
    rng : np.random.Generator, optional
        Private random stream. Defaults to the process-wide ``RandomSource``.
    """

    def __init__(self, use_cached_tabulation: bool = False, tabulation: XSecTable | None = None,
                 rng: np.random.Generator | None = None, log: logging.Logger | None = None):
        if use_cached_tabulation and tabulation is None:
            raise ConfigurationError("Cached tabulation requested but no cross section table was given.")
        self.use_cached_tabulation = bool(use_cached_tabulation)
        self.tabulation = tabulation
        self._rng = rng
        self.log = log if log is not None else logging.getLogger(self.__class__.__module__)
        self.state = SelectorState.IDLE

    @property
    def rng(self) -> np.random.Generator:
        # resolved per call so that RandomSource.set_seed applies to existing selectors
        return self._rng if self._rng is not None else RandomSource.rng()

    def compute_weights(self, generator_map, p4) -> WeightTable:
        E = float(p4[3])
        pairs = []
        for channel, generator in generator_map.items():
            if self.use_cached_tabulation:
                w = self.tabulation.lookup(channel, E)
            else:
                w = generator.cross_section(p4)
            self.log.debug(f"{channel}: weight = {w} at E = {E}")
            pairs.append((channel, w))

        table = WeightTable.from_pairs(pairs)
        self.state = SelectorState.WEIGHTS_COMPUTED
        return table

    def pick(self, table: WeightTable):
        """
        Draw once and locate the channel. Returns (draw, index), the index being
        None when the total weight is not positive.
        """
        r = float(self.rng.random())
        total = table.total
        if not total > 0.0 or not math.isfinite(total):
            return r, None
        return r, table.locate(r * total)

    def select_interaction(self, generator_map, p4) -> SelectionOutcome:
        p4 = tuple(float(v) for v in p4)
        self.state = SelectorState.IDLE

        table = self.compute_weights(generator_map, p4)
        r, i = self.pick(table)

        if i is None:
            self.state = SelectorState.FAILED
            self.log.debug(f"No interaction possible at E = {p4[3]}: total weight {table.total}")
            return SelectionOutcome(state=self.state, table=table, draw=r)

        channel = table.channels[i]
        seed = EventSeed(
            channel=channel,
            interaction=generator_map[channel].candidate_interaction(p4),
            probe_p4=p4,
            weight=float(table.weights[i]),
        )
        self.state = SelectorState.SELECTED
        self.log.info(f"Selected {channel} at E = {p4[3]} (r = {r:.6f})")
        return SelectionOutcome(state=self.state, table=table, draw=r, seed=seed)
