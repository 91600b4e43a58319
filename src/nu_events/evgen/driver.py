from nu_events.evgen.generator_map import InteractionGeneratorMap
from nu_events.evgen.selector import InteractionSelector
from nu_events.ghep.record import EventRecord

import logging


class EventGenerationDriver:
    """
    Probe in, event record out: selects a channel, lays out its initial state
    and runs the record visitors in order.

    ``EventRecord.from_seed`` only holds the initial state. Final state hadrons
    come from a downstream builder passed as an earlier visitor; record
    corrections such as ``NucBindEnergyAggregator`` must come after it, or they
    find nothing to act on.
    """

    def __init__(self, generator_map: InteractionGeneratorMap, selector: InteractionSelector,
                 visitors=(), log: logging.Logger | None = None):
        self.generator_map = generator_map
        self.selector = selector
        self.visitors = list(visitors)
        self.log = log if log is not None else logging.getLogger(self.__class__.__module__)

    def generate(self, p4) -> EventRecord | None:
        """Event record for the probe ``p4``, None when no channel is open."""
        outcome = self.selector.select_interaction(self.generator_map, p4)
        if not outcome.selected:
            return None

        record = EventRecord.from_seed(outcome.seed)
        for visitor in self.visitors:
            record = visitor(record)
        return record

    def generate_many(self, probes) -> list:
        records = [self.generate(p4) for p4 in probes]
        n_failed = sum(r is None for r in records)
        if n_failed:
            self.log.warning(f"{n_failed}/{len(records)} probes had no open interaction channel")
        return records
