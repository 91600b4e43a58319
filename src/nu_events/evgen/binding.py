from nu_events.ghep.record import EventRecord, Status
from nu_events.interaction.interaction import Target
from nu_events.utils import pdg
from nu_events.utils.nuclear import binding_energy_last_nucleon

import logging
import math

import numpy as np


class NucBindEnergyAggregator:
    """
    Removes the nuclear binding energy from final state nucleons that come
    from a target nucleus.

    The energy of every such nucleon is lowered by the separation energy of the
    nucleus and its 3-momentum rescaled to stay on shell. A massless bindino
    carrying the difference is appended for each corrected nucleon, so the
    total 4-momentum of the record is unchanged.
    """

    def __init__(self, binding_energy=binding_energy_last_nucleon, log: logging.Logger | None = None):
        self._binding_energy = binding_energy
        self.log = log if log is not None else logging.getLogger(self.__class__.__module__)

    def __call__(self, record: EventRecord) -> EventRecord:
        return self.process(record)

    def process(self, record: EventRecord) -> EventRecord:
        # bindinos appended below are not visited
        n = len(record)
        for i in range(n):
            p = record.particle(i)
            if not pdg.is_neutron_or_proton(p.pdg):
                continue
            if p.status != Status.STABLE_FINAL_STATE:
                continue
            nucleus = self.find_mother_nucleus(record, i)
            if nucleus is None:
                continue

            ion = record.particle(nucleus).pdg
            b = self._binding_energy(Target(Z=pdg.ion_z(ion), A=pdg.ion_a(ion)))
            self._correct(record, i, b)
        return record

    def find_mother_nucleus(self, record: EventRecord, i: int) -> int | None:
        """Index of the nucleus the particle ``i`` was knocked out of, None if there is none."""
        mother_idx = record.particle(i).first_mother
        if mother_idx < 0:
            return None
        mother = record.particle(mother_idx)
        if mother.status != Status.NUCLEON_TARGET:
            return None

        grandmother_idx = mother.first_mother
        if grandmother_idx < 0:
            return None
        if not pdg.is_ion(record.particle(grandmother_idx).pdg):
            return None
        return grandmother_idx

    def _correct(self, record: EventRecord, i: int, b: float):
        p = record.particle(i)
        m = p.mass
        E = p.energy - b
        p_old = p.p4[:3].copy()
        p_old_mag = float(np.linalg.norm(p_old))
        p_new_mag = math.sqrt(max(0.0, E * E - m * m))
        scale = p_new_mag / p_old_mag if p_old_mag > 0.0 else 0.0

        p.p4[:3] = scale * p_old
        p.p4[3] = E

        bindino = np.append((1.0 - scale) * p_old, b)
        record.add_particle(pdg.BINDINO, Status.STABLE_FINAL_STATE, bindino)
        self.log.info(f"Subtracted binding energy {b:.6f} GeV from {p.pdg} at {i}, scale = {scale:.6f}")
