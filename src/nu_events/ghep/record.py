"""
Event record: a growable list of particles with index-based mother links.
"""
from nu_events.utils import pdg
from nu_events.utils.nuclear import ion_mass

from dataclasses import dataclass, field
from enum import IntEnum

import numpy as np


class Status(IntEnum):
    INITIAL_STATE = 0
    STABLE_FINAL_STATE = 1
    INTERMEDIATE_STATE = 2
    DECAYED_STATE = 3
    NUCLEON_TARGET = 11
    HADRON_IN_NUCLEUS = 14


@dataclass
class Particle:
    pdg: int
    status: Status
    p4: np.ndarray = field(default_factory=lambda: np.zeros(4))   # (px, py, pz, E)
    first_mother: int = -1

    def __post_init__(self):
        self.p4 = np.array(self.p4, dtype=float)
        if self.p4.shape != (4,):
            raise ValueError(f"4-momentum must have shape (4,), got {self.p4.shape}")

    @property
    def mass(self) -> float:
        if pdg.is_ion(self.pdg):
            return ion_mass(self.pdg)
        return pdg.mass(self.pdg)

    @property
    def px(self) -> float:
        return float(self.p4[0])

    @property
    def py(self) -> float:
        return float(self.p4[1])

    @property
    def pz(self) -> float:
        return float(self.p4[2])

    @property
    def energy(self) -> float:
        return float(self.p4[3])

    @property
    def momentum(self) -> float:
        return float(np.linalg.norm(self.p4[:3]))


class EventRecord:
    """
    Particles are addressed by their position. ``first_mother`` is an index
    into the same record, -1 when the particle has no mother.
    """

    def __init__(self, interaction=None):
        self.interaction = interaction
        self._particles: list[Particle] = []

    def add_particle(self, pdg_code: int, status: Status, p4, first_mother: int = -1) -> int:
        if first_mother != -1:
            self._check_index(first_mother)
        self._particles.append(Particle(pdg=int(pdg_code), status=Status(status), p4=p4,
                                        first_mother=int(first_mother)))
        return len(self._particles) - 1

    def particle(self, i: int) -> Particle:
        self._check_index(i)
        return self._particles[i]

    def mother(self, i: int) -> Particle | None:
        m = self.particle(i).first_mother
        return None if m < 0 else self.particle(m)

    def _check_index(self, i: int):
        if not 0 <= i < len(self._particles):
            raise IndexError(f"particle index {i} out of range for a record of {len(self._particles)}")

    def __len__(self):
        return len(self._particles)

    def __iter__(self):
        return iter(self._particles)

    @classmethod
    def from_seed(cls, seed) -> "EventRecord":
        """
        Initial state of a selected event: probe, target nucleus (if any) and
        the struck constituent.
        """
        interaction = seed.interaction
        target = interaction.init_state.target
        record = cls(interaction)

        record.add_particle(interaction.init_state.probe_pdg, Status.INITIAL_STATE, seed.probe_p4)

        hit_mass = target.hit_mass
        if target.is_free_nucleon:
            record.add_particle(target.hit_pdg, Status.INITIAL_STATE, (0.0, 0.0, 0.0, hit_mass))
        else:
            M = ion_mass(target.pdg)
            nucleus = record.add_particle(target.pdg, Status.INITIAL_STATE, (0.0, 0.0, 0.0, M))
            status = Status.NUCLEON_TARGET if pdg.is_neutron_or_proton(target.hit_pdg) else Status.INITIAL_STATE
            record.add_particle(target.hit_pdg, status, (0.0, 0.0, 0.0, hit_mass), first_mother=nucleus)
        return record
