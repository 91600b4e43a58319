from nu_events.interaction.kinematics import Kinematics
from nu_events.utils import pdg

from dataclasses import dataclass, field, replace
from enum import Enum


class ScatteringType(Enum):
    QEL = "QEL"     # quasi-elastic
    RES = "RES"     # resonance production
    DIS = "DIS"     # deep inelastic
    IMD = "IMD"     # inverse muon decay
    IBD = "IBD"     # inverse beta decay


class InteractionType(Enum):
    CC = "CC"
    NC = "NC"


@dataclass(frozen=True)
class Target:
    Z: int
    A: int
    hit_pdg: int = pdg.PROTON     # struck constituent (nucleon, or electron for IMD)

    def __post_init__(self):
        if not (0 <= self.Z <= self.A) or self.A < 1:
            raise ValueError(f"Invalid target Z={self.Z}, A={self.A}")

    @property
    def N(self) -> int:
        return self.A - self.Z

    @property
    def pdg(self) -> int:
        return pdg.ion_pdg(self.Z, self.A)

    @property
    def is_free_nucleon(self) -> bool:
        return self.A == 1

    @property
    def hit_mass(self) -> float:
        return pdg.mass(self.hit_pdg)


@dataclass(frozen=True)
class InitialState:
    probe_pdg: int
    probe_p4: tuple     # (px, py, pz, E) [GeV], lab frame, target at rest
    target: Target

    def __post_init__(self):
        p4 = tuple(float(v) for v in self.probe_p4)
        if len(p4) != 4:
            raise ValueError(f"probe 4-momentum must have 4 components, got {len(p4)}")
        object.__setattr__(self, "probe_p4", p4)

    @property
    def probe_energy(self) -> float:
        return self.probe_p4[3]

    @property
    def s(self) -> float:
        """Invariant mass squared of probe + struck constituent at rest."""
        M = self.target.hit_mass
        return M * M + 2.0 * M * self.probe_energy


@dataclass(frozen=True)
class ProcessInfo:
    scattering: ScatteringType
    interaction: InteractionType = InteractionType.CC

    def __str__(self):
        return f"{self.scattering.value};{self.interaction.value}"


@dataclass(frozen=True)
class Interaction:
    """
    Immutable description of one candidate process.
    Kinematic points are explored through copies made with ``with_kinematics``.
    """
    init_state: InitialState
    process: ProcessInfo
    kinematics: Kinematics = field(default_factory=Kinematics)
    skip_process_check: bool = False
    skip_kinematic_check: bool = False
    assume_free_nucleon: bool = False

    # ---------- named constructors ----------
    @classmethod
    def create(cls, scattering: ScatteringType, interaction: InteractionType,
               probe_pdg: int, target: Target, E: float = 0.0, **flags) -> "Interaction":
        init_state = InitialState(probe_pdg=probe_pdg, probe_p4=(0.0, 0.0, E, E), target=target)
        return cls(init_state=init_state, process=ProcessInfo(scattering, interaction), **flags)

    @classmethod
    def qel_cc(cls, target: Target, probe_pdg: int, E: float = 0.0) -> "Interaction":
        return cls.create(ScatteringType.QEL, InteractionType.CC, probe_pdg, target, E)

    @classmethod
    def res_cc(cls, target: Target, probe_pdg: int, E: float = 0.0) -> "Interaction":
        return cls.create(ScatteringType.RES, InteractionType.CC, probe_pdg, target, E)

    @classmethod
    def dis_cc(cls, target: Target, probe_pdg: int, E: float = 0.0) -> "Interaction":
        return cls.create(ScatteringType.DIS, InteractionType.CC, probe_pdg, target, E)

    @classmethod
    def imd(cls, target: Target, E: float = 0.0) -> "Interaction":
        """nu_mu + e- -> mu- + nu_e on the atomic electrons of ``target``."""
        target = replace(target, hit_pdg=pdg.ELECTRON)
        return cls.create(ScatteringType.IMD, InteractionType.CC, pdg.NU_MU, target, E)

    @classmethod
    def ibd(cls, E: float = 0.0) -> "Interaction":
        """anti-nu_e + p -> e+ + n on a free proton."""
        target = Target(Z=1, A=1, hit_pdg=pdg.PROTON)
        return cls.create(ScatteringType.IBD, InteractionType.CC, -pdg.NU_E, target, E)

    # ---------- derived quantities ----------
    @property
    def final_lepton_pdg(self) -> int:
        if self.process.scattering == ScatteringType.IMD:
            return pdg.MUON
        if self.process.interaction == InteractionType.NC:
            return self.init_state.probe_pdg
        return pdg.charged_lepton(self.init_state.probe_pdg)

    @property
    def final_lepton_mass(self) -> float:
        return pdg.mass(self.final_lepton_pdg)

    @property
    def final_hadron_mass(self) -> float:
        """Minimum invariant mass of the recoiling system."""
        scattering = self.process.scattering
        hit = self.init_state.target.hit_pdg
        if scattering == ScatteringType.IMD:
            return 0.0
        if scattering in (ScatteringType.RES, ScatteringType.DIS):
            return self.init_state.target.hit_mass + pdg.PION_MASS
        if self.process.interaction == InteractionType.NC:
            return pdg.mass(hit)
        # CC quasi-elastic: n -> p for neutrinos, p -> n for antineutrinos
        return pdg.PROTON_MASS if pdg.is_neutrino(self.init_state.probe_pdg) else pdg.NEUTRON_MASS

    # ---------- copies ----------
    def with_kinematics(self, kinematics: Kinematics) -> "Interaction":
        return replace(self, kinematics=kinematics)

    def with_probe_p4(self, p4) -> "Interaction":
        return replace(self, init_state=replace(self.init_state, probe_p4=tuple(p4)))

    @property
    def code(self) -> str:
        """Compact identifier, usable as a channel name."""
        t = self.init_state.target
        return f"nu:{self.init_state.probe_pdg};tgt:{t.pdg};N:{t.hit_pdg};proc:{self.process}"
