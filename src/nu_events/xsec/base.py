from nu_events.interaction.interaction import Interaction
from nu_events.interaction.kinematics import KineVar
from nu_events.interaction.phase_space import KPhaseSpace
from nu_events.utils import pdg

from abc import ABC, abstractmethod
import logging


class XSecAlgorithm(ABC):
    """
    Differential cross section model, used by the core as an opaque weight provider.

    ``kinematic_variables`` names the variables the differential is taken in,
    e.g. (KineVar.W, KineVar.Q2) for d2xsec/dWdQ2.
    """
    kinematic_variables: tuple[KineVar, ...] = ()

    def __init__(self, log: logging.Logger | None = None):
        self.log = log if log is not None else logging.getLogger(self.__class__.__module__)

    @abstractmethod
    def weight(self, interaction: Interaction) -> float:
        """Differential cross section at the interaction's kinematic point, 0 when forbidden."""
        ...

    def valid_process(self, interaction: Interaction) -> bool:
        return True

    def valid_kinematics(self, interaction: Interaction) -> bool:
        if interaction.skip_kinematic_check:
            return True
        return KPhaseSpace(interaction).is_above_threshold()

    @staticmethod
    def scattering_centers(interaction: Interaction) -> int:
        """Number of targets of the struck kind inside the nucleus."""
        target = interaction.init_state.target
        if interaction.assume_free_nucleon or target.is_free_nucleon:
            return 1
        if target.hit_pdg == pdg.NEUTRON:
            return target.N
        # protons and atomic electrons
        return target.Z
