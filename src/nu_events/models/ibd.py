from nu_events.interaction.interaction import Interaction, ScatteringType
from nu_events.interaction.kinematics import KineVar
from nu_events.interaction.phase_space import KPhaseSpace
from nu_events.utils import pdg
from nu_events.utils.units import CM2_TO_GEV2, GEV_TO_MEV
from nu_events.xsec.base import XSecAlgorithm

import numpy as np


class IBDModel(XSecAlgorithm):
    """
    Inverse beta decay, anti-nu_e + p -> e+ + n, as dxsec/dQ2.
    Total cross-section: Vogel–Beacom approximate analytical form,
    spread uniformly over the allowed Q2 range.
    """
    kinematic_variables = (KineVar.Q2,)

    def __init__(self, log=None):
        super().__init__(log=log)
        # physical constants in MeV
        self.me = 0.511      # electron mass
        self.delta = 1.293   # neutron–proton mass difference
        self.threshold = 1.806

    def sigma(self, E_nu):
        """
        Total cross-section [GeV^-2] at E_nu [GeV].
        σ ≈ 0.0952e-42 cm² × (Ee p_e / MeV²), Ee = Eν − Δ, p_e = √(Ee² − me²)
        """
        E_nu = np.asarray(E_nu, dtype=float) * GEV_TO_MEV
        Ee = np.clip(E_nu - self.delta, 0, None)
        pe = np.sqrt(np.clip(Ee**2 - self.me**2, 0, None))
        sigma = 0.0952e-42 * Ee * pe * CM2_TO_GEV2
        return np.where(E_nu < self.threshold, 0.0, sigma)

    def weight(self, interaction: Interaction) -> float:
        if not self.valid_process(interaction):
            return 0.0
        if not self.valid_kinematics(interaction):
            return 0.0

        Q2 = interaction.kinematics.Q2
        q2_lim = KPhaseSpace(interaction).q2_limits()
        if Q2 is None or not q2_lim.contains(Q2) or q2_lim.width <= 0.0:
            return 0.0

        E = interaction.init_state.probe_energy
        return float(self.sigma(E)) / q2_lim.width

    def valid_process(self, interaction: Interaction) -> bool:
        if interaction.skip_process_check:
            return True
        init_state = interaction.init_state
        return (interaction.process.scattering == ScatteringType.IBD
                and init_state.probe_pdg == -pdg.NU_E
                and init_state.target.hit_pdg == pdg.PROTON)
