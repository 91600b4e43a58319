from nu_events.interaction.interaction import Interaction, ScatteringType
from nu_events.interaction.kinematics import KineVar
from nu_events.utils import pdg
from nu_events.utils.units import GF2
from nu_events.xsec.base import XSecAlgorithm

import math


class ResonanceModel(XSecAlgorithm):
    """
    Single resonance toy model, d2xsec/dWdQ2.

    A non-relativistic Breit–Wigner in W times a dipole form factor in Q2,
    damped linearly as the energy transfer approaches the probe energy.

    Parameters
    ----------
    mass, width : float
        Resonance mass and width [GeV], Delta(1232) by default.
    ma : float
        Axial mass of the dipole form factor [GeV].
    norm : float
        Overall dimensionless normalisation.
    """
    kinematic_variables = (KineVar.W, KineVar.Q2)

    def __init__(self, mass: float = 1.232, width: float = 0.117, ma: float = 1.12,
                 norm: float = 1.0, log=None):
        super().__init__(log=log)
        if width <= 0.0 or mass <= 0.0 or ma <= 0.0:
            raise ValueError(f"mass, width and ma must be > 0, got {mass}, {width}, {ma}")
        self.mass = float(mass)
        self.width = float(width)
        self.ma = float(ma)
        self.norm = float(norm)

    def breit_wigner(self, W: float) -> float:
        """Breit–Wigner normalised to unit area over W."""
        g = self.width
        return (g / (2.0 * math.pi)) / ((W - self.mass) ** 2 + 0.25 * g * g)

    def dipole(self, Q2: float) -> float:
        return 1.0 / (1.0 + Q2 / self.ma ** 2) ** 2

    def weight(self, interaction: Interaction) -> float:
        if not self.valid_process(interaction):
            return 0.0
        if not self.valid_kinematics(interaction):
            return 0.0

        W, Q2 = interaction.kinematics.W, interaction.kinematics.Q2
        if W is None or Q2 is None:
            return 0.0

        E = interaction.init_state.probe_energy
        M = interaction.init_state.target.hit_mass
        nu = (W * W - M * M + Q2) / (2.0 * M)   # energy transfer
        damping = max(0.0, 1.0 - nu / E)

        xsec = self.norm * GF2 / (2.0 * math.pi) * self.breit_wigner(W) * self.dipole(Q2) ** 2 * damping
        return xsec * self.scattering_centers(interaction)

    def valid_process(self, interaction: Interaction) -> bool:
        if interaction.skip_process_check:
            return True
        return (interaction.process.scattering == ScatteringType.RES
                and pdg.is_neutron_or_proton(interaction.init_state.target.hit_pdg))
