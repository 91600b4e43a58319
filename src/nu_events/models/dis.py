from nu_events.interaction.interaction import Interaction, ScatteringType
from nu_events.interaction.kinematics import KineVar
from nu_events.utils import pdg
from nu_events.utils.units import GF2
from nu_events.xsec.base import XSecAlgorithm

import math


class DISModel(XSecAlgorithm):
    """
    Leading order parton model d2xsec/dxdy with the Callan–Gross relation 2xF1 = F2:

        d2xsec/dxdy = GF^2 M E / pi * F2(x) * (1 - y + y^2/2 - M x y / 2E)

    F2 is a valence-like toy parametrisation, F2(x) = a * x^b * (1 - x)^c.
    """
    kinematic_variables = (KineVar.X, KineVar.Y)

    def __init__(self, a: float = 1.0, b: float = 0.5, c: float = 3.0, log=None):
        super().__init__(log=log)
        self.a = float(a)
        self.b = float(b)
        self.c = float(c)

    def F2(self, x: float) -> float:
        if x <= 0.0 or x >= 1.0:
            return 0.0
        return self.a * x ** self.b * (1.0 - x) ** self.c

    def weight(self, interaction: Interaction) -> float:
        if not self.valid_process(interaction):
            return 0.0
        if not self.valid_kinematics(interaction):
            return 0.0

        x, y = interaction.kinematics.x, interaction.kinematics.y
        if x is None or y is None:
            return 0.0

        E = interaction.init_state.probe_energy
        M = interaction.init_state.target.hit_mass
        kine = max(0.0, 1.0 - y + 0.5 * y * y - M * x * y / (2.0 * E))

        xsec = GF2 * M * E / math.pi * self.F2(x) * kine
        return xsec * self.scattering_centers(interaction)

    def valid_process(self, interaction: Interaction) -> bool:
        if interaction.skip_process_check:
            return True
        return (interaction.process.scattering == ScatteringType.DIS
                and pdg.is_neutron_or_proton(interaction.init_state.target.hit_pdg))
