"""
Inverse muon decay (nu_mu + e- -> mu- + nu_e) differential cross section dxsec/dy,
with the 1-loop radiative corrections of Bardin & Dokuchaeva.

Ref: D.Yu.Bardin and V.A.Dokuchaeva, Nucl.Phys.B287:839 (1987)

This is the truly inclusive cross section: the hard bremsstrahlung part is not
subtracted, so it does not describe setups with a photon energy trigger.
"""
from nu_events.errors import ConfigurationError
from nu_events.interaction.interaction import Interaction, ScatteringType
from nu_events.interaction.kinematics import KineVar, Range1D
from nu_events.numerical.integrators import IntegratorBase
from nu_events.numerical.scalar_function import ScalarFunction
from nu_events.utils import pdg
from nu_events.utils.units import ALPHA_EM, GF2
from nu_events.xsec.base import XSecAlgorithm

import math

ME = pdg.ELECTRON_MASS
MMU = pdg.MUON_MASS


class Li2Integrand(ScalarFunction):
    """log(1 - z t) / t, so that Li2(z) = -∫_0^1 dt log(1 - z t) / t."""

    def __init__(self, z: float):
        super().__init__(n_dims=1)
        self.z = float(z)
        self.set_param(0, "t", Range1D(0.0, 1.0))

    def evaluate(self, x):
        t = x[0]
        if t == 0.0:
            return 0.0
        if t * self.z >= 1.0:
            return 0.0
        return math.log(1.0 - self.z * t) / t


class BardinIMD(XSecAlgorithm):
    kinematic_variables = (KineVar.Y,)

    def __init__(self, integrator: IntegratorBase, log=None):
        super().__init__(log=log)
        if integrator is None:
            raise ConfigurationError("BardinIMD needs a numeric integrator for its Li2 terms.")
        self._integrator = integrator

    def weight(self, interaction: Interaction) -> float:
        if not self.valid_process(interaction):
            return 0.0
        if not self.valid_kinematics(interaction):
            return 0.0
        if interaction.kinematics.y is None:
            return 0.0

        E = interaction.init_state.probe_energy
        sig0 = GF2 * ME * E / math.pi
        re = 0.5 * ME / E
        r = (MMU ** 2 / ME ** 2) * re

        # y = (Ev-El)/Ev here but Bardin's y is El/Ev
        y = 1.0 - interaction.kinematics.y

        y_min = r + re
        y_max = min(1.0 + re + r * re / (1.0 + re), 1.0 - 1e-5)   # log(1-y)
        if y < y_min or y > y_max:
            return 0.0

        dsig_dy = 2.0 * sig0 * (1.0 - r + (ALPHA_EM / math.pi) * self.Fa(re, r, y))
        self.log.debug(f"dxsec[1-loop]/dy (Ev = {E}, y = {y}) = {dsig_dy}")

        return dsig_dy * self.scattering_centers(interaction)

    def valid_process(self, interaction: Interaction) -> bool:
        if interaction.skip_process_check:
            return True
        init_state = interaction.init_state
        return (interaction.process.scattering == ScatteringType.IMD
                and init_state.probe_pdg == pdg.NU_MU
                and init_state.target.hit_pdg == pdg.ELECTRON)

    def valid_kinematics(self, interaction: Interaction) -> bool:
        if interaction.skip_kinematic_check:
            return True
        E = interaction.init_state.probe_energy
        s = ME ** 2 + 2.0 * ME * E
        if s < MMU ** 2:
            self.log.debug(f"Ev = {E} (s = {s}) is below threshold (s-min = {MMU ** 2}) for IMD")
            return False
        return True

    def Li2(self, z: float) -> float:
        """Dilogarithm, evaluated with the injected integrator."""
        return -self._integrator.integrate(Li2Integrand(z))

    def Fa(self, re: float, r: float, y: float) -> float:
        y2 = y * y
        rre = r * re
        r_y = r / y
        y_r = y / r
        log = math.log

        fa = (1 - r) * (log(y2 / rre) * log(1 - r_y)
                        + log(y_r) * log(1 - y)
                        - self.Li2(r)
                        + self.Li2(y)
                        + self.Li2((r - y) / (1 - y))
                        + 1.5 * (1 - r) * log(1 - r))

        fa += 0.5 * (1 + 3 * r) * (self.Li2((1 - r_y) / (1 - r))
                                   - self.Li2((y - r) / (1 - r))
                                   - log(y_r) * log((y - r) / (1 - r)))

        fa += (self.P(1, r, y)
               - self.P(2, r, y) * log(r)
               - self.P(3, r, y) * log(re)
               + self.P(4, r, y) * log(y)
               + self.P(5, r, y) * log(1 - y)
               + self.P(6, r, y) * (1 - r_y) * log(1 - r_y))
        return fa

    def P(self, i: int, r: float, y: float) -> float:
        """Polynomial sum_k C(i, k) y^k for k = -3..2."""
        return sum(c * y ** k for k, c in zip(range(-3, 3), _coefficients(i, r)))


def _coefficients(i: int, r: float) -> tuple:
    """C(i, k) for k = -3..2."""
    r2, r3 = r * r, r ** 3
    if i == 1:
        return (-0.19444444 * r3,
                (0.083333333 + 0.29166667 * r) * r2,
                -0.58333333 * r - 0.5 * r2 - r3 / 6.0,
                -1.30555560 + 3.125 * r + 0.375 * r2,
                -0.91666667 - 0.25 * r,
                0.041666667)
    if i == 2:
        return (0.0,
                0.5 * r2,
                0.5 * r - 2.0 * r2,
                0.25 - 0.75 * r + 1.5 * r2,
                0.5,
                0.0)
    if i == 3:
        return (0.16666667 * r3,
                0.25 * r2 * (1 - r),
                r - 0.5 * r2,
                0.66666667,
                0.0,
                0.0)
    if i == 4:
        return (0.0,
                r2,
                r * (1 - 4.0 * r),
                1.5 * r2,
                1.0,
                0.0)
    if i == 5:
        return (0.16666667 * r3,
                -0.25 * r2 * (1 + r),
                0.5 * r * (1 + 3 * r),
                -1.9166667 + 2.25 * r - 1.5 * r2,
                -0.5,
                0.0)
    if i == 6:
        return (0.0,
                0.16666667 * r2,
                -0.25 * r * (r + 0.33333333),
                1.25 * (r + 0.33333333),
                0.5,
                0.0)
    return (0.0,) * 6
