from nu_events.interaction.interaction import Interaction, ScatteringType
from nu_events.interaction.kinematics import KineVar, Kinematics, Range1D

import math


class KPhaseSpace:
    """
    Kinematic limits of one interaction, with the struck constituent at rest.

    Notation:
        M   : mass of the struck constituent
        ml  : final state lepton mass
        Wmin: lightest allowed recoil system (final nucleon, N+pi, ...)
        s   = M^2 + 2 M E
    """

    def __init__(self, interaction: Interaction):
        self._interaction = interaction
        self._E = interaction.init_state.probe_energy
        self._M = interaction.init_state.target.hit_mass
        self._ml = interaction.final_lepton_mass
        self._Wmin = interaction.final_hadron_mass

    @property
    def interaction(self) -> Interaction:
        return self._interaction

    def threshold(self) -> float:
        """Probe energy below which the process is closed."""
        M = self._M
        return ((self._Wmin + self._ml) ** 2 - M * M) / (2.0 * M)

    def is_above_threshold(self) -> bool:
        return self._E > 0.0 and self._E > self.threshold()

    def limits(self, var: KineVar) -> Range1D:
        if var == KineVar.W:
            return self.w_limits()
        if var == KineVar.Q2:
            return self.q2_limits()
        if var == KineVar.X:
            return self.x_limits()
        if var == KineVar.Y:
            return self.y_limits()
        raise ValueError(f"Unknown kinematic variable {var}")

    def w_limits(self) -> Range1D:
        if not self.is_above_threshold():
            return Range1D.empty()
        W_max = math.sqrt(self._interaction.init_state.s) - self._ml
        if self._has_fixed_recoil():
            W = self._Wmin
            return Range1D(W, W) if W <= W_max else Range1D.empty()
        return Range1D(self._Wmin, W_max)

    def q2_limits(self) -> Range1D:
        """Widest Q2 range, reached at the lowest allowed W."""
        w_lim = self.w_limits()
        if w_lim.is_empty:
            return Range1D.empty()
        return self.q2_limits_at_w(w_lim.min)

    def q2_limits_at_w(self, W: float) -> Range1D:
        if not self.is_above_threshold():
            return Range1D.empty()
        M, ml = self._M, self._ml
        ml2 = ml * ml
        s = self._interaction.init_state.s
        sqs = math.sqrt(s)

        # centre-of-mass energies of the probe and of the outgoing lepton
        Ev_cm = 0.5 * (s - M * M) / sqs
        El_cm = 0.5 * (s + ml2 - W * W) / sqs
        if El_cm * El_cm < ml2 or El_cm < 0.0:
            return Range1D.empty()
        pl_cm = math.sqrt(max(0.0, El_cm * El_cm - ml2))

        Q2_min = -ml2 + 2.0 * Ev_cm * (El_cm - pl_cm)
        Q2_max = -ml2 + 2.0 * Ev_cm * (El_cm + pl_cm)
        return Range1D(max(0.0, Q2_min), Q2_max)

    def x_limits(self) -> Range1D:
        if not self.is_above_threshold():
            return Range1D.empty()
        return Range1D(0.0, 1.0)

    def y_limits(self) -> Range1D:
        if not self.is_above_threshold():
            return Range1D.empty()
        M, E = self._M, self._E
        y_min = max(0.0, (self._Wmin ** 2 - M * M) / (2.0 * M * E))
        y_max = 1.0 - self._ml / E
        if self._has_fixed_recoil():
            # W is fixed, so y follows Q2: W^2 = M^2 + 2 M E y - Q2
            W = self._Wmin
            q2_lim = self.q2_limits_at_w(W)
            if q2_lim.is_empty:
                return Range1D.empty()
            y_min = max(y_min, (q2_lim.min + W * W - M * M) / (2.0 * M * E))
            y_max = min(y_max, (q2_lim.max + W * W - M * M) / (2.0 * M * E))
        return Range1D(y_min, y_max)

    def xy_to_wq2(self, x: float, y: float):
        """Map (x, y) onto (W, Q2); W is None when the point is unphysical."""
        M, E = self._M, self._E
        Q2 = 2.0 * M * E * x * y
        W2 = M * M + 2.0 * M * E * y * (1.0 - x)
        if W2 < 0.0:
            return None, Q2
        return math.sqrt(W2), Q2

    def is_allowed(self, kinematics: Kinematics) -> bool:
        """True when every set variable of ``kinematics`` lies in the allowed region."""
        if not self.is_above_threshold():
            return False
        W, Q2 = kinematics.W, kinematics.Q2

        if W is not None and not self.w_limits().contains(W):
            return False
        if Q2 is not None:
            q2_lim = self.q2_limits_at_w(W) if W is not None else self.q2_limits()
            if not q2_lim.contains(Q2):
                return False
        if kinematics.x is not None and not self.x_limits().contains(kinematics.x):
            return False
        if kinematics.y is not None and not self.y_limits().contains(kinematics.y):
            return False
        return True

    def _has_fixed_recoil(self) -> bool:
        return self._interaction.process.scattering not in (ScatteringType.RES, ScatteringType.DIS)
