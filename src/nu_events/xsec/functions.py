"""
Cross section models exported as scalar functions of their free kinematic variables.

The model and the interaction stay untouched: every evaluation builds a copy of
the interaction at the requested phase space point. Points outside the allowed
region, or outside the configured cuts, evaluate to exactly 0.
"""
from nu_events.errors import IntegrationError
from nu_events.interaction.interaction import Interaction
from nu_events.interaction.kinematics import KineVar, Range1D
from nu_events.interaction.phase_space import KPhaseSpace
from nu_events.numerical.scalar_function import ScalarFunction
from nu_events.xsec.base import XSecAlgorithm

import math


class XSecFunc(ScalarFunction):
    free_variables: tuple[KineVar, ...] = ()

    def __init__(self, model: XSecAlgorithm, interaction: Interaction):
        super().__init__(n_dims=len(self.free_variables))
        self._model = model
        self._interaction = interaction
        self._phase_space = KPhaseSpace(interaction)
        self._cuts: dict[KineVar, Range1D] = {}
        for i, var in enumerate(self.free_variables):
            self.set_param(i, var.value, self._phase_space.limits(var))

    @property
    def model(self) -> XSecAlgorithm:
        return self._model

    @property
    def interaction(self) -> Interaction:
        return self._interaction

    @property
    def cuts(self) -> dict:
        return dict(self._cuts)

    def evaluate(self, x):
        values = self._kinematic_point(x)
        if values is None:
            return 0.0

        kinematics = self._interaction.kinematics.with_values(values)
        if not self._phase_space.is_allowed(kinematics):
            return 0.0
        if not self._passes_cuts(kinematics):
            return 0.0

        point = self._interaction.with_kinematics(kinematics)
        if not self._model.valid_kinematics(point):
            return 0.0
        w = float(self._model.weight(point))
        if math.isnan(w):
            raise IntegrationError(f"{type(self._model).__name__} returned NaN at {kinematics}")
        return w if w > 0.0 else 0.0

    def _kinematic_point(self, x):
        """Map the input vector onto {KineVar: value}; None for an unphysical point."""
        return dict(zip(self.free_variables, x))

    def _passes_cuts(self, kinematics) -> bool:
        for var, cut in self._cuts.items():
            value = kinematics.get(var)
            if value is not None and not cut.contains(value):
                return False
        return True


class XYFunc(XSecFunc):
    """Base for the (x, y) slices; W and Q2 are derived and attached to every point."""

    def _xy_point(self, x: float, y: float):
        W, Q2 = self._phase_space.xy_to_wq2(x, y)
        if W is None:
            return None
        return {KineVar.X: x, KineVar.Y: y, KineVar.Q2: Q2, KineVar.W: W}


# ---------- 2-D ----------
class D2XSecDxDy(XYFunc):
    """d2xsec/dxdy = f(x, y) at fixed E."""
    free_variables = (KineVar.X, KineVar.Y)

    def _kinematic_point(self, x):
        return self._xy_point(x[0], x[1])


class D2XSecDxDyWQ2Cuts(D2XSecDxDy):
    """d2xsec/dxdy = f(x, y) at fixed E, vanishing outside the W and Q2 cuts."""

    def __init__(self, model, interaction, w_cut: Range1D | None = None, q2_cut: Range1D | None = None):
        super().__init__(model, interaction)
        if w_cut is not None:
            self._cuts[KineVar.W] = w_cut
        if q2_cut is not None:
            self._cuts[KineVar.Q2] = q2_cut


class D2XSecDWDQ2(XSecFunc):
    """d2xsec/dWdQ2 = f(W, Q2) at fixed E."""
    free_variables = (KineVar.W, KineVar.Q2)


class D2XSecDWDQ2WQ2Cuts(D2XSecDWDQ2):
    """d2xsec/dWdQ2 = f(W, Q2) at fixed E, vanishing outside the W and Q2 cuts."""

    def __init__(self, model, interaction, w_cut: Range1D | None = None, q2_cut: Range1D | None = None):
        super().__init__(model, interaction)
        if w_cut is not None:
            self._cuts[KineVar.W] = w_cut
        if q2_cut is not None:
            self._cuts[KineVar.Q2] = q2_cut


# ---------- 1-D ----------
class DXSecDQ2(XSecFunc):
    """dxsec/dQ2 = f(Q2) at fixed E."""
    free_variables = (KineVar.Q2,)


class DXSecDy(XSecFunc):
    """dxsec/dy = f(y) at fixed E."""
    free_variables = (KineVar.Y,)


class D2XSecDxDyAtX(XYFunc):
    """d2xsec/dxdy = f(y) at fixed E and x."""
    free_variables = (KineVar.Y,)

    def __init__(self, model, interaction, x: float):
        super().__init__(model, interaction)
        self._x = float(x)

    def _kinematic_point(self, x):
        return self._xy_point(self._x, x[0])


class D2XSecDxDyAtY(XYFunc):
    """d2xsec/dxdy = f(x) at fixed E and y."""
    free_variables = (KineVar.X,)

    def __init__(self, model, interaction, y: float):
        super().__init__(model, interaction)
        self._y = float(y)

    def _kinematic_point(self, x):
        return self._xy_point(x[0], self._y)


class D2XSecDWDQ2AtW(XSecFunc):
    """d2xsec/dWdQ2 = f(Q2) at fixed E and W."""
    free_variables = (KineVar.Q2,)

    def __init__(self, model, interaction, W: float):
        super().__init__(model, interaction)
        self._W = float(W)
        self.set_param(0, KineVar.Q2.value, self._phase_space.q2_limits_at_w(self._W))

    def _kinematic_point(self, x):
        return {KineVar.W: self._W, KineVar.Q2: x[0]}


class D2XSecDWDQ2AtQ2(XSecFunc):
    """d2xsec/dWdQ2 = f(W) at fixed E and Q2."""
    free_variables = (KineVar.W,)

    def __init__(self, model, interaction, Q2: float):
        super().__init__(model, interaction)
        self._Q2 = float(Q2)

    def _kinematic_point(self, x):
        return {KineVar.W: x[0], KineVar.Q2: self._Q2}
