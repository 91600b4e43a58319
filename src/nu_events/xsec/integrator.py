from nu_events.errors import ConfigurationError
from nu_events.interaction.interaction import Interaction
from nu_events.interaction.kinematics import KineVar, Range1D
from nu_events.interaction.phase_space import KPhaseSpace
from nu_events.numerical.integrators import IntegratorBase
from nu_events.xsec import functions
from nu_events.xsec.base import XSecAlgorithm

import logging

_XY = (KineVar.X, KineVar.Y)
_WQ2 = (KineVar.W, KineVar.Q2)
_CUTTABLE = (KineVar.W, KineVar.Q2)


class XSecIntegrator:
    """
    Reduces a differential cross section to a total cross section.

    The slice to integrate is decided from the model's differential variables
    and the variables already fixed in the interaction's kinematics. W and Q2
    cuts restrict the integration bounds of free W/Q2 axes and zero the
    integrand where they act on derived quantities.
    """

    def __init__(self, integrator: IntegratorBase, cuts: dict | None = None,
                 log: logging.Logger | None = None):
        if integrator is None:
            raise ConfigurationError("XSecIntegrator requires a numeric integrator.")
        if not isinstance(integrator, IntegratorBase):
            raise ConfigurationError(
                f"Expected an IntegratorBase, got {type(integrator).__name__}."
            )
        self.integrator = integrator
        self.cuts: dict[KineVar, Range1D] = {}
        for var, cut in (cuts or {}).items():
            if var not in _CUTTABLE:
                raise ConfigurationError(f"Cuts are supported on W and Q2 only, got {var}.")
            self.cuts[var] = cut if isinstance(cut, Range1D) else Range1D(*cut)
        self.log = log if log is not None else logging.getLogger(self.__class__.__module__)

    @property
    def w_cut(self) -> Range1D | None:
        return self.cuts.get(KineVar.W)

    @property
    def q2_cut(self) -> Range1D | None:
        return self.cuts.get(KineVar.Q2)

    def integrate(self, model: XSecAlgorithm, interaction: Interaction) -> float:
        """Total cross section [GeV^-2], 0 when the process is closed."""
        if not interaction.skip_process_check and not model.valid_process(interaction):
            self.log.debug(f"{interaction.code}: process not handled by {type(model).__name__}")
            return 0.0

        phase_space = KPhaseSpace(interaction)
        if not phase_space.is_above_threshold():
            self.log.debug(
                f"{interaction.code}: E = {interaction.init_state.probe_energy} "
                f"below threshold {phase_space.threshold()}"
            )
            return 0.0

        # cuts on variables held fixed decide on their own
        for var, cut in self.cuts.items():
            value = interaction.kinematics.get(var)
            if value is not None and not cut.contains(value):
                return 0.0

        function = self.make_function(model, interaction)
        ranges = [self._integration_range(var, function, phase_space)
                  for var in function.free_variables]
        if any(r.is_empty for r in ranges):
            self.log.debug(f"{interaction.code}: empty integration domain {[r.as_tuple() for r in ranges]}")
            return 0.0

        xsec = self.integrator.integrate(function, ranges)
        self.log.debug(f"{interaction.code}: xsec = {xsec} GeV^-2")
        return max(0.0, xsec)

    def make_function(self, model: XSecAlgorithm, interaction: Interaction) -> functions.XSecFunc:
        """Pick the adapter matching the free and fixed kinematic variables."""
        variables = tuple(model.kinematic_variables)
        kinematics = interaction.kinematics
        free = tuple(v for v in variables if not kinematics.is_set(v))
        cut = bool(self.cuts)

        if variables == _XY:
            if free == _XY:
                if cut:
                    return functions.D2XSecDxDyWQ2Cuts(model, interaction, self.w_cut, self.q2_cut)
                return functions.D2XSecDxDy(model, interaction)
            if free == (KineVar.Y,):
                return functions.D2XSecDxDyAtX(model, interaction, x=kinematics.x)
            if free == (KineVar.X,):
                return functions.D2XSecDxDyAtY(model, interaction, y=kinematics.y)

        elif variables == _WQ2:
            if free == _WQ2:
                if cut:
                    return functions.D2XSecDWDQ2WQ2Cuts(model, interaction, self.w_cut, self.q2_cut)
                return functions.D2XSecDWDQ2(model, interaction)
            if free == (KineVar.Q2,):
                return functions.D2XSecDWDQ2AtW(model, interaction, W=kinematics.W)
            if free == (KineVar.W,):
                return functions.D2XSecDWDQ2AtQ2(model, interaction, Q2=kinematics.Q2)

        elif variables == (KineVar.Q2,) and free == variables:
            return functions.DXSecDQ2(model, interaction)

        elif variables == (KineVar.Y,) and free == variables:
            return functions.DXSecDy(model, interaction)

        raise ConfigurationError(
            f"No cross section function for d/d{[v.value for v in variables]} "
            f"with free variables {[v.value for v in free]}."
        )

    def _integration_range(self, var: KineVar, function: functions.XSecFunc,
                           phase_space: KPhaseSpace) -> Range1D:
        if isinstance(function, functions.D2XSecDWDQ2AtW):
            limits = function.param_range(0)
        else:
            limits = phase_space.limits(var)
        # (x, y) adapters apply cuts point by point on the derived W, Q2
        if var in self.cuts and not isinstance(function, functions.XYFunc):
            limits = limits.intersect(self.cuts[var])
        return limits
