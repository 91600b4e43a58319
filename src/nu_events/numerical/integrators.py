"""
Numeric integration strategies for ``ScalarFunction`` objects.

Every strategy is selected by name through :func:`make_integrator`, shrinks each
range by a relative ``epsilon`` at both ends (so that endpoint singularities
are never evaluated) and returns 0 for empty domains. Strategies only hold
their configuration, so one instance can serve any number of calls.
"""
from nu_events.errors import ConfigurationError, IntegrationError
from nu_events.interaction.kinematics import Range1D
from nu_events.numerical.scalar_function import ScalarFunction

from abc import ABC, abstractmethod
import logging
import math

import numpy as np
from scipy import integrate


class IntegratorBase(ABC):
    name: str | None = None

    def __init__(self, epsilon: float = 1e-6):
        if not 0.0 <= epsilon < 0.5:
            raise ConfigurationError(f"epsilon must lie in [0, 0.5), got {epsilon}")
        self.epsilon = float(epsilon)
        self.log = logging.getLogger(self.__class__.__module__)

    def integrate(self, function: ScalarFunction, ranges=None) -> float:
        """
        Definite integral of ``function`` over ``ranges``.

        Parameters
        ----------
        function : ScalarFunction
        ranges : sequence of Range1D or (min, max) pairs, optional
            One per dimension. Defaults to the ranges declared on the function.
        """
        prepared = self._prepare_ranges(function, ranges)
        if prepared is None:
            return 0.0

        result = float(self._integrate(function, prepared))
        if not math.isfinite(result):
            raise IntegrationError(
                f"{self.name} integration returned {result} over "
                f"{[r.as_tuple() for r in prepared]}"
            )
        return result

    def _prepare_ranges(self, function: ScalarFunction, ranges):
        if ranges is None:
            ranges = function.ranges
        ranges = [r if isinstance(r, Range1D) else Range1D(*r) for r in ranges]
        if len(ranges) != function.n_dims:
            raise ValueError(
                f"Got {len(ranges)} integration ranges for a function of {function.n_dims} dimensions."
            )

        shrunk = []
        for r in ranges:
            # empty or degenerate domain: nothing to integrate
            if r.is_empty or r.width == 0.0:
                self.log.debug(f"Empty integration range {r.as_tuple()}")
                return None
            shrunk.append(r.shrink(self.epsilon))
        return shrunk

    @abstractmethod
    def _integrate(self, function: ScalarFunction, ranges: list[Range1D]) -> float:
        ...


class AdaptiveQuadIntegrator(IntegratorBase):
    """Adaptive Gauss–Kronrod quadrature (QUADPACK through scipy), nested for n > 1."""
    name = "adaptive"

    def __init__(self, epsilon: float = 1e-6, epsabs: float = 0.0, epsrel: float = 1e-6, limit: int = 200):
        super().__init__(epsilon=epsilon)
        self.epsabs = float(epsabs)
        self.epsrel = float(epsrel)
        self.limit = int(limit)

    def _integrate(self, function, ranges):
        opts = dict(epsabs=self.epsabs, epsrel=self.epsrel, limit=self.limit)
        if len(ranges) == 1:
            r = ranges[0]
            value, _ = integrate.quad(lambda t: function((t,)), r.min, r.max, **opts)
            return value

        # nquad: first range is the innermost variable, matching the argument order
        value, _ = integrate.nquad(
            lambda *x: function(x),
            [r.as_tuple() for r in ranges],
            opts=opts,
        )
        return value


class GaussLegendreIntegrator(IntegratorBase):
    """Fixed-order tensor-product Gauss–Legendre rule."""
    name = "gauss-legendre"

    def __init__(self, epsilon: float = 1e-6, n_points: int = 48):
        super().__init__(epsilon=epsilon)
        if n_points < 1:
            raise ConfigurationError(f"n_points must be >= 1, got {n_points}")
        self.n_points = int(n_points)

    def _integrate(self, function, ranges):
        nodes, weights = np.polynomial.legendre.leggauss(self.n_points)

        # map [-1, 1] onto each range
        axes_x, axes_w = [], []
        for r in ranges:
            half = 0.5 * (r.max - r.min)
            mid = 0.5 * (r.max + r.min)
            axes_x.append(mid + half * nodes)
            axes_w.append(half * weights)

        total = 0.0
        for idx in np.ndindex(*([self.n_points] * len(ranges))):
            w = 1.0
            for d, i in enumerate(idx):
                w *= axes_w[d][i]
            total += w * function([axes_x[d][i] for d, i in enumerate(idx)])
        return total


class SimpsonIntegrator(IntegratorBase):
    """Composite Simpson rule on a regular grid, one axis at a time."""
    name = "simpson"

    def __init__(self, epsilon: float = 1e-6, n_points: int = 101):
        super().__init__(epsilon=epsilon)
        if n_points < 3:
            raise ConfigurationError(f"n_points must be >= 3, got {n_points}")
        # Simpson wants an even number of intervals
        self.n_points = int(n_points) if n_points % 2 == 1 else int(n_points) + 1

    def _integrate(self, function, ranges):
        grids = [np.linspace(r.min, r.max, self.n_points) for r in ranges]
        values = np.empty([self.n_points] * len(ranges), dtype=float)
        for idx in np.ndindex(*values.shape):
            values[idx] = function([grids[d][i] for d, i in enumerate(idx)])

        # integrate out the last axis until a scalar is left
        result = values
        for grid in reversed(grids):
            result = integrate.simpson(result, x=grid, axis=-1)
        return float(result)


INTEGRATORS = {
    cls.name: cls for cls in (AdaptiveQuadIntegrator, GaussLegendreIntegrator, SimpsonIntegrator)
}


def make_integrator(name: str, **params) -> IntegratorBase:
    """Resolve an integration strategy by its configuration name."""
    try:
        cls = INTEGRATORS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown integrator '{name}'. Available: {', '.join(sorted(INTEGRATORS))}"
        ) from None
    try:
        return cls(**params)
    except TypeError as e:
        raise ConfigurationError(f"Bad parameters for integrator '{name}': {e}") from e
