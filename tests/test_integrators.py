import math

import numpy as np
import pytest

from nu_events.errors import ConfigurationError, IntegrationError
from nu_events.interaction.kinematics import Range1D
from nu_events.numerical.integrators import (
    AdaptiveQuadIntegrator, GaussLegendreIntegrator, INTEGRATORS, SimpsonIntegrator, make_integrator
)
from nu_events.numerical.scalar_function import CallableFunction

strategies = [AdaptiveQuadIntegrator(), GaussLegendreIntegrator(), SimpsonIntegrator()]


@pytest.mark.parametrize("integrator", strategies, ids=lambda i: i.name)
def test_zero_function(integrator):
    f = CallableFunction(lambda x: 0.0)
    assert integrator.integrate(f, [Range1D(0.0, 3.0)]) == 0.0

    f2 = CallableFunction(lambda x, y: 0.0, n_dims=2)
    assert integrator.integrate(f2, [Range1D(0.0, 1.0), Range1D(-1.0, 1.0)]) == 0.0


@pytest.mark.parametrize("integrator", strategies, ids=lambda i: i.name)
def test_polynomial(integrator):
    f = CallableFunction(lambda x: 3.0 * x * x)
    assert integrator.integrate(f, [(0.0, 2.0)]) == pytest.approx(8.0, rel=1e-4)

    f2 = CallableFunction(lambda x, y: x * y, n_dims=2)
    assert integrator.integrate(f2, [(0.0, 1.0), (0.0, 2.0)]) == pytest.approx(1.0, rel=1e-4)


@pytest.mark.parametrize("integrator", strategies, ids=lambda i: i.name)
def test_empty_domain(integrator):
    calls = []

    def f(x):
        calls.append(x)
        return 1.0

    fct = CallableFunction(f)
    assert integrator.integrate(fct, [Range1D(0.7, 0.2)]) == 0.0
    assert integrator.integrate(fct, [Range1D(0.5, 0.5)]) == 0.0
    assert calls == []


def test_declared_ranges():
    f = CallableFunction(lambda x: 1.0)
    f.set_param(0, "t", Range1D(1.0, 4.0))
    assert AdaptiveQuadIntegrator().integrate(f) == pytest.approx(3.0, rel=1e-5)

    g = CallableFunction(lambda x: 1.0)
    with pytest.raises(ValueError):
        AdaptiveQuadIntegrator().integrate(g)


def test_endpoint_singularity():
    # log(1 - t)/t diverges at t = 1; never evaluated thanks to the epsilon shrink
    def f(t):
        if t >= 1.0:
            raise ZeroDivisionError("evaluated at the singular endpoint")
        return math.log(1.0 - t) / t

    value = AdaptiveQuadIntegrator(epsilon=1e-8).integrate(CallableFunction(f), [(0.0, 1.0)])
    assert value == pytest.approx(-math.pi ** 2 / 6.0, rel=1e-4)


def test_non_finite_result():
    f = CallableFunction(lambda x: float("nan"))
    with pytest.raises(IntegrationError):
        GaussLegendreIntegrator(n_points=4).integrate(f, [(0.0, 1.0)])


def test_dimension_mismatch():
    f = CallableFunction(lambda x, y: x + y, n_dims=2)
    with pytest.raises(ValueError):
        GaussLegendreIntegrator().integrate(f, [(0.0, 1.0)])
    with pytest.raises(ValueError):
        f([0.5])


def test_reentrant():
    integrator = GaussLegendreIntegrator(n_points=16)
    f = CallableFunction(lambda x: x)
    g = CallableFunction(lambda x: np.cos(x))
    a1 = integrator.integrate(f, [(0.0, 1.0)])
    b = integrator.integrate(g, [(0.0, np.pi / 2)])
    a2 = integrator.integrate(f, [(0.0, 1.0)])
    assert a1 == a2
    assert b == pytest.approx(1.0, rel=1e-5)


def test_registry():
    assert set(INTEGRATORS) == {"adaptive", "gauss-legendre", "simpson"}
    integrator = make_integrator("gauss-legendre", n_points=12, epsilon=1e-7)
    assert isinstance(integrator, GaussLegendreIntegrator)
    assert integrator.n_points == 12
    assert integrator.epsilon == 1e-7

    with pytest.raises(ConfigurationError):
        make_integrator("vegas")
    with pytest.raises(ConfigurationError):
        make_integrator("adaptive", n_points=10)
    with pytest.raises(ConfigurationError):
        make_integrator("adaptive", epsilon=0.7)


def test_simpson_odd_grid():
    assert SimpsonIntegrator(n_points=10).n_points == 11
