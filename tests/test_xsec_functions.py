import pytest

from nu_events.errors import IntegrationError
from nu_events.interaction.interaction import Interaction, Target
from nu_events.interaction.kinematics import Kinematics, KineVar, Range1D
from nu_events.models.dis import DISModel
from nu_events.models.resonance import ResonanceModel
from nu_events.numerical.integrators import GaussLegendreIntegrator
from nu_events.utils import pdg
from nu_events.xsec import functions
from nu_events.xsec.integrator import XSecIntegrator

carbon = Target(Z=6, A=12)
res = Interaction.res_cc(carbon, pdg.NU_MU, E=2.0)
dis = Interaction.dis_cc(carbon, pdg.NU_MU, E=5.0)


def test_wq2_cuts_give_exact_zero():
    f = functions.D2XSecDWDQ2WQ2Cuts(ResonanceModel(), res, w_cut=Range1D(1.1, 1.3))
    assert f([1.2, 0.2]) > 0.0
    assert f([1.4, 0.2]) == 0.0
    assert f([1.05, 0.2]) == 0.0

    g = functions.D2XSecDWDQ2WQ2Cuts(ResonanceModel(), res, q2_cut=Range1D(0.5, 1.0))
    assert g([1.2, 0.7]) > 0.0
    assert g([1.2, 0.2]) == 0.0


def test_xy_cuts_act_on_derived_q2_and_w():
    f = functions.D2XSecDxDyWQ2Cuts(DISModel(), dis, q2_cut=Range1D(0.0, 0.1))
    # Q2 = 2 M E x y ~ 2.35
    assert f([0.5, 0.5]) == 0.0
    assert functions.D2XSecDxDy(DISModel(), dis)([0.5, 0.5]) > 0.0

    g = functions.D2XSecDxDyWQ2Cuts(DISModel(), dis, w_cut=Range1D(2.5, 3.0))
    assert g([0.5, 0.5]) == 0.0


def test_outside_phase_space_is_zero():
    f = functions.D2XSecDWDQ2(ResonanceModel(), res)
    assert f([0.5, 0.2]) == 0.0     # W below N + pi
    assert f([1.2, 40.0]) == 0.0    # Q2 above kinematic limit

    g = functions.D2XSecDxDy(DISModel(), dis)
    assert g([0.5, 0.001]) == 0.0   # W below N + pi
    assert g([1.5, 0.5]) == 0.0


def test_declared_ranges_follow_phase_space():
    f = functions.D2XSecDWDQ2(ResonanceModel(), res)
    assert f.n_dims == 2
    assert f.param_name(0) == "W"
    assert f.param_name(1) == "Q2"
    assert f.param_range(0).min == pytest.approx(pdg.PROTON_MASS + pdg.PION_MASS)

    at_w = functions.D2XSecDWDQ2AtW(ResonanceModel(), res, W=1.5)
    assert at_w.n_dims == 1
    assert at_w.param_range(0).max < f.param_range(1).max


def test_one_dimensional_slices():
    model = DISModel()
    at_x = functions.D2XSecDxDyAtX(model, dis, x=0.3)
    at_y = functions.D2XSecDxDyAtY(model, dis, y=0.4)
    full = functions.D2XSecDxDy(model, dis)
    assert at_x([0.4]) == pytest.approx(full([0.3, 0.4]))
    assert at_y([0.3]) == pytest.approx(full([0.3, 0.4]))

    rmodel = ResonanceModel()
    at_q2 = functions.D2XSecDWDQ2AtQ2(rmodel, res, Q2=0.3)
    assert at_q2([1.25]) == pytest.approx(functions.D2XSecDWDQ2(rmodel, res)([1.25, 0.3]))


def test_interaction_left_untouched():
    f = functions.D2XSecDxDy(DISModel(), dis)
    f([0.3, 0.4])
    assert f.interaction is dis
    assert dis.kinematics == Kinematics()


class NaNModel(ResonanceModel):
    def weight(self, interaction):
        return float("nan")


def test_nan_weight_raises():
    f = functions.D2XSecDWDQ2(NaNModel(), res)
    with pytest.raises(IntegrationError):
        f([1.2, 0.2])
    # disallowed points never reach the model
    assert f([0.5, 0.2]) == 0.0

    with pytest.raises(IntegrationError):
        XSecIntegrator(GaussLegendreIntegrator(n_points=4)).integrate(NaNModel(), res)


def test_wrong_vector_size():
    f = functions.DXSecDQ2(ResonanceModel(), res)
    assert f.free_variables == (KineVar.Q2,)
    with pytest.raises(ValueError):
        f([0.1, 0.2])
