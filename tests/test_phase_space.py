import math

import pytest

from nu_events.interaction.interaction import Interaction, Target
from nu_events.interaction.kinematics import Kinematics, KineVar
from nu_events.interaction.phase_space import KPhaseSpace
from nu_events.utils import pdg

carbon = Target(Z=6, A=12)


def test_imd_threshold():
    ps = KPhaseSpace(Interaction.imd(carbon, E=20.0))
    # (m_mu^2 - m_e^2) / 2 m_e
    assert ps.threshold() == pytest.approx(10.92, abs=0.01)
    assert ps.is_above_threshold()
    assert not KPhaseSpace(Interaction.imd(carbon, E=10.0)).is_above_threshold()


def test_ibd_threshold():
    ps = KPhaseSpace(Interaction.ibd(E=0.01))
    assert ps.threshold() == pytest.approx(1.806e-3, abs=2e-6)


def test_res_w_limits():
    below = KPhaseSpace(Interaction.res_cc(carbon, pdg.NU_MU, E=0.2))
    assert not below.is_above_threshold()
    assert below.w_limits().is_empty
    assert below.y_limits().is_empty

    ps = KPhaseSpace(Interaction.res_cc(carbon, pdg.NU_MU, E=2.0))
    w = ps.w_limits()
    assert w.min == pytest.approx(pdg.PROTON_MASS + pdg.PION_MASS)
    assert w.min < w.max


def test_q2_limits_ordered():
    ps = KPhaseSpace(Interaction.res_cc(carbon, pdg.NU_MU, E=2.0))
    w = ps.w_limits()
    for W in (w.min, 0.5 * (w.min + w.max), w.max - 1e-3):
        q2 = ps.q2_limits_at_w(W)
        assert 0.0 <= q2.min <= q2.max
    # widest range at the lowest W
    assert ps.q2_limits().width >= ps.q2_limits_at_w(0.5 * (w.min + w.max)).width


def test_xy_mapping():
    E = 5.0
    ps = KPhaseSpace(Interaction.dis_cc(carbon, pdg.NU_MU, E=E))
    M = pdg.PROTON_MASS
    W, Q2 = ps.xy_to_wq2(0.3, 0.4)
    assert Q2 == pytest.approx(2 * M * E * 0.3 * 0.4)
    assert W == pytest.approx(math.sqrt(M * M + 2 * M * E * 0.4 * 0.7))

    y = ps.y_limits()
    assert 0.0 <= y.min < y.max <= 1.0
    assert ps.limits(KineVar.X).as_tuple() == (0.0, 1.0)


def test_is_allowed():
    ps = KPhaseSpace(Interaction.res_cc(carbon, pdg.NU_MU, E=2.0))
    assert ps.is_allowed(Kinematics(W=1.2, Q2=0.2))
    assert not ps.is_allowed(Kinematics(W=0.9, Q2=0.2))
    assert not ps.is_allowed(Kinematics(W=1.2, Q2=50.0))


def test_imd_y_range_follows_kinematics():
    me, mmu = pdg.ELECTRON_MASS, pdg.MUON_MASS
    for E in (11.5, 20.0, 100.0):
        y = KPhaseSpace(Interaction.imd(carbon, E=E)).y_limits()
        # lowest muon energy (m_mu^2 + m_e^2) / 2 m_e, up to O(m_e/E)
        y_max = 1.0 - mmu ** 2 / (2.0 * me * E) - me / (2.0 * E)
        assert 0.0 <= y.min < y.max
        assert y.max == pytest.approx(y_max, abs=1e-3)
        assert y.max < 1.0 - mmu / E


def test_qel_y_range_matches_q2_range():
    interaction = Interaction.qel_cc(Target(Z=6, A=12, hit_pdg=pdg.NEUTRON), pdg.NU_MU, E=1.0)
    ps = KPhaseSpace(interaction)
    M, W = pdg.NEUTRON_MASS, pdg.PROTON_MASS
    q2 = ps.q2_limits()
    y = ps.y_limits()
    assert y.max == pytest.approx((q2.max + W * W - M * M) / (2.0 * M * 1.0))
    assert ps.is_allowed(Kinematics(y=0.5 * (y.min + y.max)))
