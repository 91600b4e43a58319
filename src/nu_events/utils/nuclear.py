"""
Nuclear binding energies from the semi-empirical (Bethe–Weizsäcker) mass formula.
Coefficients in GeV.
"""
from nu_events.utils import pdg

A_VOLUME = 15.75e-3
A_SURFACE = 17.8e-3
A_COULOMB = 0.711e-3
A_ASYMMETRY = 23.7e-3
A_PAIRING = 11.18e-3


def binding_energy(Z: int, A: int) -> float:
    """Total binding energy B(A, Z) [GeV], clamped at 0 (free nucleons are unbound)."""
    if A <= 1:
        return 0.0
    N = A - Z
    B = (A_VOLUME * A
         - A_SURFACE * A ** (2.0 / 3.0)
         - A_COULOMB * Z * (Z - 1) / A ** (1.0 / 3.0)
         - A_ASYMMETRY * (N - Z) ** 2 / A)

    # pairing term: + even-even, - odd-odd
    if Z % 2 == 0 and N % 2 == 0:
        B += A_PAIRING / A ** 0.5
    elif Z % 2 == 1 and N % 2 == 1:
        B -= A_PAIRING / A ** 0.5

    return max(0.0, B)


def binding_energy_last_nucleon(target) -> float:
    """
    Separation energy of the most loosely bound nucleon, B(A, Z) - B(A-1, Z).
    Depends only on the target nucleus, not on the struck nucleon.
    """
    Z, A = target.Z, target.A
    if A <= 1:
        return 0.0
    return max(0.0, binding_energy(Z, A) - binding_energy(Z, A - 1))


def ion_mass(ion_code: int) -> float:
    Z, A = pdg.ion_z(ion_code), pdg.ion_a(ion_code)
    return Z * pdg.PROTON_MASS + (A - Z) * pdg.NEUTRON_MASS - binding_energy(Z, A)
