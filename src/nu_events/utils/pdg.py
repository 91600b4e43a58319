"""PDG particle codes, masses and code classification helpers."""

ELECTRON = 11
NU_E = 12
MUON = 13
NU_MU = 14
TAU = 15
NU_TAU = 16

PROTON = 2212
NEUTRON = 2112
PI_PLUS = 211
PI_ZERO = 111

# bookkeeping pseudo-particle carrying nuclear binding energy
BINDINO = 2000000002

# masses [GeV]
_MASSES = {
    ELECTRON: 0.000510998950,
    MUON: 0.1056583755,
    TAU: 1.77686,
    NU_E: 0.0,
    NU_MU: 0.0,
    NU_TAU: 0.0,
    PROTON: 0.93827208816,
    NEUTRON: 0.93956542052,
    PI_PLUS: 0.13957039,
    PI_ZERO: 0.1349768,
    BINDINO: 0.0,
}

ELECTRON_MASS = _MASSES[ELECTRON]
MUON_MASS = _MASSES[MUON]
PROTON_MASS = _MASSES[PROTON]
NEUTRON_MASS = _MASSES[NEUTRON]
PION_MASS = _MASSES[PI_PLUS]


def mass(pdg: int) -> float:
    """Return the mass of a (non-ion) particle, antiparticles included."""
    try:
        return _MASSES[abs(int(pdg))]
    except KeyError:
        raise KeyError(f"No mass known for PDG code {pdg}") from None


def ion_pdg(Z: int, A: int) -> int:
    """Ion code in the 10LZZZAAAI convention."""
    if not (0 <= Z <= A) or A < 1:
        raise ValueError(f"Invalid nucleus Z={Z}, A={A}")
    return 1000000000 + Z * 10000 + A * 10


def ion_z(pdg: int) -> int:
    return (int(pdg) // 10000) % 1000


def ion_a(pdg: int) -> int:
    return (int(pdg) // 10) % 1000


def is_ion(pdg: int) -> bool:
    return 1000000000 < int(pdg) < 1999999999


def is_proton(pdg: int) -> bool:
    return int(pdg) == PROTON


def is_neutron(pdg: int) -> bool:
    return int(pdg) == NEUTRON


def is_neutron_or_proton(pdg: int) -> bool:
    return is_proton(pdg) or is_neutron(pdg)


def is_neutrino(pdg: int) -> bool:
    return int(pdg) in (NU_E, NU_MU, NU_TAU)


def is_antineutrino(pdg: int) -> bool:
    return int(pdg) in (-NU_E, -NU_MU, -NU_TAU)


def charged_lepton(neutrino_pdg: int) -> int:
    """Charged lepton produced by a (anti)neutrino in a CC interaction."""
    nu = int(neutrino_pdg)
    if not (is_neutrino(nu) or is_antineutrino(nu)):
        raise ValueError(f"{neutrino_pdg} is not a neutrino code")
    # nu_l -> l-, anti-nu_l -> l+
    return nu - 1 if nu > 0 else nu + 1
