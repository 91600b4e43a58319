# Natural units: energies, momenta and masses in GeV, cross sections in GeV^-2.

GEV_TO_MEV = 1.0e3

# (hbar c)^2: 1 GeV^-2 = 0.389379 mb
GEV2_TO_CM2 = 0.389379e-27
CM2_TO_GEV2 = 1.0 / GEV2_TO_CM2

GF = 1.1663787e-5            # Fermi constant [GeV^-2]
GF2 = GF * GF
ALPHA_EM = 1.0 / 137.035999  # fine structure constant
