import numpy as np
import matplotlib.pyplot as plt
from nu_events.interaction.interaction import Interaction, Target
from nu_events.models.imd import BardinIMD
from nu_events.numerical.integrators import make_integrator
from nu_events.utils.units import GEV2_TO_CM2
from nu_events.xsec.integrator import XSecIntegrator

# IMD on the atomic electrons of carbon
carbon = Target(Z=6, A=12)
imd = BardinIMD(integrator=make_integrator("adaptive"))
xsec_integrator = XSecIntegrator(make_integrator("gauss-legendre", n_points=32))

E = np.linspace(11.0, 100.0, 40)   # GeV
xsec = np.array([xsec_integrator.integrate(imd, Interaction.imd(carbon, E=e)) for e in E])

plt.figure(figsize=(6,4))
plt.plot(E, xsec * GEV2_TO_CM2 / E, lw=2)
plt.xlabel("Neutrino energy $E$ [GeV]")
plt.ylabel(r"$\sigma / E$ [cm$^2$/GeV]")
plt.title(r"$\nu_\mu e^- \to \mu^- \nu_e$ on C12, 1-loop")
plt.grid(True, ls="--", alpha=0.5)
plt.tight_layout()
plt.show()
