import numpy as np
import matplotlib.pyplot as plt
from nu_events.interaction.interaction import Interaction, Target
from nu_events.interaction.phase_space import KPhaseSpace
from nu_events.utils import pdg

interaction = Interaction.res_cc(Target(Z=6, A=12), pdg.NU_MU, E=2.0)
ps = KPhaseSpace(interaction)
print(f"threshold: {ps.threshold():.4f} GeV")
print(f"W  : {ps.w_limits().as_tuple()}")
print(f"Q2 : {ps.q2_limits().as_tuple()}")
print(f"y  : {ps.y_limits().as_tuple()}")

# allowed (W, Q2) region
w = ps.w_limits()
W = np.linspace(w.min, w.max, 200)
Q2 = np.array([ps.q2_limits_at_w(x).as_tuple() for x in W])

plt.figure(figsize=(6,4))
plt.fill_between(W, Q2[:, 0], Q2[:, 1], alpha=0.4)
plt.xlabel("$W$ [GeV]")
plt.ylabel("$Q^2$ [GeV$^2$]")
plt.title(r"$\nu_\mu$ CC resonance phase space, $E$ = 2 GeV")
plt.grid(True, ls="--", alpha=0.5)
plt.tight_layout()
plt.show()
