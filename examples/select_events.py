import sys
from collections import Counter

import numpy as np
from nu_events.config import GeneratorConfig, build_selector, build_xsec_integrator, initialise
from nu_events.evgen.binding import NucBindEnergyAggregator
from nu_events.evgen.driver import EventGenerationDriver
from nu_events.evgen.generator_map import InteractionGenerator, InteractionGeneratorMap
from nu_events.interaction.interaction import ScatteringType, Target
from nu_events.models.dis import DISModel
from nu_events.models.resonance import ResonanceModel
from nu_events.utils import pdg

# python select_events.py [config.yaml]
config = GeneratorConfig.from_file(sys.argv[1]) if len(sys.argv) > 1 else GeneratorConfig(seed=42)
initialise(config)
xsec_integrator = build_xsec_integrator(config.integration)

oxygen_p = Target(Z=8, A=16, hit_pdg=pdg.PROTON)
oxygen_n = Target(Z=8, A=16, hit_pdg=pdg.NEUTRON)
generators = InteractionGeneratorMap([
    InteractionGenerator.for_process(ScatteringType.RES, pdg.NU_MU, oxygen_p, ResonanceModel(), xsec_integrator),
    InteractionGenerator.for_process(ScatteringType.RES, pdg.NU_MU, oxygen_n, ResonanceModel(), xsec_integrator),
    InteractionGenerator.for_process(ScatteringType.DIS, pdg.NU_MU, oxygen_p, DISModel(), xsec_integrator),
    InteractionGenerator.for_process(ScatteringType.DIS, pdg.NU_MU, oxygen_n, DISModel(), xsec_integrator),
])

driver = EventGenerationDriver(generators, build_selector(config.selector), visitors=[NucBindEnergyAggregator()])

E = np.random.default_rng(config.seed).uniform(0.2, 5.0, 200)   # GeV, flat beam
records = driver.generate_many([(0.0, 0.0, e, e) for e in E])

counts = Counter(r.interaction.code for r in records if r is not None)
for channel, n in counts.most_common():
    print(f"{n:5d}  {channel}")
print(f"{sum(r is None for r in records)} probes below every threshold")
