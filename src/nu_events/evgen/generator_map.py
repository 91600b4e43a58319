from nu_events.errors import ConfigurationError
from nu_events.interaction.interaction import Interaction, InteractionType, ProcessInfo, ScatteringType, Target
from nu_events.xsec.base import XSecAlgorithm
from nu_events.xsec.integrator import XSecIntegrator

from collections.abc import Mapping


class InteractionGenerator:
    """
    One interaction channel: a candidate interaction template bound to the
    cross section model that weighs it and the integrator that totals it.
    """

    def __init__(self, probe_pdg: int, target: Target, process: ProcessInfo,
                 model: XSecAlgorithm, xsec_integrator: XSecIntegrator,
                 channel_id: str | None = None, **flags):
        if model is None:
            raise ConfigurationError("An interaction generator needs a cross section model.")
        if xsec_integrator is None:
            raise ConfigurationError("An interaction generator needs a cross section integrator.")
        self.model = model
        self.xsec_integrator = xsec_integrator
        self._template = Interaction.create(
            process.scattering, process.interaction, probe_pdg, target, **flags
        )
        self.channel_id = channel_id if channel_id is not None else self._template.code

    @classmethod
    def for_process(cls, scattering: ScatteringType, probe_pdg: int, target: Target,
                    model: XSecAlgorithm, xsec_integrator: XSecIntegrator,
                    interaction: InteractionType = InteractionType.CC, **kwargs) -> "InteractionGenerator":
        return cls(probe_pdg, target, ProcessInfo(scattering, interaction), model, xsec_integrator, **kwargs)

    @property
    def template(self) -> Interaction:
        return self._template

    def candidate_interaction(self, p4) -> Interaction:
        """Fresh interaction for a probe with 4-momentum ``p4`` = (px, py, pz, E)."""
        return self._template.with_probe_p4(p4)

    def cross_section(self, p4) -> float:
        """Total cross section [GeV^-2] of this channel for the probe ``p4``."""
        return self.xsec_integrator.integrate(self.model, self.candidate_interaction(p4))

    def __repr__(self):
        return f"InteractionGenerator({self.channel_id!r}, model={type(self.model).__name__})"


class InteractionGeneratorMap(Mapping):
    """Ordered channel id -> InteractionGenerator; iteration follows insertion order."""

    def __init__(self, generators=()):
        self._generators: dict[str, InteractionGenerator] = {}
        for generator in generators:
            self.add(generator)

    def add(self, generator: InteractionGenerator, channel_id: str | None = None):
        key = channel_id if channel_id is not None else generator.channel_id
        if key in self._generators:
            raise ValueError(f"Duplicate channel '{key}' in interaction generator map")
        self._generators[key] = generator

    def __getitem__(self, channel_id: str) -> InteractionGenerator:
        return self._generators[channel_id]

    def __iter__(self):
        return iter(self._generators)

    def __len__(self):
        return len(self._generators)
