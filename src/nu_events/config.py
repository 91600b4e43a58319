"""
Run configuration, read from a json or yaml file.

Example (yaml):

    seed: 42
    log_level: INFO
    integration:
      algorithm: adaptive
      epsilon: 1.0e-6
      params: {epsrel: 1.0e-5}
      cuts:
        W: [1.08, 2.0]
        Q2: [0.0, 4.0]
    selector:
      use_cached_tabulation: true
      tabulation_file: xsec.npz
"""
from nu_events.errors import ConfigurationError
from nu_events.evgen.selector import InteractionSelector
from nu_events.globals.random_source import RandomSource
from nu_events.interaction.kinematics import KineVar, Range1D
from nu_events.numerical.integrators import IntegratorBase, make_integrator
from nu_events.xsec.integrator import XSecIntegrator
from nu_events.xsec.table import XSecTable

from dataclasses import dataclass, field
from pathlib import Path
import json
import logging

import yaml

logger = logging.getLogger(__name__)


def _mapping(value, name: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"'{name}' must be a mapping, got {type(value).__name__}")
    return value


def _range(value, name: str) -> Range1D | None:
    if value is None:
        return None
    try:
        lo, hi = value
    except (TypeError, ValueError):
        raise ConfigurationError(f"Cut on {name} must be a [min, max] pair, got {value!r}") from None
    return Range1D(float(lo), float(hi))


@dataclass(frozen=True)
class IntegrationConfig:
    algorithm: str = "adaptive"
    epsilon: float = 1e-6
    params: dict = field(default_factory=dict)
    w_cut: Range1D | None = None
    q2_cut: Range1D | None = None

    @classmethod
    def from_dict(cls, d: dict) -> "IntegrationConfig":
        d = dict(_mapping(d, "integration"))
        cuts = _mapping(d.pop("cuts", None), "cuts")
        unknown = set(cuts) - {"W", "Q2"}
        if unknown:
            raise ConfigurationError(f"Cuts are supported on W and Q2 only, got {sorted(unknown)}")
        return cls(
            algorithm=str(d.get("algorithm", cls.algorithm)),
            epsilon=float(d.get("epsilon", cls.epsilon)),
            params=dict(_mapping(d.get("params"), "params")),
            w_cut=_range(cuts.get("W"), "W"),
            q2_cut=_range(cuts.get("Q2"), "Q2"),
        )

    @property
    def cuts(self) -> dict:
        cuts = {}
        if self.w_cut is not None:
            cuts[KineVar.W] = self.w_cut
        if self.q2_cut is not None:
            cuts[KineVar.Q2] = self.q2_cut
        return cuts


@dataclass(frozen=True)
class SelectorConfig:
    use_cached_tabulation: bool = False
    tabulation_file: str | None = None

    @classmethod
    def from_dict(cls, d: dict) -> "SelectorConfig":
        d = _mapping(d, "selector")
        return cls(
            use_cached_tabulation=bool(d.get("use_cached_tabulation", False)),
            tabulation_file=d.get("tabulation_file"),
        )


@dataclass(frozen=True)
class GeneratorConfig:
    seed: int | None = None
    log_level: str = "WARNING"
    integration: IntegrationConfig = field(default_factory=IntegrationConfig)
    selector: SelectorConfig = field(default_factory=SelectorConfig)

    @classmethod
    def from_dict(cls, d: dict) -> "GeneratorConfig":
        if not isinstance(d, dict):
            raise ConfigurationError(f"Configuration must be a mapping, got {type(d).__name__}")
        seed = d.get("seed")
        return cls(
            seed=None if seed is None else int(seed),
            log_level=str(d.get("log_level", cls.log_level)).upper(),
            integration=IntegrationConfig.from_dict(d.get("integration")),
            selector=SelectorConfig.from_dict(d.get("selector")),
        )

    @classmethod
    def from_file(cls, path) -> "GeneratorConfig":
        path = Path(path)
        match path.suffix:
            case ".json":
                with open(path) as data:
                    try:
                        config = json.load(data)
                    except json.JSONDecodeError as e:
                        raise ConfigurationError(f"Cannot parse {path}: {e}") from e
            case ".yaml" | ".yml":
                with open(path) as data:
                    try:
                        config = yaml.safe_load(data)
                    except yaml.YAMLError as e:
                        raise ConfigurationError(f"Cannot parse {path}: {e}") from e
            case _:
                raise ConfigurationError(f"Config file {path} must be a json or yaml file")
        if config is None:
            raise ConfigurationError(f"Config file {path} is empty")
        if not isinstance(config, dict):
            raise ConfigurationError(f"Config file {path} must hold a mapping, got {type(config).__name__}")

        # relative tabulation paths are relative to the config file
        table = _mapping(config.get("selector"), "selector").get("tabulation_file")
        if table is not None and not Path(table).is_absolute():
            config.setdefault("selector", {})["tabulation_file"] = str(path.parent / table)
        return cls.from_dict(config)


# ---------- builders ----------
def configure_logging(level="WARNING"):
    """Attach a stream handler to the package logger."""
    log = logging.getLogger("nu_events")
    log.setLevel(level)
    if not log.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        log.addHandler(handler)
    return log


def build_integrator(config: IntegrationConfig) -> IntegratorBase:
    return make_integrator(config.algorithm, epsilon=config.epsilon, **config.params)


def build_xsec_integrator(config: IntegrationConfig) -> XSecIntegrator:
    return XSecIntegrator(build_integrator(config), cuts=config.cuts)


def build_selector(config: SelectorConfig, rng=None) -> InteractionSelector:
    tabulation = None
    if config.use_cached_tabulation:
        if config.tabulation_file is None:
            raise ConfigurationError("use_cached_tabulation is set but no tabulation_file is given")
        try:
            tabulation = XSecTable.load(config.tabulation_file)
        except OSError as e:
            raise ConfigurationError(f"Cannot read tabulation {config.tabulation_file}: {e}") from e
    return InteractionSelector(use_cached_tabulation=config.use_cached_tabulation,
                               tabulation=tabulation, rng=rng)


def initialise(config: GeneratorConfig):
    """Seed the shared random source and set up logging for a run."""
    configure_logging(config.log_level)
    RandomSource.set_seed(config.seed)
    logger.info(f"Random seed: {config.seed}")
