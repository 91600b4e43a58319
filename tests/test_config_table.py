import json

import numpy as np
import pytest

from nu_events.config import (
    GeneratorConfig, IntegrationConfig, build_selector, build_xsec_integrator, configure_logging, initialise
)
from nu_events.errors import ConfigurationError
from nu_events.globals.random_source import RandomSource
from nu_events.interaction.kinematics import KineVar, Range1D
from nu_events.numerical.integrators import GaussLegendreIntegrator
from nu_events.xsec.table import XSecTable

config_yaml = """
seed: 1234
log_level: debug
integration:
  algorithm: gauss-legendre
  epsilon: 1.0e-7
  params:
    n_points: 16
  cuts:
    W: [1.08, 2.0]
selector:
  use_cached_tabulation: true
  tabulation_file: xsec.npz
"""


def small_table():
    return XSecTable(np.array([1.0, 2.0, 4.0]), {"a": [0.0, 1.0, 3.0], "b": [2.0, 2.0, 2.0]})


# ---------- table ----------
def test_lookup():
    table = small_table()
    assert table.channels == ["a", "b"]
    assert "a" in table and "c" not in table
    assert table.lookup("a", 0.5) == 0.0
    assert table.lookup("a", 1.5) == pytest.approx(0.5)
    assert table.lookup("a", 3.0) == pytest.approx(2.0)
    assert table.lookup("a", 10.0) == 3.0
    with pytest.raises(ConfigurationError):
        table.lookup("c", 2.0)
    with pytest.raises(ValueError):
        table.values("a")[0] = 1.0


def test_table_validation():
    with pytest.raises(ValueError):
        XSecTable([1.0, 1.0], {"a": [0.0, 1.0]})
    with pytest.raises(ValueError):
        XSecTable([1.0, 2.0], {"a": [0.0, 1.0, 2.0]})
    with pytest.raises(ValueError):
        XSecTable([1.0, 2.0], {"a": [0.0, -1.0]})


def test_save_load(tmp_path):
    table = small_table()
    path = tmp_path / "xsec.npz"
    table.save(path)
    loaded = XSecTable.load(path)
    assert loaded.channels == table.channels
    assert np.array_equal(loaded.energies, table.energies)
    for c in table.channels:
        assert np.array_equal(loaded.values(c), table.values(c))


# ---------- config ----------
def test_yaml_config(tmp_path):
    small_table().save(tmp_path / "xsec.npz")
    path = tmp_path / "run.yaml"
    path.write_text(config_yaml)

    config = GeneratorConfig.from_file(path)
    assert config.seed == 1234
    assert config.log_level == "DEBUG"
    assert config.integration.algorithm == "gauss-legendre"
    assert config.integration.w_cut == Range1D(1.08, 2.0)
    assert config.integration.q2_cut is None
    assert config.selector.tabulation_file == str(tmp_path / "xsec.npz")

    xsec_integrator = build_xsec_integrator(config.integration)
    assert isinstance(xsec_integrator.integrator, GaussLegendreIntegrator)
    assert xsec_integrator.integrator.n_points == 16
    assert xsec_integrator.integrator.epsilon == 1e-7
    assert xsec_integrator.cuts == {KineVar.W: Range1D(1.08, 2.0)}

    selector = build_selector(config.selector)
    assert selector.use_cached_tabulation
    assert selector.tabulation.channels == ["a", "b"]

    initialise(config)
    assert RandomSource.seed() == 1234
    configure_logging("WARNING")


def test_json_config(tmp_path):
    path = tmp_path / "run.json"
    path.write_text(json.dumps({"seed": 7, "integration": {"algorithm": "simpson", "cuts": {"Q2": [0, 1]}}}))
    config = GeneratorConfig.from_file(path)
    assert config.integration.q2_cut == Range1D(0.0, 1.0)
    assert not config.selector.use_cached_tabulation
    assert build_selector(config.selector).tabulation is None


def test_bad_config(tmp_path):
    path = tmp_path / "run.toml"
    path.write_text("seed = 1")
    with pytest.raises(ConfigurationError):
        GeneratorConfig.from_file(path)

    for text in ("just a string", "- 1\n- 2", "selector: true", "integration: [1, 2]",
                 "integration:\n  cuts: [1, 2]", "integration:\n  params: 3", "seed: [1"):
        path = tmp_path / "malformed.yaml"
        path.write_text(text)
        with pytest.raises(ConfigurationError):
            GeneratorConfig.from_file(path)

    path = tmp_path / "malformed.json"
    path.write_text("{\"seed\": ")
    with pytest.raises(ConfigurationError):
        GeneratorConfig.from_file(path)

    with pytest.raises(ConfigurationError):
        IntegrationConfig.from_dict({"cuts": {"x": [0, 1]}})
    with pytest.raises(ConfigurationError):
        IntegrationConfig.from_dict({"cuts": {"W": 1.5}})
    with pytest.raises(ConfigurationError):
        build_xsec_integrator(IntegrationConfig(algorithm="vegas"))
    with pytest.raises(ConfigurationError):
        build_selector(GeneratorConfig.from_dict({"selector": {"use_cached_tabulation": True}}).selector)
    with pytest.raises(ConfigurationError):
        build_selector(GeneratorConfig.from_dict(
            {"selector": {"use_cached_tabulation": True, "tabulation_file": str(tmp_path / "none.npz")}}
        ).selector)
