"""Tests for configuration objects and YAML loading."""

import os
from dataclasses import FrozenInstanceError

import pytest

from eclipsesim.config import ConfigurationError, PhysicalConstants, SimulationParameters

EXAMPLE_YAML = os.path.join(
    os.path.dirname(__file__), "..", "eclipsesim", "examples", "lunar_default.yaml"
)


class TestPhysicalConstants:

    def test_defaults(self, constants):
        assert constants.sun_radius == pytest.approx(695700.0)
        assert constants.earth_radius == pytest.approx(6378.1, abs=0.1)
        assert constants.sun_distance == pytest.approx(1.495978707e8)
        assert constants.moon_radius == 1737.4
        assert constants.moon_distance == 384400.0

    def test_immutable(self, constants):
        with pytest.raises(FrozenInstanceError):
            constants.sun_radius = 1.0

    def test_sun_smaller_than_earth(self):
        with pytest.raises(ConfigurationError):
            PhysicalConstants(sun_radius=5000.0)

    @pytest.mark.parametrize("field", ["moon_radius", "sun_distance", "moon_distance"])
    def test_non_positive(self, field):
        with pytest.raises(ConfigurationError):
            PhysicalConstants(**{field: 0.0})


class TestSimulationParameters:

    def test_defaults_valid(self, solar_params):
        solar_params.validate()
        assert solar_params.mode == "solar"
        assert solar_params.step_size == pytest.approx(1.0 / 200)

    def test_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)

    @pytest.mark.parametrize("kwargs", [
        {"mode": "annular"},
        {"impact_parameter": 1.5},
        {"impact_parameter": -1.01},
        {"moon_distance_scale": 0.0},
        {"grid_size": 0},
        {"grid_size": 3.5},
        {"grid_size": float("nan")},
        {"grid_size": float("inf")},
        {"time_progress": 1.2},
        {"n_steps": 0},
        {"n_steps": float("nan")},
        {"n_steps": float("inf")},
        {"impact_parameter": "abc"},
        {"duration": None},
        {"duration": -1.0},
        {"travel_range": 0.0},
        {"limb_coefficient": 1.5},
        {"penumbra_brightness": -0.1},
        {"penumbra_safety": 0.9},
        {"sun_canvas_fraction": 0.0},
        {"canvas_width": 0},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ConfigurationError):
            SimulationParameters(**kwargs)

    def test_validate_after_mutation(self, solar_params):
        solar_params.grid_size = 0
        with pytest.raises(ConfigurationError):
            solar_params.validate()


class TestYamlLoading:

    def test_example_file(self):
        params, constants, data = SimulationParameters.from_yaml(EXAMPLE_YAML)
        assert params.mode == "lunar"
        assert params.impact_parameter == pytest.approx(0.2)
        assert params.duration == pytest.approx(6.0)
        assert params.canvas_width == 500
        assert constants.moon_distance == 384400.0
        assert "optics" in data

    def test_partial_file(self, tmp_path):
        path = tmp_path / "solar.yaml"
        path.write_text("mode: Solar\noptics:\n  limb_darkening: true\n  grid_size: 32\n")
        params, constants, _ = SimulationParameters.from_yaml(path)
        assert params.mode == "solar"
        assert params.limb_darkening is True
        assert params.grid_size == 32
        assert params.impact_parameter == 0.0
        assert constants == PhysicalConstants()

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        params, _, data = SimulationParameters.from_yaml(path)
        assert params == SimulationParameters()
        assert data == {}

    def test_unknown_key_warns(self, tmp_path):
        path = tmp_path / "typo.yaml"
        path.write_text("geometry:\n  impact: 0.5\n")
        with pytest.warns(UserWarning, match="impact"):
            params, _, _ = SimulationParameters.from_yaml(path)
        assert params.impact_parameter == 0.0

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("constants:\n  sun_radius: 100.0\n")
        with pytest.raises(ConfigurationError):
            SimulationParameters.from_yaml(path)

    def test_wrong_type_value(self, tmp_path):
        path = tmp_path / "typed.yaml"
        path.write_text("geometry:\n  impact_parameter: abc\n")
        with pytest.raises(ConfigurationError, match="impact_parameter"):
            SimulationParameters.from_yaml(path)

    def test_wrong_type_constant(self, tmp_path):
        path = tmp_path / "typed.yaml"
        path.write_text("constants:\n  moon_radius: big\n")
        with pytest.raises(ConfigurationError, match="moon_radius"):
            SimulationParameters.from_yaml(path)
