"""Tests for light-curve CSV I/O."""

import numpy as np
import pytest

from eclipsesim.config import SimulationParameters
from eclipsesim.flux import LUNAR_COLUMNS, SOLAR_COLUMNS, read_light_curve, write_light_curve
from eclipsesim.model import run_sweep


@pytest.fixture
def solar_curve():
    return run_sweep(SimulationParameters(mode="solar", n_steps=20))


@pytest.fixture
def lunar_curve():
    return run_sweep(SimulationParameters(mode="lunar", n_steps=20, duration=6.0))


class TestWriteLightCurve:

    def test_solar_header(self, tmp_path, solar_curve):
        path = tmp_path / "solar.csv"
        write_light_curve(path, solar_curve)
        lines = path.read_text().splitlines()
        assert lines[0] == "time,flux"
        assert len(lines) == 22

    def test_lunar_header(self, tmp_path, lunar_curve):
        path = tmp_path / "lunar.csv"
        write_light_curve(path, lunar_curve)
        lines = path.read_text().splitlines()
        assert lines[0] == "time,flux,umbra_frac,penumbra_frac"
        assert len(lines[1].split(",")) == 4

    def test_fixed_precision(self, tmp_path, solar_curve):
        path = tmp_path / "solar.csv"
        write_light_curve(path, solar_curve, precision=4)
        first = path.read_text().splitlines()[1]
        assert first == "0.0000,1.0000"

    def test_empty_curve(self, tmp_path):
        from eclipsesim.model import LightCurve

        path = tmp_path / "empty.csv"
        write_light_curve(path, LightCurve(SimulationParameters()))
        data = read_light_curve(path)
        assert data["time"].shape == (0,)


class TestReadLightCurve:

    def test_solar_values(self, tmp_path, solar_curve):
        path = tmp_path / "solar.csv"
        write_light_curve(path, solar_curve)
        data = read_light_curve(path)
        assert tuple(data) == SOLAR_COLUMNS
        expected = solar_curve.to_arrays()
        np.testing.assert_allclose(data["time"], expected["time"], atol=5e-7)
        np.testing.assert_allclose(data["flux"], expected["flux"], atol=5e-7)

    def test_lunar_values(self, tmp_path, lunar_curve):
        path = tmp_path / "lunar.csv"
        write_light_curve(path, lunar_curve)
        data = read_light_curve(path)
        assert tuple(data) == LUNAR_COLUMNS
        expected = lunar_curve.to_arrays()
        np.testing.assert_allclose(data["umbra_frac"], expected["umbra_fraction"],
                                   atol=5e-7)
        np.testing.assert_allclose(data["penumbra_frac"],
                                   expected["penumbra_fraction"], atol=5e-7)

    def test_bad_header(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("t,f\n0,1\n")
        with pytest.raises(ValueError):
            read_light_curve(path)

    def test_ragged_row(self, tmp_path):
        path = tmp_path / "ragged.csv"
        path.write_text("time,flux\n0.0,1.0\n0.5\n")
        with pytest.raises(ValueError):
            read_light_curve(path)
