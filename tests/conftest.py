"""Shared pytest fixtures for eclipsesim tests."""

import matplotlib

matplotlib.use("Agg")

import pytest

from eclipsesim.config import PhysicalConstants, SimulationParameters


@pytest.fixture
def constants():
    """Return the default physical constants."""
    return PhysicalConstants()


@pytest.fixture
def solar_params():
    """Return default solar-eclipse parameters (central, flat disks)."""
    return SimulationParameters(mode="solar")


@pytest.fixture
def lunar_params():
    """Return default lunar-eclipse parameters (central passage)."""
    return SimulationParameters(mode="lunar")


@pytest.fixture(params=["solar", "lunar"])
def any_params(request):
    """Parametrized parameters for both eclipse modes, short sweep."""
    return SimulationParameters(mode=request.param, n_steps=40)
