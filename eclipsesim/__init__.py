# -*- coding: utf-8 -*-

"""Top-level package for eclipsesim."""

__version__ = "0.1.0"

from .config import ConfigurationError, PhysicalConstants, SimulationParameters
from .geometry import (
    angular_radius,
    canvas_scale,
    project_to_canvas,
    umbra_penumbra_radii,
    umbra_tip_distance,
)
from .eclipse import circle_overlap_area, limb_darkened_flux, limb_factor, obscured_fraction
from .model import FluxSample, GeometrySnapshot, LightCurve, State, evaluate, run_sweep
from .flux import read_light_curve, write_light_curve
