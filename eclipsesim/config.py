"""Configuration for eclipsesim runs."""
import math
import numbers
import warnings
from dataclasses import dataclass

from astropy import units as u
from astropy.constants import R_earth, R_sun, au

VALID_MODES = ("solar", "lunar")
NUMERIC_FIELDS = (
    "impact_parameter", "moon_distance_scale", "grid_size", "time_progress",
    "n_steps", "duration", "travel_range", "limb_coefficient",
    "penumbra_brightness", "penumbra_safety", "sun_canvas_fraction",
    "canvas_width", "canvas_height",
)


class ConfigurationError(ValueError):
    """Physically impossible constants or out-of-range parameters."""


def is_whole_number(value):
    "True for a finite real number with no fractional part"
    return (isinstance(value, numbers.Real) and math.isfinite(value)
            and int(value) == value)


@dataclass(frozen=True)
class PhysicalConstants:
    """Body sizes and distances [km]. Set once, never mutated."""

    sun_radius: float = R_sun.to(u.km).value  # 695700 km (IAU nominal)
    earth_radius: float = R_earth.to(u.km).value  # 6378.1 km (equatorial)
    moon_radius: float = 1737.4  # Mean lunar radius [km]
    sun_distance: float = au.to(u.km).value  # Earth-Sun distance [km]
    moon_distance: float = 384400.0  # Mean Earth-Moon distance [km]

    def __post_init__(self):
        for name in ("sun_radius", "earth_radius", "moon_radius",
                     "sun_distance", "moon_distance"):
            value = getattr(self, name)
            if not value > 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")
        if self.sun_radius <= self.earth_radius:
            raise ConfigurationError(
                f"sun_radius={self.sun_radius} must exceed "
                f"earth_radius={self.earth_radius} for a converging umbra"
            )


@dataclass
class SimulationParameters:
    """Per-sample simulation settings.

    The UI layer owns and mutates this object between ticks; the model
    re-validates it at every evaluation.
    """

    mode: str = "solar"  # "solar" or "lunar"
    impact_parameter: float = 0.0  # Vertical offset in units of the contact distance
    moon_distance_scale: float = 1.0  # Multiplier on the nominal Earth-Moon distance
    limb_darkening: bool = False  # Weighted grid sampling instead of flat area
    grid_size: int = 64  # Samples per side of the limb-darkening grid
    time_progress: float = 0.0  # Position along the event, 0 = start, 1 = end
    # Sweep control
    n_steps: int = 200  # Increments per sweep (n_steps + 1 samples)
    duration: float = 1.0  # Simulated time at progress 1 [arbitrary units]
    travel_range: float = 1.25  # Sweep half-width in units of the contact distance
    # Optics
    limb_coefficient: float = 0.6  # Linear limb-darkening coefficient u
    penumbra_brightness: float = 0.4  # Fraction of light reaching the penumbra
    penumbra_safety: float = 1.05  # Outward padding of the penumbra boundary
    # Projection
    sun_canvas_fraction: float = 0.36  # Primary disk radius / min(canvas dims)
    canvas_width: float = 500.0
    canvas_height: float = 300.0

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Raise ConfigurationError if any parameter is out of range."""
        for name in NUMERIC_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, numbers.Real):
                raise ConfigurationError(
                    f"{name} must be a number, got {value!r}"
                )
        if self.mode not in VALID_MODES:
            raise ConfigurationError(
                f"Invalid mode '{self.mode}'. Must be one of {VALID_MODES}"
            )
        if not -1.0 <= self.impact_parameter <= 1.0:
            raise ConfigurationError(
                f"impact_parameter must lie in [-1, 1], got {self.impact_parameter}"
            )
        if not self.moon_distance_scale > 0:
            raise ConfigurationError(
                f"moon_distance_scale must be positive, got {self.moon_distance_scale}"
            )
        if not is_whole_number(self.grid_size) or self.grid_size < 1:
            raise ConfigurationError(
                f"grid_size must be an integer >= 1, got {self.grid_size}"
            )
        if not 0.0 <= self.time_progress <= 1.0:
            raise ConfigurationError(
                f"time_progress must lie in [0, 1], got {self.time_progress}"
            )
        if not is_whole_number(self.n_steps) or self.n_steps < 1:
            raise ConfigurationError(
                f"n_steps must be an integer >= 1, got {self.n_steps}"
            )
        if not self.duration > 0:
            raise ConfigurationError(f"duration must be positive, got {self.duration}")
        if not self.travel_range > 0:
            raise ConfigurationError(
                f"travel_range must be positive, got {self.travel_range}"
            )
        if not 0.0 <= self.limb_coefficient <= 1.0:
            raise ConfigurationError(
                f"limb_coefficient must lie in [0, 1], got {self.limb_coefficient}"
            )
        if not 0.0 <= self.penumbra_brightness <= 1.0:
            raise ConfigurationError(
                f"penumbra_brightness must lie in [0, 1], got {self.penumbra_brightness}"
            )
        if not self.penumbra_safety >= 1.0:
            raise ConfigurationError(
                f"penumbra_safety must be >= 1, got {self.penumbra_safety}"
            )
        if not 0.0 < self.sun_canvas_fraction <= 1.0:
            raise ConfigurationError(
                f"sun_canvas_fraction must lie in (0, 1], got {self.sun_canvas_fraction}"
            )
        if not (self.canvas_width > 0 and self.canvas_height > 0):
            raise ConfigurationError(
                f"canvas dimensions must be positive, got "
                f"{self.canvas_width}x{self.canvas_height}"
            )

    @property
    def step_size(self):
        "Progress increment of one tick"
        return 1.0 / self.n_steps

    @classmethod
    def from_yaml(cls, path):
        """Load parameters and constants from a YAML file.

        Parameters
        ----------
        path : str or Path
            Path to the YAML configuration file.

        Returns
        -------
        params : SimulationParameters
            Parameters with values from the YAML file.
        constants : PhysicalConstants
            Constants, defaults overridden by the ``constants`` section.
        data : dict
            Full parsed YAML data.
        """
        import yaml

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        # Map YAML keys to dataclass fields, per section
        field_map = {
            "geometry": {
                "impact_parameter": "impact_parameter",
                "moon_distance_scale": "moon_distance_scale",
            },
            "optics": {
                "limb_darkening": "limb_darkening",
                "grid_size": "grid_size",
                "limb_coefficient": "limb_coefficient",
                "penumbra_brightness": "penumbra_brightness",
                "penumbra_safety": "penumbra_safety",
            },
            "sweep": {
                "n_steps": "n_steps",
                "duration": "duration",
                "travel_range": "travel_range",
                "time_progress": "time_progress",
            },
            "canvas": {
                "width": "canvas_width",
                "height": "canvas_height",
                "sun_fraction": "sun_canvas_fraction",
            },
        }
        constant_keys = ("sun_radius", "earth_radius", "moon_radius",
                         "sun_distance", "moon_distance")

        kwargs = {}

        # Top-level mode
        if "mode" in data:
            kwargs["mode"] = str(data["mode"]).lower()

        for section, mapping in field_map.items():
            values = data.get(section) or {}
            for yaml_key, value in values.items():
                if yaml_key in mapping:
                    kwargs[mapping[yaml_key]] = value
                else:
                    warnings.warn(
                        f"Unknown key '{yaml_key}' in section '{section}' ignored.",
                        stacklevel=2,
                    )

        constant_kwargs = {}
        for yaml_key, value in (data.get("constants") or {}).items():
            if yaml_key in constant_keys:
                try:
                    constant_kwargs[yaml_key] = float(value)
                except (TypeError, ValueError):
                    raise ConfigurationError(
                        f"constants.{yaml_key} must be a number, got {value!r}"
                    )
            else:
                warnings.warn(
                    f"Unknown key '{yaml_key}' in section 'constants' ignored.",
                    stacklevel=2,
                )

        return cls(**kwargs), PhysicalConstants(**constant_kwargs), data
