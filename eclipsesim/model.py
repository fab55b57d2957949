"""Light-curve model for eclipsesim.

`evaluate` maps a time parameter to a geometry snapshot and a flux
sample; `LightCurve` drives it one step at a time through a small
state machine and keeps the ordered sample sequence.
"""
from dataclasses import dataclass
from enum import Enum

import numpy as np

from .config import ConfigurationError, PhysicalConstants
from .eclipse import circle_overlap_area, limb_darkened_flux, obscured_fraction
from .geometry import angular_radius, canvas_scale, project_to_canvas, umbra_penumbra_radii


class State(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


@dataclass(frozen=True)
class GeometrySnapshot:
    """Canvas-space layout of one sample. Lengths in canvas units."""

    mode: str
    scale: float  # canvas units per rad (solar) or per km (lunar)
    sun_radius: float  # None in lunar mode
    moon_radius: float
    moon_x: float  # Moon center relative to the primary disk center
    moon_y: float
    separation: float
    umbra_radius: float = None  # lunar mode only
    penumbra_radius: float = None  # lunar mode only


@dataclass(frozen=True)
class FluxSample:
    """One point of the light curve."""

    time: float
    flux: float
    umbra_fraction: float = 0.0
    penumbra_fraction: float = 0.0


def _sweep_position(progress, contact, params):
    x = (2.0 * progress - 1.0) * params.travel_range * contact
    y = params.impact_parameter * contact
    return x, y


def _evaluate_solar(params, constants, progress):
    moon_distance = constants.moon_distance * params.moon_distance_scale
    sun_angle = angular_radius(constants.sun_radius, constants.sun_distance)
    moon_angle = angular_radius(constants.moon_radius, moon_distance)

    scale = canvas_scale(sun_angle, params.canvas_width, params.canvas_height,
                         params.sun_canvas_fraction)
    sun_r = project_to_canvas(sun_angle, scale)
    moon_r = project_to_canvas(moon_angle, scale)

    x, y = _sweep_position(progress, sun_r + moon_r, params)
    separation = float(np.hypot(x, y))

    if params.limb_darkening:
        flux = limb_darkened_flux(x, y, sun_r, moon_r, params.grid_size,
                                  u=params.limb_coefficient)
    else:
        flux = 1.0 - obscured_fraction(sun_r, moon_r, separation)

    snapshot = GeometrySnapshot(
        mode="solar", scale=scale, sun_radius=sun_r, moon_radius=moon_r,
        moon_x=x, moon_y=y, separation=separation,
    )
    sample = FluxSample(time=progress * params.duration,
                        flux=float(np.clip(flux, 0.0, 1.0)))
    return snapshot, sample


def _evaluate_lunar(params, constants, progress):
    moon_distance = constants.moon_distance * params.moon_distance_scale
    umbra_km, penumbra_km = umbra_penumbra_radii(
        moon_distance, constants.sun_radius, constants.earth_radius,
        constants.sun_distance, safety=params.penumbra_safety,
    )

    scale = canvas_scale(penumbra_km, params.canvas_width, params.canvas_height,
                         params.sun_canvas_fraction)
    umbra_r = project_to_canvas(umbra_km, scale)
    penumbra_r = project_to_canvas(penumbra_km, scale)
    moon_r = project_to_canvas(constants.moon_radius, scale)

    x, y = _sweep_position(progress, penumbra_r + moon_r, params)
    separation = float(np.hypot(x, y))

    moon_area = np.pi * moon_r ** 2
    umbra_overlap = circle_overlap_area(moon_r, umbra_r, separation)
    penumbra_overlap = circle_overlap_area(moon_r, penumbra_r, separation)
    penumbra_only = max(0.0, penumbra_overlap - umbra_overlap)

    umbra_fraction = float(np.clip(umbra_overlap / moon_area, 0.0, 1.0))
    penumbra_fraction = float(np.clip(penumbra_only / moon_area, 0.0, 1.0))
    flux = (1.0 - umbra_fraction
            - penumbra_fraction * (1.0 - params.penumbra_brightness))

    snapshot = GeometrySnapshot(
        mode="lunar", scale=scale, sun_radius=None, moon_radius=moon_r,
        moon_x=x, moon_y=y, separation=separation,
        umbra_radius=umbra_r, penumbra_radius=penumbra_r,
    )
    sample = FluxSample(
        time=progress * params.duration,
        flux=float(np.clip(flux, 0.0, 1.0)),
        umbra_fraction=umbra_fraction,
        penumbra_fraction=penumbra_fraction,
    )
    return snapshot, sample


def evaluate(params, constants=None, time_progress=None):
    """Geometry and flux at one point of the sweep.

    Parameters
    ----------
    params : SimulationParameters
        Current settings; validated on every call.
    constants : PhysicalConstants, optional
        Body sizes and distances. Defaults to ``PhysicalConstants()``.
    time_progress : float, optional
        Position along the event in [0, 1]. Defaults to
        ``params.time_progress``.

    Returns
    -------
    snapshot : GeometrySnapshot
    sample : FluxSample

    Raises
    ------
    ConfigurationError
        If the parameters or constants are out of range.
    """
    if constants is None:
        constants = PhysicalConstants()
    params.validate()
    progress = params.time_progress if time_progress is None else time_progress
    if not 0.0 <= progress <= 1.0:
        raise ConfigurationError(f"time_progress must lie in [0, 1], got {progress}")

    if params.mode == "solar":
        return _evaluate_solar(params, constants, progress)
    return _evaluate_lunar(params, constants, progress)


# Models contain the light-curve accumulator and its run state
class LightCurve(object):

    def __init__(self, params, constants=None):
        self.params = params
        self.constants = constants if constants is not None else PhysicalConstants()
        self.state = State.IDLE
        self.progress = 0.0  # progress of the next sample
        self.last_snapshot = None
        self.last_error = None
        self._samples = []
        self._last_progress = None

    def __len__(self):
        return len(self._samples)

    @property
    def samples(self):
        "Ordered, read-only view of the accumulated samples"
        return tuple(self._samples)

    # State transitions

    def start(self):
        "Begin running; from FINISHED the previous samples are discarded first"
        if self.state == State.FINISHED:
            self._clear()
        elif self.state != State.IDLE:
            raise RuntimeError(f"Cannot start from state '{self.state.value}'")
        self.state = State.RUNNING

    def pause(self):
        if self.state != State.RUNNING:
            raise RuntimeError(f"Cannot pause from state '{self.state.value}'")
        self.state = State.PAUSED

    def resume(self):
        if self.state != State.PAUSED:
            raise RuntimeError(f"Cannot resume from state '{self.state.value}'")
        self.state = State.RUNNING

    def reset(self):
        self._clear()
        self.last_error = None
        self.state = State.IDLE

    def tick(self):
        """Produce one sample while running.

        Returns
        -------
        FluxSample
        """
        if self.state != State.RUNNING:
            raise RuntimeError(f"Cannot tick from state '{self.state.value}'")
        return self._advance()

    def step(self):
        """Produce one sample without entering the running state.

        From FINISHED the sweep restarts at progress 0.

        Returns
        -------
        FluxSample
        """
        if self.state == State.RUNNING:
            raise RuntimeError("Cannot step while running; pause first")
        if self.state == State.FINISHED:
            self._clear()
            self.state = State.IDLE
        return self._advance()

    def evaluate(self, time_progress):
        """Append one sample at an explicit progress.

        Parameters
        ----------
        time_progress : float
            Must exceed the progress of the last recorded sample.

        Returns
        -------
        snapshot : GeometrySnapshot
        sample : FluxSample
        """
        if self._last_progress is not None and time_progress <= self._last_progress:
            raise ValueError(
                f"time_progress={time_progress} does not advance past "
                f"{self._last_progress}"
            )
        snapshot, sample = self._sample(time_progress)
        self.progress = self._next_progress(time_progress)
        if time_progress >= 1.0:
            self.state = State.FINISHED
        return snapshot, sample

    # Internals

    def _advance(self):
        progress = self.progress
        _, sample = self._sample(progress)
        if progress >= 1.0:
            self.state = State.FINISHED
        else:
            self.progress = self._next_progress(progress)
        return sample

    def _next_progress(self, progress):
        step = self.params.step_size
        nxt = progress + step
        # Land exactly on 1 despite accumulated rounding
        if nxt > 1.0 - 0.5 * step:
            return 1.0
        return nxt

    def _sample(self, progress):
        try:
            snapshot, sample = evaluate(self.params, self.constants, progress)
            if self._samples and not sample.time > self._samples[-1].time:
                # A shortened duration would move time backwards
                raise ConfigurationError(
                    f"sample time {sample.time} does not advance past "
                    f"{self._samples[-1].time}; reset after changing duration"
                )
        except ConfigurationError as err:
            self.last_error = err
            if self.state == State.RUNNING:
                self.state = State.PAUSED
            raise
        self.last_error = None
        self.last_snapshot = snapshot
        self._samples.append(sample)
        self._last_progress = progress
        return snapshot, sample

    def _clear(self):
        self._samples = []
        self._last_progress = None
        self.last_snapshot = None
        self.progress = 0.0

    # Output

    def to_arrays(self):
        """Return the light curve as parallel numpy arrays.

        Returns
        -------
        dict
            Keys ``time``, ``flux``, ``umbra_fraction``,
            ``penumbra_fraction``.
        """
        return {
            "time": np.array([s.time for s in self._samples], dtype=float),
            "flux": np.array([s.flux for s in self._samples], dtype=float),
            "umbra_fraction": np.array(
                [s.umbra_fraction for s in self._samples], dtype=float),
            "penumbra_fraction": np.array(
                [s.penumbra_fraction for s in self._samples], dtype=float),
        }

    def summary(self):
        """Headline numbers of the accumulated light curve.

        Returns
        -------
        dict
            ``n_samples``, ``min_flux``, ``time_of_min``,
            ``max_umbra_fraction``, ``max_penumbra_fraction``,
            ``first_contact``, ``last_contact``. Contacts are the times
            of the first and last samples with flux below 1, or None.
        """
        if not self._samples:
            return {
                "n_samples": 0, "min_flux": None, "time_of_min": None,
                "max_umbra_fraction": None, "max_penumbra_fraction": None,
                "first_contact": None, "last_contact": None,
            }
        data = self.to_arrays()
        i_min = int(np.argmin(data["flux"]))
        dimmed = np.nonzero(data["flux"] < 1.0)[0]
        return {
            "n_samples": len(self._samples),
            "min_flux": float(data["flux"][i_min]),
            "time_of_min": float(data["time"][i_min]),
            "max_umbra_fraction": float(data["umbra_fraction"].max()),
            "max_penumbra_fraction": float(data["penumbra_fraction"].max()),
            "first_contact": float(data["time"][dimmed[0]]) if dimmed.size else None,
            "last_contact": float(data["time"][dimmed[-1]]) if dimmed.size else None,
        }


def run_sweep(params, constants=None):
    """Run a complete sweep from progress 0 to 1.

    Parameters
    ----------
    params : SimulationParameters
    constants : PhysicalConstants, optional

    Returns
    -------
    LightCurve
        Finished light curve with ``params.n_steps + 1`` samples.
    """
    curve = LightCurve(params, constants)
    curve.start()
    while curve.state == State.RUNNING:
        curve.tick()
    return curve
