"""Angular geometry for eclipsesim.

Converts physical radius/distance pairs into angular radii, projects
them onto the drawing plane, and locates Earth's umbra and penumbra at
the Moon's distance by similar triangles.
"""
import numpy as np

from .config import ConfigurationError


def angular_radius(physical_radius, distance):
    """Angular radius of a sphere seen from a given distance.

    Parameters
    ----------
    physical_radius : float
        Body radius (same units as `distance`), >= 0.
    distance : float
        Observer-to-centre distance, > 0.

    Returns
    -------
    float
        Angular radius [rad].
    """
    if not distance > 0:
        raise ConfigurationError(f"distance must be positive, got {distance}")
    if not physical_radius >= 0:
        raise ConfigurationError(
            f"physical_radius must be non-negative, got {physical_radius}"
        )
    return float(np.arctan2(physical_radius, distance))


def canvas_scale(reference_length, width, height, fraction=0.36):
    """Scale mapping `reference_length` onto `fraction` of the smaller canvas side.

    Parameters
    ----------
    reference_length : float
        Radius of the primary disk (angle or physical length).
    width, height : float
        Canvas dimensions.
    fraction : float
        Target primary radius as a fraction of ``min(width, height)``.

    Returns
    -------
    float
        Canvas units per unit of `reference_length`.
    """
    if not reference_length > 0:
        raise ConfigurationError(
            f"reference_length must be positive, got {reference_length}"
        )
    return fraction * min(width, height) / reference_length


def project_to_canvas(length, scale):
    return length * scale


def umbra_tip_distance(sun_radius, earth_radius, sun_distance):
    """Distance from Earth's centre to the apex of the umbral cone.

    Parameters
    ----------
    sun_radius, earth_radius : float
        Radii [km].
    sun_distance : float
        Earth-Sun distance [km].

    Returns
    -------
    float
        Umbra length [km].
    """
    if sun_radius <= earth_radius:
        raise ConfigurationError(
            f"sun_radius={sun_radius} must exceed earth_radius={earth_radius}; "
            "the umbra would not converge"
        )
    if not (earth_radius > 0 and sun_distance > 0):
        raise ConfigurationError(
            "earth_radius and sun_distance must be positive, got "
            f"{earth_radius} and {sun_distance}"
        )
    return earth_radius * sun_distance / (sun_radius - earth_radius)


def umbra_penumbra_radii(moon_distance, sun_radius, earth_radius, sun_distance,
                         safety=1.05):
    """Radii of Earth's umbra and penumbra at the Moon's distance.

    The umbra shrinks linearly from ``earth_radius`` at Earth to zero at
    the cone apex and stays zero beyond it. The penumbra adds the Sun's
    angular radius projected over `moon_distance`, padded by `safety`.

    Parameters
    ----------
    moon_distance : float
        Earth-Moon distance [km], > 0.
    sun_radius, earth_radius : float
        Radii [km].
    sun_distance : float
        Earth-Sun distance [km].
    safety : float
        Multiplicative padding of the penumbra radius.

    Returns
    -------
    umbra : float
        Umbra radius [km], >= 0.
    penumbra : float
        Penumbra radius [km].
    """
    if not moon_distance > 0:
        raise ConfigurationError(
            f"moon_distance must be positive, got {moon_distance}"
        )
    tip = umbra_tip_distance(sun_radius, earth_radius, sun_distance)
    umbra = max(0.0, earth_radius * (1.0 - moon_distance / tip))
    sun_angle = angular_radius(sun_radius, sun_distance)
    penumbra = safety * (umbra + np.tan(sun_angle) * moon_distance)
    return umbra, float(penumbra)
