"""Occlusion model for eclipse light curves.

Computes the area of overlap between two disks using circle-circle
geometry, and the limb-darkened visible fraction of a stellar disk by
quadrature over a regular grid.  All functions are pure math.

The flat-disk flux is ``1 - obscured_fraction``; the limb-darkened
flux is returned directly by :func:`limb_darkened_flux`.
"""
import warnings

import numpy as np

from .config import ConfigurationError, is_whole_number

# Grid sizes above this rarely fit a single display frame
MAX_REALTIME_GRID = 512


# ---------------------------------------------------------------------------
# Circle-circle overlap geometry
# ---------------------------------------------------------------------------

def circle_overlap_area(r1, r2, d):
    """Area of intersection of two circles.

    Parameters
    ----------
    r1 : float or np.ndarray
        Radius of the first circle.
    r2 : float or np.ndarray
        Radius of the second circle.
    d : float or np.ndarray
        Distance between circle centers.

    Returns
    -------
    float or np.ndarray
        Overlap area. A float when all inputs are scalars.
    """
    scalar = np.ndim(r1) == 0 and np.ndim(r2) == 0 and np.ndim(d) == 0
    r1 = np.asarray(r1, dtype=float)
    r2 = np.asarray(r2, dtype=float)
    d = np.asarray(d, dtype=float)
    if np.any(r1 < 0) or np.any(r2 < 0) or np.any(d < 0):
        raise ConfigurationError("radii and center distance must be non-negative")

    # Broadcast all inputs to common shape
    r1, r2, d = np.broadcast_arrays(r1, r2, d)

    area = np.zeros(d.shape)

    # Case 1: No overlap (tangency included)
    no_overlap = d >= r1 + r2

    # Case 2: One circle fully inside the other (internal tangency included)
    r_min = np.minimum(r1, r2)
    contained = ~no_overlap & (d <= np.abs(r1 - r2))
    area[contained] = np.pi * r_min[contained] ** 2

    # Case 3: Partial overlap (lens formula); here d > |r1 - r2| >= 0
    partial = ~no_overlap & ~contained
    if np.any(partial):
        dp = d[partial]
        r1p = r1[partial]
        r2p = r2[partial]

        arg1 = np.clip((dp ** 2 + r1p ** 2 - r2p ** 2) / (2.0 * dp * r1p), -1.0, 1.0)
        arg2 = np.clip((dp ** 2 + r2p ** 2 - r1p ** 2) / (2.0 * dp * r2p), -1.0, 1.0)

        term1 = r1p ** 2 * np.arccos(arg1)
        term2 = r2p ** 2 * np.arccos(arg2)

        s = (-dp + r1p + r2p) * (dp + r1p - r2p) * (dp - r1p + r2p) * (dp + r1p + r2p)
        term3 = 0.5 * np.sqrt(np.maximum(s, 0.0))

        area[partial] = term1 + term2 - term3

    if scalar:
        return float(area)
    return area


def obscured_fraction(sun_radius, occluder_radius, d):
    """Fraction of a uniform disk covered by an occluding disk.

    Parameters
    ----------
    sun_radius : float or np.ndarray
        Radius of the light source disk, > 0.
    occluder_radius : float or np.ndarray
        Radius of the occluding disk.
    d : float or np.ndarray
        Center separation.

    Returns
    -------
    float or np.ndarray
        Obscuration in [0, 1].
    """
    if np.any(np.asarray(sun_radius) <= 0):
        raise ConfigurationError(f"sun_radius must be positive, got {sun_radius}")
    overlap = circle_overlap_area(sun_radius, occluder_radius, d)
    frac = np.clip(overlap / (np.pi * np.asarray(sun_radius, dtype=float) ** 2),
                   0.0, 1.0)
    if np.ndim(frac) == 0:
        return float(frac)
    return frac


# ---------------------------------------------------------------------------
# Limb darkening
# ---------------------------------------------------------------------------

def limb_factor(r_frac, u=0.6):
    """Relative surface brightness under the linear limb-darkening law.

    I(r) / I(0) = 1 - u * (1 - sqrt(1 - r^2)), and zero off the disk.

    Parameters
    ----------
    r_frac : float or np.ndarray
        Radial position as a fraction of the disk radius.
    u : float
        Limb-darkening coefficient.

    Returns
    -------
    float or np.ndarray
        Brightness relative to disk center.
    """
    r = np.asarray(r_frac, dtype=float)
    mu = np.sqrt(np.clip(1.0 - r ** 2, 0.0, 1.0))
    brightness = np.where(r >= 1.0, 0.0, 1.0 - u * (1.0 - mu))
    if brightness.ndim == 0:
        return float(brightness)
    return brightness


def limb_darkened_flux(dx, dy, sun_radius, occluder_radius, grid_size, u=0.6):
    """Visible fraction of a limb-darkened disk behind an occluder.

    Integrates :func:`limb_factor` over an N x N grid of cell centres
    spanning the Sun's bounding square (pitch ``2 * sun_radius / N``).
    Accuracy improves with ``grid_size**2``; so does cost.

    Parameters
    ----------
    dx, dy : float
        Occluder center offset from the Sun's center.
    sun_radius : float
        Sun disk radius, > 0.
    occluder_radius : float
        Occluder disk radius, >= 0.
    grid_size : int
        Samples per side, >= 1.
    u : float
        Limb-darkening coefficient.

    Returns
    -------
    float
        Luminosity-weighted visible fraction in [0, 1]; 1.0 when no
        sample lands on the disk.
    """
    if not is_whole_number(grid_size) or grid_size < 1:
        raise ConfigurationError(f"grid_size must be an integer >= 1, got {grid_size}")
    if not sun_radius > 0:
        raise ConfigurationError(f"sun_radius must be positive, got {sun_radius}")
    if not occluder_radius >= 0:
        raise ConfigurationError(
            f"occluder_radius must be non-negative, got {occluder_radius}"
        )
    n = int(grid_size)
    if n > MAX_REALTIME_GRID:
        warnings.warn(
            f"grid_size={n} exceeds {MAX_REALTIME_GRID}; "
            f"each sample evaluates {n * n} points.",
            stacklevel=2,
        )

    pitch = 2.0 * sun_radius / n
    axis = -sun_radius + (np.arange(n) + 0.5) * pitch
    x, y = np.meshgrid(axis, axis)

    r_frac = np.hypot(x, y) / sun_radius
    weight = limb_factor(r_frac, u)
    on_disk = r_frac < 1.0
    uncovered = np.hypot(x - dx, y - dy) > occluder_radius

    total = weight[on_disk].sum()
    if total == 0.0:
        return 1.0
    visible = weight[on_disk & uncovered].sum()
    return float(visible / total)
