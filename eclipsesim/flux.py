"""Light-curve I/O utilities for eclipsesim.

File format (comma separated, one header line)::

    time,flux
    0.000000,1.000000
    ...

Lunar light curves carry two more columns::

    time,flux,umbra_frac,penumbra_frac

Numeric fields are written at a fixed number of decimals.
"""

import numpy as np

SOLAR_COLUMNS = ("time", "flux")
LUNAR_COLUMNS = ("time", "flux", "umbra_frac", "penumbra_frac")


def light_curve_columns(curve):
    """Column names and data array for a light curve.

    Parameters
    ----------
    curve : LightCurve

    Returns
    -------
    columns : tuple of str
    data : np.ndarray
        Shape (n_samples, n_columns).
    """
    arrays = curve.to_arrays()
    if curve.params.mode == "lunar":
        columns = LUNAR_COLUMNS
        data = np.column_stack([arrays["time"], arrays["flux"],
                                arrays["umbra_fraction"],
                                arrays["penumbra_fraction"]])
    else:
        columns = SOLAR_COLUMNS
        data = np.column_stack([arrays["time"], arrays["flux"]])
    return columns, data.reshape(-1, len(columns))


def write_light_curve(path, curve, precision=6):
    """Write a light curve to CSV.

    Parameters
    ----------
    path : str or Path
        Output file path.
    curve : LightCurve
        Accumulated light curve.
    precision : int
        Decimal places per numeric field.
    """
    columns, data = light_curve_columns(curve)
    np.savetxt(path, data, delimiter=",", header=",".join(columns),
               comments="", fmt=f"%.{int(precision)}f")


def read_light_curve(path):
    """Read a light curve CSV.

    Parameters
    ----------
    path : str or Path
        Input file path.

    Returns
    -------
    dict
        Column name -> np.ndarray, in file order.
    """
    with open(path, 'r') as f:
        header = f.readline().strip()
        columns = tuple(name.strip() for name in header.split(","))
        if columns not in (SOLAR_COLUMNS, LUNAR_COLUMNS):
            raise ValueError(f"Unrecognized light curve header: '{header}'")
        rows = []
        for line in f:
            line = line.strip()
            if not line:
                continue
            values = [float(v) for v in line.split(",")]
            if len(values) != len(columns):
                raise ValueError(
                    f"Expected {len(columns)} fields but read {len(values)}"
                )
            rows.append(values)

    data = np.array(rows, dtype=float).reshape(-1, len(columns))
    return {name: data[:, i] for i, name in enumerate(columns)}
