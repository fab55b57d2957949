"""
Plotting module

Light-curve figures for eclipsesim runs.
"""
from matplotlib import pyplot as plt


def light_curve_axes_labels(ax):
    ax.set_xlabel("Time [arbitrary units]")
    ax.set_ylabel("Relative flux")


def light_curve_plot(curve, ax=None):
    """Plot flux versus time, plus shadow fractions for lunar runs.

    Parameters
    ----------
    curve : LightCurve
    ax : matplotlib.axes.Axes, optional
        Axes to draw into; a new figure is created when omitted.

    Returns
    -------
    matplotlib.axes.Axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 4))

    data = curve.to_arrays()
    ax.plot(data["time"], data["flux"], color="#f6b100", lw=2, label="Flux")
    if curve.params.mode == "lunar":
        ax.plot(data["time"], data["umbra_fraction"], ls="--", lw=1,
                color="0.2", label="Umbra fraction")
        ax.plot(data["time"], data["penumbra_fraction"], ls=":", lw=1,
                color="0.5", label="Penumbra fraction")
        ax.legend(frameon=False)
    ax.set_ylim(-0.05, 1.05)
    if len(curve) > 1:
        ax.set_xlim(data["time"][0], data["time"][-1])
    light_curve_axes_labels(ax)
    ax.set_title(f"{curve.params.mode.capitalize()} eclipse, "
                 f"b={curve.params.impact_parameter:g}")
    return ax


def save_light_curve_plot(curve, path, dpi=150):
    """Render `curve` with :func:`light_curve_plot` and save it to `path`."""
    fig, ax = plt.subplots(figsize=(8, 4))
    light_curve_plot(curve, ax)
    fig.tight_layout()
    fig.savefig(path, dpi=dpi)
    plt.close(fig)
