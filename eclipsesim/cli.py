"""Command-line interface for eclipsesim.

Runs one full sweep headlessly and writes the light curve::

    eclipsesim --mode lunar --impact 0.3 --output-dir out/
    eclipsesim eclipsesim/examples/lunar_default.yaml --no-plot
"""
import os
from dataclasses import replace

import click

from .config import VALID_MODES, ConfigurationError, PhysicalConstants, SimulationParameters
from .flux import write_light_curve
from .model import run_sweep

CSV_NAME = "eclipsesim_lightcurve.csv"
PLOT_NAME = "eclipsesim_lightcurve.png"


def _format_time(value):
    return "-" if value is None else f"{value:.4f}"


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("config", required=False,
                type=click.Path(exists=True, dir_okay=False))
@click.option("--mode", type=click.Choice(VALID_MODES), default=None,
              help="Eclipse type (default: solar, or the config value).")
@click.option("--impact", type=float, default=None,
              help="Impact parameter in [-1, 1].")
@click.option("--moon-scale", type=float, default=None,
              help="Multiplier on the nominal Earth-Moon distance.")
@click.option("--limb-darkening/--no-limb-darkening", default=None,
              help="Use limb-darkened grid sampling for solar flux.")
@click.option("--grid-size", type=int, default=None,
              help="Samples per side of the limb-darkening grid.")
@click.option("--steps", type=int, default=None,
              help="Increments per sweep (steps + 1 samples).")
@click.option("--output-dir", type=click.Path(file_okay=False), default=".",
              show_default=True, help="Directory for CSV and plot output.")
@click.option("--plot/--no-plot", default=True, show_default=True,
              help="Save a PNG of the light curve.")
@click.option("--quiet", is_flag=True, help="Suppress console output.")
def main(config, mode, impact, moon_scale, limb_darkening, grid_size, steps,
         output_dir, plot, quiet):
    """eclipsesim: sweep an eclipse and record its light curve."""
    try:
        if config is not None:
            params, constants, _ = SimulationParameters.from_yaml(config)
        else:
            params, constants = SimulationParameters(), PhysicalConstants()

        overrides = {
            "mode": mode,
            "impact_parameter": impact,
            "moon_distance_scale": moon_scale,
            "limb_darkening": limb_darkening,
            "grid_size": grid_size,
            "n_steps": steps,
        }
        params = replace(params, **{k: v for k, v in overrides.items()
                                    if v is not None})
        curve = run_sweep(params, constants)
    except ConfigurationError as err:
        raise click.BadParameter(str(err))

    os.makedirs(output_dir, exist_ok=True)
    csv_path = os.path.join(output_dir, CSV_NAME)
    write_light_curve(csv_path, curve)

    plot_path = None
    if plot:
        from .plotting import save_light_curve_plot

        plot_path = os.path.join(output_dir, PLOT_NAME)
        save_light_curve_plot(curve, plot_path)

    if quiet:
        return

    summary = curve.summary()
    if config is not None:
        click.echo(f"Config:        {config}")
    click.echo(f"Mode:          {params.mode}")
    click.echo(f"Impact:        {params.impact_parameter:g}")
    click.echo(f"Moon scale:    {params.moon_distance_scale:g}")
    click.echo(f"Limb darkening: {'on' if params.limb_darkening else 'off'}"
               + (f" (grid {params.grid_size})" if params.limb_darkening else ""))
    click.echo(f"Samples:       {summary['n_samples']}")
    click.echo(f"Flux_min:      {summary['min_flux']:.6f} "
               f"at t={summary['time_of_min']:.4f}")
    click.echo(f"Contacts:      {_format_time(summary['first_contact'])} - "
               f"{_format_time(summary['last_contact'])}")
    if params.mode == "lunar":
        click.echo(f"Umbra_max:     {summary['max_umbra_fraction']:.6f}")
        click.echo(f"Penumbra_max:  {summary['max_penumbra_fraction']:.6f}")
    click.echo(f"Wrote {csv_path}")
    if plot_path:
        click.echo(f"Plot saved: {plot_path}")


if __name__ == "__main__":
    main()
