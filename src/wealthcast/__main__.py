import logging

import click

from wealthcast.config import Settings
from wealthcast.logging_config import setup_logging

logger = logging.getLogger(__name__)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """wealthcast - Net-worth Monte Carlo projections"""
    settings = Settings()
    setup_logging(settings.log_dir, verbose=verbose)
    ctx.obj = settings


@cli.command()
@click.option("--seed", type=int, default=None, help="Generator seed (default: configured)")
@click.option("--paths", "path_count", type=int, default=None,
              help="Number of simulated paths (default: configured)")
@click.option("--days", "horizon_days", type=int, required=True, help="Days to project")
@click.option("--start", "start_value", type=float, default=None,
              help="Starting net worth (default: configured)")
@click.option("--drift-mean", type=float, default=0.0, help="Mean daily surplus")
@click.option("--drift-std", type=float, default=0.0, help="Std-dev of daily surplus")
@click.option("--return-mean", type=float, default=0.0, help="Mean daily return")
@click.option("--return-std", type=float, default=0.0, help="Std-dev of daily return")
@click.option("--seeding", type=click.Choice(["stream", "replay", "offset"]), default=None,
              help="How paths map onto the generator (default: configured)")
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False), default=None,
              help="Write the p10/p50/p90 bands to a CSV file")
@click.pass_obj
def project(settings: Settings, seed: int | None, path_count: int | None, horizon_days: int,
            start_value: float | None, drift_mean: float, drift_std: float,
            return_mean: float, return_std: float, seeding: str | None,
            csv_path: str | None):
    """Run a projection from explicit daily parameters."""
    from wealthcast.analysis.projection import InvalidParameterError, SimulationParams

    try:
        params = SimulationParams(
            seed=settings.projection_seed if seed is None else seed,
            path_count=settings.projection_path_count if path_count is None else path_count,
            horizon_days=horizon_days,
            start_value=settings.projection_start_value if start_value is None else start_value,
            daily_drift_mean=drift_mean,
            daily_drift_std_dev=drift_std,
            daily_return_mean=return_mean,
            daily_return_std_dev=return_std,
            seeding=seeding or settings.projection_seeding,
        )
    except InvalidParameterError as e:
        raise click.ClickException(str(e))

    _run_and_report(params, settings, csv_path)


@cli.command()
@click.option("--years", "-y", type=int, default=5, show_default=True,
              help="Projection horizon in years")
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False), default=None,
              help="Write the p10/p50/p90 bands to a CSV file")
@click.pass_obj
def demo(settings: Settings, years: int, csv_path: str | None):
    """Run the dashboard's demo projection."""
    from wealthcast.analysis.forecast import demo_params
    from wealthcast.analysis.projection import InvalidParameterError

    try:
        params = demo_params(years, settings)
    except InvalidParameterError as e:
        raise click.ClickException(str(e))

    _run_and_report(params, settings, csv_path)


@cli.command()
@click.option("--host", default=None, help="Bind address (default: configured)")
@click.option("--port", type=int, default=None, help="Port (default: configured)")
@click.pass_obj
def serve(settings: Settings, host: str | None, port: int | None):
    """Start the HTTP API."""
    import uvicorn

    from wealthcast.web.app import create_app

    host = host or settings.api_host
    port = port or settings.api_port
    click.echo(f"Serving wealthcast API on {host}:{port}")
    uvicorn.run(create_app(settings), host=host, port=port, log_config=None)


def _run_and_report(params, settings: Settings, csv_path: str | None):
    from wealthcast.analysis.forecast import bands_frame, run_projection, summarize_projection
    from wealthcast.analysis.projection import NonFiniteValueError

    click.echo(
        f"Projecting {params.path_count} paths over {params.horizon_days} days "
        f"(seed {params.seed}, {params.seeding.value})"
    )

    try:
        run = run_projection(params)
    except NonFiniteValueError as e:
        raise click.ClickException(f"Projection failed: {e}")

    summaries = summarize_projection(run, days_per_year=settings.days_per_year)
    click.echo(f"\n{'horizon':>8} {'p10':>14} {'p50':>14} {'p90':>14} {'growth':>8} {'depleted':>9}")
    for s in summaries.values():
        click.echo(
            f"{s['label']:>8} {s['p10']:>14,.2f} {s['p50']:>14,.2f} {s['p90']:>14,.2f} "
            f"{s['growth_prob']:>8.2%} {s['depletion_prob']:>9.2%}"
        )

    if csv_path:
        bands_frame(run).to_csv(csv_path)
        click.echo(f"\nBands written to {csv_path}")


if __name__ == "__main__":
    cli()
