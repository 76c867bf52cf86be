"""Command-line interface for arff_logreg."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer

from ..config import AppConfig, load_training_config
from ..errors import ArffLogRegError
from ..models.logreg import IterationStats
from ..pipeline import run_training
from ..utils import get_logger, json_log

app = typer.Typer(help='ARFF logistic regression CLI', no_args_is_help=True)

log = get_logger(__name__)


@app.callback()
def main() -> None:
    """Batch gradient-descent logistic regression on ARFF datasets."""


def _echo_progress(stats: IterationStats) -> None:
    typer.echo(
        f'Iteration {stats.iteration}: bias={stats.bias:.6f} '
        f'weight={stats.weight_sample:.6f} delta_cost={stats.delta_cost:.6f}'
    )


def _apply_overrides(config: AppConfig, **overrides: object) -> AppConfig:
    values = {key: value for key, value in overrides.items() if value is not None}
    if not values:
        return config
    return replace(config, training=replace(config.training, **values))


@app.command('train')
def train(
    data: Annotated[
        Path | None,
        typer.Option(
            '--data',
            '-d',
            exists=True,
            readable=True,
            dir_okay=False,
            help='Path to the ARFF training file. Defaults to data.path from the config.',
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            '--config',
            '-c',
            exists=True,
            readable=True,
            dir_okay=False,
            help='Path to training configuration YAML.',
        ),
    ] = None,
    learning_rate: Annotated[
        float | None,
        typer.Option('--learning-rate', help='Gradient step size (default: 50.0).'),
    ] = None,
    threshold: Annotated[
        float | None,
        typer.Option('--threshold', help='Convergence threshold on cost decrease (default: 1.0).'),
    ] = None,
    max_iterations: Annotated[
        int | None,
        typer.Option('--max-iterations', help='Iteration cap (default: 200).'),
    ] = None,
    weight_init: Annotated[
        str | None,
        typer.Option('--weight-init', help='Initial weights: zeros, ones or constant.'),
    ] = None,
    init_value: Annotated[
        float | None,
        typer.Option('--init-value', help='Fill value used by --weight-init constant.'),
    ] = None,
    update_bias: Annotated[
        bool,
        typer.Option('--update-bias', help='Apply gradient updates to the bias as well.'),
    ] = False,
    progress: Annotated[
        bool,
        typer.Option('--progress/--no-progress', help='Print per-iteration weights.'),
    ] = True,
) -> None:
    """Train a binary logistic-regression model on an ARFF file."""
    try:
        cfg = load_training_config(config) if config is not None else AppConfig()
        cfg = _apply_overrides(
            cfg,
            learning_rate=learning_rate,
            convergence_threshold=threshold,
            max_iterations=max_iterations,
            weight_init=weight_init,
            init_value=init_value,
            update_bias=update_bias or None,
        )
    except ValueError as exc:
        typer.echo(f'Invalid configuration: {exc}', err=True)
        raise typer.Exit(code=2) from exc

    data_path = data if data is not None else cfg.data.path
    if data_path is None:
        typer.echo('No training data given; pass --data or set data.path in the config.', err=True)
        raise typer.Exit(code=2)

    log.info(
        json_log(
            'cli.train.start',
            component='cli',
            data=str(data_path),
            config=str(config) if config else None,
        ),
    )
    try:
        report = run_training(
            data_path,
            cfg.training,
            callback=_echo_progress if progress else None,
        )
    except ArffLogRegError as exc:
        log.error(json_log('cli.train.failed', component='cli', error=str(exc)))
        typer.echo(f'Training failed: {exc}', err=True)
        raise typer.Exit(code=1) from exc

    result = report.result
    typer.echo(f'Iterations: {result.iterations} ({result.stop_reason})')
    typer.echo(f'Final cost: {result.cost:.6f}')
    typer.echo(f'Training accuracy: {report.metrics.accuracy:.4f}')
    typer.echo(f'Time taken is {report.duration_seconds:.2f} seconds.')
    log.info(
        json_log(
            'cli.train.completed',
            component='cli',
            iterations=result.iterations,
            weights=result.weights.tolist(),
        ),
    )


if __name__ == '__main__':
    app()
