"""
Command-line interface for pareto-gp.

Provides commands for:
- Running an evolutionary search from a properties file
- Listing the registered operators
"""

import logging
import sys

import click

from paretogp import __version__

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("paretogp")


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def main(verbose: bool) -> None:
    """pareto-gp - Multi-objective evolutionary search."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@main.command()
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--seed", type=int, default=None, help="Override the configured seed")
@click.option("--generations", "-g", type=int, default=None, help="Override the generation budget")
@click.option("--plugin", "-p", "plugins", multiple=True, help="Module registering operators")
@click.option("--models", "-m", default=None, help="Models log path (overrides models_path)")
def run(config_file: str, seed: int, generations: int, plugins: tuple, models: str) -> None:
    """Run an evolutionary search described by CONFIG_FILE."""
    from paretogp.config import load_config
    from paretogp.evolution.engine import GenerationalEngine
    from paretogp.exceptions import ParetoGPError
    from paretogp.operators.registry import default_registry
    from paretogp.reporting import ModelsLog

    try:
        config = load_config(config_file)
        if seed is not None:
            config.seed = seed
        if generations is not None:
            config.n_generations = generations
        if models is not None:
            config.models_path = models
        config.plugins = list(config.plugins) + [p for p in plugins if p not in config.plugins]
        config.validate()

        click.echo(f"Running pareto-gp with seed: {config.seed}")
        logger.debug(f"Effective configuration: {config.to_dict()}")

        models_log = None
        if config.models_path:
            models_log = ModelsLog(config.models_path, config.primary_objective)
            models_log.reset()

        engine = GenerationalEngine.from_config(config, default_registry)
        result = engine.run()

        if models_log is not None:
            models_log.append(result.best_history)
    except ParetoGPError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    # Display results
    click.echo("\n" + "=" * 50)
    click.echo(f"Generations: {result.n_generations}")
    if result.stop_reason:
        click.echo(f"Stopped early: {result.stop_reason}")
    click.echo(f"Pareto front size: {len(result.pareto_front)}")
    click.echo(f"Best: {result.best.genome}")
    for obj, value in result.best.fitness.items():
        click.echo(f"  {obj}: {value:.6f}")
    click.echo("=" * 50)


@main.command()
@click.option("--plugin", "-p", "plugins", multiple=True, help="Module registering operators")
def operators(plugins: tuple) -> None:
    """List registered operator identifiers."""
    from paretogp.exceptions import ConfigurationError
    from paretogp.operators.registry import OPERATOR_KINDS, default_registry
    from paretogp.operators.selection import SELECTION_STRATEGIES
    from paretogp.evolution.best import BEST_PICKERS

    try:
        default_registry.load_plugins(plugins)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for kind in OPERATOR_KINDS:
        names = default_registry.names(kind)
        click.echo(f"{kind}: {', '.join(names) if names else '(none)'}")
    click.echo(f"selection: {', '.join(sorted(SELECTION_STRATEGIES))}")
    click.echo(f"front_rank_method: {', '.join(sorted(BEST_PICKERS))}")


if __name__ == "__main__":
    main()
