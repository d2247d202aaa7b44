"""CLI for the Lock-in Scoring Engine.

Provides a command-line interface for assessing technologies, browsing
historical trajectories and presets, and running the HTTP API.
"""

import json
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .app_logging import setup_logging
from .config import find_config_file, get_config, load_config, reset_config
from .engine import AssessmentEngine
from .exceptions import LockInScorerError
from .presets import get_preset, list_presets
from .schema import DIMENSION_DESCRIPTIONS, AssessmentResult, ScoringStrategy
from .trajectories import TrajectoryStore

console = Console()

STRATEGY_CHOICES = [s.value for s in ScoringStrategy]


@click.group()
@click.version_option(version="1.0.0", prog_name="lockin-scorer")
@click.option(
    "--config", "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration YAML file"
)
def main(config_path: Optional[Path]):
    """Lock-in Early Warning Scorer.

    Estimates how close an emerging animal-use technology is to
    irreversible lock-in, and compares it with the historical trajectory
    of battery-cage egg production.
    """
    config_path = config_path or find_config_file()
    if config_path:
        try:
            load_config(config_path)
        except Exception as e:
            console.print(f"[yellow]Warning:[/yellow] Could not load config: {e}")
            reset_config()
    else:
        reset_config()


def parse_dimension_options(dims: tuple) -> dict[str, float]:
    """Parse repeated ``name=value`` options into a ratings dict."""
    ratings: dict[str, float] = {}
    for item in dims:
        if "=" not in item:
            raise click.BadParameter(f"Expected name=value, got '{item}'", param_hint="--dim")
        key, value = item.split("=", 1)
        try:
            ratings[key.strip()] = float(value.strip())
        except ValueError:
            raise click.BadParameter(f"Rating for '{key.strip()}' must be a number", param_hint="--dim")
    return ratings


@main.command("assess")
@click.option(
    "--dim", "-d",
    "dims",
    multiple=True,
    help="Dimension rating (format: name=value, e.g. animals=80)"
)
@click.option(
    "--input", "-i",
    "input_file",
    type=click.Path(exists=True),
    help="JSON file with dimension ratings"
)
@click.option(
    "--preset", "-p",
    help="Name of a reference preset to assess"
)
@click.option(
    "--strategy", "-s",
    type=click.Choice(STRATEGY_CHOICES),
    help="Scoring strategy (default: detected from the dimension names)"
)
@click.option(
    "--year", "-y",
    type=int,
    help="Year the lock-in time is measured from (default: current year)"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    help="Output file for JSON results"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output raw JSON instead of formatted text"
)
def assess_cmd(
    dims: tuple,
    input_file: Optional[str],
    preset: Optional[str],
    strategy: Optional[str],
    year: Optional[int],
    out: Optional[str],
    json_output: bool,
):
    """Assess a technology from its dimension ratings.

    Ratings from --input, --preset and --dim are merged in that order.

    Examples:
        lockin-scorer assess -d animals=80 -d suffering=70 -d growth=60
        lockin-scorer assess --preset "Insect Farming 2024"
        lockin-scorer assess -i ratings.json --year 2025 -j
    """
    ratings: dict = {}
    try:
        if input_file:
            with open(input_file, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise click.BadParameter("Input file must contain a JSON object", param_hint="--input")
            ratings.update(data)
        if preset:
            ratings.update(get_preset(preset).values)
        ratings.update(parse_dimension_options(dims))

        engine = AssessmentEngine()
        result = engine.assess(ratings, strategy=strategy, current_year=year)
    except click.BadParameter:
        raise
    except (LockInScorerError, json.JSONDecodeError, OSError) as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    if json_output:
        output_json(result, out)
    else:
        display_result(result)
        if out:
            output_json(result, out)
            console.print(f"\n[green]Results saved to {out}[/green]")


@main.command("trajectory")
@click.option("--species", "-s", default="chickens", help="Species the trajectory belongs to")
@click.option("--tech", "-t", default="factoryFarming", help="Technology identifier")
@click.option("--list", "list_all", is_flag=True, help="List available species and technologies")
@click.option("--json-output", "-j", is_flag=True, help="Output raw JSON instead of a table")
def trajectory_cmd(species: str, tech: str, list_all: bool, json_output: bool):
    """Show a historical reference trajectory."""
    try:
        store = TrajectoryStore.from_config()
        if list_all:
            display_index(store.index(), json_output)
            return
        data = store.get_trajectory(tech, species)
    except LockInScorerError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    if json_output:
        print(json.dumps(data.to_payload(), indent=2, ensure_ascii=False))
        return

    table = Table(title=data.technology or f"{tech} ({species})")
    table.add_column("Year", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Stage")
    table.add_column("Uncertainty")
    table.add_column("Milestone")
    for point in data.trajectory:
        table.add_row(
            str(point.year),
            str(point.score),
            point.stage,
            point.uncertainty.value if point.uncertainty else "",
            point.milestone or "",
        )
    console.print(table)
    if data.description:
        console.print(f"[dim]{data.description}[/dim]")


@main.command("presets")
@click.option("--json-output", "-j", is_flag=True, help="Output raw JSON instead of a table")
def presets_cmd(json_output: bool):
    """List reference assessment presets."""
    presets = list_presets()
    if json_output:
        print(json.dumps([p.model_dump(mode="json") for p in presets], indent=2))
        return

    table = Table(title="Assessment Presets")
    table.add_column("Name", style="bold cyan")
    table.add_column("Strategy")
    table.add_column("Description")
    for preset in presets:
        table.add_row(preset.name, preset.strategy.value, preset.description or "")
    console.print(table)


@main.command("serve")
@click.option("--host", default=None, help="Interface to bind (default: from config)")
@click.option("--port", default=None, type=int, help="Port to run the server on (default: from config)")
@click.option("--log-level", default=None, help="Log level (default: from config)")
@click.option("--dev", is_flag=True, help="Use rich console logging")
def serve_cmd(host: Optional[str], port: Optional[int], log_level: Optional[str], dev: bool):
    """Run the HTTP API."""
    from .server import serve

    setup_logging(level=log_level or get_config().server.log_level, dev_mode=dev)
    serve(host=host, port=port, log_level=log_level)


def display_result(result: AssessmentResult):
    """Display an assessment in formatted text."""
    stage_color = {
        "Early Research": "green",
        "Early Commercialization": "green",
        "Scaling": "yellow",
        "Infrastructure Building": "dark_orange",
    }.get(result.stage.value, "red")
    window_color = {
        "Monitor": "green",
        "Act Soon": "yellow",
    }.get(result.intervention_window.value, "red")

    score_line = f"Score: [bold]{result.score}/100[/bold]"
    if result.range:
        score_line += f" (range {result.range.lower}-{result.range.upper})"

    console.print(Panel(
        f"{score_line}\n"
        f"Stage: [{stage_color}]{result.stage.value}[/{stage_color}]\n"
        f"Intervention window: [{window_color}]{result.intervention_window.value}[/{window_color}]\n"
        f"Strategy: {result.strategy.value}",
        title="Lock-in Assessment",
    ))

    match = result.historical_match
    if match.found:
        console.print(
            f"\n[bold]Historical match:[/bold] battery-cage egg production in "
            f"[bold magenta]{match.year}[/bold magenta] (score {match.score}, {match.stage})"
        )
        if match.milestone:
            console.print(f"  [dim]{match.milestone}[/dim]")
    if result.time_until_lockin:
        console.print(f"[bold]Time until lock-in:[/bold] {result.time_until_lockin}")

    if result.key_metrics:
        metrics = result.key_metrics
        console.print("\n[bold]Key Metrics:[/bold]")
        console.print(f"  • Animals affected: {metrics.animals_affected}")
        console.print(f"  • Suffering: {metrics.suffering_hours}")
        console.print(f"  • Advocacy level: {metrics.advocacy_orgs}")

    table = Table(title="Dimensions", show_header=True)
    table.add_column("Dimension")
    table.add_column("Rating", justify="right")
    for key, value in result.dimensions.items():
        label = DIMENSION_DESCRIPTIONS.get(key, {}).get("label", key)
        table.add_row(label, str(value))
    console.print()
    console.print(table)
    console.print(f"\n{result.message}")


def display_index(index: dict, json_output: bool):
    if json_output:
        print(json.dumps(index, indent=2, ensure_ascii=False))
        return
    table = Table(title="Available Trajectories")
    table.add_column("Species", style="bold")
    table.add_column("Technology ID", style="cyan")
    table.add_column("Technology")
    for species, technologies in index.items():
        for tech, name in technologies.items():
            table.add_row(species, tech, name or "")
    console.print(table)


def output_json(result: AssessmentResult, out_path: Optional[str]):
    """Output result as JSON."""
    json_str = json.dumps(result.to_response(), indent=2, ensure_ascii=False)

    if out_path:
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(json_str)
    else:
        print(json_str)


@main.command("init-config")
@click.option(
    "--out", "-o",
    type=click.Path(),
    default="lockin-config.yaml",
    help="Output path for the configuration file"
)
@click.option(
    "--force", "-f",
    is_flag=True,
    help="Overwrite existing config file"
)
def init_config_cmd(out: str, force: bool):
    """Generate a default configuration file.

    Example:
        lockin-scorer init-config --out my-config.yaml
    """
    from .config import save_default_config

    out_path = Path(out)
    if out_path.exists() and not force:
        console.print(f"[red]Error:[/red] Config file already exists: {out}")
        console.print("Use --force to overwrite")
        sys.exit(1)

    try:
        save_default_config(out_path)
        console.print(f"[green]✓[/green] Config file created: {out}")
        console.print("\nThis file configures:")
        console.print("  • scoring_weights - How much each dimension contributes to the weighted-7 score")
        console.print("  • stage_thresholds / intervention_thresholds - Score bands for each label")
        console.print("  • uncertainty / lockin_time - Range width and lock-in year offset")
        console.print("  • trajectories - Dataset path and reference baseline")
        console.print("\nThe scorer will look for config in this order:")
        console.print("  1. LOCKIN_SCORER_CONFIG environment variable")
        console.print("  2. ./lockin-config.yaml (current directory)")
        console.print("  3. ~/.config/lockin-scorer/config.yaml")
    except OSError as e:
        console.print(f"[red]Error creating config:[/red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
