"""Command line interface for the consensus engine."""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

import click

from ... import __version__
from ...domain.tournament.entities.contender import Contender
from ...domain.tournament.exceptions import TournamentDomainError
from ...infrastructure.config import load_settings
from ...infrastructure.monitoring.logging_setup import setup_logging
from ..api.dependencies.container import build_engine
from .reports import attribute_summary, format_output, process_report


class CLIContext:
    """Global CLI context."""

    def __init__(self):
        self.settings = None
        self.verbose = False


pass_context = click.make_pass_decorator(CLIContext, ensure=True)


def load_contender(path: str) -> Contender:
    """Read a contender from a JSON file with id, name and attributes."""
    with open(path, "r", encoding="utf-8") as f:
        data: Dict[str, Any] = json.load(f)

    if not isinstance(data, dict):
        raise click.BadParameter(f"{path} must contain a JSON object")

    missing = [key for key in ("id", "name", "attributes") if key not in data]
    if missing:
        raise click.BadParameter(f"{path} is missing: {', '.join(missing)}")

    return Contender.create(
        data["id"],
        data["name"],
        data["attributes"],
        prompt=data.get("prompt", ""),
        thumbnail_url=data.get("thumbnail_url") or data.get("finalThumbnailUrl"),
        model_url=data.get("model_url") or data.get("finalModelUrl"),
        video_url=data.get("video_url"),
        texture_urls=tuple(data.get("texture_urls") or ()),
    )


@click.group()
@click.option("--config", "-c", type=click.Path(exists=True), help="YAML settings file")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx, config, verbose, debug):
    """
    Predictive Triadic Consensus Engine CLI

    Decide matches between two contenders with three criterion-bound
    evaluators, a discussion round, consensus and a predictive blend.

    Examples:
        ptce determine red.json blue.json
        ptce determine red.json blue.json --detailed --format json
        ptce summary red.json
    """
    ctx.ensure_object(CLIContext)
    ctx.obj.verbose = verbose

    try:
        ctx.obj.settings = load_settings(config)
    except Exception as e:
        click.echo(f"Error loading config: {e}", err=True)
        sys.exit(1)

    settings = ctx.obj.settings
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = settings.log_level
    setup_logging(level, log_file=settings.log_file, json_format=settings.log_json)


@cli.command()
@click.argument("first", type=click.Path(exists=True, dir_okay=False))
@click.argument("second", type=click.Path(exists=True, dir_okay=False))
@click.option("--detailed", is_flag=True, help="Include every intermediate artifact")
@click.option("--heuristic", is_flag=True, help="Skip the LLM and score from attributes")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json", "yaml"]),
    default="text",
    help="Output format",
)
@pass_context
def determine(ctx, first, second, detailed, heuristic, output_format):
    """
    Decide the winner between two contenders described in JSON files.

    Examples:
        ptce determine red.json blue.json
        ptce determine red.json blue.json --heuristic --format json
    """
    try:
        first_contender = load_contender(first)
        second_contender = load_contender(second)
    except (OSError, ValueError, TournamentDomainError) as e:
        click.echo(f"Error loading contenders: {e}", err=True)
        sys.exit(1)

    engine = build_engine(ctx.settings, force_heuristic=heuristic)

    async def run():
        try:
            return await engine.determine_winner_with_details(first_contender, second_contender)
        finally:
            await engine.close()

    try:
        result = asyncio.run(run())
    except TournamentDomainError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    if output_format == "text":
        if detailed:
            click.echo(process_report(first_contender, second_contender, result))
        else:
            click.echo(f"Winner: {result.winner.name} (ID: {result.winner.id})")
            for contender_id, score in result.scores.items():
                click.echo(f"  {contender_id}: {score:.2f}")
            click.echo(f"Confidence: {result.confidence:.2f}")
            click.echo(f"Reasoning: {result.reasoning}")
        return

    data = result.to_dict() if detailed else result.result.to_dict()
    click.echo(format_output(data, output_format))


@cli.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
def summary(paths):
    """
    Name each contender's two strongest attributes.

    Examples:
        ptce summary red.json blue.json
    """
    for path in paths:
        try:
            click.echo(attribute_summary(load_contender(path)))
        except (OSError, ValueError, TournamentDomainError) as e:
            click.echo(f"Error reading {Path(path).name}: {e}", err=True)
            sys.exit(1)


@cli.command()
@click.option("--host", default="127.0.0.1", help="Bind address")
@click.option("--port", default=8000, type=int, help="Bind port")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host, port, reload):
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run(
        "ptce.presentation.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
