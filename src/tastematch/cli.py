"""CLI entrypoint for tastematch."""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import typer

from tastematch.errors import RecommenderError
from tastematch.models import TrainingSummary

if TYPE_CHECKING:
    from tastematch.recommend import RecommendationEngine

app = typer.Typer(
    name="tastematch",
    help="Content-based track recommendations from seed tracks",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress to stderr"),
) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _train(libraries: list[Path]) -> tuple["RecommendationEngine", TrainingSummary]:
    from tastematch.ingest import dedupe_tracks, load_tracks
    from tastematch.recommend import RecommendationEngine

    try:
        tracks = dedupe_tracks(load_tracks(*libraries))
    except (OSError, ValueError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    engine = RecommendationEngine()
    summary = engine.train(tracks, progress=True)
    return engine, summary


@app.command()
def train(
    libraries: list[Path] = typer.Argument(..., help="JSON exports of saved or recently played tracks"),
) -> None:
    """Train on track exports and report how many tracks were usable."""
    _, summary = _train(libraries)
    typer.echo(f"Done: {summary.accepted} tracks accepted, {summary.skipped} skipped")


@app.command()
def recommend(
    libraries: list[Path] = typer.Argument(..., help="JSON exports of saved or recently played tracks"),
    seed: list[str] = typer.Option([], "--seed", "-s", help="Seed track id (repeatable)"),
    seeds_file: Path | None = typer.Option(None, "--seeds", help="JSON export whose tracks are used as seeds"),
    n: int = typer.Option(10, "-n", help="Number of results"),
) -> None:
    """Recommend tracks similar to the seed tracks."""
    from tastematch.ingest import load_tracks

    seeds: list = list(seed)
    if seeds_file is not None:
        try:
            seeds.extend(load_tracks(seeds_file))
        except (OSError, ValueError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1)
    if not seeds:
        typer.echo("Specify --seed or --seeds", err=True)
        raise typer.Exit(1)

    engine, _ = _train(libraries)
    try:
        results = engine.recommend(seeds, limit=n)
    except RecommenderError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    typer.echo(f"\nRecommended from {len(seeds)} seed tracks:\n")
    for i, r in enumerate(results, 1):
        t = engine.track(r.track_id)
        typer.echo(f"  {i:2d}. {t.artist_name} - {t.title} [{r.score:.3f}]")


@app.command()
def profile(
    libraries: list[Path] = typer.Argument(..., help="JSON exports of saved or recently played tracks"),
) -> None:
    """Show a taste profile summary of the trained tracks."""
    engine, _ = _train(libraries)
    try:
        p = engine.taste_profile()
    except RecommenderError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    typer.echo(f"\nLibrary: {p['total_tracks']} tracks\n")

    typer.echo("Top Genres:")
    for genre, count in p["top_genres"]:
        typer.echo(f"  {genre}: {count}")

    typer.echo("\nTop Artists:")
    for artist, count in p["top_artists"]:
        typer.echo(f"  {artist}: {count}")

    pop = p["popularity"]
    typer.echo(f"\nPopularity: mean {pop['mean']:.1f} (min {pop['min']:g}, max {pop['max']:g})")


if __name__ == "__main__":
    app()
