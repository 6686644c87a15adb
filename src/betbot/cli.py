"""CLI entrypoint for the BetBot moneyline pick grader."""

from __future__ import annotations

import asyncio
import json
from datetime import date
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from betbot.adapters.odds_api import OddsAPIAdapter, parse_games
from betbot.config import Settings, get_settings
from betbot.core.display import (
    build_pick_breakdown,
    factor_label,
    factor_tooltip,
    normalize_factor_score,
)
from betbot.core.engine import (
    RecommendationEngine,
    make_pick_record,
    select_daily_pick,
    select_lock_pick,
)
from betbot.core.grading import GradeProfile, get_profile, load_profiles
from betbot.core.narrative import NarrativeGenerator
from betbot.core.odds_math import format_american
from betbot.core.randomness import make_rng
from betbot.models.analysis import FACTOR_LABELS, GameContext, Grade, PickKind, Recommendation
from betbot.models.odds import Game
from betbot.observability.logging import setup_logging
from betbot.providers.simulated import SimulatedStatsProvider

app = typer.Typer(
    name="betbot",
    help="Grade MLB moneyline picks from sportsbook odds.",
    no_args_is_help=True,
)
console = Console()


def _grade_style(grade: Grade) -> str:
    letter = grade.value[0]
    return {"A": "green", "B": "cyan", "C": "yellow"}.get(letter, "red")


def _score_style(score: int) -> str:
    if score >= 80:
        return "green"
    if score >= 70:
        return "white"
    return "red"


def _render_recommendations_table(recs: list[Recommendation], title: str = "Recommendations") -> None:
    if not recs:
        console.print("[dim]No recommendations[/]")
        return
    table = Table(
        title=title,
        show_header=True,
        header_style="bold",
    )
    table.add_column("#", style="dim", width=3)
    table.add_column("Game", width=36)
    table.add_column("Pick", width=24)
    table.add_column("Odds", width=6)
    table.add_column("Grade", width=5)
    table.add_column("Conf", width=5)
    table.add_column("Reasoning")
    for i, rec in enumerate(recs, 1):
        style = _grade_style(rec.grade)
        table.add_row(
            str(i),
            f"{rec.away_team} @ {rec.home_team}"[:36],
            rec.selection[:24],
            format_american(rec.odds),
            f"[{style}]{rec.grade.value}[/]",
            f"{rec.confidence}%",
            rec.reasoning,
        )
    console.print(table)


def _save_last_recommendations(path: Path, recs: list[Recommendation]) -> None:
    data = [r.model_dump(mode="json") for r in recs]
    with open(path, "w") as f:
        json.dump(data, f, indent=0, default=str)


def _load_last_recommendations(path: Path) -> list[Recommendation]:
    if not path.exists():
        return []
    with open(path) as f:
        data = json.load(f)
    return [Recommendation.model_validate(d) for d in data]


def _resolve_profile(settings: Settings, name: Optional[str]) -> GradeProfile:
    try:
        return get_profile(name or settings.grade_profile, settings.profiles_path)
    except ValueError as e:
        console.print(f"[red]✗ {escape(str(e))}[/]")
        raise typer.Exit(1)


def _load_games_file(path: Path) -> list[Game]:
    if not path.exists():
        console.print(f"[red]✗ File not found: {path}[/]")
        raise typer.Exit(1)
    with open(path) as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        console.print("[red]✗ Expected a JSON list of Odds API events[/]")
        raise typer.Exit(1)
    return parse_games(raw)


async def _fetch_live_games(settings: Settings, sport: str) -> list[Game]:
    async with OddsAPIAdapter(
        api_key=settings.odds_api_key,
        base_url=settings.odds_api_base_url,
        requests_per_second=settings.odds_api_requests_per_second,
    ) as odds_api:
        console.print(f"[blue]Fetching odds for {sport}...[/]")
        return await odds_api.fetch_games(
            sport=sport,
            regions=settings.regions,
            bookmakers=settings.bookmakers,
        )


@app.callback()
def _main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override log level"),
    log_format: Optional[str] = typer.Option(None, "--log-format", help="json or console"),
) -> None:
    setup_logging(level=log_level, format=log_format)


@app.command("recommend")
def recommend(
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="JSON file of raw Odds API events (skips the live API)"),
    sport: Optional[str] = typer.Option(None, "--sport", "-s", help="Sport key (default from config)"),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="Grade profile name"),
    min_grade: Optional[str] = typer.Option(None, "--min-grade", "-g", help="Lowest grade to keep (e.g. B)"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible scores"),
) -> None:
    """Grade today's games and list the picks, best first."""
    settings = get_settings()
    grade_profile = _resolve_profile(settings, profile)

    try:
        floor = Grade(min_grade) if min_grade else settings.min_grade
    except ValueError:
        console.print(f"[red]✗ Unknown grade {min_grade!r}[/]")
        raise typer.Exit(1)

    sport = sport or settings.sport
    if file is not None:
        games = _load_games_file(file)
    else:
        if not settings.odds_api_configured:
            console.print("[red]✗ The Odds API not configured. Set BETBOT_ODDS_API_KEY or pass --file[/]")
            raise typer.Exit(1)
        try:
            games = asyncio.run(_fetch_live_games(settings, sport))
        except Exception as e:
            console.print(f"[red]✗ Failed to fetch odds: {escape(str(e))}[/]")
            raise typer.Exit(1)

    console.print(f"[green]✓[/] Loaded {len(games)} games")

    rng = make_rng(seed if seed is not None else settings.random_seed)
    engine = RecommendationEngine(
        stats_provider=SimulatedStatsProvider(rng),
        profile=grade_profile,
        rng=rng,
        min_grade=floor,
        reasoning_threshold=settings.reasoning_threshold,
    )
    recs = asyncio.run(engine.generate_recommendations(games))

    _render_recommendations_table(recs, title=f"Picks ({grade_profile.name}, min {floor.value})")
    _save_last_recommendations(settings.last_recommendations_path, recs)
    if recs:
        console.print("[dim]Run [bold]betbot detail N[/] for a full breakdown.[/]")


@app.command("detail")
def detail(
    index: int = typer.Argument(1, help="Pick number from the last run (1-based)"),
    lock: bool = typer.Option(False, "--lock", help="Title the write-up as a lock pick"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for narrative phrasing"),
) -> None:
    """Show the full breakdown for a pick from the last run."""
    settings = get_settings()
    recs = _load_last_recommendations(settings.last_recommendations_path)
    if not recs:
        console.print("[yellow]No picks saved. Run [bold]betbot recommend[/] first.[/]")
        raise typer.Exit(1)
    if index < 1 or index > len(recs):
        console.print(f"[red]Invalid index {index}. Use 1-{len(recs)}.[/]")
        raise typer.Exit(1)

    rec = recs[index - 1]
    breakdown = build_pick_breakdown(rec, is_lock_pick=lock, timezone=settings.timezone)
    analysis = breakdown.grade_analysis

    console.print(f"\n[bold]{breakdown.title}[/]\n")
    console.print(f"  [bold]Game:[/]   {breakdown.pick_details.game}")
    console.print(f"  [bold]Pick:[/]   {breakdown.pick_details.pick}")
    console.print(f"  [bold]Venue:[/]  {breakdown.pick_details.venue}")
    console.print(f"  [bold]Time:[/]   {breakdown.pick_details.time}")
    console.print()
    for line in (
        analysis.summary,
        analysis.market_analysis,
        analysis.factor_breakdown,
        analysis.key_strength,
        analysis.investment,
    ):
        console.print(f"  {line}")

    table = Table(title="Factors", show_header=True, header_style="bold")
    table.add_column("Factor")
    table.add_column("Grade", width=5)
    table.add_column("Score", width=5)
    table.add_column("Description")
    for row in breakdown.factors:
        table.add_row(row.name, row.grade.value, f"[{_score_style(row.score)}]{row.score}[/]", row.description)
    console.print()
    console.print(table)

    narratives = NarrativeGenerator(make_rng(seed)).generate_all(
        rec.analysis, GameContext(is_home_game=rec.is_home)
    )
    console.print("\n[bold]Analyst notes[/]")
    for name, score in rec.analysis.as_dict().items():
        label = factor_label(name)
        normalized = normalize_factor_score(score)
        console.print(f"  [bold]{label}[/] [dim]({factor_tooltip(normalized, label)})[/]")
        console.print(f"    {narratives[label]}")
    console.print()


@app.command("pick")
def pick(
    lock: bool = typer.Option(False, "--lock", help="Choose the lock pick instead of the pick of the day"),
    pick_date: Optional[str] = typer.Option(None, "--date", help="Pick date, YYYY-MM-DD (default today)"),
    as_json: bool = typer.Option(False, "--json", help="Print the pick record as JSON"),
) -> None:
    """Choose the pick of the day (or the lock) from the last run."""
    settings = get_settings()
    recs = _load_last_recommendations(settings.last_recommendations_path)
    if not recs:
        console.print("[yellow]No picks saved. Run [bold]betbot recommend[/] first.[/]")
        raise typer.Exit(1)

    try:
        day = date.fromisoformat(pick_date) if pick_date else None
    except ValueError:
        console.print(f"[red]✗ Invalid date {pick_date!r}, expected YYYY-MM-DD[/]")
        raise typer.Exit(1)

    kind = PickKind.LOCK if lock else PickKind.DAILY
    rec = select_lock_pick(recs) if lock else select_daily_pick(recs)
    record = make_pick_record(rec, kind, pick_date=day)

    if as_json:
        typer.echo(record.model_dump_json(indent=2))
        return

    breakdown = build_pick_breakdown(rec, venue=record.venue, is_lock_pick=lock, timezone=settings.timezone)
    style = _grade_style(rec.grade)
    console.print(f"\n[bold]{breakdown.title}[/]")
    console.print(f"  [dim]{record.id} ({record.status})[/]\n")
    console.print(f"  [bold]Pick:[/]   {breakdown.pick_details.pick} vs {rec.opponent}")
    console.print(f"  [bold]Grade:[/]  [{style}]{rec.grade.value}[/] ({rec.confidence}% confidence)")
    console.print(f"  [bold]Venue:[/]  {record.venue}")
    console.print(f"  [bold]Time:[/]   {breakdown.pick_details.time}")
    console.print(f"\n  {rec.reasoning}\n")


@app.command("profiles")
def profiles() -> None:
    """List available grade profiles."""
    settings = get_settings()
    try:
        available = load_profiles(settings.profiles_path)
    except ValueError as e:
        console.print(f"[red]✗ {escape(str(e))}[/]")
        raise typer.Exit(1)

    table = Table(title="Grade Profiles", show_header=True, header_style="bold")
    table.add_column("Name", no_wrap=True)
    table.add_column("Weights (off/pit/sit/mom/mkt/sys)")
    table.add_column("Scale")
    table.add_column("Ladder")
    for name, p in available.items():
        weights = "/".join(f"{p.weights[f]:.2f}" for f in FACTOR_LABELS)
        ladder = ", ".join(f"{t.min_score:g} {t.grade.value}" for t in p.ladder.thresholds)
        marker = " *" if name == settings.grade_profile else ""
        table.add_row(
            f"{name}{marker}",
            weights,
            "-" if p.scale is None else f"{p.scale:g}",
            f"{ladder}, else {p.ladder.floor.value}",
        )
    console.print(table)


@app.command("grade")
def grade(
    score: float = typer.Argument(..., help="Confidence score to grade"),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="Grade profile name"),
) -> None:
    """Map a confidence score through a profile's grade ladder."""
    settings = get_settings()
    grade_profile = _resolve_profile(settings, profile)
    result = grade_profile.grade(score)
    console.print(
        f"{score:g} → [{_grade_style(result)}]{result.value}[/] "
        f"(profile {grade_profile.name}, rank {result.rank})"
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
