#!/usr/bin/env python3
"""
CLI for playing and benchmarking the Crease Timing game
"""
import logging
import random
import select
import sys
import time
from collections import Counter
from typing import Iterator

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.panel import Panel
from rich.progress import track

from app.config import settings
from app.engine import InningsController, InningsSnapshot, SwingResult, OUTCOME_BANDS, timing_hint
from app.engine.errors import InningsError
from app.engine.innings import OVERS_CHOICES, WICKETS_CHOICES
from app.engine.outcomes import MISTIME_WICKET_PROBABILITY

console = Console()

TONE_STYLES = {
    "boundary": "bold green",
    "runs": "blue",
    "wicket": "bold red",
    "dot": "grey50",
}


def now_ms() -> float:
    return time.monotonic() * 1000


@click.group()
@click.option("--log-level", default="WARNING", help="Logging level for engine messages")
def cli(log_level: str):
    """Crease Timing - swing when the ball reaches the bat"""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _scoreboard(snapshot: InningsSnapshot) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Score", justify="right")
    table.add_column("Wkts", justify="right")
    table.add_column("Over", justify="right")
    table.add_row(
        str(snapshot.score),
        f"{snapshot.wickets}/{snapshot.max_wickets}",
        f"{snapshot.overs_display} / {snapshot.total_overs}",
    )
    return table


def _abort(error: InningsError):
    console.print(f"[red]Error: {error}[/red]")
    raise SystemExit(1)


def _drain_stdin():
    """Discard key presses made while no ball was in flight"""
    while select.select([sys.stdin], [], [], 0)[0]:
        if not sys.stdin.readline():
            break


def _wait_for_enter(timeout_s: float) -> bool:
    ready, _, _ = select.select([sys.stdin], [], [], max(0.0, timeout_s))
    if ready:
        sys.stdin.readline()
        return True
    return False


@cli.command()
@click.option("--overs", default=str(settings.DEFAULT_TOTAL_OVERS), type=click.Choice([str(o) for o in OVERS_CHOICES]),
              help="Overs in the innings")
@click.option("--wickets", default=str(settings.DEFAULT_MAX_WICKETS), type=click.Choice([str(w) for w in WICKETS_CHOICES]),
              help="Wickets before the innings ends")
def play(overs: str, wickets: str):
    """Play an innings in the terminal. Press Enter to swing."""
    try:
        _play_innings(InningsController(total_overs=int(overs), max_wickets=int(wickets)))
    except InningsError as e:
        _abort(e)


def _play_innings(controller: InningsController):
    """Bowl, wait for Enter or the ball to arrive, repeat until the innings ends"""
    console.print(Panel(
        "[bold]Crease Timing[/bold]\n"
        "Press [cyan]Enter[/cyan] to SWING as the ball reaches the batter.\n"
        "Big mistimes have a high chance of [red]WICKET[/red]."
    ))
    console.print(_scoreboard(controller.snapshot()))
    time.sleep(settings.FIRST_DELIVERY_DELAY_MS / 1000)

    while not controller.snapshot().is_complete:
        _drain_stdin()
        delivery = controller.request_delivery(now_ms())
        snapshot = controller.snapshot()
        console.print(
            f"\n[yellow]Over {snapshot.current_over}, ball {snapshot.ball_in_over}: bowling…[/yellow] "
            f"[dim]{timing_hint(delivery)}[/dim]"
        )

        remaining_s = (delivery.expected_arrival_timestamp - now_ms()) / 1000
        if _wait_for_enter(remaining_s):
            result = controller.register_swing(now_ms())
        else:
            result = controller.resolve_timeout(max(now_ms(), delivery.expected_arrival_timestamp))

        if result.resolved:
            style = TONE_STYLES[result.outcome.tone]
            console.print(f"[{style}]{result.outcome.commentary}[/{style}]")
        console.print(_scoreboard(result.state))

        if not result.state.is_complete:
            time.sleep(settings.NEXT_DELIVERY_DELAY_MS / 1000)

    final = controller.snapshot()
    console.print(Panel(f"[bold]Innings Complete[/bold]\nFinal: [bold]{final.summary()}[/bold]"))


@cli.command()
def bands():
    """Show the timing bands"""
    table = Table(title="Timing Bands")
    table.add_column("Max |diff| (ms)", justify="right")
    table.add_column("Outcome", style="cyan")
    table.add_column("Runs", justify="right")
    table.add_column("Commentary")

    for band in OUTCOME_BANDS:
        table.add_row(str(band.max_diff_ms), band.label, str(band.runs), band.commentary)
    table.add_row(
        "∞", "mistimed", "0",
        f"{MISTIME_WICKET_PROBABILITY:.0%} wicket, otherwise dot ball",
    )
    console.print(table)


def simulate_bot_innings(controller: InningsController, rng: random.Random, jitter_ms: float) -> Iterator[SwingResult]:
    """
    Play an innings with a bot batter on a simulated clock.

    The bot swings early or late by a normal error with `jitter_ms` standard
    deviation around the arrival. A swing that would land before the ball is
    even released is a miss and the delivery times out.
    """
    now = 0.0
    while not controller.snapshot().is_complete:
        delivery = controller.request_delivery(now)
        swing_at = delivery.expected_arrival_timestamp + rng.gauss(0, jitter_ms)
        if swing_at >= delivery.released_at:
            result = controller.register_swing(swing_at)
        else:
            result = controller.resolve_timeout(delivery.expected_arrival_timestamp)
        now = delivery.expected_arrival_timestamp + settings.NEXT_DELIVERY_DELAY_MS
        yield result


@cli.command()
@click.option("--innings", "innings_count", default=200, type=click.IntRange(min=1), help="Number of innings to simulate")
@click.option("--overs", default=settings.DEFAULT_TOTAL_OVERS, type=click.IntRange(min=1), help="Overs per innings")
@click.option("--wickets", default=settings.DEFAULT_MAX_WICKETS, type=click.IntRange(min=1), help="Wickets per innings")
@click.option("--jitter", default=120.0, help="Bot timing error std-dev in ms")
@click.option("--seed", default=None, type=int, help="Random seed for reproducible runs")
def benchmark(innings_count: int, overs: int, wickets: int, jitter: float, seed):
    """Simulate bot innings and show score and outcome distributions"""
    rng = random.Random(seed)
    scores = []
    wickets_lost = []
    outcomes = Counter()

    try:
        for _ in track(range(innings_count), description="Simulating...", console=console):
            controller = InningsController(total_overs=overs, max_wickets=wickets, rng=rng.random)
            for result in simulate_bot_innings(controller, rng, jitter):
                outcomes[result.outcome.label] += 1
            final = controller.snapshot()
            scores.append(final.score)
            wickets_lost.append(final.wickets)
    except InningsError as e:
        _abort(e)

    console.print(Panel("[bold]Simulation Statistics[/bold]"))
    console.print(f"[cyan]Average Score:[/cyan] {sum(scores) / len(scores):.1f}")
    console.print(f"[cyan]Min Score:[/cyan] {min(scores)}")
    console.print(f"[cyan]Max Score:[/cyan] {max(scores)}")
    console.print(f"[cyan]Average Wickets:[/cyan] {sum(wickets_lost) / len(wickets_lost):.2f}")

    total = sum(outcomes.values())
    console.print("\n[bold]Outcome Distribution:[/bold]")
    for label in [band.label for band in OUTCOME_BANDS] + ["dot", "wicket"]:
        pct = outcomes[label] / total * 100 if total else 0.0
        bar = "█" * int(pct / 2)
        console.print(f"  {label:>8}: {bar} {pct:.1f}%")


if __name__ == "__main__":
    cli()
