"""Command line interface: run tournaments and evaluate hands."""

import dataclasses
import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .card import Card, Suit, cards
from .config import get_config
from .errors import ChipstackError
from .evaluator import PlayerHand, evaluate_game
from .events import EventType, TournamentEvent
from .hand import evaluate_hand
from .policy import POLICIES
from .tournament import Tournament

app = typer.Typer(help="No-Limit Texas Hold'em tournament engine")
console = Console()


def format_card(c: Card) -> str:
    """Format a card with color based on suit."""
    if c.suit in (Suit.HEARTS, Suit.DIAMONDS):
        return f"[red]{c}[/red]"
    return f"[white]{c}[/white]"


def format_cards(hand: list[Card]) -> str:
    return " ".join(format_card(c) for c in hand)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _print_event(event: TournamentEvent) -> None:
    snap = event.snapshot
    if event.type is EventType.BLIND_LEVEL_UP:
        console.print(
            f"[yellow]Level {snap.level}:[/yellow] blinds now "
            f"{snap.small_blind}/{snap.big_blind}"
        )
    elif event.type is EventType.ELIMINATION:
        console.print(f"[red]{event.message}[/red]")
    elif event.type is EventType.HAND_COMPLETE:
        board = " ".join(snap.community) or "-"
        winners = ", ".join(w.name for w in snap.winners) or "nobody"
        console.print(
            f"[dim]#{snap.hand_number}[/dim] board {board}  "
            f"won by [bold]{winners}[/bold]"
        )


def _standings_table(tournament: Tournament) -> Table:
    table = Table(title="Final Standings")
    table.add_column("Rank", justify="right", style="cyan")
    table.add_column("Player")
    table.add_column("Chips", justify="right")
    table.add_column("Hands Won", justify="right")
    table.add_column("Hands Played", justify="right")
    table.add_column("Biggest Pot", justify="right")
    for p in tournament.table.standings.by_rank():
        table.add_row(
            str(p.rank),
            p.name,
            f"{p.chips:,}",
            str(p.hands_won),
            str(p.hands_played),
            f"{p.biggest_pot:,}",
        )
    return table


@app.command()
def run(
    players: int | None = typer.Option(None, "--players", "-p", help="Number of players (2-10)"),
    chips: int | None = typer.Option(None, "--chips", "-c", help="Starting chip stack"),
    small_blind: int | None = typer.Option(None, "--small-blind", help="Initial small blind"),
    big_blind: int | None = typer.Option(None, "--big-blind", help="Initial big blind"),
    level_hands: int | None = typer.Option(None, "--level-hands", "-l", help="Hands per blind level"),
    policy: str | None = typer.Option(
        None, "--policy", help=f"Decision policy ({', '.join(sorted(POLICIES))})"
    ),
    seed: int | None = typer.Option(None, "--seed", "-s", help="Seed for a reproducible run"),
    delay: float | None = typer.Option(None, "--delay", help="Seconds to pause between actions"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every action"),
):
    """Run a tournament until one player holds every chip."""
    _setup_logging(verbose)
    overrides = {
        "player_count": players,
        "starting_chips": chips,
        "small_blind": small_blind,
        "big_blind": big_blind,
        "hands_per_level": level_hands,
        "policy": policy,
        "seed": seed,
        "action_delay": delay,
    }
    try:
        config = dataclasses.replace(
            get_config().tournament,
            **{k: v for k, v in overrides.items() if v is not None},
        )
        tournament = Tournament(config, on_event=_print_event)
        console.print(
            Panel(
                f"{config.player_count} players, {config.starting_chips:,} chips each, "
                f"blinds {config.small_blind}/{config.big_blind}, "
                f"policy [bold]{config.policy}[/bold]",
                title="Tournament",
            )
        )
        winner = tournament.run()
    except ChipstackError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(
        f"\n[bold green]{winner.name}[/bold green] wins after "
        f"{tournament.hand_number} hands with {winner.chips:,} chips\n"
    )
    console.print(_standings_table(tournament))


@app.command()
def evaluate(
    hole: str = typer.Argument(..., help="Your hole cards (e.g., 'As Ks')"),
    board: str = typer.Option("", "--board", "-b", help="Community cards"),
):
    """Evaluate the best five-card hand."""
    try:
        hole_cards = cards(hole)
        community = cards(board) if board else []
        value = evaluate_hand(hole_cards + community)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold]Hand:[/bold]  {format_cards(hole_cards)}")
    if community:
        console.print(f"[bold]Board:[/bold] {format_cards(community)}")
    console.print(f"[bold]Best:[/bold]  [green]{value.describe()}[/green]\n")


@app.command()
def showdown(
    hands: list[str] = typer.Argument(..., help="Two or more hole-card pairs (e.g., 'As Ad' 'Ks Kd')"),
    board: str = typer.Option(..., "--board", "-b", help="Community cards (3-5)"),
):
    """Compare hands on a board and name the winner(s)."""
    try:
        community = cards(board)
        contenders = [PlayerHand(f"Hand {i + 1}", cards(h)) for i, h in enumerate(hands)]
        if len(contenders) < 2:
            raise ValueError("Need at least two hands to compare")
        result = evaluate_game(contenders, community)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold]Board:[/bold] {format_cards(community)}")
    table = Table(title="Showdown")
    table.add_column("Player", style="cyan")
    table.add_column("Cards")
    table.add_column("Hand")
    winning = {w.player_id for w in result.winners}
    for ph in result.all_hands:
        name = f"[bold green]{ph.player_id}[/bold green]" if ph.player_id in winning else ph.player_id
        table.add_row(name, format_cards(ph.hole_cards), ph.hand_value.describe())
    console.print(table)

    if result.is_tie:
        console.print(f"[yellow]Split pot:[/yellow] {', '.join(sorted(winning))}")
    else:
        console.print(f"[green]Winner:[/green] {result.winner.player_id}")


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
