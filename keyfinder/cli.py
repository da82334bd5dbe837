"""Command-line interface for keyfinder.

Provides commands for:
- analyze: Guess the key of a MIDI file
- notes: Guess the key of a hand-picked set of notes
- scale: Show a scale and export a preview
- tune: Grid-search the scoring multipliers on labelled MIDI files
- interactive: Edit a selection with undo/redo and live key guesses
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

app = typer.Typer(
    name="keyfinder",
    help="Guess the Major/Minor key of MIDI files or note selections",
    rich_markup_mode="markdown",
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_ranker(params_file: Optional[Path]):
    """Build a KeyRanker, optionally with multipliers from a JSON file."""
    from .inference import KeyRanker, ScoringParams

    if params_file is None:
        return KeyRanker()
    try:
        params = ScoringParams.load(params_file)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    return KeyRanker(params)


def _load_weights(midi_file: Path):
    """Read pitch-class weights from a MIDI file or exit with an error."""
    from .input import MidiLoader

    try:
        return MidiLoader().load_weights(midi_file)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def analyze(
    input_file: Path = typer.Argument(..., help="Input MIDI file (.mid/.midi)"),
    params_file: Optional[Path] = typer.Option(
        None, "--params", "-p", help="JSON file with scoring multipliers"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Verbose output"
    ),
):
    """Guess the key of a MIDI file.

    **Examples:**

        keyfinder analyze song.mid

        keyfinder analyze song.mid --params tuned.json --json
    """
    _setup_logging(verbose)
    ranker = _load_ranker(params_file)
    weights = _load_weights(input_file)
    ranking = ranker.rank(weights.keys(), weights)

    if json_output:
        result = {"input": str(input_file)}
        result.update(ranking.to_dict())
        console.print_json(data=result)
        return

    console.print(f"\n[bold blue]Key analysis: {input_file.name}[/bold blue]\n")
    if ranking.best is None:
        console.print("[yellow]No notes found in this MIDI file.[/yellow]")
        return

    _show_ranking(ranking)
    _show_notes_table(ranking)


@app.command()
def notes(
    selection: List[str] = typer.Argument(..., help="Note names or pitch classes, e.g. C E G"),
    baseline: Optional[Path] = typer.Option(
        None, "--baseline", "-b", help="MIDI file whose note emphasis weighs the selection"
    ),
    params_file: Optional[Path] = typer.Option(
        None, "--params", "-p", help="JSON file with scoring multipliers"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Verbose output"
    ),
):
    """Guess the key of a hand-picked set of notes.

    **Examples:**

        keyfinder notes C E G

        keyfinder notes C E G Bb --baseline song.mid
    """
    from .core import parse_pitch_class
    from .inference import WeightingPolicy

    _setup_logging(verbose)
    try:
        pitch_classes = [parse_pitch_class(name) for name in selection]
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    ranker = _load_ranker(params_file)
    if baseline is not None:
        policy = WeightingPolicy.from_baseline(_load_weights(baseline))
    else:
        policy = WeightingPolicy.uniform()

    ranking = ranker.rank(
        pitch_classes,
        policy.weigh(pitch_classes),
        has_emphasis=policy.has_emphasis,
    )

    if json_output:
        console.print_json(data=ranking.to_dict())
        return

    _show_ranking(ranking)


@app.command()
def scale(
    root: str = typer.Argument(..., help="Root note, e.g. C, F#, Bb"),
    mode: str = typer.Argument("Major", help="Major or Minor"),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write an ascending preview to this MIDI file"
    ),
):
    """Show the notes of a scale and optionally export a preview."""
    from .core import parse_pitch_class, pitch_class_name
    from .inference import key_name, parallel_key, relative_key, scale_degrees
    from .output import PreviewExporter

    try:
        root_pc = parse_pitch_class(root)
        degrees = scale_degrees(root_pc, mode)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold]{key_name(root_pc, mode)}[/bold]")
    console.print(f"  Notes: {' '.join(pitch_class_name(pc) for pc in degrees)}")
    console.print(f"  Relative: {key_name(*relative_key(root_pc, mode))}")
    console.print(f"  Parallel: {key_name(*parallel_key(root_pc, mode))}")

    if output is not None:
        PreviewExporter().export(root_pc, mode, output)
        console.print(f"[green]Preview written to {output}[/green]")


@app.command()
def tune(
    folder: Path = typer.Argument(..., help="Folder of labelled MIDI files (e.g. C_Major.mid)"),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write the best multipliers to this JSON file"
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Verbose output"
    ),
):
    """Grid-search the scoring multipliers against labelled MIDI files."""
    from .tuning import ParameterTuner

    _setup_logging(verbose)
    tuner = ParameterTuner()
    try:
        samples = tuner.load_samples(folder)
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not samples:
        console.print("[red]Error: No labelled Major/Minor MIDI files found[/red]")
        raise typer.Exit(1)

    console.print(f"Loaded {len(samples)} files")
    console.print(f"Testing {tuner.combinations:,} combinations...\n")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Tuning", total=tuner.combinations)
        result = tuner.search(
            samples,
            progress=lambda done, total: progress.update(task, completed=done),
        )

    console.print("\n[bold]=== FINAL RESULTS ===[/bold]")
    console.print(
        f"Best accuracy: {result.correct}/{result.total} ({result.accuracy * 100:.1f}%)"
    )
    table = Table(title="Optimal multipliers")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green")
    for name, value in result.params.to_dict().items():
        table.add_row(name, f"{value:g}")
    console.print(table)

    if output is not None:
        result.params.save(output)
        console.print(f"[green]Parameters written to {output}[/green]")


INTERACTIVE_HELP = """Commands:
  add NOTE...      add notes            remove NOTE...   remove notes
  toggle NOTE...   toggle notes         set NOTE...      replace the selection
  apply ROOT MODE  select a whole scale clear            empty the selection
  reset            back to the MIDI notes
  undo / redo      step through history show             show the key guess
  help             this text            quit             leave"""


@app.command()
def interactive(
    input_file: Optional[Path] = typer.Argument(None, help="Optional MIDI file used as baseline"),
    params_file: Optional[Path] = typer.Option(
        None, "--params", "-p", help="JSON file with scoring multipliers"
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Verbose output"
    ),
):
    """Edit a note selection with undo/redo and see the key guess update."""
    from .core import parse_pitch_class, pitch_class_name
    from .session import SelectionSession

    _setup_logging(verbose)
    session = SelectionSession(_load_ranker(params_file))
    if input_file is not None:
        session.load_baseline(_load_weights(input_file))

    console.print(INTERACTIVE_HELP)
    _show_session(session)

    while True:
        try:
            line = typer.prompt("keyfinder", default="", show_default=False)
        except typer.Abort:
            break
        parts = line.split()
        if not parts:
            continue
        command, args = parts[0].lower(), parts[1:]

        try:
            if command in ("quit", "exit", "q"):
                break
            elif command == "help":
                console.print(INTERACTIVE_HELP)
                continue
            elif command == "show":
                pass
            elif command in ("add", "remove", "toggle"):
                for name in args:
                    getattr(session, command)(parse_pitch_class(name))
            elif command == "set":
                session.select(parse_pitch_class(name) for name in args)
            elif command == "apply":
                if not args:
                    raise ValueError("apply needs a root, e.g. 'apply A Minor'")
                session.apply_scale(parse_pitch_class(args[0]), args[1] if len(args) > 1 else "Major")
            elif command == "clear":
                session.clear()
            elif command == "reset":
                if not session.has_baseline:
                    console.print("[yellow]No MIDI baseline loaded[/yellow]")
                session.reset_to_baseline()
            elif command == "undo":
                if not session.history.can_undo:
                    console.print("[yellow]Nothing to undo[/yellow]")
                session.undo()
            elif command == "redo":
                if not session.history.can_redo:
                    console.print("[yellow]Nothing to redo[/yellow]")
                session.redo()
            else:
                console.print(f"[yellow]Unknown command: {command}[/yellow]")
                continue
        except ValueError as e:
            console.print(f"[red]Error: {e}[/red]")
            continue

        _show_session(session)

    names = " ".join(pitch_class_name(pc) for pc in sorted(session.selected))
    console.print(f"Final selection: {names or '(empty)'}")


def _show_session(session) -> None:
    """Print the selection, the guess and the undo/redo state."""
    from .core import pitch_class_name
    from .inference import key_name

    names = " ".join(pitch_class_name(pc) for pc in sorted(session.selected))
    console.print(f"\n[bold]Selection:[/bold] {names or '(empty)'}")
    can_undo, can_redo = session.toolbar_state
    console.print(
        f"  [dim]undo: {'yes' if can_undo else 'no'}, redo: {'yes' if can_redo else 'no'}[/dim]"
    )

    ranking = session.analyze()
    if ranking.best is None:
        console.print("  Select one or more notes to see possible Major/Minor keys.")
        return
    if session.applied_scale is not None:
        console.print(f"  [green]Selected key: {key_name(*session.applied_scale)}[/green]")
    _show_ranking(ranking)


def _show_ranking(ranking) -> None:
    """Display candidates, the best guess and its explanation."""
    if ranking.best is None:
        console.print("[yellow]Select one or more notes to see possible keys.[/yellow]")
        return

    if ranking.contained:
        title = f"Possible keys (contain all notes): ({len(ranking.candidates)})"
    else:
        title = f"Closest Major/Minor keys: ({len(ranking.candidates)})"
    _show_candidates_table(ranking, title)

    console.print(f"\n[green]Best guess: {ranking.best.name}[/green]")
    if ranking.has_emphasis:
        console.print("[bold]Why the best guess?[/bold]")
        for reason in ranking.reasons:
            console.print(f"  - {reason.text}")
    for hint in ranking.hints:
        console.print(f"[dim]{hint}[/dim]")


def _show_candidates_table(ranking, title: str) -> None:
    """Display candidates in a table."""
    best = ranking.best
    show_emphasis = ranking.has_emphasis and len(ranking.perfect_matches) > 1

    table = Table(title=title)
    table.add_column("Key", style="cyan")
    table.add_column("Match", style="green")
    table.add_column("Outside", style="yellow")
    if show_emphasis:
        table.add_column("Emphasis", style="magenta")
    table.add_column("Net score", style="blue")
    table.add_column("", style="bold")

    for candidate in ranking.by_coverage():
        row = [
            candidate.name,
            f"{candidate.coverage_in_pct}%",
            f"{candidate.coverage_out_pct}%",
        ]
        if show_emphasis:
            rank = candidate.emphasis_rank
            row.append(f"#{rank + 1}" if rank is not None else "")
        row.append(f"{candidate.net_score:.2f}")
        row.append("Best guess" if candidate is best else "")
        table.add_row(*row)

    console.print(table)


def _show_notes_table(ranking) -> None:
    """Display the notes found, heaviest first."""
    from .core import pitch_class_name
    from .inference import percentages

    pct = percentages(ranking.weights)
    table = Table(title="These notes were found in MIDI")
    table.add_column("Note", style="cyan")
    table.add_column("Weight (s)", style="green")
    table.add_column("Share", style="yellow")

    for pc in sorted(ranking.used_notes, key=lambda p: (-ranking.weights.get(p, 0.0), p)):
        table.add_row(
            pitch_class_name(pc),
            f"{ranking.weights.get(pc, 0.0):.3f}",
            f"{pct.get(pc, 0)}%",
        )

    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
