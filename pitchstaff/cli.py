"""Command-line interface for pitchstaff.

Provides commands for:
- note: Pitch, frequency and staff placement of a note name in every clef
- freq: Nearest note and staff placement of a frequency
- staff: Staff lines and key signature for a clef and key
- track: Run a recorded (frequency, amplitude) stream through the tracker
"""

import logging
from pathlib import Path
from typing import List, Tuple

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .core import PitchStaffError
from .analysis import (
    cents_offset,
    note_name_to_frequency,
    note_name_to_pitch_number,
    to_note_name,
)
from .notation import (
    Clef,
    MusicContext,
    StaffPositionMapper,
    SILENT,
    accidental_for_display,
    note_name_to_staff_position,
    ledger_line_positions,
)
from .tracking import (
    PitchStabilizer,
    StabilizerConfig,
    CursorInterpolator,
    TrailHistory,
)

app = typer.Typer(
    name="pitchstaff",
    help="Notation positioning and live pitch tracking",
    rich_markup_mode="markdown",
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
            force=True,
        )


def _fail(message: str) -> None:
    console.print(f"[red]Error: {escape(message)}[/red]")
    raise typer.Exit(1)


def _format_positions(positions: List[float]) -> str:
    return ", ".join(f"{p:+.0f}" for p in positions) or "-"


def read_samples(path: Path) -> List[Tuple[float, float]]:
    """
    Read 'frequency amplitude' pairs, one per line.

    Blank lines and lines starting with '#' are skipped; values may be
    separated by whitespace or a comma.
    """
    samples = []
    for line_no, line in enumerate(path.read_text().splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.replace(",", " ").split()
        if len(parts) != 2:
            raise ValueError(f"{path}:{line_no}: expected 'frequency amplitude', got {line!r}")
        try:
            samples.append((float(parts[0]), float(parts[1])))
        except ValueError:
            raise ValueError(f"{path}:{line_no}: not a number: {line!r}") from None
    return samples


@app.command()
def note(
    name: str = typer.Argument(..., help="Note name, e.g. C4, Bb3, F#5"),
    reference: float = typer.Option(440.0, "-r", "--reference", help="A4 reference frequency (Hz)"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose output"),
):
    """Show pitch number, frequency and staff placement of a note.

    **Examples:**

        pitchstaff note C4

        pitchstaff note Bb3 --reference 442
    """
    _setup_logging(verbose)
    try:
        parsed = to_note_name(name)
        pitch = note_name_to_pitch_number(parsed)
        frequency = note_name_to_frequency(parsed, reference)
    except PitchStaffError as e:
        _fail(str(e))

    console.print(f"[bold]{parsed}[/bold]  pitch {pitch}  {frequency:.2f} Hz")

    table = Table(title="Staff Placement")
    table.add_column("Clef", style="cyan")
    table.add_column("Position", style="green")
    table.add_column("Ledger", style="yellow")
    table.add_column("Accidental", style="magenta")

    for clef in Clef:
        context = MusicContext(clef=clef, reference_frequency=reference)
        position = note_name_to_staff_position(parsed, context)
        table.add_row(
            clef.value,
            f"{position:+.1f}",
            _format_positions(ledger_line_positions(position)),
            accidental_for_display(parsed).symbol or "-",
        )

    console.print(table)


@app.command()
def freq(
    frequency: float = typer.Argument(..., help="Frequency in Hz"),
    clef: str = typer.Option("treble", "-c", "--clef", help="treble, bass, alto or tenor"),
    key: str = typer.Option("C major", "-k", "--key", help="Key signature, e.g. 'D minor'"),
    reference: float = typer.Option(440.0, "-r", "--reference", help="A4 reference frequency (Hz)"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose output"),
):
    """Place a frequency on the staff."""
    _setup_logging(verbose)
    try:
        context = MusicContext(key_signature=key, clef=Clef.parse(clef), reference_frequency=reference)
        placement = StaffPositionMapper(context).place_frequency(frequency)
    except PitchStaffError as e:
        _fail(str(e))

    if placement is SILENT:
        console.print("[yellow]No pitch (silent input)[/yellow]")
        return

    cents = cents_offset(frequency, reference)
    console.print(f"[bold]{placement.note_name}[/bold] ({cents:+.1f} cents)")
    console.print(f"  Pitch number: {placement.pitch_number:.2f}")
    console.print(f"  Staff position ({context.clef.value}): {placement.staff_position:+.1f}")
    console.print(f"  Ledger lines: {placement.ledger_lines} ({_format_positions(list(placement.ledger_positions))})")


@app.command()
def staff(
    clef: str = typer.Option("treble", "-c", "--clef", help="treble, bass, alto or tenor"),
    key: str = typer.Option("C major", "-k", "--key", help="Key signature, e.g. 'D minor'"),
):
    """Show the staff lines and key signature for a clef and key."""
    try:
        context = MusicContext(key_signature=key, clef=Clef.parse(clef))
    except PitchStaffError as e:
        _fail(str(e))

    mapper = StaffPositionMapper(context)

    table = Table(title=f"{context.clef.value.title()} staff in {context.key}")
    table.add_column("Line", style="cyan")
    table.add_column("Note", style="green")
    table.add_column("Pitch", style="yellow")
    table.add_column("Position", style="magenta")
    for i, (line_name, pitch, position) in enumerate(mapper.staff_lines(), start=1):
        table.add_row(str(i), line_name, str(pitch), f"{position:+.0f}")
    console.print(table)

    signature = mapper.key_signature()
    if signature:
        marks = ", ".join(f"{acc.symbol}@{pos:+.0f}" for acc, pos in signature)
        console.print(f"Key signature: {marks}")
    else:
        console.print("Key signature: none")


@app.command()
def track(
    samples_file: Path = typer.Argument(..., help="Text file of 'frequency amplitude' lines"),
    window: int = typer.Option(5, "-w", "--window", help="Median window (1-15)"),
    smoothing: float = typer.Option(0.5, "-s", "--smoothing", help="Smoothing factor (0.0-0.95)"),
    threshold: float = typer.Option(0.001, "-t", "--threshold", help="Amplitude threshold"),
    clef: str = typer.Option("treble", "-c", "--clef", help="treble, bass, alto or tenor"),
    key: str = typer.Option("C major", "-k", "--key", help="Key signature"),
    reference: float = typer.Option(440.0, "-r", "--reference", help="A4 reference frequency (Hz)"),
    scroll: float = typer.Option(3.0, "--scroll", help="Horizontal scroll per sample (px)"),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose output"),
):
    """Run a recorded pitch stream through stabilizer, cursor and trail.

    **Examples:**

        pitchstaff track samples.txt

        pitchstaff track samples.txt -w 3 -s 0.7 --json
    """
    _setup_logging(verbose)
    if not samples_file.exists():
        _fail(f"File not found: {samples_file}")

    try:
        samples = read_samples(samples_file)
        context = MusicContext(key_signature=key, clef=Clef.parse(clef), reference_frequency=reference)
        stabilizer = PitchStabilizer(
            config=StabilizerConfig(
                median_window=window,
                smoothing=smoothing,
                amplitude_threshold=threshold,
                reference_frequency=reference,
            )
        )
    except (PitchStaffError, ValueError) as e:
        _fail(str(e))

    cursor = CursorInterpolator()
    trail = TrailHistory()

    rows = []
    stabilizer.start()
    try:
        for raw_freq, raw_amp in samples:
            sample = stabilizer.ingest(raw_freq, raw_amp)
            y = cursor.position(sample.frequency, context)
            points = trail.update(scroll, y)
            rows.append({
                "raw_frequency": raw_freq,
                "amplitude": raw_amp,
                "frequency": round(sample.frequency, 3),
                "note": None if sample.is_silent else str(sample.note_name),
                "staff_position": round(cursor.staff_position(sample.frequency, context), 3),
                "cursor_y": round(y, 3),
                "trail_points": len(points),
            })
    finally:
        stabilizer.stop()

    if json_output:
        console.print_json(data={"context": {
            "clef": context.clef.value,
            "key": context.key_signature,
            "reference_frequency": context.reference_frequency,
        }, "samples": rows})
        return

    table = Table(title=f"Tracked {len(rows)} samples")
    table.add_column("#", style="dim")
    table.add_column("Raw Hz", style="cyan")
    table.add_column("Hz", style="green")
    table.add_column("Note", style="yellow")
    table.add_column("Pos", style="magenta")
    table.add_column("Y")
    for i, row in enumerate(rows, start=1):
        table.add_row(
            str(i),
            f"{row['raw_frequency']:.1f}",
            f"{row['frequency']:.1f}",
            row["note"] or "-",
            f"{row['staff_position']:+.2f}",
            f"{row['cursor_y']:.1f}",
        )
    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
