"""Command-line interface for tracmark."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn

from tracmark import __version__
from tracmark.config import get_settings
from tracmark.core.transformer import INPUT_EXTENSIONS, MarkupTransformer
from tracmark.render import SUPPORTED_FORMATS, get_renderer

app = typer.Typer(
    name="tracmark",
    help="Render parsed Trac markup trees as HTML or plain text.",
    add_completion=False,
)
console = Console()

OUTPUT_SUFFIX = "-rendered"


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"tracmark v{__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send log records to the console, at debug level when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def generate_output_path(
    input_path: Path,
    extension: str,
    output_dir: Optional[Path] = None,
) -> Path:
    """Generate output path with -rendered suffix and the format's extension."""
    output_name = f"{input_path.stem}{OUTPUT_SUFFIX}{extension}"

    if output_dir:
        return output_dir / output_name
    return input_path.parent / output_name


def process_file(
    input_path: Path,
    output_path: Optional[Path],
    output_format: str,
    verbose: bool,
    ticket: Optional[int] = None,
    trac_url: Optional[str] = None,
) -> bool:
    """Process a single file. Returns True on success."""
    if not input_path.exists():
        console.print(f"[red]Error:[/red] File not found: {input_path}")
        return False

    ext = input_path.suffix.lower()
    if ext not in INPUT_EXTENSIONS:
        console.print(
            f"[yellow]Skipping:[/yellow] {input_path.name} "
            f"(unsupported format: {ext})"
        )
        return False

    if output_path is None:
        output_path = generate_output_path(input_path, get_renderer(output_format)().extension)

    if verbose:
        console.print(f"[blue]Processing:[/blue] {input_path}")
        console.print(f"[blue]Output:[/blue] {output_path}")
        console.print(f"[blue]Format:[/blue] {output_format}")
        if ticket is not None:
            console.print(f"[blue]Ticket:[/blue] #{ticket}")

    try:
        transformer = MarkupTransformer(
            output_format=output_format,
            trac_url=trac_url,
            ticket=ticket,
        )
        transformer.transform_file(input_path, output_path)
        console.print(f"[green]Success:[/green] {output_path}")
        return True
    except Exception as e:
        console.print(f"[red]Error processing {input_path.name}:[/red] {e}")
        if verbose:
            console.print_exception()
        return False


def process_folder(
    folder_path: Path,
    output_format: str,
    verbose: bool,
    ticket: Optional[int] = None,
    trac_url: Optional[str] = None,
    recursive: bool = True,
) -> tuple[int, int]:
    """Process all tree files in a folder. Returns (success_count, fail_count)."""
    if not folder_path.is_dir():
        console.print(f"[red]Error:[/red] Not a directory: {folder_path}")
        return 0, 0

    files: list[Path] = []
    for ext in INPUT_EXTENSIONS:
        if recursive:
            files.extend(folder_path.rglob(f"*{ext}"))
        else:
            files.extend(folder_path.glob(f"*{ext}"))

    # Skip files written by an earlier run
    files = sorted(f for f in files if not f.stem.endswith(OUTPUT_SUFFIX))

    if not files:
        console.print(
            f"[yellow]No tree files found in {folder_path}[/yellow]\n"
            f"Supported formats: {', '.join(INPUT_EXTENSIONS)}"
        )
        return 0, 0

    console.print(f"[blue]Found {len(files)} file(s) to process[/blue]")

    success_count = 0
    fail_count = 0

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Rendering files...", total=len(files))

        for file_path in files:
            progress.update(task, description=f"Rendering {file_path.name}...")
            if process_file(file_path, None, output_format, verbose, ticket, trac_url):
                success_count += 1
            else:
                fail_count += 1
            progress.advance(task)

    return success_count, fail_count


@app.command()
def main(
    path: Path = typer.Argument(
        ...,
        help="Tree file (.json) or folder to process",
        exists=True,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output path (for single file only)",
    ),
    output_format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help=f"Output format: {', '.join(SUPPORTED_FORMATS)} (default: html)",
    ),
    ticket: Optional[int] = typer.Option(
        None,
        "--ticket",
        "-t",
        min=1,
        help="Ticket number (a positive integer) the text belongs to, used for "
        "attachment links that name no ticket",
    ),
    trac_url: Optional[str] = typer.Option(
        None,
        "--trac-url",
        help="Base URL of the Trac instance (default: https://core.trac.wordpress.org)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Render parsed Trac markup trees.

    Examples:

        tracmark comment.json

        tracmark comment.json --format text

        tracmark comment.json --ticket 12345  # attachment:patch.diff links to #12345

        tracmark /path/to/trees
    """
    configure_logging(verbose)

    settings = get_settings()
    use_format = (output_format or settings.output_format).lower()

    if use_format not in SUPPORTED_FORMATS:
        console.print(
            f"[red]Error:[/red] Unsupported output format: {use_format}. "
            f"Supported formats: {', '.join(SUPPORTED_FORMATS)}"
        )
        raise typer.Exit(1)

    if path.is_file():
        success = process_file(path, output, use_format, verbose, ticket, trac_url)
        raise typer.Exit(0 if success else 1)
    else:
        if output is not None:
            console.print(
                "[yellow]Warning:[/yellow] --output is ignored in folder mode. "
                "Files will be saved alongside originals with -rendered suffix."
            )

        success, fail = process_folder(path, use_format, verbose, ticket, trac_url)
        console.print(
            f"\n[bold]Complete:[/bold] {success} succeeded, {fail} failed"
        )
        raise typer.Exit(0 if fail == 0 else 1)


if __name__ == "__main__":
    app()
