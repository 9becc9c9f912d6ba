from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from retrojanet.errors import ConversionError
from retrojanet.orchestrator.pipeline import start_convert


app = typer.Typer(no_args_is_help=True, add_completion=False)

console = Console()


@app.command()
def convert(
    source: str = typer.Argument(..., metavar="SOURCE", help="Java file with a Retrofit service interface"),
    package: Optional[str] = typer.Option(None, "--package", help="Package for generated classes (default: source package)"),
    output: Optional[str] = typer.Option(None, "--output", help="Output directory (default: current directory)"),
) -> None:
    """Convert Retrofit service methods into Janet @HttpAction classes."""
    source_path = Path(source).expanduser()
    if not source_path.exists():
        raise typer.BadParameter(f"Source file does not exist: {source_path}")
    if not source_path.is_file():
        raise typer.BadParameter(f"Source path is not a file: {source_path}")

    output_dir = Path(output).expanduser() if output else None

    try:
        result, files = start_convert(source_path, package=package, output_dir=output_dir)
        for f in files:
            console.print(f"File [bold]{f.path}[/bold] saved")
            console.print("[yellow]Check files before using them![/yellow]")
    except ConversionError as e:
        console.print(f"[bold red]error:[/bold red] {e}")
        raise typer.Exit(code=1)

    console.print("")
    console.print(
        f"[bold green]retrojanet[/bold green] {result.source}: "
        f"methods={result.methods_seen}, written={len(result.files)}, skipped={len(result.skipped)}"
    )
    if result.skipped:
        console.print(f"Skipped (no HTTP verb): {', '.join(result.skipped)}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
