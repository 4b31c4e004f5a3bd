#!/usr/bin/env python3
"""
Render a CV document to an HTML preview page.

Examples:\n

    render_cv.py my_cv.json                      # Writes ./CV_<Name>.html

    render_cv.py my_cv.yaml -o out/preview.html  # Explicit output file

    render_cv.py my_cv.json --score              # Also print the completeness score
"""

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from lumina.contexts.document import load_document, score_document
from lumina.contexts.rendering import HtmlRenderer

load_dotenv()

app = typer.Typer(help="Render a CV document to HTML.", add_completion=False)


@app.command()
def main(
    document_path: Annotated[Path, typer.Argument(help="CV document (.json or .yaml)")],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output file or directory (default: current directory)"),
    ] = None,
    score: Annotated[
        bool,
        typer.Option("--score", "-s", help="Print the completeness score and tips"),
    ] = False,
):
    """Render DOCUMENT_PATH with the default page template."""
    try:
        document = load_document(document_path)
    except (FileNotFoundError, ValueError) as e:
        typer.secho(f"ERROR: Cannot load {document_path}: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    written = HtmlRenderer().write(document, output)
    typer.echo(f"Wrote {written}")

    if score:
        report = score_document(document)
        typer.echo(f"\nScore: {report.score}% ({report.rating})")
        for tip in report.tips:
            typer.echo(f"  - {tip}")


if __name__ == "__main__":
    app()
