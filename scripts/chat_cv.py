#!/usr/bin/env python3
"""
Chat-driven CV editing in the terminal.

Loads a CV document, then applies each line you type as a natural-language
instruction through the configured language model. The document is saved on
exit (and on /save).

Commands inside the chat:
    /photo PATH   attach a profile photo from an image file
    /score        show the completeness score and tips
    /save         save the document now
    /quit         save and leave

Examples:\n

    chat_cv.py                                   # Start from the sample CV

    chat_cv.py my_cv.json                        # Edit my_cv.json in place

    chat_cv.py my_cv.yaml -o edited.json --html preview.html

    chat_cv.py my_cv.json --provider gemini --model gemini-2.5-flash
"""

import asyncio
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from typing_extensions import Annotated

from lumina.contexts.assistant import build_session
from lumina.contexts.assistant.logger import setup_chat_logger
from lumina.contexts.document import DocumentStore, load_document, save_document, score_document
from lumina.contexts.rendering import HtmlRenderer
from lumina.utils.config import load_settings

load_dotenv()

app = typer.Typer(help="Edit a CV by chatting with an AI assistant.", add_completion=False)


def print_score(document) -> None:
    report = score_document(document)
    color = {"good": typer.colors.GREEN, "fair": typer.colors.YELLOW}.get(
        report.rating, typer.colors.RED
    )
    typer.secho(f"Score: {report.score}%", fg=color, bold=True)
    for tip in report.tips:
        typer.echo(f"  - {tip}")


@app.command()
def main(
    document_path: Annotated[
        Optional[Path],
        typer.Argument(help="CV document (.json or .yaml). Defaults to the bundled sample CV"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Where to save the edited document"),
    ] = None,
    html: Annotated[
        Optional[Path],
        typer.Option("--html", help="Keep an HTML preview up to date at this path"),
    ] = None,
    provider: Annotated[
        Optional[str],
        typer.Option("--provider", "-p", help="LLM provider: openai, anthropic or gemini"),
    ] = None,
    model: Annotated[
        Optional[str],
        typer.Option("--model", "-m", help="Model name (default: provider default)"),
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="YAML settings merged over the defaults"),
    ] = None,
):
    """Start an interactive chat session over a CV document."""
    settings = load_settings(config)
    if provider:
        settings["llm"]["provider"] = provider.lower()
    if model:
        settings["llm"]["model"] = model

    source = document_path or Path(settings["paths"]["sample_document"])
    try:
        document = load_document(source)
    except (FileNotFoundError, ValueError) as e:
        # pydantic.ValidationError is a ValueError
        typer.secho(f"ERROR: Cannot load {source}: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    if output is None:
        output = document_path if document_path else Path("cv.json")

    session_dir = Path(settings["paths"]["logs"]) / f"chat_{datetime.now():%Y%m%d_%H%M%S}"
    # Full detail goes to the session log; the terminal only shows problems
    setup_chat_logger(
        session_dir,
        f"{settings['llm']['provider']}/{settings['llm']['model'] or 'default'}",
        console_level="WARNING",
    )

    store = DocumentStore(document)
    try:
        session = build_session(settings, store)
    except (ValueError, ImportError) as e:
        typer.secho(f"ERROR: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    if html:
        renderer = HtmlRenderer()
        renderer.write(store.current, html)
        store.subscribe(lambda old, new: renderer.write(new, html))

    for message in session.messages:
        typer.secho(f"Lumina: {message.content}", fg=typer.colors.CYAN)

    while True:
        try:
            line = input("\nvous > ")
        except (EOFError, KeyboardInterrupt):
            typer.echo()
            break

        command = line.strip()
        if command in ("/quit", "/exit"):
            break
        if command == "/score":
            print_score(store.current)
            continue
        if command == "/save":
            typer.echo(f"Saved to {save_document(store.current, output)}")
            continue
        if command.startswith("/photo"):
            photo_path = Path(command.removeprefix("/photo").strip())
            try:
                session.attach_photo_file(photo_path)
            except (FileNotFoundError, ValueError, ValidationError) as e:
                typer.secho(f"ERROR: {e}", fg=typer.colors.RED, err=True)
                continue
            typer.echo(f"Photo attached from {photo_path}")
            continue

        reply = asyncio.run(session.submit(line))
        if reply is not None:
            typer.secho(f"Lumina: {reply.content}", fg=typer.colors.CYAN)

    typer.echo(f"Saved to {save_document(store.current, output)}")


if __name__ == "__main__":
    app()
