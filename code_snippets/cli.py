"""Click CLI: languages, highlight, functions, scan, settings and serve."""

from __future__ import annotations

import json
from concurrent.futures import TimeoutError as FutureTimeout
from pathlib import Path

import click

from code_snippets.config import config_file, load_settings
from code_snippets.extractor import extract_functions
from code_snippets.highlight import Tokenizer, render_ansi, render_html
from code_snippets.languages import default_registry
from code_snippets.log import configure_logging
from code_snippets.scanner import EXT_TO_LANGUAGE, ScanTask, detect_language

_LANGUAGE_CHOICES = default_registry().keys()


def _finish(task: ScanTask):
    """Wait for a scan to end; Ctrl-C while waiting cancels it."""
    while True:
        try:
            return task.wait(timeout=0.2)
        except FutureTimeout:
            continue
        except KeyboardInterrupt:
            if not task.cancelled:
                task.cancel()
                click.echo("Cancelling scan...", err=True)


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise click.ClickException(f"Cannot read {path}: {e}")


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """code-snippets: highlight source text and extract functions from projects."""
    configure_logging(verbose=verbose)


@cli.command()
def languages():
    """List the supported languages and their file extensions."""
    by_lang: dict[str, list[str]] = {}
    for ext, key in EXT_TO_LANGUAGE.items():
        by_lang.setdefault(key, []).append(ext)

    for rule in default_registry():
        exts = ", ".join(by_lang.get(rule.key, [])) or "-"
        extracts = "functions" if rule.function_regex is not None else "highlight only"
        click.echo(
            f"  {click.style(rule.key, fg='cyan'):<20} {exts:<40} "
            f"{click.style(extracts, dim=True)}"
        )


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--language", "-l", type=click.Choice(_LANGUAGE_CHOICES), help="Override language detection")
@click.option("--html", "as_html", is_flag=True, help="Emit HTML instead of ANSI colours")
def highlight(file: Path, language: str | None, as_html: bool):
    """Print FILE with syntax highlighting."""
    settings = load_settings()
    language = language or detect_language(file.name) or settings.default_language
    text = _read(file)

    spans = Tokenizer().tokenize(text, language)
    if as_html:
        click.echo(f'<pre class="code language-{language}">{render_html(text, spans)}</pre>')
    elif settings.color:
        click.echo(render_ansi(text, spans), nl=not text.endswith("\n"))
    else:
        click.echo(text, nl=not text.endswith("\n"))


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--language", "-l", type=click.Choice(_LANGUAGE_CHOICES), help="Override language detection")
@click.option("--code", "show_code", is_flag=True, help="Print each function's code")
def functions(file: Path, language: str | None, show_code: bool):
    """List the functions found in FILE."""
    language = language or detect_language(file.name)
    if language is None:
        raise click.UsageError(f"Unknown language for {file.name}; pass --language")

    found = extract_functions(_read(file), language, file)
    if not found:
        click.echo("No functions found.")
        return
    for fn in found:
        lines = fn.code.count("\n") + 1
        click.echo(f"  {click.style(fn.function_name, fg='green')}  {click.style(f'{lines} lines', dim=True)}")
        if show_code:
            click.echo(fn.code)
            click.echo()


@cli.command()
@click.argument("source_dir", type=click.Path(exists=True, file_okay=False, path_type=Path), default=".")
@click.option("--project", "-p", "project_name", help="Project name (defaults to the folder name)")
@click.option("--json", "as_json", is_flag=True, help="Emit the functions as JSON")
def scan(source_dir: Path, project_name: str | None, as_json: bool):
    """Scan a project folder and list its functions. Ctrl-C stops between files."""
    config = load_settings().scan_config(source_dir, project_name)
    task = ScanTask(config, stream=True).start()

    try:
        for event in task.iter_results():
            if as_json or not event.functions:
                continue
            click.echo(click.style(str(event.path), fg="cyan"))
            for fn in event.functions:
                click.echo(f"  {fn.function_name}")
    except KeyboardInterrupt:
        task.cancel()
        click.echo("Cancelling scan...", err=True)

    result = _finish(task)
    if as_json:
        click.echo(json.dumps([fn.to_dict() for fn in result.functions], indent=2))
        return

    for skipped in result.skipped:
        click.echo(click.style(f"skipped {skipped.path}: {skipped.reason}", fg="yellow"), err=True)
    status = "cancelled" if result.cancelled else "done"
    click.echo(
        f"\n{status}: {len(result.functions)} function(s) in "
        f"{result.files_scanned} file(s), {len(result.skipped)} skipped"
    )


@cli.command()
def settings():
    """Show the active settings and where they are stored."""
    current = load_settings()
    click.echo(f"Settings file: {config_file()}")
    click.echo(f"  default_language: {current.default_language}")
    click.echo(f"  max_file_size: {current.max_file_size}")
    click.echo(f"  color: {current.color}")
    click.echo(f"  skip_dirs: {', '.join(current.skip_dirs)}")


@cli.command()
@click.option("--port", "-p", default=8421, help="Port number")
@click.option("--host", default="127.0.0.1", help="Host address")
def serve(port: int, host: str):
    """Start the HTTP API."""
    import uvicorn

    from code_snippets.web import create_app

    click.echo(f"Starting code-snippets API at http://{host}:{port}")
    uvicorn.run(create_app(), host=host, port=port, log_level="info")


if __name__ == "__main__":
    cli()
