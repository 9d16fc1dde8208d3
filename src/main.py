#!/usr/bin/env python3
"""
yml2vocab: generate RDF vocabulary files from a YAML description.

Usage:
    yml2vocab vocab.yml                 -> vocab.ttl, vocab.jsonld
    yml2vocab https://example.org/v.yml --output-dir out --no-jsonld

Environment variables:
    YML2VOCAB_LOG_LEVEL: Logging level (default: INFO)
    YML2VOCAB_LOG_FORMAT: console or json (default: console)
    YML2VOCAB_HTTP_TIMEOUT: Timeout for remote sources (default: 30)
"""

from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import click

from errors import VocabError
from fetch import is_remote, read_source
from log import configure_logging, get_logger
from yml2vocab import VocabGeneration

logger = get_logger(__name__)


def _basename(location: str) -> str:
    """Common base name of the generated files, derived from the source name."""
    name = Path(urlparse(location).path).name if is_remote(location) else Path(location).name
    for suffix in (".yml", ".yaml"):
        if name.endswith(suffix):
            return name[: -len(suffix)]
    return name


@click.command()
@click.argument("source")
@click.option("--turtle/--no-turtle", default=True, show_default=True, help="Generate the Turtle file.")
@click.option("--jsonld/--no-jsonld", default=True, show_default=True, help="Generate the JSON-LD file.")
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory of the generated files (default: next to a local source, or the current directory).",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Overrides YML2VOCAB_LOG_LEVEL.",
)
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"]),
    default=None,
    help="Overrides YML2VOCAB_LOG_FORMAT.",
)
def main(
    source: str,
    turtle: bool,
    jsonld: bool,
    output_dir: Optional[Path],
    log_level: Optional[str],
    log_format: Optional[str],
) -> None:
    """Convert the vocabulary SOURCE (a YAML file or URL) into Turtle and JSON-LD."""
    configure_logging(log_level, log_format)

    try:
        conversion = VocabGeneration(read_source(source))
        outputs = {}
        if turtle:
            outputs[".ttl"] = conversion.get_turtle()
        if jsonld:
            outputs[".jsonld"] = conversion.get_jsonld()
    except VocabError as e:
        # Nothing is written if the conversion fails
        click.echo(f"Error in the YML conversion:\n{e}", err=True)
        raise SystemExit(1)

    if output_dir is None:
        output_dir = Path.cwd() if is_remote(source) else Path(source).parent
    output_dir.mkdir(parents=True, exist_ok=True)

    basename = _basename(source)
    for suffix, content in outputs.items():
        target = output_dir / f"{basename}{suffix}"
        target.write_text(content, encoding="utf-8")
        logger.info("file written", path=str(target))


if __name__ == "__main__":
    main()
