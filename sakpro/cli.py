#!/usr/bin/env python3
# /// script
# requires-python = ">=3.10"
# dependencies = ["click", "servicelayer", "beautifulsoup4"]
# ///

"""
SPDX-License-Identifier: MIT
© 2025 Tidsskriftet Sakprosa. Released under the MIT license.

Format docstrings according to PEP 287
File: cli.py
"""

import logging

import click
from servicelayer.logs import configure_logging

from sakpro.sanitize import SanitizeError, clean_html

log = logging.getLogger(__name__)

DEFAULT_SUFFIX = "_clean.htm"


def derive_output_path(path: str, suffix: str = DEFAULT_SUFFIX) -> str:
    """
    Build the cleaned file name next to the input.

    :param path: Input file path.
    :param suffix: Replacement for the first ``.htm`` in ``path``.
    :returns: ``issue.html`` becomes ``issue_clean.html``; a path without
              ``.htm`` gets the suffix appended.
    """
    if ".htm" in path:
        return path.replace(".htm", suffix, 1)
    return path + suffix


@click.group()
def cli() -> None:
    """
    Root Click command group for the sakpro HTML cleaner.

    This initializes logging via ``servicelayer.logs.configure_logging()`` and
    serves as the parent for the cleaning subcommands.
    """
    configure_logging()


@cli.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    required=False,
    help="Where to write the cleaned document; '-' for stdout. Derived from SOURCE if omitted.",
)
@click.option(
    "--suffix",
    default=DEFAULT_SUFFIX,
    show_default=True,
    envvar="SAKPRO_CLEAN_SUFFIX",
    help="Replaces the first '.htm' of SOURCE when deriving the output name.",
)
def clean(source: str, output: str | None, suffix: str) -> None:
    """
    Clean a single HTML document.

    :param source: Path of the HTML document to clean.
    :param output: Optional destination path, ``-`` for stdout.
    :param suffix: Suffix used to derive the destination from ``source``.
    :workflow:
        1. Read and clean ``source`` completely.
        2. Write the result to ``output`` (or the derived path).
    :notes:
        - Nothing is written when reading or tokenizing fails.
        - Bytes that are not valid UTF-8 are written back unchanged.
    """
    log.debug(f"Cleaning document: {source}")
    try:
        with open(source, "rb") as fh:
            html = clean_html(fh)
    except (OSError, SanitizeError) as e:
        log.error("[cli.clean] read_error source=%s: %s", source, e)
        raise click.ClickException(str(e)) from e

    if output == "-":
        click.get_binary_stream("stdout").write(html.encode("utf-8", errors="surrogateescape"))
        return

    target = output or derive_output_path(source, suffix)
    try:
        with open(target, "w", encoding="utf-8", errors="surrogateescape") as fh:
            fh.write(html)
    except OSError as e:
        log.error("[cli.clean] write_error target=%s: %s", target, e)
        raise click.ClickException(str(e)) from e
    log.info("[cli.clean] wrote target=%s len=%d", target, len(html))


if __name__ == "__main__":
    cli()
