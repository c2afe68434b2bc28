"""CLI command: declint lint -- report or fix duplicate properties."""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path

import click

from declint.config import ConfigError, LintConfig, find_config, load_config
from declint.model.diagnostic import Diagnostic, Severity
from declint.parser import ParseError, parse_stylesheet
from declint.validation import lint as run_lint
from declint.validation.policy import IGNORE_VALUES
from declint.validation.rules import NO_DUPLICATE_PROPERTIES

logger = logging.getLogger(__name__)


def _apply_overrides(
    config: LintConfig,
    fix: bool,
    ignore: tuple[str, ...],
    ignore_properties: tuple[str, ...],
) -> LintConfig:
    """Layer command-line options on top of the file configuration."""
    if fix:
        config = replace(config, fix=True)
    if not ignore and not ignore_properties:
        return config
    primary, options = config.rules.get(NO_DUPLICATE_PROPERTIES, (True, None))
    merged: dict[str, object] = dict(options) if isinstance(options, Mapping) else {}
    if ignore:
        merged["ignore"] = list(ignore)
    if ignore_properties:
        merged["ignoreProperties"] = list(ignore_properties)
    return config.with_rule(NO_DUPLICATE_PROPERTIES, (primary, merged))


@click.command()
@click.argument(
    "files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False)
)
@click.option("--fix", is_flag=True, default=False, help="Delete duplicates in place")
@click.option(
    "--ignore",
    multiple=True,
    type=click.Choice(IGNORE_VALUES),
    help="Tolerate consecutive duplicates (repeatable)",
)
@click.option(
    "--ignore-properties",
    "ignore_properties",
    multiple=True,
    help="Property name to skip, matched exactly (repeatable)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON config file (default: .declintrc.json in the working directory)",
)
@click.option("--verbose", is_flag=True, default=False, help="Enable debug logging")
def lint(
    files: tuple[str, ...],
    fix: bool,
    ignore: tuple[str, ...],
    ignore_properties: tuple[str, ...],
    config_path: str | None,
    verbose: bool,
) -> None:
    """Lint CSS files for duplicate properties.

    Prints one line per diagnostic and exits with code 0 if no errors remain,
    or code 1 if there are errors or a file cannot be parsed.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    # Configure
    try:
        found = config_path or find_config()
        config = load_config(found) if found else LintConfig()
    except ConfigError as exc:
        click.echo(f"Config error: {exc}", err=True)
        sys.exit(1)
    config = _apply_overrides(config, fix, ignore, ignore_properties)

    diagnostics: list[Diagnostic] = []
    failed = False
    for file in files:
        css_path = Path(file)
        source = css_path.read_text(encoding="utf-8")

        # Parse
        try:
            stylesheet = parse_stylesheet(source, source_name=str(css_path))
        except ParseError as exc:
            click.echo(f"Parse error in {css_path}:{exc.line}:{exc.column}: {exc}", err=True)
            failed = True
            continue

        # Lint
        logger.info("Linting %s", css_path)
        file_diagnostics = run_lint(stylesheet, config)
        if config.fix:
            fixed = stylesheet.to_css()
            if fixed != source:
                css_path.write_text(fixed, encoding="utf-8")
                logger.info("Fixed %s", css_path)
                click.echo(f"Fixed: {css_path}")
        for diag in file_diagnostics:
            click.echo(str(diag))
        diagnostics.extend(file_diagnostics)

    errors = [d for d in diagnostics if d.severity is Severity.ERROR]
    warnings = [d for d in diagnostics if d.severity is Severity.WARNING]

    if diagnostics:
        click.echo()
    click.echo(
        f"Summary: {len(files)} file(s), {len(errors)} error(s), {len(warnings)} warning(s)"
    )

    if errors or failed:
        sys.exit(1)
    sys.exit(0)
