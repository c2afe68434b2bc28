"""Stylesheet linter: runs the configured rules and collects diagnostics."""

from __future__ import annotations

from declint.config import LintConfig
from declint.model.diagnostic import Diagnostic, Severity
from declint.model.stylesheet import Stylesheet
from declint.validation.rules import ALL_RULES


class LintError(Exception):
    """Raised when linting leaves ERROR-severity diagnostics behind."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        messages = [str(d) for d in diagnostics if d.is_error]
        super().__init__(
            f"Lint failed with {len(messages)} error(s): " + "; ".join(messages)
        )


def lint(stylesheet: Stylesheet, config: LintConfig | None = None) -> list[Diagnostic]:
    """Run every registered rule against *stylesheet*.

    Rules missing from ``config.rules`` run with their defaults.  When
    ``config.fix`` is set, fixable problems are repaired in place and only
    the remaining ones are returned.
    """
    config = config or LintConfig()
    diagnostics: list[Diagnostic] = []
    for name in config.rules:
        if name not in ALL_RULES:
            diagnostics.append(
                Diagnostic(rule=name, severity=Severity.ERROR, message=f'Unknown rule "{name}"')
            )
    for name, check in ALL_RULES.items():
        primary, options = config.rules.get(name, (True, None))
        diagnostics.extend(check(stylesheet, primary, options, fix=config.fix))
    return diagnostics


def lint_or_raise(
    stylesheet: Stylesheet, config: LintConfig | None = None
) -> list[Diagnostic]:
    """Run linting; raises :class:`LintError` if any ERROR diagnostics exist.

    Returns the non-error diagnostics when no errors are found.
    """
    diagnostics = lint(stylesheet, config)
    errors = [d for d in diagnostics if d.is_error]
    if errors:
        raise LintError(errors)
    return diagnostics
