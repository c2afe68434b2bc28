"""Lint rules for stylesheets.

Each rule is a function taking a Stylesheet, the rule's primary option, its
secondary options and the fix flag, and returning a list of Diagnostic
objects for the problems it did not fix.
"""

from __future__ import annotations

import logging
from typing import Callable, Mapping

from declint.model.diagnostic import Diagnostic, Severity, SourceLocation
from declint.model.stylesheet import Declaration, Stylesheet
from declint.validation.analyzer import DuplicatePropertyAnalyzer
from declint.validation.blocks import each_declaration_block
from declint.validation.policy import resolve_policy, validate_options

logger = logging.getLogger(__name__)

NO_DUPLICATE_PROPERTIES = "declaration-block-no-duplicate-properties"


def rejected(prop: str) -> str:
    return f'Unexpected duplicate "{prop}"'


def _location(stylesheet: Stylesheet, decl: Declaration) -> SourceLocation:
    return SourceLocation(
        file=stylesheet.source_name,
        line=decl.line,
        column=decl.column,
        end_line=decl.line,
        end_column=decl.column + len(decl.prop),
    )


def check_duplicate_properties(
    stylesheet: Stylesheet,
    primary: object = True,
    options: Mapping[str, object] | None = None,
    fix: bool = False,
) -> list[Diagnostic]:
    """Disallow duplicate properties within declaration blocks.

    With *fix*, each violation deletes one of the two declarations instead of
    being reported.  Invalid *options* are reported and nothing is analyzed.
    """
    if primary is None or primary is False:
        return []
    invalid = validate_options(NO_DUPLICATE_PROPERTIES, options)
    if invalid:
        return invalid

    analyzer = DuplicatePropertyAnalyzer(resolve_policy(options, fix=fix))
    diagnostics: list[Diagnostic] = []
    for block in each_declaration_block(stylesheet):
        for decision in analyzer.analyze(block):
            if not decision.is_violation:
                continue
            if decision.remove is not None:
                removed = decision.remove
                logger.debug(
                    "Removing duplicate %s at %s:%d:%d",
                    removed.prop,
                    stylesheet.source_name,
                    removed.line,
                    removed.column,
                )
                removed.remove()
                continue
            decl = decision.declaration
            diagnostics.append(
                Diagnostic(
                    rule=NO_DUPLICATE_PROPERTIES,
                    severity=Severity.ERROR,
                    message=rejected(decl.prop),
                    location=_location(stylesheet, decl),
                    word=decl.prop,
                )
            )
    return diagnostics


# ---------------------------------------------------------------------------
# Rule registry
# ---------------------------------------------------------------------------

RuleFunc = Callable[..., list[Diagnostic]]

ALL_RULES: dict[str, RuleFunc] = {
    NO_DUPLICATE_PROPERTIES: check_duplicate_properties,
}
