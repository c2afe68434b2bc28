"""declint model layer -- public type re-exports."""

from declint.model.diagnostic import Diagnostic, Severity, SourceLocation
from declint.model.stylesheet import AtRule, Declaration, Rule, Stylesheet

__all__ = [
    # stylesheet
    "Declaration",
    "Rule",
    "AtRule",
    "Stylesheet",
    # diagnostic
    "Severity",
    "SourceLocation",
    "Diagnostic",
]
