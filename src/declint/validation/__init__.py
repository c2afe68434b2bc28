from declint.validation.analyzer import Decision, DuplicatePropertyAnalyzer, Verdict, analyze
from declint.validation.policy import Policy, ToleranceMode, resolve_policy, validate_options
from declint.validation.validator import LintError, lint, lint_or_raise

__all__ = [
    "Decision",
    "DuplicatePropertyAnalyzer",
    "Verdict",
    "analyze",
    "Policy",
    "ToleranceMode",
    "resolve_policy",
    "validate_options",
    "LintError",
    "lint",
    "lint_or_raise",
]
