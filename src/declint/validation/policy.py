"""Tolerance policy for duplicate properties and its option validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

from declint.model.diagnostic import Diagnostic, Severity


class ToleranceMode(Enum):
    """Which duplicates inside one block are tolerated.

    The value is the ``ignore`` option spelling that selects the mode.
    """

    STRICT = ""
    ADJACENT_ONLY = "consecutive-duplicates"
    ADJACENT_DIFFERENT_VALUES = "consecutive-duplicates-with-different-values"
    ADJACENT_SAME_UNPREFIXED_VALUE = "consecutive-duplicates-with-same-prefixless-values"

    @property
    def compares_values(self) -> bool:
        """Value-comparing modes keep the first occurrence as the only anchor."""
        return self in (
            ToleranceMode.ADJACENT_DIFFERENT_VALUES,
            ToleranceMode.ADJACENT_SAME_UNPREFIXED_VALUE,
        )


IGNORE_VALUES = tuple(m.value for m in ToleranceMode if m is not ToleranceMode.STRICT)

# When several ``ignore`` values are given, the richest one wins.
_MODE_PRECEDENCE = (
    ToleranceMode.ADJACENT_SAME_UNPREFIXED_VALUE,
    ToleranceMode.ADJACENT_DIFFERENT_VALUES,
    ToleranceMode.ADJACENT_ONLY,
)

OPTION_NAMES = frozenset({"ignore", "ignoreProperties"})


@dataclass(frozen=True)
class Policy:
    """Resolved configuration for one analysis run."""

    mode: ToleranceMode = ToleranceMode.STRICT
    exempt_properties: frozenset[str] = field(default_factory=frozenset)
    fix: bool = False


def _as_list(value: object) -> list[object]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _invalid(rule: str, message: str) -> Diagnostic:
    return Diagnostic(rule=rule, severity=Severity.ERROR, message=message)


def validate_options(rule: str, options: object) -> list[Diagnostic]:
    """Check secondary options for *rule*.

    Returns one "invalid option" diagnostic per problem; an empty list means
    the options are usable.
    """
    if options is None:
        return []
    if not isinstance(options, Mapping):
        return [_invalid(rule, f'Invalid option value "{options}" for rule "{rule}"')]

    diagnostics: list[Diagnostic] = []
    for name in options:
        if name not in OPTION_NAMES:
            diagnostics.append(
                _invalid(rule, f'Invalid option name "{name}" for rule "{rule}"')
            )
    for value in _as_list(options.get("ignore")):
        if value not in IGNORE_VALUES:
            diagnostics.append(
                _invalid(rule, f'Invalid value "{value}" for option "ignore" of rule "{rule}"')
            )
    for value in _as_list(options.get("ignoreProperties")):
        if not isinstance(value, str):
            diagnostics.append(
                _invalid(
                    rule,
                    f'Invalid value "{value}" for option "ignoreProperties" of rule "{rule}"',
                )
            )
    return diagnostics


def resolve_policy(options: Mapping[str, object] | None, fix: bool = False) -> Policy:
    """Build a :class:`Policy` from already validated secondary options."""
    options = options or {}
    ignore = set(_as_list(options.get("ignore")))
    mode = next((m for m in _MODE_PRECEDENCE if m.value in ignore), ToleranceMode.STRICT)
    exempt = frozenset(str(p) for p in _as_list(options.get("ignoreProperties")))
    return Policy(mode=mode, exempt_properties=exempt, fix=fix)
