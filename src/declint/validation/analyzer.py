"""Duplicate-property analysis for a single declaration block.

The analyzer walks a block's declarations once, in source order, and keeps
an append-only *anchor record*: the declarations later ones are compared
against.  Entries are never dropped from the record, even when the
declaration behind them is deleted from the document by a fix.

A declaration is compared against the earliest recorded entry with the same
property, and counts as adjacent when that entry is the last one recorded.
What gets recorded for a repeat depends on the tolerance mode:

* ``STRICT`` / ``ADJACENT_ONLY``: a reported duplicate is appended too, so
  it becomes the last entry and later repeats of the property are no longer
  adjacent to the anchor.
* ``ADJACENT_DIFFERENT_VALUES`` / ``ADJACENT_SAME_UNPREFIXED_VALUE``:
  duplicates are never appended; a repeat stays adjacent as long as no other
  property has been recorded since the first occurrence.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Iterator

from declint.model.stylesheet import Declaration
from declint.validation.policy import Policy, ToleranceMode
from declint.validation.syntax import (
    is_custom_property,
    is_standard_syntax_property,
    unprefixed,
)

logger = logging.getLogger(__name__)

# Legitimately repeated inside @font-face as a fallback list.
ALWAYS_EXEMPT = frozenset({"src"})


class Verdict(Enum):
    """Outcome for one declaration."""

    UNIQUE = "unique"
    ALLOWED = "allowed"
    VIOLATION = "violation"


@dataclass(frozen=True)
class Anchor:
    """An anchor record entry: cached comparison fields plus the declaration."""

    index: int
    prop: str  # lowercased
    value: str
    important: bool
    declaration: Declaration


@dataclass(frozen=True)
class Decision:
    """The analyzer's verdict for one declaration.

    ``remove`` is set only for violations found with fixing enabled; it names
    the declaration to delete from the document (either this one or the
    anchor's).
    """

    declaration: Declaration
    verdict: Verdict
    anchor: Anchor | None = None
    remove: Declaration | None = None

    @property
    def is_violation(self) -> bool:
        return self.verdict is Verdict.VIOLATION

    @property
    def is_fixed(self) -> bool:
        return self.remove is not None


# ---------------------------------------------------------------------------
# Decision table
# ---------------------------------------------------------------------------

ModeRule = Callable[[bool, Declaration, Anchor], Verdict]


def _strict(adjacent: bool, decl: Declaration, anchor: Anchor) -> Verdict:
    return Verdict.VIOLATION


def _adjacent_only(adjacent: bool, decl: Declaration, anchor: Anchor) -> Verdict:
    return Verdict.ALLOWED if adjacent else Verdict.VIOLATION


def _adjacent_different_values(
    adjacent: bool, decl: Declaration, anchor: Anchor
) -> Verdict:
    if not adjacent or decl.value == anchor.value:
        return Verdict.VIOLATION
    return Verdict.ALLOWED


def _adjacent_same_unprefixed_value(
    adjacent: bool, decl: Declaration, anchor: Anchor
) -> Verdict:
    if adjacent and unprefixed(decl.value) != unprefixed(anchor.value):
        return Verdict.VIOLATION
    return _adjacent_different_values(adjacent, decl, anchor)


DECISION_TABLE: dict[ToleranceMode, ModeRule] = {
    ToleranceMode.STRICT: _strict,
    ToleranceMode.ADJACENT_ONLY: _adjacent_only,
    ToleranceMode.ADJACENT_DIFFERENT_VALUES: _adjacent_different_values,
    ToleranceMode.ADJACENT_SAME_UNPREFIXED_VALUE: _adjacent_same_unprefixed_value,
}


# ---------------------------------------------------------------------------
# Analyzer
# ---------------------------------------------------------------------------


class DuplicatePropertyAnalyzer:
    """Find duplicate property declarations within one block.

    The two syntax predicates default to the built-in classifiers and can be
    replaced for other dialects.
    """

    def __init__(
        self,
        policy: Policy,
        is_standard_syntax: Callable[[str], bool] = is_standard_syntax_property,
        is_custom: Callable[[str], bool] = is_custom_property,
    ) -> None:
        self.policy = policy
        self._is_standard_syntax = is_standard_syntax
        self._is_custom = is_custom
        self._decide = DECISION_TABLE[policy.mode]

    def is_exempt(self, decl: Declaration) -> bool:
        prop = decl.prop
        return (
            not self._is_standard_syntax(prop)
            or self._is_custom(prop)
            or prop in self.policy.exempt_properties
            or prop.lower() in ALWAYS_EXEMPT
        )

    def analyze(self, declarations: Iterable[Declaration]) -> Iterator[Decision]:
        """Yield one :class:`Decision` per declaration, in order."""
        record: list[Anchor] = []
        for index, decl in enumerate(declarations):
            if self.is_exempt(decl):
                yield Decision(decl, Verdict.UNIQUE)
                continue

            prop = decl.prop.lower()
            anchor = next((a for a in record if a.prop == prop), None)
            if anchor is None:
                record.append(_anchor(index, decl))
                yield Decision(decl, Verdict.UNIQUE)
                continue

            adjacent = anchor is record[-1]
            verdict = self._decide(adjacent, decl, anchor)
            remove: Declaration | None = None
            if verdict is Verdict.VIOLATION and self.policy.fix:
                if not decl.important and anchor.important:
                    remove = decl
                else:
                    remove = anchor.declaration
            elif verdict is Verdict.VIOLATION and not self.policy.mode.compares_values:
                record.append(_anchor(index, decl))

            logger.debug(
                "%s at %d:%d is %s (anchor %d, adjacent=%s)",
                decl.prop,
                decl.line,
                decl.column,
                verdict.value,
                anchor.index,
                adjacent,
            )
            yield Decision(decl, verdict, anchor=anchor, remove=remove)


def _anchor(index: int, decl: Declaration) -> Anchor:
    return Anchor(
        index=index,
        prop=decl.prop.lower(),
        value=decl.value,
        important=decl.important,
        declaration=decl,
    )


def analyze(declarations: Iterable[Declaration], policy: Policy) -> Iterator[Decision]:
    """Analyze one block's declarations under *policy*."""
    return DuplicatePropertyAnalyzer(policy).analyze(declarations)
