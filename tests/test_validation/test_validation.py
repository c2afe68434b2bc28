"""Tests for the duplicate-properties rule and the linter."""

from pathlib import Path

import pytest

from declint.config import LintConfig
from declint.model.diagnostic import Severity
from declint.parser import parse_stylesheet
from declint.validation import LintError, lint, lint_or_raise
from declint.validation.rules import (
    ALL_RULES,
    NO_DUPLICATE_PROPERTIES,
    check_duplicate_properties,
)

FIXTURES = Path(__file__).parent.parent / "fixtures"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _check(source: str, options=None, fix: bool = False, primary: object = True):
    sheet = parse_stylesheet(source, source_name="test.css")
    return sheet, check_duplicate_properties(sheet, primary, options, fix=fix)


def _fixed(source: str, options=None) -> str:
    sheet, diags = _check(source, options, fix=True)
    assert diags == []
    return sheet.to_css()


# ---------------------------------------------------------------------------
# Reporting
# ---------------------------------------------------------------------------


class TestReport:
    def test_duplicate_reported(self) -> None:
        _, diags = _check("a {\n  color: red;\n  color: blue;\n}")
        assert len(diags) == 1
        diag = diags[0]
        assert diag.rule == NO_DUPLICATE_PROPERTIES
        assert diag.severity is Severity.ERROR
        assert diag.message == 'Unexpected duplicate "color"'
        assert diag.word == "color"
        assert str(diag.location) == "test.css:3:3"
        assert diag.location.end_column == 8

    def test_message_uses_offending_spelling(self) -> None:
        _, diags = _check("a { color: red; COLOR: blue; }")
        assert diags[0].message == 'Unexpected duplicate "COLOR"'
        assert diags[0].word == "COLOR"

    def test_no_duplicates(self) -> None:
        _, diags = _check("a { color: red; margin: 0; }")
        assert diags == []

    def test_chain_reports_twice(self) -> None:
        _, diags = _check("a { top: 0; top: 1; top: 2; }")
        assert [d.word for d in diags] == ["top", "top"]

    def test_blocks_are_independent(self) -> None:
        _, diags = _check("a { color: red; } b { color: red; }")
        assert diags == []

    def test_nested_block_is_own_scope(self) -> None:
        source = "a {\n  color: red;\n  b {\n    color: blue;\n  }\n  color: green;\n}\n"
        _, diags = _check(source)
        assert len(diags) == 1
        assert (diags[0].location.line, diags[0].location.column) == (6, 3)

    def test_report_leaves_document_alone(self) -> None:
        source = "a { color: red; color: red; }"
        sheet, _ = _check(source)
        assert sheet.to_css() == source
        assert len(sheet.nodes[0].nodes) == 2

    def test_font_face_src(self) -> None:
        _, diags = _check("@font-face { src: url(a.woff2); src: url(a.woff); }")
        assert diags == []

    def test_custom_properties(self) -> None:
        _, diags = _check(":root { --gap: 1px; --gap: 2px; }")
        assert diags == []

    def test_ignore_properties(self) -> None:
        _, diags = _check(
            "a { color: red; color: blue; top: 0; top: 1; }",
            {"ignoreProperties": ["color"]},
        )
        assert [d.word for d in diags] == ["top"]

    def test_prefixless_mode(self) -> None:
        options = {"ignore": ["consecutive-duplicates-with-same-prefixless-values"]}
        _, diags = _check("a { display: flex; display: -webkit-flex; }", options)
        assert diags == []
        _, diags = _check("a { display: flex; display: block; }", options)
        assert len(diags) == 1

    def test_fixture(self) -> None:
        source = (FIXTURES / "duplicates.css").read_text()
        _, diags = _check(source)
        assert [(d.word, d.location.line) for d in diags] == [
            ("color", 5),
            ("display", 11),
        ]


# ---------------------------------------------------------------------------
# Disabled rule and invalid options
# ---------------------------------------------------------------------------


class TestOptions:
    @pytest.mark.parametrize("primary", [None, False])
    def test_disabled(self, primary: object) -> None:
        _, diags = _check("a { color: red; color: red; }", primary=primary)
        assert diags == []

    def test_invalid_options_skip_analysis(self) -> None:
        sheet, diags = _check(
            "a { color: red; color: red; }", {"ignore": ["bogus"]}, fix=True
        )
        assert len(diags) == 1
        assert "bogus" in diags[0].message
        assert len(sheet.nodes[0].nodes) == 2

    def test_invalid_ignore_properties(self) -> None:
        _, diags = _check("a { color: red; color: red; }", {"ignoreProperties": [1]})
        assert len(diags) == 1
        assert "Unexpected duplicate" not in diags[0].message


# ---------------------------------------------------------------------------
# Fixing
# ---------------------------------------------------------------------------


class TestFix:
    def test_same_values(self) -> None:
        assert _fixed("a { color: red; color: red; }") == "a { color: red; }"

    def test_later_important_survives(self) -> None:
        assert _fixed("a { color: red; color: blue !important; }") == (
            "a { color: blue !important; }"
        )

    def test_earlier_important_survives(self) -> None:
        assert _fixed("a { color: red !important; color: blue; }") == (
            "a { color: red !important; }"
        )

    def test_case_insensitive(self) -> None:
        assert _fixed("a { Color: red; color: blue; }") == "a { color: blue; }"

    def test_separated_duplicate(self) -> None:
        options = {"ignore": ["consecutive-duplicates"]}
        source = "a {\n  color: red;\n  margin: 0;\n  color: blue;\n}\n"
        assert _fixed(source, options) == "a {\n  margin: 0;\n  color: blue;\n}\n"

    def test_allowed_duplicate_untouched(self) -> None:
        options = {"ignore": ["consecutive-duplicates"]}
        source = "a { color: red; color: blue; }"
        assert _fixed(source, options) == source

    def test_chain_only_first_removed(self) -> None:
        # Every repeat points at the first occurrence, which is already gone
        # by the time the third declaration is analyzed.
        assert _fixed("a { top: 0; top: 1; top: 2; }") == "a { top: 1; top: 2; }"

    def test_nested_blocks(self) -> None:
        source = "@media print { a { color: red; color: red; } }"
        assert _fixed(source) == "@media print { a { color: red; } }"


# ---------------------------------------------------------------------------
# Linter
# ---------------------------------------------------------------------------


class TestLint:
    def test_registry(self) -> None:
        assert ALL_RULES[NO_DUPLICATE_PROPERTIES] is check_duplicate_properties

    def test_default_config(self) -> None:
        sheet = parse_stylesheet("a { color: red; color: red; }")
        diags = lint(sheet)
        assert [d.rule for d in diags] == [NO_DUPLICATE_PROPERTIES]

    def test_rule_options_from_config(self) -> None:
        config = LintConfig(
            rules={NO_DUPLICATE_PROPERTIES: (True, {"ignore": "consecutive-duplicates"})}
        )
        sheet = parse_stylesheet("a { color: red; color: red; }")
        assert lint(sheet, config) == []

    def test_rule_disabled_in_config(self) -> None:
        config = LintConfig(rules={NO_DUPLICATE_PROPERTIES: (None, None)})
        sheet = parse_stylesheet("a { color: red; color: red; }")
        assert lint(sheet, config) == []

    def test_unknown_rule(self) -> None:
        config = LintConfig(rules={"no-such-rule": (True, None)})
        diags = lint(parse_stylesheet("a { color: red; }"), config)
        assert len(diags) == 1
        assert diags[0].message == 'Unknown rule "no-such-rule"'

    def test_fix_from_config(self) -> None:
        sheet = parse_stylesheet("a { color: red; color: red; }")
        assert lint(sheet, LintConfig(fix=True)) == []
        assert sheet.to_css() == "a { color: red; }"

    def test_lint_or_raise(self) -> None:
        sheet = parse_stylesheet("a { color: red; color: red; }")
        with pytest.raises(LintError) as exc_info:
            lint_or_raise(sheet)
        assert len(exc_info.value.diagnostics) == 1
        assert "1 error(s)" in str(exc_info.value)

    def test_lint_or_raise_clean(self) -> None:
        assert lint_or_raise(parse_stylesheet("a { color: red; }")) == []
