"""Tests for the document validator."""

from __future__ import annotations

from pathlib import Path

from qpool_lint.core.config import ValidatorConfig
from qpool_lint.core.parser import read_file
from qpool_lint.core.parser.errors import (
    BAD_QUOTE_ESCAPE,
    FIELD_COUNT_MISMATCH,
    FIELD_TOO_LONG,
    INVALID_CORRECT_FLAG,
    MUST_BE_QUOTED,
    NO_CORRECT_ANSWER,
    UNCLOSED_QUOTE,
    UNESCAPED_QUOTE,
    UNPAIRED_CHOICE,
)
from qpool_lint.core.rules import build_report, iter_findings, validate_document, validate_text


def codes(findings: list) -> list[str]:
    return [f.code for f in findings]


class TestEmptyInput:
    """Documents without data rows."""

    def test_empty_string(self) -> None:
        """Test empty input yields no findings."""
        assert validate_text("") == []

    def test_blank_lines_only(self) -> None:
        """Test whitespace-only input yields no findings."""
        assert validate_text("\n  \r\n\t\n") == []

    def test_header_only(self) -> None:
        """Test a header-only document is clean."""
        assert validate_text("id,question,choice1,correct1\n") == []


class TestFieldCount:
    """Row field count must match the header."""

    def test_too_few_fields(self) -> None:
        findings = validate_text("a,b,c\n1,2")
        assert len(findings) == 1
        assert findings[0].line == 2
        assert findings[0].field == 0
        assert findings[0].code == FIELD_COUNT_MISMATCH
        assert findings[0].error == "[Row] Inconsistent number of fields: expected 3, got 2"

    def test_too_many_fields(self) -> None:
        findings = validate_text("a,b\n1,2,3")
        assert codes(findings) == [FIELD_COUNT_MISMATCH]
        assert "expected 2, got 3" in findings[0].error

    def test_header_not_checked_against_itself(self) -> None:
        assert validate_text("a,b,c") == []


class TestFieldContents:
    """Quoting, escaping and length rules."""

    def test_quoted_comma_is_fine(self) -> None:
        """Test a correctly quoted field never needs quoting."""
        findings = validate_text('a,b,c\na,"b,c",d')
        assert not any(f.code == MUST_BE_QUOTED and f.field == 2 for f in findings)
        assert findings == []

    def test_unquoted_quote_must_be_quoted(self) -> None:
        """Test a stray quote is both a content and a parse error."""
        findings = validate_text('a,b\n1,x"y')
        assert codes(findings) == [MUST_BE_QUOTED, UNESCAPED_QUOTE]
        assert findings[0].field == 2
        assert findings[0].error == "[b] Field containing comma, CR, LF, or double quote must be quoted"

    def test_lone_carriage_return_must_be_quoted(self) -> None:
        findings = validate_text("a,b\r1,x\ry\n")
        assert codes(findings) == [MUST_BE_QUOTED, MUST_BE_QUOTED]

    def test_header_fields_are_checked(self) -> None:
        """Test content rules apply to the header line too."""
        findings = validate_text('id,ques"tion')
        assert codes(findings) == [MUST_BE_QUOTED, UNESCAPED_QUOTE]
        assert findings[0].line == 1

    def test_improperly_escaped_quotes(self) -> None:
        """Test a doubled quote surviving unescaping is reported."""
        findings = validate_text('a\n"x""""y"')
        assert codes(findings) == [BAD_QUOTE_ESCAPE]
        assert findings[0].error == "[a] Field has improperly escaped double quotes"

    def test_properly_escaped_quotes(self) -> None:
        assert validate_text('a\n"say ""hi"""') == []

    def test_field_too_long(self) -> None:
        """Test a 1001 character field yields exactly one length finding."""
        findings = validate_text("a,b\n1," + "a" * 1001)
        assert codes(findings) == [FIELD_TOO_LONG]
        assert findings[0].field == 2
        assert "(actual: 1001)" in findings[0].error

    def test_field_at_limit(self) -> None:
        assert validate_text("a,b\n1," + "a" * 1000) == []

    def test_length_reported_alongside_other_rules(self) -> None:
        """Test the length rule is independent of other findings on the row."""
        findings = validate_text("a,b\n" + "a" * 1001)
        assert codes(findings) == [FIELD_COUNT_MISMATCH, FIELD_TOO_LONG]

    def test_configured_max_length(self) -> None:
        config = ValidatorConfig(max_field_length=5)
        findings = validate_text("a\nabcdef", config)
        assert codes(findings) == [FIELD_TOO_LONG]
        assert "maximum length of 5 characters (actual: 6)" in findings[0].error


class TestCorrectFlags:
    """correct<N> columns."""

    def test_all_false_is_row_level_error(self) -> None:
        """Test a row without any TRUE is reported once."""
        findings = validate_text("id,correct1,correct2\n1,FALSE,FALSE")
        assert len(findings) == 1
        assert findings[0].field == 0
        assert findings[0].code == NO_CORRECT_ANSWER
        assert findings[0].error == "[Row] At least one correct field must be TRUE"

    def test_true_is_case_insensitive(self) -> None:
        assert validate_text("id,correct1,correct2\n1, true ,False") == []

    def test_invalid_flag(self) -> None:
        findings = validate_text("id,Correct1,correct2\n1,yes,TRUE")
        assert codes(findings) == [INVALID_CORRECT_FLAG]
        assert findings[0].field == 2
        assert findings[0].error == "[Correct1] Value must be either TRUE or FALSE"

    def test_invalid_flag_and_no_true(self) -> None:
        findings = validate_text("id,correct1\n1,maybe")
        assert codes(findings) == [INVALID_CORRECT_FLAG, NO_CORRECT_ANSWER]

    def test_all_blank_without_choices(self) -> None:
        findings = validate_text("id,correct1,correct2\n1,,")
        assert codes(findings) == [NO_CORRECT_ANSWER]

    def test_header_is_exempt(self) -> None:
        """Test the header's own values are not treated as flags."""
        assert validate_text("\n\nid,correct1\n1,TRUE") == []

    def test_no_correct_columns(self) -> None:
        assert validate_text("id,question\n1,anything") == []

    def test_short_row_counts_missing_flags_as_blank(self) -> None:
        findings = validate_text("id,question,correct1\n1,q")
        assert codes(findings) == [FIELD_COUNT_MISMATCH, NO_CORRECT_ANSWER]


class TestChoicePairs:
    """choice<N>/correct<N> pairing."""

    def test_choice_without_correct(self) -> None:
        """Test a filled choice with empty correct is reported on the correct field."""
        findings = validate_text("id,choice1,correct1\n1,yes,")
        assert len(findings) == 1
        assert findings[0].field == 3
        assert findings[0].code == UNPAIRED_CHOICE
        assert "correct1 must not be empty when choice1 is not empty" in findings[0].error

    def test_correct_without_choice(self) -> None:
        """Test a filled correct with empty choice is reported on the choice field."""
        findings = validate_text("id,choice1,correct1,choice2,correct2\n1,a,TRUE,,FALSE")
        assert codes(findings) == [UNPAIRED_CHOICE]
        assert findings[0].field == 4
        assert findings[0].error == "[choice2] choice2 must not be empty when correct2 is not empty"

    def test_both_blank_is_fine(self) -> None:
        assert validate_text("id,choice1,correct1,choice2,correct2\n1,a,TRUE,,") == []

    def test_whitespace_counts_as_blank(self) -> None:
        findings = validate_text("id,choice1,correct1\n1,  ,TRUE")
        assert codes(findings) == [UNPAIRED_CHOICE]
        assert findings[0].field == 2

    def test_unpaired_columns_are_not_compared(self) -> None:
        """Test a choice<N> without a correct<N> column is not checked."""
        assert validate_text("id,choice1,choice2,correct1\n1,a,b,TRUE") == []

    def test_columns_in_any_order(self) -> None:
        findings = validate_text("correct1,id,choice1\n,1,x")
        assert codes(findings) == [UNPAIRED_CHOICE]
        assert findings[0].field == 1


class TestParseErrors:
    """Tokenizer errors are merged into the findings."""

    def test_unterminated_quote(self) -> None:
        """Test an unterminated quote yields exactly one finding."""
        findings = validate_text('"unterminated')
        assert codes(findings) == [UNCLOSED_QUOTE]
        assert findings[0].line == 1
        assert findings[0].field == 1

    def test_parse_errors_come_last(self) -> None:
        findings = validate_text('id,question,correct1\n1,"open,FALSE')
        assert codes(findings) == [FIELD_COUNT_MISMATCH, NO_CORRECT_ANSWER, UNCLOSED_QUOTE]
        assert findings[2].error == "[question] Unclosed quoted field"

    def test_header_parse_error_uses_placeholder(self) -> None:
        findings = validate_text('id,na"me')
        assert findings[-1].error == "[#2] Unescaped quote found in unquoted field"


class TestLineNumbers:
    """Blank lines are skipped without renumbering."""

    def test_blank_lines_keep_physical_numbers(self) -> None:
        text = "\nid,correct1\n\n  \n1,FALSE\n\n2,TRUE\n3,x"
        findings = validate_text(text)
        assert [(f.line, f.code) for f in findings] == [
            (5, NO_CORRECT_ANSWER),
            (8, INVALID_CORRECT_FLAG),
            (8, NO_CORRECT_ANSWER),
        ]

    def test_crlf_line_endings(self) -> None:
        findings = validate_text("id,correct1\r\n1,FALSE\r\n2,TRUE\r\n")
        assert [(f.line, f.code) for f in findings] == [(2, NO_CORRECT_ANSWER)]

    def test_iter_findings_matches_validate_text(self) -> None:
        text = 'id,choice1,correct1\n1,a,\n2,"b\n3,,TRUE'
        assert list(iter_findings(text)) == validate_text(text)


class TestGoldenFiles:
    """End-to-end checks on golden files."""

    def test_valid_pool(self, valid_pool: Path) -> None:
        report = validate_document(read_file(valid_pool))
        assert report.findings == []
        assert report.row_count == 3
        assert not report.has_errors

    def test_broken_pool(self, broken_pool: Path) -> None:
        report = validate_document(read_file(broken_pool))
        assert [(f.line, f.field, f.code) for f in report.findings] == [
            (4, 0, FIELD_COUNT_MISMATCH),
            (4, 4, INVALID_CORRECT_FLAG),
            (4, 6, INVALID_CORRECT_FLAG),
            (4, 0, NO_CORRECT_ANSWER),
            (5, 0, FIELD_COUNT_MISMATCH),
            (5, 0, NO_CORRECT_ANSWER),
            (5, 2, UNCLOSED_QUOTE),
            (6, 2, MUST_BE_QUOTED),
            (6, 4, INVALID_CORRECT_FLAG),
            (6, 5, UNPAIRED_CHOICE),
            (6, 2, UNESCAPED_QUOTE),
            (6, 2, UNESCAPED_QUOTE),
        ]
        assert report.lines_with_findings == [4, 5, 6]
        assert report.file == str(broken_pool)

    def test_large_pool(self, large_pool: Path) -> None:
        report = validate_document(read_file(large_pool))
        assert report.findings == []
        assert report.row_count == 5_000


class TestBuildReport:
    """Tests for ValidationReport helpers."""

    def test_report_lines_and_lookups(self) -> None:
        report = build_report("id,choice1,correct1\n\n1,yes,\n2,no,TRUE", file="pool.csv")
        assert report.header == ["id", "choice1", "correct1"]
        assert [line.line_no for line in report.lines] == [1, 3, 4]
        assert report.get_line(3).raw_fields == ["1", "yes", ""]
        assert report.get_line(2) is None
        assert report.has_field_error(3, 3)
        assert not report.has_field_error(4, 3)
        assert len(report.findings_for_line(3)) == 1
        assert report.code_counts == [(UNPAIRED_CHOICE, 1)]

    def test_empty_report(self) -> None:
        report = build_report("")
        assert report.header == []
        assert report.row_count == 0
        assert report.findings == []
