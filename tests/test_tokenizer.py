"""
Tests for line tokenization.

CRITICAL TESTS:
1. test_no_delimiter_is_empty - Non-messages yield no pairs
2. test_soh_wins_over_pipe - Delimiter priority
3. test_malformed_segment_dropped - Segments without '=' are skipped
"""

import pytest

from fixlens.core.errors import ErrorCode
from fixlens.decode.tokenizer import SOH, PIPE, RawPair, detect_delimiter, tokenize, scan


class TestDetectDelimiter:
    """Test delimiter detection."""

    def test_soh(self):
        assert detect_delimiter("8=FIX.4.4\x0135=D\x01") == SOH

    def test_pipe(self):
        assert detect_delimiter("8=FIX.4.4|35=D|") == PIPE

    def test_soh_wins_over_pipe(self):
        """CRITICAL TEST: SOH is used when both delimiters appear."""
        assert detect_delimiter("8=FIX.4.4\x0158=a|b\x01") == SOH

    @pytest.mark.parametrize("line", ["", "hello world", "8=FIX.4.4 35=D"])
    def test_none(self, line):
        assert detect_delimiter(line) is None


class TestTokenize:
    """Test splitting lines into pairs."""

    @pytest.mark.parametrize("line", ["", "plain log text", "35=D", "a,b,c"])
    def test_no_delimiter_is_empty(self, line):
        """CRITICAL TEST: A line without a supported delimiter yields []."""
        assert tokenize(line) == []

    def test_pairs_in_order(self):
        """Pairs keep source order."""
        pairs = tokenize("8=FIX.4.4|35=D|54=1|")
        assert pairs == [
            RawPair('8', 'FIX.4.4'),
            RawPair('35', 'D'),
            RawPair('54', '1'),
        ]

    def test_empty_segments_dropped(self):
        """Leading, trailing and doubled delimiters add nothing."""
        assert tokenize("|8=FIX.4.4||35=D|") == [
            RawPair('8', 'FIX.4.4'),
            RawPair('35', 'D'),
        ]

    def test_split_on_first_equals(self):
        """Values may contain '='."""
        assert tokenize("58=a=b|") == [RawPair('58', 'a=b')]

    def test_empty_value_kept(self):
        """A tag with no value is still a pair."""
        assert tokenize("8=FIX.4.4|58=|") == [RawPair('8', 'FIX.4.4'), RawPair('58', '')]

    def test_malformed_segment_dropped(self):
        """CRITICAL TEST: 'abc' has no '=' and is omitted."""
        assert tokenize("8=FIX.4.4|abc|54=2|") == [
            RawPair('8', 'FIX.4.4'),
            RawPair('54', '2'),
        ]

    def test_repeated_tags_kept(self):
        """Repeating group tags are not merged."""
        pairs = tokenize("268=2|269=0|269=1|")
        assert [p.tag for p in pairs] == ['268', '269', '269']

    def test_pipe_inside_soh_message_is_value(self):
        """With SOH as delimiter, pipes are ordinary characters."""
        assert tokenize("58=a|b\x0154=1\x01") == [RawPair('58', 'a|b'), RawPair('54', '1')]

    def test_line_terminator_stripped(self):
        """Trailing newline from file iteration is not part of the last value."""
        assert tokenize("8=FIX.4.4|10=123\n") == [RawPair('8', 'FIX.4.4'), RawPair('10', '123')]


class TestScan:
    """Test tokenization diagnostics."""

    def test_reports_missing_delimiter(self):
        pairs, issues = scan("no message here")
        assert pairs == []
        assert [i.code for i in issues] == [ErrorCode.E2004_NO_DELIMITER_DETECTED]

    def test_reports_each_malformed_segment(self):
        pairs, issues = scan("8=FIX.4.4|abc|def|")
        assert pairs == [RawPair('8', 'FIX.4.4')]
        assert [i.context['segment'] for i in issues] == ['abc', 'def']
        assert all(i.code == ErrorCode.E2005_MALFORMED_TOKEN for i in issues)

    def test_clean_line_has_no_issues(self):
        _, issues = scan("8=FIX.4.4|35=D|")
        assert issues == []
