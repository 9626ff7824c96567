"""Tests for status tables, path normalization, and CommentRequest validation."""

import pytest

from prthreads_core.models import (
    CommentRequest,
    PullRequestRef,
    ThreadStatus,
    decode_status,
    format_line_range,
    normalize_path,
)


class TestThreadStatusWire:
    @pytest.mark.parametrize(
        "name,expected",
        [("Active", 1), ("Fixed", 2), ("WontFix", 3), ("Closed", 4), ("Pending", 5)],
    )
    def test_known_names(self, name, expected):
        assert ThreadStatus.wire(name) == expected

    def test_unknown_name_maps_to_active(self):
        assert ThreadStatus.wire("ByDesign") == 1

    def test_lookup_is_case_sensitive(self):
        assert ThreadStatus.wire("fixed") == 1

    def test_names_in_declaration_order(self):
        assert ThreadStatus.names() == ["Active", "Fixed", "WontFix", "Closed", "Pending"]


class TestDecodeStatus:
    def test_known_wire_values(self):
        assert decode_status("active") == "Active"
        assert decode_status("wontFix") == "WontFix"
        assert decode_status("byDesign") == "By Design"

    def test_unknown_value_passes_through(self):
        assert decode_status("somethingNew") == "somethingNew"

    def test_missing_value(self):
        assert decode_status(None) == "Unknown"


class TestNormalizePath:
    def test_backslashes_converted_and_slash_prepended(self):
        assert normalize_path("src\\a.cs") == "/src/a.cs"

    def test_already_normalized_is_fixed_point(self):
        assert normalize_path("/src/a.cs") == "/src/a.cs"
        assert normalize_path(normalize_path("src\\a.cs")) == "/src/a.cs"

    def test_bare_filename(self):
        assert normalize_path("README.md") == "/README.md"


def test_format_line_range():
    assert format_line_range(10, 10) == "10"
    assert format_line_range(10, 12) == "10-12"


def test_pull_request_ref_display():
    ref = PullRequestRef("org", "proj", "repo", 42)
    assert ref.display == "org/proj/repo!42"


class TestCommentRequest:
    def test_defaults(self):
        request = CommentRequest(body="hi")
        assert request.initial_status == "Active"
        assert request.is_inline is False
        assert request.effective_end_line is None

    def test_empty_body_rejected(self):
        with pytest.raises(ValueError, match="empty"):
            CommentRequest(body="   ")

    def test_file_path_requires_start_line(self):
        with pytest.raises(ValueError, match="start_line"):
            CommentRequest(body="x", file_path="/src/a.cs")

    def test_end_before_start_rejected(self):
        with pytest.raises(ValueError, match="end_line"):
            CommentRequest(body="x", file_path="/a", start_line=10, end_line=9)

    def test_non_positive_ids_rejected(self):
        with pytest.raises(ValueError, match="thread_id"):
            CommentRequest(body="x", thread_id=0)
        with pytest.raises(ValueError, match="iteration_id"):
            CommentRequest(body="x", iteration_id=-1)

    def test_inline_end_defaults_to_start(self):
        request = CommentRequest(body="x", file_path="/src/P.cs", start_line=10)
        assert request.is_inline is True
        assert request.effective_end_line == 10

    def test_start_line_without_path_is_not_inline(self):
        assert CommentRequest(body="x", start_line=3).is_inline is False
