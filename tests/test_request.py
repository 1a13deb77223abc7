"""
Tests for RequestDescriptor and path helpers.
"""

import pytest

from orchestrate.core.errors import RequestConsumedError
from orchestrate.transport.request import RequestDescriptor, join_path


class TestJoinPath:
    """Tests for path segment joining."""

    def test_joins_segments(self):
        assert join_path("users", "chad") == "users/chad"

    def test_encodes_each_segment(self):
        """A slash inside a key must not add a path level."""
        assert join_path("users", "a/b") == "users/a%2Fb"
        assert join_path("users", "c h") == "users/c%20h"

    def test_accepts_numbers(self):
        assert join_path("u", "k", "events", "login", 1400000000000, 7) == "u/k/events/login/1400000000000/7"


class TestRequestDescriptor:
    """Tests for request accumulation."""

    def test_chaining_returns_same_descriptor(self):
        req = RequestDescriptor()
        assert req.set_method("get") is req
        assert req.set_target_path("users") is req
        assert req.add_header("X-Test", "1") is req
        assert req.add_query_param("limit", 10) is req
        assert req.set_body(b"{}") is req

    def test_method_is_normalized(self):
        req = RequestDescriptor().set_method("put")
        assert req.method == "PUT"

    def test_unknown_method_rejected(self):
        with pytest.raises(ValueError):
            RequestDescriptor().set_method("BREW")

    def test_target_path_strips_leading_slash(self):
        req = RequestDescriptor().set_target_path("/users/chad")
        assert req.target_path == "users/chad"

    def test_header_overwrite(self):
        """Headers are a mapping; the later value wins regardless of case."""
        req = RequestDescriptor().add_header("If-Match", '"a"').add_header("if-match", '"b"')
        assert req.header("If-Match") == '"b"'
        assert len([h for h in req.headers if h.lower() == "if-match"]) == 1

    def test_repeated_query_params_kept_in_order(self):
        req = (
            RequestDescriptor()
            .add_query_param("sort", "value.name:asc")
            .add_query_param("limit", 5)
            .add_query_param("sort", "value.age:desc")
        )
        assert req.query == [
            ("sort", "value.name:asc"),
            ("limit", "5"),
            ("sort", "value.age:desc"),
        ]
        assert req.query_values("sort") == ["value.name:asc", "value.age:desc"]

    def test_bool_query_values(self):
        req = RequestDescriptor().add_query_param("purge", True)
        assert req.query == [("purge", "true")]

    def test_remove_query_param(self):
        req = RequestDescriptor().add_query_param("limit", 1).add_query_param("limit", 2)
        req.remove_query_param("limit")
        assert req.query == []

    def test_body_headers(self):
        req = RequestDescriptor().set_body(b'{"name":"chad"}')
        assert req.headers["Content-Type"] == "application/json"
        assert req.headers["Content-Length"] == str(len(b'{"name":"chad"}'))

    def test_no_body_means_zero_length(self):
        req = RequestDescriptor()
        assert req.headers["Content-Length"] == "0"
        assert "Content-Type" not in req.headers

    def test_caller_cannot_override_body_headers(self):
        req = RequestDescriptor().add_header("Content-Type", "text/plain").set_body(b"[]")
        assert req.headers["Content-Type"] == "application/json"

    def test_build_url(self):
        req = (
            RequestDescriptor()
            .set_target_path("users")
            .add_query_param("query", "name:chad")
            .add_query_param("sort", "value.name:asc")
            .add_query_param("sort", "value.age:desc")
        )
        url = req.build_url("https://api.test/v0/")
        assert url.startswith("https://api.test/v0/users?")
        assert url.count("sort=") == 2
        assert "query=name%3Achad" in url

    def test_build_url_without_path(self):
        assert RequestDescriptor().build_url("https://api.test/v0/") == "https://api.test/v0/"


class TestRequestLifecycle:
    """A descriptor can be sent once."""

    def test_consume_blocks_mutation(self):
        req = RequestDescriptor().set_target_path("users").consume()
        assert req.consumed
        with pytest.raises(RequestConsumedError):
            req.add_query_param("limit", 1)
        with pytest.raises(RequestConsumedError):
            req.add_header("X", "1")
        with pytest.raises(RequestConsumedError):
            req.set_body(b"{}")

    def test_double_consume(self):
        req = RequestDescriptor().consume()
        with pytest.raises(RequestConsumedError):
            req.consume()

    def test_consumed_error_is_runtime_error(self):
        req = RequestDescriptor().consume()
        with pytest.raises(RuntimeError):
            req.set_method("GET")
