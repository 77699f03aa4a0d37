"""
Unit tests for endpoint path normalization.
"""

import pytest

from rest_do.paths import normalize_endpoint_path, split_endpoint_path


PATHS = [
    "user.account.login",
    "user/account/login",
    "/user/account/login/",
    "///user.account/login///",
    "  user.account.login  ",
    " / user.account / ",
    ".user.",
    "a..b",
    "ping",
    "/",
    "",
    "   ",
]


class TestNormalizeEndpointPath:
    """Tests for normalize_endpoint_path."""

    def test_dot_notation(self):
        """Dots become slashes."""
        assert normalize_endpoint_path("user.account.login") == "user/account/login"

    def test_mixed_separators(self):
        """Dot and slash separators can be mixed."""
        assert normalize_endpoint_path("user.account/login") == "user/account/login"

    def test_strips_leading_and_trailing_slashes(self):
        """All leading and trailing slashes are removed."""
        assert normalize_endpoint_path("///user/login//") == "user/login"

    def test_trims_whitespace(self):
        """Surrounding whitespace is removed."""
        assert normalize_endpoint_path("  user/login \n") == "user/login"

    def test_leading_dot_is_a_slash(self):
        """A leading dot is a leading separator."""
        assert normalize_endpoint_path(".user.login.") == "user/login"

    def test_empty_input(self):
        """Empty and separator-only input normalize to an empty string."""
        assert normalize_endpoint_path("") == ""
        assert normalize_endpoint_path("/./") == ""

    @pytest.mark.parametrize("path", PATHS)
    def test_idempotent(self, path: str):
        """Normalizing twice gives the same result as normalizing once."""
        once = normalize_endpoint_path(path)
        assert normalize_endpoint_path(once) == once

    @pytest.mark.parametrize("path", PATHS)
    def test_no_outer_slashes(self, path: str):
        """The result never starts or ends with a slash."""
        result = normalize_endpoint_path(path)
        assert not result.startswith("/")
        assert not result.endswith("/")


class TestSplitEndpointPath:
    """Tests for split_endpoint_path."""

    def test_split(self):
        assert split_endpoint_path("a/b/c") == ["a", "b", "c"]

    def test_empty(self):
        assert split_endpoint_path("") == []
