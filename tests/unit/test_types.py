"""
Unit tests for environment variable types.
"""

import os

import pytest

from auth_scaffold.env import Reconciler
from auth_scaffold.env.types import (
    Enumerated,
    FilePath,
    Text,
    UnsignedShort,
    parse_u16,
)
from auth_scaffold.errors import ErrorKind, InvalidValueError


class TestText:
    """Test the non-empty string type."""

    @pytest.mark.parametrize("value", ["abc", "123", " ", "with spaces"])
    def test_non_empty_values_are_valid(self, value):
        Text().verify(value)

    def test_empty_value_is_invalid(self):
        with pytest.raises(InvalidValueError) as exc_info:
            Text().verify("")

        assert exc_info.value.kind == ErrorKind.INVALID_VALUE
        assert exc_info.value.type_label == "Text"
        assert exc_info.value.cause is None

    def test_parse_returns_value(self):
        assert Text().parse("value") == "value"


class TestUnsignedShort:
    """Test the 16-bit unsigned integer type."""

    @pytest.mark.parametrize("value", ["0", "1", "5432", "65535", "007"])
    def test_valid_values(self, value):
        UnsignedShort().verify(value)

    @pytest.mark.parametrize(
        "value", ["65536", "-1", "+1", "12.3", "", "abc", " 1", "1 ", "1e3", "٣"]
    )
    def test_invalid_values(self, value):
        with pytest.raises(InvalidValueError) as exc_info:
            UnsignedShort().verify(value)

        # The parse failure is carried as the cause
        assert isinstance(exc_info.value.cause, ValueError)
        assert exc_info.value.__cause__ is exc_info.value.cause

    def test_parse_returns_int(self):
        assert UnsignedShort().parse("5432") == 5432

    def test_error_message_includes_value_and_type(self):
        with pytest.raises(InvalidValueError) as exc_info:
            UnsignedShort().verify("99999")

        message = str(exc_info.value)
        assert "UnsignedShort" in message
        assert '"99999"' in message
        assert "too large" in message

    def test_parse_u16_empty_string(self):
        with pytest.raises(ValueError, match="empty string"):
            parse_u16("")


class TestEnumerated:
    """Test the allowed-values type."""

    def test_member_is_valid(self):
        Enumerated(["development", "production"]).verify("development")

    def test_non_member_is_invalid(self):
        with pytest.raises(InvalidValueError) as exc_info:
            Enumerated(["development", "production"]).verify("staging")

        message = str(exc_info.value)
        assert '"staging"' in message
        assert "development, production" in message

    @pytest.mark.parametrize("value", ["Development", "DEVELOPMENT", " development", ""])
    def test_near_matches_are_invalid(self, value):
        with pytest.raises(InvalidValueError):
            Enumerated(["development", "production"]).verify(value)

    def test_allowed_values_keep_order(self):
        variant = Enumerated(["b", "a", "c"])

        assert variant.allowed == ("b", "a", "c")
        assert str(variant) == "Enumerated[b, a, c]"

    def test_equality_and_hash(self):
        assert Enumerated(["a", "b"]) == Enumerated(("a", "b"))
        assert hash(Enumerated(["a"])) == hash(Enumerated(["a"]))
        assert Enumerated(["a"]) != Enumerated(["b"])


class TestFilePath:
    """Test the readable regular file type."""

    def test_existing_file_is_valid(self, cert_file):
        assert FilePath().parse(str(cert_file)) == cert_file

    def test_empty_path_is_invalid(self):
        with pytest.raises(InvalidValueError):
            FilePath().verify("")

    def test_missing_path_is_invalid(self):
        with pytest.raises(InvalidValueError) as exc_info:
            FilePath().verify("/path/to/file/that/does/not/exist")

        assert exc_info.value.cause is None

    def test_overlong_path_is_invalid(self):
        value = "a" * 5000

        with pytest.raises(InvalidValueError) as exc_info:
            FilePath().verify(value)

        assert exc_info.value.value == value
        assert exc_info.value.cause is None or isinstance(exc_info.value.cause, OSError)

    def test_overlong_path_reported_for_variable(self, store, write_env, valid_vars):
        valid_vars["APP_PATH_TO_DB_SSL_ROOT_CERT"] = "c" * 5000

        with pytest.raises(InvalidValueError) as exc_info:
            Reconciler(store).load_and_validate(write_env(valid_vars), "APP_")

        assert exc_info.value.variable == "APP_PATH_TO_DB_SSL_ROOT_CERT"

    def test_directory_is_invalid(self, tmp_path):
        with pytest.raises(InvalidValueError):
            FilePath().verify(str(tmp_path))

    def test_relative_path_resolves_against_cwd(self, tmp_path, monkeypatch):
        (tmp_path / "certs").mkdir()
        (tmp_path / "certs" / "ca.pem").write_text("cert")
        monkeypatch.chdir(tmp_path)

        FilePath().verify("certs/ca.pem")

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="permission bits are not enforced for root",
    )
    def test_unreadable_file_is_invalid(self, cert_file):
        cert_file.chmod(0o000)
        try:
            with pytest.raises(InvalidValueError) as exc_info:
                FilePath().verify(str(cert_file))

            assert isinstance(exc_info.value.cause, PermissionError)
        finally:
            cert_file.chmod(0o600)


class TestVariantIdentity:
    """Types compare by variant, not by shared base class."""

    def test_distinct_variants_are_not_equal(self):
        assert Text() == Text()
        assert Text() != UnsignedShort()
        assert FilePath() != Text()
