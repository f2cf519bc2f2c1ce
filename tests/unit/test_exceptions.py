"""
Exception hierarchy tests
"""

import pytest

from pktcrypt.common.enums import ErrorSeverity
from pktcrypt.common.exceptions import (
    ConfigurationError,
    FileError,
    MalformedPayloadError,
    ProcessingError,
    PktCryptError,
    ValidationError,
    create_error_from_exception,
    format_error_for_user,
)


class TestExceptionHierarchy:

    @pytest.mark.parametrize(
        "error, code",
        [
            (ConfigurationError("bad port", config_key="port"), "CONFIG_ERROR"),
            (ValidationError("bad path", field_name="input_path"), "VALIDATION_ERROR"),
            (FileError("cannot read", file_path="a.pcap", operation="read"), "FILE_ERROR"),
            (ProcessingError("failed"), "PROCESSING_ERROR"),
            (MalformedPayloadError("short", payload_length=1), "MALFORMED_PAYLOAD"),
        ],
    )
    def test_error_codes(self, error, code):
        assert isinstance(error, PktCryptError)
        assert error.error_code == code
        assert str(error) == f"[{code}] {error.message}"

    def test_configuration_errors_are_high_severity(self):
        assert ConfigurationError("x").severity is ErrorSeverity.HIGH
        assert ValidationError("x").severity is ErrorSeverity.MEDIUM

    def test_malformed_payload_is_processing_error(self):
        error = MalformedPayloadError("short", payload_length=1, file_path="in.pcap")
        assert isinstance(error, ProcessingError)
        assert error.file_path == "in.pcap"

    def test_to_dict(self):
        error = FileError("cannot read", file_path="a.pcap", context={"record": 3})
        assert error.to_dict() == {
            "type": "FileError",
            "message": "cannot read",
            "error_code": "FILE_ERROR",
            "severity": "MEDIUM",
            "context": {"record": 3},
        }


class TestErrorConversion:

    def test_pktcrypt_errors_pass_unchanged(self):
        error = ConfigurationError("bad")
        assert create_error_from_exception(error) is error

    def test_os_error_becomes_file_error(self):
        error = create_error_from_exception(PermissionError("denied"), {"input_file": "a.pcap"})
        assert isinstance(error, FileError)
        assert error.context == {"input_file": "a.pcap"}

    def test_value_error_becomes_validation_error(self):
        assert isinstance(create_error_from_exception(ValueError("nope")), ValidationError)

    def test_unknown_error(self):
        error = create_error_from_exception(RuntimeError("boom"))
        assert error.error_code == "UNKNOWN_ERROR"
        assert error.message == "RuntimeError: boom"

    def test_user_format_includes_file(self):
        error = FileError("cannot read", file_path="a.pcap")
        assert format_error_for_user(error) == "cannot read\nFile: a.pcap"

    def test_user_format_includes_setting(self):
        error = ConfigurationError("too short", config_key="secret")
        assert format_error_for_user(error) == "too short\nSetting: secret"

    def test_user_format_plain(self):
        assert format_error_for_user(ValidationError("bad path")) == "bad path"
