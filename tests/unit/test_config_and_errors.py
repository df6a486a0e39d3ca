# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging
import socket
import ssl

from websockets.exceptions import InvalidStatus

from wsstat import config, log
from wsstat.config import DEFAULT_USER_AGENT, OutputOptions, color_enabled
from wsstat.errors import (
    ErrorCategory,
    HandshakeMismatchError,
    InputError,
    InternalError,
    ProbeError,
    TLSExpectedButAbsentError,
    WSConnectionError,
    categorize_exception,
    classify_connection_error,
    error_category_to_reason,
)


def test_probe_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("WSSTAT_TIMEOUT", "2.5")
    monkeypatch.setenv("WSSTAT_VERIFY_SSL", "0")
    monkeypatch.setenv("WSSTAT_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("WSSTAT_COMPRESSION", "yes")

    settings = config.load_probe_settings()

    assert settings.timeout == 2.5
    assert settings.verify_ssl is False
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.compression is True


def test_probe_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("WSSTAT_TIMEOUT", "not-a-number")
    settings = config.load_probe_settings()
    assert settings.timeout == config.ProbeSettings.timeout
    assert DEFAULT_USER_AGENT in settings.user_agent

    monkeypatch.setenv("WSSTAT_TIMEOUT", "-1")
    assert config.load_probe_settings().timeout == config.ProbeSettings.timeout


def test_load_probe_settings_reads_env_at_call_time(monkeypatch):
    monkeypatch.setenv("WSSTAT_TIMEOUT", "7.7")
    assert config.load_probe_settings().timeout == 7.7
    monkeypatch.setenv("WSSTAT_TIMEOUT", "8.8")
    assert config.load_probe_settings().timeout == 8.8


def test_output_options_verbosity():
    assert OutputOptions().verbosity == "standard"
    assert OutputOptions(basic=True).verbosity == "basic"
    assert OutputOptions(verbose=True).verbosity == "verbose"
    assert OutputOptions(quiet=True).verbosity == "quiet"


def test_no_color_env(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    assert color_enabled() is True
    assert color_enabled(False) is False
    monkeypatch.setenv("NO_COLOR", "1")
    assert color_enabled() is False


def test_resolve_log_level_precedence(monkeypatch):
    monkeypatch.delenv("WSSTAT_LOG_LEVEL", raising=False)
    assert log.resolve_log_level() == logging.WARNING
    assert log.resolve_log_level("debug") == logging.DEBUG
    assert log.resolve_log_level("nonsense") == logging.WARNING

    monkeypatch.setenv("WSSTAT_LOG_LEVEL", "error")
    assert log.resolve_log_level() == logging.ERROR
    assert log.resolve_log_level("info") == logging.INFO
    assert log.resolve_log_level("info", debug=True) == logging.DEBUG


def test_setup_logging_configures_package_and_quiets_websockets(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
    package_logger = logging.getLogger("wsstat")
    frames_logger = logging.getLogger("websockets")
    saved = package_logger.level, frames_logger.level
    try:
        assert log.setup_logging(debug=True) == logging.DEBUG
        assert calls["level"] == logging.DEBUG
        assert package_logger.level == logging.DEBUG
        assert frames_logger.level == logging.INFO

        log.setup_logging("error")
        assert package_logger.level == logging.ERROR
        assert frames_logger.level == logging.ERROR
    finally:
        package_logger.setLevel(saved[0])
        frames_logger.setLevel(saved[1])


def test_exit_codes():
    assert InputError("x").exit_code == 2
    assert InternalError("x").exit_code == 1
    assert WSConnectionError("ws://x", "boom").exit_code == 1


def test_classify_typed_handshake_mismatch():
    error = classify_connection_error(HandshakeMismatchError("wrong version number"), "wss://x")
    assert isinstance(error, TLSExpectedButAbsentError)
    assert error.category == ErrorCategory.TLS_EXPECTED_BUT_ABSENT
    message = str(error)
    assert "wss://x" in message
    assert "-insecure" in message


def test_classify_matches_foreign_tls_diagnostics():
    exc = RuntimeError("tls: first record does not look like a TLS handshake")
    assert isinstance(classify_connection_error(exc, "wss://x"), TLSExpectedButAbsentError)


def test_classify_generic_connection_error():
    exc = ConnectionRefusedError("connection refused")
    error = classify_connection_error(exc, "ws://x")
    assert type(error) is WSConnectionError
    assert error.cause is exc
    assert str(error) == "Error establishing WS connection to 'ws://x': connection refused"
    assert "-insecure" not in str(error)
    assert classify_connection_error(error, "ws://x") is error


def test_categorize_exception():
    assert categorize_exception(socket.gaierror("nodename")) == ErrorCategory.DNS_ERROR
    assert categorize_exception(ssl.SSLError("bad cert")) == ErrorCategory.SSL_ERROR
    assert categorize_exception(TimeoutError()) == ErrorCategory.TIMEOUT
    assert categorize_exception(ConnectionResetError()) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(HandshakeMismatchError()) == ErrorCategory.TLS_EXPECTED_BUT_ABSENT
    assert categorize_exception(InputError("x")) == ErrorCategory.INPUT_ERROR
    assert categorize_exception(ValueError()) == ErrorCategory.UNKNOWN_ERROR

    try:
        raise ProbeError("DNS resolution failed") from socket.gaierror("nodename")
    except ProbeError as exc:
        assert categorize_exception(exc) == ErrorCategory.DNS_ERROR


def test_categorize_rejected_upgrade():
    response = type("FakeResponse", (), {"status_code": 403})()
    assert categorize_exception(InvalidStatus(response)) == ErrorCategory.HANDSHAKE_ERROR


def test_error_category_reason_strings():
    assert error_category_to_reason(ErrorCategory.DNS_ERROR) == "DNS resolution failure"
    assert error_category_to_reason(None) == ""
