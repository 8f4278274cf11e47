import logging

import pytest

from oc_common.logging import DEFAULT_LEVEL, bind_fields, bind_invocation, configure_logging

pytestmark = pytest.mark.unit_common


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logging_defaults_to_quiet_level(restore_root_logger) -> None:
    configure_logging(force=True)
    assert restore_root_logger.level == DEFAULT_LEVEL


def test_configure_logging_debug_wins(restore_root_logger) -> None:
    configure_logging(level="ERROR", debug=True, force=True)
    assert restore_root_logger.level == logging.DEBUG


def test_configure_logging_reads_env(restore_root_logger, monkeypatch, tmp_path) -> None:
    log_file = tmp_path / "ocs.log"
    monkeypatch.setenv("OCS_LOG_LEVEL", "info")
    monkeypatch.setenv("OCS_LOG_FILE", str(log_file))
    configure_logging(force=True)

    assert restore_root_logger.level == logging.INFO
    file_handlers = [
        h for h in restore_root_logger.handlers if isinstance(h, logging.FileHandler)
    ]
    assert len(file_handlers) == 1
    assert file_handlers[0].baseFilename == str(log_file)


def test_bind_invocation_replaces_context() -> None:
    import structlog

    bind_invocation(invocation="abc", picker="panel")
    bind_fields(backend="console")
    bind_invocation(invocation="def")
    try:
        assert structlog.contextvars.get_contextvars() == {"invocation": "def"}
    finally:
        structlog.contextvars.clear_contextvars()
