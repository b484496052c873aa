from __future__ import annotations

import logging

from rich.logging import RichHandler

from kashi.logging_utils import Utf8AccessFormatter, build_uvicorn_log_config, configure_logging


def test_configure_logging_is_idempotent() -> None:
    logger = configure_logging(debug=True)
    configure_logging(debug=False)
    assert logger.name == "kashi"
    assert logger.level == logging.WARNING
    assert sum(isinstance(h, RichHandler) for h in logger.handlers) == 1
    assert logger.propagate is False


def test_uvicorn_config_routes_package_logger() -> None:
    config = build_uvicorn_log_config(debug=True)
    assert config["formatters"]["access"]["()"] == "kashi.logging_utils.Utf8AccessFormatter"
    assert config["loggers"]["kashi"]["level"] == "DEBUG"
    assert build_uvicorn_log_config()["loggers"]["kashi"]["level"] == "INFO"


def test_access_formatter_decodes_lyric_paths() -> None:
    formatter = Utf8AccessFormatter(fmt="%(request_line)s", use_colors=False)
    record = logging.LogRecord(
        name="uvicorn.access",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg='%s - "%s %s HTTP/%s" %d',
        args=("127.0.0.1:5000", "GET", "/api/gojuon?script=%E3%81%8B", "1.1", 200),
        exc_info=None,
    )
    assert formatter.format(record) == "GET /api/gojuon?script=か HTTP/1.1"
