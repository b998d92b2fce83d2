"""Loguru setup for the catalog service.

Every record carries the request id bound by the request middleware. Records
about a single product (``product.created`` and friends) also carry its id,
and request lifecycle records carry method, path and status.
"""

import logging
import sys
from pathlib import Path

from loguru import logger

from src.catalog_api.runtime.config.config_data import ConfigData, LoggingConfig
from src.catalog_api.runtime.context import get_config

DEFAULT_EXTRA = {"request_id": "-", "product_id": None}

_BASE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "[<cyan>{extra[request_id]}</cyan>] | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def format_record(record) -> str:
    """Build the plain-text template for one record.

    Optional context is appended only when bound, so startup lines stay short
    while request and product lines show what they refer to.
    """
    extra = record["extra"]
    suffix = ""
    if "method" in extra and "path" in extra:
        suffix += " | {extra[method]} {extra[path]}"
    if "status_code" in extra:
        suffix += " -> {extra[status_code]}"
    if "duration_ms" in extra:
        suffix += " ({extra[duration_ms]} ms)"
    if extra.get("product_id") is not None:
        suffix += " | product={extra[product_id]}"
    return _BASE_FORMAT + suffix + "\n{exception}"


class InterceptHandler(logging.Handler):
    """Redirect standard ``logging`` records (uvicorn, starlette) to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # log_requests already reports every request
        if record.name == "uvicorn.access":
            return

        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=2, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def _add_file_sink(cfg: LoggingConfig, verbose_traces: bool) -> None:
    path = Path(cfg.file)
    path.parent.mkdir(parents=True, exist_ok=True)
    as_json = cfg.format == "json"
    logger.add(
        str(path),
        level=cfg.level,
        format="{message}" if as_json else format_record,
        serialize=as_json,
        rotation=f"{cfg.max_size_mb} MB",
        retention=cfg.backup_count,
        compression="zip",
        enqueue=True,
        backtrace=verbose_traces,
        diagnose=verbose_traces,
    )


def configure_logging(config: ConfigData | None = None) -> None:
    """Install the console (and optional file) sinks for ``config``.

    Safe to call repeatedly; each call replaces the previous sinks.
    """
    main_config = config or get_config()
    cfg = main_config.logging
    env = main_config.app.environment
    # Variable values in tracebacks can include API keys
    verbose_traces = env != "production"

    logger.remove()
    logger.configure(extra=dict(DEFAULT_EXTRA))

    logger.add(
        sys.stderr,
        level=cfg.level,
        format=format_record,
        colorize=None,
        backtrace=verbose_traces,
        diagnose=verbose_traces,
    )
    if cfg.file:
        _add_file_sink(cfg, verbose_traces)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in list(logging.root.manager.loggerDict.keys()):
        stdlog = logging.getLogger(name)
        stdlog.handlers = []
        stdlog.propagate = True

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.CRITICAL)

    logger.bind(
        level=cfg.level, log_format=cfg.format, log_file=cfg.file, environment=env
    ).debug("Logging configured for {}", main_config.app.name)
