"""Logging setup for applications embedding the engine.

The package itself only emits records through module loggers under
``shariah_contracts``; nothing here runs on import. Records that carry
structured context pass it as ``extra={"extra": {...}}`` and
``JsonFormatter`` merges it into the emitted object.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from shariah_contracts.config import EngineConfig

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(
    level: str | None = None,
    format_type: str = "standard",
    config: EngineConfig | None = None,
) -> None:
    """Send engine logs to stdout.

    Parameters
    ----------
    level : str | None
        Log level name. When omitted, the configured ``log_level`` is used
        (``SHARIAH_LOG_LEVEL`` unless ``config`` is given).
    format_type : str
        "standard" for one line of text per record, "json" for one JSON
        object per record.
    config : EngineConfig | None
        Configuration supplying the default level.
    """
    if level is None:
        level = (config or EngineConfig.from_env()).log_level
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(fmt=STANDARD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("shariah_contracts").setLevel(log_level)
    # Faker logs every provider lookup at DEBUG
    logging.getLogger("faker").setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with any structured context merged in.

    Decimal amounts in the context are written as strings.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        context = getattr(record, "extra", None)
        if context:
            log_data.update(context)

        return json.dumps(log_data, default=str)
