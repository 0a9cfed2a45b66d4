from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from typing import Union

from packages.shared.paths import log_path, ensure_app_dirs

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(threadName)s] - %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """Console + rotating file logging on the root logger. No-op if handlers exist."""
    ensure_app_dirs()
    root = logging.getLogger()
    root.setLevel(level)

    if root.handlers:
        return

    fmt = logging.Formatter(LOG_FORMAT)
    handlers: list[logging.Handler] = [
        logging.StreamHandler(),
        RotatingFileHandler(str(log_path()), maxBytes=1_000_000, backupCount=2, encoding="utf-8"),
    ]
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(fmt)
        root.addHandler(handler)

    # sampler threads log every tick at DEBUG when probes fail
    if root.level < logging.INFO:
        logging.getLogger("packages.core.tracker.probe").setLevel(logging.INFO)
