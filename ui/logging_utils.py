"""Утилиты для настройки логирования харнесса."""
from __future__ import annotations

import logging
import os
from pathlib import Path


def setup_logging(verbose: bool = False) -> None:
    """Настроить логирование в stderr и, при необходимости, в файл."""
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return

    default_level = "INFO" if verbose else "WARNING"
    level_name = os.getenv("APITEST_LOG_LEVEL", default_level).upper()
    level = getattr(logging, level_name, logging.WARNING)
    log_file = os.getenv("APITEST_LOG_FILE")

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.setLevel(level)
