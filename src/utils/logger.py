"""Настройка логирования для take-toggle.

Usage:
    from src.utils.logger import get_logger

    logger = get_logger(__name__)
    logger.debug("gate CLOSED -> OPEN")

Environment Variables:
    - TAKE_TOGGLE_LOG_LEVEL (default: default_level, INFO)
    - TAKE_TOGGLE_LOG_FILE  (optional, дополнительный file handler)
"""

import logging
import os
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str, level: Optional[str] = None, default_level: str = "INFO") -> logging.Logger:
    """
    Получить сконфигурированный logger.

    Logger конфигурируется один раз (при отсутствии handlers);
    повторные вызовы возвращают тот же экземпляр.

    Args:
        name: Имя logger (обычно __name__ вызывающего модуля)
        level: Override уровня (DEBUG, INFO, WARNING, ERROR, CRITICAL),
               по умолчанию TAKE_TOGGLE_LOG_LEVEL или default_level
        default_level: Уровень без override и env (библиотечные модули
               передают WARNING, чтобы не писать INFO в консоль приложения)

    Returns:
        Сконфигурированный logger
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        log_level_str: str = level or os.getenv("TAKE_TOGGLE_LOG_LEVEL") or default_level
        logger.setLevel(getattr(logging, log_level_str.upper()))

        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logger.level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        log_file = os.getenv("TAKE_TOGGLE_LOG_FILE")
        if log_file:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_path)
            file_handler.setLevel(logger.level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
