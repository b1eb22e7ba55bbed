# File: src/sealwallet/monitoring/logging_config.py

import logging
import logging.handlers
import os
from datetime import datetime

from ..utils.logger import LOG_FORMAT

class LogConfig:
    def __init__(
        self,
        log_dir: str = "logs",
        log_level: str = "INFO",
        max_size: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5,
        logger_name: str = "sealwallet"
    ):
        self.log_dir = log_dir
        self.log_level = log_level
        self.max_size = max_size
        self.backup_count = backup_count
        self.logger_name = logger_name

    def setup_logging(self) -> logging.Logger:
        """Route package logs to a rotating file and the console"""
        os.makedirs(self.log_dir, exist_ok=True)

        file_formatter = logging.Formatter(LOG_FORMAT)
        console_formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s'
        )

        log_file = os.path.join(
            self.log_dir,
            f'sealwallet_{datetime.now().strftime("%Y%m%d")}.log'
        )
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=self.max_size,
            backupCount=self.backup_count
        )
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(logging.DEBUG)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(console_formatter)
        console_handler.setLevel(logging.getLevelName(self.log_level.upper()))

        package_logger = logging.getLogger(self.logger_name)
        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
            handler.close()
        package_logger.setLevel(logging.DEBUG)
        package_logger.addHandler(file_handler)
        package_logger.addHandler(console_handler)
        package_logger.propagate = False

        return package_logger
