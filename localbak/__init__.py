import os
import logging
from logging.handlers import RotatingFileHandler


__version__ = '0.3.0'


def configure_logging(config=None):
    """Configure package logging"""

    if config is None:
        from localbak.config import get_config
        config = get_config()

    logger = logging.getLogger('localbak')

    # Replace handlers from a previous call
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Set log level based on configuration
    log_level = logging.DEBUG if config.DEBUG else logging.INFO

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_formatter = logging.Formatter(
        '[%(asctime)s] %(levelname)s in %(module)s: %(message)s'
    )
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    # File handler
    if config.LOG_DIR:
        os.makedirs(config.LOG_DIR, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(config.LOG_DIR, 'localbak.log'),
            maxBytes=config.LOG_FILE_MAX_BYTES,
            backupCount=config.LOG_FILE_BACKUP_COUNT
        )
        file_handler.setLevel(log_level)
        file_formatter = logging.Formatter(
            '[%(asctime)s] %(levelname)s [%(name)s.%(funcName)s:%(lineno)d] %(message)s'
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    logger.setLevel(log_level)
    logger.debug(f"Logging configured (level: {logging.getLevelName(log_level)})")

    return logger
