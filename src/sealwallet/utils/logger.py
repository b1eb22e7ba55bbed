import logging
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Create a logger with the given name and level.

    The stream handler is attached once to the top-level package logger so
    module loggers propagate to it and LogConfig can swap it out later.
    """
    logger = logging.getLogger(name)
    package_logger = logging.getLogger(name.split('.')[0])
    
    if not package_logger.handlers:  # Only add handler if none exists
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
        package_logger.propagate = False
    
    if not package_logger.level:  # Only set default level if none is set
        package_logger.setLevel(logging.INFO)
    if level is not None:
        logger.setLevel(level)
    
    return logger
