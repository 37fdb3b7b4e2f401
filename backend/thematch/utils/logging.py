import logging

from thematch.config import environment


def create_logger(level: int) -> logging.Logger:
    log_formatter = logging.Formatter(fmt="[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s")
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(log_formatter)

    _logger = logging.getLogger("thematch")
    _logger.setLevel(level)
    if not _logger.handlers:
        _logger.addHandler(stream_handler)

    return _logger


logger = create_logger(environment.get_log_level())
