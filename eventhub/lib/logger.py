import logging
import logging.handlers
from pathlib import Path

from eventhub import PACKAGE


class CustomFormatter(logging.Formatter):
    def format(self, record):
        record.levelname = record.levelname.ljust(8)  # Adjust the number as needed
        return super().format(record)


def configure_logger(log_level: int = logging.DEBUG, log_file: Path | None = None) -> logging.Logger:
    """Configures the package logger with format, level and an optional log file

    There are two formatters, one for the console and one for the log file. The console
    formatter is a bit simpler and removes the date and time as it's quite long and noisy.
    The log file will hold all of the detailed information on time and date.

    Handlers installed by a previous call are replaced, so calling this twice does not
    duplicate output.

    Args:
        log_level (int): The log level to log at. logging.[DEBUG | INFO | ERROR | CRITICAL | WARN ].
            Defaults to logging.DEBUG.
        log_file (Path | None): File to also log to. Its folder is created if missing.
            Defaults to console only.

    Returns:
        logging.Logger: The configured package logger.

    Example:
        ```python
        from pathlib import Path
        configure_logger(logging.DEBUG, Path('/var/log/myapp/events.log'))
        ```
    """
    logger = logging.getLogger(PACKAGE)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter("%(levelname)s %(message)s", datefmt="%H:%M:%S"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(exist_ok=True, parents=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=10 * 1024**2, backupCount=5, encoding="utf-8"
        )
        file_handler.setFormatter(
            CustomFormatter("[%(asctime)s] %(levelname)s %(message)s", datefmt="%d.%m.%Y %H:%M:%S")
        )
        logger.addHandler(file_handler)

    logger.setLevel(log_level)
    return logger
