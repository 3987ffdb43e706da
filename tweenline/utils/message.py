import logging
import os
import sys
from datetime import datetime
from logging import Logger
from colorama import init, Fore, Style
init(autoreset=True)

LOG_LEVEL_ENV = "TWEENLINE_LOG_LEVEL"
LOG_DIR_ENV = "TWEENLINE_LOG_DIR"

LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def create_log_directory(log_folder: str = "logs"):
    """
    Ensures that the log directory exists. If not, it creates it.
    """
    if not os.path.exists(log_folder):
        os.makedirs(log_folder)
    return log_folder


def get_log_file_path(log_folder: str) -> str:
    """
    Returns a log file path with a timestamp in the name.
    Format: <log_folder>/tweenline_YYYY-mm-dd_HHMMSS.log
    """
    timestamp = datetime.now().strftime("%Y-%m-%d_%H%M%S")
    return os.path.join(log_folder, f"tweenline_{timestamp}.log")


def purge_old_logs(log_folder: str, keep: int = 10):
    """
    Removes older log files, keeping only the most recent 'keep' files.
    Logs are named tweenline_YYYY-mm-dd_HHMMSS.log, so lexicographical
    sort matches chronological order.
    """
    all_logs = [f for f in os.listdir(log_folder)
                if f.startswith("tweenline_") and f.endswith(".log")]
    all_logs.sort()

    logs_to_remove = all_logs[:-keep] if keep > 0 else all_logs
    for old_file in logs_to_remove:
        os.remove(os.path.join(log_folder, old_file))


class ColorFormatter(logging.Formatter):
    """
    A formatter that colorizes log level names using colorama.
    """
    color_map = {
        logging.DEBUG: Fore.BLUE,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.LIGHTRED_EX,
    }

    def format(self, record):
        color = self.color_map.get(record.levelno, Fore.WHITE)
        # Copy so other handlers still see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{Style.RESET_ALL}"
        return super().format(record)


def create_console_handler(level: int = logging.INFO) -> logging.Handler:
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(ColorFormatter(
        fmt="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%H:%M:%S"
    ))
    return console_handler


def init_logger(
    name: str = "TweenlineLogger",
    log_folder: str = None,
    console_logging: bool = True,
    file_logging: bool = False,
    level: int = logging.INFO
) -> Logger:
    """
    Initializes and configures the logger with the specified settings.
    :param name: The logger's name.
    :param log_folder: The folder where log files should go (required for file logging).
    :param console_logging: Whether to log to the console.
    :param file_logging: Whether to log to a file.
    :param level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    :return: A configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    # Repeated init_logger calls must not stack handlers
    if not logger.handlers:
        if file_logging and log_folder:
            log_folder = create_log_directory(log_folder)
            purge_old_logs(log_folder, keep=10)
            file_handler = logging.FileHandler(get_log_file_path(log_folder), encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(logging.Formatter(
                fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S"
            ))
            logger.addHandler(file_handler)

        if console_logging:
            logger.addHandler(create_console_handler(level))

        # Output is left to the host
        if not logger.handlers:
            logger.addHandler(logging.NullHandler())

    return logger


class RepetitiveMessageFilter(logging.Filter):
    """
    Filter to suppress repetitive DEBUG messages that clutter the console.
    Evaluation runs once per rendered time, so its chatter is dropped here.
    """

    FILTER_PATTERNS = [
        "TimelineEvaluator: Evaluated",
        "Easing: Unknown easing",
        "EventBus: Publishing",
    ]

    def filter(self, record):
        if record.levelno > logging.DEBUG:
            return True

        message = record.getMessage().lower()
        for pattern in self.FILTER_PATTERNS:
            if pattern.lower() in message:
                return False
        return True


def _level_from_env(default: int = logging.INFO) -> int:
    return LEVEL_MAP.get(os.environ.get(LOG_LEVEL_ENV, "").upper(), default)


def console_logging_from_env() -> bool:
    """Console output is on only when the host asks for a level."""
    return bool(os.environ.get(LOG_LEVEL_ENV, "").strip())


class Log:
    """
    Wrapper class giving the whole package one interface (Log.info(...)),
    backed by Python's logging.
    """
    _logger: Logger = init_logger(
        name="TweenlineLogger",
        log_folder=os.environ.get(LOG_DIR_ENV),
        console_logging=console_logging_from_env(),
        file_logging=bool(os.environ.get(LOG_DIR_ENV)),
        level=_level_from_env(),
    )
    _repetitive_filter: RepetitiveMessageFilter | None = None

    @classmethod
    def set_logger(cls, logger: Logger):
        """Replace the logger at runtime."""
        cls._logger = logger

    @classmethod
    def get_logger(cls) -> Logger:
        return cls._logger

    @classmethod
    def set_level(cls, level: str | int):
        """
        Set the logging level dynamically.

        Args:
            level: Log level as string ("DEBUG", "INFO", "WARNING", "ERROR") or int
        """
        if isinstance(level, str):
            level = LEVEL_MAP.get(level.upper(), logging.INFO)

        cls._logger.setLevel(level)
        for handler in cls._logger.handlers:
            handler.setLevel(level)

    @classmethod
    def enable_console(cls, level: str | int | None = None) -> logging.Handler:
        """
        Attach the colored stdout handler, once.

        Returns:
            The console handler now attached to the logger
        """
        if isinstance(level, str):
            level = LEVEL_MAP.get(level.upper(), logging.INFO)
        for handler in cls._logger.handlers:
            if isinstance(handler, logging.StreamHandler) and handler.stream is sys.stdout:
                if level is not None:
                    handler.setLevel(level)
                return handler

        handler = create_console_handler(level if level is not None else cls._logger.level)
        cls._logger.addHandler(handler)
        return handler

    @classmethod
    def enable_repetitive_filter(cls, enable: bool = True):
        """
        Enable or disable filtering of repetitive DEBUG messages.
        """
        if enable:
            if cls._repetitive_filter is None:
                cls._repetitive_filter = RepetitiveMessageFilter()
            for handler in cls._logger.handlers:
                handler.addFilter(cls._repetitive_filter)
        elif cls._repetitive_filter is not None:
            for handler in cls._logger.handlers:
                handler.removeFilter(cls._repetitive_filter)

    @classmethod
    def debug(cls, text: str):
        cls._logger.debug(text)

    @classmethod
    def info(cls, text: str):
        cls._logger.info(text)

    @classmethod
    def warning(cls, text: str, exc_info: bool = False):
        if exc_info:
            cls._logger.warning(text, exc_info=True)
        else:
            cls._logger.warning(text)

    @classmethod
    def error(cls, text: str):
        cls._logger.error(text)

