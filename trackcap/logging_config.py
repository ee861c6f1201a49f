import logging

# ANSI escape codes per level name
COLORS = {
    "DEBUG": "\033[90m",    # Light Gray
    "INFO": "\033[96m",     # Cyan
    "WARNING": "\033[33m",  # Orange
    "ERROR": "\033[31m",    # Bright Red
    "CRITICAL": "\033[95m", # Magenta
    "RESET": "\033[0m"
}

LOG_FORMAT = "%(levelname)s: %(name)s: %(message)s"

logger = logging.getLogger("trackcap")
_console_handler = None


class CustomFormatter(logging.Formatter):
    def format(self, record):
        log_color = COLORS.get(record.levelname, COLORS["RESET"])
        log_message = super().format(record)
        return f"{log_color}{log_message}{COLORS['RESET']}"


def configure_logging(level="INFO") -> logging.Logger:
    """Attach a coloured console handler to the package logger once and set its level."""
    global _console_handler
    if _console_handler is None:
        _console_handler = logging.StreamHandler()
        _console_handler.setFormatter(CustomFormatter(LOG_FORMAT))
        logger.addHandler(_console_handler)
    logger.setLevel(level)
    return logger


__all__ = ["logger", "configure_logging"]
