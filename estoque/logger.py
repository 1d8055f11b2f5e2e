import logging
import re

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from estoque.utils.request_id import get_request_id

custom_theme = Theme(
    {
        "info": "dim cyan",
        "warning": "magenta",
        "error": "bold red",
        "setor": "bold yellow",
        "table": "bold blue",
        "product": "bold green",
    }
)

console = Console(theme=custom_theme)

LOGGER_NAME = "estoque"


class CompactFilter(logging.Filter):
    """Shortens UUIDs and prefixes the request id for dense log lines."""

    UUID_PATTERN = re.compile(
        r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.I
    )

    def filter(self, record):
        if not isinstance(record.msg, str):
            return True

        msg = record.msg

        request_id = get_request_id()
        if request_id:
            msg = f"[{request_id[:8]}] {msg}"

        # a1e9166a-15f5-4ccf-b2ff-a6a92c37e645 -> a1e9..
        msg = self.UUID_PATTERN.sub(lambda m: f"{m.group(0)[:4]}..", msg)

        record.msg = msg
        return True


def setup_global_logger(log_level: str = "INFO"):
    """
    Configures the package logger with a Rich handler.
    """
    logger = logging.getLogger(LOGGER_NAME)

    level = getattr(logging, log_level.upper(), logging.INFO)
    logger.setLevel(level)

    # Avoid duplicate handlers
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        rich_handler = RichHandler(
            console=console,
            rich_tracebacks=True,
            markup=False,
            show_path=False,
            show_time=True,
            omit_repeated_times=True,
            keywords=["setor", "table", "row", "product", "login", "signup"],
        )
        formatter = logging.Formatter("%(message)s", datefmt="[%X]")
        rich_handler.setFormatter(formatter)
        rich_handler.addFilter(CompactFilter())
        logger.addHandler(rich_handler)

    return logger


logger = logging.getLogger(LOGGER_NAME)
