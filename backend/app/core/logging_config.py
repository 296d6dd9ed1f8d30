"""
Logging configuration for the backend.
Modules keep using ``logging.getLogger(__name__)``; this only installs the
console handler on the root logger once.
"""
import logging

from app.core.config import settings

_configured = False


def configure_logging(level: str = None) -> None:
    global _configured
    if _configured:
        return
    _configured = True

    level = (level or settings.LOG_LEVEL).upper()
    fmt = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(fmt)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(console)
