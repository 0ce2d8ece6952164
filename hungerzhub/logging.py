from typing import Optional

from loguru import logger
from hungerzhub.config import get_config

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


class AppLogger:
    """Owns the console sink used by the sync layer.

    The sink is installed on first use and replaced only when the configured
    level changes. Sinks added by the host application are left alone.
    """
    _sink_id: Optional[int] = None
    _level: Optional[str] = None

    @classmethod
    def configure(cls, level: Optional[str] = None) -> None:
        level = (level or get_config().log_level).upper()
        if cls._sink_id is not None and level == cls._level:
            return
        if cls._sink_id is None:
            # drop loguru's default stderr handler
            logger.remove()
        else:
            logger.remove(cls._sink_id)
        cls._sink_id = logger.add(sink=lambda msg: print(msg, end=""), level=level, format=LOG_FORMAT)
        cls._level = level


def get_logger(name: str = None):
    """Get the application logger, bound to `name` when one is given."""
    AppLogger.configure()
    if name:
        return logger.bind(name=name)
    return logger
