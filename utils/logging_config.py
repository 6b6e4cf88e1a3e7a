import logging
from typing import Optional, Union

DEFAULT_FORMAT = '%(levelname)s:%(name)s:%(message)s'


def configure_logging(level: Union[int, str] = logging.INFO, fmt: Optional[str] = None,
                      logger: Optional[logging.Logger] = None) -> None:
    if isinstance(level, str):
        level_name = level.upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level_name}")
    if fmt is None:
        fmt = DEFAULT_FORMAT
    root = logger if logger is not None else logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(handler)
    root.setLevel(level)


__all__ = ["configure_logging", "DEFAULT_FORMAT"]
