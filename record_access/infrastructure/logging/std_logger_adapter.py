import logging
from typing import Any, Optional

from record_access.domain.ports.services.logger import LoggerPort


class StdLoggerAdapter(LoggerPort):
    """``LoggerPort`` over the standard library, with optional fixed context.

    Context keys are rendered as a ``[key=value ...]`` prefix and attached as
    ``extra`` so structured handlers can pick them up.
    """

    def __init__(self, name: Optional[str] = None, **context: Any):
        self._logger = logging.getLogger(name)
        self._context = context
        self._prefix = " ".join(f"{key}={value}" for key, value in context.items())

    def _log(self, level: int, msg: str, *args, **kwargs) -> None:
        if self._prefix:
            msg = f"[{self._prefix}] {msg}"
            kwargs.setdefault("extra", {}).update(self._context)
        self._logger.log(level, msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.ERROR, msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs) -> None:
        kwargs.setdefault("exc_info", True)
        self._log(logging.ERROR, msg, *args, **kwargs)
