import logging
import sys


class Log:
    """Centralized logging for the intake pipeline.

    Keyword arguments are rendered as ``key=value`` pairs after the message so
    session ids and error kinds survive plain-text log collectors.
    """

    _logger: logging.Logger = logging.getLogger("docbrief")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Attach a stdout handler once and set the level."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **fields: object) -> None:
        cls._logger.info(cls._render(message, fields))

    @classmethod
    def error(cls, message: str, **fields: object) -> None:
        cls._logger.error(cls._render(message, fields))

    @classmethod
    def warning(cls, message: str, **fields: object) -> None:
        cls._logger.warning(cls._render(message, fields))

    @classmethod
    def debug(cls, message: str, **fields: object) -> None:
        cls._logger.debug(cls._render(message, fields))

    @classmethod
    def exception(cls, message: str, **fields: object) -> None:
        """Log at error level with the active exception's traceback."""
        cls._logger.exception(cls._render(message, fields))

    @staticmethod
    def _render(message: str, fields: dict[str, object]) -> str:
        if not fields:
            return message
        rendered = " ".join(f"{key}={value}" for key, value in fields.items())
        return f"{message} {rendered}"
