# shared/logging.py
import logging, json, sys
from typing import Any, Iterable, Mapping, TextIO, Union

# client libraries that log every request/connection at INFO/DEBUG
NOISY_LOGGERS = ("httpx", "httpcore", "urllib3")


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        # logger.info("...", extra={"extra": {...}}) lands on record.extra
        extra = getattr(record, "extra", None)
        if isinstance(extra, Mapping):
            payload.update(extra)
        return json.dumps(payload, ensure_ascii=False, default=str)


def quiet(loggers: Iterable[str] = NOISY_LOGGERS, level: int = logging.WARNING) -> None:
    for name in loggers:
        logging.getLogger(name).setLevel(level)


def setup_json_logging(level: Union[int, str] = logging.INFO, stream: TextIO = sys.stdout):
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter())
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)
    if level > logging.DEBUG:
        quiet()
