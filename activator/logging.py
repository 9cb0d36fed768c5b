import logging
import sys
import time

from pythonjsonlogger.json import JsonFormatter

# chatty at INFO; one line per outbound request or hash
QUIET_LOGGERS = ("httpx", "httpcore", "passlib")


class UTCJsonFormatter(JsonFormatter):
    converter = time.gmtime


def setup_logging(level: str = "INFO", *, env: str | None = None) -> None:
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level.upper())

    static_fields = {"service": "activator"}
    if env:
        static_fields["env"] = env

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        UTCJsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"asctime": "ts", "levelname": "level"},
            static_fields=static_fields,
        )
    )
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel("WARNING")
