# storefront/utils/logging.py
import logging
import sys

from pythonjsonlogger.json import JsonFormatter

from storefront.utils.settings import LOG_LEVEL, LOG_JSON

SERVICE_NAME = "storefront"

_configured = False


class ServiceJsonFormatter(JsonFormatter):
    """Linie JSON z nazwa serwisu."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record["service"] = SERVICE_NAME
        if "message" in log_record:
            log_record["msg"] = log_record.pop("message")


def setup_logging(level: str | None = None, json: bool | None = None) -> None:
    global _configured

    root = logging.getLogger()
    root.setLevel((level or LOG_LEVEL).upper())

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    use_json = LOG_JSON if json is None else json
    if use_json:
        handler.setFormatter(
            ServiceJsonFormatter(
                "%(asctime)s %(levelname)s %(name)s %(message)s",
                rename_fields={"levelname": "level"},
            )
        )
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )
    root.addHandler(handler)

    #biblioteki za duzo gadaja na INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    if not _configured:
        setup_logging()
    return logging.getLogger(name)
