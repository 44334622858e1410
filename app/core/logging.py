import logging
import sys

from pythonjsonlogger import jsonlogger

from app.core.config import Settings

_HANDLER_NAME = "tender-service-json"


class ServiceContextFilter(logging.Filter):
    """Stamps every record with the service name and deployment environment."""

    def __init__(self, service: str, environment: str) -> None:
        super().__init__()
        self.service = service
        self.environment = environment

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service
        record.environment = self.environment
        return True


def configure_logging(settings: Settings) -> None:
    """
    JSON lines on stdout.

    Keys passed through `extra=` on a log call land at the top level of the
    record, so services log `tender_id`, `bid_id`, `username` and so on
    without formatting them into the message. Safe to call more than once
    (create_app runs per test).
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [h for h in root.handlers if h.get_name() != _HANDLER_NAME]

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.addFilter(ServiceContextFilter(settings.app_name, settings.environment))
    handler.setFormatter(
        jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s %(service)s %(environment)s",
            rename_fields={"levelname": "level", "name": "logger"},
        )
    )
    root.addHandler(handler)

    for name in ("uvicorn.error", "app.access"):
        logging.getLogger(name).setLevel(level)
    # the access middleware replaces uvicorn's own request lines
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
