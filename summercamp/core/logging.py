import logging

from summercamp.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
    # uvicorn installs its own handlers; keep access logs but let ours through
    logging.getLogger("summercamp").setLevel((level or settings.LOG_LEVEL).upper())
