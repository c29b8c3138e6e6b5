#!/usr/bin/env python3
"""
Wait for the database, run migrations (same DATABASE_URL as the app), then uvicorn.
"""
import logging
import os
import sys
import time

from alembic.config import Config
from alembic import command
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError

from summercamp.core.config import settings
from summercamp.core.logging import configure_logging

logger = logging.getLogger("summercamp.start_api")


def wait_for_db(url: str, timeout_s: int) -> None:
    engine = create_engine(url, pool_pre_ping=True)
    start = time.time()
    logger.info("waiting for database (timeout=%ss)", timeout_s)
    try:
        while True:
            try:
                with engine.connect() as conn:
                    conn.execute(text("SELECT 1"))
                logger.info("database is ready")
                return
            except OperationalError as e:
                if time.time() - start > timeout_s:
                    logger.error("timed out waiting for database: %s", e)
                    raise
                time.sleep(1)
    finally:
        engine.dispose()


def main() -> None:
    configure_logging()

    # 1) Wait for DB
    wait_for_db(settings.DATABASE_URL, int(os.getenv("DB_WAIT_TIMEOUT", "60")))

    # 2) Run migrations using the same settings as the app
    alembic_cfg = Config(os.path.join(os.path.dirname(os.path.abspath(__file__)), "alembic.ini"))
    alembic_cfg.set_main_option("sqlalchemy.url", settings.DATABASE_URL)
    command.upgrade(alembic_cfg, "head")

    # 3) Start uvicorn (replace current process)
    os.execv(
        sys.executable,
        [sys.executable, "-m", "uvicorn", "summercamp.main:app", "--host", "0.0.0.0",
         "--port", os.getenv("PORT", "8000")],
    )


if __name__ == "__main__":
    main()
