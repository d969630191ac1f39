"""
Create every table on the configured database.

Usage:
    python -m app.init_db
"""

import logging

from app import models  # noqa: F401
from app.database import Base, dispose_engine, init_engine

logger = logging.getLogger(__name__)


def init_db() -> None:
    engine = init_engine()
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Tables created: %s", ", ".join(sorted(Base.metadata.tables)))
    finally:
        dispose_engine()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
