from loguru import logger

from app.db import models  # noqa: F401  # Registers every table on the metadata
from app.db.base import Base
from app.db.session import engine

if __name__ == "__main__":
    logger.info("Creating tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created.")
