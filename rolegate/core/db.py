import asyncio
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

import rolegate.core.logging_config  # noqa: F401  Centralized logging
from rolegate.core.config import settings

logger = logging.getLogger(__name__)

engine = create_async_engine(settings.DATABASE_URL, echo=settings.DB_ECHO, future=True)
AsyncSessionLocal = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db():
    # Import models to register them with SQLModel.metadata
    import rolegate.models  # noqa: F401

    max_retries = settings.DB_INIT_MAX_RETRIES
    retry_interval = settings.DB_INIT_RETRY_INTERVAL

    for attempt in range(max_retries):
        try:
            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
            logger.info("Database initialized successfully.")
            return
        except (OSError, SQLAlchemyError) as e:
            logger.warning(f"Database connection failed (attempt {attempt + 1}/{max_retries}): {e}")
            await asyncio.sleep(retry_interval)

    logger.error("Could not connect to database after maximum retries.")
    raise RuntimeError("Database connection failed")
