"""
create_tables.py
----------------
One-shot script to create all database tables and seed the report
template catalog. Safe to run repeatedly.

Usage:
    python create_tables.py
"""

import asyncio

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from app.core.config import settings
from app.core.logging import configure_logging, get_logger
from app.models import Base  # Imports all models so metadata is populated
from app.services.report_service import ReportService

logger = get_logger(__name__)


async def create_all_tables() -> None:
    configure_logging()
    engine = create_async_engine(settings.DATABASE_URL, echo=settings.DEBUG)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("All tables created", tables=len(Base.metadata.tables))

    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        await ReportService.seed_report_templates(session)
        await session.commit()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(create_all_tables())
