from typing import AsyncGenerator
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from .db_service import DBService, get_db_service
from ..core import logger


async def get_db(db_service: DBService = Depends(get_db_service)) -> AsyncGenerator[AsyncSession, None]:
    try:
        await db_service.init_db()
        session = db_service.async_session_maker()
    except Exception:
        logger.exception("Failed to open a database session")
        raise

    async with session:
        yield session
