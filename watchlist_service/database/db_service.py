# db_service.py
import asyncio
from typing import AsyncGenerator
from fastapi import Depends
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from ..core import ConfigService, get_config_service, logger
from ..models import Base


class DBService:
    def __init__(self, config: ConfigService):
        database_url = config.get("DATABASE_URL")
        if not database_url:
            raise ValueError("DATABASE_URL is not set in config!")

        engine_kwargs = {"echo": config.get_bool("DB_ECHO", False)}
        if database_url.startswith("postgresql+asyncpg"):
            engine_kwargs.update(
                pool_size=15,
                max_overflow=20,
                pool_timeout=30,
                connect_args={"statement_cache_size": 0},
            )

        self.engine = create_async_engine(database_url, **engine_kwargs)
        self.async_session_maker = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self._initialized = False
        self._init_lock = asyncio.Lock()

    async def get_db(self) -> AsyncGenerator[AsyncSession, None]:
        async with self.async_session_maker() as session:
            yield session

    async def init_db(self, base_model=Base) -> None:
        """Creates the tables once per process; later calls are no-ops."""
        if self._initialized:
            return
        async with self._init_lock:
            if self._initialized:
                return
            async with self.engine.begin() as conn:
                await conn.run_sync(base_model.metadata.create_all)
            self._initialized = True
            logger.info("Database schema ensured")

    async def dispose(self) -> None:
        await self.engine.dispose()
        self._initialized = False


_db_service_instance: DBService | None = None

def get_db_service(config_service: ConfigService = Depends(get_config_service)) -> DBService:
    global _db_service_instance
    if _db_service_instance is None:
        _db_service_instance = DBService(config_service)
    return _db_service_instance
