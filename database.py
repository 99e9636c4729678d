from typing import AsyncGenerator, Annotated, Any
from fastapi import Depends
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool
from sqlalchemy.ext.asyncio.engine import create_async_engine
from sqlalchemy.ext.asyncio import async_sessionmaker, AsyncSession, AsyncEngine
from redis.asyncio.client import Redis
import json
from os import environ

from dotenv import load_dotenv

load_dotenv()


# Base class for all databases to create with one command
class Base(DeclarativeBase):
    pass


class NotesDB:
    def __init__(self, url: str | None = environ.get("URL_DATABASE")) -> None:
        if url is None:
            raise ValueError("URL of database not found")

        # sqlite connections must not outlive the event loop that opened them
        engine_kwargs = {"poolclass": NullPool} if url.startswith("sqlite") else {}

        self.engine: AsyncEngine = create_async_engine(url=url, **engine_kwargs)
        self.session: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=self.engine, expire_on_commit=False
        )

    def get_engine(self) -> AsyncEngine:
        return self.engine

    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self.session() as ses:
            yield ses

    async def create_all_tables(self) -> None:
        async with self.get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)


db = NotesDB()
sessionDep = Annotated[AsyncSession, Depends(db.get_session)]


class RedisDB:

    def __init__(self) -> None:
        host = environ.get("HOST_REDIS")
        self.redis = (
            Redis(host=host, port=int(environ.get("PORT_REDIS", 6379)))
            if host
            else None
        )

    def is_redis_connected(self) -> bool:
        return self.redis is not None

    async def set_cache(self, key: str, value: Any, exp: int | None) -> None:
        if not self.is_redis_connected():
            return
        try:
            await self.redis.set(key, json.dumps(value), exp)
        except Exception as e:
            print(f"Error while saving data to redis: {key} ({exp}s)", e)

    async def get_cache(self, key: str) -> Any | None:
        if not self.is_redis_connected():
            return None
        try:
            data = await self.redis.get(key)
            return json.loads(data) if data else None
        except Exception as e:
            print(f"Error while getting data from redis: {key}", e)
            return None

    async def get_counter(self, key: str) -> int:
        if not self.is_redis_connected():
            return 0
        try:
            data = await self.redis.get(key)
            return int(data) if data else 0
        except Exception as e:
            print(f"Error while getting counter from redis: {key}", e)
            return 0

    async def increment(self, key: str) -> None:
        if not self.is_redis_connected():
            return
        try:
            await self.redis.incr(key)
        except Exception as e:
            print(f"Error while incrementing counter in redis: {key}", e)


rd = RedisDB()
