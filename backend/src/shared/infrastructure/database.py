from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from shared.config import settings
from shared.exceptions import SequencingConflictError


class Base(DeclarativeBase):
    pass


engine = create_async_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
async_session = async_sessionmaker(engine, expire_on_commit=False)


async def create_all(bind: AsyncEngine = engine) -> None:
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@contextmanager
def sequencing_guard(message: str) -> Iterator[None]:
    """Turn lock, serialization and uniqueness failures into SequencingConflictError."""
    try:
        yield
    except (IntegrityError, OperationalError) as exc:
        raise SequencingConflictError(message) from exc
