from collections.abc import AsyncGenerator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth.application.services import verify_token
from auth.domain.entities import User
from auth.infrastructure.user_repository import DbUserRepository
from documents.infrastructure.unit_of_work import DbUnitOfWork
from shared.infrastructure.database import async_session

security = HTTPBearer()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session() as session:
        yield session


async def get_uow(db: AsyncSession = Depends(get_db)) -> DbUnitOfWork:
    return DbUnitOfWork(db)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    repo = DbUserRepository(db)
    return await verify_token(repo, credentials.credentials)
