from sqlalchemy.ext.asyncio import AsyncSession

from documents.infrastructure.document_repository import DbDocumentRepository
from documents.infrastructure.version_repository import DbVersionRepository
from shared.infrastructure.database import sequencing_guard


class DbUnitOfWork:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.documents = DbDocumentRepository(session)
        self.versions = DbVersionRepository(session)

    async def commit(self) -> None:
        with sequencing_guard("Could not commit document changes"):
            await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
