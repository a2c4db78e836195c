from sqlmodel import SQLModel, select
from sqlalchemy import delete
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy.ext.asyncio import create_async_engine
from datetime import datetime

from scaffold_rental.config import settings
from scaffold_rental.models.session import Session

class PostgresAgent:
    def __init__(self, database_url: str | None = None):
        self.engine = create_async_engine(database_url or settings.DATABASE_URL)

    async def get_session(self):
        async with AsyncSession(self.engine, expire_on_commit=False) as session:
            yield session

    async def create_tables(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def dispose(self):
        await self.engine.dispose()
    
    async def insert_session(self, principal: str, access_token: str, refresh_token: str, expires_at: datetime):
        async for db in self.get_session():
            # one active session per principal
            await db.execute(delete(Session).where(Session.principal == principal))
            db_session = Session(principal=principal, access_token=access_token, refresh_token=refresh_token, expires_at=expires_at)
            db.add(db_session)
            await db.commit()
            await db.refresh(db_session)
            return db_session
        return None
    
    async def update_session(self, access_token: str, refresh_token: str, expires_at: datetime):
        async for db in self.get_session():
            statement = select(Session).where(Session.refresh_token == refresh_token)
            result = (await db.exec(statement)).first()
            if result is None:
                return None
            result.access_token = access_token
            result.expires_at = expires_at
            await db.commit()
            await db.refresh(result)
            return result
        return None
    
    async def get_session_by_token(self, access_token: str):
        async for db in self.get_session():
            statement = select(Session).where(Session.access_token == access_token)
            result = (await db.exec(statement)).first()
            return result
        return None
    
    async def get_latest_session(self):
        async for db in self.get_session():
            statement = select(Session).order_by(Session.expires_at.desc())
            result = (await db.exec(statement)).first()
            return result
        return None
    
    async def delete_session(self, access_token: str):
        async for db in self.get_session():
            await db.execute(delete(Session).where(Session.access_token == access_token))
            await db.commit()
