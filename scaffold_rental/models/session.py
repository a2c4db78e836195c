import uuid
from sqlmodel import SQLModel, Field
from datetime import datetime

class SessionBase(SQLModel):
    principal: str
    access_token: str = Field(index=True)
    refresh_token: str
    expires_at: datetime

class Session(SessionBase, table=True):
    __tablename__ = "sessions"
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
