from enum import Enum
from pydantic import BaseModel

class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"
    GUEST = "guest"

class UserProfile(BaseModel):
    name: str
    email: str
    role: UserRole = UserRole.USER
