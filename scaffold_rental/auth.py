import logging
from enum import Enum

from scaffold_rental.agents.identity import IdentityAgent
from scaffold_rental.errors import AuthenticationRequired, PermissionDenied
from scaffold_rental.schemas.user import UserProfile, UserRole

logger = logging.getLogger(__name__)


class GateState(str, Enum):
    LOGIN_REQUIRED = "login_required"
    PROFILE_SETUP = "profile_setup"
    READY = "ready"


class AuthGuard:
    """Decides what the caller may see: login, profile setup, or the app."""

    def __init__(self, identity: IdentityAgent, access_token: str | None = None):
        self.identity = identity
        self.access_token = access_token

    async def state(self) -> GateState:
        if not await self.identity.is_authenticated(self.access_token):
            return GateState.LOGIN_REQUIRED
        profile = await self.identity.get_caller_profile(self.access_token)
        if profile is None:
            return GateState.PROFILE_SETUP
        return GateState.READY

    async def require_authenticated(self) -> str:
        token = await self.identity.get_access_token(self.access_token)
        if token is None:
            raise AuthenticationRequired("Silakan masuk terlebih dahulu")
        return token

    async def require_role(self, *roles: UserRole) -> UserRole:
        await self.require_authenticated()
        role = await self.identity.get_caller_role(self.access_token)
        if role not in roles:
            logger.info(f"Caller with role {role.value} denied, needs one of {[r.value for r in roles]}")
            raise PermissionDenied("Anda tidak memiliki akses")
        return role

    async def setup_profile(self, name: str, email: str) -> UserProfile:
        if not name.strip() or not email.strip():
            raise ValueError("Mohon lengkapi semua field")
        profile = UserProfile(name=name.strip(), email=email.strip(), role=UserRole.USER)
        return await self.identity.save_caller_profile(profile, self.access_token)
