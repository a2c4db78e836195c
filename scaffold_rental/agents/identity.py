import logging
import httpx
from datetime import datetime, timedelta

from scaffold_rental.config import settings
from scaffold_rental.agents.postgres import PostgresAgent
from scaffold_rental.errors import AuthenticationRequired
from scaffold_rental.schemas.user import UserProfile, UserRole

logger = logging.getLogger(__name__)

class IdentityAgent:
    def __init__(self, postgres_agent: PostgresAgent | None = None, base_url: str | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = base_url or settings.IDENTITY_URL
        self.client_id = settings.IDENTITY_CLIENT_ID
        self.client_secret = settings.IDENTITY_CLIENT_SECRET
        self.redirect_uri = settings.IDENTITY_REDIRECT_URI
        self.transport = transport
        self.postgres_agent = postgres_agent or PostgresAgent()

    def _client(self, access_token: str | None = None) -> httpx.AsyncClient:
        headers = {}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        return httpx.AsyncClient(base_url=self.base_url, headers=headers, transport=self.transport, timeout=None)

    async def get_access_and_refresh_token(self, code: str):
        async with self._client() as client:
            response = await client.post(
                "/oauth/token",
                data={
                    "code": code,
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "redirect_uri": self.redirect_uri,
                    "grant_type": "authorization_code"
                }
            )

        response_data = response.json()

        if response.status_code != 200:
            logger.warning(f"Token exchange rejected: {response_data}")
            return {"error": response_data}

        try:
            access_token = response_data["access_token"]
            refresh_token = response_data["refresh_token"]
            principal = response_data["principal"]
            expires_at = datetime.now() + timedelta(seconds=response_data["expires_in"])
        except KeyError as e:
            return {"error": f"Missing field in token response: {e}"}

        await self.postgres_agent.insert_session(principal, access_token, refresh_token, expires_at)

        return {"access_token": access_token, "refresh_token": refresh_token, "expires_at": expires_at, "principal": principal}

    async def get_access_token_from_refresh_token(self, refresh_token: str):
        async with self._client() as client:
            response = await client.post(
                "/oauth/token",
                data={
                    "refresh_token": refresh_token,
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "redirect_uri": self.redirect_uri,
                    "grant_type": "refresh_token"
                }
            )

        response_data = response.json()

        if response.status_code != 200:
            logger.warning(f"Token refresh rejected: {response_data}")
            return {"error": response_data}

        expires_at = datetime.now() + timedelta(seconds=response_data["expires_in"])
        result = await self.postgres_agent.update_session(response_data["access_token"], refresh_token, expires_at)

        if not result:
            return {"error": "Failed to update session"}

        return result

    async def get_access_token(self, access_token: str | None = None):
        """Return a valid access token, refreshing it when it has expired.

        Without an explicit token the most recent stored session is used.
        Returns None when there is no session at all.
        """
        if access_token:
            session = await self.postgres_agent.get_session_by_token(access_token)
        else:
            session = await self.postgres_agent.get_latest_session()

        if not session:
            return None

        if session.expires_at < datetime.now():
            refreshed = await self.get_access_token_from_refresh_token(session.refresh_token)
            if isinstance(refreshed, dict) and "error" in refreshed:
                logger.info(f"Session for {session.principal} could not be refreshed")
                return None
            session = refreshed

        return session.access_token

    async def is_authenticated(self, access_token: str | None = None) -> bool:
        return await self.get_access_token(access_token) is not None

    async def _require_token(self, access_token: str | None) -> str:
        token = await self.get_access_token(access_token)
        if token is None:
            raise AuthenticationRequired("Silakan masuk terlebih dahulu")
        return token

    async def get_caller_role(self, access_token: str | None = None) -> UserRole:
        token = await self._require_token(access_token)
        async with self._client(token) as client:
            response = await client.get("/me/role")
        if response.status_code == 401:
            raise AuthenticationRequired("Sesi tidak valid")
        if response.status_code >= 400:
            logger.warning(f"Role lookup failed with status {response.status_code}, treating caller as guest")
            return UserRole.GUEST
        return UserRole(response.json()["role"])

    async def get_caller_profile(self, access_token: str | None = None) -> UserProfile | None:
        token = await self._require_token(access_token)
        async with self._client(token) as client:
            response = await client.get("/me/profile")
        if response.status_code == 404:
            return None
        if response.status_code == 401:
            raise AuthenticationRequired("Sesi tidak valid")
        response.raise_for_status()
        return UserProfile.model_validate(response.json())

    async def save_caller_profile(self, profile: UserProfile, access_token: str | None = None):
        token = await self._require_token(access_token)
        async with self._client(token) as client:
            response = await client.put("/me/profile", json=profile.model_dump(mode="json"))
        if response.status_code == 401:
            raise AuthenticationRequired("Sesi tidak valid")
        response.raise_for_status()
        logger.info(f"Saved profile for {profile.email}")
        return profile

    async def logout(self, access_token: str):
        await self.postgres_agent.delete_session(access_token)
