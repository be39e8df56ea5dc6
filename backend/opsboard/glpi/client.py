"""GLPI REST API client

One instance is built at application startup and owns the HTTP connection
pool. Request handlers work on `new_session()` children: each child shares
the pool but holds its own session token, so releasing one request's session
never touches another's. An authentication rejection drops the token and the
call is retried exactly once with a fresh session.
"""
from typing import Any, Dict, List, Optional

import httpx

from ..config.settings import Settings
from ..domain.errors import (
    ConfigurationError, GlpiError, GlpiAuthenticationError, GlpiTimeoutError, NotFoundError
)
from ..utils.logger import get_logger

logger = get_logger(__name__)


class GlpiClient:
    """Async client for the GLPI REST API (apirest.php)"""

    def __init__(
        self,
        api_url: str,
        app_token: str,
        user_token: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        if not api_url or not app_token or not user_token:
            raise ConfigurationError(
                "Missing GLPI configuration. Please set GLPI_API_URL, GLPI_USER_TOKEN, "
                "and GLPI_APP_TOKEN environment variables."
            )
        self._api_url = api_url
        self._app_token = app_token
        self._user_token = user_token
        self._timeout = timeout
        self._session_token: Optional[str] = None
        # Children borrow the parent's pool and must not close it
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=api_url.rstrip("/"),
            headers={
                "Content-Type": "application/json",
                "App-Token": app_token,
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "GlpiClient":
        """Build a client from application settings"""
        missing = settings.missing_glpi_settings
        if missing:
            raise ConfigurationError(
                f"Missing GLPI configuration: {', '.join(missing)}",
                details={"missing": missing}
            )
        return cls(
            api_url=settings.glpi_api_url,
            app_token=settings.glpi_app_token,
            user_token=settings.glpi_user_token,
            timeout=settings.glpi_timeout_seconds,
        )

    def new_session(self) -> "GlpiClient":
        """
        Client with its own session token over this client's connection pool.

        Nothing is sent until the first call. Release it with
        `release_session()`; `aclose()` on a child leaves the pool open.
        """
        return GlpiClient(
            api_url=self._api_url,
            app_token=self._app_token,
            user_token=self._user_token,
            timeout=self._timeout,
            http_client=self._client,
        )

    @property
    def has_session(self) -> bool:
        return self._session_token is not None

    def health(self) -> Dict[str, Any]:
        """Configuration and shared session state, without contacting GLPI"""
        return {"configured": True, "session_open": self.has_session}

    # =========================================================================
    # Session lifecycle
    # =========================================================================

    async def init_session(self) -> str:
        """Open a new GLPI session with the user token"""
        response = await self._send(
            "/initSession",
            headers={"Authorization": f"user_token {self._user_token}"}
        )
        if response.status_code != 200:
            logger.error(
                f"Failed to initialize GLPI session: {response.status_code} - {response.text[:200]}"
            )
            raise GlpiAuthenticationError(
                "Failed to authenticate with GLPI",
                details={"status_code": response.status_code}
            )

        token = response.json().get("session_token")
        if not token:
            raise GlpiAuthenticationError("GLPI did not return a session token")

        self._session_token = token
        logger.info("GLPI session initialized successfully")
        return token

    async def ensure_session(self) -> str:
        """Return the cached session token, opening a session if needed"""
        if self._session_token is None:
            return await self.init_session()
        return self._session_token

    def invalidate_session(self) -> None:
        """Forget the cached session token without contacting GLPI"""
        self._session_token = None

    async def release_session(self) -> None:
        """
        Best-effort teardown of this client's own session.

        Never raises: a failed killSession is logged and the cached token is
        dropped either way, so the next call opens a fresh session.
        """
        token = self._session_token
        if token is None:
            return
        self._session_token = None

        try:
            await self._client.get("/killSession", headers={"Session-Token": token})
        except httpx.HTTPError as e:
            logger.warning(f"Failed to kill GLPI session: {e}")

    async def aclose(self) -> None:
        """Tear down the session and close the HTTP connection pool if owned"""
        await self.release_session()
        if self._owns_client:
            await self._client.aclose()

    # =========================================================================
    # Collections
    # =========================================================================

    async def get_tickets(self, range_: str = "0-999") -> List[Dict[str, Any]]:
        """Fetch raw tickets within a GLPI range window"""
        return await self._get_list("/Ticket/", range_)

    async def get_ticket(self, ticket_id: int) -> Dict[str, Any]:
        """Fetch a single raw ticket"""
        path = f"/Ticket/{ticket_id}"
        response = await self._authorized_get(path)
        if response.status_code == 404:
            raise NotFoundError(f"Ticket {ticket_id} not found", details={"ticket_id": ticket_id})
        self._raise_for_status(path, response)
        return response.json()

    async def get_categories(self, range_: str = "0-99") -> List[Dict[str, Any]]:
        """Fetch raw ITIL categories"""
        return await self._get_list("/ITILCategory/", range_)

    async def get_users(self, range_: str = "0-199") -> List[Dict[str, Any]]:
        """Fetch raw users"""
        return await self._get_list("/User/", range_)

    async def get_groups(self, range_: str = "0-99") -> List[Dict[str, Any]]:
        """Fetch raw groups"""
        return await self._get_list("/Group/", range_)

    # =========================================================================
    # Transport helpers
    # =========================================================================

    async def _get_list(self, path: str, range_: str) -> List[Dict[str, Any]]:
        response = await self._authorized_get(path, params={"range": range_})
        self._raise_for_status(path, response)
        data = response.json()
        return data if isinstance(data, list) else []

    async def _authorized_get(
        self, path: str, params: Optional[Dict[str, Any]] = None
    ) -> httpx.Response:
        """GET with the session token, retrying once on an expired session"""
        token = await self.ensure_session()
        response = await self._send(path, params=params, headers={"Session-Token": token})

        if response.status_code == 401:
            logger.info("Session invalid or expired, initializing new session...", extra={"glpi_path": path})
            self.invalidate_session()
            token = await self.ensure_session()
            response = await self._send(path, params=params, headers={"Session-Token": token})
            if response.status_code == 401:
                raise GlpiAuthenticationError(
                    f"GLPI rejected the session for {path}",
                    details={"status_code": 401}
                )

        return response

    async def _send(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> httpx.Response:
        try:
            return await self._client.get(path, params=params, headers=headers)
        except httpx.TimeoutException as e:
            logger.error(f"GLPI request timed out: {path}", extra={"glpi_path": path})
            raise GlpiTimeoutError(f"GLPI request timed out: {path}") from e
        except httpx.HTTPError as e:
            logger.error(f"GLPI request failed: {path} - {e}", extra={"glpi_path": path})
            raise GlpiError(f"Failed to reach GLPI: {e}") from e

    @staticmethod
    def _raise_for_status(path: str, response: httpx.Response) -> None:
        if response.status_code >= 400:
            logger.error(
                f"GLPI error: {response.status_code} - {response.text[:200]}",
                extra={"glpi_path": path}
            )
            raise GlpiError(
                f"GLPI request {path} failed with status {response.status_code}",
                details={"status_code": response.status_code}
            )
