"""
Camptocamp API Client

Thin wrapper around the Camptocamp REST API (https://api.camptocamp.org):
- POST /users/login      -> JWT token
- GET  /xreports?offset  -> one page of report summaries + total count
- GET  /xreports/{id}    -> full report detail

The token is attached to every request after login as
`Authorization: JWT token="<token>"`. Failures are not retried.

Calls made from a thread other than the one that created the client (the
fetcher runs detail requests through asyncio.to_thread) go through a
per-thread requests.Session holding a copy of the authenticated headers.
"""
import logging
import threading
from typing import Optional

import requests

from extract_serac.config import settings
from extract_serac.exceptions import AuthenticationFailure
from extract_serac.schemas.xreport import XReport, XReportListing

logger = logging.getLogger(__name__)


class C2CClient:
    """Authenticated session against the Camptocamp API."""

    def __init__(
        self,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = (api_url or settings.C2C_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.session = session or requests.Session()
        self.token: Optional[str] = None
        self._owner_thread = threading.get_ident()
        self._local = threading.local()

    def login(self, username: str, password: str) -> str:
        """
        Authenticate and keep the token for subsequent requests.

        Raises:
            AuthenticationFailure: credentials rejected or no token returned
        """
        try:
            response = self.session.post(
                f"{self.api_url}/users/login",
                json={
                    "username": username,
                    "password": password,
                    "discourse": False,
                    "remember_me": True,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            token = response.json().get("token")
        except (requests.exceptions.RequestException, ValueError) as e:
            raise AuthenticationFailure(
                "Invalid username or password, cannot authenticate"
            ) from e

        if not token:
            raise AuthenticationFailure("Login succeeded but no token was returned")

        self.token = token
        self.session.headers["Authorization"] = f'JWT token="{token}"'
        logger.debug(f"Authenticated as {username}")
        return token

    def _thread_session(self) -> requests.Session:
        if threading.get_ident() == self._owner_thread:
            return self.session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers.update(self.session.headers)
            self._local.session = session
        return session

    def _get(self, path: str, params: Optional[dict] = None) -> dict:
        response = self._thread_session().get(
            f"{self.api_url}{path}", params=params, timeout=self.timeout
        )
        response.raise_for_status()
        return response.json()

    def list_xreports(self, offset: int = 0, limit: Optional[int] = None) -> XReportListing:
        """One page of report summaries starting at offset."""
        params = {"offset": offset}
        if limit is not None:
            params["limit"] = limit
        return XReportListing.model_validate(self._get("/xreports", params=params))

    def get_xreport(self, document_id: int) -> XReport:
        """Full detail of one report."""
        return XReport.model_validate(self._get(f"/xreports/{document_id}"))
