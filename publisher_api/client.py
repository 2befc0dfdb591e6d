"""Publisher API client.

A thin wrapper around the HTTP routes of the publisher service, built
on ``requests``.  It signs up or signs in to obtain a bearer token,
remembers it, and sends it with every publisher call.

Every public method returns a tuple ``(data, error)``: ``data`` holds
the parsed response on success and ``error`` is ``None``; on failure
``data`` is ``None`` (or an empty list) and ``error`` is a dictionary
with ``status_code`` and ``message``.  Network errors are reported the
same way with ``status_code`` set to ``None``, so callers never need
to catch ``requests`` exceptions.

Example::

    client = PublisherClient(base_url="http://localhost:3000")
    token, error = client.signup("testuser", "55555", "testuser@test.com")
    publisher, error = client.create_publisher("test publisher", "description")
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class PublisherClient:
    """Client for the publisher API."""

    def __init__(
        self,
        *,
        base_url: str,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Server root, e.g. ``http://localhost:3000``.  The
                ``/api`` prefix is added by the client.
            token: Optional bearer token from an earlier signup or signin.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each response.
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: Any | None = None,
        auth: Tuple[str, str] | None = None,
        expect_json: bool = True,
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request against ``/api<path>``.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path below ``/api``, e.g. ``/publisher``.
            json_body: JSON body to send (for POST/PUT).
            auth: Basic credentials; when given, the bearer token is not sent.
            expect_json: Parse the body as JSON (``True``) or return it as text.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}/api{path}"
        headers: Dict[str, str] = {}
        if self.token and auth is None:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                auth=auth,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None and exc.response.content:
                try:
                    message = exc.response.json().get("detail", "")
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}
        if not response.content:
            return None, None
        if expect_json:
            return response.json(), None
        return response.text, None

    # ------------------------------------------------------------------
    # Account operations
    # ------------------------------------------------------------------
    def signup(self, username: str, password: str, email: str) -> Tuple[Optional[str], Optional[Error]]:
        """Register a user and keep the returned token for later calls."""
        token, error = self._request(
            "POST",
            "/signup",
            json_body={"username": username, "password": password, "email": email},
            expect_json=False,
        )
        if error:
            return None, error
        self.token = token
        return token, None

    def signin(self, username: str, password: str) -> Tuple[Optional[str], Optional[Error]]:
        """Exchange Basic credentials for a token and keep it."""
        token, error = self._request("GET", "/signin", auth=(username, password), expect_json=False)
        if error:
            return None, error
        self.token = token
        return token, None

    # ------------------------------------------------------------------
    # Publisher operations
    # ------------------------------------------------------------------
    def create_publisher(self, name: str, desc: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("POST", "/publisher", json_body={"name": name, "desc": desc})

    def list_publishers(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/publisher")
        if error:
            return [], error
        return data or [], None

    def get_publisher(self, publisher_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/publisher/{publisher_id}")

    def update_publisher(
        self, publisher_id: str, name: str, desc: str
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("PUT", f"/publisher/{publisher_id}", json_body={"name": name, "desc": desc})

    def delete_publisher(self, publisher_id: str) -> Tuple[bool, Optional[Error]]:
        """Delete a publisher.

        Returns:
            A tuple ``(success, error)``.
        """
        _, error = self._request("DELETE", f"/publisher/{publisher_id}")
        if error:
            return False, error
        return True, None
