"""Student Records API client.

This module defines a small client wrapper around the REST API served
by ``student_records_api.app``.  It covers the operations the browser
dashboard performs (listing, searching, paging, CRUD, department lists
and admin login) so that scripts and other services can drive the API
from Python.  The client uses the ``requests`` library internally.

Every public method returns a tuple ``(data, error)``.  On success
``error`` is ``None``; on failure ``data`` is empty and ``error`` is a
dictionary with the keys ``status_code`` and ``message``.  The client
never raises for HTTP or connection errors.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class StudentRecordsClient:
    """Client for the ``/api/v1`` student and auth endpoints."""

    def __init__(
        self,
        *,
        base_url: str,
        api_prefix: str = "/api/v1",
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:8000``.
            api_prefix: Path prefix of the versioned API.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each response.
        """
        self.base_url = base_url.rstrip("/") + api_prefix
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to the API prefix (e.g. ``/students/``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)`` as described in the module docstring.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("message") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Student operations
    # ------------------------------------------------------------------
    def list_students(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/students/")
        return (data or []), error

    def get_student(self, student_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/students/{student_id}")

    def create_student(self, student: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a student.

        Args:
            student: Mapping with ``name``, ``email``, ``department``,
                ``year`` and ``phoneNumber``.
        """
        return self._request("POST", "/students/", json_body=student)

    def update_student(
        self, student_id: int, student: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("PUT", f"/students/{student_id}", json_body=student)

    def delete_student(self, student_id: int) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("DELETE", f"/students/{student_id}")
        return error is None, error

    def search_students(self, keyword: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/students/search", params={"keyword": keyword})
        return (data or []), error

    def list_students_paged(
        self,
        page: int = 0,
        size: int = 10,
        sort_by: str = "id",
        direction: str = "asc",
        keyword: Optional[str] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Fetch one page, optionally restricted to a search keyword.

        Returns the page descriptor with ``content``, ``totalElements``,
        ``totalPages`` and ``page``.
        """
        params: Dict[str, Any] = {"page": page, "size": size, "sortBy": sort_by, "direction": direction}
        if keyword:
            params["keyword"] = keyword
            return self._request("GET", "/students/search/paginated", params=params)
        return self._request("GET", "/students/paginated", params=params)

    def list_departments(self) -> Tuple[List[str], Optional[Error]]:
        data, error = self._request("GET", "/students/departments")
        return (data or []), error

    def get_statistics(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", "/students/statistics")

    # ------------------------------------------------------------------
    # Admin operations
    # ------------------------------------------------------------------
    def register_admin(
        self, username: str, password: str, email: str
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request(
            "POST",
            "/auth/register",
            json_body={"username": username, "password": password, "email": email},
        )

    def login(self, username: str, password: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Check admin credentials.  A rejected login yields a 401 error."""
        return self._request(
            "POST", "/auth/login", json_body={"username": username, "password": password}
        )

    def username_exists(self, username: str) -> Tuple[Optional[bool], Optional[Error]]:
        data, error = self._request("GET", "/auth/check-username", params={"username": username})
        if error:
            return None, error
        return bool(data and data.get("exists")), None
