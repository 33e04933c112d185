"""CPaaS Admin API client.

This module defines a small client wrapper around the REST API served
by :mod:`cpaas_admin_api`.  It uses the ``requests`` library and
mirrors the calls made by the admin dashboard:

* authentication: :meth:`login`, :meth:`logout`, :meth:`me`,
  :meth:`impersonate`, :meth:`stop_impersonation`;
* user administration: :meth:`list_users`, :meth:`get_user`,
  :meth:`create_user`, :meth:`update_user`, :meth:`delete_user`,
  :meth:`topup_user`, :meth:`list_user_transactions`;
* reporting: :meth:`list_projects`, :meth:`list_logs`,
  :meth:`download_logs`, :meth:`get_metrics`,
  :meth:`list_message_logs`, :meth:`get_message_log`;
* campaigns and webhooks CRUD.

Every method returns a ``(data, error)`` tuple.  On success ``error``
is ``None``; on failure ``data`` is ``None`` and ``error`` is a
dictionary with ``status_code`` and ``message`` keys.  Network errors
are reported the same way with ``status_code`` set to ``None``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class AdminAPIClient:
    """Client for the CPaaS admin API.

    ``login`` stores the returned bearer token, which is then sent with
    every subsequent request.  ``impersonate`` and
    ``stop_impersonation`` swap the stored token as well.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:8000``.
                The ``/api`` prefix is added by the client.
            token: Optional bearer token from a previous login.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _raw_request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Any = None,
    ) -> Tuple[Optional[requests.Response], Optional[Dict[str, Any]]]:
        url = f"{self.base_url}/api{path}"
        headers: Dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response, None
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

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Any = None,
    ) -> Result:
        """Perform an HTTP request and decode the JSON response.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path below ``/api`` (e.g. ``/campaigns``).
            params: Query parameters; ``None`` values are dropped.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.  Empty responses (204) yield
            ``(None, None)``.
        """
        response, error = self._raw_request(method, path, params=params, json_body=json_body)
        if error:
            return None, error
        if response is None or not response.content:
            return None, None
        try:
            return response.json(), None
        except ValueError:
            return None, {"status_code": response.status_code, "message": "Invalid JSON in response"}

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    def login(self, email: str, password: str) -> Result:
        """Log in and remember the returned token."""
        data, error = self._request("POST", "/auth/login", json_body={"email": email, "password": password})
        if data and data.get("token"):
            self.token = data["token"]
        return data, error

    def logout(self) -> Result:
        """Revoke the current token and forget it locally."""
        data, error = self._request("POST", "/auth/logout")
        if not error:
            self.token = None
        return data, error

    def me(self) -> Result:
        return self._request("GET", "/auth/me")

    def impersonate(self, user_id: str) -> Result:
        """Switch to an impersonation session for ``user_id``."""
        data, error = self._request("POST", "/auth/impersonate", json_body={"userId": user_id})
        if data and data.get("token"):
            self.token = data["token"]
        return data, error

    def stop_impersonation(self) -> Result:
        data, error = self._request("POST", "/auth/stop-impersonation")
        if data and data.get("token"):
            self.token = data["token"]
        return data, error

    # ------------------------------------------------------------------
    # User administration
    # ------------------------------------------------------------------
    def list_users(self, **params: Any) -> Result:
        """List users.

        Args:
            **params: List query parameters such as ``page``, ``limit``,
                ``search``, ``role`` or ``status``.
        """
        return self._request("GET", "/admin/users", params=params)

    def get_user(self, user_id: str) -> Result:
        return self._request("GET", f"/admin/users/{user_id}")

    def create_user(self, payload: Dict[str, Any]) -> Result:
        return self._request("POST", "/admin/users", json_body=payload)

    def update_user(self, user_id: str, payload: Dict[str, Any]) -> Result:
        return self._request("PUT", f"/admin/users/{user_id}", json_body=payload)

    def delete_user(self, user_id: str) -> Tuple[bool, Optional[Dict[str, Any]]]:
        """Delete a user.

        Returns:
            A tuple ``(success, error)``.
        """
        _, error = self._request("DELETE", f"/admin/users/{user_id}")
        return error is None, error

    def topup_user(self, user_id: str, amount: float) -> Result:
        return self._request("POST", f"/admin/users/{user_id}/topup", json_body={"amount": amount})

    def list_user_transactions(self, user_id: str, **params: Any) -> Result:
        return self._request("GET", f"/admin/users/{user_id}/transactions", params=params)

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------
    def list_projects(self, **params: Any) -> Result:
        return self._request("GET", "/admin/projects", params=params)

    def list_logs(self, **params: Any) -> Result:
        return self._request("GET", "/admin/logs", params=params)

    def download_logs(self, fmt: str = "json", **params: Any) -> Result:
        """Download system logs as a file.

        Returns:
            A tuple ``(file, error)`` where ``file`` is a dictionary with
            ``filename``, ``content_type`` and the raw ``content`` text.
        """
        response, error = self._raw_request("GET", "/admin/logs/download", params={"format": fmt, **params})
        if error:
            return None, error
        disposition = response.headers.get("Content-Disposition", "")
        filename = disposition.split("filename=")[-1].strip('"') if "filename=" in disposition else None
        return {
            "filename": filename,
            "content_type": response.headers.get("Content-Type"),
            "content": response.text,
        }, None

    def get_metrics(self, metric_type: str = "overview", timeframe: Optional[str] = None) -> Result:
        return self._request("GET", "/admin/metrics", params={"type": metric_type, "timeframe": timeframe})

    def list_message_logs(self, **params: Any) -> Result:
        return self._request("GET", "/messaging/logs", params=params)

    def get_message_log(self, log_id: str) -> Result:
        return self._request("GET", f"/messaging/logs/{log_id}")

    # ------------------------------------------------------------------
    # Campaigns
    # ------------------------------------------------------------------
    def list_campaigns(self, **params: Any) -> Result:
        return self._request("GET", "/campaigns", params=params)

    def get_campaign(self, campaign_id: str) -> Result:
        return self._request("GET", f"/campaigns/{campaign_id}")

    def create_campaign(self, payload: Dict[str, Any]) -> Result:
        return self._request("POST", "/campaigns", json_body=payload)

    def update_campaign(self, campaign_id: str, payload: Dict[str, Any]) -> Result:
        return self._request("PUT", f"/campaigns/{campaign_id}", json_body=payload)

    def delete_campaign(self, campaign_id: str) -> Result:
        return self._request("DELETE", f"/campaigns/{campaign_id}")

    # ------------------------------------------------------------------
    # Webhooks
    # ------------------------------------------------------------------
    def list_webhooks(self, **params: Any) -> Result:
        return self._request("GET", "/webhooks", params=params)

    def create_webhook(self, payload: Dict[str, Any]) -> Result:
        return self._request("POST", "/webhooks", json_body=payload)

    def update_webhook(self, webhook_id: str, payload: Dict[str, Any]) -> Result:
        return self._request("PUT", f"/webhooks/{webhook_id}", json_body=payload)

    def delete_webhook(self, webhook_id: str) -> Tuple[bool, Optional[Dict[str, Any]]]:
        _, error = self._request("DELETE", f"/webhooks/{webhook_id}")
        return error is None, error
