"""
HTTP client for the booking API.

Server-reported failures become `ApiError` carrying the server's `error`
string; anything that never got an answer becomes `NetworkError` with a
generic retry message, so the UI can tell the two apart.
"""

import logging
from typing import Any, Dict, Optional

import requests

from eventbook.client.store import TOKEN_KEY, USER_KEY, LocalStore

DEFAULT_BASE_URL = "http://localhost:5050"
DEFAULT_TIMEOUT = 10
NETWORK_ERROR_MESSAGE = "Network error. Please try again."


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class NetworkError(Exception):
    def __init__(self, message: str = NETWORK_ERROR_MESSAGE):
        super().__init__(message)
        self.message = message


class ApiClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        store: Optional[LocalStore] = None,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.store = store or LocalStore()
        self.session = session or requests.Session()
        self.timeout = timeout

    # --- TRANSPORT ---
    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        headers = kwargs.pop("headers", {})
        token = self.store.get(TOKEN_KEY)
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = self.session.request(
                method, f"{self.base_url}{path}", headers=headers, timeout=self.timeout, **kwargs
            )
        except requests.RequestException as e:
            logging.warning(f"[Client] {method} {path} failed: {e}")
            raise NetworkError()

        try:
            body = response.json()
        except ValueError:
            body = {}

        if not response.ok:
            message = body.get("error") if isinstance(body, dict) else None
            raise ApiError(response.status_code, message or f"Request failed ({response.status_code})")
        return body

    # --- AUTH ---
    def register(self, email: str, password: str, role: str, name: Optional[str] = None) -> Dict[str, Any]:
        body = self._request("POST", "/auth/register", json={
            "email": email, "password": password, "name": name, "role": role,
        })
        return body["user"]

    def login(self, email: str, password: str, role: str) -> Dict[str, Any]:
        body = self._request("POST", "/auth/login", json={"email": email, "password": password, "role": role})
        self.store.set(USER_KEY, body["user"])
        self.store.set(TOKEN_KEY, body["token"])
        return body["user"]

    def logout(self) -> None:
        self.store.clear()

    @property
    def current_user(self) -> Optional[Dict[str, Any]]:
        return self.store.get(USER_KEY)

    # --- EVENTS ---
    def list_events(self) -> list:
        return self._request("GET", "/events")["events"]

    def get_event(self, event_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/events/{event_id}")["event"]

    def list_organizer_events(self, organizer_id: int) -> list:
        return self._request("GET", "/organizer/events", params={"organizerId": organizer_id})["events"]

    def create_event(self, organizer_id: int, title: str, type_: str, price, description: Optional[str] = None) -> Dict[str, Any]:
        return self._request("POST", "/organizer/events", json={
            "organizerId": organizer_id, "title": title, "type": type_,
            "price": price, "description": description,
        })["event"]

    # --- ORDERS ---
    def create_order(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/orders", json=payload)["order"]

    def list_user_orders(self, user_id: int) -> list:
        return self._request("GET", "/user/orders", params={"userId": user_id})["orders"]

    def list_organizer_orders(self, organizer_id: int, status: Optional[str] = None) -> list:
        params = {"organizerId": organizer_id}
        if status:
            params["status"] = status
        return self._request("GET", "/organizer/orders", params=params)["orders"]

    def update_order_confirmation(self, order_id: int, status: str) -> Dict[str, Any]:
        return self._request("PUT", f"/organizer/orders/{order_id}", json={"status": status})["order"]

    # --- PROFILES ---
    def get_user_profile(self, user_id: int) -> Dict[str, Any]:
        return self._request("GET", "/user/profile", params={"userId": user_id})

    def update_user_profile(self, user_id: int, name: Optional[str], profile: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return self._request("PUT", "/user/profile", json={"userId": user_id, "name": name, "profile": profile})

    def get_organizer_profile(self, user_id: int) -> Optional[Dict[str, Any]]:
        return self._request("GET", "/organizer/profile", params={"userId": user_id})["organizer"]

    def update_organizer_profile(self, user_id: int, name: str, bio: Optional[str] = None, video_url: Optional[str] = None) -> Dict[str, Any]:
        return self._request("PUT", "/organizer/profile", json={
            "userId": user_id, "name": name, "bio": bio, "videoUrl": video_url,
        })["organizer"]

    # --- STATS ---
    def registration_stats(self) -> Dict[str, Any]:
        return self._request("GET", "/registrations")
