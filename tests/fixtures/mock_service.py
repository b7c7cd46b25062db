"""
Mock API service for testing request execution without a real service.

Provides httpx MockTransport for simulating service responses in pytest.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Callable
from unittest.mock import patch

import httpx


@dataclass
class RecordedCall:
    """One request seen by the mock service."""
    method: str
    url: str
    path: str
    params: dict[str, str]
    headers: dict[str, str]
    body: Any


@dataclass
class MockApiService:
    """
    Mock the HTTP layer of a discovery-described API.

    Usage in tests:
        svc = MockApiService()
        svc.add_route("GET", "/calendar/v3/calendars/primary/events", {"items": []})

        with svc.patch_httpx():
            result = client.events.list({"calendarId": "primary"}).execute()
    """

    routes: dict[tuple[str, str], tuple[int, Any]] = field(default_factory=dict)

    # Queued responses consumed before the route table (for retry tests)
    queued: dict[tuple[str, str], list[tuple[int, Any]]] = field(default_factory=dict)

    call_log: list[RecordedCall] = field(default_factory=list)

    custom_handlers: dict[str, Callable[[httpx.Request], httpx.Response]] = field(
        default_factory=dict
    )

    def add_route(self, method: str, path: str, body: Any = None, status: int = 200) -> None:
        """Register a response for ``method path``."""
        self.routes[(method.upper(), path)] = (status, body)

    def queue_response(self, method: str, path: str, body: Any = None, status: int = 200) -> None:
        """Queue a one-shot response served before the registered route."""
        self.queued.setdefault((method.upper(), path), []).append((status, body))

    def add_custom_handler(
        self, pattern: str, handler: Callable[[httpx.Request], httpx.Response]
    ) -> None:
        """Add a custom handler for a URL path pattern (regex)."""
        self.custom_handlers[pattern] = handler

    def _handle_request(self, request: httpx.Request) -> httpx.Response:
        """Route request to the registered response."""
        path = request.url.path
        body = json.loads(request.content) if request.content else None

        self.call_log.append(
            RecordedCall(
                method=request.method,
                url=str(request.url),
                path=path,
                params=dict(request.url.params),
                headers=dict(request.headers),
                body=body,
            )
        )

        for pattern, handler in self.custom_handlers.items():
            if re.match(pattern, path):
                return handler(request)

        key = (request.method, path)
        if self.queued.get(key):
            status, payload = self.queued[key].pop(0)
            return self._response(status, payload)

        if key in self.routes:
            status, payload = self.routes[key]
            return self._response(status, payload)

        return httpx.Response(404, json={"error": f"Unknown endpoint: {request.method} {path}"})

    @staticmethod
    def _response(status: int, payload: Any) -> httpx.Response:
        if payload is None:
            return httpx.Response(status)
        return httpx.Response(status, json=payload)

    def get_transport(self) -> httpx.MockTransport:
        """Get httpx MockTransport for use with httpx.Client."""
        return httpx.MockTransport(self._handle_request)

    def patch_httpx(self):
        """
        Context manager to patch httpx.Client to use mock transport.

        Usage:
            with mock_service.patch_httpx():
                request.execute()
        """
        transport = self.get_transport()

        original_init = httpx.Client.__init__

        def patched_init(self_client, *args, **kwargs):
            kwargs["transport"] = transport
            original_init(self_client, *args, **kwargs)

        return patch.object(httpx.Client, "__init__", patched_init)

    def get_calls(self, path: str | None = None) -> list[RecordedCall]:
        """Get logged calls, optionally filtered by a path substring."""
        if path is None:
            return self.call_log
        return [c for c in self.call_log if path in c.path]

    def clear_calls(self) -> None:
        """Clear the call log."""
        self.call_log.clear()


def create_mock_service_for_calendar() -> MockApiService:
    """Create mock service answering the calendar document's methods."""
    svc = MockApiService()
    svc.add_route(
        "GET",
        "/calendar/v3/calendars/primary/events",
        {"kind": "calendar#events", "items": [{"id": "evt1", "summary": "Standup"}]},
    )
    svc.add_route(
        "POST",
        "/calendar/v3/calendars/primary/events",
        {"kind": "calendar#event", "id": "evt2", "summary": "Review"},
    )
    svc.add_route("DELETE", "/calendar/v3/calendars/primary/events/evt1", None, status=204)
    svc.add_route(
        "GET",
        "/calendar/v3/calendars/primary/events/evt1",
        {"error": "forbidden"},
        status=403,
    )
    return svc
