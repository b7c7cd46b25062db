"""Shared pytest fixtures for discovery_client tests."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from discovery_client import ApiMetadata, Client, ClientConfig


CALENDAR_DOCUMENT: dict[str, Any] = {
    "kind": "discovery#restDescription",
    "name": "calendar",
    "version": "v3",
    "title": "Calendar API",
    "rootUrl": "https://www.example.com/",
    "servicePath": "calendar/v3/",
    "resources": {
        "events": {
            "methods": {
                "list": {
                    "id": "calendar.events.list",
                    "httpMethod": "GET",
                    "path": "calendars/{calendarId}/events",
                    "parameters": {
                        "calendarId": {"type": "string", "location": "path", "required": True},
                        "maxResults": {"type": "integer", "location": "query"},
                    },
                    "parameterOrder": ["calendarId"],
                    "description": "Returns events on the specified calendar.",
                },
                "insert": {
                    "id": "calendar.events.insert",
                    "httpMethod": "POST",
                    "path": "calendars/{calendarId}/events",
                    "parameters": {
                        "calendarId": {"type": "string", "location": "path", "required": True},
                    },
                    "parameterOrder": ["calendarId"],
                },
                "get": {
                    "id": "calendar.events.get",
                    "httpMethod": "GET",
                    "path": "calendars/{calendarId}/events/{eventId}",
                    "parameterOrder": ["calendarId", "eventId"],
                },
                "delete": {
                    "id": "calendar.events.delete",
                    "httpMethod": "DELETE",
                    "path": "calendars/{calendarId}/events/{eventId}",
                    "parameterOrder": ["calendarId", "eventId"],
                },
            },
        },
        "calendarList": {
            "methods": {
                "list": {
                    "id": "calendar.calendarList.list",
                    "httpMethod": "GET",
                    "path": "users/me/calendarList",
                },
            },
        },
    },
}


@pytest.fixture
def flat_metadata():
    """Factory fixture for flat metadata documents built from method ids."""
    def _factory(*method_ids: str, name: str = "svc", version: str = "v1") -> dict[str, Any]:
        return {
            "name": name,
            "version": version,
            "methods": {method_id: {"id": method_id} for method_id in method_ids},
        }
    return _factory


@pytest.fixture
def calendar_document() -> dict[str, Any]:
    """Discovery-style calendar document with nested resources."""
    return copy.deepcopy(CALENDAR_DOCUMENT)


@pytest.fixture
def calendar_meta(calendar_document) -> ApiMetadata:
    return ApiMetadata.from_dict(calendar_document)


@pytest.fixture
def fast_config() -> ClientConfig:
    """Config with fast retries and no auth, independent of the environment."""
    return ClientConfig(
        timeout=5.0,
        strict_namespace=False,
        auth_method=None,
        retry_max_attempts=3,
        retry_backoff_factor=0.0,
    )


@pytest.fixture
def calendar_client(calendar_meta, fast_config) -> Client:
    return Client(calendar_meta, config=fast_config)
