"""API metadata records built from a discovery document."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator

logger = logging.getLogger(__name__)


@dataclass
class MethodMetadata:
    """
    Description of one remote method.

    Only ``id`` matters to namespace building. The remaining fields are
    carried for the request executor; ``raw`` keeps the source mapping
    untouched so nothing the document declared is lost.
    """
    id: str
    http_method: str | None = None
    path: str | None = None
    parameters: dict[str, dict[str, Any]] = field(default_factory=dict)
    parameter_order: list[str] = field(default_factory=list)
    description: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def segments(self) -> list[str]:
        return self.id.split(".")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MethodMetadata:
        """Create method metadata from a discovery-style mapping."""
        return cls(
            id=data["id"],
            http_method=data.get("httpMethod", data.get("http_method")),
            path=data.get("path", data.get("flatPath")),
            parameters=dict(data.get("parameters") or {}),
            parameter_order=list(data.get("parameterOrder", data.get("parameter_order")) or []),
            description=data.get("description"),
            raw=dict(data),
        )


@dataclass
class ApiMetadata:
    """
    Metadata for one API surface.

    Immutable by convention: a Client holds a reference for its whole
    lifetime and never modifies it.
    """
    name: str
    version: str
    methods: dict[str, MethodMetadata] = field(default_factory=dict)
    title: str | None = None
    description: str | None = None
    root_url: str | None = None
    service_path: str | None = None
    base_url: str | None = None

    def find_method(self, method_id: str) -> MethodMetadata | None:
        """Find a method by id, or None if the document does not declare it."""
        method = self.methods.get(method_id)
        if method is not None and method.id == method_id:
            return method
        for candidate in self.methods.values():
            if candidate.id == method_id:
                return candidate
        return None

    def method_ids(self) -> list[str]:
        return [m.id for m in self.methods.values()]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ApiMetadata:
        """
        Create API metadata from a discovery document.

        Accepts a flat ``methods`` mapping as well as methods nested under
        ``resources`` (the Discovery layout); both are flattened into
        ``methods`` keyed by method id. A missing or malformed ``methods``
        member yields zero methods rather than an error.
        """
        methods: dict[str, MethodMetadata] = {}
        for method in _iter_methods(data):
            methods[method.id] = method

        return cls(
            name=data.get("name", ""),
            version=data.get("version", ""),
            methods=methods,
            title=data.get("title"),
            description=data.get("description"),
            root_url=data.get("rootUrl", data.get("root_url")),
            service_path=data.get("servicePath", data.get("service_path")),
            base_url=data.get("baseUrl", data.get("base_url")),
        )

    @classmethod
    def from_file(cls, path: str | Path) -> ApiMetadata:
        """Load API metadata from a local JSON or YAML document."""
        path = Path(path)
        with open(path, "r") as f:
            if path.suffix in (".yaml", ".yml"):
                import yaml
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
        return cls.from_dict(data or {})


def _iter_methods(container: Mapping[str, Any]) -> Iterator[MethodMetadata]:
    """Yield methods declared directly on ``container`` and in nested resources."""
    methods = container.get("methods")
    if isinstance(methods, Mapping):
        for key, entry in methods.items():
            if isinstance(entry, MethodMetadata):
                yield entry
                continue
            if not isinstance(entry, Mapping) or not entry.get("id"):
                logger.warning(f"Skipping method entry {key!r}: no id")
                continue
            yield MethodMetadata.from_dict(entry)
    elif methods is not None:
        logger.warning(f"Ignoring malformed methods member of type {type(methods).__name__}")

    resources = container.get("resources")
    if isinstance(resources, Mapping):
        for resource in resources.values():
            if isinstance(resource, Mapping):
                yield from _iter_methods(resource)
