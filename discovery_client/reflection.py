"""Introspection of a client's generated namespace.

ClientReflector answers questions that attribute access cannot: which
paths exist, which declared methods ended up unreachable, and what the
whole accessor tree looks like.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING

from .helpers import MethodHelper
from .namespace import Namespace, lookup, walk

if TYPE_CHECKING:
    from .client import Client


@dataclass
class NamespaceNode:
    """A node in the accessor tree of a client."""
    path: str
    name: str
    children: list["NamespaceNode"] = field(default_factory=list)
    method_id: str | None = None
    http_method: str | None = None

    @property
    def is_method(self) -> bool:
        return self.method_id is not None

    def print(
        self,
        indent: str = "",
        is_last: bool = True,
        show_http: bool = True,
        _is_root: bool = True,
    ) -> str:
        """
        Return a string representation of this node and its children.

        Args:
            indent: Current indentation prefix
            is_last: Whether this is the last child of parent
            show_http: Include HTTP verb annotations on methods
        """
        lines = []

        if not _is_root:
            connector = "└── " if is_last else "├── "
        else:
            connector = ""

        if self.is_method:
            label = f"{self.name}()"
            if show_http and self.http_method:
                label += f"  [{self.http_method}]"
        else:
            label = f"{self.name}/"
        lines.append(f"{indent}{connector}{label}")

        if not _is_root:
            child_indent = indent + ("    " if is_last else "│   ")
        else:
            child_indent = ""

        for i, child in enumerate(self.children):
            is_last_child = (i == len(self.children) - 1)
            lines.append(child.print(child_indent, is_last_child, show_http, _is_root=False))

        return "\n".join(lines)

    def __str__(self) -> str:
        return self.print()


class ClientReflector:
    """
    Facade for exploring a built client.

    Usage:
        reflector = ClientReflector(client)
        reflector.paths()          # ["events", "events.insert", "events.list"]
        reflector.lookup("events.list")({"calendarId": "primary"})
        reflector.unreachable()    # method ids with no installed builder
        print(reflector.tree())
    """

    def __init__(self, client: Client):
        self._client = client

    @property
    def client(self) -> Client:
        return self._client

    def paths(self, methods_only: bool = True) -> list[str]:
        """
        List dotted paths reachable from the client.

        Args:
            methods_only: Skip pure containers
        """
        return sorted(
            path for path, member in walk(self._client)
            if not methods_only or isinstance(member, MethodHelper)
        )

    def lookup(self, path: str) -> Any:
        """
        Get the member at a dotted path below the client.

        Raises:
            KeyError: If nothing is installed there
        """
        return lookup(self._client, path)

    def lookup_method(self, method_id: str) -> MethodHelper:
        """
        Get the builder installed for a full method id.

        Raises:
            KeyError: If the method has no reachable builder
        """
        member = lookup(self._client, method_id, skip_first=True)
        if not isinstance(member, MethodHelper) or member._method.id != method_id:
            raise KeyError(method_id)
        return member

    def unreachable(self) -> list[str]:
        """
        Method ids declared in the metadata without a reachable builder.

        These are single-segment ids, ids with an underscore segment, and
        ids replaced by a later colliding id. They remain usable through
        ``new_request``.
        """
        missing = []
        for method_id in self._client.get_api_meta().method_ids():
            try:
                self.lookup_method(method_id)
            except KeyError:
                missing.append(method_id)
        return missing

    def tree(self) -> NamespaceNode:
        """Build the accessor tree rooted at the client."""
        root = NamespaceNode(path="", name=self._client.get_name() or "client")
        root.children = _children(self._client, "")
        return root


def _children(container: Any, prefix: str) -> list[NamespaceNode]:
    nodes = []
    for name, member in vars(container).items():
        if not isinstance(member, (Namespace, MethodHelper)):
            continue
        path = f"{prefix}.{name}" if prefix else name
        node = NamespaceNode(path=path, name=name, children=_children(member, path))
        if isinstance(member, MethodHelper):
            node.method_id = member._method.id
            node.http_method = member._method.http_method
        nodes.append(node)
    return nodes
