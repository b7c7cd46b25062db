"""Nested accessor namespaces built from dotted method ids."""

from __future__ import annotations

import logging
from typing import Any, Iterator

from .errors import NamespaceConflictError

logger = logging.getLogger(__name__)


class Namespace:
    """
    Attribute container for one level of the accessor tree.

    Usage:
        ns = extend(None, "calendar.events.list", helper)
        ns.events.list(params)
        "list" in ns.events   # True
    """

    def __iter__(self) -> Iterator[str]:
        return iter(list(vars(self)))

    def __contains__(self, name: object) -> bool:
        return name in vars(self)

    def __len__(self) -> int:
        return len(vars(self))

    def __repr__(self) -> str:
        return f"Namespace({', '.join(self)})"


def _members(container: Any) -> dict[str, Any]:
    """Installed members of a container (instance attributes only)."""
    try:
        return vars(container)
    except TypeError:
        return {}


def _is_node(value: Any) -> bool:
    from .helpers import MethodHelper
    return isinstance(value, (Namespace, MethodHelper))


def extend(root: Any, key: str, obj: Any, *, strict: bool = False) -> Any:
    """
    Install ``obj`` at the dotted path ``key`` below ``root``.

    The first segment of ``key`` names the service itself and is skipped.
    Missing intermediate segments become ``Namespace`` containers. The
    final segment is assigned, so a later id that resolves to the same
    path replaces the earlier member (last-registered-wins). In strict mode
    that replacement raises ``NamespaceConflictError`` instead.

    A single-segment key installs nothing. Neither does a key with a
    segment starting with an underscore: those names hold container state
    (strict mode raises NamespaceConflictError for them).

    Args:
        root: Object to extend (a new Namespace is created if None)
        key: Full dotted method id, e.g. ``calendar.events.list``
        obj: Value to install at the final segment
        strict: Raise on collisions instead of overwriting

    Returns:
        The extended root object
    """
    if root is None:
        root = Namespace()

    segments = key.split(".")
    if len(segments) < 2:
        logger.debug(f"Nothing to install for single-segment id {key!r}")
        return root

    private = [s for s in segments[1:] if s.startswith("_")]
    if private:
        message = f"Method {key!r} not installed: segment {private[0]!r} is private"
        if strict:
            raise NamespaceConflictError(message, path=".".join(segments[1:]))
        logger.warning(message)
        return root

    chain = root
    for i, segment in enumerate(segments[1:-1], start=1):
        existing = _members(chain).get(segment)
        if existing is None:
            _shadow_check(chain, segment, key)
            existing = Namespace()
            setattr(chain, segment, existing)
        elif not hasattr(existing, "__dict__"):
            _collision(".".join(segments[1:i + 1]), key, strict)
            existing = Namespace()
            setattr(chain, segment, existing)
        chain = existing

    last = segments[-1]
    existing = _members(chain).get(last)
    if existing is not None:
        _collision(".".join(segments[1:]), key, strict)
    else:
        _shadow_check(chain, last, key)
    setattr(chain, last, obj)

    return root


def _collision(path: str, key: str, strict: bool) -> None:
    if strict:
        raise NamespaceConflictError(
            f"Method {key!r} collides with an existing member at {path!r}",
            path=path,
        )
    logger.warning(f"Method {key!r} replaces existing member at {path!r}")


def _shadow_check(container: Any, name: str, key: str) -> None:
    if hasattr(type(container), name):
        logger.warning(
            f"Method {key!r} shadows {type(container).__name__}.{name} on this instance"
        )


def lookup(root: Any, path: str, *, skip_first: bool = False) -> Any:
    """
    Look up the member installed at a dotted path.

    Underscore names are never resolved; they hold container state.

    Args:
        root: Namespace root (usually a Client)
        path: Dotted path below the root, or a full method id with skip_first
        skip_first: Treat ``path`` as a method id and drop its service segment

    Raises:
        KeyError: If nothing is installed at the path
    """
    segments = path.split(".")
    if skip_first:
        segments = segments[1:]
    if not segments or not all(segments):
        raise KeyError(path)

    chain = root
    for segment in segments:
        members = _members(chain)
        if segment.startswith("_") or segment not in members:
            raise KeyError(path)
        chain = members[segment]
    return chain


def walk(root: Any, prefix: str = "") -> Iterator[tuple[str, Any]]:
    """Yield ``(dotted_path, member)`` for every node below ``root``, depth-first."""
    for name, member in list(_members(root).items()):
        if not _is_node(member):
            continue
        path = f"{prefix}.{name}" if prefix else name
        yield path, member
        yield from walk(member, path)
