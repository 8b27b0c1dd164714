"""
Dotted-path addressing into nested mappings and sequences.

An address such as ``"person.contact.name"`` is split on ``.`` and walked one
segment at a time. Mappings are looked up by the exact segment string,
sequences by segments that read as a non-negative integer index.

None of these helpers raise on malformed input: missing intermediates read as
the default value and are synthesized as empty dicts on write.

Mutation contract:

- :func:`set` mutates every intermediate container along the address but
  replaces the container holding the leaf with a shallow copy. A list that
  has to take a non-index key is replaced by an equivalent dict.
- :func:`crawl` replaces leaves in place and returns the same composite.
- :func:`set_copy` and :func:`crawl_copy` deep-copy the input first.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping, MutableMapping
from typing import Any, Callable, Dict, Iterable, Optional

from nestbox.core.types import Composite, NestedValue

logger = logging.getLogger(__name__)

SEPARATOR = "."

Visitor = Callable[[NestedValue, Any, Optional[str]], NestedValue]


def split_address(address: str) -> list[str]:
    """Split a dotted address into its ordered segments."""
    return address.split(SEPARATOR)


def _index(segment: str) -> Optional[int]:
    # only plain ascii digits count as a sequence index
    if segment.isascii() and segment.isdigit():
        return int(segment)
    return None


def _is_writable(node: Any) -> bool:
    return isinstance(node, (MutableMapping, list))


def _writable(node: Any) -> Any:
    # read-only composites are copied into their mutable form, scalars become {}
    if _is_writable(node):
        return node
    if isinstance(node, Mapping):
        return dict(node)
    if isinstance(node, tuple):
        return list(node)
    return {}


def _is_truthy(value: Any) -> bool:
    # composites are truthy even when empty; NaN is not
    if value is None:
        return False
    if isinstance(value, (Mapping, list, tuple)):
        return True
    if isinstance(value, float) and value != value:
        return False
    return bool(value)


def _child(node: Any, segment: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(segment)
    if isinstance(node, (list, tuple)):
        idx = _index(segment)
        if idx is not None and idx < len(node):
            return node[idx]
    return None


def _put(node: Any, segment: str, value: Any) -> None:
    # node must accept segment, see _accepting
    if isinstance(node, MutableMapping):
        node[segment] = value
        return
    idx = _index(segment)
    if idx < len(node):
        node[idx] = value
    else:
        node.append(value)


def _accepting(node: Any, segment: str) -> Any:
    # lists take an in-range index or an append; any other key turns them into a dict
    if isinstance(node, list):
        idx = _index(segment)
        if idx is None or idx > len(node):
            logger.debug("Converting a list of length %d to a dict to hold key %r", len(node), segment)
            return {str(i): item for i, item in enumerate(node)}
    return node


def _with_key(container: Any, segment: str, value: Any) -> Any:
    # non-destructive leaf write: the caller gets a fresh shallow copy
    if isinstance(container, tuple):
        container = list(container)
    if isinstance(container, list):
        idx = _index(segment)
        if idx is not None and idx <= len(container):
            updated = list(container)
            if idx < len(container):
                updated[idx] = value
            else:
                updated.append(value)
            return updated
        merged: Dict[str, Any] = {str(i): item for i, item in enumerate(container)}
        merged[segment] = value
        return merged
    if isinstance(container, Mapping):
        merged = dict(container)
        merged[segment] = value
        return merged
    return {segment: value}


def get(obj: NestedValue, address: str = "", default: Any = None) -> Any:
    """
    Return the value at ``address`` inside ``obj`` or ``default``.

    Falsy leaves (``0``, ``""``, ``False``, ``None``) are indistinguishable
    from missing ones and also yield ``default``. Empty dicts and lists are
    returned as-is.
    """
    segments = split_address(address)
    node = obj
    for segment in segments[:-1]:
        node = _child(node, segment)
        if node is None:
            return default
    value = _child(node, segments[-1])
    return value if _is_truthy(value) else default


def set(obj: NestedValue, address: str = "", value: NestedValue = None) -> Composite:
    """
    Write ``value`` at ``address`` and return the resulting root.

    With a single segment a new shallow copy of ``obj`` is returned and
    ``obj`` is left untouched. With more segments every intermediate level
    is created as needed and mutated in place, the level holding the leaf
    is swapped for a copy, and the (mutated) root is returned. A root that
    is not a writable composite is replaced by a new dict.

    Lists accept a digit segment that is in range or equal to their length
    (an append), and the copy of a list leaf container stays a list. Any
    other segment turns the list into a dict keyed by the stringified
    indices, which replaces the list in its parent (or becomes the root).

        >>> set({}, "x.y.z", 5)
        {'x': {'y': {'z': 5}}}
        >>> set({"l": [1]}, "l.x", 2)
        {'l': {'0': 1, 'x': 2}}
    """
    segments = split_address(address)
    if len(segments) == 1:
        return _with_key(obj, segments[0], value)

    root = _writable(obj)
    holder, held_at = None, None
    node = root
    last = len(segments) - 2
    for depth, segment in enumerate(segments[:-1]):
        widened = _accepting(node, segment)
        if widened is not node:
            if holder is None:
                root = widened
            else:
                _put(holder, held_at, widened)
            node = widened
        if depth == last:
            child = _with_key(_child(node, segment), segments[-1], value)
        else:
            child = _writable(_child(node, segment))
        _put(node, segment, child)
        holder, held_at, node = node, segment, child
    return root


def crawl(obj: NestedValue, visitor: Visitor, key: Any = None, address: Optional[str] = None) -> NestedValue:
    """
    Apply ``visitor(leaf, key, address)`` to every leaf of ``obj``.

    Composites are walked depth-first in their natural order and each leaf
    is replaced in place by the visitor's return value. The reported address
    uses the same dotted form as :func:`get` and :func:`set`; list positions
    appear as their decimal index. Tuples cannot be mutated and come back as
    new tuples.
    """
    if isinstance(obj, MutableMapping):
        for child_key in list(obj):
            child_address = f"{address}.{child_key}" if address else str(child_key)
            obj[child_key] = crawl(obj[child_key], visitor, child_key, child_address)
        return obj
    if isinstance(obj, list):
        for i in range(len(obj)):
            obj[i] = crawl(obj[i], visitor, i, f"{address}.{i}" if address else str(i))
        return obj
    if isinstance(obj, tuple):
        return tuple(
            crawl(item, visitor, i, f"{address}.{i}" if address else str(i))
            for i, item in enumerate(obj)
        )
    return visitor(obj, key, address)


def set_copy(obj: NestedValue, address: str = "", value: NestedValue = None) -> Composite:
    """Like :func:`set` but never touches ``obj``."""
    return set(copy.deepcopy(obj), address, value)


def crawl_copy(obj: NestedValue, visitor: Visitor) -> NestedValue:
    """Like :func:`crawl` but works on a deep copy of ``obj``."""
    return crawl(copy.deepcopy(obj), visitor)


def get_many(obj: NestedValue, addresses: Iterable[str] = (), default: Any = None) -> Dict[str, Any]:
    """Read several addresses at once into a flat ``{address: value}`` dict."""
    return {address: get(obj, address, default) for address in addresses}


def assign(target: Any, properties: Optional[Mapping[str, Any]] = None) -> Any:
    """Copy ``properties`` onto ``target`` as items or attributes and return it."""
    for name, value in (properties or {}).items():
        if isinstance(target, MutableMapping):
            target[name] = value
        else:
            setattr(target, name, value)
    return target
