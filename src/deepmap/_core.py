"""
DeepMap: a mapping keyed by paths of tokens, stored as a trie.

Each token of a key path selects a child node, so entries sharing a prefix
share the nodes of that prefix. A node only holds a value when its exact
path was set; nodes that exist purely as ancestors are invisible to lookups
and traversal.

Structure rules:
- The root node addresses the empty path () and is never removed.
- delete() prunes every ancestor left with no value and no children.
- Traversal is pre-order: a node's value comes before its children, and
  children come in insertion order.

Thread safety: NOT thread-safe. Guard concurrent access externally.
"""

from __future__ import annotations

import collections.abc as _abc
import copy as _copy
import logging as _logging
import typing as _typing

import deepmap._types as _types
import deepmap.paths as paths

_logger = _logging.getLogger(__name__)

K = _typing.TypeVar("K", bound=_abc.Hashable)
V = _typing.TypeVar("V")


class _Node:
    """One position in the trie."""

    __slots__ = ("children", "value")

    def __init__(self) -> None:
        self.children: dict[_typing.Any, _Node] = {}
        self.value: _typing.Any = _types.MISSING

    def is_dead(self) -> bool:
        """A node with no value and no children is prunable."""
        return self.value is _types.MISSING and not self.children


def _copy_node(
    source: _Node,
    copy_value: _typing.Callable[[_typing.Any], _typing.Any] | None = None,
) -> _Node:
    """
    Copy a subtree node by node, without recursion.

    Values are shared unless copy_value is given, in which case it is
    applied to every value (never to MISSING).
    """

    def _value(node: _Node) -> _typing.Any:
        if copy_value is None or node.value is _types.MISSING:
            return node.value
        return copy_value(node.value)

    root = _Node()
    root.value = _value(source)
    stack = [(source, root)]
    while stack:
        src, dst = stack.pop()
        for token, child in src.children.items():
            new = _Node()
            new.value = _value(child)
            dst.children[token] = new
            stack.append((child, new))
    return root


class _ItemsView(_abc.ItemsView):  # type: ignore[type-arg]
    """Items view that walks the trie once instead of looking up each key."""

    def __iter__(self) -> _typing.Iterator[tuple[_typing.Any, _typing.Any]]:
        yield from self._mapping.entries()


class _ValuesView(_abc.ValuesView):  # type: ignore[type-arg]
    """Values view that walks the trie once instead of looking up each key."""

    def __iter__(self) -> _typing.Iterator[_typing.Any]:
        for _, value in self._mapping.entries():
            yield value


class DeepMap(_typing.MutableMapping[tuple[K, ...], V]):
    """
    A mapping from key paths (sequences of tokens) to values.

    Example:
        >>> dm = DeepMap()
        >>> dm.set((), "root").set(("x",), "b").set(("x", "y"), "c")
        DeepMap({(): 'root', ('x',): 'b', ('x', 'y'): 'c'})
        >>> dm.get(("x", "y"))
        'c'
        >>> dm.has(("missing",))
        False

    Key paths may be given as any non-string iterable and are always
    returned as tuples. Absent paths are reported through return values
    (get/extract return a default, delete returns False); only the
    Mapping protocol methods (dm[path], del dm[path]) raise KeyError.

    Args:
        entries: Optional mapping of path -> value, or iterable of
            (path, value) pairs. Later pairs overwrite earlier ones.

    Note:
        Modifying the structure while iterating raises RuntimeError, the
        same as for a dict.
    """

    def __init__(
        self,
        entries: (
            _abc.Mapping[_typing.Any, V]
            | _typing.Iterable[tuple[_typing.Iterable[K], V]]
            | None
        ) = None,
    ) -> None:
        self._root = _Node()
        if entries is not None:
            self.update(entries)

    # =========================================================================
    # Path navigation
    # =========================================================================

    def _resolve(self, path: _types.KeyPath) -> _Node | None:
        """Return the node at path, or None if some token has no child."""
        node = self._root
        for token in path:
            child = node.children.get(token)
            if child is None:
                return None
            node = child
        return node

    def _trail(
        self,
        path: _types.KeyPath,
    ) -> list[tuple[_Node, _typing.Any]] | None:
        """
        Return (parent, token) for every step of path, root first.

        Returns:
            The trail, or None if path doesn't fully resolve.
        """
        trail: list[tuple[_Node, _typing.Any]] = []
        node = self._root
        for token in path:
            child = node.children.get(token)
            if child is None:
                return None
            trail.append((node, token))
            node = child
        return trail

    @staticmethod
    def _prune(trail: list[tuple[_Node, _typing.Any]]) -> None:
        """Remove dead nodes bottom-up along trail, stopping at the first live one."""
        while trail:
            parent, token = trail[-1]
            if not parent.children[token].is_dead():
                return
            del parent.children[token]
            trail.pop()

    # =========================================================================
    # Core operations
    # =========================================================================

    def set(self, path: _typing.Iterable[K], value: V) -> DeepMap[K, V]:
        """
        Set value at path, creating intermediate nodes as needed.

        Returns:
            self, so calls can be chained.
        """
        node = self._root
        for token in paths.as_key_path(path):
            child = node.children.get(token)
            if child is None:
                child = node.children[token] = _Node()
            node = child
        node.value = value
        return self

    def get(  # type: ignore[override]
        self,
        path: _typing.Iterable[K],
        default: _typing.Any = None,
    ) -> _typing.Any:
        """Return the value at path, or default if no value is set there."""
        node = self._resolve(paths.as_key_path(path))
        if node is None or node.value is _types.MISSING:
            return default
        return node.value

    def has(self, path: _typing.Iterable[K]) -> bool:
        """Check whether a value is set at exactly this path."""
        node = self._resolve(paths.as_key_path(path))
        return node is not None and node.value is not _types.MISSING

    def has_prefix(self, prefix: _typing.Iterable[K]) -> bool:
        """Check whether any entry's path starts with prefix."""
        node = self._resolve(paths.as_key_path(prefix))
        return node is not None and not node.is_dead()

    def delete(self, path: _typing.Iterable[K]) -> bool:
        """
        Remove the value at path and prune ancestors left empty.

        Returns:
            False if path doesn't resolve (nothing is modified), True otherwise,
            including when the node resolved but held no value.
        """
        trail = self._trail(paths.as_key_path(path))
        if trail is None:
            return False

        if trail:
            parent, token = trail[-1]
            parent.children[token].value = _types.MISSING
        else:
            self._root.value = _types.MISSING

        self._prune(trail)
        return True

    def extract(
        self,
        path: _typing.Iterable[K],
        default: _typing.Any = None,
    ) -> _typing.Any:
        """Remove the value at path and return it (or default if absent)."""
        path = paths.as_key_path(path)
        value = self.get(path, _types.MISSING)
        self.delete(path)
        if value is _types.MISSING:
            return default
        return value

    def clear(self) -> None:
        """Discard every node. The map is then identical to a new empty one."""
        self._root = _Node()
        _logger.debug("Cleared DeepMap")

    @property
    def size(self) -> int:
        """Number of entries, counted by a full traversal."""
        return sum(1 for _ in self._walk(self._root, ()))

    # =========================================================================
    # Traversal
    # =========================================================================

    @staticmethod
    def _walk(
        node: _Node,
        prefix: _types.KeyPath,
    ) -> _typing.Iterator[tuple[_types.KeyPath, _typing.Any]]:
        """Pre-order walk yielding (path, value) for valued nodes."""
        if node.value is not _types.MISSING:
            yield prefix, node.value

        stack = [(prefix, iter(node.children.items()))]
        while stack:
            path, children = stack[-1]
            try:
                token, child = next(children)
            except StopIteration:
                stack.pop()
                continue

            subpath = (*path, token)
            if child.value is not _types.MISSING:
                yield subpath, child.value
            stack.append((subpath, iter(child.children.items())))

    def entries(
        self,
        prefix: _typing.Iterable[K] = (),
    ) -> _typing.Iterator[tuple[tuple[K, ...], V]]:
        """
        Iterate (path, value) pairs in pre-order.

        Args:
            prefix: Only walk the subtree at this path. Yielded paths are
                still full paths from the root.
        """
        prefix = paths.as_key_path(prefix)
        node = self._resolve(prefix)
        if node is None:
            return iter(())
        return self._walk(node, prefix)

    def for_each(
        self,
        callback: _typing.Callable[[V, tuple[K, ...], DeepMap[K, V]], object],
    ) -> None:
        """
        Call callback(value, path, self) for each entry in traversal order.

        Entries are snapshotted before the first call, so the callback may
        modify the map. Changes it makes are not visited.
        """
        for path, value in list(self.entries()):
            callback(value, path, self)

    def items(self) -> _abc.ItemsView[tuple[K, ...], V]:
        return _ItemsView(self)

    def values(self) -> _abc.ValuesView[V]:
        return _ValuesView(self)

    # =========================================================================
    # Subtree operations
    # =========================================================================

    def clone(self, path: _typing.Iterable[K] = ()) -> DeepMap[K, V]:
        """
        Copy the subtree at path into a new DeepMap rooted at path.

        The value at path itself becomes the value at () in the copy.
        Values are shared references; the tree structure is independent.

        Returns:
            The copy, or an empty DeepMap if path doesn't resolve.
        """
        result: DeepMap[K, V] = DeepMap()
        node = self._resolve(paths.as_key_path(path))
        if node is not None:
            result._root = _copy_node(node)
        return result

    def copy(self) -> DeepMap[K, V]:
        """Return an independent copy of the whole map (shared values)."""
        return self.clone(())

    def take(self, path: _typing.Iterable[K]) -> DeepMap[K, V]:
        """
        Detach the subtree at path and return it as a new DeepMap.

        The subtree is re-rooted exactly as with clone(). Ancestors left
        with no value and no children are pruned. take(()) moves the
        whole tree out and leaves this map empty.

        Returns:
            The detached subtree, or an empty DeepMap if path doesn't resolve.
        """
        path = paths.as_key_path(path)
        result: DeepMap[K, V] = DeepMap()

        if not path:
            result._root, self._root = self._root, _Node()
            _logger.debug("Took whole tree")
            return result

        trail = self._trail(path[:-1])
        if trail is None:
            return result
        parent = trail[-1][0].children[trail[-1][1]] if trail else self._root
        node = parent.children.pop(path[-1], None)
        if node is None:
            return result

        self._prune(trail)
        result._root = node
        _logger.debug("Took subtree at %r", path)
        return result

    def graft(
        self,
        path: _typing.Iterable[K],
        other: DeepMap[K, V],
    ) -> DeepMap[K, V]:
        """
        Set every entry of other under path, overwriting existing values.

        other may be this map itself; its entries are snapshotted first.

        Returns:
            self, so calls can be chained.
        """
        path = paths.as_key_path(path)
        grafted = list(other.entries())
        for subpath, value in grafted:
            self.set((*path, *subpath), value)
        _logger.debug("Grafted %d entries at %r", len(grafted), path)
        return self

    # =========================================================================
    # Mapping protocol
    # =========================================================================

    def __getitem__(self, path: _typing.Iterable[K]) -> V:
        """
        Get the value at path.

        Raises:
            KeyError: If no value is set at path.
        """
        path = paths.as_key_path(path)
        node = self._resolve(path)
        if node is None or node.value is _types.MISSING:
            raise KeyError(path)
        return _typing.cast(V, node.value)

    def __setitem__(self, path: _typing.Iterable[K], value: V) -> None:
        self.set(path, value)

    def __delitem__(self, path: _typing.Iterable[K]) -> None:
        """
        Delete the value at path.

        Raises:
            KeyError: If no value is set at path.
        """
        path = paths.as_key_path(path)
        if not self.has(path):
            raise KeyError(path)
        self.delete(path)

    def __contains__(self, path: object) -> bool:
        """Check if a value is set at path. Non-paths are never contained."""
        try:
            key_path = paths.as_key_path(path)  # type: ignore[arg-type]
        except paths.InvalidKeyPathError:
            return False
        return self.has(key_path)

    def __iter__(self) -> _typing.Iterator[tuple[K, ...]]:
        """Iterate over key paths in traversal order."""
        for path, _ in self._walk(self._root, ()):
            yield path

    def __len__(self) -> int:
        """Count entries (same as size)."""
        return self.size

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.entries())!r})"

    # =========================================================================
    # Copy and pickle support
    # =========================================================================

    def __getstate__(self) -> dict[str, _typing.Any]:
        """Pickle as a flat entry list so deep paths don't recurse per node."""
        return {"entries": list(self._walk(self._root, ()))}

    def __setstate__(self, state: dict[str, _typing.Any]) -> None:
        """Rebuild the trie from the flat entry list, preserving order."""
        self._root = _Node()
        for path, value in state["entries"]:
            self.set(path, value)

    def __deepcopy__(self, memo: dict[int, _typing.Any]) -> DeepMap[K, V]:
        """Copy the structure iteratively and deep-copy every value."""
        result: DeepMap[K, V] = type(self)()
        memo[id(self)] = result
        result._root = _copy_node(self._root, lambda value: _copy.deepcopy(value, memo))
        return result
