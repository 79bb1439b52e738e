"""Associative container capabilities the generator depends on.

The generator never touches a concrete container type. Anything that offers
``get`` / ``put`` / ``key_set`` (and a key set that can be iterated once) is
accepted, so callers can plug in their own hash tables:

    class MyHashMap:
        def __init__(self, capacity: int) -> None: ...
        def get(self, key): ...
        def put(self, key, value): ...
        def key_set(self) -> Iterable: ...

    gen.bind_color_table(MyHashMap, colors, labels)

Two reference implementations live here: ``DictHashMap`` wraps the builtin
``dict``; ``ChainedHashMap`` is a from-scratch separate-chaining table whose
key set is a doubly linked list.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar, runtime_checkable

K = TypeVar("K")
V = TypeVar("V")
K_co = TypeVar("K_co", covariant=True)

# Bucket-count bounds for ChainedHashMap. The capacity a factory receives is a
# hint; 0xFFFFFF buckets would cost ~128MB for a four-colour palette.
_MIN_BUCKETS = 8
_MAX_INITIAL_BUCKETS = 1024
_LOAD_FACTOR = 0.75


@runtime_checkable
class KeySet(Protocol[K_co]):
    """Iteration is the only required capability."""

    def __iter__(self) -> Iterator[K_co]: ...


@runtime_checkable
class HashMapLike(Protocol[K, V]):
    """Minimal map capability: get, put, key_set."""

    def get(self, key: K) -> V | None: ...

    def put(self, key: K, value: V) -> V | None: ...

    def key_set(self) -> KeySet[K]: ...


MapFactory = Callable[[int], HashMapLike]


def is_hash_map(obj: object) -> bool:
    """Structural check for the map capability."""
    return isinstance(obj, HashMapLike)


# ---------------------------------------------------------------------------
# dict-backed map
# ---------------------------------------------------------------------------


class DictKeySet(Generic[K]):
    """Snapshot of a DictHashMap's keys, in insertion order."""

    def __init__(self, keys: list[K]) -> None:
        self._keys = keys

    def __iter__(self) -> Iterator[K]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)


class DictHashMap(Generic[K, V]):
    """HashMapLike over the builtin dict."""

    def __init__(self, capacity: int = 0) -> None:
        # dict sizes itself; the hint is kept for introspection only
        self.capacity = capacity
        self._data: dict[K, V] = {}

    def get(self, key: K) -> V | None:
        return self._data.get(key)

    def put(self, key: K, value: V) -> V | None:
        previous = self._data.get(key)
        self._data[key] = value
        return previous

    def key_set(self) -> DictKeySet[K]:
        return DictKeySet(list(self._data))

    def __len__(self) -> int:
        return len(self._data)


# ---------------------------------------------------------------------------
# From-scratch chained hash table
# ---------------------------------------------------------------------------


@dataclass
class _Node(Generic[K]):
    key: K
    prev: _Node[K] | None = None
    next: _Node[K] | None = None


class LinkedKeySet(Generic[K]):
    """Doubly linked list of keys; iterates head to tail."""

    def __init__(self) -> None:
        self.head: _Node[K] | None = None
        self.tail: _Node[K] | None = None
        self._size = 0

    def append(self, key: K) -> None:
        node = _Node(key, prev=self.tail)
        if self.tail is None:
            self.head = node
        else:
            self.tail.next = node
        self.tail = node
        self._size += 1

    def __iter__(self) -> Iterator[K]:
        node = self.head
        while node is not None:
            yield node.key
            node = node.next

    def __len__(self) -> int:
        return self._size


class ChainedHashMap(Generic[K, V]):
    """Separate-chaining hash table.

    Like many hand-written tables it indexes buckets with the raw hash code
    and refuses negative ones, which is why palette colours are wrapped in
    ``ColorKey`` before insertion.
    """

    def __init__(self, capacity: int = _MIN_BUCKETS) -> None:
        n = max(_MIN_BUCKETS, min(int(capacity), _MAX_INITIAL_BUCKETS))
        self._buckets: list[list[tuple[K, V]]] = [[] for _ in range(n)]
        self._keys: LinkedKeySet[K] = LinkedKeySet()
        self._size = 0

    def _index(self, key: K, n_buckets: int) -> int:
        h = hash(key)
        if h < 0:
            raise ValueError(f"negative hash code {h} for key {key!r}")
        return h % n_buckets

    def get(self, key: K) -> V | None:
        bucket = self._buckets[self._index(key, len(self._buckets))]
        for k, v in bucket:
            if k == key:
                return v
        return None

    def put(self, key: K, value: V) -> V | None:
        bucket = self._buckets[self._index(key, len(self._buckets))]
        for i, (k, v) in enumerate(bucket):
            if k == key:
                bucket[i] = (key, value)
                return v
        bucket.append((key, value))
        self._keys.append(key)
        self._size += 1
        if self._size > _LOAD_FACTOR * len(self._buckets):
            self._grow()
        return None

    def key_set(self) -> LinkedKeySet[K]:
        return self._keys

    def _grow(self) -> None:
        n = len(self._buckets) * 2
        buckets: list[list[tuple[K, V]]] = [[] for _ in range(n)]
        for bucket in self._buckets:
            for k, v in bucket:
                buckets[self._index(k, n)].append((k, v))
        self._buckets = buckets

    @property
    def bucket_count(self) -> int:
        return len(self._buckets)

    def __len__(self) -> int:
        return self._size
