import logging

from collections.abc import Callable, Iterable, Iterator
from typing import Any

# Internal imports
from .render import render, parse_rendered
from .protocols.collect import as_pairs, into, split_pair
from .utils.error_strings import KEY_NOT_FOUND
from .utils.position_ledger import PositionLedger


class _Sentinel:
    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self):
        return self.name


# Returned by fetch() for a missing key, so a stored None is not mistaken for a missing key
NOT_FOUND = _Sentinel("NOT_FOUND")
# Returned from a get_and_update() function to remove the key
POP = _Sentinel("POP")


class KeyNotFoundError(KeyError):
    def __init__(self, key, rendered: str):
        self.key = key
        self.rendered = rendered
        self.message: str = KEY_NOT_FOUND.format(key=key, rendered=rendered)
        super().__init__(self.message)

    def __str__(self):
        # KeyError quotes its argument otherwise
        return self.message


def _incoming_wins(key, existing, incoming):
    return incoming


class SortedMap():
    """
    Map that enumerates its pairs in the order the keys were first inserted.

    Holds two structures that are kept in lockstep by the methods below:
      1. _values: dict of key -> value, used for every lookup
      2. _positions: PositionLedger of keys, used for every traversal

    Every method that changes the map returns a new SortedMap and leaves the original as it was.
    Overwriting a key keeps its position. A deleted key that is put again goes to the end.

    Note: Iterating yields (key, value) pairs, not keys. `pair in sorted_map` checks for a pair,
    use has_key() to check for a key.
    """
    __slots__ = ("_values", "_positions")

    def __init__(self, source: Iterable | None = None, transform: Callable | None = None):
        self._values: dict = {}
        self._positions = PositionLedger()

        if source is not None:
            ingested = into(self, source, transform)
            self._values = ingested._values
            self._positions = ingested._positions

    @classmethod
    def from_rendered(cls, text: str) -> "SortedMap":
        """
        Rebuild a map from the output of repr() / render()
        """
        return cls(parse_rendered(text, factory=cls))

    ############################################### Helpers ####################################################

    # Only ever called on a fresh copy that has not been handed out yet

    def _copy(self) -> "SortedMap":
        new_map = self.__class__.__new__(self.__class__)
        new_map._values = self._values.copy()
        new_map._positions = self._positions.copy()
        return new_map

    def _has_position(self, key) -> bool:
        return key in self._positions

    def _store_value(self, key, value) -> None:
        self._values[key] = value

    def _append_positions(self, keys: Iterable) -> None:
        self._positions.extend(keys)

    def _put_in_place(self, key, value) -> None:
        self._values[key] = value
        self._positions.append(key)

    def _remove_in_place(self, key) -> None:
        del self._values[key]
        self._positions.remove(key)

    ############################################### Insert / Update ############################################

    def put(self, key, value) -> "SortedMap":
        """
        Insert or overwrite a key.

        A new key goes to the end. An existing key keeps its position and only its value changes.

        Note: Each call copies the map, so building a large map with repeated put() is quadratic.
        Build it in one go with SortedMap(pairs) or into(), which copy once.
        """
        new_map = self._copy()
        new_map._put_in_place(key, value)
        logging.debug(f"put {key!r}, map now has {len(new_map)} keys")
        return new_map

    def put_new(self, key, value) -> "SortedMap":
        """
        Insert a key only if it is not in the map yet. Otherwise return the map unchanged.
        """
        if self.has_key(key):
            logging.debug(f"put_new skipped existing key {key!r}")
            return self
        return self.put(key, value)

    def put_new_lazy(self, key, value_fun: Callable[[], Any]) -> "SortedMap":
        """
        Same as put_new, but the value is computed by calling value_fun.

        value_fun is not called at all if the key already exists.
        """
        if self.has_key(key):
            logging.debug(f"put_new_lazy skipped existing key {key!r}")
            return self
        return self.put(key, value_fun())

    def update(self, key, default, update_fun: Callable[[Any], Any]) -> "SortedMap":
        """
        Replace the value of an existing key with update_fun(current value), keeping its position.

        If the key does not exist, default is inserted at the end (update_fun is not called).
        """
        if not self.has_key(key):
            return self.put(key, default)

        new_value = update_fun(self._values[key])
        new_map = self._copy()
        new_map._store_value(key, new_value)
        logging.debug(f"update {key!r} in place")
        return new_map

    def update_existing(self, key, update_fun: Callable[[Any], Any]) -> "SortedMap":
        """
        Same as update, but raise KeyNotFoundError if the key does not exist.
        """
        if not self.has_key(key):
            logging.info(f"update_existing on missing key: {key!r}")
            raise KeyNotFoundError(key, render(self))

        new_value = update_fun(self._values[key])
        new_map = self._copy()
        new_map._store_value(key, new_value)
        return new_map

    def merge(self, other, conflict_fun: Callable[[Any, Any, Any], Any] | None = None) -> "SortedMap":
        """
        Fold every pair of other (in other's order) into this map.

        Keys new to this map are appended in the order they come from other.
        Keys that already exist keep their position and get conflict_fun(key, existing, incoming).
        By default the incoming value wins.
        """
        if conflict_fun is None:
            conflict_fun = _incoming_wins

        new_map = self._copy()
        for item in as_pairs(other):
            key, value = split_pair(item)
            if new_map.has_key(key):
                new_map._store_value(key, conflict_fun(key, new_map._values[key], value))
            else:
                new_map._put_in_place(key, value)

        logging.debug(f"merge result has {len(new_map)} keys")
        return new_map

    ############################################### Remove ######################################################

    def delete(self, key) -> "SortedMap":
        """
        Remove a key. Return the map unchanged if the key does not exist.
        """
        if not self.has_key(key):
            logging.debug(f"delete of missing key {key!r} is a no-op")
            return self

        new_map = self._copy()
        new_map._remove_in_place(key)
        logging.debug(f"deleted {key!r}")
        return new_map

    def pop(self, key, default=None) -> tuple[Any, "SortedMap"]:
        """
        Remove a key and return (value, new map).

        Return (default, this map) if the key does not exist.
        """
        if not self.has_key(key):
            return default, self

        value = self._values[key]
        return value, self.delete(key)

    ############################################### Query #######################################################

    def has_key(self, key) -> bool:
        return key in self._values

    def get(self, key, default=None):
        return self._values.get(key, default)

    def keys(self) -> tuple:
        """
        Keys in insertion order
        """
        return self._positions.snapshot()

    def values(self) -> list:
        return [self._values[key] for key in self._positions]

    def items(self) -> list[tuple]:
        return list(self)

    def to_list(self) -> list[tuple]:
        return list(self)

    ############################################### Access ######################################################

    def fetch(self, key):
        """
        Return the value for key, or NOT_FOUND if the key does not exist.
        """
        if key in self._values:
            return self._values[key]
        return NOT_FOUND

    def get_and_update(self, key, fun: Callable[[Any], Any]) -> tuple[Any, "SortedMap"]:
        """
        Call fun with the current value (None if missing) and return (get_value, new map).

        fun returns either a (get_value, new_value) pair, which stores new_value under key
        (appending the key if it is new), or POP, which removes the key.
        """
        result = fun(self._values.get(key))

        if result is POP:
            return self.pop(key)

        get_value, new_value = result
        return get_value, self.put(key, new_value)

    def __getitem__(self, key):
        if key in self._values:
            return self._values[key]
        raise KeyNotFoundError(key, render(self))

    ############################################### Protocols ###################################################

    def __iter__(self) -> Iterator[tuple]:
        values = self._values
        for key in self._positions:
            yield key, values[key]

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, pair) -> bool:
        """
        Check if a (key, value) pair is in the map
        """
        if not (isinstance(pair, (tuple, list)) and len(pair) == 2):
            return False

        key, value = pair
        try:
            present = key in self._values
        except TypeError: # Unhashable key
            return False
        return present and self._values[key] == value

    def __eq__(self, other):
        """
        Equal to other maps with the same pairs in the same order
        """
        if isinstance(other, SortedMap):
            return self._positions == other._positions and self._values == other._values
        return NotImplemented

    __hash__ = None

    def __repr__(self):
        return render(self)
