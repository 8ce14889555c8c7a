"""
Nested access through a path of keys.

Every level of the path may be a SortedMap or a plain mapping. Nothing is changed in place:
SortedMaps return new maps and plain mappings are copied into a new dict before writing.
Writing to a missing last key inserts it (at the end of a SortedMap, exactly like put).
"""
import logging

from collections.abc import Callable, Mapping, Sequence
from typing import Any

# Internal imports
from sorted_map.sorted_map import SortedMap, KeyNotFoundError, NOT_FOUND, POP
from sorted_map.utils.error_strings import EMPTY_KEY_PATH


def _check_container(data, key) -> None:
    if not isinstance(data, (SortedMap, Mapping)):
        logging.info(f"Cannot access key {key!r} on non-map value {data!r}")
        raise TypeError(f"ERR cannot access key {key!r} on {type(data).__name__}")


def _fetch(data, key):
    _check_container(data, key)
    if isinstance(data, SortedMap):
        return data.fetch(key)
    return data[key] if key in data else NOT_FOUND


def _put(data, key, value):
    if isinstance(data, SortedMap):
        return data.put(key, value)
    new_data = dict(data)
    new_data[key] = value
    return new_data


def _pop(data, key) -> tuple[Any, Any]:
    _check_container(data, key)
    if isinstance(data, SortedMap):
        return data.pop(key)
    if key not in data:
        return None, data
    new_data = dict(data)
    value = new_data.pop(key)
    return value, new_data


def _get_and_update(data, key, fun: Callable) -> tuple[Any, Any]:
    _check_container(data, key)
    if isinstance(data, SortedMap):
        return data.get_and_update(key, fun)

    result = fun(data.get(key))
    if result is POP:
        return _pop(data, key)

    get_value, new_value = result
    return get_value, _put(data, key, new_value)


def _split_path(path: Sequence) -> tuple[Any, Sequence]:
    if len(path) == 0:
        raise ValueError(EMPTY_KEY_PATH)
    return path[0], path[1:]


def get_in(data, path: Sequence, default=None):
    """
    Return the value at the end of the key path, or default if any key along the way is missing.
    """
    for key in path:
        if not isinstance(data, (SortedMap, Mapping)):
            return default
        data = _fetch(data, key)
        if data is NOT_FOUND:
            return default
    return data


def get_and_update_in(data, path: Sequence, fun: Callable[[Any], Any]) -> tuple[Any, Any]:
    """
    Apply get_and_update at the end of the key path and rebuild every level above it.

    Raises KeyNotFoundError if an intermediate key is missing.
    """
    key, rest = _split_path(path)

    if len(rest) == 0:
        return _get_and_update(data, key, fun)

    child = _fetch(data, key)
    if child is NOT_FOUND:
        logging.info(f"Missing intermediate key {key!r} in key path {list(path)!r}")
        raise KeyNotFoundError(key, repr(data))

    get_value, new_child = get_and_update_in(child, rest, fun)
    return get_value, _put(data, key, new_child)


def put_in(data, path: Sequence, value):
    _, new_data = get_and_update_in(data, path, lambda current: (current, value))
    return new_data


def update_in(data, path: Sequence, fun: Callable[[Any], Any]):
    """
    Replace the value at the end of the key path with fun(current value).

    fun receives None when the last key is missing.
    """
    _, new_data = get_and_update_in(data, path, lambda current: (current, fun(current)))
    return new_data


def pop_in(data, path: Sequence) -> tuple[Any, Any]:
    """
    Remove the value at the end of the key path and return (value, new data).

    If any key along the way is missing, or any level is not a map, return (None, data) unchanged.
    """
    key, rest = _split_path(path)

    if not isinstance(data, (SortedMap, Mapping)):
        logging.debug(f"pop_in reached non-map value at key {key!r}")
        return None, data

    if len(rest) == 0:
        return _pop(data, key)

    child = _fetch(data, key)
    if child is NOT_FOUND or not isinstance(child, (SortedMap, Mapping)):
        return None, data

    value, new_child = pop_in(child, rest)
    return value, _put(data, key, new_child)
