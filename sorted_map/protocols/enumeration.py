"""
Step-at-a-time traversal of a SortedMap.

reduce() walks the map's pairs in order and lets the reducing function decide after every pair
whether to continue, halt, or suspend. A suspended traversal hands back a continuation that picks
up at the next unvisited position, which is how zip_pairs() walks a map in lockstep with another
iterable without building a list first.
"""
import logging

from collections.abc import Callable, Iterable
from itertools import islice
from typing import Any, Literal

# Internal imports
from sorted_map.protocols.collect import as_pairs

# Commands passed to reduce() and returned by the reducing function
CONT: Literal["cont"] = "cont"
HALT: Literal["halt"] = "halt"
SUSPEND: Literal["suspend"] = "suspend"

# Results returned by reduce()
DONE: Literal["done"] = "done"
HALTED: Literal["halted"] = "halted"
SUSPENDED: Literal["suspended"] = "suspended"


def _reduce_from(keys: tuple, lookup: Callable, index: int, command: tuple, fun: Callable) -> tuple:
    while True:
        tag, acc = command

        if tag == HALT:
            return HALTED, acc

        if tag == SUSPEND:
            # Default argument pins the position the continuation resumes from
            def continuation(next_command: tuple, _index: int = index) -> tuple:
                return _reduce_from(keys, lookup, _index, next_command, fun)
            return SUSPENDED, acc, continuation

        if tag != CONT:
            raise ValueError(f"ERR unknown reduce command: {tag!r}")

        if index >= len(keys):
            return DONE, acc

        key = keys[index]
        index += 1
        command = fun((key, lookup(key)), acc)


def reduce(sorted_map, command: tuple, fun: Callable[[tuple, Any], tuple]) -> tuple:
    """
    Reduce the map's (key, value) pairs in order.

    Args:
        sorted_map (SortedMap): The map to traverse.
        command (tuple): (CONT, acc), (HALT, acc) or (SUSPEND, acc).
        fun (Callable): Called as fun(pair, acc) and must return the next command.

    Returns:
        (DONE, acc) when every pair was visited,
        (HALTED, acc) when a HALT command was given,
        (SUSPENDED, acc, continuation) when a SUSPEND command was given.
        Call continuation(command) to resume from the next unvisited pair.
    """
    return _reduce_from(sorted_map.keys(), sorted_map.__getitem__, 0, command, fun)


def count(sorted_map) -> int:
    """
    Number of pairs, read from the value store instead of walking the map.
    """
    return len(sorted_map)


def member(sorted_map, pair) -> bool:
    """
    Check if a (key, value) pair is in the map with a single lookup.
    """
    return pair in sorted_map


def to_list(sorted_map) -> list[tuple]:
    def step(pair, acc):
        acc.append(pair)
        return CONT, acc

    _, result = reduce(sorted_map, (CONT, []), step)
    return result


def find(sorted_map, predicate: Callable[[tuple], bool], default=None):
    """
    Return the first pair for which predicate is true, or default. Stops at the first match.
    """
    def step(pair, acc):
        if predicate(pair):
            return HALT, pair
        return CONT, acc

    _, result = reduce(sorted_map, (CONT, default), step)
    return result


def any_pair(sorted_map, predicate: Callable[[tuple], bool]) -> bool:
    def step(pair, acc):
        return (HALT, True) if predicate(pair) else (CONT, False)

    _, result = reduce(sorted_map, (CONT, False), step)
    return result


def all_pairs(sorted_map, predicate: Callable[[tuple], bool]) -> bool:
    def step(pair, acc):
        return (CONT, True) if predicate(pair) else (HALT, False)

    _, result = reduce(sorted_map, (CONT, True), step)
    return result


def take(sorted_map, amount: int) -> list[tuple]:
    """
    First `amount` pairs. Does not visit the pairs after them.
    """
    if amount <= 0:
        return []

    def step(pair, acc):
        acc.append(pair)
        return (HALT, acc) if len(acc) >= amount else (CONT, acc)

    _, result = reduce(sorted_map, (CONT, []), step)
    return result


def zip_pairs(sorted_map, other: Iterable) -> list[tuple]:
    """
    Pair up the map's (key, value) pairs with the items of another iterable, stopping at the shorter one.

    The map is suspended after every pair while the next item is pulled from other, so neither side
    is walked further than needed.
    """
    other_iter = iter(other)
    zipped: list[tuple] = []

    # Suspend after every pair so we can pull from other in between
    result = reduce(sorted_map, (SUSPEND, None), lambda pair, acc: (SUSPEND, pair))

    while result[0] == SUSPENDED:
        _, pair, continuation = result

        if pair is not None:
            try:
                item = next(other_iter)
            except StopIteration:
                logging.debug(f"zip_pairs stopped after {len(zipped)} pairs, other iterable exhausted")
                break
            zipped.append((pair, item))

        result = continuation((CONT, None))

    return zipped


def concat(*sources: Iterable) -> list[tuple]:
    """
    All pairs of all sources, one after another, as a plain list (duplicates are kept).
    """
    pairs: list[tuple] = []
    for source in sources:
        pairs.extend(as_pairs(source))
    return pairs


def slice_pairs(sorted_map, start: int, length: int, step: int = 1) -> list[tuple]:
    """
    Return `length` pairs starting at position `start`, taking every `step`-th one.

    Positions past the end are ignored, so out-of-range slices give an empty list instead of an error.
    """
    if start < 0 or length <= 0 or step <= 0 or start >= len(sorted_map):
        logging.debug(f"Empty slice for start={start}, length={length}, step={step} on {len(sorted_map)} pairs")
        return []

    stop: int = start + length * step
    keys = islice(sorted_map.keys(), start, stop, step)
    return [(key, sorted_map[key]) for key in keys]
