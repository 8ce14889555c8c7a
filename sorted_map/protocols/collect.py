import logging

from collections.abc import Callable, Iterable, Mapping

# Internal imports
from sorted_map.utils.error_strings import NOT_A_PAIR


def as_pairs(source) -> Iterable:
    """
    Return an iterable of (key, value) pairs for a source.

    Plain mappings are read through .items(). The resulting order is whatever the mapping yields,
    so do not rely on it for mappings that have no defined order.
    """
    if isinstance(source, Mapping):
        return source.items()
    return source


def split_pair(item) -> tuple:
    """
    Unpack a (key, value) pair. Only tuples and lists of length 2 count as pairs,
    so a 2-character string is not split into a key and a value.
    """
    if not (isinstance(item, (tuple, list)) and len(item) == 2):
        logging.info(f"Rejected non-pair item during ingestion: {item!r}")
        raise ValueError(NOT_A_PAIR.format(item=item))
    key, value = item
    return key, value


class Collector:
    """
    Folds (key, value) pairs into a private copy of a target map.

    Values are always overwritten as pairs arrive. Keys that the target did not hold before ingestion
    are remembered in first-seen order and only appended to the order when done() is called, so:
      1. Keys that were already present never move
      2. New keys appear in the order they were first seen
      3. A key seen several times keeps its first position and its last value

    The target itself is never touched; if ingestion stops half-way (halt() or an exception) nothing is visible.
    """

    def __init__(self, target):
        self.acc = target._copy()
        self.pending_keys: list = []
        self.pending_set = set()
        self.count: int = 0

    def push(self, item) -> None:
        key, value = split_pair(item)
        self.count += 1

        if not self.acc._has_position(key) and key not in self.pending_set:
            self.pending_keys.append(key)
            self.pending_set.add(key)

        self.acc._store_value(key, value)

    def done(self):
        self.acc._append_positions(self.pending_keys)
        logging.debug(f"Ingested {self.count} pairs, {len(self.pending_keys)} new keys")
        return self.acc

    def halt(self) -> None:
        logging.debug(f"Ingestion halted after {self.count} pairs")
        self.pending_keys = []
        self.pending_set = set()
        self.acc = None


def into(target, source, transform: Callable | None = None):
    """
    Return a new map holding the target's pairs plus every pair from source.

    If transform is given, it is applied to each element of source before it is ingested
    and must return a (key, value) pair.
    """
    collector = Collector(target)
    try:
        for item in as_pairs(source):
            collector.push(transform(item) if transform is not None else item)
    except BaseException:
        collector.halt()
        raise
    return collector.done()
