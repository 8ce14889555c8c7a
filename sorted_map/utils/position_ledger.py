from collections.abc import Iterable, Iterator


class PositionLedger:
    """
    Ordered sequence of keys where each key appears at most once.

    This works because dictionaries in Python 3.7+ maintain insertion order, so ignore the values and just use the keys.
    Deleting from a dict is O(1) on average, so removing a key does not need a linear scan of a list.

    Keys are only ever appended at the tail. A key that is removed and added again goes to the tail.
    """
    __slots__ = ("positions",)

    def __init__(self, keys: Iterable | None = None):
        self.positions: dict = dict()
        if keys is not None:
            self.extend(keys)

    def append(self, key) -> bool:
        """
        Append a key at the tail if it's not already present.

        Return True if the key was appended, False if it was already there (its position is unchanged).
        """
        if key in self.positions:
            return False
        self.positions[key] = None
        return True

    def remove(self, key) -> bool:
        """
        Remove a key from the ledger if it exists.
        """
        if key in self.positions:
            del self.positions[key]
            return True
        return False

    def extend(self, keys: Iterable) -> None:
        """
        Append every key from the iterable, skipping keys that are already present.
        """
        for key in keys:
            self.append(key)

    def copy(self) -> "PositionLedger":
        new_ledger = PositionLedger()
        new_ledger.positions = self.positions.copy()
        return new_ledger

    def snapshot(self) -> tuple:
        """
        Immutable view of the current order
        """
        return tuple(self.positions)

    def __contains__(self, key) -> bool:
        return key in self.positions

    def __iter__(self) -> Iterator:
        return iter(self.positions)

    def __len__(self) -> int:
        return len(self.positions)

    def __eq__(self, other):
        """
        Two ledgers are equal if they hold the same keys in the same positions
        """
        if isinstance(other, PositionLedger):
            return len(self) == len(other) and all(a == b for a, b in zip(self.positions, other.positions))
        return NotImplemented

    def __repr__(self):
        return f"PositionLedger({list(self.positions)})"
