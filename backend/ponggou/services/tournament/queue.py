from typing import Iterator, List, Optional, Sequence

Unit = List[int]


def make_units(player_ids: Sequence[int], size: int) -> List[Unit]:
    """Group ids in order; a trailing odd player forms a unit alone."""
    return [list(player_ids[i:i + size]) for i in range(0, len(player_ids), size)]


class UnitQueue:
    """FIFO of units waiting for a table side.

    A unit is a list of one or two player ids travelling together.
    """

    def __init__(self, units: Optional[Sequence[Sequence[int]]] = None):
        self._units: List[Unit] = [list(u) for u in (units or []) if u]

    def __len__(self) -> int:
        return len(self._units)

    def __iter__(self) -> Iterator[Unit]:
        return iter(self._units)

    def enqueue(self, unit: Sequence[int]) -> None:
        if unit:
            self._units.append(list(unit))

    def dequeue(self) -> Optional[Unit]:
        if not self._units:
            return None
        return self._units.pop(0)

    def remove_member(self, player_id: int) -> bool:
        touched = False
        remaining: List[Unit] = []
        for unit in self._units:
            if player_id in unit:
                touched = True
                unit = [pid for pid in unit if pid != player_id]
                if not unit:
                    continue
            remaining.append(unit)
        self._units = remaining
        return touched

    def member_ids(self) -> List[int]:
        return [pid for unit in self._units for pid in unit]

    def to_records(self) -> List[Unit]:
        return [list(u) for u in self._units]

    @classmethod
    def from_records(cls, records: Optional[list]) -> 'UnitQueue':
        # Older saves stored solo entries as bare ids.
        units = []
        for entry in records or []:
            if isinstance(entry, (list, tuple)):
                units.append([int(pid) for pid in entry])
            else:
                units.append([int(entry)])
        return cls(units)
