from dataclasses import dataclass, asdict
from typing import Dict, Iterable, Iterator, List, Optional

from .errors import ActionResult, ErrorKind


@dataclass
class Player:
    id: int
    name: str
    wins: int = 0
    losses: int = 0

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> 'Player':
        return cls(
            id=int(data['id']),
            name=str(data['name']),
            wins=int(data.get('wins', 0)),
            losses=int(data.get('losses', 0)),
        )


class Roster:
    """Players in insertion order, keyed by id.

    ``last_id`` is the highest id ever issued. Ids are never reused, even
    after the newest player is deleted.
    """

    def __init__(self, players: Optional[Iterable[Player]] = None, last_id: int = 0):
        self._players: List[Player] = list(players or [])
        self.last_id = max([last_id] + [p.id for p in self._players])

    def __len__(self) -> int:
        return len(self._players)

    def __iter__(self) -> Iterator[Player]:
        return iter(self._players)

    def __contains__(self, player_id: int) -> bool:
        return self.get(player_id) is not None

    def get(self, player_id: int) -> Optional[Player]:
        for p in self._players:
            if p.id == player_id:
                return p
        return None

    def find_by_name(self, name: str) -> Optional[Player]:
        wanted = name.strip().lower()
        for p in self._players:
            if p.name.lower() == wanted:
                return p
        return None

    def next_id(self) -> int:
        return self.last_id + 1

    def add(self, name: str) -> ActionResult:
        name = (name or '').strip()
        if not name:
            return ActionResult.rejected(ErrorKind.EMPTY_NAME, 'Enter a valid name')
        if self.find_by_name(name):
            return ActionResult.rejected(ErrorKind.DUPLICATE_NAME, f'"{name}" already exists')
        player = Player(id=self.next_id(), name=name)
        self._players.append(player)
        self.last_id = player.id
        return ActionResult.success(player)

    def discard(self, player_id: int) -> bool:
        before = len(self._players)
        self._players = [p for p in self._players if p.id != player_id]
        return len(self._players) != before

    def ids(self) -> List[int]:
        return [p.id for p in self._players]

    def record_win(self, player_ids: Iterable[int]) -> None:
        for pid in player_ids:
            p = self.get(pid)
            if p:
                p.wins += 1

    def record_loss(self, player_ids: Iterable[int]) -> None:
        for pid in player_ids:
            p = self.get(pid)
            if p:
                p.losses += 1

    def name_of(self, player_id: int) -> str:
        p = self.get(player_id)
        return p.name if p else '?'

    def names(self, player_ids: Iterable[int]) -> str:
        return ' & '.join(self.name_of(pid) for pid in player_ids)

    def ranking(self) -> List[Player]:
        """Most wins first, fewer losses breaking ties."""
        return sorted(self._players, key=lambda p: (-p.wins, p.losses))

    def to_records(self) -> List[Dict]:
        return [p.to_dict() for p in self._players]

    @classmethod
    def from_records(cls, records: Optional[List[Dict]], last_id: int = 0) -> 'Roster':
        return cls((Player.from_dict(r) for r in (records or [])), last_id=last_id)
