from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .enums import Mode, SideName
from .scoring import DEUCE_SCORE, is_deuce, is_shutout

TABLE_IDS = (1, 2)


@dataclass
class Side:
    player_ids: List[int] = field(default_factory=list)
    score: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.player_ids

    def seat(self, unit: Optional[Sequence[int]]) -> None:
        self.player_ids = list(unit or [])

    def to_dict(self) -> Dict:
        return {'player_ids': list(self.player_ids), 'score': self.score}

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> 'Side':
        data = data or {}
        return cls(
            player_ids=[int(pid) for pid in data.get('player_ids') or []],
            score=int(data.get('score', 0)),
        )


@dataclass
class Table:
    id: int
    mode: Mode = Mode.SOLO
    side_a: Side = field(default_factory=Side)
    side_b: Side = field(default_factory=Side)
    # Display-only: who serves during deuce, and whether 4-0 was announced.
    serving: Optional[SideName] = None
    shutout_announced: bool = False

    def side(self, name: SideName) -> Side:
        return self.side_a if name == SideName.A else self.side_b

    def sides(self) -> Tuple[Tuple[SideName, Side], Tuple[SideName, Side]]:
        return (SideName.A, self.side_a), (SideName.B, self.side_b)

    @property
    def scores(self) -> Tuple[int, int]:
        return self.side_a.score, self.side_b.score

    def locate(self, player_id: int) -> Optional[SideName]:
        for name, side in self.sides():
            if player_id in side.player_ids:
                return name
        return None

    def add_point(self, name: SideName) -> bool:
        """Add a point and update the serve turn.

        Returns True the first time the table enters a 4-0 shutout, so the
        caller can announce it once.
        """
        self.side(name).score += 1
        a, b = self.scores
        if a == DEUCE_SCORE and b == DEUCE_SCORE:
            self.serving = SideName.A
        elif a >= DEUCE_SCORE and b >= DEUCE_SCORE:
            self.serving = (self.serving or SideName.B).other
        else:
            self.serving = None

        if not is_shutout(a, b):
            self.shutout_announced = False
            return False
        if self.shutout_announced:
            return False
        self.shutout_announced = True
        return True

    def reset_scores(self) -> None:
        self.side_a.score = 0
        self.side_b.score = 0
        self.serving = None
        self.shutout_announced = False

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'mode': self.mode.value,
            'side_a': self.side_a.to_dict(),
            'side_b': self.side_b.to_dict(),
            'serving': self.serving.value if self.serving else None,
            'shutout_announced': self.shutout_announced,
        }

    def to_view(self) -> Dict:
        payload = self.to_dict()
        payload['deuce'] = is_deuce(*self.scores)
        return payload

    @classmethod
    def from_dict(cls, data: Dict) -> 'Table':
        serving = data.get('serving')
        return cls(
            id=int(data['id']),
            mode=Mode(data.get('mode') or Mode.SOLO.value),
            side_a=Side.from_dict(data.get('side_a')),
            side_b=Side.from_dict(data.get('side_b')),
            serving=SideName(serving) if serving else None,
            shutout_announced=bool(data.get('shutout_announced', False)),
        )


def empty_tables(mode: Mode = Mode.SOLO) -> List[Table]:
    return [Table(id=table_id, mode=mode) for table_id in TABLE_IDS]


def tables_from_records(records: Optional[List[Dict]], mode: Mode) -> List[Table]:
    tables = [Table.from_dict(r) for r in records or []]
    if sorted(t.id for t in tables) != list(TABLE_IDS):
        return empty_tables(mode)
    return sorted(tables, key=lambda t: t.id)


def locate_player(tables: Sequence[Table], player_id: int) -> Optional[Tuple[Table, SideName]]:
    for table in tables:
        name = table.locate(player_id)
        if name is not None:
            return table, name
    return None
