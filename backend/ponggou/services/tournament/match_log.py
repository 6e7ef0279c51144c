from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .enums import Mode, SideName


@dataclass(frozen=True)
class MatchRecord:
    id: int
    table_id: int
    mode: Mode
    side_a_player_ids: Tuple[int, ...]
    side_b_player_ids: Tuple[int, ...]
    winner_side: SideName
    final_score_a: int
    final_score_b: int
    timestamp: str
    forfeit: bool = False

    @property
    def winner_ids(self) -> Tuple[int, ...]:
        return self.side_a_player_ids if self.winner_side == SideName.A else self.side_b_player_ids

    @property
    def loser_ids(self) -> Tuple[int, ...]:
        return self.side_b_player_ids if self.winner_side == SideName.A else self.side_a_player_ids

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'table_id': self.table_id,
            'mode': self.mode.value,
            'side_a_player_ids': list(self.side_a_player_ids),
            'side_b_player_ids': list(self.side_b_player_ids),
            'winner_side': self.winner_side.value,
            'final_score_a': self.final_score_a,
            'final_score_b': self.final_score_b,
            'timestamp': self.timestamp,
            'forfeit': self.forfeit,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'MatchRecord':
        return cls(
            id=int(data['id']),
            table_id=int(data['table_id']),
            mode=Mode(data.get('mode') or Mode.SOLO.value),
            side_a_player_ids=tuple(int(p) for p in data.get('side_a_player_ids') or []),
            side_b_player_ids=tuple(int(p) for p in data.get('side_b_player_ids') or []),
            winner_side=SideName(data['winner_side']),
            final_score_a=int(data.get('final_score_a', 0)),
            final_score_b=int(data.get('final_score_b', 0)),
            timestamp=str(data.get('timestamp', '')),
            forfeit=bool(data.get('forfeit', False)),
        )


class MatchLog:
    """Append-only history of completed rounds."""

    def __init__(self, records: Optional[Sequence[MatchRecord]] = None):
        self._records: List[MatchRecord] = list(records or [])

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[MatchRecord]:
        return iter(self._records)

    @property
    def last(self) -> Optional[MatchRecord]:
        return self._records[-1] if self._records else None

    def append(self, table_id: int, mode: Mode, side_a_player_ids: Sequence[int],
               side_b_player_ids: Sequence[int], winner_side: SideName,
               final_score_a: int, final_score_b: int, forfeit: bool = False) -> MatchRecord:
        record = MatchRecord(
            id=len(self._records) + 1,
            table_id=table_id,
            mode=mode,
            side_a_player_ids=tuple(side_a_player_ids),
            side_b_player_ids=tuple(side_b_player_ids),
            winner_side=winner_side,
            final_score_a=final_score_a,
            final_score_b=final_score_b,
            timestamp=datetime.now(timezone.utc).isoformat(),
            forfeit=forfeit,
        )
        self._records.append(record)
        return record

    def to_records(self) -> List[Dict]:
        return [r.to_dict() for r in self._records]

    @classmethod
    def from_records(cls, records: Optional[List[Dict]]) -> 'MatchLog':
        return cls(MatchRecord.from_dict(r) for r in records or [])
