from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .enums import Mode
from .match_log import MatchLog
from .queue import UnitQueue
from .roster import Roster
from .tables import Table, empty_tables, tables_from_records

STORE_KEYS = ('players', 'tables', 'queue', 'matches', 'settings')


@dataclass
class Settings:
    mode: Mode = Mode.SOLO
    session_active: bool = False
    show_ranking: bool = False

    def to_dict(self) -> Dict:
        return {
            'mode': self.mode.value,
            'session_active': self.session_active,
            'show_ranking': self.show_ranking,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> 'Settings':
        data = data or {}
        return cls(
            mode=Mode(data.get('mode') or Mode.SOLO.value),
            session_active=bool(data.get('session_active', False)),
            show_ranking=bool(data.get('show_ranking', False)),
        )


@dataclass
class TournamentState:
    roster: Roster = field(default_factory=Roster)
    tables: List[Table] = field(default_factory=empty_tables)
    queue: UnitQueue = field(default_factory=UnitQueue)
    matches: MatchLog = field(default_factory=MatchLog)
    settings: Settings = field(default_factory=Settings)

    def table(self, table_id: Any) -> Optional[Table]:
        for t in self.tables:
            if t.id == table_id:
                return t
        return None

    def to_records(self) -> Dict[str, Any]:
        settings = self.settings.to_dict()
        settings['last_player_id'] = self.roster.last_id
        return {
            'players': self.roster.to_records(),
            'tables': [t.to_dict() for t in self.tables],
            'queue': self.queue.to_records(),
            'matches': self.matches.to_records(),
            'settings': settings,
        }

    @classmethod
    def from_records(cls, records: Optional[Dict[str, Any]]) -> 'TournamentState':
        records = records or {}
        settings = Settings.from_dict(records.get('settings'))
        # Older saves carry no counter; the roster falls back to its live maximum.
        last_id = int((records.get('settings') or {}).get('last_player_id', 0))
        return cls(
            roster=Roster.from_records(records.get('players'), last_id=last_id),
            tables=tables_from_records(records.get('tables'), settings.mode),
            queue=UnitQueue.from_records(records.get('queue')),
            matches=MatchLog.from_records(records.get('matches')),
            settings=settings,
        )

    def snapshot(self) -> Dict[str, Any]:
        """Serializable view for the presentation layer."""
        payload = self.to_records()
        payload['tables'] = [t.to_view() for t in self.tables]
        payload['ranking'] = [p.to_dict() for p in self.roster.ranking()]
        payload['min_players'] = self.settings.mode.min_players
        return payload
