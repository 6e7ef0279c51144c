"""Tournament domain services: scoring rule, roster, queue, tables and
the session orchestrator.

This package holds the rotation and scoring state machine. HTTP routes and
socket handlers call into ``TournamentSession``; nothing here depends on
how the state is displayed.
"""
from .enums import Mode, SideName
from .errors import ActionResult, ErrorKind
from .scoring import RoundResult, evaluate
from .session import PointOutcome, TournamentListener, TournamentSession
from .store import MemoryStore, SqlStore, Store

__all__ = [
    'ActionResult',
    'ErrorKind',
    'MemoryStore',
    'Mode',
    'PointOutcome',
    'RoundResult',
    'SideName',
    'SqlStore',
    'Store',
    'TournamentListener',
    'TournamentSession',
    'evaluate',
]
