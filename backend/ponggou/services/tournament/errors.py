"""Typed rejections for tournament actions.

Expected conditions (bad names, not enough players, scoring an empty side)
never raise. Every action returns an ``ActionResult`` the caller checks;
a rejected action leaves the tournament state untouched.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    EMPTY_NAME = 'empty_name'
    DUPLICATE_NAME = 'duplicate_name'
    INSUFFICIENT_PLAYERS = 'insufficient_players'
    SESSION_ALREADY_ACTIVE = 'session_already_active'
    INVALID_TABLE_OR_SIDE = 'invalid_table_or_side'
    EMPTY_SIDE_SCORING = 'empty_side_scoring'
    PLAYER_NOT_FOUND = 'player_not_found'
    INVALID_MODE = 'invalid_mode'


@dataclass(frozen=True)
class ActionResult:
    ok: bool
    value: Any = None
    error: Optional[ErrorKind] = None
    message: str = ''

    @classmethod
    def success(cls, value: Any = None, message: str = '') -> 'ActionResult':
        return cls(ok=True, value=value, message=message)

    @classmethod
    def rejected(cls, error: ErrorKind, message: str) -> 'ActionResult':
        return cls(ok=False, error=error, message=message)
