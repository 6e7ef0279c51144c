"""Session orchestrator: the single writer for tournament state.

Every public action takes the session lock, loads state on first use,
mutates roster/queue/tables/match log, persists all five records and then
notifies the listener. A round decided by a point is completed inside the
same action, so no other action can observe a table with a finished score.
"""
import logging
import threading
from functools import wraps
from typing import Any, Dict, List, NamedTuple, Optional, Tuple, Union

from .enums import Mode, SideName
from .errors import ActionResult, ErrorKind
from .match_log import MatchRecord
from .queue import UnitQueue, make_units
from .roster import Player
from .scoring import RoundResult, evaluate
from .state import TournamentState
from .store import Store
from .tables import Table, empty_tables, locate_player

logger = logging.getLogger(__name__)

Announcement = Tuple[str, str]


class PointOutcome(NamedTuple):
    result: RoundResult
    match: Optional[MatchRecord]


class TournamentListener:
    """Outward events; the presentation layer overrides what it needs."""

    def on_state_changed(self, state: Dict[str, Any]) -> None:
        pass

    def on_notify(self, message: str, severity: str) -> None:
        pass

    def on_round_decided(self, title: str, detail: str) -> None:
        pass


def exclusive(func):
    """Run an action under the session lock with state loaded."""
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            self._ensure_loaded()
            return func(self, *args, **kwargs)
    return wrapper


class TournamentSession:

    def __init__(self, store: Store, listener: Optional[TournamentListener] = None):
        self.store = store
        self.listener = listener or TournamentListener()
        self._lock = threading.RLock()
        self._state: Optional[TournamentState] = None

    # ---- state access ----

    @property
    def state(self) -> TournamentState:
        with self._lock:
            self._ensure_loaded()
            return self._state

    def _ensure_loaded(self) -> None:
        if self._state is None:
            self._state = TournamentState.from_records(self.store.load())
            logger.info(
                f"[load] players={len(self._state.roster)} queue={len(self._state.queue)} "
                f"matches={len(self._state.matches)} active={self._state.settings.session_active}"
            )

    def reload(self) -> TournamentState:
        with self._lock:
            self._state = None
            self._ensure_loaded()
            return self._state

    @exclusive
    def snapshot(self) -> Dict[str, Any]:
        return self._state.snapshot()

    @exclusive
    def ranking(self) -> List[Player]:
        return self._state.roster.ranking()

    # ---- internals ----

    def _commit(self) -> None:
        try:
            self.store.save(self._state.to_records())
        except Exception:
            # The cached state holds changes the store never accepted.
            self._state = None
            logger.error('[commit] save failed, state will reload from the store', exc_info=True)
            raise
        self.listener.on_state_changed(self._state.snapshot())

    def _reject(self, error: ErrorKind, message: str, severity: str = 'warning') -> ActionResult:
        logger.warning(f"[rejected] {error.value}: {message}")
        self.listener.on_notify(message, severity)
        return ActionResult.rejected(error, message)

    def _score_line(self, record: MatchRecord) -> str:
        names = self._state.roster.names
        return (
            f"{names(record.side_a_player_ids)} {record.final_score_a} - "
            f"{record.final_score_b} {names(record.side_b_player_ids)}"
        )

    def _seat_idle_sides(self) -> None:
        queue = self._state.queue
        for table in self._state.tables:
            for name, side in table.sides():
                if side.is_empty and len(queue):
                    side.seat(queue.dequeue())
                    logger.info(f"[seat] table={table.id} side={name.value} players={side.player_ids}")

    def _complete_round(self, table: Table, winner_name: SideName) -> Tuple[MatchRecord, Announcement]:
        state = self._state
        winner = table.side(winner_name)
        loser = table.side(winner_name.other)
        winner_ids = list(winner.player_ids)
        loser_ids = list(loser.player_ids)
        score_a, score_b = table.scores

        record = state.matches.append(
            table.id, table.mode, table.side_a.player_ids, table.side_b.player_ids,
            winner_name, score_a, score_b,
        )
        state.roster.record_win(winner_ids)
        state.roster.record_loss(loser_ids)

        # With an empty queue the loser comes straight back out.
        state.queue.enqueue(loser_ids)
        loser.seat(state.queue.dequeue())
        table.reset_scores()

        logger.info(
            f"[round_end] table={table.id} winner={winner_name.value} score={score_a}-{score_b} "
            f"match={record.id} next={loser.player_ids}"
        )
        title = f"Table {table.id}: {state.roster.names(winner_ids)} wins!"
        return record, (title, self._score_line(record))

    def _forfeit(self, table: Table, loser_name: SideName, removed_player_id: int) -> Announcement:
        state = self._state
        loser = table.side(loser_name)
        winner_name = loser_name.other
        winner = table.side(winner_name)
        score_a, score_b = table.scores

        # Recorded even when the winning side is empty.
        record = state.matches.append(
            table.id, table.mode, table.side_a.player_ids, table.side_b.player_ids,
            winner_name, score_a, score_b, forfeit=True,
        )
        state.roster.record_win(winner.player_ids)
        loser.seat(state.queue.dequeue())
        table.reset_scores()

        logger.info(
            f"[forfeit] table={table.id} removed={removed_player_id} winner={winner_name.value} "
            f"score={score_a}-{score_b} match={record.id}"
        )
        winner_label = state.roster.names(winner.player_ids) or f"Side {winner_name.value}"
        title = f"Table {table.id}: {winner_label} wins (by forfeit)!"
        return title, self._score_line(record)

    # ---- actions ----

    @exclusive
    def add_player(self, name: str) -> ActionResult:
        state = self._state
        result = state.roster.add(name)
        if not result.ok:
            return self._reject(result.error, result.message)
        player = result.value
        state.queue.enqueue([player.id])
        if state.settings.session_active:
            self._seat_idle_sides()
        logger.info(f"[player_add] id={player.id} name={player.name!r}")
        self._commit()
        self.listener.on_notify(f'Player "{player.name}" added to the queue', 'success')
        return result

    @exclusive
    def remove_player(self, player_id: int) -> ActionResult:
        state = self._state
        player = state.roster.get(player_id)
        if player is None:
            return self._reject(ErrorKind.PLAYER_NOT_FOUND, f'Player {player_id} not found')

        announcement = None
        message = 'Player removed.'
        found = locate_player(state.tables, player_id)
        if found:
            table, side_name = found
            side = table.side(side_name)
            if len(side.player_ids) == 1:
                announcement = self._forfeit(table, side_name, player_id)
                message = 'Player removed and the table processed the forfeit.'
            else:
                side.player_ids = [pid for pid in side.player_ids if pid != player_id]
                message = 'Player removed from the table.'
        state.queue.remove_member(player_id)
        state.roster.discard(player_id)

        logger.info(f"[player_remove] id={player_id} name={player.name!r} on_table={bool(found)}")
        self._commit()
        if announcement:
            self.listener.on_round_decided(*announcement)
        self.listener.on_notify(message, 'warning')
        return ActionResult.success(player, message)

    @exclusive
    def start_session(self, mode: Optional[Union[Mode, str]] = None) -> ActionResult:
        state = self._state
        try:
            mode = Mode(mode) if mode is not None else state.settings.mode
        except ValueError:
            return self._reject(ErrorKind.INVALID_MODE, f'Unknown mode {mode!r}')
        if state.settings.session_active:
            return self._reject(ErrorKind.SESSION_ALREADY_ACTIVE, 'A session is already running')
        if len(state.roster) < mode.min_players:
            return self._reject(
                ErrorKind.INSUFFICIENT_PLAYERS,
                f'You need at least {mode.min_players} players for {mode.label} mode',
                severity='error',
            )

        state.settings.mode = mode
        state.settings.session_active = True
        units = make_units(state.roster.ids(), mode.unit_size)
        state.tables = empty_tables(mode)
        seats = [side for table in state.tables for _, side in table.sides()]
        for side, unit in zip(seats, units):
            side.seat(unit)
        state.queue = UnitQueue(units[len(seats):])

        logger.info(f"[session_start] mode={mode.value} units={len(units)} queued={len(state.queue)}")
        self._commit()
        self.listener.on_notify(f'Session started in {mode.label} mode!', 'success')
        return ActionResult.success(state.snapshot())

    @exclusive
    def set_mode(self, mode: Union[Mode, str]) -> ActionResult:
        state = self._state
        try:
            mode = Mode(mode)
        except ValueError:
            return self._reject(ErrorKind.INVALID_MODE, f'Unknown mode {mode!r}')
        if state.settings.session_active:
            return self._reject(ErrorKind.SESSION_ALREADY_ACTIVE, 'Mode cannot change while a session is running')
        state.settings.mode = mode
        for table in state.tables:
            table.mode = mode
        self._commit()
        return ActionResult.success(mode)

    @exclusive
    def set_show_ranking(self, show: bool) -> ActionResult:
        self._state.settings.show_ranking = bool(show)
        self._commit()
        return ActionResult.success(self._state.settings.show_ranking)

    @exclusive
    def score_point(self, table_id: int, side: Union[SideName, str]) -> ActionResult:
        state = self._state
        table = state.table(table_id)
        try:
            side_name = SideName(side)
        except ValueError:
            side_name = None
        if table is None or side_name is None:
            return self._reject(ErrorKind.INVALID_TABLE_OR_SIDE, f'Unknown table {table_id} or side {side}')
        if table.side(side_name).is_empty:
            return self._reject(ErrorKind.EMPTY_SIDE_SCORING, f'Table {table.id} side {side_name.value} is empty')
        if table.side(side_name.other).is_empty:
            return self._reject(ErrorKind.EMPTY_SIDE_SCORING, f'Table {table.id} side {side_name.value} has no opponent')

        shutout_entered = table.add_point(side_name)
        result = evaluate(*table.scores)
        record, announcement = None, None
        if result is not RoundResult.NONE:
            record, announcement = self._complete_round(table, SideName(result.value))

        self._commit()
        if shutout_entered:
            self.listener.on_notify('Shutout! 4-0', 'warning')
        if announcement:
            self.listener.on_round_decided(*announcement)
        return ActionResult.success(PointOutcome(result, record))

    @exclusive
    def reset_all(self) -> ActionResult:
        self.store.clear()
        self._state = TournamentState()
        logger.info('[reset] all tournament data cleared')
        self.listener.on_state_changed(self._state.snapshot())
        self.listener.on_notify('Data reset', 'warning')
        return ActionResult.success()
