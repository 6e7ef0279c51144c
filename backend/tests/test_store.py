import json

import pytest
from sqlalchemy.exc import OperationalError

from ponggou import db, get_session
from ponggou.models import StoreEntry
from ponggou.services.tournament import Mode, SqlStore, Store, TournamentSession


def test_sql_store_load_empty(flask_app):
    assert SqlStore().load() == {}


def test_sql_store_round_trip(flask_app):
    store = SqlStore(prefix='t_')
    records = {
        'players': [{'id': 1, 'name': 'Ana', 'wins': 2, 'losses': 1}],
        'tables': [],
        'queue': [[1]],
        'matches': [],
        'settings': {'mode': 'duo', 'session_active': False, 'show_ranking': True},
    }
    store.save(records)
    assert store.load() == records

    records['queue'] = []
    store.save(records)
    assert StoreEntry.query.count() == 5
    assert json.loads(StoreEntry.query.filter_by(key='t_queue').first().value) == []

    store.clear()
    assert store.load() == {}


def test_session_restores_from_database(flask_app):
    session = get_session()
    for name in ('P1', 'P2', 'P3', 'P4', 'P5'):
        session.add_player(name)
    session.start_session(Mode.SOLO)
    session.score_point(1, 'A')

    fresh = TournamentSession(store=SqlStore())
    assert fresh.snapshot() == session.snapshot()


def test_legacy_scalar_queue_entries(flask_app):
    db.session.add(StoreEntry(key='pongGou_queue', value='[3, [4, 5]]'))
    db.session.commit()
    session = TournamentSession(store=SqlStore())
    assert session.state.queue.to_records() == [[3], [4, 5]]
    # Tables missing from the store fall back to two empty ones
    assert [t.id for t in session.state.tables] == [1, 2]


def test_failed_commit_rolls_back_and_reraises(flask_app, monkeypatch):
    store = SqlStore()

    def broken_commit():
        raise OperationalError('UPDATE store_entry', {}, Exception('database is locked'))

    monkeypatch.setattr(db.session, 'commit', broken_commit)
    with pytest.raises(OperationalError):
        store.save({'players': [], 'tables': [], 'queue': [], 'matches': [], 'settings': {}})
    monkeypatch.undo()

    assert store.load() == {}
    assert StoreEntry.query.count() == 0


def test_session_recovers_after_failed_commit(flask_app, monkeypatch):
    session = get_session()

    def broken_commit():
        raise OperationalError('UPDATE store_entry', {}, Exception('database is locked'))

    monkeypatch.setattr(db.session, 'commit', broken_commit)
    with pytest.raises(OperationalError):
        session.add_player('Alice')
    monkeypatch.undo()

    assert len(session.state.roster) == 0
    assert session.add_player('Alice').value.id == 1


def test_store_interface_is_abstract():
    with pytest.raises(TypeError):
        Store()
