from ponggou.services.tournament import ErrorKind, SideName
from ponggou.services.tournament.queue import UnitQueue, make_units
from ponggou.services.tournament.roster import Roster
from ponggou.services.tournament.tables import Table


def test_add_trims_and_assigns_ids():
    roster = Roster()
    first = roster.add('  Alice ').value
    second = roster.add('Bob').value
    assert first.name == 'Alice'
    assert (first.id, second.id) == (1, 2)


def test_duplicate_name_is_case_insensitive():
    roster = Roster()
    roster.add('Alice')
    result = roster.add('ALICE')
    assert not result.ok
    assert result.error is ErrorKind.DUPLICATE_NAME
    assert len(roster) == 1


def test_blank_name_rejected():
    roster = Roster()
    result = roster.add('   ')
    assert result.error is ErrorKind.EMPTY_NAME
    assert len(roster) == 0


def test_ids_are_never_reused():
    roster = Roster()
    for name in ('A', 'B', 'C'):
        roster.add(name)
    roster.discard(3)
    assert roster.add('D').value.id == 4
    roster.discard(4)
    assert roster.add('E').value.id == 5


def test_last_id_never_below_live_maximum():
    players = Roster.from_records([{'id': 7, 'name': 'G'}], last_id=3)
    assert players.next_id() == 8
    assert Roster.from_records([], last_id=9).next_id() == 10


def test_ranking_orders_by_wins_then_losses():
    roster = Roster()
    a, b, c = (roster.add(n).value for n in ('A', 'B', 'C'))
    a.wins, a.losses = 1, 3
    b.wins, b.losses = 2, 0
    c.wins, c.losses = 1, 1
    assert [p.name for p in roster.ranking()] == ['B', 'C', 'A']
    assert roster.names([a.id, 99]) == 'A & ?'


def test_queue_fifo_and_partial_removal():
    queue = UnitQueue([[1, 2], [3]])
    queue.enqueue([4])
    assert queue.remove_member(2) is True
    assert queue.to_records() == [[1], [3], [4]]
    assert queue.remove_member(3) is True
    assert queue.to_records() == [[1], [4]]
    assert queue.remove_member(42) is False
    assert queue.dequeue() == [1]
    assert queue.dequeue() == [4]
    assert queue.dequeue() is None


def test_queue_loads_bare_ids_as_units():
    queue = UnitQueue.from_records([5, [6, 7]])
    assert queue.to_records() == [[5], [6, 7]]


def test_make_units_pairs_with_trailing_single():
    assert make_units([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]
    assert make_units([1, 2, 3], 1) == [[1], [2], [3]]


def test_serve_turn_armed_at_six_all_and_alternates():
    table = Table(id=1)
    table.side_a.score, table.side_b.score = 6, 5
    table.add_point(SideName.B)
    assert table.serving is SideName.A
    table.add_point(SideName.A)
    assert table.serving is SideName.B
    table.add_point(SideName.B)
    assert table.serving is SideName.A


def test_shutout_announced_once():
    table = Table(id=1)
    table.side_a.score = 3
    assert table.add_point(SideName.A) is True
    assert table.shutout_announced
    table.reset_scores()
    assert table.shutout_announced is False
