from flask import Blueprint, jsonify, request, current_app
from ponggou import get_session
from ponggou.services.tournament import ErrorKind


tournament = Blueprint('tournament', __name__)

_STATUS_BY_ERROR = {
    ErrorKind.PLAYER_NOT_FOUND: 404,
    ErrorKind.SESSION_ALREADY_ACTIVE: 409,
}


def _rejection(result):
    status = _STATUS_BY_ERROR.get(result.error, 400)
    return jsonify({'error': result.message, 'code': result.error.value}), status


def _normalize_mode(raw):
    # The session rejects anything that is not a known mode.
    return str(raw or '').strip().lower()


def _state_payload():
    payload = get_session().snapshot()
    try:
        payload['announce_delay_ms'] = int(current_app.config.get('ROUND_ANNOUNCE_DELAY_MS', 0))
    except (TypeError, ValueError):
        payload['announce_delay_ms'] = 0
    return payload


@tournament.route('/state', methods=['GET'])
def get_state():
    return jsonify(_state_payload())


@tournament.route('/ranking', methods=['GET'])
def get_ranking():
    return jsonify([p.to_dict() for p in get_session().ranking()])


@tournament.route('/matches', methods=['GET'])
def get_matches():
    return jsonify(get_session().snapshot()['matches'])


@tournament.route('/players', methods=['POST'])
def add_player():
    data = request.get_json(silent=True) or {}
    result = get_session().add_player(str(data.get('name') or ''))
    if not result.ok:
        return _rejection(result)
    current_app.logger.info(f"[api] player added id={result.value.id}")
    return jsonify(result.value.to_dict()), 201


@tournament.route('/players/<int:player_id>', methods=['DELETE'])
def remove_player(player_id):
    result = get_session().remove_player(player_id)
    if not result.ok:
        return _rejection(result)
    return jsonify({'message': result.message, 'player': result.value.to_dict()})


@tournament.route('/session/start', methods=['POST'])
def start_session():
    data = request.get_json(silent=True) or {}
    mode = None
    if data.get('mode') is not None:
        mode = _normalize_mode(data.get('mode'))
    result = get_session().start_session(mode)
    if not result.ok:
        return _rejection(result)
    return jsonify(_state_payload())


@tournament.route('/mode', methods=['POST'])
def set_mode():
    data = request.get_json(silent=True) or {}
    result = get_session().set_mode(_normalize_mode(data.get('mode')))
    if not result.ok:
        return _rejection(result)
    return jsonify(_state_payload())


@tournament.route('/tables/<int:table_id>/point', methods=['POST'])
def score_point(table_id):
    data = request.get_json(silent=True) or {}
    side = str(data.get('side') or '').upper()
    result = get_session().score_point(table_id, side)
    if not result.ok:
        return _rejection(result)
    outcome = result.value
    return jsonify({
        'result': outcome.result.value,
        'match': outcome.match.to_dict() if outcome.match else None,
        'state': _state_payload(),
    })


@tournament.route('/ranking/visibility', methods=['POST'])
def set_ranking_visibility():
    data = request.get_json(silent=True) or {}
    result = get_session().set_show_ranking(bool(data.get('show')))
    return jsonify({'show_ranking': result.value})


@tournament.route('/reset', methods=['POST'])
def reset_all():
    get_session().reset_all()
    current_app.logger.info('[api] tournament reset')
    return jsonify(_state_payload())
