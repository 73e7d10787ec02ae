from flask import Blueprint, jsonify

from culers.api import json_body
from culers.services import registry
from culers.services.votes import cast_vote, match_results

matches = Blueprint('matches', __name__)


@matches.route('/matches', methods=['GET'])
def list_matches():
    return jsonify([m.to_dict() for m in registry.list_matches()])


@matches.route('/matches', methods=['POST'])
def create_match():
    data = json_body()
    match = registry.create_match(
        data.get('date'),
        data.get('opponent'),
        home_away=data.get('home_away'),
        status=data.get('status'),
    )
    return jsonify({'ok': True, 'id': match.id}), 201


# Vote is an upsert keyed by (match_id, email)
@matches.route('/potm/<int:match_id>/vote', methods=['POST'])
def vote(match_id):
    data = json_body()
    cast_vote(match_id, data.get('name'), data.get('email'), data.get('player_id'))
    return jsonify({'ok': True})


@matches.route('/potm/<int:match_id>/results', methods=['GET'])
def results(match_id):
    return jsonify(match_results(match_id))
