from flask import Blueprint, jsonify

from culers.api import json_body
from culers.services import registry

players = Blueprint('players', __name__)


@players.route('', methods=['GET'])
def list_players():
    return jsonify([p.to_dict() for p in registry.list_players()])


@players.route('', methods=['POST'])
def create_player():
    data = json_body()
    player = registry.create_player(data.get('name'), data.get('club'), data.get('photo_url'))
    return jsonify({'ok': True, 'id': player.id}), 201


@players.route('/<int:player_id>/points', methods=['POST'])
def adjust_points(player_id):
    data = json_body()
    player = registry.adjust_points(player_id, delta=data.get('delta'), set_to=data.get('set'))
    return jsonify({'ok': True, 'id': player.id, 'total_points': player.total_points})
