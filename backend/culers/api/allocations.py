from flask import Blueprint, jsonify

from culers.api import json_body
from culers.services.allocations import submit_allocations
from culers.services.scoring import leaderboard

allocations = Blueprint('allocations', __name__)


@allocations.route('/allocate', methods=['POST'])
def allocate():
    data = json_body()
    user = submit_allocations(data.get('name'), data.get('email'), data.get('allocations'))
    return jsonify({'ok': True, 'user': user.to_dict()})


@allocations.route('/leaderboard', methods=['GET'])
def get_leaderboard():
    return jsonify(leaderboard())
