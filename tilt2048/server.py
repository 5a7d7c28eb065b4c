import os
import random

import numpy as np
from flask import Flask, request, jsonify
from flask_cors import CORS

from tilt2048.board import Tile
from tilt2048.game import Model, BOARD_SIZE, MAX_SIZE

HOST = os.environ.get("TILT2048_HOST", "0.0.0.0")
PORT = int(os.environ.get("TILT2048_PORT", "5000"))


def spawn_random_tile(model):
    """Places a 2 (90%) or a 4 (10%) on a random empty cell. Returns the tile or None."""
    empty_cells = list(zip(*np.where(model.values() == 0)))
    if not empty_cells:
        return None

    row, col = random.choice(empty_cells)
    tile = Tile(2 if random.random() < 0.9 else 4, int(col), int(row))
    model.add_tile(tile)
    return tile


def json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeError("Request body must be a JSON object")
    return data


def game_state(model):
    return {
        'board': model.values().tolist(),
        'score': model.score,
        'max_score': model.max_score,
        'game_over': model.game_over(),
    }


app = Flask(__name__)
CORS(app, resources={r"/*": {"origins": "*"}})

model = Model(BOARD_SIZE)


@app.route('/new-game', methods=['POST'])
def new_game():
    """Endpoint for starting a new game with two random tiles, keeping the best score."""
    global model
    try:
        size = int(json_body().get('size', model.size))
        if not 2 <= size <= MAX_SIZE:
            raise ValueError(f"Board size must be between 2 and {MAX_SIZE}, got {size}")
        if size != model.size:
            model = Model.from_values(np.zeros((size, size), dtype=int), max_score=model.max_score)
        else:
            model.clear()
        spawn_random_tile(model)
        spawn_random_tile(model)
        return jsonify(game_state(model))
    except (ValueError, TypeError) as e:
        return jsonify({'error': str(e)}), 400


@app.route('/tilt', methods=['POST'])
def tilt():
    """Endpoint for tilting the board; a new tile appears when anything moved."""
    try:
        direction = json_body()['direction']
        changed = model.tilt(direction)
        if changed:
            spawn_random_tile(model)
        return jsonify({'changed': changed, **game_state(model)})
    except KeyError:
        return jsonify({'error': "Missing 'direction'"}), 400
    except (ValueError, TypeError) as e:
        return jsonify({'error': str(e)}), 400


@app.route('/add-tile', methods=['POST'])
def add_tile():
    """Endpoint for placing a tile of a given value on an empty cell."""
    try:
        data = json_body()
        model.add_tile(Tile(int(data['value']), int(data['col']), int(data['row'])))
        return jsonify(game_state(model))
    except KeyError as e:
        return jsonify({'error': f"Missing {e}"}), 400
    except (ValueError, TypeError, IndexError) as e:
        return jsonify({'error': str(e)}), 400


@app.route('/state', methods=['GET'])
def state():
    return jsonify(game_state(model))


if __name__ == '__main__':
    print(f"Board size {BOARD_SIZE}, new game ready")
    print(f"Server starting on http://{HOST}:{PORT}")
    app.run(host=HOST, port=PORT, debug=False)
