from flask import Flask, request, jsonify
from flask_cors import CORS
from state import initialize_session, apply_snapshot, get_session_summary, GameSession
from protocol import parse_turn, ProtocolError
from planner import plan_turn
from orders import format_commands, command_to_dict
from typing import Dict
import uuid

app = Flask(__name__)
CORS(app)  # Enable CORS for all routes
sessions: Dict[str, GameSession] = {}  # In-memory storage for bot sessions

@app.route('/api/session/new', methods=['POST'])
def new_session():
    """Create a bot session for a board of the given size."""
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({'error': 'Invalid JSON data'}), 400

        try:
            width = int(data['width'])
            height = int(data['height'])
        except (KeyError, ValueError, TypeError):
            return jsonify({'error': 'width and height must be integers'}), 400

        if width <= 0 or height <= 0:
            return jsonify({'error': 'width and height must be positive'}), 400

        session_id = str(uuid.uuid4())
        sessions[session_id] = initialize_session(width, height)

        return jsonify({'session_id': session_id})

    except Exception as e:
        return jsonify({'error': f'Failed to create session: {str(e)}'}), 500

@app.route('/api/session/<session_id>/turn', methods=['POST'])
def play_turn(session_id: str):
    """Apply a turn snapshot and return the planned commands."""
    try:
        if session_id not in sessions:
            return jsonify({'error': 'Session not found'}), 404

        session = sessions[session_id]

        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({'error': 'Invalid JSON data'}), 400

        try:
            snapshot = parse_turn(
                session.width,
                session.height,
                data.get('my_matter', 0),
                data.get('opponent_matter', 0),
                data.get('cells'),
            )
        except ProtocolError as e:
            return jsonify({'error': f'Invalid snapshot: {str(e)}'}), 400

        apply_snapshot(session, snapshot)
        commands = plan_turn(session)

        return jsonify({
            'turn': session.turn,
            'zone': session.zone.value,
            'strategy': commands[0].text,
            'commands': [command_to_dict(c) for c in commands],
            'line': format_commands(commands),
        })

    except Exception as e:
        return jsonify({'error': f'Failed to plan turn: {str(e)}'}), 500

@app.route('/api/session/<session_id>/state', methods=['GET'])
def get_session_state(session_id: str):
    """Retrieve the session summary for the given session ID."""
    try:
        if session_id not in sessions:
            return jsonify({'error': 'Session not found'}), 404

        return jsonify(get_session_summary(sessions[session_id]))

    except Exception as e:
        return jsonify({'error': f'Failed to retrieve session state: {str(e)}'}), 500

@app.route('/api/session/<session_id>/log', methods=['GET'])
def get_session_log(session_id: str):
    """Retrieve the full session log for analysis."""
    try:
        if session_id not in sessions:
            return jsonify({'error': 'Session not found'}), 404

        session = sessions[session_id]

        return jsonify({
            'session_id': session_id,
            'turn': session.turn,
            'log': session.log
        })

    except Exception as e:
        return jsonify({'error': f'Failed to retrieve session log: {str(e)}'}), 500

if __name__ == '__main__':
    app.run(debug=True)
