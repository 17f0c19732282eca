"""
Session state management for the grid territory bot.
Holds the board, the turn counter, the frozen zone and the per-turn frontier.

A session is built once from the board dimensions, updated from each turn's
snapshot, and thrown away when the game ends.
"""

from __future__ import annotations
import json
import os
import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from grid import Board
from models import Snapshot, Zone

if TYPE_CHECKING:
    from frontier import Frontier

CONFIG_PATH = os.path.join(os.path.dirname(__file__), 'config.json')

DEFAULT_CONFIG = {
    'game_turns': 200,
    'debug': False,
    'grass_share': 0.2,
    'noise_frequency': 6.0,
    'max_scrap': 10,
}


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load config.json merged over the defaults.

    Args:
        path: Alternative config file (default: config.json beside this module)

    Returns:
        Config dictionary; defaults are used if the file is missing or invalid
    """
    config = dict(DEFAULT_CONFIG)
    try:
        with open(path or CONFIG_PATH, 'r') as f:
            config.update(json.load(f))
    except (FileNotFoundError, json.JSONDecodeError):
        # Use defaults if config file is missing or invalid
        pass
    return config


@dataclass
class GameSession:
    """
    Everything the bot remembers between turns.

    Only the zone survives from one turn to the next; the frontier is
    recomputed from the board every turn.
    """
    board: Board
    turn: int = 0  # Turns read so far (first turn is 1)
    phase: str = 'read'  # Current phase: 'read', 'frontier', 'strategy', 'plan'
    my_matter: int = 0
    opponent_matter: int = 0
    zone: Optional[Zone] = None  # Frozen once assigned
    frontier: Optional[Frontier] = None  # Recomputed every turn
    config: Dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_CONFIG))
    log: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def width(self) -> int:
        return self.board.width

    @property
    def height(self) -> int:
        return self.board.height


def initialize_session(width: int, height: int, config: Optional[Dict[str, Any]] = None) -> GameSession:
    """
    Create a session for a width x height board.

    Args:
        width: Board width read at game start
        height: Board height read at game start
        config: Config dictionary (default: load_config())

    Returns:
        New GameSession with an empty board
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Board dimensions must be positive, got {width}x{height}")
    return GameSession(board=Board(width, height), config=config if config is not None else load_config())


def apply_snapshot(session: GameSession, snapshot: Snapshot) -> None:
    """Start a new turn: overwrite the board from the snapshot."""
    session.turn += 1
    session.phase = 'read'
    session.my_matter = snapshot.my_matter
    session.opponent_matter = snapshot.opponent_matter
    session.board.load(snapshot)
    session.frontier = None
    log_event(session, "Snapshot loaded", my_matter=snapshot.my_matter,
              opponent_matter=snapshot.opponent_matter)


def log_event(session: GameSession, event: str, **kwargs) -> None:
    """
    Add an event to the session log.

    Args:
        session: Current session
        event: Description of the event
        **kwargs: Additional event data to include
    """
    log_entry = {
        'turn': session.turn,
        'phase': session.phase,
        'event': event,
        **kwargs
    }
    session.log.append(log_entry)


def debug(session: GameSession, *items: Any) -> None:
    """Print items to stderr when debugging is enabled; stdout belongs to the judge."""
    if session.config.get('debug'):
        print(" | ".join(str(item) for item in items), file=sys.stderr)


def get_session_summary(session: GameSession) -> Dict[str, Any]:
    """
    Get a summary of the session for API responses.

    Args:
        session: Current session

    Returns:
        Dictionary with session summary information
    """
    frontier = session.frontier
    return {
        'width': session.width,
        'height': session.height,
        'turn': session.turn,
        'phase': session.phase,
        'my_matter': session.my_matter,
        'opponent_matter': session.opponent_matter,
        'zone': session.zone.value if session.zone else None,
        'wall': [[c.x, c.y] for c in frontier.wall] if frontier else [],
        'weak_points': [[c.x, c.y] for c in frontier.weak_points] if frontier else [],
    }
