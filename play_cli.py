"""
CLI play mode for the grid territory bot.

Default mode talks to the contest judge: board size once on stdin, then one
snapshot per turn, one command line per turn on stdout.

Demo mode generates a board locally, draws it and prints the first turn's
plan.

Usage:
    python play_cli.py
    python play_cli.py demo [seed] [width] [height]
"""

import sys
from typing import List, Optional, TextIO

from map_gen import generate_snapshot
from models import Coordinate, Owner
from orders import format_commands
from planner import plan_turn
from protocol import TokenReader, read_dimensions, read_turn
from state import GameSession, apply_snapshot, initialize_session, load_config

OWNER_CHAR = {
    Owner.ME: "m",
    Owner.OPPONENT: "o",
    Owner.NEUTRAL: ".",
}


# ---------------------------------------------------------------------------
# Judge loop
# ---------------------------------------------------------------------------


def run(stream_in: TextIO = sys.stdin, stream_out: TextIO = sys.stdout,
        config: Optional[dict] = None) -> int:
    """
    Play a whole game against the judge.

    Each turn is read completely before planning starts, and the command
    line is flushed before the next read.

    Returns:
        Number of turns played
    """
    config = config if config is not None else load_config()
    reader = TokenReader(stream_in)
    width, height = read_dimensions(reader)
    session = initialize_session(width, height, config)

    for _ in range(config['game_turns']):
        try:
            snapshot = read_turn(reader, width, height)
        except EOFError:
            break
        apply_snapshot(session, snapshot)
        commands = plan_turn(session)
        stream_out.write(format_commands(commands) + "\n")
        stream_out.flush()

    return session.turn


# ---------------------------------------------------------------------------
# ASCII Renderer
# ---------------------------------------------------------------------------


def render_board(session: GameSession) -> str:
    """
    Draw the board: '#' grass, 'F' fortification, digits for unit stacks,
    otherwise the owner ('m' ours, 'o' theirs, '.' neutral). The wall column
    is marked with '|' in the header.
    """
    board = session.board
    wall_x = session.frontier.column if session.frontier else None

    lines = ["    " + "".join("|" if x == wall_x else str(x % 10) for x in range(board.width))]
    for y in range(board.height):
        row = []
        for x in range(board.width):
            cell = board.get_cell(Coordinate(x, y))
            if cell.is_grass:
                row.append("#")
            elif cell.has_fortification:
                row.append("F")
            elif cell.units > 0:
                row.append(str(min(cell.units, 9)))
            else:
                row.append(OWNER_CHAR[cell.owner])
        lines.append(f"{y:3} " + "".join(row))
    return "\n".join(lines)


def demo(seed: int = 42, width: int = 16, height: int = 8) -> str:
    """Plan the first turn on a generated board and describe it."""
    session = initialize_session(width, height)
    apply_snapshot(session, generate_snapshot(width, height, seed))
    commands = plan_turn(session)

    return "\n".join([
        f"Seed {seed}, {width}x{height}, zone {session.zone.value}",
        render_board(session),
        "",
        format_commands(commands),
    ])


def main(argv: List[str]) -> None:
    if argv and argv[0] == "demo":
        try:
            numbers = [int(a) for a in argv[1:4]]
        except ValueError:
            print("Usage: python play_cli.py demo [seed] [width] [height]", file=sys.stderr)
            sys.exit(2)
        print(demo(*numbers))
        return
    run()


if __name__ == "__main__":
    main(sys.argv[1:])
