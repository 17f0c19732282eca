"""Shared test fixtures and helpers."""

import pytest

from models import CellState, Owner, Snapshot
from state import DEFAULT_CONFIG, apply_snapshot, initialize_session

ME = int(Owner.ME)
OPPONENT = int(Owner.OPPONENT)
NEUTRAL = int(Owner.NEUTRAL)


# --- Helper functions ---


def cell(scrap=1, owner=NEUTRAL, units=0, recycler=0, can_build=0, can_spawn=0, in_range=0):
    """One cell of judge input; passable and neutral unless told otherwise."""
    return CellState(
        scrap_amount=scrap,
        owner=int(owner),
        units=units,
        recycler=recycler,
        can_build=can_build,
        can_spawn=can_spawn,
        in_range_of_recycler=in_range,
    )


def make_snapshot(width, height, overrides=None, my_matter=10, opponent_matter=10):
    """Snapshot of a passable neutral board with some cells replaced by (x, y) key."""
    overrides = overrides or {}
    rows = [[overrides.get((x, y), cell()) for x in range(width)] for y in range(height)]
    return Snapshot(my_matter=my_matter, opponent_matter=opponent_matter, rows=rows)


def make_session(width, height, overrides=None):
    """Session with one snapshot applied, using default config."""
    session = initialize_session(width, height, dict(DEFAULT_CONFIG))
    apply_snapshot(session, make_snapshot(width, height, overrides))
    return session


def snapshot_lines(snapshot):
    """Judge text for one turn of a snapshot."""
    lines = [f"{snapshot.my_matter} {snapshot.opponent_matter}"]
    for row in snapshot.rows:
        lines.append(" ".join(
            f"{c.scrap_amount} {c.owner} {c.units} {c.recycler} {c.can_build} {c.can_spawn} {c.in_range_of_recycler}"
            for c in row
        ))
    return lines


# --- Fixtures ---


@pytest.fixture
def config():
    """Default config without touching config.json."""
    return dict(DEFAULT_CONFIG)


@pytest.fixture
def line_session():
    """4x1 board with five of our units on the far left."""
    return make_session(4, 1, {(0, 0): cell(owner=ME, units=5)})


@pytest.fixture
def api_client():
    """Flask test client."""
    from app import app

    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client
