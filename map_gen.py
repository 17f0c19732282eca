"""
Map generation module for local play and tests.
Builds point-symmetric boards of scrap heights with Perlin noise, the way
contest maps look: grass patches, ridges of tall scrap, mirrored halves.
"""

import random
from typing import List, Optional, Tuple

import numpy as np
from noise import pnoise2

from models import CellState, Coordinate, Owner, Snapshot
from state import load_config

START_UNITS = 1


def generate_scrap_grid(
    width: int,
    height: int,
    seed: int,
    grass_share: Optional[float] = None,
    frequency: Optional[float] = None,
    max_scrap: Optional[int] = None
) -> np.ndarray:
    """
    Generate scrap amounts for every cell.

    Noise is sampled for the whole board, then averaged with its 180-degree
    rotation so both players face the same terrain. The lowest grass_share
    of cells become grass (0), the rest are scaled to 1..max_scrap.

    Args:
        width: Board width
        height: Board height
        seed: Random seed for noise generation
        grass_share: Share of grass cells (default from config)
        frequency: Perlin frequency, lower = larger features (default from config)
        max_scrap: Highest scrap amount (default from config)

    Returns:
        Integer array indexed [y, x]
    """
    config = load_config()
    grass_share = config['grass_share'] if grass_share is None else grass_share
    frequency = config['noise_frequency'] if frequency is None else frequency
    max_scrap = config['max_scrap'] if max_scrap is None else max_scrap

    base = random.Random(seed).randint(0, 255)
    raw = np.array([
        [pnoise2(x / frequency, y / frequency, octaves=2, persistence=0.6,
                 lacunarity=2.5, base=base)
         for x in range(width)]
        for y in range(height)
    ])
    symmetric = (raw + np.rot90(raw, 2)) / 2

    low = np.quantile(symmetric, grass_share) if grass_share > 0 else symmetric.min()
    span = symmetric.max() - low
    scaled = (symmetric - low) / span if span > 0 else np.ones_like(symmetric)
    scrap = np.ceil(scaled * max_scrap).clip(1, max_scrap).astype(int)
    if grass_share > 0:
        scrap[symmetric <= low] = 0
    return scrap


def starting_patches(width: int, height: int) -> Tuple[List[Coordinate], List[Coordinate]]:
    """
    Starting cells for both players: a plus shape a quarter of the way in.

    Returns:
        (our cells on the left, opponent cells mirrored on the right)
    """
    cx, cy = width // 4, height // 2
    ours = [Coordinate(cx + dx, cy + dy) for dx, dy in [(0, 0), (1, 0), (-1, 0), (0, 1), (0, -1)]]
    ours = [c for c in ours if 0 <= c.x < width and 0 <= c.y < height]
    theirs = [Coordinate(width - 1 - c.x, height - 1 - c.y) for c in ours]
    return ours, theirs


def generate_snapshot(width: int, height: int, seed: int, matter: int = 10) -> Snapshot:
    """
    Generate a first-turn snapshot with both players placed.

    Starting cells are forced passable and the centre of each patch holds
    START_UNITS units.

    Args:
        width: Board width
        height: Board height
        seed: Random seed for reproducible generation
        matter: Starting matter for both players

    Returns:
        Snapshot ready to be applied to a session
    """
    scrap = generate_scrap_grid(width, height, seed)
    ours, theirs = starting_patches(width, height)
    owners = {c: Owner.ME for c in ours}
    owners.update({c: Owner.OPPONENT for c in theirs})
    centres = {ours[0], theirs[0]} if ours else set()

    rows = []
    for y in range(height):
        row = []
        for x in range(width):
            coordinate = Coordinate(x, y)
            amount = int(scrap[y, x])
            owner = owners.get(coordinate, Owner.NEUTRAL)
            if owner != Owner.NEUTRAL:
                amount = max(amount, 1)
            units = START_UNITS if coordinate in centres else 0
            row.append(CellState(
                scrap_amount=amount,
                owner=int(owner),
                units=units,
                recycler=0,
                can_build=int(owner == Owner.ME and units == 0),
                can_spawn=int(owner == Owner.ME),
                in_range_of_recycler=0,
            ))
        rows.append(row)

    return Snapshot(my_matter=matter, opponent_matter=matter, rows=rows)
