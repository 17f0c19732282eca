"""
Per-turn action planning for the grid territory bot.

Runs the phases of a turn in order (zone, frontier, strategy, commands) on a
session whose board already holds the current snapshot. Three allocation
branches exist:

- Conquer with removals: send units (or single spawns) to the wall cells that
  must be cleared, build on the ones we already own.
- Conquer: spread all our units evenly over the weak wall cells.
- Expand: reinforce our half and grab its unclaimed cells one unit-stack each.

Every tie is broken by the board's x-major coordinate order.
"""

import math
from typing import Dict, List, Optional

from frontier import Frontier, assign_zone, compute_frontier, select_removal_targets
from grid import Board
from models import Cell, Coordinate, Strategy, Zone
from orders import Build, Command, Message, Move, Spawn
from state import GameSession, debug, log_event
from strategy import select_strategy


def plan_turn(session: GameSession) -> List[Command]:
    """
    Plan every command for the current turn.

    Args:
        session: Session with the current snapshot already applied

    Returns:
        Ordered commands, always starting with a message naming the strategy
    """
    board = session.board

    if session.zone is None:
        session.zone = assign_zone(board)
        log_event(session, f"Zone assigned: {session.zone.value}", zone=session.zone.value)

    session.phase = 'frontier'
    frontier = compute_frontier(board, session.zone)
    session.frontier = frontier
    log_event(session, f"Wall at column {frontier.column}",
              wall=len(frontier.wall), to_remove=len(frontier.to_remove),
              weak_points=len(frontier.weak_points))

    session.phase = 'strategy'
    strategy = select_strategy(board, frontier)
    log_event(session, f"Strategy selected: {strategy.value}", strategy=strategy.value)
    debug(session, strategy.value)

    session.phase = 'plan'
    commands: List[Command] = [Message(strategy.value)]

    if strategy == Strategy.CONQUER:
        targets = select_removal_targets(board, frontier.to_remove)
        if frontier.to_remove and targets:
            commands += plan_removals(board, frontier, session.zone, targets)
        else:
            commands += plan_conquer(board, frontier)
    else:
        commands += plan_expansion(board, frontier)

    log_event(session, f"Planned {len(commands)} commands", commands=len(commands))
    debug(session, *commands)
    return commands


def _nearest(board: Board, candidates: List[Cell], target: Coordinate) -> Optional[Cell]:
    """Closest candidate by path distance; the first one wins a tie."""
    if not candidates:
        return None
    return min(candidates, key=lambda cell: board.distance(cell.coordinate, target))


def plan_weak_point_spawns(board: Board, frontier: Frontier) -> List[Spawn]:
    """
    Spawn one unit per weak point on the nearest of our cells off the wall.

    Weak points sharing a nearest cell are merged into a single spawn.
    """
    wall = set(frontier.wall)
    sources = [cell for cell in board.cells() if cell.is_mine and cell.coordinate not in wall]

    counts: Dict[Coordinate, int] = {}
    for weak_point in frontier.weak_points:
        source = _nearest(board, sources, weak_point)
        if source is None:
            continue
        counts[source.coordinate] = counts.get(source.coordinate, 0) + 1

    return [Spawn(amount, coordinate) for coordinate, amount in counts.items()]


def plan_removals(board: Board, frontier: Frontier, zone: Zone, targets: List[Cell]) -> List[Command]:
    """
    Clear the wall cells that still need removing.

    Targets we already own are either vacated one column back towards our
    zone or built on. Every other target gets all units of the nearest free
    unit stack, or a single spawn when no stack is left.
    """
    commands: List[Command] = []
    step = -1 if zone == Zone.LEFT else 1

    owned = [cell for cell in targets if cell.is_mine]
    for cell in owned:
        if cell.units > 0:
            retreat = cell.coordinate.shifted(dx=step)
            if board.contains(retreat):
                commands.append(Move(cell.units, cell.coordinate, retreat))
        else:
            commands.append(Build(cell.coordinate))

    used = {cell.coordinate for cell in owned}
    available = [cell for cell in board.cells()
                 if cell.is_mine and cell.units > 0 and cell.coordinate not in used]
    spawners = [cell for cell in board.cells() if cell.is_mine and cell.can_spawn]

    for cell in targets:
        if cell.is_mine:
            continue
        source = _nearest(board, available, cell.coordinate)
        if source is not None:
            available.remove(source)
            commands.append(Move(source.units, source.coordinate, cell.coordinate))
            continue
        spawner = _nearest(board, spawners, cell.coordinate)
        if spawner is not None:
            commands.append(Spawn(1, spawner.coordinate))

    commands += plan_weak_point_spawns(board, frontier)
    return commands


def conquer_quota(total_units: int, weak_point_count: int) -> int:
    """Units each weak point should receive when spread evenly."""
    return math.ceil(total_units / weak_point_count)


def plan_conquer(board: Board, frontier: Frontier) -> List[Command]:
    """
    Spread our units over the weak points.

    The richest stacks are drained first, at most one quota per move, each
    move going to the weak point that has received the fewest units so far.
    """
    commands: List[Command] = []
    weak_points = frontier.weak_points

    stacks = sorted((cell for cell in board.cells() if cell.is_mine and cell.units > 0),
                    key=lambda cell: -cell.units)

    if weak_points and stacks:
        remaining = {cell.coordinate: cell.units for cell in stacks}
        assigned = {coordinate: 0 for coordinate in weak_points}
        quota = conquer_quota(sum(remaining.values()), len(weak_points))

        while stacks:
            source = stacks[0].coordinate
            if remaining[source] <= quota:
                stacks.pop(0)

            amount = min(remaining[source], quota)
            remaining[source] -= amount

            target = min(weak_points, key=lambda c: assigned[c])
            assigned[target] += amount
            commands.append(Move(amount, source, target))

    commands += plan_weak_point_spawns(board, frontier)
    return commands


def plan_expansion(board: Board, frontier: Frontier) -> List[Command]:
    """
    Reinforce our zone and send each unit stack to a distinct unclaimed cell.

    Targets with the most enemy units are claimed first.
    """
    commands: List[Command] = []
    columns = frontier.zone_range

    mine = [cell for cell in board.cells() if cell.is_mine and cell.coordinate.x in columns]
    for cell in mine:
        if not cell.in_fortification_range and cell.can_build:
            commands.append(Spawn(1, cell.coordinate))

    targets = sorted((cell for cell in board.cells()
                      if not cell.is_mine and not cell.is_grass and cell.coordinate.x in columns),
                     key=lambda cell: -cell.units)
    stacks = sorted((cell for cell in mine if cell.units > 0), key=lambda cell: -cell.units)

    pending = iter(targets)
    for cell in stacks:
        target = next(pending, None)
        if target is None:
            break
        commands.append(Move(cell.units, cell.coordinate, target.coordinate))

    return commands
