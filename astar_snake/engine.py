"""
Local game loop for testing strategies.

Plays the fixed-length snake variant the decision function is written for:
- n x n board, legal cells 1..n, (1,1) = bottom-left
- Every snake is exactly 4 segments and never grows
- Eating food scores a point; eaten food is replaced elsewhere
- Death on wall collision, body collision, or head-to-head (all heads die)
- Last snake alive wins; on timeout the single highest score wins

Strategies are called once per tick with the flat host encoding:
    strategy(n, snake, snake_num, other_snakes, food_num, foods, turn) -> code
"""

import logging
import random
from typing import Callable

from .grid import DEFAULT_BOARD_SIZE, DIRECTIONS, DIRECTION_NAMES, Point, in_bounds
from .obstacles import SNAKE_SEGMENTS
from .strategy import FALLBACK_MOVE

logger = logging.getLogger(__name__)

MoveFunc = Callable[..., int]

MAX_SNAKES = 4
MIN_BOARD_SIZE = 8


def create_snake(snake_id: str, index: int, n: int) -> dict:
    """Create a vertical snake for spawn slot index (0-3)."""
    x = 2 if index in (0, 3) else n - 1
    if index % 2 == 0:
        body = [Point(x, 4 - i) for i in range(SNAKE_SEGMENTS)]
    else:
        body = [Point(x, n - 3 + i) for i in range(SNAKE_SEGMENTS)]
    return {"id": snake_id, "body": body, "score": 0}


def flatten(points) -> list[int]:
    """Encode Points as a flat [x0, y0, x1, y1, ...] list."""
    flat = []
    for p in points:
        flat.extend((p.x, p.y))
    return flat


def spawn_food(board: dict, count: int = 1) -> None:
    """Spawn food on unoccupied squares."""
    n = board["size"]
    occupied = set(board["food"])
    for snake in board["snakes"]:
        occupied.update(snake["body"])

    free = [Point(x, y) for x in range(1, n + 1) for y in range(1, n + 1)
            if Point(x, y) not in occupied]
    for _ in range(min(count, len(free))):
        pos = random.choice(free)
        free.remove(pos)
        board["food"].append(pos)


def make_snapshot(board: dict, snake: dict, turn: int) -> tuple:
    """Build the positional arguments passed to a strategy."""
    others = [s for s in board["snakes"] if s["id"] != snake["id"]]
    other_flat = []
    for other in others:
        other_flat.extend(flatten(other["body"]))
    return (
        board["size"],
        flatten(snake["body"]),
        len(board["snakes"]),
        other_flat,
        len(board["food"]),
        flatten(board["food"]),
        turn,
    )


def collect_move(strategy: MoveFunc, snapshot: tuple, snake_id: str) -> int:
    try:
        move = strategy(*snapshot)
    except Exception:
        logger.warning("[%s] strategy raised, using default move", snake_id, exc_info=True)
        return FALLBACK_MOVE
    if not isinstance(move, int) or move not in DIRECTIONS:
        logger.debug("[%s] no move (%s), using default move", snake_id, move)
        return FALLBACK_MOVE
    return move


def run_game(
    strategies: dict[str, MoveFunc],
    size: int = DEFAULT_BOARD_SIZE,
    max_turns: int = 200,
    seed: int | None = None,
    food_count: int = 3,
    verbose: bool = False,
) -> dict:
    """
    Run a full game.

    Args:
        strategies: dict mapping snake_id -> strategy function
        size: board side length
        max_turns: turn limit
        seed: random seed for reproducibility
        food_count: food kept on the board
        verbose: print turn-by-turn state

    Returns:
        dict with winner, turns, death_reasons, scores, turn_log
    """
    if len(strategies) > MAX_SNAKES:
        raise ValueError(f"at most {MAX_SNAKES} snakes, got {len(strategies)}")
    if size < MIN_BOARD_SIZE:
        raise ValueError(f"board size must be at least {MIN_BOARD_SIZE}, got {size}")

    if seed is not None:
        random.seed(seed)

    board = {"size": size, "snakes": [], "food": []}
    for i, sid in enumerate(strategies):
        board["snakes"].append(create_snake(sid, i, size))

    # Centre food + random
    centre = Point(size // 2, size // 2)
    if food_count > 0 and all(centre not in s["body"] for s in board["snakes"]):
        board["food"].append(centre)
    spawn_food(board, food_count - len(board["food"]))

    scores = {sid: 0 for sid in strategies}
    death_reasons = {}
    turn_log = []

    for turn in range(max_turns):
        alive_snakes = board["snakes"]
        if len(alive_snakes) <= 1:
            break

        # Collect moves against the same snapshot
        moves = {}
        for snake in alive_snakes:
            snapshot = make_snapshot(board, snake, turn)
            moves[snake["id"]] = collect_move(strategies[snake["id"]], snapshot, snake["id"])

        if verbose:
            print(f"Turn {turn}: " + ", ".join(
                f"{sid}={DIRECTION_NAMES[m]}" for sid, m in moves.items()))

        # Apply moves - fixed length, so the tail always drops
        for snake in alive_snakes:
            new_head = snake["body"][0].step(moves[snake["id"]])
            snake["body"] = [new_head] + snake["body"][:SNAKE_SEGMENTS - 1]

        # Check deaths
        dead = {}
        heads = {}
        for snake in alive_snakes:
            head = snake["body"][0]
            heads.setdefault(head, []).append(snake["id"])

            # 1. Out of bounds
            if not in_bounds(size, head):
                dead[snake["id"]] = f"wall collision (turn {turn})"
                continue

            # 2. Body collisions (any segment behind a head)
            for other in alive_snakes:
                if head in other["body"][1:]:
                    dead[snake["id"]] = f"body collision with {other['id']} (turn {turn})"
                    break

        # 3. Head-to-head: every snake involved dies
        for head, ids in heads.items():
            if len(ids) > 1:
                for sid in ids:
                    dead.setdefault(sid, f"head-to-head (turn {turn})")

        for sid, reason in dead.items():
            logger.debug("%s died: %s", sid, reason)
        death_reasons.update(dead)
        board["snakes"] = [s for s in alive_snakes if s["id"] not in dead]

        # Check food consumption - only survivors eat
        eaten = 0
        for snake in board["snakes"]:
            head = snake["body"][0]
            if head in board["food"]:
                board["food"].remove(head)
                snake["score"] += 1
                scores[snake["id"]] = snake["score"]
                eaten += 1

        if eaten:
            spawn_food(board, eaten)

        turn_log.append({
            "turn": turn,
            "moves": dict(moves),
            "alive": [s["id"] for s in board["snakes"]],
            "deaths": dead,
        })

    # Determine winner
    alive = board["snakes"]
    if len(alive) == 1:
        winner = alive[0]["id"]
    elif len(alive) > 1:
        best = max(s["score"] for s in alive)
        leaders = [s["id"] for s in alive if s["score"] == best]
        winner = leaders[0] if len(leaders) == 1 else None
    else:
        winner = None  # All dead

    turns = turn_log[-1]["turn"] + 1 if turn_log else 0
    return {
        "winner": winner,
        "turns": turns,
        "death_reasons": death_reasons,
        "scores": scores,
        "turn_log": turn_log,
    }


def run_match(
    strategies: dict[str, MoveFunc],
    games: int = 5,
    seed_base: int | None = None,
    verbose: bool = False,
    **kwargs,
) -> dict:
    """
    Run a best-of-N match between strategies.

    Returns dict with per-strategy win counts, game results, and match winner.
    """
    wins = {sid: 0 for sid in strategies}
    results = []

    for i in range(games):
        seed = (seed_base + i) if seed_base is not None else None
        result = run_game(strategies, seed=seed, verbose=verbose, **kwargs)
        results.append(result)
        if result["winner"]:
            wins[result["winner"]] += 1

    match_winner = max(wins, key=wins.get) if any(wins.values()) else None
    return {
        "match_winner": match_winner,
        "wins": wins,
        "games": results,
        "total_games": games,
    }
