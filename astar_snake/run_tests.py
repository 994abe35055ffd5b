#!/usr/bin/env python3
"""
Match runner - pit the A* food seeker against the local opponents.

Usage:
    astar-snake                                  # best-of-5 against every opponent
    astar-snake --games 10 --opponent greedy     # single opponent
    astar-snake --search bfs                     # swap the search engine
    astar-snake --1v1v1v1                        # free-for-all
    astar-snake --verbose --seed 42              # turn-by-turn, reproducible
"""

import argparse
import logging
import sys
import time
from functools import partial

from . import engine
from .grid import DEFAULT_BOARD_SIZE
from .opponents import STRATEGIES
from .search import SEARCHES
from .strategy import greedy_snake_step

SEEKER_ID = "astar-seeker"


# ── Display helpers ───────────────────────────────────────────────

def print_banner(search_name: str, size: int):
    print("=" * 65)
    print("  ASTAR SNAKE - Local Match Runner")
    print(f"  Search: {search_name}   Board: {size}x{size}")
    print("=" * 65)
    print()


def print_match_result(opponent_name: str, result: dict):
    our_wins = result["wins"].get(SEEKER_ID, 0)
    opp_wins = result["wins"].get(opponent_name, 0)
    total = result["total_games"]

    if our_wins > opp_wins:
        status, color = "WIN", "\033[92m"
    elif our_wins < opp_wins:
        status, color = "LOSS", "\033[91m"
    else:
        status, color = "DRAW", "\033[93m"
    reset = "\033[0m"

    print(f"\n  vs {opponent_name}")
    print(f"  {color}{status}{reset}  {SEEKER_ID} {our_wins} - {opp_wins} {opponent_name}  ({total} games)")

    for i, game in enumerate(result["games"]):
        winner = game["winner"] or "draw"
        score_info = " ".join(f"{sid}={s}" for sid, s in game["scores"].items())
        death_info = "".join(f" [{sid}: {reason}]" for sid, reason in game["death_reasons"].items())
        print(f"    Game {i+1}: winner={winner:14s} turns={game['turns']:4d} {score_info}{death_info}")

    return our_wins, opp_wins


def run_ffa(strategies: dict, games: int, seed_base, game_kwargs: dict, verbose: bool):
    print("\n" + "-" * 65)
    print("  FREE-FOR-ALL: All strategies battle simultaneously")
    print("-" * 65)

    wins = {sid: 0 for sid in strategies}

    for i in range(games):
        seed = (seed_base + i) if seed_base is not None else None
        result = engine.run_game(strategies, seed=seed, verbose=verbose, **game_kwargs)
        if result["winner"]:
            wins[result["winner"]] += 1
        w = result["winner"] or "none"
        print(f"  Game {i+1}: winner={w:14s}  turns={result['turns']:4d}")
        for sid, reason in result["death_reasons"].items():
            print(f"           {sid}: {reason}")

    print(f"\n  FFA Results ({games} games):")
    ranked = sorted(wins.items(), key=lambda x: -x[1])
    for rank, (sid, w) in enumerate(ranked, 1):
        pct = w / games * 100
        bar = "#" * int(pct / 5)
        print(f"    {rank}. {sid:14s}  {w:2d} wins ({pct:5.1f}%)  {bar}")
    return wins


# ── Main ──────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="A* snake match runner")
    parser.add_argument("--size", type=int, default=DEFAULT_BOARD_SIZE,
                        help=f"Board side length (default: {DEFAULT_BOARD_SIZE})")
    parser.add_argument("--games", type=int, default=5, help="Games per match (default: 5)")
    parser.add_argument("--opponent", type=str, default=None,
                        choices=list(STRATEGIES.keys()),
                        help="Test against a single opponent")
    parser.add_argument("--search", type=str, default="astar",
                        choices=list(SEARCHES.keys()),
                        help="Search engine for our snake (default: astar)")
    parser.add_argument("--turns", type=int, default=200, help="Turn limit (default: 200)")
    parser.add_argument("--food", type=int, default=3, help="Food on the board (default: 3)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Turn-by-turn output")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--1v1v1v1", dest="ffa", action="store_true",
                        help="Free-for-all with all strategies")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.size < engine.MIN_BOARD_SIZE:
        print(f"  ERROR: board size must be at least {engine.MIN_BOARD_SIZE}")
        sys.exit(1)
    if args.games < 1:
        print("  ERROR: --games must be at least 1")
        sys.exit(1)

    print_banner(args.search, args.size)

    seeker = partial(greedy_snake_step, search=SEARCHES[args.search])
    game_kwargs = {"size": args.size, "max_turns": args.turns, "food_count": args.food}

    if args.opponent:
        opp_dict = {args.opponent: STRATEGIES[args.opponent]}
    else:
        opp_dict = dict(STRATEGIES)

    print(f"  Games per match: {args.games}")
    print(f"  Opponents: {', '.join(opp_dict.keys())}")
    if args.seed is not None:
        print(f"  Seed: {args.seed}")
    print()

    # FFA mode
    if args.ffa:
        all_strats = {SEEKER_ID: seeker}
        all_strats.update(opp_dict)
        run_ffa(all_strats, args.games, args.seed, game_kwargs, args.verbose)
        return

    # 1v1 matches
    total_our_wins = 0
    total_opp_wins = 0

    for opp_name, opp_fn in opp_dict.items():
        strategies = {SEEKER_ID: seeker, opp_name: opp_fn}

        print(f"\n{'─' * 65}")
        print(f"  Match: {SEEKER_ID} vs {opp_name}")
        print(f"{'─' * 65}")

        start = time.time()
        result = engine.run_match(
            strategies,
            games=args.games,
            seed_base=args.seed,
            verbose=args.verbose,
            **game_kwargs,
        )
        elapsed = time.time() - start

        ow, tw = print_match_result(opp_name, result)
        total_our_wins += ow
        total_opp_wins += tw
        print(f"  Time: {elapsed:.1f}s")

    total_games = total_our_wins + total_opp_wins
    print(f"\n{'=' * 65}")
    print("  OVERALL RESULTS")
    print(f"{'=' * 65}")
    print(f"  {SEEKER_ID} wins: {total_our_wins}/{total_games}  "
          f"({total_our_wins/max(total_games,1)*100:.1f}%)")
    print()


if __name__ == "__main__":
    main()
