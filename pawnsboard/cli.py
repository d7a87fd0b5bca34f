"""
Pawnsboard CLI - Command-line interface for the engine.

Usage:
    pawnsboard play [options]              Play a game in the terminal
    pawnsboard validate-deck <deck_file>   Check a deck file and list its cards
    pawnsboard export-deck [-o FILE]       Write the standard deck in deck file format

Either side of a game can be a bot (random, fillfirst, maxrow) or "human",
in which case moves are read from stdin as "CARD ROW COL" or "pass".
"""

import argparse
import logging
import sys

from .engine_core.action import Action
from .engine_core.board import Board
from .engine_core.state import Side


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Pawnsboard - Influence Board Game Engine",
        prog="pawnsboard",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default WARNING)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument("--rows", type=int, help="Board height")
    play_parser.add_argument("--cols", type=int, help="Board width (odd)")
    play_parser.add_argument("--hand-size", type=int, help="Opening hand size")
    play_parser.add_argument("--first", help="FIRST player: human, random, fillfirst, maxrow")
    play_parser.add_argument("--second", help="SECOND player: human, random, fillfirst, maxrow")
    play_parser.add_argument("--first-deck", help="Deck file for FIRST")
    play_parser.add_argument("--second-deck", help="Deck file for SECOND")
    play_parser.add_argument("--seed", type=int, help="Shuffle and random-bot seed")
    play_parser.add_argument("--max-turns", type=int, default=None, help="Stop after this many turns")

    # Validate command
    validate_parser = subparsers.add_parser("validate-deck", help="Validate a deck file")
    validate_parser.add_argument("deck_file", help="Path to deck file")
    validate_parser.add_argument(
        "--side", choices=["first", "second"], default="first",
        help="Load the deck for this side (second mirrors the grids)",
    )

    # Export command
    export_parser = subparsers.add_parser("export-deck", help="Write the standard deck")
    export_parser.add_argument("--output", "-o", help="Output file (stdout if omitted)")

    args = parser.parse_args(argv)

    if args.command == "play":
        return cmd_play(args)
    elif args.command == "validate-deck":
        return cmd_validate_deck(args)
    elif args.command == "export-deck":
        return cmd_export_deck(args)
    else:
        parser.print_help()
        sys.exit(1)


def _configure_logging(level):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def format_board(board: Board) -> str:
    """
    Plain-text board dump.

    Each line is FIRST's row sum, the cells, then SECOND's row sum. Cells
    show "_" when empty, a pawn count, or R/B for a placed card.
    """
    lines = []
    for row, cells in enumerate(board.rows()):
        scores = board.row_scores(row)
        cells_text = "".join(str(cell) for cell in cells)
        lines.append(f"{scores.first} {cells_text} {scores.second}")
    return "\n".join(lines)


def _format_hand(board: Board, side: Side) -> str:
    return "  ".join(
        f"[{i}] {card.name} (cost {card.cost}, value {card.value})"
        for i, card in enumerate(board.get_hand(side))
    )


def _read_human_action(board: Board) -> Action:
    side = board.turn
    print(f"{side.name} hand: {_format_hand(board, side)}")
    while True:
        try:
            line = input(f"{side.name} move (CARD ROW COL or 'pass'): ").strip().lower()
        except EOFError:
            print()
            return Action.pass_turn(side)
        if line in {"pass", "p"}:
            return Action.pass_turn(side)
        parts = line.split()
        if len(parts) == 3 and all(p.lstrip("-").isdigit() for p in parts):
            card_index, row, col = (int(p) for p in parts)
            return Action.place(side, card_index, row, col)
        print("Enter three numbers, e.g. '0 1 0', or 'pass'.")


def cmd_play(args):
    """Play a game in the terminal."""
    from pydantic import ValidationError

    from .config import GameConfig
    from .games.queens.deck_loader import DeckFormatError
    from .session import SessionManager, GameLoop

    try:
        config = GameConfig.from_env(
            rows=args.rows,
            cols=args.cols,
            hand_size=args.hand_size,
            first_deck=args.first_deck,
            second_deck=args.second_deck,
            first_player=args.first,
            second_player=args.second,
            seed=args.seed,
            log_level=args.log_level,
        )
    except ValidationError as e:
        print(f"Error: invalid settings\n{e}")
        sys.exit(1)

    _configure_logging(config.log_level)

    manager = SessionManager()
    try:
        session = manager.create_session_from_config(config)
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}")
        sys.exit(1)
    except (DeckFormatError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"{config.first_player} (FIRST) vs {config.second_player} (SECOND)")
    print(f"{config.rows}x{config.cols} board, hand size {config.hand_size}\n")

    loop = GameLoop(session)
    board = session.board
    turns = 0
    while not board.is_game_over():
        if args.max_turns is not None and turns >= args.max_turns:
            print(f"Stopped after {turns} turns")
            break

        print(format_board(board))
        if session.is_bot_turn():
            result = loop.run_bot_turns(max_turns=1)
        else:
            # Bot replies are applied inside play_human_action.
            result = loop.play_human_action(_read_human_action(board))

        for description in result.actions:
            print(f"  {description}")
        for error in result.errors:
            print(f"  ! {error}")
        turns += len(result.actions)
        print()

    print(format_board(board))
    first = board.total_score(Side.FIRST)
    second = board.total_score(Side.SECOND)
    print(f"\nFinal score: FIRST {first} - SECOND {second}")
    winner = board.winner()
    print("Result: tie" if winner is Side.NONE else f"Winner: {winner.name}")
    manager.end_session(session.session_id)
    return 0


def cmd_validate_deck(args):
    """Validate a deck file."""
    from .games.queens.deck_loader import DeckFormatError, load_deck

    if args.log_level:
        _configure_logging(args.log_level)

    side = Side(args.side)
    try:
        cards = load_deck(args.deck_file, side)
    except FileNotFoundError:
        print(f"Error: File not found: {args.deck_file}")
        sys.exit(1)
    except DeckFormatError as e:
        print(f"Invalid deck: {e}")
        sys.exit(1)

    print(f"{args.deck_file}: {len(cards)} card(s), max hand size {len(cards) // 3}")
    for card in cards:
        print(f"  {card.name}: cost {card.cost}, value {card.value}")
        for line in card.grid_rows():
            print(f"    {line}")
    return 0


def cmd_export_deck(args):
    """Write the standard deck in deck file format."""
    from .games.queens.cards import standard_deck
    from .games.queens.deck_loader import format_deck

    text = format_deck(standard_deck(Side.FIRST))
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text)
        print(f"Wrote {args.output}")
    else:
        sys.stdout.write(text)
    return 0


if __name__ == "__main__":
    main()
