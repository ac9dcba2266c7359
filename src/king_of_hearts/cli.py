# Area: Shared
"""
king_of_hearts.cli — Command-line interface
===========================================

Runs the generation endpoints from a terminal and prints their JSON.

Usage:
    python -m king_of_hearts generate --topic Wine --topic Coffee --player Ana --mock
    python -m king_of_hearts single --topic Wine --player Ana --expert Ben
    python -m king_of_hearts ladder --players 6
    python -m king_of_hearts --config config.json generate --topic Wine --player Ana

Mock mode can be enabled via:
    1. CLI flag: --mock
    2. Config key: mock_mode: true
    3. Environment variable: KOH_MOCK_MODE=true
"""

import argparse
import json
import os
import sys
from typing import Any, Dict, List, Optional

from .config import BOARD_ROUNDS, FINAL_ROUND, load_config
from ._content.batch_scheduler import BatchScheduler
from ._content.cache import GenerationCache
from ._content.llm_client import AnthropicClient, BaseLLMClient
from ._content.question_generator import QuestionGenerator
from ._content.service import ContentService
from ._content.topic_namer import TopicNamer
from ._game.ladder import ladder_table, tier_for_point_value
from ._shared.logging_config import setup_logging
from .demo import demo_client


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="king-of-hearts",
        description="King of Hearts - generate party trivia questions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  king-of-hearts generate --topic Wine --topic Coffee --player Ana --mock
  king-of-hearts single --topic Wine --player Ana --expert Ben --round 1 --player-count 4
  king-of-hearts ladder --players 7
  KOH_MOCK_MODE=true king-of-hearts generate --topic Wine --player Ana
        """,
    )
    parser.add_argument("--config", type=str, help="Path to JSON config file")
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use canned offline responses instead of the Anthropic API",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Bulk-generate questions for several topics")
    gen.add_argument("--topic", action="append", required=True, help="Topic (repeatable)")
    gen.add_argument("--player", required=True, help="Player name used for every topic")
    gen.add_argument(
        "--expert",
        action="append",
        default=[],
        help="Expert per topic, in --topic order (repeatable)",
    )
    gen.add_argument("--player-count", type=int, help="Include point ladders for this many players")

    single = sub.add_parser("single", help="Generate questions for one topic")
    single.add_argument("--topic", required=True)
    single.add_argument("--player", required=True)
    single.add_argument("--expert", required=True)
    single.add_argument("--round", type=int, choices=list(BOARD_ROUNDS) + [FINAL_ROUND])
    single.add_argument("--player-count", type=int)

    ladder = sub.add_parser("ladder", help="Show point ladders for a player count")
    ladder.add_argument("--players", type=int, required=True)

    return parser


def is_mock_mode(args: argparse.Namespace, config: Dict[str, Any]) -> bool:
    """Check if mock mode is enabled via CLI, config, or environment."""
    if args.mock:
        return True
    if config.get("mock_mode"):
        return True
    return os.environ.get("KOH_MOCK_MODE", "").lower() in ("true", "1", "yes")


def get_llm_client(args: argparse.Namespace, config: Dict[str, Any]) -> BaseLLMClient:
    if is_mock_mode(args, config):
        return demo_client()
    return AnthropicClient(
        model=config["model"],
        max_tokens=config["max_tokens"],
        timeout_seconds=config["llm_timeout_seconds"],
    )


def build_service(llm_client: BaseLLMClient, config: Dict[str, Any]) -> ContentService:
    """Wire a ContentService with its own cache and namer."""
    namer = TopicNamer(llm_client, max_tokens=config["name_max_tokens"])
    generator = QuestionGenerator(
        llm_client, namer, cache=GenerationCache(), max_tokens=config["max_tokens"]
    )
    scheduler = BatchScheduler(
        generator.try_generate_cached,
        batch_size=config["batch_size"],
        delay_seconds=config["batch_delay_seconds"],
    )
    return ContentService(generator, scheduler, ladders=config["round_ladders"])


def bulk_body(args: argparse.Namespace) -> Dict[str, Any]:
    experts: List[str] = list(args.expert)
    categories = [
        {"name": topic, "expert": experts[i] if i < len(experts) else args.player}
        for i, topic in enumerate(args.topic)
    ]
    body: Dict[str, Any] = {"categories": categories, "players": [args.player]}
    if args.player_count is not None:
        body["playerCount"] = args.player_count
    return body


def single_body(args: argparse.Namespace) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "category": args.topic,
        "playerName": args.player,
        "expertName": args.expert,
    }
    if args.round is not None:
        body["round"] = args.round
    if args.player_count is not None:
        body["playerCount"] = args.player_count
    return body


def describe_ladders(player_count: int, config: Dict[str, Any]) -> Dict[str, Any]:
    table = ladder_table(player_count, config["round_ladders"])
    return {
        "players": player_count,
        "rounds": {
            str(r): [
                {"pointValue": pv, "difficulty": tier_for_point_value(pv, values)}
                for pv in values
            ]
            for r, values in table.items()
        },
    }


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except ValueError as e:
        print(f"Error: Invalid config: {e}", file=sys.stderr)
        return 1

    setup_logging(config["log_file"], config["log_level"])

    if args.command == "ladder":
        try:
            print(json.dumps(describe_ladders(args.players, config), indent=2))
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        return 0

    llm_client = get_llm_client(args, config)
    if not llm_client.is_available():
        print("Error: ANTHROPIC_API_KEY is not set.", file=sys.stderr)
        print("Set it in the environment or a .env file, or use --mock.", file=sys.stderr)
        return 1

    service = build_service(llm_client, config)
    body = bulk_body(args) if args.command == "generate" else single_body(args)
    status, payload = service.handle_request(body)
    print(json.dumps(payload, indent=2))
    return 0 if status == 200 else 1
