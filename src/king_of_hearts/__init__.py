"""
king_of_hearts — Party trivia engine
====================================

Generates trivia questions for player-chosen topics with an LLM and
runs the King of Hearts scoring rules: two board rounds with steals,
then a single wagering question on a shared topic.

Quick Start (offline, no API key):
    from king_of_hearts import GameOrchestrator, Player, demo_client

    players = [
        Player("Ana", self_topic="Wine", peer_topic="Jazz"),
        Player("Ben", self_topic="Coffee", peer_topic="Chess"),
    ]
    game = GameOrchestrator(players, demo_client(), shared_topic="Movies")
    game.pregenerate()
    board = game.start_round(1)

With the Anthropic API:
    from king_of_hearts import AnthropicClient, GameOrchestrator
    game = GameOrchestrator(players, AnthropicClient(), shared_topic="Movies")

Generation endpoints without a game:
    from king_of_hearts.cli import build_service
    status, payload = build_service(client, load_config()).handle_request(body)

Type Definitions
----------------
Payload types are available for import:

    from king_of_hearts import (
        BulkRequest, BulkResponse,
        SingleRequest, SingleResponse,
        QuestionPayload, SessionPayload,
    )
"""

from .config import load_config
from .demo import demo_client
from .errors import (
    KingOfHeartsError,
    LLMServiceError,
    GenerationFailure,
    InvalidSelection,
    BatchPartialFailure,
    RequestValidationError,
)
from ._content import (
    AnthropicClient,
    BaseLLMClient,
    MockLLMClient,
    BatchResult,
    BatchScheduler,
    ContentService,
    GenerationCache,
    GenerationContext,
    GenerationResult,
    QuestionGenerator,
    QuestionSet,
    TopicNamer,
    TriviaQuestion,
)
from ._game import (
    GameOrchestrator,
    GameSession,
    Outcome,
    Player,
    RoundEngine,
    RoundPhase,
    ScoreDelta,
    StealResolver,
    Wager,
    WageringResolver,
    ladder_for,
)
from ._shared import setup_logging
from .types import (
    AnswerPayload,
    QuestionPayload,
    BulkCategory,
    BulkRequest,
    BulkResponse,
    SingleRequest,
    SingleResponse,
    ErrorResponse,
    PlayerPayload,
    AskedQuestionPayload,
    SessionPayload,
)

__all__ = [
    # Setup
    "load_config",
    "setup_logging",
    "demo_client",
    # Errors
    "KingOfHeartsError",
    "LLMServiceError",
    "GenerationFailure",
    "InvalidSelection",
    "BatchPartialFailure",
    "RequestValidationError",
    # Content
    "AnthropicClient",
    "BaseLLMClient",
    "MockLLMClient",
    "BatchResult",
    "BatchScheduler",
    "ContentService",
    "GenerationCache",
    "GenerationContext",
    "GenerationResult",
    "QuestionGenerator",
    "QuestionSet",
    "TopicNamer",
    "TriviaQuestion",
    # Game
    "GameOrchestrator",
    "GameSession",
    "Outcome",
    "Player",
    "RoundEngine",
    "RoundPhase",
    "ScoreDelta",
    "StealResolver",
    "Wager",
    "WageringResolver",
    "ladder_for",
    # Payload types
    "AnswerPayload",
    "QuestionPayload",
    "BulkCategory",
    "BulkRequest",
    "BulkResponse",
    "SingleRequest",
    "SingleResponse",
    "ErrorResponse",
    "PlayerPayload",
    "AskedQuestionPayload",
    "SessionPayload",
]
__version__ = "1.0.0"
