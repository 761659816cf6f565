# agents/strategy.py
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Strategy = Tuple[str, Callable[[], Awaitable[List[T]]]]


@dataclass
class StrategyOutcome:
    results: list = field(default_factory=list)
    strategy: Optional[str] = None
    failures: List[str] = field(default_factory=list)


async def first_non_empty(strategies: Sequence[Strategy]) -> StrategyOutcome:
    """
    Runs named strategies in order and stops at the first non-empty result.
    A strategy that raises is recorded in `failures` and the next one is tried.
    """
    outcome = StrategyOutcome()

    for name, run in strategies:
        try:
            results = await run()
        except Exception as e:
            logger.error(f"❌ Strategy '{name}' crashed: {e}", exc_info=True)
            outcome.failures.append(f"{name}: {e}")
            continue

        if results:
            logger.info(f"✅ Strategy '{name}' found {len(results)} results")
            outcome.results = list(results)
            outcome.strategy = name
            return outcome

        logger.info(f"⚠️ Strategy '{name}' returned nothing, trying next")

    return outcome
