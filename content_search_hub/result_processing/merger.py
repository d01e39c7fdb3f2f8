"""Result merger: dedups a raw hit stream into a capped result set."""

import asyncio
import threading
import time
from collections.abc import Callable, Iterable
from typing import Any

from ..config.settings import MergerSettings
from ..models.base import HealthStatus
from ..models.component import ResultMergerBase
from ..models.hits import Hit
from ..models.query import MergePolicy, SearchType
from ..models.results import ResultSet
from ..utils.errors import ItemLookupError, MergeCancelledError, QueryError
from ..utils.logging import get_logger

logger = get_logger(__name__)

# Outcomes of offering one hit to the result set
APPENDED = "appended"
REPLACED = "replaced"
DISCARDED = "discarded"
DUPLICATED = "duplicated"
HIDDEN = "hidden"


def _never_hidden(hit: Hit) -> bool:
    return False


def merge_hits(
    hits: Iterable[Hit],
    policy: MergePolicy,
    is_hidden_and_unauthorized: Callable[[Hit], bool] | None = None,
    *,
    query_text: str | None = None,
    cancel_event: threading.Event | None = None,
    counters: dict[str, int] | None = None,
) -> ResultSet:
    """
    Merge a lazy stream of raw hits into a capped, deduplicated result set.

    Hits are pulled one at a time and pulling stops as soon as the result set
    holds ``policy.cap`` entries, so hits past the cap are never evaluated.
    Hidden hits are skipped without counting toward the cap. Same-identity
    hits are resolved by :func:`offer_hit`.

    Args:
        hits: Lazy sequence of raw hits from the query executor
        policy: Dedup policy for this merge
        is_hidden_and_unauthorized: Predicate excluding hits from the caller
        query_text: Query text, reported with query errors
        cancel_event: When set, the merge stops and is discarded
        counters: Optional dict updated with per-outcome hit counts

    Returns:
        The frozen result set

    Raises:
        QueryError: If pulling from ``hits`` fails; partial results are discarded
        MergeCancelledError: If ``cancel_event`` was set before the stream ended
    """
    if is_hidden_and_unauthorized is None:
        is_hidden_and_unauthorized = _never_hidden
    if counters is None:
        counters = {}

    result_set = ResultSet(policy.cap)
    if policy.cap == 0:
        return result_set.freeze()

    consumed = 0
    try:
        iterator = iter(hits)
    except QueryError as e:
        raise e.with_query(query_text)
    except Exception as e:
        raise _query_error(e, query_text) from e

    while not result_set.is_full:
        if cancel_event is not None and cancel_event.is_set():
            logger.debug(f"Merge cancelled after {consumed} hits")
            raise MergeCancelledError(consumed=consumed)

        try:
            hit = next(iterator)
        except StopIteration:
            break
        except QueryError as e:
            raise e.with_query(query_text)
        except Exception as e:
            raise _query_error(e, query_text) from e

        consumed += 1

        try:
            hidden = is_hidden_and_unauthorized(hit)
        except ItemLookupError as e:
            logger.debug(f"Skipping unavailable item {hit.item_id}: {e.message}")
            hidden = True

        if hidden:
            outcome = HIDDEN
        else:
            outcome = offer_hit(result_set, hit, policy)
        counters[outcome] = counters.get(outcome, 0) + 1

    counters["consumed"] = counters.get("consumed", 0) + consumed
    return result_set.freeze()


def offer_hit(result_set: ResultSet, hit: Hit, policy: MergePolicy) -> str:
    """Apply the replacement rule for one visible hit and return the outcome."""
    incumbent = result_set.find(hit.item_id)
    if incumbent is None:
        result_set.append(hit)
        return APPENDED

    newer = incumbent.language == hit.language and incumbent.version < hit.version

    # A preferred language decides every same-identity conflict on its own,
    # classic duplication does not apply afterwards.
    if policy.has_preferred_language:
        preferred = policy.preferred_language
        if (incumbent.language != preferred and hit.language == preferred) or newer:
            result_set.replace(incumbent, hit)
            return REPLACED
        return DISCARDED

    if policy.mode != SearchType.CLASSIC:
        if newer:
            result_set.replace(incumbent, hit)
            return REPLACED
        return DISCARDED

    result_set.append(hit)
    return DUPLICATED


def _query_error(exc: Exception, query_text: str | None) -> QueryError:
    return QueryError(
        f"Invalid search query: {query_text}",
        query=query_text,
        original_error=exc,
    )


class ResultMerger(ResultMergerBase[MergerSettings]):
    """Merges raw hit streams into capped, deduplicated result sets."""

    def __init__(
        self,
        name: str = "result_merger",
        config: MergerSettings | None = None,
    ):
        """Initialize the merger with configuration options."""
        super().__init__(name, config or MergerSettings())

        # Merger metrics
        self.metrics = self._empty_metrics()
        self.metrics_last_reset = time.time()

    async def initialize(self) -> None:
        """Initialize the merger component."""
        await super().initialize()
        logger.info(
            "Initialized ResultMerger component with default limit "
            f"{self.get_config().default_limit}"
        )

    def merge(
        self,
        hits: Iterable[Hit],
        policy: MergePolicy | None = None,
        is_hidden_and_unauthorized: Callable[[Hit], bool] | None = None,
        query_text: str | None = None,
        cancel_event: threading.Event | None = None,
    ) -> ResultSet:
        """Merge a hit stream, recording merge metrics."""
        start_time = time.time()
        config = self.get_config()

        if policy is None:
            policy = MergePolicy(cap=config.default_limit)

        counters: dict[str, int] = {}
        try:
            result_set = merge_hits(
                hits,
                policy,
                is_hidden_and_unauthorized,
                query_text=query_text,
                cancel_event=cancel_event,
                counters=counters,
            )
        except QueryError:
            self.metrics["total_query_errors"] += 1
            raise
        except MergeCancelledError:
            self.metrics["total_cancelled"] += 1
            raise

        self._update_metrics(
            counters=counters,
            output_count=len(result_set),
            duration=time.time() - start_time,
        )

        if config.log_merge_metrics:
            logger.info(f"Merge metrics: {self.get_metrics()}")

        return result_set

    def _update_metrics(
        self,
        counters: dict[str, int],
        output_count: int,
        duration: float,
    ) -> None:
        """Update merger metrics."""
        self.metrics["total_merges"] += 1
        self.metrics["total_hits_consumed"] += counters.get("consumed", 0)
        self.metrics["total_hidden_skipped"] += counters.get(HIDDEN, 0)
        self.metrics["total_replacements"] += counters.get(REPLACED, 0)
        self.metrics["total_discarded"] += counters.get(DISCARDED, 0)
        self.metrics["total_output_results"] += output_count
        self.metrics["last_merge_time"] = time.time()

        # Update avg merge time with moving average
        prev_avg = self.metrics.get("avg_merge_time_ms", 0.0)
        prev_count = self.metrics["total_merges"] - 1
        self.metrics["avg_merge_time_ms"] = (
            prev_avg * prev_count + duration * 1000
        ) / self.metrics["total_merges"]

    def get_metrics(self) -> dict[str, Any]:
        """Get merger metrics."""
        metrics = dict(self.metrics)

        # Add derived metrics
        if self.metrics["total_merges"] > 0:
            metrics["avg_results_per_merge"] = (
                self.metrics["total_output_results"] / self.metrics["total_merges"]
            )

        return metrics

    def reset_metrics(self) -> None:
        """Reset all metrics."""
        self.metrics = self._empty_metrics()
        self.metrics_last_reset = time.time()

    @staticmethod
    def _empty_metrics() -> dict[str, Any]:
        return {
            "total_merges": 0,
            "total_hits_consumed": 0,
            "total_hidden_skipped": 0,
            "total_replacements": 0,
            "total_discarded": 0,
            "total_output_results": 0,
            "total_query_errors": 0,
            "total_cancelled": 0,
            "avg_merge_time_ms": 0.0,
            "last_merge_time": None,
        }

    async def check_health(self) -> tuple[HealthStatus, str]:
        """Check component health."""
        if not self.initialized:
            return HealthStatus.UNHEALTHY, "ResultMerger not initialized"

        return HealthStatus.HEALTHY, "ResultMerger is healthy"

    def process(
        self,
        hits: Iterable[Hit],
        policy: MergePolicy | None = None,
        is_hidden_and_unauthorized: Callable[[Hit], bool] | None = None,
        query_text: str | None = None,
        cancel_event: threading.Event | None = None,
    ) -> ResultSet:
        """Process a hit stream - alias for merge."""
        return self.merge(
            hits,
            policy,
            is_hidden_and_unauthorized,
            query_text,
            cancel_event,
        )

    async def _do_execute(self, *args: Any, **kwargs: Any) -> ResultSet:
        """
        Merge in a worker thread so that timeouts and cancellation can fire.

        When the awaiting task is cancelled, or its deadline passes, the merge
        is stopped through its cancel event before the next hit is pulled.
        """
        # Extract hits from args or kwargs
        if args:
            hits = args[0]
        elif "hits" in kwargs:
            hits = kwargs["hits"]
        else:
            raise ValueError("No hits provided to execute")

        policy = args[1] if len(args) > 1 else kwargs.get("policy")
        cancel_event = kwargs.get("cancel_event") or threading.Event()

        try:
            return await asyncio.to_thread(
                self.merge,
                hits,
                policy,
                kwargs.get("is_hidden_and_unauthorized"),
                kwargs.get("query_text"),
                cancel_event,
            )
        except asyncio.CancelledError:
            cancel_event.set()
            raise
