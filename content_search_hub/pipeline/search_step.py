"""Content search pipeline step.

Runs one search request end to end: query execution, merging and display
formatting. The host decides what happens when the step hands the request
back to the legacy search engine.
"""

import threading
from collections.abc import Iterator

from ..config.provider import AppSettingsProvider
from ..config.settings import AppSettings, get_settings
from ..models.hits import Hit
from ..models.interfaces import ItemRepository, QueryExecutor, SettingsProvider
from ..models.query import SearchArgs
from ..result_processing.formatter import ResultFormatter
from ..result_processing.merger import ResultMerger
from ..result_processing.visibility import HiddenItemFilter
from ..utils.errors import MergeCancelledError, QueryError
from ..utils.logging import get_logger, log_query, log_results

logger = get_logger(__name__)


class ContentSearchStep:
    """Pipeline step producing display results for a text search."""

    def __init__(
        self,
        executor: QueryExecutor,
        item_repository: ItemRepository,
        settings_provider: SettingsProvider | None = None,
        merger: ResultMerger | None = None,
        settings: AppSettings | None = None,
    ):
        self.settings = settings or get_settings()
        self.executor = executor
        self.item_repository = item_repository
        self.settings_provider = settings_provider or AppSettingsProvider(
            self.settings
        )
        self.merger = merger or ResultMerger(config=self.settings.merger)
        self.formatter = ResultFormatter(item_repository, self.settings_provider)

    def process(
        self, args: SearchArgs, cancel_event: threading.Event | None = None
    ) -> None:
        """
        Run the search described by ``args`` and append results to ``args.result``.

        Nothing is appended when the legacy engine is requested, when bucketed
        search is disabled (the request is then flagged for the legacy engine),
        when the query text is empty, when the query is invalid or when the
        merge is cancelled. An invalid query is logged and recorded on
        ``args.query_error``.

        Args:
            args: Request bundle from the host
            cancel_event: Optional event that cancels the merge when set
        """
        if args.use_legacy_search_engine:
            return

        if not self.settings.buckets_enabled:
            args.use_legacy_search_engine = True
            return

        if not args.text_query:
            return

        policy = args.to_policy(self.settings.merger.default_limit)
        log_query(
            logger,
            {"text": args.text_query, "root": args.root, "type": args.search_type},
            policy.model_dump(),
        )

        visibility = HiddenItemFilter(self.item_repository, args.show_hidden_items)
        try:
            result_set = self.merger.merge(
                self._execute(args),
                policy,
                visibility,
                query_text=args.text_query,
                cancel_event=cancel_event,
            )
        except QueryError as e:
            logger.error(f"Invalid search query: {args.text_query}", exc_info=e)
            args.query_error = e.to_dict()
            return
        except MergeCancelledError:
            logger.info(f"Search cancelled: {args.text_query}")
            return

        results = self.formatter.format(result_set)
        for result in results:
            args.result.add_result(result)

        log_results(
            logger, {"total_results": len(results), "retained": len(result_set)}
        )

    def _execute(self, args: SearchArgs) -> Iterator[Hit]:
        try:
            return self.executor.execute(
                args.text_query,
                root=args.root,
                search_type=args.search_type,
                language=args.content_language,
            )
        except QueryError as e:
            raise e.with_query(args.text_query)
        except Exception as e:
            raise QueryError(
                f"Invalid search query: {args.text_query}",
                query=args.text_query,
                original_error=e,
            ) from e
