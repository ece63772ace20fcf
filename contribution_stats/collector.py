"""Concurrent collection of contribution stats for many subjects."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed, TimeoutError as FuturesTimeoutError
from typing import Dict, List, Optional, Sequence

from .aggregator import aggregate
from .api_client import GitHubAPIClient
from .errors import ContributionStatsError, QueryError
from .models import SubjectResult, TimeRange
from .repo_filter import RepositoryFilter


DEFAULT_MAX_WORKERS = 10


class ContributionCollector:
    """Fetches and aggregates contributions for a list of subjects in parallel.

    Results come back in the order of the input subjects. The first failing
    subject fails the whole batch: subjects not started yet are cancelled,
    in-flight requests are aborted through the client, and no partial results
    are returned.
    """

    def __init__(
        self,
        api_client: GitHubAPIClient,
        repo_filter: RepositoryFilter,
        max_workers: int = DEFAULT_MAX_WORKERS,
        timeout: Optional[float] = None
    ):
        """Initialize the collector.

        Args:
            api_client: Client used for the per-subject queries
            repo_filter: Shared, read-only repository filter
            max_workers: Maximum number of concurrent queries
            timeout: Overall deadline for a batch in seconds (None = no deadline)
        """
        self.api_client = api_client
        self.repo_filter = repo_filter
        self.max_workers = max(1, max_workers)
        self.timeout = timeout

    def collect(self, subjects: Sequence[str], window: TimeRange, max_repos: int) -> List[SubjectResult]:
        """Collect stats for every subject.

        Args:
            subjects: Subject logins, in presentation order
            window: Time window to query
            max_repos: Maximum repositories per contribution kind

        Returns:
            One SubjectResult per subject, index-aligned with subjects

        Raises:
            QueryError: The first failure reported by any subject, or a timeout
        """
        subjects = list(subjects)
        if not subjects:
            return []

        logging.info(f"Collecting contributions for {len(subjects)} subject(s)")
        results: List[Optional[SubjectResult]] = [None] * len(subjects)
        cancelled = threading.Event()
        completed = 0
        max_workers = min(self.max_workers, len(subjects))

        executor = ThreadPoolExecutor(max_workers=max_workers)
        future_to_index = {
            executor.submit(self._collect_subject, login, window, max_repos, cancelled): index
            for index, login in enumerate(subjects)
        }

        try:
            for future in as_completed(future_to_index, timeout=self.timeout):
                index = future_to_index[future]
                results[index] = future.result()
                completed += 1
                logging.debug(f"Progress: {completed}/{len(subjects)} subjects collected")

        except FuturesTimeoutError as e:
            self._abort(executor, future_to_index, cancelled)
            logging.error(f"Timed out after {self.timeout}s with {len(subjects) - completed} subject(s) outstanding")
            raise QueryError(
                f"Timed out after {self.timeout}s waiting for {len(subjects) - completed} subject(s)",
                cause=e
            ) from e

        except Exception as e:
            self._abort(executor, future_to_index, cancelled)
            logging.error(f"Collection failed for {subjects[index]}: {e}")
            raise

        executor.shutdown(wait=True)
        logging.info(f"Collected contributions for {len(subjects)} subject(s)")
        return results

    def _collect_subject(self, login: str, window: TimeRange, max_repos: int,
                         cancelled: threading.Event) -> Optional[SubjectResult]:
        """Fetch and aggregate one subject. Runs on a worker thread."""
        if cancelled.is_set():
            logging.debug(f"Skipping {login}: batch cancelled")
            return None

        try:
            snapshot = self.api_client.fetch_contributions(login, window.start, window.end, max_repos)
        except ContributionStatsError:
            raise
        except Exception as e:
            raise QueryError(f"Failed to fetch contributions for '{login}': {e}", cause=e) from e

        return SubjectResult(
            subject_login=snapshot.subject_login,
            subject_display_name=snapshot.subject_display_name,
            repositories=aggregate(snapshot, self.repo_filter)
        )

    def _abort(self, executor: ThreadPoolExecutor, future_to_index: Dict, cancelled: threading.Event):
        """Stop the batch without waiting for running subjects.

        Subjects that have not started are cancelled, and in-flight requests are
        aborted through the client. Worker threads exit once their current call
        returns, which the client's request timeout bounds.
        """
        cancelled.set()
        not_started = sum(1 for future in future_to_index if future.cancel())
        if not_started:
            logging.debug(f"Cancelled {not_started} pending subject(s)")
        self.api_client.cancel()
        executor.shutdown(wait=False)
