"""Main contribution analyzer: subject resolution, collection and output."""

import logging
from typing import List

from .api_client import GitHubAPIClient
from .collector import ContributionCollector
from .config import AnalysisConfig
from .models import SubjectResult
from .output import OutputFormatter
from .repo_filter import RepositoryFilter


class ContributionAnalyzer:
    """Runs one contribution analysis described by an AnalysisConfig."""

    def __init__(self, config: AnalysisConfig, api_client: GitHubAPIClient = None):
        """Initialize the analyzer.

        The repository filter is compiled here, so an invalid pattern fails
        before any request is made.

        Args:
            config: Run configuration
            api_client: Client to use (built from the config when omitted)

        Raises:
            FilterError: If the repository pattern is invalid
        """
        self.config = config
        self.repo_filter = RepositoryFilter(config.repo_pattern)
        self.api_client = api_client or GitHubAPIClient(
            config.token,
            timeout=config.request_timeout,
            pool_size=config.max_workers
        )
        self.collector = ContributionCollector(
            self.api_client,
            self.repo_filter,
            max_workers=config.max_workers,
            timeout=config.run_timeout
        )

    def resolve_subjects(self) -> List[str]:
        """Return the logins to analyze.

        Explicit users keep their configured order; team members come back
        from the client sorted by login.
        """
        if self.config.team_mode:
            return self.api_client.list_team_members(self.config.org, self.config.team)
        return list(self.config.users)

    def analyze(self) -> List[SubjectResult]:
        """Collect aggregated stats for all subjects, in subject order.

        Raises:
            QueryError: If any subject fails; no partial results are returned
        """
        subjects = self.resolve_subjects()
        if not subjects:
            logging.warning("No subjects to analyze")
            return []

        logging.info(f"Analyzing {len(subjects)} subject(s) with repository pattern '{self.repo_filter.pattern}'")
        return self.collector.collect(subjects, self.config.window, self.config.max_repos)

    def print_summary(self, results: List[SubjectResult]):
        """Print one table per subject."""
        output_formatter = OutputFormatter(self.config.sort_by, self.config.use_color)
        output_formatter.print_results(results, self.config.window.describe())
