"""Data models for contribution aggregation."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List


@dataclass(frozen=True)
class ContributionRecord:
    """Contribution count for one repository, as returned by the API."""
    repository_full_name: str
    count: int = 0


@dataclass
class ContributionSnapshot:
    """All contributions of one subject over one time window."""
    subject_login: str
    subject_display_name: str = ''
    commits: List[ContributionRecord] = field(default_factory=list)
    pull_requests: List[ContributionRecord] = field(default_factory=list)
    pull_request_reviews: List[ContributionRecord] = field(default_factory=list)


@dataclass
class RepoStats:
    """Statistics for one repository."""
    commits: int = 0
    pull_requests: int = 0
    pull_request_reviews: int = 0

    @property
    def total(self) -> int:
        return self.commits + self.pull_requests + self.pull_request_reviews


# repository full name -> RepoStats
RepoStatsMap = Dict[str, RepoStats]


@dataclass
class SubjectResult:
    """Aggregated statistics for one subject."""
    subject_login: str
    subject_display_name: str = ''
    repositories: RepoStatsMap = field(default_factory=dict)

    @property
    def totals(self) -> RepoStats:
        """Column totals across all repositories."""
        totals = RepoStats()
        for stats in self.repositories.values():
            totals.commits += stats.commits
            totals.pull_requests += stats.pull_requests
            totals.pull_request_reviews += stats.pull_request_reviews
        return totals


@dataclass(frozen=True)
class TimeRange:
    """Time window for a contribution query. Both ends are timezone aware."""
    start: datetime
    end: datetime

    def describe(self) -> str:
        """Human readable window, used as the table caption."""
        return f"{format_timestamp(self.start)} to {format_timestamp(self.end)}"


def format_timestamp(value: datetime) -> str:
    """Render a timestamp in the UTC form the GraphQL API expects."""
    return value.astimezone(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')
