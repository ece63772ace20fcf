"""Per-repository aggregation of a contribution snapshot."""

import logging
from typing import List

from .models import ContributionRecord, ContributionSnapshot, RepoStats, RepoStatsMap
from .repo_filter import RepositoryFilter


def aggregate(snapshot: ContributionSnapshot, repo_filter: RepositoryFilter) -> RepoStatsMap:
    """Merge the three contribution lists of a snapshot into per-repository stats.

    Lists are folded in the order commits, pull requests, reviews. A repository
    is added the first time one of its records matches the filter; later records
    for the same repository, of any kind, add to the existing entry. Records that
    do not match the filter are dropped.

    Args:
        snapshot: Contributions of one subject
        repo_filter: Filter applied to repository full names

    Returns:
        Fresh mapping of repository full name to RepoStats
    """
    stats: RepoStatsMap = {}

    _merge(stats, snapshot.commits, 'commits', repo_filter)
    _merge(stats, snapshot.pull_requests, 'pull_requests', repo_filter)
    _merge(stats, snapshot.pull_request_reviews, 'pull_request_reviews', repo_filter)

    logging.debug(f"Aggregated {len(stats)} repositories for {snapshot.subject_login}")
    return stats


def _merge(stats: RepoStatsMap, records: List[ContributionRecord], kind: str,
           repo_filter: RepositoryFilter):
    for record in records:
        repo = record.repository_full_name
        if not repo_filter.matches(repo):
            logging.debug(f"Skipping {repo} ({kind}): does not match '{repo_filter.pattern}'")
            continue

        repo_stats = stats.get(repo)
        if repo_stats is None:
            repo_stats = stats[repo] = RepoStats()

        setattr(repo_stats, kind, getattr(repo_stats, kind) + record.count)
