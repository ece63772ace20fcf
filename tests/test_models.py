"""
Unit tests for contribution data models
"""

import pytest
from datetime import datetime, timezone, timedelta

from contribution_stats.models import (
    ContributionRecord, ContributionSnapshot, RepoStats, SubjectResult, TimeRange, format_timestamp
)


class TestRepoStats:
    """Test cases for RepoStats dataclass."""

    def test_repo_stats_initialization(self):
        """Test that RepoStats initializes with zero counts."""
        stats = RepoStats()
        assert stats.commits == 0
        assert stats.pull_requests == 0
        assert stats.pull_request_reviews == 0
        assert stats.total == 0

    def test_repo_stats_total(self):
        """Test that total sums all three contribution kinds."""
        stats = RepoStats(commits=3, pull_requests=2, pull_request_reviews=5)
        assert stats.total == 10


class TestContributionRecord:
    """Test cases for ContributionRecord."""

    def test_record_is_immutable(self):
        """Test that records cannot be modified."""
        record = ContributionRecord('org/repo', 3)
        with pytest.raises(AttributeError):
            record.count = 5

    def test_snapshot_defaults_to_empty_lists(self):
        """Test that a snapshot without contributions has empty lists."""
        snapshot = ContributionSnapshot('octocat')
        assert snapshot.commits == []
        assert snapshot.pull_requests == []
        assert snapshot.pull_request_reviews == []
        assert snapshot.subject_display_name == ''


class TestSubjectResult:
    """Test cases for SubjectResult totals."""

    def test_totals_across_repositories(self):
        """Test that totals add up each column."""
        result = SubjectResult('octocat', 'The Octocat', {
            'org/a': RepoStats(commits=3, pull_requests=1),
            'org/b': RepoStats(commits=2, pull_request_reviews=4),
        })

        totals = result.totals
        assert totals.commits == 5
        assert totals.pull_requests == 1
        assert totals.pull_request_reviews == 4
        assert totals.total == 10

    def test_totals_empty(self):
        """Test totals of a subject without repositories."""
        assert SubjectResult('octocat').totals == RepoStats()


class TestTimeRange:
    """Test cases for TimeRange formatting."""

    def test_describe_uses_utc(self):
        """Test that the description renders both ends in UTC."""
        plus_two = timezone(timedelta(hours=2))
        window = TimeRange(
            start=datetime(2022, 1, 1, 2, 0, 0, tzinfo=plus_two),
            end=datetime(2022, 12, 31, 23, 59, 59, tzinfo=timezone.utc)
        )
        assert window.describe() == '2022-01-01T00:00:00Z to 2022-12-31T23:59:59Z'

    def test_format_timestamp(self):
        """Test the API timestamp format."""
        assert format_timestamp(datetime(2023, 6, 1, 12, 30, tzinfo=timezone.utc)) == '2023-06-01T12:30:00Z'
