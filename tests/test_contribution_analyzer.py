"""
Unit tests for ContributionAnalyzer and the command-line entry script
"""

import sys
import pytest
import importlib.util
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import Mock, patch

from contribution_stats.config import AnalysisConfig
from contribution_stats.contribution_analyzer import ContributionAnalyzer
from contribution_stats.errors import FilterError, QueryError
from contribution_stats.models import ContributionRecord, ContributionSnapshot, RepoStats, TimeRange


WINDOW = TimeRange(
    start=datetime(2022, 1, 1, tzinfo=timezone.utc),
    end=datetime(2022, 12, 31, 23, 59, 59, tzinfo=timezone.utc)
)

# Import the entry script from file with hyphens
SCRIPT_PATH = Path(__file__).resolve().parent.parent / 'contribution-stats.py'
spec = importlib.util.spec_from_file_location("contribution_stats_script", SCRIPT_PATH)
contribution_stats_script = importlib.util.module_from_spec(spec)
sys.modules["contribution_stats_script"] = contribution_stats_script
spec.loader.exec_module(contribution_stats_script)


def make_config(**overrides):
    values = dict(token='test_token', window=WINDOW, users=['zed', 'alice'], use_color=False)
    values.update(overrides)
    return AnalysisConfig(**values)


def snapshot_for(login, *args):
    return ContributionSnapshot(
        subject_login=login,
        commits=[ContributionRecord('acme/api', 2), ContributionRecord('other/site', 1)],
        pull_requests=[ContributionRecord('acme/api', 1)],
    )


class TestContributionAnalyzer:
    """Test cases for ContributionAnalyzer."""

    @pytest.fixture
    def api_client(self):
        """Mocked query client."""
        client = Mock()
        client.fetch_contributions.side_effect = snapshot_for
        return client

    def test_invalid_pattern_fails_before_queries(self, api_client):
        """Test that a bad pattern aborts before any request."""
        with pytest.raises(FilterError):
            ContributionAnalyzer(make_config(repo_pattern='acme/(api'), api_client)

        api_client.fetch_contributions.assert_not_called()
        api_client.list_team_members.assert_not_called()

    def test_builds_client_from_config(self):
        """Test that the client gets the configured token and timeout."""
        analyzer = ContributionAnalyzer(make_config(request_timeout=7))

        assert analyzer.api_client.token == 'test_token'
        assert analyzer.api_client.timeout == 7

    def test_explicit_users_keep_order(self, api_client):
        """Test that explicit users are analyzed in the given order."""
        analyzer = ContributionAnalyzer(make_config(), api_client)

        results = analyzer.analyze()

        assert [result.subject_login for result in results] == ['zed', 'alice']
        api_client.list_team_members.assert_not_called()

    def test_team_members_keep_client_order(self, api_client):
        """Test that team members are analyzed in the order the client returns them."""
        api_client.list_team_members.return_value = ['alice', 'bob', 'mallory']
        analyzer = ContributionAnalyzer(make_config(users=[], org='acme', team='platform'), api_client)

        results = analyzer.analyze()

        api_client.list_team_members.assert_called_once_with('acme', 'platform')
        assert [result.subject_login for result in results] == ['alice', 'bob', 'mallory']

    def test_pattern_applied(self, api_client):
        """Test that the configured pattern filters repositories."""
        analyzer = ContributionAnalyzer(make_config(repo_pattern='^acme/'), api_client)

        results = analyzer.analyze()

        assert results[0].repositories == {'acme/api': RepoStats(commits=2, pull_requests=1)}

    def test_empty_team(self, api_client):
        """Test that a team without members yields no results."""
        api_client.list_team_members.return_value = []
        analyzer = ContributionAnalyzer(make_config(users=[], org='acme', team='empty'), api_client)

        assert analyzer.analyze() == []
        api_client.fetch_contributions.assert_not_called()

    def test_failure_propagates(self, api_client):
        """Test that a failing subject fails the analysis."""
        def fetch(login, *args):
            if login == 'alice':
                raise QueryError("User 'alice' not found")
            return snapshot_for(login)

        api_client.fetch_contributions.side_effect = fetch
        analyzer = ContributionAnalyzer(make_config(), api_client)

        with pytest.raises(QueryError):
            analyzer.analyze()

    def test_print_summary(self, api_client, capsys):
        """Test that one table per subject is printed."""
        analyzer = ContributionAnalyzer(make_config(), api_client)

        analyzer.print_summary(analyzer.analyze())

        output = capsys.readouterr().out
        assert output.count('CONTRIBUTIONS FOR') == 2
        assert WINDOW.describe() in output


class TestMain:
    """Test cases for the entry script."""

    @pytest.fixture
    def env(self, monkeypatch):
        """Environment for a two-user run."""
        for name in ('CONTRIB_ORG', 'CONTRIB_TEAM', 'REPO_PATTERN', 'MAX_REPOS', 'RUN_TIMEOUT', 'SORT_BY'):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setenv('GITHUB_TOKEN', 'test_token')
        monkeypatch.setenv('CONTRIB_USERS', 'zed,alice')
        monkeypatch.setenv('FROM_TIME', '2022-01-01T00:00:00Z')
        monkeypatch.setenv('TO_TIME', '2022-12-31T23:59:59Z')
        monkeypatch.setenv('NO_COLOR', '1')

    @patch.object(contribution_stats_script, 'load_dotenv')
    def test_successful_run(self, mock_load_dotenv, env, capsys):
        """Test that a successful run prints all tables."""
        with patch('contribution_stats.api_client.GitHubAPIClient.fetch_contributions',
                   side_effect=lambda login, *args: snapshot_for(login)):
            contribution_stats_script.main()

        output = capsys.readouterr().out
        assert 'CONTRIBUTIONS FOR zed' in output
        assert 'CONTRIBUTIONS FOR alice' in output

    @patch.object(contribution_stats_script, 'load_dotenv')
    def test_failure_exits_without_tables(self, mock_load_dotenv, env, capsys):
        """Test that one failing subject exits non-zero with no table output."""
        def fetch(login, *args):
            if login == 'alice':
                raise QueryError("User 'alice' not found")
            return snapshot_for(login)

        with patch('contribution_stats.api_client.GitHubAPIClient.fetch_contributions', side_effect=fetch):
            with pytest.raises(SystemExit) as exc_info:
                contribution_stats_script.main()

        assert exc_info.value.code == 1
        assert 'CONTRIBUTIONS FOR' not in capsys.readouterr().out

    @patch.object(contribution_stats_script, 'load_dotenv')
    def test_invalid_pattern_exits(self, mock_load_dotenv, env, monkeypatch):
        """Test that a bad pattern exits before any query."""
        monkeypatch.setenv('REPO_PATTERN', '(')

        with patch('contribution_stats.api_client.GitHubAPIClient.fetch_contributions') as mock_fetch:
            with pytest.raises(SystemExit) as exc_info:
                contribution_stats_script.main()

        assert exc_info.value.code == 1
        mock_fetch.assert_not_called()
