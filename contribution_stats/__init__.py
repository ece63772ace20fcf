"""GitHub Contribution Stats - per-repository contribution summaries for users and teams."""

from .models import ContributionRecord, ContributionSnapshot, RepoStats, SubjectResult, TimeRange
from .errors import ContributionStatsError, FilterError, TimeParseError, QueryError, ConfigError
from .repo_filter import RepositoryFilter
from .time_window import parse_time_range
from .aggregator import aggregate
from .api_client import GitHubAPIClient
from .collector import ContributionCollector
from .output import OutputFormatter
from .config import AnalysisConfig, load_config
from .contribution_analyzer import ContributionAnalyzer

__all__ = [
    'ContributionRecord',
    'ContributionSnapshot',
    'RepoStats',
    'SubjectResult',
    'TimeRange',
    'ContributionStatsError',
    'FilterError',
    'TimeParseError',
    'QueryError',
    'ConfigError',
    'RepositoryFilter',
    'parse_time_range',
    'aggregate',
    'GitHubAPIClient',
    'ContributionCollector',
    'OutputFormatter',
    'AnalysisConfig',
    'load_config',
    'ContributionAnalyzer',
]
