"""Run configuration loaded from environment variables."""

import os
import logging
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from .errors import ConfigError
from .models import TimeRange, format_timestamp
from .output import VALID_SORT_OPTIONS, DEFAULT_SORT_BY
from .repo_filter import DEFAULT_REPO_PATTERN
from .time_window import parse_time_range, current_year_range
from .api_client import DEFAULT_TIMEOUT
from .collector import DEFAULT_MAX_WORKERS

DEFAULT_MAX_REPOS = 25
# GitHub caps maxRepositories at 100
MAX_REPOS_LIMIT = 100


@dataclass
class AnalysisConfig:
    """Everything needed for one run."""
    token: str
    window: TimeRange
    users: List[str] = field(default_factory=list)
    org: Optional[str] = None
    team: Optional[str] = None
    repo_pattern: str = DEFAULT_REPO_PATTERN
    max_repos: int = DEFAULT_MAX_REPOS
    max_workers: int = DEFAULT_MAX_WORKERS
    request_timeout: float = DEFAULT_TIMEOUT
    run_timeout: Optional[float] = None
    sort_by: str = DEFAULT_SORT_BY
    use_color: bool = True

    @property
    def team_mode(self) -> bool:
        return self.org is not None


def load_config(environ: Mapping[str, str] = None) -> AnalysisConfig:
    """Build the run configuration from environment variables.

    The time window is parsed here so that a malformed timestamp aborts the run
    before any request is made.

    Args:
        environ: Variables to read (defaults to os.environ)

    Raises:
        ConfigError: If required values are missing, conflicting or malformed
        TimeParseError: If FROM_TIME or TO_TIME is not a valid timestamp
    """
    env = os.environ if environ is None else environ

    token = _get(env, 'GITHUB_TOKEN')
    if not token:
        raise ConfigError("GITHUB_TOKEN is required")

    # Subjects: an explicit user list or a team, never both
    users = _split_list(_get(env, 'CONTRIB_USERS'))
    org = _get(env, 'CONTRIB_ORG')
    team = _get(env, 'CONTRIB_TEAM')

    if users and (org or team):
        raise ConfigError("CONTRIB_USERS cannot be combined with CONTRIB_ORG/CONTRIB_TEAM")
    if bool(org) != bool(team):
        raise ConfigError("CONTRIB_ORG and CONTRIB_TEAM must be set together")
    if not users and not org:
        raise ConfigError("Set CONTRIB_USERS or CONTRIB_ORG and CONTRIB_TEAM")

    if users:
        logging.info(f"Using users from environment: {', '.join(users)}")
    else:
        logging.info(f"Using members of team {org}/{team}")

    # Time window, defaulting to the current calendar year
    from_time = _get(env, 'FROM_TIME')
    to_time = _get(env, 'TO_TIME')
    if from_time or to_time:
        default_window = current_year_range()
        window = parse_time_range(
            from_time or format_timestamp(default_window.start),
            to_time or format_timestamp(default_window.end)
        )
    else:
        window = current_year_range()
    logging.info(f"Using time window: {window.describe()}")

    max_repos = _get_int(env, 'MAX_REPOS', DEFAULT_MAX_REPOS)
    if not 1 <= max_repos <= MAX_REPOS_LIMIT:
        raise ConfigError(f"MAX_REPOS must be between 1 and {MAX_REPOS_LIMIT}, got {max_repos}")

    max_workers = _get_int(env, 'MAX_WORKERS', DEFAULT_MAX_WORKERS)
    if max_workers < 1:
        raise ConfigError(f"MAX_WORKERS must be at least 1, got {max_workers}")

    request_timeout = _get_float(env, 'REQUEST_TIMEOUT', DEFAULT_TIMEOUT)
    run_timeout = _get_float(env, 'RUN_TIMEOUT', None)

    sort_by = (_get(env, 'SORT_BY') or DEFAULT_SORT_BY).lower()
    if sort_by not in VALID_SORT_OPTIONS:
        logging.warning(f"Invalid SORT_BY value '{sort_by}', using default: {DEFAULT_SORT_BY}")
        logging.warning(f"Valid options: {', '.join(VALID_SORT_OPTIONS)}")
        sort_by = DEFAULT_SORT_BY

    use_color = env.get('NO_COLOR') is None

    return AnalysisConfig(
        token=token,
        window=window,
        users=users,
        org=org,
        team=team,
        repo_pattern=_get(env, 'REPO_PATTERN') or DEFAULT_REPO_PATTERN,
        max_repos=max_repos,
        max_workers=max_workers,
        request_timeout=request_timeout,
        run_timeout=run_timeout,
        sort_by=sort_by,
        use_color=use_color,
    )


def _get(env: Mapping[str, str], name: str) -> Optional[str]:
    value = env.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _split_list(value: Optional[str]) -> List[str]:
    """Parse a comma-separated list, dropping blanks."""
    if not value:
        return []
    return [item.strip() for item in value.split(',') if item.strip()]


def _get_int(env: Mapping[str, str], name: str, default: int) -> int:
    value = _get(env, name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got '{value}'")


def _get_float(env: Mapping[str, str], name: str, default: Optional[float]) -> Optional[float]:
    value = _get(env, name)
    if value is None:
        return default
    try:
        result = float(value)
    except ValueError:
        raise ConfigError(f"{name} must be a number of seconds, got '{value}'")
    if result <= 0:
        raise ConfigError(f"{name} must be positive, got '{value}'")
    return result
