"""Output formatting and display for contribution stats."""

from typing import List, Tuple

from .models import RepoStats, SubjectResult


# ANSI color codes
GREEN = '\033[92m'
CYAN = '\033[96m'
BOLD = '\033[1m'
RESET = '\033[0m'

VALID_SORT_OPTIONS = ['total', 'commits', 'pull_requests', 'reviews', 'repository']
DEFAULT_SORT_BY = 'total'

REPO_COLUMN_WIDTH = 45
NUMBER_COLUMN_WIDTH = 14


class OutputFormatter:
    """Formats and prints the per-repository table of one subject."""

    def __init__(self, sort_by: str = DEFAULT_SORT_BY, use_color: bool = True):
        """Initialize the output formatter.

        Args:
            sort_by: Column to sort rows by
            use_color: Whether to emit ANSI color codes
        """
        self.sort_by = sort_by if sort_by in VALID_SORT_OPTIONS else DEFAULT_SORT_BY
        self.use_color = use_color

    def print_result(self, result: SubjectResult, window_description: str):
        """Print the contribution table of one subject."""
        print(self.format_result(result, window_description))

    def print_results(self, results: List[SubjectResult], window_description: str):
        """Print the tables of all subjects in order."""
        for result in results:
            self.print_result(result, window_description)

    def format_result(self, result: SubjectResult, window_description: str) -> str:
        """Build the table of one subject as a string."""
        lines = []
        name = result.subject_login
        if result.subject_display_name:
            name = f"{result.subject_login} ({result.subject_display_name})"

        lines.append("\n" + "=" * 80)
        lines.append(self._color(f"CONTRIBUTIONS FOR {name}", BOLD))
        lines.append(f"Window: {window_description}")
        lines.append("=" * 80)

        if not result.repositories:
            lines.append("\nNo matching contribution activity found.")
            return "\n".join(lines)

        width = REPO_COLUMN_WIDTH + 4 * (NUMBER_COLUMN_WIDTH + 1)
        lines.append("")
        lines.append(self._color(self._format_row('Repository', 'Commits', 'Pull Requests', 'Reviews', 'Total'), CYAN))
        lines.append('-' * width)

        for repo, stats in self._sort_rows(result.repositories.items()):
            lines.append(self._format_stats_row(repo, stats))

        lines.append('-' * width)
        lines.append(self._color(self._format_stats_row('TOTAL', result.totals), GREEN))
        return "\n".join(lines)

    def _format_stats_row(self, label: str, stats: RepoStats) -> str:
        return self._format_row(
            label,
            f"{stats.commits:,}",
            f"{stats.pull_requests:,}",
            f"{stats.pull_request_reviews:,}",
            f"{stats.total:,}"
        )

    @staticmethod
    def _format_row(repo: str, commits: str, prs: str, reviews: str, total: str) -> str:
        return (f"{repo:<{REPO_COLUMN_WIDTH}} {commits:>{NUMBER_COLUMN_WIDTH}} {prs:>{NUMBER_COLUMN_WIDTH}} "
                f"{reviews:>{NUMBER_COLUMN_WIDTH}} {total:>{NUMBER_COLUMN_WIDTH}}")

    def _sort_rows(self, rows) -> List[Tuple[str, RepoStats]]:
        """Sort the table rows by the configured column."""
        sort_key_map = {
            'total': lambda x: x[1].total,
            'commits': lambda x: x[1].commits,
            'pull_requests': lambda x: x[1].pull_requests,
            'reviews': lambda x: x[1].pull_request_reviews,
            'repository': lambda x: x[0].lower()
        }

        sort_key = sort_key_map[self.sort_by]
        reverse_sort = (self.sort_by != 'repository')

        return sorted(rows, key=sort_key, reverse=reverse_sort)

    def _color(self, text: str, color: str) -> str:
        if not self.use_color:
            return text
        return f"{color}{text}{RESET}"
