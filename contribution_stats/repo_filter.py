"""Repository name filtering."""

import re
import logging

from .errors import FilterError


# Matches every repository
DEFAULT_REPO_PATTERN = '.*'


class RepositoryFilter:
    """Tests repository full names ('owner/name') against a regular expression.

    The pattern is compiled once; instances hold no mutable state afterwards and
    can be shared by any number of threads.
    """

    def __init__(self, pattern: str = DEFAULT_REPO_PATTERN):
        """Compile the repository pattern.

        Args:
            pattern: Regular expression searched for in repository full names

        Raises:
            FilterError: If the pattern is not a valid regular expression
        """
        self.pattern = pattern if pattern is not None else DEFAULT_REPO_PATTERN
        try:
            self._regex = re.compile(self.pattern)
        except re.error as e:
            logging.error(f"Invalid repository pattern '{self.pattern}': {e}")
            raise FilterError(self.pattern, str(e)) from e

        logging.debug(f"Compiled repository pattern '{self.pattern}'")

    def matches(self, repo_full_name: str) -> bool:
        """Check if a repository name matches the pattern.

        Args:
            repo_full_name: Repository name in format 'owner/repo'

        Returns:
            True if the pattern is found anywhere in the name, False otherwise
        """
        return self._regex.search(repo_full_name) is not None

    def __repr__(self) -> str:
        return f"RepositoryFilter({self.pattern!r})"
