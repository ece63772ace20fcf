#!/usr/bin/env python3
"""
GitHub Contribution Stats
Summarizes commit, pull request and review contributions per repository
for a list of users or the members of a team.
"""

import os
import sys
import logging
from dotenv import load_dotenv

from contribution_stats.config import load_config
from contribution_stats.contribution_analyzer import ContributionAnalyzer
from contribution_stats.errors import ContributionStatsError

# Configure logging (can be overridden by LOG_LEVEL environment variable)
log_level = os.environ.get('LOG_LEVEL', 'INFO').upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format='%(asctime)s %(levelname)s: %(message)s',
    datefmt='%m/%d/%Y %I:%M:%S %p'
)


def main():
    """Main entry point for the script."""
    # Load environment variables from .env file if it exists
    load_dotenv()

    print("GitHub Contribution Stats")
    print("="*80)

    try:
        config = load_config()
        analyzer = ContributionAnalyzer(config)
    except ContributionStatsError as e:
        logging.error(str(e))
        sys.exit(1)

    try:
        results = analyzer.analyze()
    except ContributionStatsError as e:
        # No partial output: one failing subject fails the whole run
        logging.error(f"Analysis failed: {e}")
        sys.exit(1)
    finally:
        analyzer.api_client.close()

    logging.info("Analysis complete, generating summary...")
    analyzer.print_summary(results)


if __name__ == "__main__":
    main()
