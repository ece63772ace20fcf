"""GraphQL query documents for the GitHub API."""

# Contribution snapshot for one user. Each *ByRepository list is capped at
# $maxRepos entries (the API allows at most 100).
CONTRIBUTIONS_QUERY = """
query($login: String!, $fromTime: DateTime!, $toTime: DateTime!, $maxRepos: Int!) {
  user(login: $login) {
    login
    name
    contributionsCollection(from: $fromTime, to: $toTime) {
      commitContributionsByRepository(maxRepositories: $maxRepos) {
        repository { nameWithOwner }
        contributions { totalCount }
      }
      pullRequestContributionsByRepository(maxRepositories: $maxRepos) {
        repository { nameWithOwner }
        contributions { totalCount }
      }
      pullRequestReviewContributionsByRepository(maxRepositories: $maxRepos) {
        repository { nameWithOwner }
        contributions { totalCount }
      }
    }
  }
}
"""

TEAM_MEMBERS_QUERY = """
query($org: String!, $team: String!, $cursor: String) {
  organization(login: $org) {
    team(slug: $team) {
      members(first: 100, after: $cursor) {
        nodes { login }
        pageInfo { hasNextPage endCursor }
      }
    }
  }
}
"""

# Field of contributionsCollection for each contribution kind, in processing order
CONTRIBUTION_KIND_FIELDS = {
    'commits': 'commitContributionsByRepository',
    'pull_requests': 'pullRequestContributionsByRepository',
    'pull_request_reviews': 'pullRequestReviewContributionsByRepository',
}
