"""GraphQL documents sent to the GitHub API.

Only the first page of pull requests is requested; larger milestones are
truncated by the server.
"""

PULL_REQUEST_PAGE_SIZE = 100

MILESTONE_BRANCHES_QUERY = """
query MilestoneBranches($owner: String!, $name: String!, $milestone: Int!) {
  repository(owner: $owner, name: $name) {
    milestone(number: $milestone) {
      pullRequests(first: %d) {
        nodes {
          headRefName
        }
      }
    }
  }
}
""" % PULL_REQUEST_PAGE_SIZE

LABEL_BRANCHES_QUERY = """
query LabelBranches($owner: String!, $name: String!, $label: String!) {
  repository(owner: $owner, name: $name) {
    pullRequests(first: %d, labels: [$label]) {
      nodes {
        headRefName
      }
    }
  }
}
""" % PULL_REQUEST_PAGE_SIZE
