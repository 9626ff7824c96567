"""Azure DevOps pull request threads and status checks."""
