"""git-integrate: merge the pull request branches of a GitHub milestone into one branch."""

__version__ = "0.1.0"
