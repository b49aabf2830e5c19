"""PR Size Guard - size and test-coverage policy checks for pull requests."""

__version__ = "0.1.0"
