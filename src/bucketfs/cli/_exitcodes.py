"""Process exit codes for the bfs CLI."""

EXECUTION_FAILURE = 1
USAGE_ERROR = 2
NOT_FOUND = 3
