"""Shared application constants.

Validation limits and metric layout live here so the API layer and the
metrics registry agree on them.
"""

# Longest goal text accepted, counted after trimming surrounding whitespace
MAX_GOAL_TEXT_LENGTH = 10

# Request-duration histogram buckets, in milliseconds
REQUEST_DURATION_BUCKETS_MS = [50, 100, 200, 300, 400, 500, 750, 1000, 2000, 5000]

# Labels used on goals_operations_total
OPERATION_FETCH = "fetch"
OPERATION_CREATE = "create"
OPERATION_DELETE = "delete"
STATUS_SUCCESS = "success"
STATUS_ERROR = "error"

# Labels used on validation_errors_total
REASON_EMPTY_TEXT = "empty_text"
REASON_ONLY_NUMBERS = "only_numbers"
REASON_MAX_LENGTH_EXCEEDED = "max_length_exceeded"
