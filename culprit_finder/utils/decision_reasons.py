"""
Decision Reasons
================
Standardised constants for why culprit finding did or did not run.

Used by CulpritFindingReport.decision_reason so callers and logs get clean,
machine-readable outcomes. Listed in the order the checks are made.
"""


# ---------------------------------------------------------------------------
# Decision Reason Constants
# ---------------------------------------------------------------------------
BUILD_SUCCEEDED = "BUILD_SUCCEEDED"
NO_INTERMEDIATE_CHANGES = "NO_INTERMEDIATE_CHANGES"
NO_RELEVANT_FAILURES = "NO_RELEVANT_FAILURES"
NEW_FAILURES = "NEW_FAILURES"

# All valid reasons (for validation)
ALL_DECISION_REASONS = frozenset({
    BUILD_SUCCEEDED,
    NO_INTERMEDIATE_CHANGES,
    NO_RELEVANT_FAILURES,
    NEW_FAILURES,
})
