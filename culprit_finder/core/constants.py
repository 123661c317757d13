"""
Constants
Stable identifiers shared with the build server and with bisection builds.
Changing any of these breaks builds already sitting in the queue.
"""
# Range metadata written into every bisection build's parameters
RANGE_TOP_BUILD_ID = "range.top.build.id"
RANGE_TOP_BUILD_NUMBER = "range.top.build.number"
RANGE_BOTTOM_BUILD_ID = "range.bottom.build.id"
RANGE_BOTTOM_BUILD_NUMBER = "range.bottom.build.number"

RANGE_PARAMETER_KEYS = (
    RANGE_TOP_BUILD_ID,
    RANGE_TOP_BUILD_NUMBER,
    RANGE_BOTTOM_BUILD_ID,
    RANGE_BOTTOM_BUILD_NUMBER,
)

# Bottom of the range when there is no previous finished build
NO_BUILD = "n/a"

QUEUE_REASON_PREFIX = "Culprit finding, failures of"

# Failure kinds, each with its own sensitivity setting
BUILD_PROBLEM_KIND = "build_problem"
TEST_FAILURE_KIND = "test_failure"
