"""
Bisection Planner
=================
Turns a failing build into the ordered list of builds that will locate the
change that broke it.

Algorithm:
    1. Take the build's containing changes, oldest first.
    2. Drop the oldest: building up to it alone adds nothing, since the
       bottom of the range already sits just below it.
    3. Reverse, so the change closest to the failing build is built first.
    4. One request per change, each with the full range metadata.

Range Metadata:
    top    = the failing build (id, number)
    bottom = the previous finished build (id, number), or "n/a" for both
    Every request of a plan carries the same map so each queued build
    describes its range on its own.
"""
import logging
from typing import Dict, List, Optional

from culprit_finder.core.constants import (
    NO_BUILD,
    QUEUE_REASON_PREFIX,
    RANGE_BOTTOM_BUILD_ID,
    RANGE_BOTTOM_BUILD_NUMBER,
    RANGE_TOP_BUILD_ID,
    RANGE_TOP_BUILD_NUMBER,
)
from culprit_finder.models.bisection_job import BisectionJobRequest
from culprit_finder.models.build_record import BuildRecord

logger = logging.getLogger(__name__)


def range_parameters(new_build: BuildRecord, old_build: Optional[BuildRecord]) -> Dict[str, str]:
    """Range metadata for builds bisecting between `old_build` and `new_build`."""
    return {
        RANGE_TOP_BUILD_ID: str(new_build.id),
        RANGE_TOP_BUILD_NUMBER: new_build.number,
        RANGE_BOTTOM_BUILD_ID: str(old_build.id) if old_build is not None else NO_BUILD,
        RANGE_BOTTOM_BUILD_NUMBER: old_build.number if old_build is not None else NO_BUILD,
    }


def queue_reason(new_build: BuildRecord) -> str:
    return f"{QUEUE_REASON_PREFIX} {new_build.number}"


def plan(new_build: BuildRecord, old_build: Optional[BuildRecord]) -> List[BisectionJobRequest]:
    """
    Build the bisection requests for a failing build.

    Parameters
    ----------
    new_build : BuildRecord
        The build whose failures are being investigated.
    old_build : Optional[BuildRecord]
        Previous finished build of the same configuration, None if none.

    Returns
    -------
    List[BisectionJobRequest]
        Newest change first, oldest change excluded. Empty when the build
        has fewer than two changes.
    """
    suspects = list(reversed(new_build.changes[1:]))
    if not suspects:
        logger.debug("Build %s: no suspect changes to bisect", new_build.number)
        return []

    parameters = range_parameters(new_build, old_build)
    reason = queue_reason(new_build)

    requests = [
        BisectionJobRequest(
            build_type_id=new_build.build_type_id,
            changes_up_to=change,
            parameters=dict(parameters),
            reason=reason,
        )
        for change in suspects
    ]
    logger.debug(
        "Build %s: planned %d bisection build(s), bottom=%s",
        new_build.number, len(requests), parameters[RANGE_BOTTOM_BUILD_NUMBER],
    )
    return requests
