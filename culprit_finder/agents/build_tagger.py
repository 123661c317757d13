"""
Build Tagger
============
Marks finished builds as queued by culprit finding or not.

A build was queued by culprit finding iff its parameters carry the
range-top marker written by the bisection planner. The tag name for each
case comes from the settings; an empty name means "don't tag".
"""
import logging
from typing import List, Optional

from culprit_finder.core.constants import RANGE_TOP_BUILD_ID
from culprit_finder.core.settings import CulpritFinderSettings
from culprit_finder.models.build_record import BuildRecord

logger = logging.getLogger(__name__)


def is_bisection_build(build: BuildRecord) -> bool:
    return RANGE_TOP_BUILD_ID in build.parameters


def decide_tag(build: BuildRecord, settings: CulpritFinderSettings) -> Optional[str]:
    """Return the tag to add to `build`, or None."""
    if is_bisection_build(build):
        tag = settings.tag_triggered
    else:
        tag = settings.tag_not_triggered

    if not tag:
        return None
    logger.debug("Tagging build %s with '%s'", build.number, tag)
    return tag


def apply_tag(build: BuildRecord, tag: str) -> List[str]:
    """Existing tags plus `tag`. Never removes; duplicates are left to the host."""
    return list(build.tags) + [tag]
