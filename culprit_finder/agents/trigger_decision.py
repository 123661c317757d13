"""
Trigger Decision
================
Decides whether a finished build warrants culprit finding.

Checks, in order (first hit wins):
    1. Build succeeded                 → no  (BUILD_SUCCEEDED)
    2. At most one containing change   → no  (NO_INTERMEDIATE_CHANGES)
    3. No relevant failure of any kind → no  (NO_RELEVANT_FAILURES)
    4. Otherwise                       → yes (NEW_FAILURES)

Status and change count are checked before the relevant failures so a cheap
precondition always decides first.
"""
import logging
from dataclasses import dataclass
from typing import AbstractSet

from culprit_finder.models.build_record import BuildRecord
from culprit_finder.utils.decision_reasons import (
    BUILD_SUCCEEDED,
    NEW_FAILURES,
    NO_INTERMEDIATE_CHANGES,
    NO_RELEVANT_FAILURES,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TriggerVerdict:
    """Immutable result of the trigger decision."""
    triggered: bool
    reason: str


def evaluate_trigger(
    build: BuildRecord,
    relevant_problems: AbstractSet[str],
    relevant_tests: AbstractSet[str],
) -> TriggerVerdict:
    """Run the ordered checks and say why culprit finding does or does not run."""
    if build.is_successful:
        logger.debug("Build %s succeeded; nothing to do", build.number)
        return TriggerVerdict(False, BUILD_SUCCEEDED)

    if len(build.changes) <= 1:
        logger.debug("Build %s has no intermediate changes; nothing to do", build.number)
        return TriggerVerdict(False, NO_INTERMEDIATE_CHANGES)

    if not relevant_problems and not relevant_tests:
        logger.debug("Build %s has no relevant failures; nothing to do", build.number)
        return TriggerVerdict(False, NO_RELEVANT_FAILURES)

    logger.info("Build %s will look for a culprit", build.number)
    return TriggerVerdict(True, NEW_FAILURES)


def should_trigger(
    build: BuildRecord,
    relevant_problems: AbstractSet[str],
    relevant_tests: AbstractSet[str],
) -> bool:
    return evaluate_trigger(build, relevant_problems, relevant_tests).triggered
