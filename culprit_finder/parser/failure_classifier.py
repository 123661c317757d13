"""
Failure Classifier
==================
Decides which failures of a finished build are "relevant", i.e. allowed to
trigger culprit finding, by comparing against the previous finished build.

Sensitivity per failure kind:
    No   - nothing is relevant
    All  - every current failure is relevant, the previous build is ignored
    New  - current minus previous (default); no previous build = empty baseline

Failure Kinds:
    Build problems and failed tests are handled by the same code. A FailureKind
    only says how to pull its identities out of a FailureSnapshot, so adding a
    kind never means copying the diff logic.

Pure functions. Logging is for tracing decisions only.
"""
import logging
from dataclasses import dataclass
from typing import Callable, FrozenSet, Optional

from culprit_finder.core.constants import BUILD_PROBLEM_KIND, TEST_FAILURE_KIND
from culprit_finder.core.settings import SensitivityMode
from culprit_finder.models.build_record import FailureSnapshot

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Failure Kinds
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class FailureKind:
    """One kind of failure with its own sensitivity setting."""
    kind_id: str
    label: str
    extract: Callable[[FailureSnapshot], FrozenSet[str]]


BUILD_PROBLEMS = FailureKind(
    kind_id=BUILD_PROBLEM_KIND,
    label="build problems",
    extract=lambda snapshot: snapshot.build_problem_ids,
)

TEST_FAILURES = FailureKind(
    kind_id=TEST_FAILURE_KIND,
    label="test failures",
    extract=lambda snapshot: snapshot.test_names,
)

FAILURE_KINDS = (BUILD_PROBLEMS, TEST_FAILURES)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def relevant_failures(
    kind: FailureKind,
    current: FailureSnapshot,
    previous: Optional[FailureSnapshot],
    mode: SensitivityMode,
) -> FrozenSet[str]:
    """
    Return the failures of `kind` that may trigger culprit finding.

    Parameters
    ----------
    kind : FailureKind
        Which failures to look at.
    current : FailureSnapshot
        Failures of the build that just finished.
    previous : Optional[FailureSnapshot]
        Failures of the previous finished build, None if there is none.
    mode : SensitivityMode
        Configured sensitivity for this kind.

    Returns
    -------
    FrozenSet[str]
        Identities of the relevant failures.
    """
    if mode is SensitivityMode.NONE:
        logger.debug("%s do not trigger culprit finding", kind.label.capitalize())
        return frozenset()

    current_ids = kind.extract(current)
    logger.debug("This build's %s: %s", kind.label, sorted(current_ids))

    if mode is SensitivityMode.ALL:
        logger.debug("Reporting all %s", kind.label)
        return current_ids

    previous_ids = kind.extract(previous) if previous is not None else frozenset()
    logger.debug("Previous build's %s: %s", kind.label, sorted(previous_ids))

    new_ids = current_ids - previous_ids
    logger.debug("Reporting new %s: %s", kind.label, sorted(new_ids))
    return new_ids


def relevant_build_problems(
    current: FailureSnapshot,
    previous: Optional[FailureSnapshot],
    mode: SensitivityMode,
) -> FrozenSet[str]:
    """Relevant build problem identities."""
    return relevant_failures(BUILD_PROBLEMS, current, previous, mode)


def relevant_test_failures(
    current: FailureSnapshot,
    previous: Optional[FailureSnapshot],
    mode: SensitivityMode,
) -> FrozenSet[str]:
    """Relevant failed test names."""
    return relevant_failures(TEST_FAILURES, current, previous, mode)
