"""
Orchestrator
============
Runs culprit finding for one finished build.

Sequence:
    1. Resolve the previous finished build (may not exist)
    2. Tag the finished build if the settings ask for it
    3. Successful build → stop, without classifying failures
    4. Classify build problems and test failures, each with its own sensitivity
    5. Trigger decision (status → change count → relevant failures)
    6. Plan bisection builds and submit them, newest change first

Fault Tolerance:
    - A failed tag update is logged; culprit finding still runs
    - Each submission is independent: a rejected or crashing submission is
      logged and recorded, the remaining requests are still submitted
    - A failed previous-build lookup propagates; without a baseline the
      New sensitivity would count every failure as new

Concurrency:
    One synchronous call per event. The orchestrator keeps nothing between
    calls besides its build server, so one instance may serve concurrent events.
"""
import logging
from typing import List

from culprit_finder.agents import bisection_planner, build_tagger
from culprit_finder.agents.trigger_decision import evaluate_trigger
from culprit_finder.core.settings import CulpritFinderSettings
from culprit_finder.models.bisection_job import BisectionJobRequest
from culprit_finder.models.build_record import BuildRecord, FailureSnapshot
from culprit_finder.models.culprit_report import CulpritFindingReport
from culprit_finder.parser.failure_classifier import BUILD_PROBLEMS, TEST_FAILURES, relevant_failures
from culprit_finder.services.build_server import BuildServer
from culprit_finder.utils.decision_reasons import BUILD_SUCCEEDED

logger = logging.getLogger(__name__)


class Orchestrator:
    """Composes tagging, classification, decision, planning and submission."""

    def __init__(self, build_server: BuildServer) -> None:
        self.build_server = build_server

    def on_build_finished(
        self,
        new_build: BuildRecord,
        settings: CulpritFinderSettings,
    ) -> CulpritFindingReport:
        """Handle one build-finished event and report what was done."""
        old_build = self.build_server.get_previous_finished(new_build)
        logger.debug(
            "Build %s finished (%s); previous build: %s",
            new_build.number, new_build.status,
            old_build.number if old_build is not None else None,
        )

        report = CulpritFindingReport(
            build_id=new_build.id,
            build_number=new_build.number,
            previous_build_id=old_build.id if old_build is not None else None,
            previous_build_number=old_build.number if old_build is not None else None,
        )

        # --- Tagging ---
        tag = build_tagger.decide_tag(new_build, settings)
        if tag:
            try:
                self.build_server.set_tags(new_build, build_tagger.apply_tag(new_build, tag))
                report.tag_applied = tag
            except Exception as exc:
                logger.error("Tagging build %s with '%s' failed: %s", new_build.number, tag, exc)

        # --- Cheap precondition ---
        if new_build.is_successful:
            logger.debug("Build %s succeeded; we're done", new_build.number)
            report.decision_reason = BUILD_SUCCEEDED
            return report

        # --- Classification ---
        current = FailureSnapshot.of(new_build)
        previous = FailureSnapshot.of(old_build) if old_build is not None else None

        problems = relevant_failures(
            BUILD_PROBLEMS, current, previous, settings.sensitivity_for(BUILD_PROBLEMS.kind_id)
        )
        tests = relevant_failures(
            TEST_FAILURES, current, previous, settings.sensitivity_for(TEST_FAILURES.kind_id)
        )
        report.relevant_build_problems = sorted(problems)
        report.relevant_test_failures = sorted(tests)

        # --- Decision ---
        verdict = evaluate_trigger(new_build, problems, tests)
        report.triggered = verdict.triggered
        report.decision_reason = verdict.reason
        if not verdict.triggered:
            return report

        # --- Planning & submission ---
        requests = bisection_planner.plan(new_build, old_build)
        self._submit_all(new_build, requests, report)

        logger.info(
            "Build %s: queued %d bisection build(s), %d failed",
            new_build.number, len(report.queued_changes), len(report.failed_changes),
        )
        return report

    def _submit_all(
        self,
        new_build: BuildRecord,
        requests: List[BisectionJobRequest],
        report: CulpritFindingReport,
    ) -> None:
        """Submit requests in plan order; one failure never blocks the rest."""
        for request in requests:
            change_id = request.changes_up_to.id
            logger.info("Queueing change '%s' having failed build %s", change_id, new_build.number)
            try:
                accepted = self.build_server.queue_build(request)
            except Exception as exc:
                logger.error("Queueing change '%s' raised: %s", change_id, exc, exc_info=True)
                accepted = False

            if accepted:
                report.queued_changes.append(change_id)
            else:
                logger.error("Change '%s' was not queued", change_id)
                report.failed_changes.append(change_id)
