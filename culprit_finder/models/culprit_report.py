"""
Culprit Finding Report
======================
Pydantic model summarising what one build-finished event led to.

Fields:
    build_id / build_number                     - the finished build
    previous_build_id / previous_build_number   - baseline build, None if none exists
    tag_applied             - tag added to the finished build, None if none
    triggered               - True if bisection builds were planned
    decision_reason         - constant from utils/decision_reasons.py ("" until decided)
    relevant_build_problems - sorted build problem identities counted as relevant
    relevant_test_failures  - sorted test names counted as relevant
    queued_changes          - change ids queued successfully, in submission order
    failed_changes          - change ids whose submission failed

Used by:
    - api/build_finished.py as the response body
    - Tests, to assert on a full run without inspecting logs
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from culprit_finder.utils.decision_reasons import ALL_DECISION_REASONS


class CulpritFindingReport(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    build_id: int
    build_number: str
    previous_build_id: Optional[int] = None
    previous_build_number: Optional[str] = None
    tag_applied: Optional[str] = None

    triggered: bool = False
    decision_reason: str = ""
    relevant_build_problems: List[str] = []
    relevant_test_failures: List[str] = []

    queued_changes: List[str] = []
    failed_changes: List[str] = []

    @field_validator("decision_reason")
    @classmethod
    def validate_decision_reason(cls, v: str) -> str:
        if v and v not in ALL_DECISION_REASONS:
            raise ValueError(f"Unknown decision reason: {v}")
        return v
