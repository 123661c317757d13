"""
Bisection Planner Tests
=======================
Order, exclusion of the oldest change, and range metadata.
"""
import pytest

from culprit_finder.agents.bisection_planner import plan, range_parameters
from culprit_finder.core.constants import (
    NO_BUILD,
    RANGE_BOTTOM_BUILD_ID,
    RANGE_BOTTOM_BUILD_NUMBER,
    RANGE_TOP_BUILD_ID,
    RANGE_TOP_BUILD_NUMBER,
)
from culprit_finder.models.build_record import BuildRecord, VcsChange


def _new_build(change_ids=("C1", "C2", "C3")):
    return BuildRecord(
        id=205, number="1.0.205", build_type_id="Project_Build", status="FAILURE",
        changes=[VcsChange(id=c) for c in change_ids],
    )


def _old_build():
    return BuildRecord(id=198, number="1.0.198", build_type_id="Project_Build", status="SUCCESS")


def test_plan_is_newest_first_without_oldest():
    requests = plan(_new_build(), _old_build())
    assert [r.changes_up_to.id for r in requests] == ["C3", "C2"]


@pytest.mark.parametrize("count", [0, 1, 2, 5])
def test_plan_size_is_changes_minus_one(count):
    ids = [f"C{i}" for i in range(1, count + 1)]
    requests = plan(_new_build(ids), _old_build())
    assert len(requests) == max(count - 1, 0)
    assert "C1" not in [r.changes_up_to.id for r in requests]


def test_every_request_carries_same_range():
    requests = plan(_new_build(("C1", "C2", "C3", "C4")), _old_build())
    expected = {
        RANGE_TOP_BUILD_ID: "205",
        RANGE_TOP_BUILD_NUMBER: "1.0.205",
        RANGE_BOTTOM_BUILD_ID: "198",
        RANGE_BOTTOM_BUILD_NUMBER: "1.0.198",
    }
    assert all(r.parameters == expected for r in requests)


def test_missing_previous_build_uses_sentinel():
    requests = plan(_new_build(), None)
    for r in requests:
        assert r.parameters[RANGE_BOTTOM_BUILD_ID] == NO_BUILD
        assert r.parameters[RANGE_BOTTOM_BUILD_NUMBER] == NO_BUILD
        assert r.parameters[RANGE_TOP_BUILD_ID] == "205"


def test_requests_target_same_configuration_with_reason():
    for r in plan(_new_build(), _old_build()):
        assert r.build_type_id == "Project_Build"
        assert r.reason == "Culprit finding, failures of 1.0.205"


def test_parameter_maps_are_not_shared():
    requests = plan(_new_build(), _old_build())
    assert requests[0].parameters is not requests[1].parameters


def test_range_parameters_keys():
    params = range_parameters(_new_build(), None)
    assert set(params) == {
        RANGE_TOP_BUILD_ID, RANGE_TOP_BUILD_NUMBER,
        RANGE_BOTTOM_BUILD_ID, RANGE_BOTTOM_BUILD_NUMBER,
    }
