"""
Build Record Model
==================
Read-only snapshots of host build-server objects.

The host owns builds, changes and failures as live objects; the adapter layer
(services/build_server.py, api/build_finished.py) translates them into these
frozen pydantic models so the decision logic never touches host state.

Fields (BuildRecord):
    id              - unique numeric build id
    number          - human-readable build number (not necessarily numeric)
    build_type_id   - build configuration the build ran on
    status          - "SUCCESS" | "FAILURE" | "UNKNOWN"
    build_problems  - build-level problems reported by the host
    test_failures   - failed tests reported by the host
    changes         - VCS changes first included in this build, OLDEST FIRST
    parameters      - resolved build parameters (string → string)
    tags            - tags currently attached to the build
"""
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Literal, Optional

from pydantic import BaseModel, ConfigDict

BuildStatus = Literal["SUCCESS", "FAILURE", "UNKNOWN"]


class VcsChange(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    version: str = ""
    description: str = ""


class BuildProblem(BaseModel):
    model_config = ConfigDict(frozen=True)

    identity: str
    type: str = ""
    description: str = ""


class FailedTest(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str


class BuildRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    number: str
    build_type_id: str
    status: BuildStatus = "UNKNOWN"
    build_problems: List[BuildProblem] = []
    test_failures: List[FailedTest] = []
    changes: List[VcsChange] = []
    parameters: Dict[str, str] = {}
    tags: List[str] = []

    @property
    def is_successful(self) -> bool:
        return self.status == "SUCCESS"


@dataclass(frozen=True)
class FailureSnapshot:
    """Failure identities observed in one build. Derived, never persisted."""
    build_problem_ids: FrozenSet[str] = frozenset()
    test_names: FrozenSet[str] = frozenset()

    @classmethod
    def of(cls, build: Optional[BuildRecord]) -> "FailureSnapshot":
        """Snapshot a build's failures; no build means no failures."""
        if build is None:
            return cls()
        return cls(
            build_problem_ids=frozenset(p.identity for p in build.build_problems),
            test_names=frozenset(t.name for t in build.test_failures),
        )
