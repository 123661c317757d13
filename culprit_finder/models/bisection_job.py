"""
Bisection Job Request Model
===========================
One build to enqueue while looking for the change that broke a build.

Fields:
    build_type_id   - configuration to build (same as the investigated build)
    changes_up_to   - build everything up to and including this change
    parameters      - full range metadata (see core/constants.py), identical
                      for every request of one plan
    reason          - human-readable queue comment
"""
from typing import Dict

from pydantic import BaseModel, ConfigDict

from .build_record import VcsChange


class BisectionJobRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    build_type_id: str
    changes_up_to: VcsChange
    parameters: Dict[str, str]
    reason: str
