"""
POST /build-finished
Called by the build server once per finished build.
Runs culprit finding and returns a CulpritFindingReport.

Settings come from the event when it carries them, otherwise from the
YAML settings file for the build's configuration.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from culprit_finder.agents.orchestrator import Orchestrator
from culprit_finder.core.config import BUILD_SERVER_URL, CULPRIT_SETTINGS_FILE
from culprit_finder.core.settings import (
    CulpritFinderSettings,
    SettingsFileError,
    load_settings_map,
    normalize_settings_map,
)
from culprit_finder.models.build_record import BuildRecord
from culprit_finder.models.culprit_report import CulpritFindingReport
from culprit_finder.services.build_server import BuildServerError, HttpBuildServer

logger = logging.getLogger(__name__)

router = APIRouter()


class BuildFinishedEvent(BaseModel):
    build: BuildRecord
    # Values may be null or non-strings; unset settings take their defaults
    settings: Optional[Dict[str, Any]] = None


def _resolve_settings(event: BuildFinishedEvent) -> CulpritFinderSettings:
    if event.settings is not None:
        return CulpritFinderSettings.from_parameters(normalize_settings_map(event.settings))
    raw = load_settings_map(CULPRIT_SETTINGS_FILE, event.build.build_type_id)
    return CulpritFinderSettings.from_parameters(raw)


# Plain def: FastAPI runs it in its thread pool, events never block each other
@router.post("/build-finished", response_model=CulpritFindingReport)
def build_finished(event: BuildFinishedEvent):
    if not BUILD_SERVER_URL:
        raise HTTPException(status_code=503, detail="BUILD_SERVER_URL not set")

    try:
        settings = _resolve_settings(event)
    except SettingsFileError as exc:
        logger.error("Settings for %s unreadable: %s", event.build.build_type_id, exc)
        raise HTTPException(status_code=500, detail=str(exc))

    orchestrator = Orchestrator(HttpBuildServer(BUILD_SERVER_URL))
    try:
        return orchestrator.on_build_finished(event.build, settings)
    except BuildServerError as exc:
        logger.error("Build server error for build %s: %s", event.build.number, exc)
        raise HTTPException(status_code=502, detail=str(exc))
