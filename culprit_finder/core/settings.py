"""
Culprit Finding Settings
========================
Immutable schema for the per-build-type options that steer culprit finding.

Recognised keys (string-keyed map, as supplied by the host or settings file):
    trigger_on_build_problem  - All | New | No   (default: New)
    trigger_on_test_failure   - All | New | No   (default: New)
    tag_triggered             - tag for builds queued by culprit finding ("" = no tag)
    tag_not_triggered         - tag for all other builds ("" = no tag)

Parsing is forgiving: sensitivity values are stripped and matched
case-insensitively, "None" is accepted for "No", and anything unrecognised
(or null) falls back to New. Tag names are used exactly as given.
A bad setting never fails a build-finished event.

Settings File:
    When an event does not carry its own map, the map is read from a YAML file
    with an optional `defaults` section and per-build-type overrides:

        defaults:
          trigger_on_test_failure: New
        build_types:
          Project_Build:
            tag_triggered: culprit-finding
"""
import os
import logging
from enum import Enum
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict

from culprit_finder.core.constants import BUILD_PROBLEM_KIND, TEST_FAILURE_KIND

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Setting Keys
# ---------------------------------------------------------------------------
TRIGGER_ON_BUILD_PROBLEM = "trigger_on_build_problem"
TRIGGER_ON_TEST_FAILURE = "trigger_on_test_failure"
TAG_TRIGGERED = "tag_triggered"
TAG_NOT_TRIGGERED = "tag_not_triggered"

ALL_SETTING_KEYS = frozenset({
    TRIGGER_ON_BUILD_PROBLEM,
    TRIGGER_ON_TEST_FAILURE,
    TAG_TRIGGERED,
    TAG_NOT_TRIGGERED,
})


class SettingsFileError(Exception):
    """Raised when the settings file exists but does not have the expected shape."""


class SensitivityMode(str, Enum):
    """Which failures of one kind may trigger culprit finding."""

    ALL = "All"
    NEW = "New"
    NONE = "No"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SensitivityMode":
        """Map a raw setting value to a mode, defaulting to NEW."""
        if value is None:
            return cls.NEW
        key = value.strip().lower()
        if key == "none":
            return cls.NONE
        for mode in cls:
            if mode.value.lower() == key:
                return mode
        logger.debug("Unrecognised sensitivity %r, using %s", value, cls.NEW.value)
        return cls.NEW


class CulpritFinderSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    build_problem_sensitivity: SensitivityMode = SensitivityMode.NEW
    test_failure_sensitivity: SensitivityMode = SensitivityMode.NEW
    tag_triggered: str = ""
    tag_not_triggered: str = ""

    @classmethod
    def from_parameters(cls, parameters: Optional[Mapping[str, str]]) -> "CulpritFinderSettings":
        """
        Build settings from a raw string-keyed map.

        Unknown keys are ignored; missing keys take their defaults.
        """
        parameters = parameters or {}
        unknown = set(parameters) - ALL_SETTING_KEYS
        if unknown:
            logger.debug("Ignoring unknown culprit finding settings: %s", sorted(unknown))

        return cls(
            build_problem_sensitivity=SensitivityMode.parse(parameters.get(TRIGGER_ON_BUILD_PROBLEM)),
            test_failure_sensitivity=SensitivityMode.parse(parameters.get(TRIGGER_ON_TEST_FAILURE)),
            tag_triggered=parameters.get(TAG_TRIGGERED) or "",
            tag_not_triggered=parameters.get(TAG_NOT_TRIGGERED) or "",
        )

    def sensitivity_for(self, kind_id: str) -> SensitivityMode:
        """Return the configured mode for a failure kind id."""
        if kind_id == BUILD_PROBLEM_KIND:
            return self.build_problem_sensitivity
        if kind_id == TEST_FAILURE_KIND:
            return self.test_failure_sensitivity
        return SensitivityMode.NEW


def load_settings_map(path: str, build_type_id: str) -> Dict[str, str]:
    """
    Read the raw settings map for one build type from a YAML settings file.

    Parameters
    ----------
    path : str
        Path to the YAML file. A missing file yields an empty map.
    build_type_id : str
        Build configuration whose overrides are merged over `defaults`.

    Returns
    -------
    Dict[str, str]
        Flat map with every value converted to str.

    Raises
    ------
    SettingsFileError
        If the file or one of its sections is not a mapping.
    """
    if not os.path.isfile(path):
        logger.debug("Settings file %s not found, using defaults", path)
        return {}

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise SettingsFileError(f"{path}: invalid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise SettingsFileError(f"{path}: top level must be a mapping")

    defaults = data.get("defaults") or {}
    build_types = data.get("build_types") or {}
    if not isinstance(defaults, dict) or not isinstance(build_types, dict):
        raise SettingsFileError(f"{path}: 'defaults' and 'build_types' must be mappings")

    overrides = build_types.get(build_type_id) or {}
    if not isinstance(overrides, dict):
        raise SettingsFileError(f"{path}: build_types.{build_type_id} must be a mapping")

    return normalize_settings_map({**defaults, **overrides})


def normalize_settings_map(raw: Mapping[Any, Any]) -> Dict[str, str]:
    """
    Flatten a loosely typed settings map (YAML or JSON) to str → str.

    None becomes "" (unset), booleans become "Yes"/"No", everything else str().
    """
    merged: Dict[str, str] = {}
    for key, value in raw.items():
        if value is None:
            value = ""
        elif isinstance(value, bool):
            # YAML 1.1 reads a bare `No` as False
            value = "Yes" if value else "No"
        merged[str(key)] = str(value)
    return merged
