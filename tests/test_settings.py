"""
Settings Tests
==============
Parsing of the raw settings map and the YAML settings file.
"""
import pytest
from pydantic import ValidationError

from culprit_finder.core.constants import BUILD_PROBLEM_KIND, TEST_FAILURE_KIND
from culprit_finder.core.settings import (
    CulpritFinderSettings,
    SensitivityMode,
    SettingsFileError,
    load_settings_map,
    normalize_settings_map,
)


@pytest.mark.parametrize("raw,expected", [
    ("All", SensitivityMode.ALL),
    ("New", SensitivityMode.NEW),
    ("No", SensitivityMode.NONE),
    (" all ", SensitivityMode.ALL),
    ("none", SensitivityMode.NONE),
    ("sometimes", SensitivityMode.NEW),
    ("", SensitivityMode.NEW),
    (None, SensitivityMode.NEW),
])
def test_sensitivity_parse(raw, expected):
    assert SensitivityMode.parse(raw) is expected


def test_defaults_from_empty_map():
    settings = CulpritFinderSettings.from_parameters({})
    assert settings.build_problem_sensitivity is SensitivityMode.NEW
    assert settings.test_failure_sensitivity is SensitivityMode.NEW
    assert settings.tag_triggered == ""
    assert settings.tag_not_triggered == ""
    assert CulpritFinderSettings.from_parameters(None) == settings


def test_from_parameters_reads_each_key():
    settings = CulpritFinderSettings.from_parameters({
        "trigger_on_build_problem": "No",
        "trigger_on_test_failure": "All",
        "tag_triggered": "culprit-finding",
        "tag_not_triggered": "organic",
        "unrelated": "x",
    })
    assert settings.sensitivity_for(BUILD_PROBLEM_KIND) is SensitivityMode.NONE
    assert settings.sensitivity_for(TEST_FAILURE_KIND) is SensitivityMode.ALL
    assert settings.tag_triggered == "culprit-finding"
    assert settings.tag_not_triggered == "organic"


def test_tag_names_are_used_verbatim():
    settings = CulpritFinderSettings.from_parameters({
        "tag_triggered": " culprit-finding ",
        "tag_not_triggered": " ",
    })
    assert settings.tag_triggered == " culprit-finding "
    assert settings.tag_not_triggered == " "


def test_exact_and_lenient_sensitivity_spellings_agree():
    for raw in ("No", "no", "NO", "None"):
        assert SensitivityMode.parse(raw) is SensitivityMode.NONE
    for raw in ("All", "all", "ALL"):
        assert SensitivityMode.parse(raw) is SensitivityMode.ALL


def test_normalize_settings_map_handles_loose_values():
    raw = normalize_settings_map({
        "trigger_on_build_problem": None,
        "trigger_on_test_failure": False,
        "tag_triggered": None,
        "tag_not_triggered": 42,
    })
    assert raw == {
        "trigger_on_build_problem": "",
        "trigger_on_test_failure": "No",
        "tag_triggered": "",
        "tag_not_triggered": "42",
    }
    settings = CulpritFinderSettings.from_parameters(raw)
    assert settings.build_problem_sensitivity is SensitivityMode.NEW
    assert settings.test_failure_sensitivity is SensitivityMode.NONE
    assert settings.tag_triggered == ""


def test_settings_are_immutable():
    settings = CulpritFinderSettings()
    with pytest.raises(ValidationError):
        settings.tag_triggered = "x"


# ===================================================================
# Settings file
# ===================================================================
def test_missing_file_is_empty_map(tmp_path):
    assert load_settings_map(str(tmp_path / "absent.yml"), "bt") == {}


def test_build_type_overrides_defaults(tmp_path):
    path = tmp_path / "settings.yml"
    path.write_text(
        "defaults:\n"
        "  trigger_on_build_problem: All\n"
        "  tag_not_triggered: organic\n"
        "build_types:\n"
        "  Project_Build:\n"
        "    trigger_on_build_problem: New\n"
        "    tag_triggered: culprit-finding\n",
        encoding="utf-8",
    )

    assert load_settings_map(str(path), "Project_Build") == {
        "trigger_on_build_problem": "New",
        "tag_not_triggered": "organic",
        "tag_triggered": "culprit-finding",
    }
    assert load_settings_map(str(path), "Other")["trigger_on_build_problem"] == "All"


def test_yaml_boolean_no_is_read_as_no(tmp_path):
    path = tmp_path / "settings.yml"
    path.write_text("defaults:\n  trigger_on_test_failure: No\n", encoding="utf-8")

    raw = load_settings_map(str(path), "bt")
    assert raw == {"trigger_on_test_failure": "No"}
    assert CulpritFinderSettings.from_parameters(raw).test_failure_sensitivity is SensitivityMode.NONE


@pytest.mark.parametrize("content", ["- a\n- b\n", "defaults: [1, 2]\n", "build_types:\n  bt: nope\n"])
def test_malformed_file_raises(tmp_path, content):
    path = tmp_path / "settings.yml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(SettingsFileError):
        load_settings_map(str(path), "bt")
