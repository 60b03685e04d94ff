from __future__ import annotations

from pathlib import Path

import pytest

from sprout.config import (
    DEFAULT_LIBRARIES,
    ProjectSpec,
    ScaffoldSettings,
    TemplateProfile,
    interpreter_path,
    load_settings,
)
from sprout.errors import ConfigError


def test_default_settings_match_original_script():
    settings = ScaffoldSettings()
    assert settings.default_libraries == DEFAULT_LIBRARIES
    assert settings.venv_dir == "venv"
    assert settings.installer == "uv"
    assert settings.env_info_file == ".env_info.txt"
    assert settings.init_git is True


def test_merged_ignores_none_and_validates():
    settings = ScaffoldSettings().merged(venv_dir=".venv", installer=None)
    assert settings.venv_dir == ".venv"
    assert settings.installer == "uv"

    with pytest.raises(ConfigError):
        ScaffoldSettings().merged(venv_dir="")


def test_load_settings_defaults_without_path():
    assert load_settings(None) == ScaffoldSettings()


def test_load_settings_from_tool_table(tmp_path: Path):
    config = tmp_path / "pyproject.toml"
    config.write_text(
        '[project]\nname = "x"\n\n[tool.sprout]\ninstaller = "venv"\ndefault_libraries = ["pandas"]\n',
        encoding="utf-8",
    )
    settings = load_settings(config)
    assert settings.installer == "venv"
    assert settings.default_libraries == ("pandas",)


def test_load_settings_from_top_level(tmp_path: Path):
    config = tmp_path / "sprout.toml"
    config.write_text('venv_dir = ".venv"\ninit_git = false\n', encoding="utf-8")
    settings = load_settings(config)
    assert settings.venv_dir == ".venv"
    assert settings.init_git is False


@pytest.mark.parametrize(
    "content",
    [
        "not = [valid",
        'unknown_key = "x"\n',
        "init_git = [1, 2]\n",
        "[tool]\nsprout = 1\n",
        '[tool]\nsprout = "x"\n',
    ],
)
def test_load_settings_rejects_bad_files(tmp_path: Path, content: str):
    config = tmp_path / "sprout.toml"
    config.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(config)


def test_load_settings_missing_file(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_settings(tmp_path / "absent.toml")


def test_profile_lock_files():
    assert TemplateProfile.MINIMAL.lock_file == "requirements.txt"
    assert TemplateProfile.PACKAGED.lock_file == "requirements.lock"
    assert TemplateProfile.PACKAGED.requires_package_name
    assert not TemplateProfile.MINIMAL.requires_package_name


def test_context_includes_environment_paths(tmp_path: Path):
    spec = ProjectSpec(
        name="my-data-app",
        package_name="my_data_app",
        profile=TemplateProfile.PACKAGED,
        root=tmp_path / "my-data-app",
    )
    context = spec.context(ScaffoldSettings())
    assert context["name"] == "my-data-app"
    assert context["package_name"] == "my_data_app"
    assert context["distribution_name"] == "my-data-app"
    assert context["interpreter"] == str(interpreter_path(spec.root, "venv"))
    assert context["lock_file"] == "requirements.lock"
    assert context["libraries"] == list(DEFAULT_LIBRARIES)
