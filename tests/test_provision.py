from __future__ import annotations

from pathlib import Path

import pytest

from sprout.config import ScaffoldSettings, TemplateProfile, interpreter_path
from sprout.errors import ConfigError, NonZeroExitError, ToolNotFoundError
from sprout.provision import UvProvisioner, VenvPipProvisioner, create_provisioner
from sprout.validate import validate


def _prepared_spec(tmp_path: Path, profile: TemplateProfile):
    spec = validate("demo", profile, cwd=tmp_path)
    spec.root.mkdir()
    return spec


def test_uv_provisioner_minimal(tmp_path: Path, runner, tools_available, frozen_requirements):
    spec = _prepared_spec(tmp_path, TemplateProfile.MINIMAL)
    settings = ScaffoldSettings()

    result = UvProvisioner(runner).provision(spec, settings)

    python = str(interpreter_path(spec.root, "venv"))
    assert runner.commands == [
        ("uv", "venv", "venv", "--seed"),
        ("uv", "pip", "install", "--python", python, "pandas", "streamlit", "duckdb", "jupyterlab", "pytest"),
        ("uv", "pip", "freeze", "--exclude-editable", "--python", python),
    ]
    assert all(cwd == spec.root for _, cwd in runner.calls)
    assert result.lock_file == spec.root / "requirements.txt"
    assert result.lock_file.read_text(encoding="utf-8") == frozen_requirements


def test_venv_provisioner_packaged_installs_project(tmp_path: Path, runner, tools_available):
    spec = _prepared_spec(tmp_path, TemplateProfile.PACKAGED)

    result = VenvPipProvisioner(runner, python="python3.12").provision(spec, ScaffoldSettings(venv_dir=".venv"))

    python = str(interpreter_path(spec.root, ".venv"))
    assert runner.commands == [
        ("python3.12", "-m", "venv", ".venv"),
        (python, "-m", "pip", "install", "-e", ".[dev]"),
        (python, "-m", "pip", "freeze", "--exclude-editable"),
    ]
    assert result.installed == ("-e", ".[dev]")
    assert (spec.root / "requirements.lock").is_file()


def test_install_can_be_skipped(tmp_path: Path, runner, tools_available):
    spec = _prepared_spec(tmp_path, TemplateProfile.MINIMAL)
    UvProvisioner(runner).provision(spec, ScaffoldSettings(install=False))
    assert [argv[:3] for argv in runner.commands] == [("uv", "venv", "venv"), ("uv", "pip", "freeze")]


def test_missing_tool_is_reported(tmp_path: Path, runner, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr("sprout.tools.shutil.which", lambda tool: None)
    spec = _prepared_spec(tmp_path, TemplateProfile.MINIMAL)
    with pytest.raises(ToolNotFoundError):
        UvProvisioner(runner).provision(spec, ScaffoldSettings())
    assert runner.calls == []


def test_failing_install_propagates(tmp_path: Path, make_runner, tools_available):
    runner = make_runner(failing=["uv pip install"])
    spec = _prepared_spec(tmp_path, TemplateProfile.MINIMAL)
    with pytest.raises(NonZeroExitError):
        UvProvisioner(runner).provision(spec, ScaffoldSettings())
    assert not (spec.root / "requirements.txt").exists()


def test_create_provisioner():
    assert isinstance(create_provisioner("uv"), UvProvisioner)
    venv = create_provisioner("venv", python="python3.11")
    assert isinstance(venv, VenvPipProvisioner)
    assert venv.python == "python3.11"
    with pytest.raises(ConfigError):
        create_provisioner("conda")
