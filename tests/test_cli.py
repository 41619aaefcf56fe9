# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI tests driving the Typer application end to end with fake subprocesses."""

from __future__ import annotations

import json
from pathlib import Path
from subprocess import CompletedProcess

import pytest
from typer.testing import CliRunner

from avm.cli.app import app
from avm.cli.main import normalize_argv
from avm.serialization import utc_timestamp


@pytest.fixture
def npm_calls(monkeypatch: pytest.MonkeyPatch, package_writer) -> list[list[str]]:
    """Replace npm with a fake that lays out the requested package."""

    calls: list[list[str]] = []

    def fake_run_command(args, **kwargs):  # noqa: ANN001
        command = list(args)
        calls.append(command)
        prefix = Path(command[command.index("--prefix") + 1])
        spec = command[7]
        package, _, _ = spec.rpartition("@")
        package_writer(prefix, package)
        return CompletedProcess(args=command, returncode=0, stdout="", stderr="")

    monkeypatch.setattr("avm.installer.run_command", fake_run_command)
    return calls


@pytest.fixture
def launches(monkeypatch: pytest.MonkeyPatch) -> list[list[str]]:
    calls: list[list[str]] = []

    def fake_run_command(args, **kwargs):  # noqa: ANN001
        calls.append(list(args))
        return CompletedProcess(args=list(args), returncode=3, stdout="", stderr="")

    monkeypatch.setattr("avm.launcher.run_command", fake_run_command)
    return calls


def _invoke(*args: str):
    return CliRunner().invoke(app, ["--no-emoji", *args])


def _state(avm_home: Path) -> dict[str, object]:
    return json.loads((avm_home / "state.json").read_text(encoding="utf-8"))


def test_install_command(project_dir: Path, avm_home: Path, npm_calls: list[list[str]]) -> None:
    result = _invoke("install", "codex@0.1.0", "--registry", "https://registry.example.test")

    assert result.exit_code == 0, result.output
    assert "Installed codex@0.1.0 (@openai/codex)" in result.stdout
    assert "> Installing @openai/codex@0.1.0" in result.stdout
    assert npm_calls == [
        [
            "npm",
            "install",
            "--prefix",
            str(avm_home / "agents" / "codex" / "0.1.0"),
            "--no-package-lock",
            "--no-progress",
            "--no-fund",
            "@openai/codex@0.1.0",
            "--registry",
            "https://registry.example.test",
        ],
    ]
    assert not (avm_home / "state.json").exists()


def test_install_twice_uses_cache(project_dir: Path, npm_calls: list[list[str]]) -> None:
    assert _invoke("install", "codex@0.1.0").exit_code == 0
    second = _invoke("install", "codex@0.1.0")

    assert second.exit_code == 0
    assert "> Installing" not in second.stdout
    assert len(npm_calls) == 1


def test_install_failure_exits_with_error(project_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    from avm.process_utils import SubprocessExecutionError

    def failing_run_command(args, **kwargs):  # noqa: ANN001
        raise SubprocessExecutionError(list(args), 7, None, None)

    monkeypatch.setattr("avm.installer.run_command", failing_run_command)

    result = _invoke("install", "codex@0.1.0")

    assert result.exit_code == 1
    assert "Error: npm install" in result.stdout
    assert "exited with code 7" in result.stdout


def test_unsupported_agent_is_reported(project_dir: Path) -> None:
    result = _invoke("install", "cursor")

    assert result.exit_code == 1
    assert 'Unsupported agent "cursor"' in result.stdout


def test_global_sets_current_with_args(project_dir: Path, avm_home: Path, npm_calls: list[list[str]]) -> None:
    result = _invoke("global", "claude@1.0.0", "--args", "--model  opus")

    assert result.exit_code == 0, result.output
    assert 'Set global default to claude@1.0.0 (@anthropic-ai/claude-code) with args="--model opus"' in result.stdout
    current = _state(avm_home)["current"]
    assert current["name"] == "claude"
    assert current["version"] == "1.0.0"
    assert current["args"] == "--model opus"


def test_current_command(project_dir: Path, npm_calls: list[list[str]]) -> None:
    empty = _invoke("current")
    assert "No active agent" in empty.stdout

    _invoke("global", "codex@0.3.0", "-a", "resume")
    result = _invoke("current")

    assert result.exit_code == 0
    assert 'codex@0.3.0 (@openai/codex) args="resume"' in result.stdout


def test_local_writes_project_file(project_dir: Path) -> None:
    result = _invoke("local", "gemini@2.0.0", "--args", "--yolo")

    assert result.exit_code == 0, result.output
    config_path = project_dir / "avm.config.json"
    assert json.loads(config_path.read_text(encoding="utf-8")) == {
        "default": {"name": "gemini"},
        "gemini": {"version": "2.0.0", "args": "--yolo"},
    }
    assert f"Set local default to gemini@2.0.0 in {config_path}" in result.stdout


def test_local_updates_nearest_existing_file(project_dir: Path) -> None:
    config_path = project_dir / "avm.config.json"
    config_path.write_text(json.dumps({"codex": {"version": "0.1.0"}}), encoding="utf-8")
    nested = project_dir / "src" / "pkg"
    nested.mkdir(parents=True)

    runner = CliRunner()
    with pytest.MonkeyPatch.context() as patch:
        patch.chdir(nested)
        result = runner.invoke(app, ["--no-emoji", "local", "claude"])

    assert result.exit_code == 0, result.output
    assert not (nested / "avm.config.json").exists()
    assert json.loads(config_path.read_text(encoding="utf-8")) == {
        "default": {"name": "claude"},
        "codex": {"version": "0.1.0"},
        "claude": {},
    }


def test_malformed_project_file_is_fatal(project_dir: Path) -> None:
    (project_dir / "avm.config.json").write_text("{", encoding="utf-8")

    result = _invoke("install", "codex")

    assert result.exit_code == 1
    assert "Failed to parse" in result.stdout


def test_run_installs_records_and_launches(
    project_dir: Path,
    avm_home: Path,
    npm_calls: list[list[str]],
    launches: list[list[str]],
) -> None:
    (project_dir / "avm.config.json").write_text(
        json.dumps({"default": {"name": "codex"}, "codex": {"version": "0.2.0", "args": "resume --flag"}}),
        encoding="utf-8",
    )

    result = _invoke("run", "codex", "--", "--extra", "value")

    assert result.exit_code == 3, result.output
    install_path = avm_home / "agents" / "codex" / "0.2.0"
    binary = install_path / "node_modules" / "@openai" / "codex" / "bin" / "cli.js"
    assert launches == [[str(binary), "resume", "--flag", "--extra", "value"]]
    assert _state(avm_home)["current"]["version"] == "0.2.0"
    assert "> Running codex@0.2.0 (@openai/codex)" in result.stdout


def test_run_reuses_last_used_agent(
    project_dir: Path,
    npm_calls: list[list[str]],
    launches: list[list[str]],
) -> None:
    _invoke("global", "claude@1.0.0", "-a", "--model opus")

    result = _invoke("run")

    assert result.exit_code == 3
    assert len(npm_calls) == 1
    assert launches[0][1:] == ["--model", "opus"]


def test_run_without_any_agent_fails(project_dir: Path) -> None:
    result = _invoke("run")

    assert result.exit_code == 1
    assert "No agent specified" in result.stdout


def test_run_without_binary_fails(project_dir: Path, monkeypatch: pytest.MonkeyPatch, launches) -> None:
    def bare_npm(args, **kwargs):  # noqa: ANN001
        return CompletedProcess(args=list(args), returncode=0, stdout="", stderr="")

    monkeypatch.setattr("avm.installer.run_command", bare_npm)

    result = _invoke("run", "codex@0.1.0")

    assert result.exit_code == 1
    assert "Unable to find executable for @openai/codex" in result.stdout
    assert launches == []


def test_list_marks_current_and_project_default(project_dir: Path, npm_calls: list[list[str]]) -> None:
    _invoke("install", "codex@0.1.0")
    _invoke("global", "claude@1.0.0", "-a", "--model opus")
    (project_dir / "avm.config.json").write_text(json.dumps({"default": {"name": "codex"}}), encoding="utf-8")

    result = _invoke("list")

    assert result.exit_code == 0, result.output
    lines = result.stdout.splitlines()
    assert '* claude@1.0.0 (@anthropic-ai/claude-code) args="--model opus"' in lines
    assert "  codex@0.1.0 (@openai/codex)" in lines
    assert any(line.startswith("Project default: codex") for line in lines)


def test_list_with_nothing_installed(project_dir: Path) -> None:
    result = _invoke("ls")

    assert result.exit_code == 0
    assert "No supported agents installed yet" in result.stdout


def test_list_remote(project_dir: Path, npm_calls: list[list[str]]) -> None:
    _invoke("install", "gemini")
    (project_dir / "avm.config.json").write_text(
        json.dumps({"codex": {"package": "@other/codex-fork"}}),
        encoding="utf-8",
    )

    result = _invoke("list", "--remote")

    assert result.stdout.splitlines() == [
        "  claude (@anthropic-ai/claude-code)",
        "  codex (@other/codex-fork)",
        "* gemini (@google/gemini-cli) [installed]",
    ]


def test_version_flag() -> None:
    result = CliRunner().invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.stdout.strip()


@pytest.mark.parametrize(
    ("argv", "expected"),
    [
        ([], ["run"]),
        (["codex@latest", "--", "--help"], ["run", "codex@latest", "--", "--help"]),
        (["--no-emoji", "codex"], ["--no-emoji", "run", "codex"]),
        (["-p", "@other/codex-fork", "codex"], ["run", "-p", "@other/codex-fork", "codex"]),
        (["install", "codex"], ["install", "codex"]),
        (["--no-emoji", "list"], ["--no-emoji", "list"]),
        (["--help"], ["--help"]),
        (["-V"], ["-V"]),
    ],
)
def test_normalize_argv(argv: list[str], expected: list[str]) -> None:
    assert normalize_argv(argv) == expected


def test_self_update_runs_pip(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[list[str]] = []

    def fake_run_command(args, **kwargs):  # noqa: ANN001
        calls.append(list(args))
        return CompletedProcess(args=list(args), returncode=0, stdout="", stderr="")

    monkeypatch.setattr("avm.self_update.run_command", fake_run_command)

    result = _invoke("self-update", "--to", "1.2.3")

    assert result.exit_code == 0, result.output
    assert calls[0][1:] == ["-m", "pip", "install", "--upgrade", "avm-cli==1.2.3"]
    assert "avm-cli updated." in result.stdout


def test_path_like_version_leaves_other_installs_alone(
    project_dir: Path,
    avm_home: Path,
    npm_calls: list[list[str]],
) -> None:
    assert _invoke("install", "claude@1.0.0").exit_code == 0

    result = _invoke("install", "codex@..")

    assert result.exit_code == 1
    assert 'Invalid version ".." for agent "codex"' in result.stdout
    assert (avm_home / "agents" / "claude" / "1.0.0" / ".meta.json").exists()
    assert len(npm_calls) == 1


def test_malformed_state_does_not_break_commands(
    project_dir: Path,
    avm_home: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("AVM_NO_UPDATE_CHECK")
    avm_home.mkdir(parents=True)
    (avm_home / "state.json").write_text(
        json.dumps(
            {
                "current": {"name": "codex", "package": "@openai/codex", "version": "1", "args": 5},
                "self": {"lastUpdateCheck": utc_timestamp()},
            },
        ),
        encoding="utf-8",
    )

    result = _invoke("current")

    assert result.exit_code == 0, result.output
    assert "No active agent" in result.stdout
