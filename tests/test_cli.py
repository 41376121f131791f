from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

import cli.main as cli_main
from cli.doctor import collect_checks
from core.config import AppSettings
from core.domain.errors import RemoteCallError

runner = CliRunner()


def _read_outputs(path: Path) -> dict[str, str]:
    outputs: dict[str, str] = {}
    lines = iter(path.read_text(encoding="utf-8").splitlines())
    for line in lines:
        name, delimiter = line.split("<<", 1)
        value: list[str] = []
        for inner in lines:
            if inner == delimiter:
                break
            value.append(inner)
        outputs[name] = "\n".join(value)
    return outputs


@pytest.fixture
def ci_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    output = tmp_path / "github_output"
    output.touch()
    monkeypatch.setenv("GITHUB_ACTIONS", "true")
    monkeypatch.setenv("GITHUB_OUTPUT", str(output))
    monkeypatch.setenv("INPUT_SECRET_ID", "AKIDexample")
    monkeypatch.setenv("INPUT_SECRET_KEY", "secret-example")
    return output


@pytest.fixture
def fake_clients(monkeypatch: pytest.MonkeyPatch, make_client):
    clients = {"generic": make_client(responses=[{"TaskId": "t-1", "RequestId": "r-1"}]), "zoned": make_client()}
    monkeypatch.setattr(cli_main, "build_cdn_client", lambda settings: clients["generic"])
    monkeypatch.setattr(cli_main, "build_teo_client", lambda settings: clients["zoned"])
    return clients


def test_run_dispatches_and_publishes_outputs(ci_env: Path, fake_clients, monkeypatch) -> None:
    monkeypatch.setenv("INPUT_ACTION", "purgeUrls")
    monkeypatch.setenv("INPUT_PATHS", "https://a.com/\nzone-abc https://b.com/")

    result = runner.invoke(cli_main.app, ["run"])

    assert result.exit_code == 0, result.output
    assert "::group::Initialization" in result.output
    assert "Selected operation: PurgeUrlsCache" in result.output
    assert "Selected operation: CreatePurgeTask" in result.output
    assert "TaskId: t-1" in result.output
    assert fake_clients["generic"].calls == [("PurgeUrlsCache", {"Urls": ["https://a.com/"]})]
    assert fake_clients["zoned"].calls == [
        ("CreatePurgeTask", {"ZoneId": "zone-abc", "Type": "purge_url", "Targets": ["https://b.com/"]})
    ]

    outputs = _read_outputs(ci_env)
    assert json.loads(outputs["response"]) == {"RequestId": "req-1"}
    responses = json.loads(outputs["responses"])
    assert [r["operation"] for r in responses] == ["PurgeUrlsCache", "CreatePurgeTask"]
    assert responses[0]["task_id"] == "t-1"


def test_run_options_override_inputs(ci_env: Path, fake_clients) -> None:
    result = runner.invoke(cli_main.app, ["run", "--action", "pushUrls", "--paths", "https://p.com/"])

    assert result.exit_code == 0, result.output
    assert fake_clients["generic"].calls == [("PushUrlsCache", {"Urls": ["https://p.com/"]})]


def test_run_without_targets_fails_with_usage(ci_env: Path, fake_clients) -> None:
    result = runner.invoke(cli_main.app, ["run", "--paths", "  \n"])

    assert result.exit_code == 1
    assert "::error::No targets provided" in result.output
    assert "zone-2o3h21ed8bpu" in result.output
    assert fake_clients["generic"].calls == []
    assert json.loads(_read_outputs(ci_env)["responses"]) == []


def test_run_remote_failure(ci_env: Path, monkeypatch, make_client) -> None:
    failing = make_client(fail_with=RemoteCallError("denied", code="AuthFailure"))
    zoned = make_client()
    monkeypatch.setattr(cli_main, "build_cdn_client", lambda settings: failing)
    monkeypatch.setattr(cli_main, "build_teo_client", lambda settings: zoned)

    result = runner.invoke(cli_main.app, ["run", "--paths", "https://a.com/\nzone-z /z/"])

    assert result.exit_code == 1
    assert "::error::[AuthFailure] denied" in result.output
    assert zoned.calls == []


def test_run_unknown_action_with_only_zones_completes(ci_env: Path, fake_clients) -> None:
    result = runner.invoke(cli_main.app, ["run", "--action", "purgeAll", "--paths", "zone-a /a/"])

    assert result.exit_code == 0, result.output
    assert "::warning::Unknown action type: purgeAll" in result.output
    assert fake_clients["zoned"].calls == []
    assert json.loads(_read_outputs(ci_env)["response"]) == {}


def test_run_unknown_action_with_generic_targets_fails(ci_env: Path, fake_clients) -> None:
    result = runner.invoke(cli_main.app, ["run", "--action", "purgeAll", "--paths", "https://a.com/"])

    assert result.exit_code == 1
    assert "::error::Unknown action type: purgeAll" in result.output


def test_run_malformed_json_paths(ci_env: Path, fake_clients) -> None:
    result = runner.invoke(cli_main.app, ["run", "--paths", '["https://a.com/"'])

    assert result.exit_code == 1
    assert "Invalid JSON" in result.output


def test_run_without_credentials(monkeypatch) -> None:
    monkeypatch.setenv("GITHUB_ACTIONS", "true")

    result = runner.invoke(cli_main.app, ["run", "--paths", "https://a.com/"])

    assert result.exit_code == 1
    assert "Missing credentials" in result.output


def test_execute_publishes_partial_results(reporter, monkeypatch, make_client) -> None:
    generic = make_client(responses=[{"TaskId": "t-1", "RequestId": "r-1"}])
    zoned = make_client(fail_with=RemoteCallError("zone gone", code="ResourceNotFound"))
    monkeypatch.setattr(cli_main, "build_cdn_client", lambda settings: generic)
    monkeypatch.setattr(cli_main, "build_teo_client", lambda settings: zoned)
    settings = AppSettings(secret_id="id", secret_key="key", action="purgePath", paths="/a/\nzone-x /x/")

    with pytest.raises(RemoteCallError):
        cli_main.execute(settings, reporter)

    assert reporter.failed == "[ResourceNotFound] zone gone"
    assert json.loads(reporter.outputs["response"]) == {"TaskId": "t-1", "RequestId": "r-1"}
    assert [r["operation"] for r in json.loads(reporter.outputs["responses"])] == ["PurgePathCache"]
    assert ("group", "Initialization") in reporter.events


def test_plan_shows_operations_without_credentials() -> None:
    result = runner.invoke(
        cli_main.app,
        ["plan", "--action", "purgePath", "--paths", "/static/\nzone-abc /img/"],
    )

    assert result.exit_code == 0, result.output
    assert "PurgePathCache" in result.output
    assert "CreatePurgeTask" in result.output
    assert "purge_prefix" in result.output


def test_plan_marks_skipped_zones() -> None:
    result = runner.invoke(cli_main.app, ["plan", "--action", "purgeAll", "--paths", "zone-abc /img/"])

    assert result.exit_code == 0, result.output
    assert "skipped" in result.output


def test_plan_rejects_unknown_generic_action() -> None:
    result = runner.invoke(cli_main.app, ["plan", "--action", "purgeAll", "--paths", "/static/"])

    assert result.exit_code == 1
    assert "Unknown action type: purgeAll" in result.output


def test_doctor_checks_offline() -> None:
    rows = collect_checks(AppSettings(action="nope", paths="zone-a /a/"), network=False)

    statuses = {check: status for check, status, _ in rows}
    assert statuses == {"Credentials": "FAIL", "Action": "FAIL", "Targets": "OK"}
    details = {check: detail for check, _, detail in rows}
    assert "supported: purgePath, purgeUrls, pushUrls" in details["Action"]
    assert details["Targets"].startswith("1 target(s)")


def test_doctor_command_fails_on_missing_config() -> None:
    result = runner.invoke(cli_main.app, ["doctor", "run", "--offline"])

    assert result.exit_code == 1
    assert "Credentials" in result.output


def test_execute_reports_unexpected_errors(reporter, monkeypatch, make_client) -> None:
    generic = make_client(fail_with=RuntimeError("boom"))
    monkeypatch.setattr(cli_main, "build_cdn_client", lambda settings: generic)
    settings = AppSettings(secret_id="id", secret_key="key", paths="https://a.com/")

    with pytest.raises(RuntimeError, match="boom"):
        cli_main.execute(settings, reporter)

    assert reporter.failed == "RuntimeError: boom"
    assert ("error", "Execution failed") in reporter.events
    assert json.loads(reporter.outputs["response"]) == {}


def test_run_invalid_setting_fails(ci_env: Path, fake_clients, monkeypatch) -> None:
    monkeypatch.setenv("INPUT_HTTP_TIMEOUT_SECONDS", "-1")

    result = runner.invoke(cli_main.app, ["run", "--paths", "https://a.com/"])

    assert result.exit_code == 1
    assert "::error::Invalid configuration: http_timeout_seconds" in result.output
    assert fake_clients["generic"].calls == []


def test_run_unknown_action_is_reported_before_credentials(monkeypatch) -> None:
    monkeypatch.setenv("GITHUB_ACTIONS", "true")

    result = runner.invoke(cli_main.app, ["run", "--action", "purgeAll", "--paths", "https://a.com/"])

    assert result.exit_code == 1
    assert "Unknown action type: purgeAll" in result.output
    assert "Missing credentials" not in result.output


def test_run_skipped_zones_need_no_credentials(monkeypatch) -> None:
    monkeypatch.setenv("GITHUB_ACTIONS", "true")

    result = runner.invoke(cli_main.app, ["run", "--action", "purgeAll", "--paths", "zone-a /a/"])

    assert result.exit_code == 0, result.output
    assert "skipping zone zone-a" in result.output
