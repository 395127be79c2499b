import json
import subprocess
import sys

import pytest

from seedclaw.api import cli
from seedclaw.image import client as client_module
from seedclaw.messaging import dispatcher as dispatcher_module

from tests.fakes import FakeResponse, RecordingPost


class RecordingRun:
    def __init__(self):
        self.calls = []

    def __call__(self, command, **kwargs):
        self.calls.append(command)
        return subprocess.CompletedProcess(command, 0, stdout="", stderr="")


@pytest.fixture
def env():
    return {"VOLCENGINE_API_KEY": "k", "REFERENCE_IMAGE_URL": "https://x/y.png"}


@pytest.fixture
def run(monkeypatch):
    recorder = RecordingRun()
    monkeypatch.setattr(dispatcher_module.subprocess, "run", recorder)
    return recorder


def test_generates_and_sends_with_defaults(monkeypatch, capsys, env, run, image_body):
    post = RecordingPost(FakeResponse(200, image_body))
    monkeypatch.setattr(client_module.requests, "post", post)

    code = cli.main(["a cat", "#general"], environ=env)

    assert code == 0
    payload = post.calls[0]["json"]
    assert payload["images"] == ["https://x/y.png"]
    assert payload["size"] == "1024x1024"
    assert payload["watermark"] is False

    command = run.calls[0]
    assert command[command.index("--channel") + 1] == "#general"
    assert command[command.index("--message") + 1] == "Generated with Jiemeng AI (Seedream)"
    assert command[command.index("--media") + 1] == "https://cdn.test/out.png"

    assert json.loads(capsys.readouterr().out) == {
        "success": True,
        "imageUrl": "https://cdn.test/out.png",
        "channel": "#general",
        "prompt": "a cat",
    }


def test_missing_reference_image_exits_without_network(monkeypatch, capsys, run):
    post = RecordingPost()
    monkeypatch.setattr(client_module.requests, "post", post)

    code = cli.main(["a cat", "#general"], environ={"VOLCENGINE_API_KEY": "k"})

    assert code == 1
    err = capsys.readouterr().err
    assert "REFERENCE_IMAGE_URL environment variable or reference_image argument is required" in err
    assert post.calls == []
    assert run.calls == []


def test_generation_failure_exits_without_dispatch(monkeypatch, capsys, env, run):
    post = RecordingPost(FakeResponse(500, text="rate limited"))
    monkeypatch.setattr(client_module.requests, "post", post)

    code = cli.main(["a cat", "#general"], environ=env)

    assert code == 1
    err = capsys.readouterr().err
    assert "[ERROR]" in err
    assert "500" in err
    assert "rate limited" in err
    assert run.calls == []


def test_empty_generation_result_exits_with_error(monkeypatch, capsys, env, run):
    monkeypatch.setattr(client_module.requests, "post", RecordingPost(FakeResponse(200, {"data": []})))

    code = cli.main(["a cat", "#general"], environ=env)

    assert code == 1
    assert "no images" in capsys.readouterr().err
    assert run.calls == []


def test_missing_api_key_exits_with_error(monkeypatch, capsys, run):
    post = RecordingPost()
    monkeypatch.setattr(client_module.requests, "post", post)

    code = cli.main(["a cat", "#general"], environ={"REFERENCE_IMAGE_URL": "https://x/y.png"})

    assert code == 1
    assert "VOLCENGINE_API_KEY" in capsys.readouterr().err
    assert post.calls == []


def test_positional_overrides_and_gateway(monkeypatch, capsys, run, image_body):
    post = RecordingPost(FakeResponse(200, image_body), FakeResponse(200, {"ok": True}))
    monkeypatch.setattr(client_module.requests, "post", post)
    env = {
        "VOLCENGINE_API_KEY": "k",
        "REFERENCE_IMAGE_URL": "https://x/env.png",
        "OPENCLAW_GATEWAY_TOKEN": "tok",
    }

    code = cli.main(
        ["--gateway", "a cat", "@user", "Executive look", "2K", "https://x/arg.png"],
        environ=env,
    )

    assert code == 0
    generation, dispatch = post.calls
    assert generation["json"]["images"] == ["https://x/arg.png"]
    assert generation["json"]["size"] == "2K"
    assert dispatch["url"] == "http://localhost:18789/message"
    assert dispatch["headers"]["Authorization"] == "Bearer tok"
    assert dispatch["json"]["message"] == "Executive look"
    assert run.calls == []


def test_too_few_arguments_exit_1(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["a cat"], environ={})

    assert excinfo.value.code == 1
    assert "usage:" in capsys.readouterr().err


def test_blank_prompt_exit_1():
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["  ", "#general"], environ={})

    assert excinfo.value.code == 1


def test_empty_positionals_fall_back_to_defaults(monkeypatch, capsys, env, run, image_body):
    post = RecordingPost(FakeResponse(200, image_body))
    monkeypatch.setattr(client_module.requests, "post", post)

    code = cli.main(["a cat", "#general", "", "", ""], environ=env)

    assert code == 0
    payload = post.calls[0]["json"]
    assert payload["size"] == "1024x1024"
    assert payload["images"] == ["https://x/y.png"]
    command = run.calls[0]
    assert command[command.index("--message") + 1] == "Generated with Jiemeng AI (Seedream)"


@pytest.mark.parametrize("timeout", ["0", "-1"])
def test_invalid_timeout_exits_without_network(monkeypatch, capsys, env, run, timeout):
    post = RecordingPost()
    monkeypatch.setattr(client_module.requests, "post", post)

    code = cli.main(["a cat", "#general"], environ={**env, "SEEDCLAW_TIMEOUT_SECONDS": timeout})

    assert code == 1
    assert "[ERROR] Invalid configuration" in capsys.readouterr().err
    assert post.calls == []


@pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX shell script")
def test_undecodable_cli_output_still_prints_summary(monkeypatch, capsys, tmp_path, image_body):
    script = tmp_path / "openclaw"
    script.write_text("#!/bin/sh\nprintf '\\377\\376 sent\\n'\nexit 0\n")
    script.chmod(0o755)
    monkeypatch.setattr(client_module.requests, "post", RecordingPost(FakeResponse(200, image_body)))
    env = {
        "VOLCENGINE_API_KEY": "k",
        "REFERENCE_IMAGE_URL": "https://x/y.png",
        "OPENCLAW_CLI": str(script),
    }

    code = cli.main(["a cat", "#general"], environ=env)

    assert code == 0
    assert json.loads(capsys.readouterr().out)["imageUrl"] == "https://cdn.test/out.png"


def test_unexpected_exception_is_not_swallowed(monkeypatch, env):
    def broken(*args, **kwargs):
        raise RuntimeError("bug")

    monkeypatch.setattr(cli, "generate_and_send", broken)

    with pytest.raises(RuntimeError, match="bug"):
        cli.main(["a cat", "#general"], environ=env)
