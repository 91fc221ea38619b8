from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
APP_DIR = ROOT / "src" / "app"
sys.path.insert(0, str(APP_DIR))

from cli import main  # type: ignore[import-not-found]  # noqa: E402
from commit_reveal import compute_hmac  # type: ignore[import-not-found]  # noqa: E402


@pytest.mark.parametrize(
    ("moves", "message"),
    [
        ([], "Error: No moves provided."),
        (["rock"], "Error: Only one move provided."),
        (["rock", "paper", "scissors", "lizard"], "Error: Even number of moves provided."),
        (["rock", "rock", "paper"], "Error: Duplicate moves found."),
    ],
)
def test_play_rejects_bad_move_lists(moves: list[str], message: str, monkeypatch: pytest.MonkeyPatch) -> None:
    def no_input(_: str) -> str:
        raise AssertionError("session must not start")

    monkeypatch.setattr("builtins.input", no_input)
    with pytest.raises(SystemExit) as exc_info:
        main(["play", *moves])
    assert str(exc_info.value.code).startswith(message)


def test_play_exit(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("builtins.input", lambda _: "0")

    assert main(["play", "rock", "paper", "scissors"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("HMAC: ")
    assert out[1:7] == ["Available moves:", "1 - rock", "2 - paper", "3 - scissors", "0 - exit", "? - help"]
    assert out[-1] == "Exiting the game."
    assert not any(line.startswith("HMAC key:") for line in out)


def test_play_round_output_can_be_verified(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    answers = iter(["?", "9", "1"])
    monkeypatch.setattr("builtins.input", lambda _: next(answers))

    assert main(["play", "rock", "paper", "scissors", "lizard", "spock"]) == 0

    out = capsys.readouterr().out.splitlines()
    published = out[0].removeprefix("HMAC: ")
    computer_move = next(line for line in out if line.startswith("Computer move: ")).removeprefix("Computer move: ")
    key = out[-1].removeprefix("HMAC key: ")
    assert "Invalid Move! Please try again" in out
    assert any(line.startswith("PC\\User") for line in out)
    assert out[-2] in ("Draw", "Computer wins", "You win")
    assert compute_hmac(key, computer_move) == published


def test_verify_command(capsys: pytest.CaptureFixture[str]) -> None:
    key = "0f" * 32
    digest = compute_hmac(key, "paper")

    assert main(["verify", "--key", key, "--move", "paper", "--hmac", digest]) == 0
    assert capsys.readouterr().out.strip() == "HMAC matches"

    assert main(["verify", "--key", key, "--move", "rock", "--hmac", digest]) == 1
    assert capsys.readouterr().out.strip() == "HMAC mismatch"


def test_unknown_log_level() -> None:
    with pytest.raises(SystemExit):
        main(["--log-level", "chatty", "verify", "--key", "k", "--move", "m", "--hmac", "h"])


def test_verify_command_with_non_ascii_hmac(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["verify", "--key", "k", "--move", "rock", "--hmac", "é"]) == 1
    assert capsys.readouterr().out.strip() == "HMAC mismatch"
