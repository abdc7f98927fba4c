"""
应用程序与控制台集成测试
Application and Console Integration Tests
"""
import io
import re
import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from fairrps import main as main_module
from fairrps import verify
from fairrps.app import Application
from fairrps.utils.error_handler import global_error_handler
from fairrps.console import ConsoleView
from fairrps.game import build_outcome_table, verify_commitment
from fairrps.game.commitment import CommitmentScheme, SecretKey


class PickFirst:
    def choice(self, seq):
        return seq[0]


def make_app(answer, rng=None):
    """返回 (应用, 输出缓冲, 收到的提示列表)"""
    output = io.StringIO()
    prompts = []

    def fake_input(prompt):
        prompts.append(prompt)
        if isinstance(answer, BaseException):
            raise answer
        return answer

    view = ConsoleView(output=output, input_func=fake_input)
    return Application(view=view, rng=rng or PickFirst()), output, prompts


def test_end_to_end_win():
    app, output, prompts = make_app("2")

    assert app.start(["Rock", "Paper", "Scissors"])

    lines = output.getvalue().splitlines()
    hmac_hex = re.fullmatch(r"HMAC: ([0-9a-f]{64})", lines[0]).group(1)
    assert lines[1:7] == [
        "Available moves:", "1 - Rock", "2 - Paper", "3 - Scissors", "0 - exit", "? - help"
    ]
    assert prompts == ["Enter your move: "]
    assert lines[7:10] == ["Your move: Paper", "Computer move: Rock", "YOU WIN!"]

    key_hex = re.fullmatch(r"HMAC key: ([0-9a-f]{64})", lines[10]).group(1)
    assert verify_commitment(hmac_hex, key_hex, "Rock")


@pytest.mark.parametrize("answer, expected", [("1", "DRAW"), ("3", "COMPUTER WIN!")])
def test_end_to_end_other_outcomes(answer, expected):
    app, output, _ = make_app(answer)
    assert app.start(["Rock", "Paper", "Scissors"])
    assert expected in output.getvalue().splitlines()


def test_help_prints_table_and_no_key():
    app, output, _ = make_app("?")

    assert app.start(["Rock", "Paper", "Scissors"])

    text = output.getvalue()
    assert "v PC\\User >" in text
    assert "HMAC key" not in text
    assert "YOU WIN!" not in text
    table_rows = [line for line in text.splitlines() if line.startswith("| ") and "User" not in line]
    assert len(table_rows) == 3
    for row in table_rows:
        cells = [cell.strip() for cell in row.strip("|").split("|")]
        assert sorted(cells[1:]) == ["Draw", "Lose", "Win"]


def test_exit_prints_nothing_after_prompt():
    app, output, _ = make_app("0")
    assert app.start(["Rock", "Paper", "Scissors"])
    assert output.getvalue().splitlines()[-1] == "? - help"


def test_eof_at_prompt_is_exit():
    app, output, _ = make_app(EOFError())
    assert app.start(["Rock", "Paper", "Scissors"])
    assert "HMAC key" not in output.getvalue()


def test_invalid_input_reports_error_without_key():
    app, output, _ = make_app("9")

    assert not app.start(["Rock", "Paper", "Scissors"])

    text = output.getvalue()
    assert "Invalid input" in text
    assert "HMAC key" not in text


@pytest.mark.parametrize("moves, message", [
    ([], "at least 3 moves"),
    (["a", "b"], "at least 3 moves"),
    (["a", "b", "c", "d"], "must be odd"),
    (["a", "b", "a"], "must be unique"),
])
def test_argument_errors_print_message_and_usage(moves, message):
    app, output, prompts = make_app("1")

    assert not app.start(moves)

    text = output.getvalue()
    assert message in text
    assert "Usage: fairrps" in text
    assert "HMAC" not in text
    assert prompts == []


def test_render_help_table_is_from_computer_perspective():
    view = ConsoleView(output=io.StringIO())
    rendered = view.render_help_table(build_outcome_table(["Rock", "Paper", "Scissors"]))
    rock_row = next(line for line in rendered.splitlines() if line.startswith("| Rock"))
    cells = [cell.strip() for cell in rock_row.strip("|").split("|")]
    assert cells == ["Rock", "Draw", "Lose", "Win"]


def test_main_returns_exit_codes(monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda prompt: "0")
    assert main_module.main(["Rock", "Paper", "Scissors"]) == 0
    assert main_module.main(["Rock", "Paper"]) == 1
    assert "Usage: fairrps" in capsys.readouterr().out


def test_main_with_missing_config_fails(tmp_path, capsys):
    assert main_module.main(["--config", str(tmp_path / "nope.yaml"), "a", "b", "c"]) == 1
    assert "Configuration error" in capsys.readouterr().out


def test_verify_cli(capsys):
    key = SecretKey(bytes(range(32)))
    digest = CommitmentScheme().commit(key, "Spock").digest

    assert verify.main([key.hex(), "Spock", digest]) == 0
    assert verify.main([key.hex(), "Rock", digest]) == 1
    out = capsys.readouterr().out.split()
    assert out == ["OK", "MISMATCH"]


def test_dash_prefixed_moves_start_a_round(monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda prompt: "0")

    assert main_module.main(["-x", "b", "c"]) == 0

    out = capsys.readouterr().out
    assert "1 - -x" in out
    assert out.startswith("HMAC: ")


def test_help_flag_is_a_move_name(monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda prompt: "0")
    assert main_module.main(["-h", "--", "--config", "x"]) == 0
    out = capsys.readouterr().out
    assert "1 - -h" in out
    assert "2 - --config" in out


def test_config_option_in_any_position(tmp_path, monkeypatch, capsys):
    path = tmp_path / "config.yaml"
    path.write_text("commitment:\nlogging:\n  level: WARNING\n", encoding="utf-8")
    monkeypatch.setattr("builtins.input", lambda prompt: "0")

    assert main_module.main(["a", "--config", str(path), "b", "c"]) == 0
    assert main_module.main([f"--config={path}", "a", "b", "c"]) == 0
    assert "Configuration error" not in capsys.readouterr().out


def test_config_option_without_path(capsys):
    assert main_module.main(["a", "b", "c", "--config"]) == 1
    out = capsys.readouterr().out
    assert "--config requires a path" in out
    assert "Usage: fairrps" in out


def test_split_arguments_keeps_move_order():
    options, moves = main_module.split_arguments(["-1", "--config", "c.yaml", "two", "--", "--config=x"])
    assert options == ["--config", "c.yaml"]
    assert moves == ["-1", "two", "--config=x"]


def test_unexpected_errors_go_through_global_handler(monkeypatch):
    seen = []

    def explode(self, moves):
        raise RuntimeError("boom")

    monkeypatch.setattr(Application, "start", explode)
    monkeypatch.setitem(global_error_handler.error_callbacks, RuntimeError,
                        lambda exc, ctx: seen.append((str(exc), ctx)))

    assert main_module.main(["a", "b", "c"]) == 1
    assert seen == [("boom", "主程序")]
