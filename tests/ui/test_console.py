# tests/ui/test_console.py
"""
emu14500b.ui.consoleモジュールの単体テスト。
入出力ストリームを差し替えてメニューループとコマンドライン引数の処理を検証します。
"""
import io

import pytest

from emu14500b.config.models import ConsoleConfig
from emu14500b.core.state import CpuState
from emu14500b.debugger.session import Session
from emu14500b.ui.console import Console, main


def make_console(text, session=None):
    stdin = io.StringIO(text)
    stdout = io.StringIO()
    session = session if session is not None else Session(CpuState(memory=(0x42,) + (0,) * 15))
    console = Console(session, ConsoleConfig(clear_screen=True, banner=True), stdin=stdin, stdout=stdout)
    return console, session, stdout


class TestConsole:
    def test_exit(self):
        console, _, stdout = make_console("exit\n")
        console.run()
        output = stdout.getvalue()
        assert output.startswith("PC: 0, ACC: 00, ZF: False, CF: False\n")
        assert "EMU14500B!\nBy Reimolaev\n" in output
        assert "MEM: 42 00 00" in output
        # StringIOはttyではないため画面消去は出力されない
        assert "\033[2J" not in output

    def test_eof_ends_loop(self):
        console, _, _ = make_console("")
        console.run()

    def test_invalid_choice(self):
        console, _, stdout = make_console("3\nEXIT\n")
        console.run()
        assert "Invalid choice!" in stdout.getvalue()

    def test_manual_input(self):
        console, session, stdout = make_console("1\nLDA 00\nAND FOO\n\nINC\nhalt\nexit\n")
        console.run()
        output = stdout.getvalue()
        assert "AND: operand 'FOO' is not a hexadecimal byte" in output
        assert "Execution halted!" in output
        assert session.get_state().accumulator == 0x43
        # 2回目のメニュー表示には更新後の状態が出る
        assert "PC: 0, ACC: 43, ZF: False, CF: False" in output

    def test_manual_input_eof(self):
        console, session, _ = make_console("1\nINC\n")
        console.run()
        assert session.get_state().accumulator == 1

    def test_assembly_input(self):
        console, session, stdout = make_console("2\nLDA 00; FOO; STORE 1F; HALT; INC\nexit\n")
        console.run()
        output = stdout.getvalue()
        assert "Line 2: FOO: unknown instruction" in output
        assert "Line 3: STORE: address 1F is outside memory (00-0F)" in output
        assert "Execution halted!" in output
        assert session.get_state().accumulator == 0x42

    def test_state_persists_across_menu_selections(self):
        console, session, _ = make_console("2\nINC\n2\nINC\nexit\n")
        console.run()
        assert session.get_state().accumulator == 2

    def test_no_banner(self):
        stdout = io.StringIO()
        console = Console(Session(), ConsoleConfig(banner=False), stdin=io.StringIO("exit\n"), stdout=stdout)
        console.run()
        assert "By Reimolaev" not in stdout.getvalue()

    # @intent:test_case_resume HALTの後でもメニューの次の選択では実行が再開されることを検証します。
    def test_menu_selection_resumes_after_halt(self):
        console, session, stdout = make_console("2\nINC; HALT; INC\n1\nINC\nHALT\n2\nINC\nexit\n")
        console.run()
        assert session.get_state().accumulator == 3
        assert stdout.getvalue().count("Execution halted!") == 2

    def test_memory_line_follows_store(self):
        console, _, stdout = make_console("2\nLDA 00; STORE 0F\nexit\n")
        console.run()
        assert "MEM: 42 " + "00 " * 14 + "42\n" in stdout.getvalue()

    def test_clear_screen_on_tty(self):
        class TtyStringIO(io.StringIO):
            def isatty(self):
                return True

        stdout = TtyStringIO()
        console = Console(Session(), ConsoleConfig(), stdin=io.StringIO("exit\n"), stdout=stdout)
        console.run()
        assert stdout.getvalue().startswith("\033[2J\033[H")


class TestMain:
    def test_run_option(self):
        stdout = io.StringIO()
        code = main(["--run", "INC; INC; RLC; HALT", "-q"], stdout=stdout)
        assert code == 0
        output = stdout.getvalue()
        assert "Execution halted!" in output
        lines = output.rstrip().splitlines()
        assert lines[-2] == "PC: 0, ACC: 04, ZF: False, CF: False"
        assert lines[-1] == "MEM: " + " ".join(["00"] * 16)

    def test_config_option(self, tmp_path):
        path = tmp_path / "machine.yaml"
        path.write_text("initial_state:\n  memory: [0x80]\nconsole:\n  banner: false\n", encoding="utf-8")
        stdout = io.StringIO()
        code = main(["-c", str(path), "-r", "LDA 00; RLC", "-q"], stdout=stdout)
        assert code == 0
        assert "ACC: 01, ZF: False, CF: True" in stdout.getvalue()

    def test_missing_config(self, tmp_path):
        code = main(["-c", str(tmp_path / "missing.yaml"), "-q"], stdout=io.StringIO())
        assert code == 2

    def test_interactive(self):
        stdout = io.StringIO()
        code = main(["-q"], stdin=io.StringIO("exit\n"), stdout=stdout)
        assert code == 0
        assert "Choose input method:" in stdout.getvalue()

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "EMU14500B" in capsys.readouterr().out

    def test_log_file(self, tmp_path):
        log_path = tmp_path / "logs" / "run.log"
        main(["--run", "AND FOO", "--log-file", str(log_path)], stdout=io.StringIO())
        assert "AND" in log_path.read_text(encoding="utf-8")
