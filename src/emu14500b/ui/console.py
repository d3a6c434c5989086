# src/emu14500b/ui/console.py
"""
コンソールアプリケーションのエントリポイント。
メニューループを提供し、入力行をセッションへ渡して結果を表示します。
CPUの意味論は持たず、実行は全てSessionに委譲します。
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from emu14500b.config.builder import SessionBuilder
from emu14500b.config.loader import ConfigError, ConfigLoader
from emu14500b.config.models import ConsoleConfig, MachineConfig
from emu14500b.debugger.session import Session
from emu14500b.runner.runner import RunResult

logger = logging.getLogger(__name__)

TOOL_NAME = "EMU14500B"
TOOL_VERSION = "0.1.0"
TOOL_AUTHOR = "Reimolaev"

CLEAR_SEQUENCE = "\033[2J\033[H"


# @intent:responsibility テキストメニューと入出力を担当します。
class Console:
    """
    対話型のメニューループ。入出力ストリームはテストのために差し替え可能です。
    """
    def __init__(self, session: Session, config: Optional[ConsoleConfig] = None,
                 stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self._session = session
        self._config = config if config is not None else ConsoleConfig()
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout

    def _write(self, text: str = "") -> None:
        self._stdout.write(text + "\n")

    # @intent:return EOFの場合はNone。
    def _read_line(self) -> Optional[str]:
        line = self._stdin.readline()
        if line == "":
            return None
        return line.rstrip("\r\n")

    def _clear_screen(self) -> None:
        isatty = getattr(self._stdout, "isatty", None)
        if self._config.clear_screen and isatty is not None and isatty():
            self._stdout.write(CLEAR_SEQUENCE)

    def print_state(self) -> None:
        self._write(self._session.format_state())
        self._write(f"MEM: {self._session.format_memory()}")

    # @intent:responsibility メニューを表示し、exitまたはEOFまで選択を処理します。
    def run(self) -> None:
        while True:
            self._clear_screen()
            self.print_state()
            if self._config.banner:
                self._write(f"{TOOL_NAME}!")
                self._write(f"By {TOOL_AUTHOR}")
            self._write("Choose input method:")
            self._write("1. Enter instructions manually")
            self._write("2. Enter assembly code (ASM)")
            self._write("Enter 'exit' to quit")

            choice = self._read_line()
            if choice is None or choice.strip().lower() == "exit":
                break

            choice = choice.strip()
            if choice == "1":
                self._write("Enter instructions (e.g., LDA 01), or 'HALT' to stop:")
                self.manual_input()
            elif choice == "2":
                self._write("Enter assembly code (e.g., LDA 01; AND 02):")
                source = self._read_line()
                if source is None:
                    break
                self.execute_assembly(source)
            else:
                self._write("Invalid choice!")

    # @intent:responsibility 1行ずつ読み込んで即座に実行します。HALTまたはEOFで戻ります。
    def manual_input(self) -> None:
        self._session.resume()
        while True:
            line = self._read_line()
            if line is None:
                return
            snapshot = self._session.step(line)
            if snapshot is None:
                continue
            if snapshot.fault:
                self._write(str(snapshot.fault))
            if snapshot.metadata.output:
                self._write(snapshot.metadata.output)
            if snapshot.halted:
                return

    def execute_assembly(self, source: str) -> RunResult:
        self._session.resume()
        result = self._session.run_source(source)
        self.report(result)
        return result

    # @intent:responsibility バッチ実行の行ごとの結果を表示します。
    def report(self, result: RunResult) -> None:
        for outcome in result.outcomes:
            if outcome.fault:
                self._write(f"Line {outcome.line_number}: {outcome.fault}")
            if outcome.output:
                self._write(outcome.output)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="emu14500b",
        description=f"{TOOL_NAME} - one-accumulator 8-bit CPU emulator"
    )
    parser.add_argument('--config', '-c', type=str,
                        help='YAML file with the initial machine state')
    parser.add_argument('--run', '-r', type=str, metavar='ASM',
                        help="Run an assembly listing (e.g. 'LDA 00; INC; HALT') and exit")
    parser.add_argument('--verbose', '-v', action='count', default=0,
                        help='Increase verbosity (-v, -vv)')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Suppress all log output except errors')
    parser.add_argument('--log-file', type=str,
                        help='Write log to file')
    parser.add_argument('--version', action='version',
                        version=f'{TOOL_NAME} {TOOL_VERSION}')
    return parser


# @intent:responsibility 引数に基づいてloggingを設定します。ログは標準エラー出力へ出します。
def setup_logging(verbose: int = 0, quiet: bool = False, log_file: Optional[str] = None) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose == 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    handlers: List[logging.Handler] = [console]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG if log_file else level,
        handlers=handlers,
        force=True
    )


def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None,
         stdout: Optional[TextIO] = None) -> int:
    """
    アプリケーションのメイン関数。
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.quiet, args.log_file)

    config = MachineConfig()
    if args.config:
        try:
            config = ConfigLoader().load_from_file(args.config)
        except (OSError, ConfigError) as e:
            logger.error("Cannot load config %s: %s", args.config, e)
            return 2

    session = SessionBuilder().build_session(config)
    console = Console(session, config.console, stdin=stdin, stdout=stdout)

    if args.run is not None:
        console.execute_assembly(args.run)
        console.print_state()
        return 0

    try:
        console.run()
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == '__main__':
    sys.exit(main())
