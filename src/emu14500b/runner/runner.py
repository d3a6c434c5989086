# emu14500b/runner/runner.py
"""
プログラムランナー。

命令行の列を順番に実行エンジンへ渡し、HALTで停止、フォールトは報告して次の行へ進みます。
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Union

from emu14500b.common.types import TokenizedLine
from emu14500b.core.cpu import execute
from emu14500b.core.errors import Fault
from emu14500b.core.state import CpuState
from emu14500b.instructions.base import Instruction, Mnemonic
from emu14500b.loader.tokenizer import split_source, tokenize_line

logger = logging.getLogger(__name__)

# 生の行文字列、または (ニーモニック, オペランド) の組
ProgramLine = Union[str, Tuple[Union[str, Mnemonic], Optional[str]]]


# @intent:responsibility 1行分の実行結果を記録します。
@dataclass(frozen=True)
class LineOutcome:
    line_number: int  # 1始まり
    line: TokenizedLine
    state: CpuState  # 実行後の状態（フォールト時は実行前と同一）
    previous_state: CpuState
    instruction: Optional[Instruction] = None
    fault: Optional[Fault] = None
    halted: bool = False
    output: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.fault is None


# @intent:responsibility バッチ実行全体の結果を記録します。
@dataclass(frozen=True)
class RunResult:
    final_state: CpuState
    outcomes: List[LineOutcome] = field(default_factory=list)
    halted: bool = False

    @property
    def faults(self) -> List[Fault]:
        return [o.fault for o in self.outcomes if o.fault is not None]


def _to_tokens(line: ProgramLine) -> Optional[TokenizedLine]:
    if isinstance(line, str):
        return tokenize_line(line)
    mnemonic, operand = line
    # 列挙値はそのまま名前として渡す（executeが再度同じ列挙値に解決する）
    if isinstance(mnemonic, Mnemonic):
        return TokenizedLine(mnemonic.name, operand)
    if not mnemonic or not mnemonic.strip():
        return None
    return TokenizedLine(mnemonic.strip().upper(), operand)


# @intent:responsibility 命令行の列を順に実行し、最終状態と行ごとの結果を返します。
# @intent:rationale フォールトは実行を中断しません。空行はエンジンを呼ばずに読み飛ばします。
def run(state: CpuState, lines: Iterable[ProgramLine]) -> RunResult:
    """
    行を厳密に順番通り実行します。HALTに到達した時点で停止します。
    """
    outcomes: List[LineOutcome] = []
    for line_number, raw in enumerate(lines, 1):
        tokens = _to_tokens(raw)
        if tokens is None:
            continue

        result = execute(state, tokens.mnemonic, tokens.operand)
        outcomes.append(LineOutcome(
            line_number=line_number,
            line=tokens,
            state=result.state,
            previous_state=state,
            instruction=result.instruction,
            fault=result.fault,
            halted=result.halted,
            output=result.output
        ))
        if result.fault:
            logger.warning("Line %d: %s", line_number, result.fault)
        state = result.state

        if result.halted:
            logger.debug("Run halted at line %d", line_number)
            return RunResult(final_state=state, outcomes=outcomes, halted=True)

    return RunResult(final_state=state, outcomes=outcomes, halted=False)


# @intent:responsibility セミコロン/改行区切りのアセンブリテキストを実行します。
def run_source(state: CpuState, source: str) -> RunResult:
    return run(state, split_source(source))
