# emu14500b/debugger/session.py
"""
実行セッションモジュール。

1セッションにつき1つのCPU状態を所有し、行単位の実行、バッチ実行、
実行履歴の記録と巻き戻しを行う責務を負います。
"""
import logging
from typing import Dict, List, Optional

from emu14500b.core.snapshot import Metadata, Operation, Snapshot
from emu14500b.core.state import CpuState
from emu14500b.runner.runner import LineOutcome, RunResult, run, run_source

logger = logging.getLogger(__name__)


# @intent:responsibility CPU状態の所有と実行制御、履歴管理を行います。
class Session:
    """
    1回の実行セッションを表すクラス。
    CPU状態はこのクラスだけが保持し、表示層はget_state()でスナップショットを読み出します。
    """
    def __init__(self, initial_state: Optional[CpuState] = None):
        # @intent:responsibility resetで戻るための初期状態を保持します。
        self._initial_state: CpuState = initial_state if initial_state is not None else CpuState()
        self._state: CpuState = self._initial_state
        # @intent:responsibility 実行履歴を保持し、step_backをサポートします。
        self._history: List[Snapshot] = []
        self._halted: bool = False

    def get_state(self) -> CpuState:
        return self._state

    @property
    def halted(self) -> bool:
        """直前に実行した行がHALTであればTrue。"""
        return self._halted

    # @intent:responsibility 初期状態に戻し、履歴を破棄します。
    def reset(self) -> None:
        self._state = self._initial_state
        self._history = []
        self._halted = False
        logger.debug("Session reset")

    # @intent:responsibility HALTによる停止を解除し、状態と履歴を保ったまま次の実行サイクルを開始します。
    def resume(self) -> None:
        self._halted = False

    def get_history(self) -> List[Snapshot]:
        return list(self._history)

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._history[-1] if self._history else None

    # @intent:responsibility 1行を実行し、その結果のSnapshotを返します。
    # @intent:return 空行の場合はNone（エンジンは呼ばれない）。
    # @intent:pre-condition HALT後はreset()またはresume()されるまで命令を発行しません。
    def step(self, line: str) -> Optional[Snapshot]:
        if self._halted:
            logger.debug("Session halted, ignoring %r", line)
            return None
        result = self._apply(run(self._state, [line]))
        if not result.outcomes:
            return None
        return self.get_last_snapshot()

    # @intent:responsibility アセンブリテキストを一括実行し、各行を履歴に記録します。
    def run_source(self, source: str) -> RunResult:
        if self._halted:
            return self._refused()
        return self._apply(run_source(self._state, source))

    def run_lines(self, lines: List[str]) -> RunResult:
        if self._halted:
            return self._refused()
        return self._apply(run(self._state, lines))

    def _refused(self) -> RunResult:
        logger.debug("Session halted, batch not dispatched")
        return RunResult(final_state=self._state, halted=True)

    def _apply(self, result: RunResult) -> RunResult:
        for outcome in result.outcomes:
            self._record(self._snapshot_from_outcome(outcome))
        self._state = result.final_state
        self._halted = result.halted
        return result

    def _snapshot_from_outcome(self, outcome: LineOutcome) -> Snapshot:
        if outcome.instruction is not None:
            operation = Operation.from_instruction(outcome.instruction)
        else:
            operation = Operation.undecoded(outcome.line.mnemonic, outcome.line.operand)
        source_line = outcome.line.mnemonic
        if outcome.line.operand:
            source_line += " " + outcome.line.operand
        return Snapshot(
            state=outcome.state,
            operation=operation,
            metadata=Metadata(step_count=len(self._history) + 1, source_line=source_line, output=outcome.output),
            previous_state=outcome.previous_state,
            fault=outcome.fault,
            halted=outcome.halted
        )

    def _record(self, snapshot: Snapshot) -> None:
        self._history.append(snapshot)
        self._state = snapshot.state
        self._halted = snapshot.halted

    # @intent:responsibility 実行履歴を1つ戻り、その行の実行前の状態を復元します。
    # @intent:return 取り消したSnapshot。履歴が空ならNone。
    def step_back(self) -> Optional[Snapshot]:
        if not self._history:
            return None
        snapshot = self._history.pop()
        self._state = snapshot.previous_state
        last = self.get_last_snapshot()
        self._halted = last.halted if last else False
        return snapshot

    # --- 表示層向けAPI ---

    def get_register_map(self) -> Dict[str, int]:
        """
        現在のレジスタ値を辞書形式で返す。
        """
        return {"PC": self._state.pc, "ACC": self._state.accumulator}

    def get_flag_state(self) -> Dict[str, bool]:
        return {"Z": self._state.zero_flag, "C": self._state.carry_flag}

    # @intent:responsibility 状態表示行を生成します。
    def format_state(self) -> str:
        registers = self.get_register_map()
        flags = self.get_flag_state()
        return f"PC: {registers['PC']}, ACC: {registers['ACC']:02X}, ZF: {flags['Z']}, CF: {flags['C']}"

    # @intent:responsibility メモリダンプ行を生成します（アドレス0から順）。
    def format_memory(self) -> str:
        return " ".join(f"{value:02X}" for value in self._state.memory)
