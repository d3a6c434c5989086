# emu14500b/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1行の実行結果（実行後のCPU状態と実行された命令）を記録した
不変のデータ構造を定義します。表示層への情報提供と、step_backのための履歴に用います。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from emu14500b.core.errors import Fault
from emu14500b.core.state import CpuState
from emu14500b.instructions.base import Instruction


# @intent:responsibility 実行された命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    実行された命令の詳細（HEX、ニーモニック、オペランド）を記録するデータクラス。
    """
    opcode_hex: str # 例: "01"
    mnemonic: str # 例: "LDA"
    operands: List[str] = field(default_factory=list) # 例: ["05"]

    # @intent:responsibility デコード済み命令からOperationを生成します。
    @classmethod
    def from_instruction(cls, instruction: Instruction) -> 'Operation':
        operands = [] if instruction.operand is None else [f"{instruction.operand:02X}"]
        return cls(f"{instruction.opcode:02X}", instruction.mnemonic.name, operands)

    # @intent:responsibility デコードできなかった行をOperationとして記録します。
    @classmethod
    def undecoded(cls, mnemonic: str, operand: Optional[str] = None) -> 'Operation':
        return cls("??", mnemonic.upper(), [operand] if operand else [])

    def __str__(self) -> str:
        if self.operands:
            return f"{self.mnemonic} " + ", ".join(self.operands)
        return self.mnemonic

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    """
    実行に関するメタデータ（累計ステップ数、元の入力行、出力テキスト）を記録するデータクラス。
    """
    step_count: int
    source_line: str = ""
    output: Optional[str] = None # 例: "Execution halted!"

# @intent:responsibility ある一時点におけるCPUの状態と直前の状態を不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    1行の実行結果を記録した不変のデータ構造。
    previous_stateはstep_backで状態を巻き戻すために保持します。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    previous_state: CpuState
    fault: Optional[Fault] = None
    halted: bool = False
