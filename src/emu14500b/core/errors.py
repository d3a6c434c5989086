# emu14500b/core/errors.py
"""
命令のデコード・実行で発生するフォールトの定義。

エンジン内部では例外として送出され、実行境界（core.cpu.execute）で
不変のFault値に変換されて呼び出し元へ返されます。
"""
from dataclasses import dataclass
from enum import Enum


# @intent:responsibility フォールトの種類を定義します。
class FaultKind(Enum):
    UNKNOWN_INSTRUCTION = "UNKNOWN_INSTRUCTION"
    MALFORMED_OPERAND = "MALFORMED_OPERAND"
    ADDRESS_OUT_OF_RANGE = "ADDRESS_OUT_OF_RANGE"


# @intent:responsibility 失敗した命令の情報（種類、ニーモニック、理由）を不変に記録します。
@dataclass(frozen=True)
class Fault:
    kind: FaultKind
    mnemonic: str
    reason: str

    def __str__(self) -> str:
        return f"{self.mnemonic}: {self.reason}"


class InstructionError(ValueError):
    """
    命令のデコード・実行失敗を表す例外の基底クラス。
    """
    kind: FaultKind

    def __init__(self, mnemonic: str, reason: str):
        super().__init__(f"{mnemonic}: {reason}")
        self.mnemonic = mnemonic
        self.reason = reason

    # @intent:responsibility 例外を呼び出し元に返すためのFault値に変換します。
    def to_fault(self) -> Fault:
        return Fault(kind=self.kind, mnemonic=self.mnemonic, reason=self.reason)


class UnknownInstructionError(InstructionError):
    kind = FaultKind.UNKNOWN_INSTRUCTION

    def __init__(self, mnemonic: str):
        super().__init__(mnemonic, "unknown instruction")


class MalformedOperandError(InstructionError):
    kind = FaultKind.MALFORMED_OPERAND


class AddressOutOfRangeError(InstructionError, IndexError):
    kind = FaultKind.ADDRESS_OUT_OF_RANGE
