# src/emu14500b/instructions/base.py
"""
命令セットの定義とオペランド解決ロジック。
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from emu14500b.core.errors import AddressOutOfRangeError, MalformedOperandError, UnknownInstructionError
from emu14500b.core.state import BYTE_MASK, MEMORY_SIZE

# 16進数のバイトリテラル。0xプレフィックスは任意。
_HEX_LITERAL = re.compile(r"^(0[xX])?([0-9A-Fa-f]+)$")


# @intent:responsibility 命令セットを閉じた列挙型として定義します。値は命令のオペコードです。
class Mnemonic(Enum):
    NOP = 0x00
    LDA = 0x01
    AND = 0x02
    ORA = 0x03
    XOR = 0x04
    INVERT = 0x05
    JMP = 0x06
    JZ = 0x07
    JC = 0x08
    RLC = 0x09
    RRC = 0x0A
    STORE = 0x0B
    MOVE = 0x0C
    DEC = 0x0D
    INC = 0x0E
    HALT = 0x0F

    # @intent:responsibility ニーモニック文字列（大文字小文字を区別しない）を列挙値に変換します。
    @classmethod
    def parse(cls, text: str) -> 'Mnemonic':
        name = text.strip().upper()
        name = MNEMONIC_ALIASES.get(name, name)
        try:
            return cls[name]
        except KeyError:
            raise UnknownInstructionError(name) from None


# 旧ディスパッチャでのORの表記
MNEMONIC_ALIASES = {"OR": "ORA"}


# @intent:responsibility デコード済みの1命令（ニーモニックと任意のオペランド）を保持します。
@dataclass(frozen=True)
class Instruction:
    mnemonic: Mnemonic
    operand: Optional[int] = None

    @property
    def opcode(self) -> int:
        return self.mnemonic.value

    def __str__(self) -> str:
        if self.operand is None:
            return self.mnemonic.name
        return f"{self.mnemonic.name} {self.operand:02X}"


# @intent:responsibility 16進数のオペランド文字列をバイト値に変換します。
# @intent:pre-condition 値は0x00-0xFFの範囲に収まる必要があります。
def parse_operand(mnemonic: Mnemonic, text: Optional[str]) -> int:
    if text is None or not text.strip():
        raise MalformedOperandError(mnemonic.name, "missing operand")
    match = _HEX_LITERAL.match(text.strip())
    if not match:
        raise MalformedOperandError(mnemonic.name, f"operand '{text}' is not a hexadecimal byte")
    value = int(match.group(2), 16)
    if value > BYTE_MASK:
        raise MalformedOperandError(mnemonic.name, f"operand '{text}' does not fit in a byte")
    return value


# --- Addressing Modes ---

# @intent:responsibility Implied Mode (オペランドなし、指定されても無視する)
def addr_implied(instruction: Instruction) -> Optional[int]:
    return None


# @intent:responsibility Memory Mode (4bitアドレスでメモリを参照する)
# @intent:note 範囲外アドレスはラップアラウンドせずフォールトとする。
def addr_memory(instruction: Instruction) -> int:
    address = _require_operand(instruction)
    if not 0 <= address < MEMORY_SIZE:
        raise AddressOutOfRangeError(
            instruction.mnemonic.name,
            f"address {address:02X} is outside memory (00-{MEMORY_SIZE - 1:02X})"
        )
    return address


# @intent:responsibility Target Mode (ジャンプ先としてPCに書き込む8bit値)
def addr_target(instruction: Instruction) -> int:
    return _require_operand(instruction)


def _require_operand(instruction: Instruction) -> int:
    value = instruction.operand
    if value is None:
        raise MalformedOperandError(instruction.mnemonic.name, "missing operand")
    if not 0 <= value <= BYTE_MASK:
        raise MalformedOperandError(instruction.mnemonic.name, f"operand {value} does not fit in a byte")
    return value
