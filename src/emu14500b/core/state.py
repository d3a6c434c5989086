# emu14500b/core/state.py
"""
Core Layer (CPU状態)

このモジュールは、アキュムレータ型8bit CPUの状態（レジスタ、フラグ、メモリ）を
保持する不変データ構造を定義します。
"""
from dataclasses import dataclass, field, replace
from typing import Tuple

MEMORY_SIZE = 16  # 4bitアドレス空間 (0x0-0xF)
BYTE_MASK = 0xFF


def _empty_memory() -> Tuple[int, ...]:
    return (0,) * MEMORY_SIZE


# @intent:responsibility CPUのレジスタ、フラグ、メモリの状態を保持します。
# @intent:rationale 状態は実行エンジンの各呼び出しに明示的に渡され、新しいインスタンスとして返されるため不変にします。
#                  命令が失敗した場合、呼び出し元は元のインスタンスをそのまま保持できます。
@dataclass(frozen=True)
class CpuState:
    """
    アキュムレータ、プログラムカウンタ、2つのフラグ、16バイトのメモリを保持するデータクラス。

    pcは命令フェッチには使われない参照用のカウンタであり、ジャンプ命令の書き込み先です。
    """
    accumulator: int = 0x00
    pc: int = 0x00  # Program Counter
    memory: Tuple[int, ...] = field(default_factory=_empty_memory)
    carry_flag: bool = False
    zero_flag: bool = False

    # @intent:pre-condition 全てのレジスタとメモリセルは8bit値、メモリ長はMEMORY_SIZEである必要があります。
    def __post_init__(self):
        if not 0 <= self.accumulator <= BYTE_MASK:
            raise ValueError(f"Accumulator {self.accumulator} is not an 8-bit value.")
        if not 0 <= self.pc <= BYTE_MASK:
            raise ValueError(f"Program counter {self.pc} is not an 8-bit value.")
        # listで渡された場合もタプルに正規化する
        memory = tuple(self.memory)
        if len(memory) != MEMORY_SIZE:
            raise ValueError(f"Memory must have exactly {MEMORY_SIZE} cells, got {len(memory)}.")
        for address, value in enumerate(memory):
            if not 0 <= value <= BYTE_MASK:
                raise ValueError(f"Memory[{address:X}] = {value} is not an 8-bit value.")
        object.__setattr__(self, "memory", memory)

    # @intent:responsibility dataclasses.replaceのラッパー。
    def replace(self, **changes) -> 'CpuState':
        return replace(self, **changes)

    def read_memory(self, address: int) -> int:
        if not 0 <= address < MEMORY_SIZE:
            raise IndexError(f"Address {address} out of bounds for memory of size {MEMORY_SIZE}.")
        return self.memory[address]

    # @intent:responsibility 1セルだけ書き換えた新しいインスタンスを返します（不変性の維持）。
    def write_memory(self, address: int, data: int) -> 'CpuState':
        if not 0 <= address < MEMORY_SIZE:
            raise IndexError(f"Address {address} out of bounds for memory of size {MEMORY_SIZE}.")
        memory = list(self.memory)
        memory[address] = data
        return self.replace(memory=tuple(memory))
