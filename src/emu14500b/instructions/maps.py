# src/emu14500b/instructions/maps.py
"""
命令マップとデコード/実行ロジック。
"""
from typing import Callable, Dict, NamedTuple, Optional

from emu14500b.core.state import CpuState
from emu14500b.instructions import base, load, alu, control

# Addressing Mode Function Type
AddrFunc = Callable[[base.Instruction], Optional[int]]
# Execution Function Type
ExecFunc = Callable[[CpuState, Optional[int]], CpuState]


# @intent:responsibility 1命令分のアドレッシングモードと実行関数の組。
class InstructionEntry(NamedTuple):
    addressing: AddrFunc
    execute: ExecFunc

    @property
    def requires_operand(self) -> bool:
        return self.addressing is not base.addr_implied


INSTRUCTION_MAP: Dict[base.Mnemonic, InstructionEntry] = {
    # Load/Store
    base.Mnemonic.LDA: InstructionEntry(base.addr_memory, load.lda),
    base.Mnemonic.MOVE: InstructionEntry(base.addr_memory, load.move),
    base.Mnemonic.STORE: InstructionEntry(base.addr_memory, load.store),

    # Logical
    base.Mnemonic.AND: InstructionEntry(base.addr_memory, alu.and_),
    base.Mnemonic.ORA: InstructionEntry(base.addr_memory, alu.ora),
    base.Mnemonic.XOR: InstructionEntry(base.addr_memory, alu.xor),
    base.Mnemonic.INVERT: InstructionEntry(base.addr_implied, alu.invert),

    # Rotate / Inc / Dec
    base.Mnemonic.RLC: InstructionEntry(base.addr_implied, alu.rlc),
    base.Mnemonic.RRC: InstructionEntry(base.addr_implied, alu.rrc),
    base.Mnemonic.INC: InstructionEntry(base.addr_implied, alu.inc),
    base.Mnemonic.DEC: InstructionEntry(base.addr_implied, alu.dec),

    # Control
    base.Mnemonic.NOP: InstructionEntry(base.addr_implied, control.nop),
    base.Mnemonic.JMP: InstructionEntry(base.addr_target, control.jmp),
    base.Mnemonic.JZ: InstructionEntry(base.addr_target, control.jz),
    base.Mnemonic.JC: InstructionEntry(base.addr_target, control.jc),
    base.Mnemonic.HALT: InstructionEntry(base.addr_implied, control.halt),
}

# @intent:pre-condition 全ての列挙値が命令マップに登録されていること。
_missing = set(base.Mnemonic) - set(INSTRUCTION_MAP)
if _missing:
    raise RuntimeError(f"Instruction map is missing entries for: {sorted(m.name for m in _missing)}")


# @intent:responsibility ニーモニックとオペランドの文字列をInstructionに変換します。
# @intent:rationale オペランドを必要としない命令では、オペランド文字列は解析せずに捨てます。
def decode_instruction(mnemonic: str, operand: Optional[str] = None) -> base.Instruction:
    parsed = base.Mnemonic.parse(mnemonic)
    if not INSTRUCTION_MAP[parsed].requires_operand:
        return base.Instruction(parsed)
    return base.Instruction(parsed, base.parse_operand(parsed, operand))


def execute_instruction(instruction: base.Instruction, state: CpuState) -> CpuState:
    entry = INSTRUCTION_MAP[instruction.mnemonic]

    # 実行前にアドレスを解決する（範囲外ならここで例外）
    address = entry.addressing(instruction)

    return entry.execute(state, address)
