# emu14500b/core/cpu.py
"""
Core Layer (実行エンジン)

CPU状態と1命令を受け取り、次の状態またはフォールトを返す純粋な実行エンジンを提供します。
具体的な命令の振る舞いはInstruction Layer (emu14500b.instructions) に移譲されます。
"""
import logging
from dataclasses import dataclass, replace
from typing import Optional, Union

from emu14500b.core.errors import Fault, InstructionError
from emu14500b.core.state import CpuState
from emu14500b.instructions.base import Instruction, Mnemonic
from emu14500b.instructions.maps import decode_instruction, execute_instruction

logger = logging.getLogger(__name__)

HALT_MESSAGE = "Execution halted!"


# @intent:responsibility 1命令の実行結果（新しい状態、フォールト、停止通知）を記録します。
@dataclass(frozen=True)
class ExecutionResult:
    """
    実行結果。フォールト時のstateは実行前の状態と同一です。
    """
    state: CpuState
    instruction: Optional[Instruction] = None
    fault: Optional[Fault] = None
    halted: bool = False
    output: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.fault is None


# @intent:responsibility ニーモニックとオペランドの文字列を解析して1命令を実行します。
# @intent:rationale エンジンは例外を外に出さず、型付きのFaultとして返します。
#                  呼び出し元はフォールトを報告して次の行に進むことができます。
def execute(state: CpuState, mnemonic: Union[str, Mnemonic], operand: Optional[str] = None) -> ExecutionResult:
    """
    1命令を実行し、ExecutionResultを返します。
    """
    name = mnemonic.name if isinstance(mnemonic, Mnemonic) else mnemonic
    try:
        instruction = decode_instruction(name, operand)
    except InstructionError as e:
        logger.debug("Decode fault: %s", e)
        return ExecutionResult(state=state, fault=_as_typed(e.to_fault(), name))
    result = step(state, instruction)
    if result.fault is not None:
        return replace(result, fault=_as_typed(result.fault, name))
    return result


# @intent:responsibility フォールトのニーモニックを入力された表記（ORなどの別名）に揃えます。
def _as_typed(fault: Fault, name: str) -> Fault:
    typed = name.strip().upper()
    if fault.mnemonic == typed:
        return fault
    return replace(fault, mnemonic=typed)


# @intent:responsibility デコード済みの1命令を実行します。
def step(state: CpuState, instruction: Instruction) -> ExecutionResult:
    try:
        new_state = execute_instruction(instruction, state)
    except InstructionError as e:
        logger.debug("Execution fault: %s", e)
        return ExecutionResult(state=state, instruction=instruction, fault=e.to_fault())

    if instruction.mnemonic is Mnemonic.HALT:
        logger.info(HALT_MESSAGE)
        return ExecutionResult(state=new_state, instruction=instruction, halted=True, output=HALT_MESSAGE)

    logger.debug("%s -> PC=%02X ACC=%02X CF=%s ZF=%s", instruction, new_state.pc,
                 new_state.accumulator, new_state.carry_flag, new_state.zero_flag)
    return ExecutionResult(state=new_state, instruction=instruction)
