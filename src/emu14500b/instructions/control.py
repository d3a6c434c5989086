# src/emu14500b/instructions/control.py
"""
制御系命令 (Jump, NOP, HALT)。
"""
from typing import Optional

from emu14500b.core.state import BYTE_MASK, CpuState


def _advance(state: CpuState) -> CpuState:
    return state.replace(pc=(state.pc + 1) & BYTE_MASK)

def _jump_if(state: CpuState, target: int, condition: bool) -> CpuState:
    if condition:
        return state.replace(pc=target)
    return _advance(state)

def nop(state: CpuState, address: Optional[int]) -> CpuState:
    return _advance(state)

def jmp(state: CpuState, target: int) -> CpuState:
    return state.replace(pc=target)

# @intent:note zero_flagを立てる命令は存在しないため、リセット直後の状態では常に不成立となる。
def jz(state: CpuState, target: int) -> CpuState:
    return _jump_if(state, target, state.zero_flag)

def jc(state: CpuState, target: int) -> CpuState:
    return _jump_if(state, target, state.carry_flag)

# @intent:note 停止の通知は実行エンジン側で行う。状態は変化しない。
def halt(state: CpuState, address: Optional[int]) -> CpuState:
    return state
