# src/emu14500b/instructions/alu.py
"""
算術論理演算命令 (ALU)。
いずれの命令もzero_flagを更新しません。carry_flagを更新するのはローテート命令のみです。
"""
from typing import Optional

from emu14500b.core.state import BYTE_MASK, CpuState

# --- Logical Operations (AND, ORA, XOR, INVERT) ---

def and_(state: CpuState, address: int) -> CpuState:
    return state.replace(accumulator=state.accumulator & state.read_memory(address))

def ora(state: CpuState, address: int) -> CpuState:
    return state.replace(accumulator=state.accumulator | state.read_memory(address))

def xor(state: CpuState, address: int) -> CpuState:
    return state.replace(accumulator=state.accumulator ^ state.read_memory(address))

def invert(state: CpuState, address: Optional[int]) -> CpuState:
    return state.replace(accumulator=~state.accumulator & BYTE_MASK)

# --- Rotate Operations (RLC, RRC) ---

# @intent:note 9bitのキャリー経由ローテートではなく8bitの循環ローテート。
#              押し出されたビットはcarry_flagに入り、同時に反対側のビットにも戻る。
def rlc(state: CpuState, address: Optional[int]) -> CpuState:
    a = state.accumulator
    carry = (a & 0x80) != 0
    res = ((a << 1) | (a >> 7)) & BYTE_MASK
    return state.replace(accumulator=res, carry_flag=carry)

def rrc(state: CpuState, address: Optional[int]) -> CpuState:
    a = state.accumulator
    carry = (a & 0x01) != 0
    res = ((a >> 1) | (a << 7)) & BYTE_MASK
    return state.replace(accumulator=res, carry_flag=carry)

# --- Increment / Decrement ---

# @intent:note 0xFF -> 0x00 のラップアラウンドでもフラグは変化しない。
def inc(state: CpuState, address: Optional[int]) -> CpuState:
    return state.replace(accumulator=(state.accumulator + 1) & BYTE_MASK)

def dec(state: CpuState, address: Optional[int]) -> CpuState:
    return state.replace(accumulator=(state.accumulator - 1) & BYTE_MASK)
