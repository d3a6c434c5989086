# src/emu14500b/instructions/load.py
"""
ロード・ストア命令 (LDA, MOVE, STORE)。
"""
from emu14500b.core.state import CpuState


def lda(state: CpuState, address: int) -> CpuState:
    return state.replace(accumulator=state.read_memory(address))

# @intent:note MOVEはLDAと同じ振る舞い（メモリからアキュムレータへ）。
def move(state: CpuState, address: int) -> CpuState:
    return state.replace(accumulator=state.read_memory(address))

def store(state: CpuState, address: int) -> CpuState:
    return state.write_memory(address, state.accumulator)
