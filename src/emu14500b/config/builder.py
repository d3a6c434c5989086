from emu14500b.core.state import CpuState, MEMORY_SIZE
from emu14500b.debugger.session import Session
from .models import MachineConfig, InitialState

# @intent:responsibility 設定（Config）に基づいて初期状態を生成し、セッションを構築します。
class SessionBuilder:
    def build_session(self, config: MachineConfig) -> Session:
        return Session(self.build_initial_state(config.initial_state))

    # @intent:responsibility Configで定義された初期状態をCpuStateに変換します。
    # @intent:rationale 設定で省略されたメモリセルは0で埋めます。
    def build_initial_state(self, config_state: InitialState) -> CpuState:
        memory = list(config_state.memory) + [0] * (MEMORY_SIZE - len(config_state.memory))
        return CpuState(
            accumulator=config_state.accumulator,
            pc=config_state.pc,
            memory=tuple(memory),
            carry_flag=config_state.carry_flag,
            zero_flag=config_state.zero_flag
        )
