from dataclasses import dataclass, field
from typing import List

@dataclass
class InitialState:
    accumulator: int = 0x00
    pc: int = 0x00
    carry_flag: bool = False
    zero_flag: bool = False
    memory: List[int] = field(default_factory=list)  # 先頭から順に設定、残りは0

@dataclass
class ConsoleConfig:
    clear_screen: bool = True
    banner: bool = True

@dataclass
class MachineConfig:
    initial_state: InitialState = field(default_factory=InitialState)
    console: ConsoleConfig = field(default_factory=ConsoleConfig)
