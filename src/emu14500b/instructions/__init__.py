from .base import Instruction, Mnemonic
from .maps import INSTRUCTION_MAP, decode_instruction, execute_instruction
