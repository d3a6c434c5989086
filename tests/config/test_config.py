# tests/config/test_config.py
"""
emu14500b.configパッケージ（YAML設定の読み込みとセッション構築）の単体テスト。
"""
import pytest

from emu14500b.config.builder import SessionBuilder
from emu14500b.config.loader import ConfigError, ConfigLoader
from emu14500b.config.models import MachineConfig
from emu14500b.core.state import CpuState

SAMPLE_CONFIG = """
initial_state:
  accumulator: 0x10
  pc: "0x02"
  carry_flag: true
  memory: [0x0F, "0xF0", 3]
console:
  clear_screen: false
  banner: false
"""


@pytest.fixture
def loader():
    return ConfigLoader()


def test_load_from_file(loader, tmp_path):
    path = tmp_path / "machine.yaml"
    path.write_text(SAMPLE_CONFIG, encoding="utf-8")
    config = loader.load_from_file(str(path))
    assert config.initial_state.accumulator == 0x10
    assert config.initial_state.pc == 0x02
    assert config.initial_state.carry_flag is True
    assert config.initial_state.zero_flag is False
    assert config.initial_state.memory == [0x0F, 0xF0, 3]
    assert config.console.clear_screen is False
    assert config.console.banner is False


def test_empty_config_uses_defaults(loader):
    assert loader.load_from_string("") == MachineConfig()


@pytest.mark.parametrize("text", [
    "- 1\n- 2",
    "initial_state: 5",
    "initial_state:\n  accumulator: 256",
    "initial_state:\n  pc: abc",
    "initial_state:\n  carry_flag: 1",
    "initial_state:\n  memory: 3",
    "initial_state:\n  memory: [" + ", ".join(["0"] * 17) + "]",
    "initial_state:\n  memory: [-1]",
    "console:\n  banner: yes please",
    "initial_state: [unclosed",
])
def test_invalid_config(loader, text):
    with pytest.raises(ConfigError):
        loader.load_from_string(text)


def test_config_error_is_value_error():
    assert issubclass(ConfigError, ValueError)


def test_build_session_pads_memory(loader):
    config = loader.load_from_string(SAMPLE_CONFIG)
    session = SessionBuilder().build_session(config)
    state = session.get_state()
    assert state == CpuState(
        accumulator=0x10,
        pc=0x02,
        memory=(0x0F, 0xF0, 3) + (0,) * 13,
        carry_flag=True
    )


def test_reset_returns_to_configured_state(loader):
    session = SessionBuilder().build_session(loader.load_from_string(SAMPLE_CONFIG))
    session.run_source("LDA 01; STORE 05")
    session.reset()
    assert session.get_state().accumulator == 0x10
    assert session.get_state().memory[5] == 0
