import logging
import yaml
from typing import Dict, Any, List
from emu14500b.core.state import BYTE_MASK, MEMORY_SIZE
from .models import MachineConfig, InitialState, ConsoleConfig

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    pass


class ConfigLoader:
    def load_from_file(self, path: str) -> MachineConfig:
        with open(path, 'r', encoding="utf-8") as f:
            data = self._load_yaml(f)
        logger.debug("Loaded config from %s", path)
        return self._parse_config(data)

    def load_from_string(self, text: str) -> MachineConfig:
        return self._parse_config(self._load_yaml(text))

    def _load_yaml(self, stream: Any) -> Any:
        try:
            return yaml.safe_load(stream)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}") from e

    def _parse_config(self, data: Any) -> MachineConfig:
        if data is None:
            return MachineConfig()
        if not isinstance(data, dict):
            raise ConfigError(f"Config root must be a mapping, got {type(data).__name__}")

        # Parse Initial State
        state_data = self._section(data, "initial_state")
        initial_state = InitialState(
            accumulator=self._parse_byte(state_data.get("accumulator", 0), "accumulator"),
            pc=self._parse_byte(state_data.get("pc", 0), "pc"),
            carry_flag=self._parse_bool(state_data.get("carry_flag", False), "carry_flag"),
            zero_flag=self._parse_bool(state_data.get("zero_flag", False), "zero_flag"),
            memory=self._parse_memory(state_data.get("memory", []))
        )

        # Parse Console Options
        console_data = self._section(data, "console")
        console = ConsoleConfig(
            clear_screen=self._parse_bool(console_data.get("clear_screen", True), "clear_screen"),
            banner=self._parse_bool(console_data.get("banner", True), "banner")
        )

        return MachineConfig(initial_state=initial_state, console=console)

    def _section(self, data: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = data.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigError(f"'{name}' must be a mapping")
        return section

    def _parse_memory(self, values: Any) -> List[int]:
        if not isinstance(values, list):
            raise ConfigError("'memory' must be a list of byte values")
        if len(values) > MEMORY_SIZE:
            raise ConfigError(f"'memory' has {len(values)} cells, at most {MEMORY_SIZE} allowed")
        return [self._parse_byte(v, f"memory[{i:X}]") for i, v in enumerate(values)]

    def _parse_byte(self, value: Any, name: str) -> int:
        result = self._parse_int(value, name)
        if not 0 <= result <= BYTE_MASK:
            raise ConfigError(f"'{name}' = {result} is not an 8-bit value")
        return result

    def _parse_bool(self, value: Any, name: str) -> bool:
        if isinstance(value, bool):
            return value
        raise ConfigError(f"'{name}' must be true or false, got {value!r}")

    def _parse_int(self, value: Any, name: str = "value") -> int:
        if isinstance(value, bool):
            raise ConfigError(f"Invalid integer format for '{name}': {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                if value.lower().startswith("0x"):
                    return int(value, 16)
                return int(value)
            except ValueError:
                pass
        raise ConfigError(f"Invalid integer format for '{name}': {value}")
