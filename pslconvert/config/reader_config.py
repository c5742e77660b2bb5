"""
Reader Configuration

Format constants for the PlayStation level reader.

The defaults match every known build of the format. An INI file can
override them for experiments with other builds:

    [format]
    max_walls_per_link = 10
    max_reactor_trigger_targets = 10
    num_ai_flags = 11
    max_submodels = 10
"""

import configparser
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Union

from ..utils import logWarning


@dataclass(frozen=True)
class ReaderConfig:
    """Fixed array capacities baked into the record layouts."""
    max_walls_per_link: int = 10  # Target list capacity of a trigger record
    max_reactor_trigger_targets: int = 10  # Target list capacity of the reactor trigger
    num_ai_flags: int = 11  # Flag bytes in the AI control slot
    max_submodels: int = 10  # Body angles in the polygon model render slot

    SECTION = 'format'

    def __post_init__(self):
        """Validate capacities"""
        for f in fields(self):
            value = getattr(self, f.name)
            if value <= 0:
                raise ValueError(f"{f.name} must be positive, got {value}")

    @classmethod
    def from_ini(cls, config_path: Union[str, Path]) -> 'ReaderConfig':
        """
        Load reader constants from an INI file.

        Keys missing from the [format] section keep their defaults.

        Args:
            config_path: Path to the INI file

        Returns:
            ReaderConfig instance
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        parser = configparser.ConfigParser()
        parser.read(config_path)

        if not parser.has_section(cls.SECTION):
            logWarning(f"No [{cls.SECTION}] section in {config_path}, using defaults")
            return cls()

        section = parser[cls.SECTION]
        known = {f.name for f in fields(cls)}
        for key in section:
            if key not in known:
                logWarning(f"Unknown key '{key}' in [{cls.SECTION}] of {config_path}")

        values = {}
        for name in known:
            if name in section:
                try:
                    values[name] = section.getint(name)
                except ValueError as e:
                    raise ValueError(f"Invalid value for '{name}' in {config_path}: {section[name]}") from e

        return cls(**values)
