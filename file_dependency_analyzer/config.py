"""
Configuration for a dependency analysis run
"""

import os
from dataclasses import dataclass, field
from typing import Callable, List, Optional
import logging

from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .formatters import FORMATTERS, json_formatter
from .models import CircularMode, ReportPayload
from .paths import ABSOLUTE, RELATIVE, PathType

logger = logging.getLogger(__name__)

ENV_PREFIX = 'FDA_'
DEFAULT_FILE_TYPES = ['.js']
DEFAULT_OUTPUT_FILENAME = 'dependency.json'

_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off', ''}


def _default_includes() -> List[str]:
    return [os.path.join(os.getcwd(), 'src')]


@dataclass
class AnalyzerConfig:
    """Options recognized by the plugin session"""
    includes: List[str] = field(default_factory=_default_includes)
    file_types: List[str] = field(default_factory=lambda: list(DEFAULT_FILE_TYPES))
    output_path: str = field(default_factory=os.getcwd)
    output_filename: str = DEFAULT_OUTPUT_FILENAME
    path_type: PathType = RELATIVE
    circular_mode: CircularMode = CircularMode.CIRCULAR
    collect_all_cycles: bool = False
    assets_formatter: Callable[[ReportPayload], str] = json_formatter
    cwd: Optional[str] = None

    def __post_init__(self):
        if not callable(self.path_type) and self.path_type not in (ABSOLUTE, RELATIVE):
            raise ConfigurationError(
                f"path_type must be '{ABSOLUTE}', '{RELATIVE}' or a callable, got {self.path_type!r}")
        if not isinstance(self.circular_mode, CircularMode):
            mode = CircularMode.coerce(self.circular_mode)
            if mode.value != str(self.circular_mode).lower():
                logger.warning(f"Unknown circular_mode {self.circular_mode!r}, using '{mode.value}'")
            self.circular_mode = mode
        if not callable(self.assets_formatter):
            raise ConfigurationError("assets_formatter must be callable")

    @classmethod
    def from_env(cls, **overrides) -> 'AnalyzerConfig':
        """Build a config from FDA_* environment variables (a .env file is honored)"""
        load_dotenv()
        values = {}

        includes = os.environ.get(f'{ENV_PREFIX}INCLUDES')
        if includes:
            values['includes'] = [p for p in includes.split(os.pathsep) if p]

        file_types = os.environ.get(f'{ENV_PREFIX}FILE_TYPES')
        if file_types:
            values['file_types'] = [ext.strip() for ext in file_types.split(',') if ext.strip()]

        for key in ('output_path', 'output_filename', 'path_type', 'circular_mode'):
            value = os.environ.get(f'{ENV_PREFIX}{key.upper()}')
            if value:
                values[key] = value

        collect_all = os.environ.get(f'{ENV_PREFIX}COLLECT_ALL_CYCLES')
        if collect_all is not None:
            values['collect_all_cycles'] = parse_bool(collect_all)

        formatter = os.environ.get(f'{ENV_PREFIX}FORMATTER')
        if formatter:
            values['assets_formatter'] = get_formatter(formatter)

        values.update(overrides)
        return cls(**values)


def parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE:
        return True
    if normalized in _FALSE:
        return False
    raise ConfigurationError(f"Expected a boolean, got {value!r}")


def get_formatter(name: str) -> Callable[[ReportPayload], str]:
    try:
        return FORMATTERS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown formatter {name!r}, expected one of {sorted(FORMATTERS)}") from None
