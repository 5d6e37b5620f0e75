"""
Configuration schema for fixlens.

Supports:
- YAML file loading
- Environment variable substitution (${VAR_NAME})
- Validation with error messages

Example config (fixlens.yml):
    version: 1

    schema_dir: ${FIXLENS_SCHEMA_DIR}

    dictionaries:
      FIX.4.2: FIX42.xml
      FIX.4.4: FIX44.xml

    output:
      separator: "----"
"""

import logging
import os
import re
from pathlib import Path
from dataclasses import dataclass, field, asdict
from typing import Optional, List, Any, Dict

import yaml

logger = logging.getLogger(__name__)


LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def _substitute_env_vars(value: Any) -> Any:
    """
    Substitute ${VAR_NAME} with environment variable values.

    Example:
        ${FIXLENS_SCHEMA_DIR} → os.environ.get('FIXLENS_SCHEMA_DIR')
    """
    if isinstance(value, str):
        pattern = r'\$\{([^}]+)\}'

        def replace(match):
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                return match.group(0)  # Keep original if not found
            return env_value

        return re.sub(pattern, replace, value)

    elif isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [_substitute_env_vars(v) for v in value]

    return value


@dataclass
class OutputConfig:
    """Output settings."""
    separator: str = '-' * 40
    explain: bool = False


@dataclass
class FixlensConfig:
    """Root configuration."""

    version: int = 1
    schema_dir: Optional[str] = None
    dictionaries: Dict[str, str] = field(default_factory=dict)
    output: OutputConfig = field(default_factory=OutputConfig)
    log_level: str = 'WARNING'

    @classmethod
    def load(cls, path: Path) -> 'FixlensConfig':
        """Load from YAML file with env var substitution."""
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        data = _substitute_env_vars(data)
        logger.debug("Loaded config from %s", path)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'FixlensConfig':
        """Create from dictionary."""
        return cls(
            version=data.get('version', 1),
            schema_dir=data.get('schema_dir'),
            # Version keys such as 4.4 may come back from YAML as floats
            dictionaries={
                str(k): str(v) for k, v in (data.get('dictionaries') or {}).items()
            },
            output=OutputConfig(**(data.get('output') or {})),
            log_level=str(data.get('log_level', 'WARNING')).upper(),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)

    def to_yaml(self) -> str:
        """Convert to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def validate(self) -> List[str]:
        """Validate config. Returns list of errors (empty if valid)."""
        errors = []

        if self.version != 1:
            errors.append(f"Unsupported config version: {self.version}")

        for version, path in self.dictionaries.items():
            if not version.strip():
                errors.append("Empty protocol version key in dictionaries")
            if not path.strip():
                errors.append(f"Empty schema path for {version}")

        if self.schema_dir and '${' in self.schema_dir:
            errors.append(f"Unresolved environment variable in schema_dir: {self.schema_dir}")

        if self.log_level not in LOG_LEVELS:
            errors.append(f"Invalid log_level: {self.log_level}")

        return errors

    def resolve_schema_paths(self) -> Dict[str, Path]:
        """Dictionary paths with relative entries joined to schema_dir."""
        base = Path(self.schema_dir).expanduser() if self.schema_dir else None
        paths = {}
        for version, raw in self.dictionaries.items():
            path = Path(raw).expanduser()
            if base is not None and not path.is_absolute():
                path = base / path
            paths[version] = path
        return paths


def load_config(path: Optional[Path] = None) -> FixlensConfig:
    """Load config from file or return defaults."""
    if path and Path(path).exists():
        return FixlensConfig.load(path)

    search_paths = [
        Path('./fixlens.yml'),
        Path('./fixlens.yaml'),
        Path.home() / '.fixlens' / 'config.yml',
    ]

    for p in search_paths:
        if p.exists():
            return FixlensConfig.load(p)

    return FixlensConfig()


def generate_default_config() -> str:
    """Generate default config as YAML."""
    return """# fixlens Configuration
version: 1

# Relative dictionary paths are resolved against this directory
schema_dir: ${FIXLENS_SCHEMA_DIR}

# BeginString value -> schema file (.xml, .yml, .json)
dictionaries:
  FIX.4.2: FIX42.xml
  FIX.4.4: FIX44.xml
  FIXT.1.1: FIXT11.xml

output:
  separator: "----------------------------------------"
  explain: false

log_level: WARNING
"""
