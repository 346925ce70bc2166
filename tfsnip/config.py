"""
Configuration — Layered tfsnip settings

Config hierarchy (highest to lowest priority):
  1. Environment variables
  2. Project config (.tfsnip/config.yaml)
  3. User config (~/.tfsnip/config.yaml)
  4. Defaults

Command-line flags override all of these for a single run.
"""

import os
import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

from .core.assembler import KIND_PREFIXES
from .core.discovery import DEFAULT_PROVIDERS_DIR
from .core.errors import ConfigError
from .core.parsing.config import SchemaPattern
from .presentation.symbols import get_symbols


DEFAULT_EDITOR = "vim"

# Environment variable -> (section, setting)
ENV_OVERRIDES = {
    "TFSNIP_EDITOR": ("output", "editor"),
    "TFSNIP_TEMPLATE_DIR": ("output", "template_dir"),
    "TFSNIP_PROVIDERS_DIR": ("scan", "providers_dir"),
}


def _require_str(section: str, **settings) -> Optional[str]:
    """Error for the first setting whose value is not a string."""
    for name, value in settings.items():
        if not isinstance(value, str):
            return f"{section}.{name} must be a string, got {type(value).__name__}"
    return None


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    """One section of a config.yaml mapping; absent or empty is {}."""
    value = data.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"Config section '{name}' must be a mapping, got {type(value).__name__}")
    return value


def _reserved_names(value: Any) -> List[str]:
    """schema.reserved as a list; a string is split on commas."""
    if value is None:
        return []
    if isinstance(value, str):
        return [r.strip() for r in value.split(",") if r.strip()]
    if isinstance(value, list):
        return list(value)
    raise ConfigError(f"schema.reserved must be a list of field names, got {type(value).__name__}")


@dataclass
class ScanConfig:
    """Where source units are found."""
    providers_dir: str = DEFAULT_PROVIDERS_DIR
    kind: str = "resource"  # "resource" | "data"

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        error = _require_str("scan", providers_dir=self.providers_dir, kind=self.kind)
        if error:
            return error
        if self.kind not in KIND_PREFIXES:
            return f"Unknown kind '{self.kind}'. Valid: {', '.join(KIND_PREFIXES)}"
        if not self.providers_dir:
            return "providers_dir cannot be empty"
        return None


@dataclass
class SchemaConfig:
    """Shape of the declarations being matched."""
    map_field: str = "Schema"
    marker: str = "schema"
    reserved: List[str] = field(default_factory=lambda: ["tags"])

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        error = _require_str("schema", map_field=self.map_field, marker=self.marker)
        if error:
            return error
        if not all(isinstance(name, str) for name in self.reserved):
            return "schema.reserved must be a list of field names"
        if not self.map_field.isidentifier():
            return f"Schema map field '{self.map_field}' is not a Go identifier"
        if not self.marker.isidentifier():
            return f"Marker '{self.marker}' is not a Go identifier"
        return None

    def to_pattern(self) -> SchemaPattern:
        return SchemaPattern(
            schema_field=self.map_field,
            marker_package=self.marker,
            reserved_fields=frozenset(self.reserved),
        )


@dataclass
class OutputConfig:
    """Rendering preferences."""
    editor: str = DEFAULT_EDITOR
    template_dir: Optional[str] = None  # None = packaged templates
    symbols: str = "auto"  # "unicode" | "ascii" | "auto"

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        error = _require_str("output", editor=self.editor, symbols=self.symbols)
        if error:
            return error
        if self.template_dir is not None and not isinstance(self.template_dir, str):
            return "output.template_dir must be a path"
        valid_symbols = ("unicode", "ascii", "auto")
        if self.symbols not in valid_symbols:
            return f"Unknown symbols setting '{self.symbols}'. Valid: {', '.join(valid_symbols)}"
        if not self.editor:
            return "editor cannot be empty"
        return None


@dataclass
class Config:
    """All tfsnip settings, one dataclass per section."""
    scan: ScanConfig = field(default_factory=ScanConfig)
    schema: SchemaConfig = field(default_factory=SchemaConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def validate(self) -> Optional[str]:
        for section in (self.scan, self.schema, self.output):
            error = section.validate()
            if error:
                return error
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Nested dict in the config.yaml layout."""
        return {
            "scan": {
                "providers_dir": self.scan.providers_dir,
                "kind": self.scan.kind,
            },
            "schema": {
                "map_field": self.schema.map_field,
                "marker": self.schema.marker,
                "reserved": list(self.schema.reserved),
            },
            "output": {
                "editor": self.output.editor,
                "template_dir": self.output.template_dir,
                "symbols": self.output.symbols,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Build from a (possibly partial) config.yaml mapping; missing keys take defaults."""
        scan_data = _section(data, "scan")
        schema_data = _section(data, "schema")
        output_data = _section(data, "output")

        return cls(
            scan=ScanConfig(
                providers_dir=scan_data.get("providers_dir", DEFAULT_PROVIDERS_DIR),
                kind=scan_data.get("kind", "resource"),
            ),
            schema=SchemaConfig(
                map_field=schema_data.get("map_field", "Schema"),
                marker=schema_data.get("marker", "schema"),
                reserved=_reserved_names(schema_data.get("reserved", ["tags"])),
            ),
            output=OutputConfig(
                editor=output_data.get("editor", DEFAULT_EDITOR),
                template_dir=output_data.get("template_dir"),
                symbols=output_data.get("symbols", "auto"),
            ),
        )


class ConfigManager:
    """
    Reads, merges and writes the config.yaml layers.

    Hierarchy:
      1. Environment variables
      2. Project config (.tfsnip/config.yaml)
      3. User config (~/.tfsnip/config.yaml)
      4. Defaults
    """

    USER_CONFIG_DIR = Path.home() / ".tfsnip"
    PROJECT_CONFIG_DIR = ".tfsnip"
    CONFIG_FILE = "config.yaml"

    # Settable keys: section -> settings
    KEYS = {
        "scan": ("providers_dir", "kind"),
        "schema": ("map_field", "marker", "reserved"),
        "output": ("editor", "template_dir", "symbols"),
    }

    def __init__(self, project_dir: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self._config: Optional[Config] = None

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / self.PROJECT_CONFIG_DIR / self.CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self.USER_CONFIG_DIR / self.CONFIG_FILE

    def _read(self, path: Path) -> Dict[str, Any]:
        """Read one YAML layer. Missing file is an empty layer."""
        if not path.exists():
            return {}
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read config {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config {path} must be a mapping, got {type(data).__name__}")
        return data

    def load(self) -> Config:
        """
        Load configuration from all sources.

        Raises:
            ConfigError: If a config file is malformed or a value is invalid
        """
        if self._config is not None:
            return self._config

        config_data: Dict[str, Any] = {}

        # Layer 1: User config
        config_data = self._merge(config_data, self._read(self.user_config_path))

        # Layer 2: Project config (higher priority)
        config_data = self._merge(config_data, self._read(self.project_config_path))

        # Layer 3: Environment overrides
        for env_key, (section, setting) in ENV_OVERRIDES.items():
            if os.environ.get(env_key):
                section_data = _section(config_data, section)
                config_data[section] = {**section_data, setting: os.environ[env_key]}

        config = Config.from_dict(config_data)
        error = config.validate()
        if error:
            raise ConfigError(error)

        self._config = config
        return self._config

    def _save(self, path: Path, layer: Dict[str, Any]):
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            yaml.safe_dump(layer, f, default_flow_style=False, sort_keys=False)
        self._config = None

    def set(self, key: str, value: str, scope: str = "project") -> Optional[str]:
        """
        Set a configuration value.

        Only the chosen layer's file is rewritten: it keeps what it already
        held plus the one key. Other layers and environment overrides are
        left out of it.

        Args:
            key: Dot-separated key (e.g., "output.editor")
            value: Value to set
            scope: "project" or "user"

        Returns:
            Error message or None if successful

        Raises:
            ConfigError: If the layer's file is malformed
        """
        parts = key.split(".")
        if len(parts) != 2:
            return f"Invalid key format: {key}. Use 'section.setting' (e.g., 'output.editor')"

        section, setting = parts
        if section not in self.KEYS:
            return f"Unknown section: {section}. Valid: {', '.join(self.KEYS)}"
        if setting not in self.KEYS[section]:
            return f"Unknown {section} setting: {setting}. Valid: {', '.join(self.KEYS[section])}"

        if section == "schema" and setting == "reserved":
            parsed = _reserved_names(value)
        elif section == "output" and setting == "template_dir" and value.lower() in ("", "none", "default"):
            parsed = None
        else:
            parsed = value

        path = self.project_config_path if scope == "project" else self.user_config_path
        layer = self._read(path)
        layer[section] = {**_section(layer, section), setting: parsed}

        error = Config.from_dict(layer).validate()
        if error:
            return error

        self._save(path, layer)
        return None

    def get(self, key: str) -> Optional[str]:
        """Get a configuration value."""
        parts = key.split(".")
        if len(parts) != 2:
            return None

        section, setting = parts
        value = self.load().to_dict().get(section, {}).get(setting)
        if isinstance(value, list):
            return ",".join(value)
        return value

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result

    def display(self) -> str:
        """Human-readable summary of the merged settings and where they come from."""
        config = self.load()
        symbols = get_symbols(config.output.symbols)

        def exists(path: Path) -> str:
            return symbols.check_pass if path.exists() else "-"

        lines = [
            "Configuration:",
            "",
            "Scan:",
            f"  Providers dir: {config.scan.providers_dir}",
            f"  Kind: {config.scan.kind}",
            "",
            "Schema:",
            f"  Map field: {config.schema.map_field}",
            f"  Marker: {config.schema.marker}",
            f"  Reserved: {', '.join(config.schema.reserved) or '(none)'}",
            "",
            "Output:",
            f"  Editor: {config.output.editor}",
            f"  Template dir: {config.output.template_dir or '(packaged)'}",
            f"  Symbols: {config.output.symbols}",
            "",
            "Config files:",
            f"  {exists(self.user_config_path)} User: {self.user_config_path}",
            f"  {exists(self.project_config_path)} Project: {self.project_config_path}",
        ]

        return "\n".join(lines)


# Convenience function
def get_config(project_dir: Optional[Path] = None) -> Config:
    """Load configuration for a project."""
    return ConfigManager(project_dir).load()
