"""Configuration loading and management for onion-imports.

Configuration sources are merged in priority order (lowest to highest):
    1. Defaults (defined in CheckConfig)
    2. ``[tool.onion-imports]`` in the project's pyproject.toml
    3. Project config (./onion-imports.toml)
    4. Explicit config file
    5. Environment variables (ONION_IMPORTS_* prefix)
    6. Keyword overrides (typically CLI flags)

The ``layers`` value keeps the shape of the ESLint rule option it mirrors:
a list whose items are layer tables or lists of layer tables (a parallel
group). For example, in onion-imports.toml::

    layers = [
        [
            { name = "UI", patterns = ["src/ui/"] },
            { name = "Data Access", patterns = ["src/data-access/"] },
        ],
        { name = "Business Logic", patterns = ["src/business-logic/"] },
        { name = "Object Model", patterns = ["src/object-model/"] },
    ]
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError, InvalidPathError
from .layers.models import LayerModel

Verbosity = Literal["quiet", "normal", "verbose"]

PROJECT_CONFIG_NAME = "onion-imports.toml"
PYPROJECT_TABLE = "onion-imports"
ENV_PREFIX = "ONION_IMPORTS_"

DEFAULT_EXTENSIONS = [
    ".js",
    ".jsx",
    ".mjs",
    ".cjs",
    ".ts",
    ".tsx",
    ".mts",
    ".cts",
    ".vue",
    ".svelte",
    ".py",
    ".pyi",
]

DEFAULT_EXCLUDE_PATTERNS = [
    "node_modules/",
    "bower_components/",
    "dist/",
    "build/",
    "coverage/",
    ".git/",
    ".venv/",
    "venv/",
    "__pycache__/",
    "*.min.js",
    "*.d.ts",
]


@dataclass(frozen=True)
class CheckConfig:
    """Configuration for a project check.

    Attributes:
        layers: The validated layer model (required)
        extensions: File suffixes to scan for references
        exclude_patterns: Ignore-style patterns of paths never scanned
        max_file_size_mb: Files larger than this are skipped
        max_files: Stop scanning after this many files
        verbosity: Logging verbosity level
        follow_symlinks: Follow symbolic links during scanning
    """

    layers: LayerModel
    extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    exclude_patterns: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS))
    max_file_size_mb: float = 5.0
    max_files: int = 50000
    verbosity: Verbosity = "normal"
    follow_symlinks: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not isinstance(self.layers, LayerModel):
            raise InvalidConfigError("layers", self.layers, "expected a LayerModel")
        if not self.extensions:
            raise InvalidConfigError("extensions", self.extensions, "at least one extension")
        for ext in self.extensions:
            if not isinstance(ext, str) or not ext.startswith("."):
                raise InvalidConfigError("extensions", ext, "extensions must start with '.'")
        if self.max_file_size_mb <= 0:
            raise InvalidConfigError(
                "max_file_size_mb", self.max_file_size_mb, "must be positive"
            )
        if self.max_files < 1:
            raise InvalidConfigError("max_files", self.max_files, "must be at least 1")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "expected quiet, normal or verbose"
            )

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)


def load_config(
    root: Path = Path("."),
    config_file: Optional[Path] = None,
    **overrides: Any,
) -> CheckConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        root: Project root used for discovery
        config_file: Optional explicit config file path
        **overrides: Direct overrides (``layers`` may be a LayerModel or the
            raw list form; ``verbose``/``quiet`` flags map onto verbosity)

    Returns:
        Validated CheckConfig instance

    Raises:
        ConfigurationError: If a config file is unreadable or invalid, or no
            layers are configured anywhere
    """
    root = Path(root)
    merged: dict[str, Any] = {}

    pyproject = root / "pyproject.toml"
    if pyproject.is_file():
        data = _load_toml_file(pyproject)
        merged.update(data.get("tool", {}).get(PYPROJECT_TABLE, {}))

    project_config = root / PROJECT_CONFIG_NAME
    if project_config.is_file():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        config_file = Path(config_file)
        if not config_file.is_file():
            raise InvalidPathError(config_file, "config file not found")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides.pop("verbose"):
            overrides["verbosity"] = "verbose"
    if "quiet" in overrides:
        if overrides.pop("quiet"):
            overrides["verbosity"] = "quiet"
    merged.update({k: v for k, v in overrides.items() if v is not None})

    if "layers" not in merged:
        raise ConfigurationError(
            "No layers configured",
            details={
                "hint": f"add 'layers' to {PROJECT_CONFIG_NAME} or "
                f"[tool.{PYPROJECT_TABLE}] in pyproject.toml"
            },
        )

    layers = merged.pop("layers")
    if not isinstance(layers, LayerModel):
        layers = LayerModel.from_config(layers)

    try:
        return CheckConfig(layers=layers, **merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load scalar settings from ONION_IMPORTS_* environment variables.

    Supported environment variables:
        ONION_IMPORTS_MAX_FILE_SIZE_MB: float
        ONION_IMPORTS_MAX_FILES: int
        ONION_IMPORTS_VERBOSITY: quiet/normal/verbose
        ONION_IMPORTS_FOLLOW_SYMLINKS: bool
    """
    type_hints = get_type_hints(CheckConfig)
    result: dict[str, Any] = {}

    for field_name in CheckConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Returns None for types that cannot be expressed as a single string
    (lists, the layer model).
    """
    origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    try:
        import tomllib
    except ModuleNotFoundError:
        # Python < 3.11
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")
