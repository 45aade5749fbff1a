"""Configuration model for folder consolidator."""

from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Set, Union
import json
import os
from dataclasses import dataclass, field

from ..exceptions import ConfigurationError
from .conflict import ConflictStrategy
from .file_ref import NO_EXTENSION


def normalize_extensions(values: Optional[Union[str, Iterable[str]]]) -> Set[str]:
    """Normalize user supplied extensions to lower-cased, dotted form.

    Accepts ``"jpg"``, ``".JPG"`` and comma separated lists such as
    ``"jpg, png"``, either as a single string or as a list of strings.
    ``"(no extension)"`` selects files without a suffix.

    Raises:
        ConfigurationError: If ``values`` is not a string or a list of strings
    """
    extensions: Set[str] = set()
    if values is None:
        return extensions
    if isinstance(values, str):
        values = [values]

    try:
        items = list(values)
    except TypeError:
        raise ConfigurationError(
            f"Extensions must be a string or a list of strings, got {type(values).__name__}"
        )

    for value in items:
        if not isinstance(value, str):
            raise ConfigurationError(f"Invalid extension {value!r}: expected a string")
        for part in value.split(","):
            ext = part.strip().lower()
            if not ext:
                continue
            if ext == NO_EXTENSION:
                extensions.add("")
                continue
            if not ext.startswith("."):
                ext = "." + ext
            extensions.add(ext)
    return extensions


def _as_path(name: str, value: Any) -> Path:
    if not isinstance(value, (str, os.PathLike)) or not str(value).strip():
        raise ConfigurationError(f"'{name}' must be a non-empty path, got {value!r}")
    return Path(value)


@dataclass
class Config:
    """Fully resolved settings for one consolidation run."""
    target_directory: Path
    extension_filter: Set[str] = field(default_factory=set)
    conflict_action: ConflictStrategy = ConflictStrategy.ASK
    remove_empty_directories: bool = False
    force_no_prompt: bool = False
    unattended_conflict_action: ConflictStrategy = ConflictStrategy.SKIP
    log_file: Optional[Path] = None

    def __post_init__(self):
        self.target_directory = _as_path("target_directory", self.target_directory)
        self.extension_filter = normalize_extensions(self.extension_filter)
        self.conflict_action = ConflictStrategy.parse(self.conflict_action)
        self.unattended_conflict_action = ConflictStrategy.parse(self.unattended_conflict_action)
        for name in ("remove_empty_directories", "force_no_prompt"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigurationError(f"'{name}' must be true or false, got {value!r}")
        if self.log_file is not None:
            self.log_file = _as_path("log_file", self.log_file)

    def validate(self) -> None:
        """Check the configuration before any work begins."""
        if not self.target_directory.exists():
            raise ConfigurationError(f"Target directory does not exist: {self.target_directory}")

        if not self.target_directory.is_dir():
            raise ConfigurationError(f"Target path is not a directory: {self.target_directory}")

        if self.unattended_conflict_action is ConflictStrategy.ASK:
            raise ConfigurationError("The unattended conflict action cannot be 'ask'")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target_directory": str(self.target_directory),
            "extension_filter": sorted(self.extension_filter),
            "conflict_action": self.conflict_action.value,
            "remove_empty_directories": self.remove_empty_directories,
            "force_no_prompt": self.force_no_prompt,
            "unattended_conflict_action": self.unattended_conflict_action.value,
            "log_file": str(self.log_file) if self.log_file else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        if "target_directory" not in data:
            raise ConfigurationError("Configuration is missing 'target_directory'")

        known = {
            "target_directory",
            "extension_filter",
            "conflict_action",
            "remove_empty_directories",
            "force_no_prompt",
            "unattended_conflict_action",
            "log_file",
        }
        kwargs = {key: value for key, value in data.items() if key in known}
        return cls(**kwargs)


def load_config(config_path: Path) -> Config:
    """Load configuration from a JSON file."""
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {config_path}: {e}")
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {config_path}: {e}")

    if not isinstance(config_data, dict):
        raise ConfigurationError(f"Configuration in {config_path} must be a JSON object")

    return Config.from_dict(config_data)


def save_config(config: Config, config_path: Path) -> None:
    """Save configuration to a JSON file."""
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)
