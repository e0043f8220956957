"""Settings management for cwlflow with environment variable override support."""

import json
import logging
import os
import re
import stat
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .cwl_schema import CWL_VERSION_PATTERN

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACES = {"edam": "https://edamontology.org/"}
DEFAULT_SCHEMAS = ["https://raw.githubusercontent.com/edamontology/edamontology/master/EDAM_dev.owl"]


def is_cwl_version(value: str) -> bool:
    """Check a version string against the form the workflow schema accepts (v1.0, v1.2, ...)."""
    return re.match(CWL_VERSION_PATTERN, value) is not None


class DocumentSettings(BaseModel):
    """Fixed header values written into every generated workflow."""

    name: str = Field(default="")
    driver: str = Field(default="")
    cwl_version: str = Field(default="v1.0", description="cwlVersion of the Workflow document")
    step_cwl_version: str = Field(default="v1.2", description="cwlVersion of each embedded CommandLineTool")
    namespaces: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_NAMESPACES))
    schemas: list[str] = Field(default_factory=lambda: list(DEFAULT_SCHEMAS))

    @field_validator("cwl_version", "step_cwl_version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Versions look like v1.0, v1.2, ..."""
        if not is_cwl_version(v):
            raise ValueError(f"Invalid CWL version: {v}. Expected a value like 'v1.2'")
        return v


class CompilerSettings(BaseModel):
    """Compiler behavior."""

    strict: bool = Field(default=False, description="Fail when nodes are left out of the execution sequence")
    validate_output: bool = Field(default=True, description="Structurally validate the generated document")


class CwlflowSettings(BaseModel):
    """Main settings configuration."""

    version: str = Field(default="1.0.0")
    document: DocumentSettings = Field(default_factory=DocumentSettings)
    compiler: CompilerSettings = Field(default_factory=CompilerSettings)


class SettingsManager:
    """Manages cwlflow settings with environment variable override support."""

    def __init__(self, settings_path: Optional[Path] = None):
        self.settings_path = settings_path or Path.home() / ".cwlflow" / "settings.json"
        self._settings: Optional[CwlflowSettings] = None

    def load(self) -> CwlflowSettings:
        """Load settings with environment variable overrides."""
        if self._settings is None:
            self._settings = self._load_from_file()
        settings = self._settings.model_copy(deep=True)
        self._apply_env_overrides(settings)
        return settings

    def reload(self) -> CwlflowSettings:
        """Force reload settings from file."""
        self._settings = None
        return self.load()

    def _load_from_file(self) -> CwlflowSettings:
        """Load settings from file or return defaults."""
        if self.settings_path.exists():
            try:
                with open(self.settings_path) as f:
                    data = json.load(f)
                return CwlflowSettings(**data)
            except Exception as e:
                # If file is corrupted, use defaults
                logger.warning(f"Failed to load settings from {self.settings_path} ({e}); using defaults")
        return CwlflowSettings()

    def _apply_env_overrides(self, settings: CwlflowSettings) -> None:
        """Apply environment variable overrides."""
        for env_name, attr in (
            ("CWLFLOW_CWL_VERSION", "cwl_version"),
            ("CWLFLOW_STEP_CWL_VERSION", "step_cwl_version"),
        ):
            env_value = os.getenv(env_name)
            if env_value is None:
                continue
            if is_cwl_version(env_value):
                setattr(settings.document, attr, env_value)
            else:
                logger.warning(
                    f"Invalid {env_name}: {env_value}. Using default: {getattr(settings.document, attr)}"
                )

        env_strict = os.getenv("CWLFLOW_STRICT")
        if env_strict is not None:
            settings.compiler.strict = env_strict.lower() in ("true", "1", "yes")

    def save(self, settings: Optional[CwlflowSettings] = None) -> None:
        """Save settings to file with atomic operations and owner-only permissions."""
        if settings is None:
            settings = self.load()

        self.settings_path.parent.mkdir(parents=True, exist_ok=True)

        # Atomic write pattern: write to temp file, then replace
        temp_fd, temp_path = tempfile.mkstemp(dir=self.settings_path.parent, prefix=".settings.", suffix=".tmp")

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                json.dump(settings.model_dump(), f, indent=2)

            os.replace(temp_path, self.settings_path)
            os.chmod(self.settings_path, stat.S_IRUSR | stat.S_IWUSR)  # 0o600

            self._settings = None

        except Exception:
            Path(temp_path).unlink(missing_ok=True)
            raise
