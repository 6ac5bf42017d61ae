"""Engine settings loaded from YAML."""
import yaml
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from recipe_nutrition.data_layer.exceptions import ConfigurationError

CLASSIFIER_MODES = ("table", "remote")
DEFAULT_SALT_NAME_TOKENS: Tuple[str, ...] = ("salt", "sare")


@dataclass(frozen=True)
class EngineSettings:
    """Runtime settings for the engine, CLI and classifier."""

    # Product-name fragments that trigger the salt fallback (matched case-insensitively)
    salt_name_tokens: Tuple[str, ...] = DEFAULT_SALT_NAME_TOKENS
    classifier_mode: str = "table"
    classifier_url: Optional[str] = None
    classifier_timeout_seconds: float = 5.0
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate classifier settings."""
        if self.classifier_mode not in CLASSIFIER_MODES:
            raise ConfigurationError(
                f"Unknown classifier mode '{self.classifier_mode}'. "
                f"Expected one of: {list(CLASSIFIER_MODES)}"
            )
        if self.classifier_mode == "remote" and not self.classifier_url:
            raise ConfigurationError("Remote classifier mode requires classifier.url")
        if self.classifier_timeout_seconds <= 0:
            raise ConfigurationError(
                f"classifier.timeout_seconds must be positive, got {self.classifier_timeout_seconds}"
            )


class EngineSettingsLoader:
    """Loader for engine settings from YAML."""

    def __init__(self, yaml_path: str):
        """Initialize settings loader from YAML file.

        Args:
            yaml_path: Path to YAML settings file
        """
        self.yaml_path = Path(yaml_path)

    def load(self) -> EngineSettings:
        """Load engine settings from YAML file.

        Sections that are missing fall back to EngineSettings defaults.

        Returns:
            EngineSettings object

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            ConfigurationError: If values are invalid
        """
        with open(self.yaml_path, "r") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationError(f"{self.yaml_path} must contain a mapping at the top level")

        engine = self._section(data, "engine")
        classifier = self._section(data, "classifier")
        logging_section = self._section(data, "logging")

        defaults = EngineSettings()
        tokens = engine.get("salt_name_tokens", defaults.salt_name_tokens)
        if isinstance(tokens, str):
            tokens = [tokens]

        try:
            timeout = float(classifier.get("timeout_seconds", defaults.classifier_timeout_seconds))
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"classifier.timeout_seconds must be a number: {exc}") from exc

        return EngineSettings(
            salt_name_tokens=tuple(str(token).lower() for token in tokens),
            classifier_mode=str(classifier.get("mode", defaults.classifier_mode)),
            classifier_url=classifier.get("url", defaults.classifier_url),
            classifier_timeout_seconds=timeout,
            log_level=str(logging_section.get("level", defaults.log_level)).upper(),
        )

    def _section(self, data: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = data.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigurationError(f"Section '{name}' in {self.yaml_path} must be a mapping")
        return section
