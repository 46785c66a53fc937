"""Application settings loader for doc-pilot.

Loads tool settings from configs/config.yaml and provides typed access
to all configuration sections via dataclasses. The Gemini API key is
not part of these settings; it lives in the per-user config store.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "configs" / "config.yaml"

_DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class APIConfig:
    """Configuration for the Gemini API client."""

    provider: str = "gemini"
    model: str = "gemini-2.5-flash"
    max_output_tokens: int = 2048
    temperature: float = 0.2
    api_key_url: str = "https://makersuite.google.com/app/apikey"


@dataclass
class ManifestConfig:
    """Configuration for local manifest version detection."""

    enabled: bool = True
    package_json_sections: list[str] = field(
        default_factory=lambda: ["dependencies", "devDependencies"]
    )
    requirements_files: list[str] = field(
        default_factory=lambda: ["requirements.txt"]
    )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "WARNING"
    format: str = _DEFAULT_LOG_FORMAT
    file: Optional[str] = None


@dataclass
class AppConfig:
    """Top-level application configuration."""

    api: APIConfig = field(default_factory=APIConfig)
    manifest: ManifestConfig = field(default_factory=ManifestConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _build_manifest_config(data: dict) -> ManifestConfig:
    """Build a ManifestConfig from a dictionary.

    Args:
        data: Dictionary with manifest lookup settings.

    Returns:
        A configured ManifestConfig instance.
    """
    defaults = ManifestConfig()
    return ManifestConfig(
        enabled=data.get("enabled", True),
        package_json_sections=data.get(
            "package_json_sections", defaults.package_json_sections
        ),
        requirements_files=data.get("requirements_files", defaults.requirements_files),
    )


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load application settings from a YAML file.

    Reads the YAML config file and constructs a fully typed AppConfig
    object. Falls back to defaults for any missing values.

    Args:
        config_path: Path to the YAML config file. If None, uses the
            packaged configs/config.yaml.

    Returns:
        A fully populated AppConfig instance.

    Raises:
        yaml.YAMLError: If the config file contains invalid YAML.
    """
    path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.debug("Settings file not found at %s, using defaults", path)
        return AppConfig()

    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    logger.debug("Loaded settings from %s", path)

    api_data = raw.get("api", {})
    api_config = APIConfig(
        provider=api_data.get("provider", "gemini"),
        model=api_data.get("model", "gemini-2.5-flash"),
        max_output_tokens=api_data.get("max_output_tokens", 2048),
        temperature=api_data.get("temperature", 0.2),
        api_key_url=api_data.get(
            "api_key_url", "https://makersuite.google.com/app/apikey"
        ),
    )

    logging_data = raw.get("logging", {})
    logging_config = LoggingConfig(
        level=logging_data.get("level", "WARNING"),
        format=logging_data.get("format", _DEFAULT_LOG_FORMAT),
        file=logging_data.get("file"),
    )

    return AppConfig(
        api=api_config,
        manifest=_build_manifest_config(raw.get("manifest", {})),
        logging=logging_config,
    )
