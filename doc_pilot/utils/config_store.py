"""Per-user JSON config store holding the Gemini API key.

The store lives at ~/.doc-pilot/config.json by default. The root
directory is a constructor argument so tests can point it elsewhere.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

API_KEY_FIELD = "geminiApiKey"

CONFIG_DIR_NAME = ".doc-pilot"
CONFIG_FILE_NAME = "config.json"


def default_config_dir() -> Path:
    """Return the default config directory under the user's home."""
    return Path.home() / CONFIG_DIR_NAME


class ConfigStore:
    """Loads and saves the user configuration as a single JSON object.

    Every save writes the whole mapping, so keys added by hand are kept
    as long as they were present in the loaded mapping.
    """

    def __init__(self, root: Optional[Path] = None) -> None:
        """Initialize the store.

        Args:
            root: Directory holding config.json. Defaults to
                ~/.doc-pilot.
        """
        self.root = Path(root) if root else default_config_dir()

    @property
    def path(self) -> Path:
        """Full path of the JSON config file."""
        return self.root / CONFIG_FILE_NAME

    def load(self) -> dict[str, Any]:
        """Load the configuration mapping.

        Returns:
            The stored mapping, or an empty dict if no file exists.

        Raises:
            json.JSONDecodeError: If the file is not valid JSON.
            ValueError: If the file holds JSON that is not an object.
        """
        if not self.path.exists():
            logger.debug("No config file at %s", self.path)
            return {}

        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} must contain a JSON object")
        return data

    def save(self, config: dict[str, Any]) -> None:
        """Write the mapping to disk, replacing any previous content.

        Args:
            config: The configuration mapping to persist.
        """
        self.root.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(config, indent=2), encoding="utf-8")
        logger.debug("Saved config to %s", self.path)

    def reset(self) -> bool:
        """Delete the config file.

        Returns:
            True if a file was deleted, False if there was nothing to reset.
        """
        if not self.path.exists():
            return False
        self.path.unlink()
        logger.info("Removed config file %s", self.path)
        return True

    def get_api_key(self) -> Optional[str]:
        """Return the stored API key, or None if not configured."""
        return self.load().get(API_KEY_FIELD) or None

    def set_api_key(self, api_key: str) -> None:
        """Store the API key, keeping any other keys in the file."""
        config = self.load()
        config[API_KEY_FIELD] = api_key
        self.save(config)

    def clear_api_key(self) -> None:
        """Remove the API key so the user is asked for it next time."""
        config = self.load()
        config.pop(API_KEY_FIELD, None)
        self.save(config)
        logger.info("Cleared stored API key")
