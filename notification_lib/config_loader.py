"""Configuration loading: bundled local config plus the message catalog."""

import logging
import os
import time
import urllib.parse
from importlib.resources import files
from typing import Any, Dict, Optional

import yaml
from jsonschema import ValidationError, validate

logger = logging.getLogger(__name__)

NULL_STRING_POLICIES = ("guard", "raise")

LOCAL_CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "locale": {"type": "string", "minLength": 1},
        "messages_filename": {"type": "string", "minLength": 1},
        "messages_uri": {"type": ["string", "null"]},
        "null_string_policy": {"enum": list(NULL_STRING_POLICIES)},
    },
    "additionalProperties": False,
}

MESSAGES_SCHEMA = {
    "type": "object",
    "minProperties": 1,
    "additionalProperties": {
        "type": "object",
        "additionalProperties": {"type": "string"},
    },
}


class ConfigLoader:
    """Handles the bundled local config and the message catalog it points to."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Load local config and message catalog.

        Args:
            config_path: Path to a local-config.yaml replacing the bundled
                one. Relative message URIs resolve against its directory.

        Raises:
            ValueError: If either file fails schema validation or the
                message URI scheme is unsupported
        """
        if config_path is None:
            config_file = files('notification_lib').joinpath('local-config.yaml')
            self.local_config_path = str(config_file)
        else:
            self.local_config_path = os.path.abspath(config_path)

        self.local_config = self._load_yaml(self.local_config_path) or {}
        self._check(self.local_config, LOCAL_CONFIG_SCHEMA, self.local_config_path)

        messages_uri = self.get_messages_uri()
        self.messages = self._load_config_from_uri(messages_uri)
        self._check(self.messages, MESSAGES_SCHEMA, messages_uri)
        self.messages_loaded_at = time.time()

        logger.info(
            f"Loaded message catalog from {messages_uri} "
            f"(locales: {', '.join(sorted(self.messages))})"
        )

    def _load_yaml(self, path: str) -> Dict[str, Any]:
        """Load YAML file from disk."""
        with open(path, encoding='utf-8') as f:
            return yaml.safe_load(f)

    def _check(self, data: Any, schema: Dict[str, Any], source: str) -> None:
        """Validate loaded YAML against its JSON schema."""
        try:
            validate(instance=data, schema=schema)
        except ValidationError as e:
            error_path = " -> ".join(str(p) for p in e.path) if e.path else "root"
            raise ValueError(
                f"Invalid configuration in {source} at {error_path}: {e.message}"
            ) from e

    def _load_config_from_uri(self, uri: str) -> Dict[str, Any]:
        """
        Load YAML from a URI.

        Supports:
        - Relative paths - resolved against the local config directory
        - file:// - Local filesystem (absolute paths)

        Args:
            uri: Config URI or relative path

        Returns:
            Parsed YAML config
        """
        parsed = urllib.parse.urlparse(uri)

        if not parsed.scheme:
            config_dir = os.path.dirname(os.path.abspath(self.local_config_path))
            return self._load_yaml(os.path.join(config_dir, uri))

        if parsed.scheme == 'file':
            return self._load_yaml(urllib.parse.unquote(parsed.path))

        raise ValueError(f"Unsupported URI scheme: {parsed.scheme} in {uri}")

    def get_messages(self) -> Dict[str, Dict[str, str]]:
        """Get message templates keyed by locale, then rule."""
        return self.messages

    def get_messages_uri(self) -> str:
        """Return messages_uri if set, otherwise messages_filename."""
        uri = self.local_config.get('messages_uri')
        if uri:
            return uri
        return self.local_config.get('messages_filename', 'messages.yaml')

    def get_locale(self) -> str:
        return self.local_config.get('locale', 'en')

    def get_null_string_policy(self) -> str:
        """How string rules treat None: 'guard' (default) or 'raise'."""
        return self.local_config.get('null_string_policy', 'guard')

    def get_messages_age(self) -> Optional[float]:
        """
        Get age of the message catalog in seconds since it was loaded.

        Returns:
            Age in seconds, or None if not loaded
        """
        if hasattr(self, 'messages_loaded_at'):
            return time.time() - self.messages_loaded_at
        return None


_config: Optional[ConfigLoader] = None


def get_config() -> ConfigLoader:
    """Get or initialize the process-wide ConfigLoader (bundled config)."""
    global _config
    if _config is None:
        _config = ConfigLoader()
    return _config


def reset_config():
    """Reset the process-wide ConfigLoader (for testing)."""
    global _config
    _config = None
