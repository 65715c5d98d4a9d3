"""Settings persistence for the commiter tool."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import logging
import os
import sys

from .types import ConfigError, MissingCredentialError

logger = logging.getLogger(__name__)

APP_NAME = "commiter"

DEFAULT_MODEL = "mistralai/ministral-3b"

DEFAULT_SIMPLE_PROMPT = (
    "Generate a short, concise commit message based on the provided Git differences below. "
    "Output only the commit message as a single line in lower case. "
    "Do not include any additional text, quotes, or explanations.\n"
    "\n"
    "---\n"
    "BEGIN GIT DIFF:\n"
)

DEFAULT_DETAILED_PROMPT = (
    "Generate a short, concise commit message based on the provided Git differences below.\n"
    "Provide up to 3 additional description options. Output in this exact format:\n"
    "\n"
    "feat: commit message\n"
    "- desc option 1\n"
    "- desc option 2\n"
    "- optional desc option 3\n"
    "\n"
    "Do not include any other text.\n"
    "\n"
    "---\n"
    "BEGIN GIT DIFF:\n"
)

# Record names inside the settings directory
API_KEY_FILE = "api_key"
SIMPLE_PROMPT_FILE = "simple_prompt"
DETAILED_PROMPT_FILE = "regular_prompt"
MODEL_FILE = "model"


def get_config_dir() -> Path:
    """Resolve the user-scoped settings directory.

    ``COMMITER_CONFIG_DIR`` overrides the location entirely. Otherwise the
    platform's user config directory is used with ``commiter`` appended.

    Raises:
        ConfigError: If no base directory can be determined
    """
    override = os.environ.get("COMMITER_CONFIG_DIR")
    if override:
        return Path(override).expanduser()

    if sys.platform == "win32":
        base = os.environ.get("APPDATA")
        if not base:
            raise ConfigError("%APPDATA% is not defined")
        return Path(base) / APP_NAME

    home = os.environ.get("HOME")
    if not home:
        raise ConfigError("$HOME is not defined")

    if sys.platform == "darwin":
        return Path(home) / "Library" / "Application Support" / APP_NAME

    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        if not os.path.isabs(base):
            raise ConfigError("path in $XDG_CONFIG_HOME is relative")
        return Path(base) / APP_NAME
    return Path(home) / ".config" / APP_NAME


@dataclass
class Settings:
    """Credential, prompt templates and model used for every generation request."""

    api_key: str
    simple_prompt_template: str = DEFAULT_SIMPLE_PROMPT
    detailed_prompt_template: str = DEFAULT_DETAILED_PROMPT
    model_id: str = DEFAULT_MODEL

    def __post_init__(self):
        """Validate settings after initialization."""
        for name in ("api_key", "simple_prompt_template", "detailed_prompt_template", "model_id"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ValueError(f"{name} must be a string, got {type(value)}")

        if not self.model_id.strip():
            raise ValueError("model_id cannot be empty")

    def with_overrides(self, **kwargs) -> 'Settings':
        """Create a new settings value with specific overrides."""
        fields = {field.name: getattr(self, field.name)
                  for field in self.__dataclass_fields__.values()}
        fields.update({k: v for k, v in kwargs.items() if v is not None})
        return Settings(**fields)

    @property
    def masked_api_key(self) -> str:
        """API key safe for display."""
        if len(self.api_key) <= 8:
            return "*" * len(self.api_key)
        return self.api_key[:4] + "*" * (len(self.api_key) - 8) + self.api_key[-4:]


class SettingsStore:
    """Reads and writes settings as one small file per record.

    Missing template and model records fall back to built-in defaults. A
    missing API key is an error: the setup command has to be run first.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir is not None else get_config_dir()

    def _path(self, name: str) -> Path:
        return self.config_dir / name

    def _read(self, name: str) -> Optional[str]:
        path = self._path(name)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("Settings record %s not found", path)
            return None
        except OSError as e:
            logger.warning("Could not read settings record %s: %s", path, e)
            return None

    def _write(self, name: str, value: str, mode: int = 0o644) -> None:
        path = self._path(name)
        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            # O_CREAT only applies the mode to new files
            os.chmod(path, mode)
        except OSError as e:
            raise ConfigError(f"Error saving {name}: {e}") from e
        logger.debug("Wrote settings record %s", path)

    def has_api_key(self) -> bool:
        key = self._read(API_KEY_FILE)
        return bool(key and key.strip())

    def load(self) -> Settings:
        """Load settings, filling optional records with defaults.

        Raises:
            MissingCredentialError: If no API key has been stored
        """
        api_key = self._read(API_KEY_FILE)
        if api_key is None or not api_key.strip():
            raise MissingCredentialError(
                f"API key not found. Run '{APP_NAME} init' to set it up.")

        model = self._read(MODEL_FILE)
        if model is not None:
            model = model.strip()

        simple = self._read(SIMPLE_PROMPT_FILE)
        detailed = self._read(DETAILED_PROMPT_FILE)

        return Settings(
            api_key=api_key.strip(),
            simple_prompt_template=simple if simple is not None else DEFAULT_SIMPLE_PROMPT,
            detailed_prompt_template=detailed if detailed is not None else DEFAULT_DETAILED_PROMPT,
            model_id=model or DEFAULT_MODEL,
        )

    def save(self, settings: Settings) -> None:
        """Write every field to its own record, creating the directory if needed."""
        try:
            self.config_dir.mkdir(mode=0o755, parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigError(f"Error creating settings directory {self.config_dir}: {e}") from e

        self._write(API_KEY_FILE, settings.api_key, mode=0o600)
        self._write(SIMPLE_PROMPT_FILE, settings.simple_prompt_template)
        self._write(DETAILED_PROMPT_FILE, settings.detailed_prompt_template)
        self._write(MODEL_FILE, settings.model_id)
        logger.info("Settings saved to %s", self.config_dir)


def load_settings(config_dir: Optional[Path] = None) -> Settings:
    """Load settings from the user settings directory."""
    return SettingsStore(config_dir).load()


def save_settings(settings: Settings, config_dir: Optional[Path] = None) -> None:
    """Save settings to the user settings directory."""
    SettingsStore(config_dir).save(settings)
