"""Settings loading, validation and persistence."""

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from .exceptions import ConfigError
from .prompts import DEFAULT_CUSTOM_PROMPT, SUMMARY_TEMPLATES

logger = logging.getLogger(__name__)

APP_NAME = "pagevault"

# Environment variables that override the stored settings file.
_ENV_OVERRIDES = {
    "api_key": "OPENAI_API_KEY",
    "base_url": "OPENAI_BASE_URL",
    "model": "PAGEVAULT_MODEL",
    "firecrawl_api_key": "FIRECRAWL_API_KEY",
    "vault_path": "OBSIDIAN_VAULT_PATH",
}

_SECRET_FIELDS = ("api_key", "firecrawl_api_key")


@dataclass
class Settings:
    """Application settings."""

    api_key: str = ""
    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-3.5-turbo"
    summary_template: str = "brief"
    custom_prompt: str = DEFAULT_CUSTOM_PROMPT
    save_folder: str = "Inbox/Web"
    file_name_template: str = "{{title}} - {{date}}"
    include_frontmatter: bool = True
    max_characters: int = 30000
    vault_path: Path = field(default_factory=lambda: Path.cwd() / "vault_output")
    firecrawl_api_key: str = ""

    def validate(self) -> None:
        """Validate the settings needed before calling the API."""
        if not self.api_key:
            raise ConfigError(
                "API key is not configured. Set OPENAI_API_KEY or run "
                "'pagevault config set api_key <key>'."
            )
        if not self.base_url:
            raise ConfigError("API base URL is not configured.")
        if self.summary_template not in SUMMARY_TEMPLATES:
            names = ", ".join(SUMMARY_TEMPLATES)
            raise ConfigError(
                f"Unknown summary template: {self.summary_template}. Use one of: {names}."
            )
        if self.summary_template == "custom" and not self.custom_prompt.strip():
            raise ConfigError("The custom template is selected but custom_prompt is empty.")
        if self.max_characters < 1:
            raise ConfigError("max_characters must be at least 1.")

    def set_value(self, key: str, raw: str) -> None:
        """Set a field from its string form, coercing to the field's type."""
        if key not in _field_names():
            raise ConfigError(f"Unknown setting: {key}")
        current = getattr(self, key)

        if isinstance(current, bool):
            lowered = raw.strip().lower()
            if lowered in ("1", "true", "yes", "on"):
                value = True
            elif lowered in ("0", "false", "no", "off"):
                value = False
            else:
                raise ConfigError(f"{key} expects true or false, got '{raw}'.")
        elif isinstance(current, int):
            try:
                value = int(raw)
            except ValueError as e:
                raise ConfigError(f"{key} expects a number, got '{raw}'.") from e
            if value < 1:
                raise ConfigError(f"{key} must be a positive number.")
        elif isinstance(current, Path):
            value = Path(raw).expanduser()
        else:
            value = raw
            if key == "summary_template" and value not in SUMMARY_TEMPLATES:
                names = ", ".join(SUMMARY_TEMPLATES)
                raise ConfigError(f"Unknown summary template: {value}. Use one of: {names}.")
        setattr(self, key, value)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["vault_path"] = str(self.vault_path)
        return data

    def redacted(self) -> dict:
        """Settings as a dict with secrets masked, for display."""
        data = self.to_dict()
        for key in _SECRET_FIELDS:
            if data[key]:
                data[key] = _mask(data[key])
        return data


def _mask(secret: str) -> str:
    if len(secret) <= 8:
        return "***"
    return f"{secret[:3]}...{secret[-4:]}"


def _field_names() -> set[str]:
    return {f.name for f in fields(Settings)}


def default_settings_path() -> Path:
    """Location of the stored settings file."""
    env_path = os.getenv("PAGEVAULT_SETTINGS")
    if env_path:
        return Path(env_path).expanduser()
    return Path(click.get_app_dir(APP_NAME)) / "settings.json"


def _read_settings_file(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not read settings file {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"Settings file {path} must contain a JSON object.")
    return raw


def _check_stored_type(key: str, value, path: Path) -> None:
    default = getattr(Settings(), key)
    if isinstance(default, bool):
        expected, ok = "true or false", isinstance(value, bool)
    elif isinstance(default, int):
        expected = "a number"
        ok = isinstance(value, (int, str)) and not isinstance(value, bool)
    else:
        expected, ok = "a string", isinstance(value, str)
    if not ok:
        raise ConfigError(f"Invalid value for {key} in {path}: expected {expected}, got {value!r}")


def load_settings(
    path: Optional[Path] = None,
    apply_env: bool = True,
    **overrides,
) -> Settings:
    """Load settings: defaults, then the stored file, then env vars, then overrides.

    Pass ``apply_env=False`` to get exactly what is stored, e.g. before
    editing and saving the file again.
    """
    path = Path(path) if path else default_settings_path()

    settings = Settings()
    names = _field_names()

    for key, value in _read_settings_file(path).items():
        if key not in names:
            logger.warning("Ignoring unknown setting %r in %s", key, path)
            continue
        _check_stored_type(key, value, path)
        setattr(settings, key, value)

    if apply_env:
        load_dotenv()
        for key, env_var in _ENV_OVERRIDES.items():
            value = os.getenv(env_var)
            if value:
                setattr(settings, key, value)

    for key, value in overrides.items():
        if value is None:
            continue
        if key not in names:
            raise ConfigError(f"Unknown setting: {key}")
        setattr(settings, key, value)

    settings.vault_path = Path(settings.vault_path).expanduser()
    try:
        settings.max_characters = int(settings.max_characters)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"max_characters must be a number: {e}") from e
    return settings


def save_settings(settings: Settings, path: Optional[Path] = None) -> Path:
    """Persist settings as JSON and return the file path."""
    path = Path(path) if path else default_settings_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(settings.to_dict(), indent=2), encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Could not save settings to {path}: {e}") from e
    return path
