"""Configuration Management Package"""

import json
import os
import sys
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Mapping, Optional

from scommit.llm.claude import ClaudeClient

API_KEY_ENV = "ANTHROPIC_API_KEY"
MODEL_ENV = "SCOMMIT_MODEL"
TIMEOUT_ENV = "SCOMMIT_TIMEOUT"


@dataclass
class Config:
    """User configuration with sensible defaults."""
    ai_enabled: bool = True
    model: Optional[str] = None
    timeout: int = 20
    recent_subjects: int = 6  # Commit subjects sent to the AI as tone context
    copy_to_clipboard: bool = True

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        for name in ("ai_enabled", "copy_to_clipboard"):
            if not isinstance(getattr(self, name), bool):
                warnings.append(f"Invalid {name} '{getattr(self, name)}', using {getattr(defaults, name)}")
                setattr(self, name, getattr(defaults, name))

        if self.model is not None and (not isinstance(self.model, str) or not self.model.strip()):
            warnings.append(f"Invalid model '{self.model}', using default")
            self.model = defaults.model

        if isinstance(self.timeout, bool) or not isinstance(self.timeout, int) or self.timeout <= 0:
            warnings.append(f"Invalid timeout '{self.timeout}', using {defaults.timeout}")
            self.timeout = defaults.timeout

        if isinstance(self.recent_subjects, bool) or not isinstance(self.recent_subjects, int) or self.recent_subjects < 0:
            warnings.append(f"Invalid recent_subjects '{self.recent_subjects}', using {defaults.recent_subjects}")
            self.recent_subjects = defaults.recent_subjects

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        # Validate and print warnings to stderr
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


class ConfigManager:
    """Manages loading and saving configuration."""

    CONFIG_FILENAME = ".scommitrc"

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        for path in (Path.cwd() / self.CONFIG_FILENAME, Path.home() / self.CONFIG_FILENAME):
            if path.exists():
                self._config = self._load_from_file(path)
                self._config_path = path
                return self._config

        self._config = Config()
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()
        if not isinstance(data, dict):
            print(f"Warning: Could not load {path}: expected a JSON object", file=sys.stderr)
            return Config()
        return Config.from_dict(data)

    def save(self, config: Config, global_config: bool = True) -> Path:
        path = Path.home() / self.CONFIG_FILENAME if global_config else Path.cwd() / self.CONFIG_FILENAME
        with open(path, 'w') as f:
            json.dump(config.to_dict(), f, indent=2)
        return path

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


@dataclass(frozen=True)
class GeneratorSettings:
    """Everything the message generator reads, captured once per run."""
    ai_enabled: bool = True
    model: str = ClaudeClient.DEFAULT_MODEL
    subject_override: Optional[str] = None
    api_key: Optional[str] = field(default=None, repr=False)
    timeout: float = 20

    @property
    def credential_present(self) -> bool:
        return bool(self.api_key)

    @property
    def use_ai(self) -> bool:
        return self.ai_enabled and self.credential_present


def _env_timeout(environ: Mapping[str, str]) -> Optional[float]:
    raw = environ.get(TIMEOUT_ENV)
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        print(f"Config warning: Invalid {TIMEOUT_ENV} '{raw}', ignoring", file=sys.stderr)
        return None
    return value if value > 0 else None


def resolve_settings(
    config: Config,
    *,
    no_ai: bool = False,
    model: Optional[str] = None,
    message: Optional[str] = None,
    timeout: Optional[float] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> GeneratorSettings:
    """Resolve settings from args, env, and config.

    Precedence: CLI args > environment variables > config file > defaults
    """
    env = os.environ if environ is None else environ
    override = message.strip() if message and message.strip() else None

    return GeneratorSettings(
        ai_enabled=config.ai_enabled and not no_ai,
        model=model or env.get(MODEL_ENV) or config.model or ClaudeClient.DEFAULT_MODEL,
        subject_override=override,
        api_key=env.get(API_KEY_ENV) or None,
        timeout=timeout or _env_timeout(env) or config.timeout,
    )


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def save_config(config: Config, global_config: bool = True) -> Path:
    return _manager.save(config, global_config)


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


__all__ = [
    "Config",
    "ConfigManager",
    "GeneratorSettings",
    "resolve_settings",
    "load_config",
    "save_config",
    "get_config_path",
    "API_KEY_ENV",
    "MODEL_ENV",
    "TIMEOUT_ENV",
]
