"""CLI Commands"""

import os
from pathlib import Path

from scommit.config import (
    API_KEY_ENV, MODEL_ENV, TIMEOUT_ENV, Config, ConfigManager,
    get_config_path, load_config, resolve_settings, save_config,
)
from scommit.output import bold, dim, info, print_error, print_success


def display_config() -> int:
    """Display current configuration and the settings it resolves to."""
    config = load_config()
    config_path = get_config_path()
    settings = resolve_settings(config)

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no {ConfigManager.CONFIG_FILENAME} found)")

    overrides = [name for name in (MODEL_ENV, TIMEOUT_ENV) if os.environ.get(name)]
    if overrides:
        print(f"  {dim('Environment overrides:')}")
        for name in overrides:
            print(f"    {name}={os.environ[name]}")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    ai_enabled:        {info(str(config.ai_enabled).lower())}")
    print(f"    model:             {info(settings.model)}")
    print(f"    timeout:           {info(f'{settings.timeout:g}s')}")
    print(f"    recent_subjects:   {info(str(config.recent_subjects))}")
    print(f"    copy_to_clipboard: {info(str(config.copy_to_clipboard).lower())}")
    print(f"    {API_KEY_ENV}: {info('set' if settings.credential_present else 'not set')}")

    print(f"\n  {dim('Config locations:')}")
    print(f"    Local:  {ConfigManager.CONFIG_FILENAME} (in current directory)")
    print(f"    Global: ~/{ConfigManager.CONFIG_FILENAME}")
    print(f"\n  {dim('Run')} scommit --init-config {dim('to write one')}\n")

    return 0


def init_config() -> int:
    """Write a local config file with default values."""
    path = Path.cwd() / ConfigManager.CONFIG_FILENAME
    if path.exists():
        print_error(f"{path} already exists")
        return 1
    try:
        saved = save_config(Config(), global_config=False)
    except OSError as e:
        print_error(f"Could not write {path}: {e}")
        return 1
    print_success(f"Saved to {saved}")
    return 0
