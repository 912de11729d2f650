"""
Configuration management for vfshell.

Handles loading and saving user configuration from:
- XDG config directory: ~/.config/vfshell/config.json
- Fallback: ~/.vfshell/config.json
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class ShellConfig:
    """Interactive shell settings."""
    prompt: str = "vfs:{cwd} $ "
    history: bool = True
    history_file: Optional[str] = None
    scrollback: int = 500

    def get_history_path(self) -> Path:
        """Path of the prompt history file."""
        if self.history_file:
            return Path(self.history_file).expanduser()
        return Path.home() / ".vfshell_history"


@dataclass
class CLIConfig:
    """CLI default options."""
    verbose: bool = False
    color: bool = True


def _known(cls, data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys the dataclass doesn't define."""
    names = {f.name for f in fields(cls)}
    return {key: value for key, value in data.items() if key in names}


@dataclass
class VFShellConfig:
    """Main vfshell configuration."""
    shell: ShellConfig = field(default_factory=ShellConfig)
    cli: CLIConfig = field(default_factory=CLIConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "shell": asdict(self.shell),
            "cli": asdict(self.cli),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'VFShellConfig':
        """Create from dictionary. Unknown keys are ignored."""
        shell_data = data.get("shell", {})
        cli_data = data.get("cli", {})
        return cls(
            shell=ShellConfig(**_known(ShellConfig, shell_data)),
            cli=CLIConfig(**_known(CLIConfig, cli_data)),
        )


def get_config_path() -> Path:
    """
    Get configuration file path.

    Follows XDG Base Directory specification:
    1. $XDG_CONFIG_HOME/vfshell/config.json
    2. ~/.config/vfshell/config.json if ~/.config exists
    3. Fallback: ~/.vfshell/config.json

    Returns:
        Path to config file
    """
    xdg_env = os.environ.get("XDG_CONFIG_HOME")
    if xdg_env:
        return Path(xdg_env) / "vfshell" / "config.json"

    xdg_config_home = Path.home() / ".config"
    if xdg_config_home.exists():
        config_dir = xdg_config_home / "vfshell"
    else:
        config_dir = Path.home() / ".vfshell"

    return config_dir / "config.json"


def load_config() -> VFShellConfig:
    """
    Load configuration from file.

    Returns:
        VFShellConfig instance with loaded values or defaults
    """
    config_path = get_config_path()

    if not config_path.exists():
        return VFShellConfig()

    try:
        with open(config_path, 'r') as f:
            data = json.load(f)
        return VFShellConfig.from_dict(data)
    except (json.JSONDecodeError, OSError, TypeError, AttributeError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}. Using default configuration")
        return VFShellConfig()


def save_config(config: VFShellConfig) -> Path:
    """
    Save configuration to file.

    Args:
        config: Configuration to save

    Returns:
        Path the configuration was written to
    """
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)

    logger.debug(f"Configuration saved to {config_path}")
    return config_path


def update_config(
    # Shell settings
    shell_prompt: Optional[str] = None,
    shell_history: Optional[bool] = None,
    shell_history_file: Optional[str] = None,
    shell_scrollback: Optional[int] = None,
    # CLI settings
    cli_verbose: Optional[bool] = None,
    cli_color: Optional[bool] = None,
) -> VFShellConfig:
    """
    Update configuration.

    Only updates provided values, leaving others unchanged.

    Returns:
        The saved configuration
    """
    config = load_config()

    if shell_prompt is not None:
        config.shell.prompt = shell_prompt
    if shell_history is not None:
        config.shell.history = shell_history
    if shell_history_file is not None:
        config.shell.history_file = shell_history_file
    if shell_scrollback is not None:
        config.shell.scrollback = shell_scrollback

    if cli_verbose is not None:
        config.cli.verbose = cli_verbose
    if cli_color is not None:
        config.cli.color = cli_color

    save_config(config)
    return config
