"""
Configuration management for DialFace.
Handles loading, validation, and defaults for all settings.
"""

import os
import yaml
from typing import Any, Dict, List, Optional
from dataclasses import asdict, dataclass, field
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

logger = logging.getLogger(__name__)

# Default paths
DEFAULT_CONFIG_PATHS = [
    "/etc/dialface/config.yaml",
    os.path.expanduser("~/.config/dialface/config.yaml"),
    "./config.yaml",
]

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


@dataclass
class ThemeConfig:
    """Interactive and ambient palettes as [R, G, B] lists."""
    background_color: List[int] = field(default_factory=lambda: [28, 22, 48])
    hour_color: List[int] = field(default_factory=lambda: [245, 102, 0])
    minute_color: List[int] = field(default_factory=lambda: [170, 140, 220])
    second_color: List[int] = field(default_factory=lambda: [255, 255, 255])
    # Reduced-contrast palette for ambient mode
    ambient_hour_color: List[int] = field(default_factory=lambda: [200, 200, 200])
    ambient_minute_color: List[int] = field(default_factory=lambda: [140, 140, 140])


@dataclass
class TextConfig:
    """Glyph fonts. Minute and second sizes derive from the hour size."""
    text_size: float = 40.0
    text_size_round: float = 45.0
    hour_font: Optional[str] = "sans"
    hour_bold: bool = True
    minute_font: Optional[str] = "sans"
    minute_bold: bool = False


@dataclass
class ClockConfig:
    """Clock behavior."""
    show_seconds: bool = False
    timezone: Optional[str] = None  # IANA id, None for local time
    interactive_update_rate_ms: int = 1000


@dataclass
class DisplayConfig:
    """Window and display capability settings."""
    width: int = 320
    height: int = 320
    round: bool = True
    low_bit_ambient: bool = False
    fullscreen: bool = False


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    directory: Optional[str] = None


@dataclass
class DialFaceConfig:
    """Main configuration class."""
    theme: ThemeConfig = field(default_factory=ThemeConfig)
    text: TextConfig = field(default_factory=TextConfig)
    clock: ClockConfig = field(default_factory=ClockConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Runtime state (not persisted)
    config_path: Optional[str] = None


def _dict_to_dataclass(data: Dict[str, Any], cls: type) -> Any:
    """Convert a dictionary to a dataclass instance, handling nested dataclasses."""
    if data is None:
        return cls()

    field_types = {f.name: f.type for f in cls.__dataclass_fields__.values()}
    kwargs = {}

    for key, value in data.items():
        if key not in field_types:
            logger.debug(f"Ignoring unknown config key '{key}' for {cls.__name__}")
            continue

        field_type = field_types[key]

        # Handle nested dataclasses
        if hasattr(field_type, '__dataclass_fields__'):
            kwargs[key] = _dict_to_dataclass(value, field_type)
        else:
            kwargs[key] = value

    return cls(**kwargs)


def load_config(config_path: Optional[str] = None) -> DialFaceConfig:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to config file. If None, searches default locations.

    Returns:
        DialFaceConfig instance with loaded or default values.
    """
    # Find config file
    if config_path:
        paths_to_try = [config_path]
    else:
        paths_to_try = DEFAULT_CONFIG_PATHS

    config_data = {}
    found_path = None

    for path in paths_to_try:
        expanded_path = os.path.expanduser(path)
        if os.path.exists(expanded_path):
            try:
                with open(expanded_path, 'r') as f:
                    config_data = yaml.safe_load(f) or {}
                found_path = expanded_path
                logger.info(f"Loaded config from {expanded_path}")
                break
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config from {expanded_path}: {e}")

    if not found_path:
        logger.info("No config file found, using defaults")

    config = DialFaceConfig(
        theme=_dict_to_dataclass(config_data.get('theme'), ThemeConfig),
        text=_dict_to_dataclass(config_data.get('text'), TextConfig),
        clock=_dict_to_dataclass(config_data.get('clock'), ClockConfig),
        display=_dict_to_dataclass(config_data.get('display'), DisplayConfig),
        logging=_dict_to_dataclass(config_data.get('logging'), LoggingConfig),
        config_path=found_path,
    )

    # Expand log directory path
    if config.logging.directory:
        config.logging.directory = os.path.expanduser(config.logging.directory)

    return config


def save_config(config: DialFaceConfig, config_path: Optional[str] = None) -> str:
    """
    Save configuration to a YAML file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, overwrites the file the config
            was loaded from, or writes the per-user default.

    Returns:
        Path where config was saved.
    """
    if config_path is None:
        config_path = config.config_path or DEFAULT_CONFIG_PATHS[1]

    config_path = os.path.expanduser(config_path)

    # Ensure directory exists
    directory = os.path.dirname(config_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    data = config_to_dict(config)

    with open(config_path, 'w') as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    logger.info(f"Saved config to {config_path}")
    return config_path


def config_to_dict(config: DialFaceConfig) -> Dict[str, Any]:
    """Plain nested dict of the config sections, ready for yaml.dump."""
    data = asdict(config)
    # Where the config came from is not part of it
    data.pop('config_path', None)
    return data


def _is_valid_color(value: Any) -> bool:
    return (
        isinstance(value, (list, tuple))
        and len(value) == 3
        and all(isinstance(c, int) and 0 <= c <= 255 for c in value)
    )


def validate_config(config: DialFaceConfig) -> List[str]:
    """
    Validate configuration and return list of errors.

    Returns:
        List of error messages. Empty if valid.
    """
    errors = []

    # Check theme colors
    for name in ('background_color', 'hour_color', 'minute_color', 'second_color',
                 'ambient_hour_color', 'ambient_minute_color'):
        if not _is_valid_color(getattr(config.theme, name)):
            errors.append(f"Theme {name} must be three integers between 0 and 255")

    # Check text settings
    if config.text.text_size <= 0:
        errors.append("text_size must be positive")
    if config.text.text_size_round <= 0:
        errors.append("text_size_round must be positive")

    # Check clock settings
    if config.clock.interactive_update_rate_ms <= 0:
        errors.append("interactive_update_rate_ms must be positive")

    if config.clock.timezone:
        try:
            ZoneInfo(config.clock.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            errors.append(f"Unknown timezone: {config.clock.timezone}")

    # Check display settings
    if config.display.width <= 0 or config.display.height <= 0:
        errors.append("Display width and height must be positive")

    # Check logging settings
    if str(config.logging.level).upper() not in VALID_LOG_LEVELS:
        errors.append(f"Logging level must be one of: {VALID_LOG_LEVELS}")

    return errors
