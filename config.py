#!/usr/bin/env python3
"""
Configuration loader for Season Organizer
Loads configuration from config.yaml file.
"""

import yaml
from pathlib import Path
from typing import Optional, Dict, Any, List
from dataclasses import dataclass

from model import ExtractionStrategy, MovePolicy, RenameOrder
from pattern import DEFAULT_VIDEO_EXTENSION, DEFAULT_EXCLUDED_KEYWORDS


def _parse_enum(enum_cls, value, default):
    """Convert a config value to an enum member, raising ValueError on unknown values"""
    if value is None or value == '':
        return default
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        choices = ', '.join(member.value for member in enum_cls)
        raise ValueError(
            f"Invalid value '{value}' for {enum_cls.__name__}.\n"
            f"Expected one of: {choices}"
        )


@dataclass
class OrganizerConfig:
    """Pipeline policy configuration"""
    extraction: ExtractionStrategy = ExtractionStrategy.NESTED
    move_policy: MovePolicy = MovePolicy.TRUST_CLASSIFIER
    rename_order: RenameOrder = RenameOrder.NAME
    video_extension: str = DEFAULT_VIDEO_EXTENSION
    excluded_keywords: List[str] = None

    def __post_init__(self):
        """Set default excluded keywords if not provided"""
        if self.excluded_keywords is None:
            self.excluded_keywords = list(DEFAULT_EXCLUDED_KEYWORDS)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OrganizerConfig':
        """Create OrganizerConfig from dictionary"""
        video_extension = data.get('video_extension') or DEFAULT_VIDEO_EXTENSION
        if not video_extension.startswith('.'):
            video_extension = f".{video_extension}"

        excluded_keywords = data.get('excluded_keywords')
        if excluded_keywords is not None and not isinstance(excluded_keywords, list):
            excluded_keywords = [str(excluded_keywords)]

        return cls(
            extraction=_parse_enum(ExtractionStrategy, data.get('extraction'), ExtractionStrategy.NESTED),
            move_policy=_parse_enum(MovePolicy, data.get('move_policy'), MovePolicy.TRUST_CLASSIFIER),
            rename_order=_parse_enum(RenameOrder, data.get('rename_order'), RenameOrder.NAME),
            video_extension=video_extension,
            excluded_keywords=excluded_keywords
        )


@dataclass
class ProgressConfig:
    """Progress bar configuration"""
    bar_length: int = 40

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProgressConfig':
        """Create ProgressConfig from dictionary"""
        bar_length = data.get('bar_length', 40)
        if isinstance(bar_length, float):
            bar_length = int(bar_length)
        elif not isinstance(bar_length, int):
            bar_length = 40  # Default fallback
        return cls(bar_length=bar_length)


@dataclass
class LoggingConfig:
    """Log file configuration"""
    log_dir: Optional[str] = None
    keep_logs: int = 10

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LoggingConfig':
        """Create LoggingConfig from dictionary"""
        log_dir = data.get('log_dir')
        if log_dir == '' or log_dir == 'null':
            log_dir = None
        keep_logs = data.get('keep_logs', 10)
        if not isinstance(keep_logs, int) or keep_logs < 1:
            keep_logs = 10
        return cls(log_dir=log_dir, keep_logs=keep_logs)


@dataclass
class Config:
    """Complete application configuration"""
    organizer: OrganizerConfig = None
    progress: ProgressConfig = None
    logging: LoggingConfig = None

    def __post_init__(self):
        if self.organizer is None:
            self.organizer = OrganizerConfig()
        if self.progress is None:
            self.progress = ProgressConfig()
        if self.logging is None:
            self.logging = LoggingConfig()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create Config from dictionary"""
        return cls(
            organizer=OrganizerConfig.from_dict(data.get('organizer') or {}),
            progress=ProgressConfig.from_dict(data.get('progress') or {}),
            logging=LoggingConfig.from_dict(data.get('logging') or {})
        )


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load complete configuration from YAML file

    Args:
        config_path: Path to config.yaml file. If None, looks for config.yaml
                     in the current directory or script directory and falls
                     back to defaults when neither exists.

    Returns:
        Config object with organizer, progress and logging settings

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist
        yaml.YAMLError: If config file is invalid YAML
        ValueError: If a setting has an invalid value
    """
    if config_path is None:
        # Try current directory first
        config_file = Path.cwd() / 'config.yaml'

        # If not found, try script directory
        if not config_file.exists():
            config_file = Path(__file__).parent / 'config.yaml'

        if not config_file.exists():
            return Config()
    else:
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_file}")

    with open(config_file, 'r', encoding='utf-8') as f:
        config_data = yaml.safe_load(f)

    if not config_data:
        return Config()
    if not isinstance(config_data, dict):
        raise ValueError(f"Configuration file {config_file} must contain a mapping")

    return Config.from_dict(config_data)
