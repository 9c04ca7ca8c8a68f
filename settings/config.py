"""
Configuration management for the chunking pipeline.
"""

import logging
import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List
from pydantic import BaseModel, Field

from chunking.exceptions import ConfigurationError
from chunking.token_counter import TokenizerKind
from utils.env_loader import ensure_env_loaded

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 100_000
DEFAULT_OVERLAP_TOKENS = 1_000
DEFAULT_CHUNK_SAFETY_MARGIN = 2_000


class ChunkingConfig(BaseModel):
    """Token limits and estimator selection."""
    max_tokens: int = DEFAULT_MAX_TOKENS
    overlap_tokens: int = DEFAULT_OVERLAP_TOKENS
    chunk_safety_margin: int = DEFAULT_CHUNK_SAFETY_MARGIN
    tokenizer: TokenizerKind = TokenizerKind.SIMPLE
    prefer_line_boundaries: bool = True

    def effective_chunk_size(self) -> int:
        """Per-chunk capacity after subtracting the safety margin."""
        return max(self.max_tokens - self.chunk_safety_margin, 0)

    def check_limits(self) -> None:
        """
        Validate token limits.

        Raises:
            ConfigurationError: If any limit is out of range
        """
        if self.max_tokens <= 0:
            raise ConfigurationError("max_tokens must be greater than 0")
        if self.overlap_tokens < 0 or self.chunk_safety_margin < 0:
            raise ConfigurationError("overlap_tokens and chunk_safety_margin must be non-negative")
        if self.overlap_tokens >= self.max_tokens:
            raise ConfigurationError(
                f"overlap_tokens ({self.overlap_tokens}) must be less than max_tokens ({self.max_tokens})"
            )
        if self.chunk_safety_margin >= self.max_tokens:
            raise ConfigurationError(
                f"chunk_safety_margin ({self.chunk_safety_margin}) must be less than "
                f"max_tokens ({self.max_tokens})"
            )


class ScannerConfig(BaseModel):
    """Directory scanning configuration."""
    include_binary_files: bool = False
    respect_gitignore: bool = True  # Skip paths matched by .gitignore files
    ignore_patterns: List[str] = Field(default_factory=list)  # Merged with scanner defaults
    file_extensions: Optional[List[str]] = None  # None = every text file


class LoggingConfig(BaseModel):
    """Logging configuration."""
    enabled: bool = True
    log_dir: str = "logs"
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    enable_file_logging: bool = True
    enable_console_logging: bool = True
    use_json_format: bool = False  # JSON for files (false = readable format)
    date_based_files: bool = True  # app_YYYY-MM-DD.log vs app.log
    rotation: Dict[str, Any] = Field(default_factory=lambda: {
        "max_bytes": 10485760,  # 10MB default
        "backup_count": 5,
    })


class AppConfig(BaseModel):
    """Main configuration."""
    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)
    scanner: ScannerConfig = Field(default_factory=ScannerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class ConfigManager:
    """
    Manages configuration loading and validation.

    Reads config.yaml, then applies environment variable overrides
    (including those from a .env file beside the config file).
    """

    ENV_OVERRIDES = {
        "CHUNK_MAX_TOKENS": ("chunking", "max_tokens"),
        "CHUNK_OVERLAP_TOKENS": ("chunking", "overlap_tokens"),
        "CHUNK_SAFETY_MARGIN": ("chunking", "chunk_safety_margin"),
        "CHUNK_TOKENIZER": ("chunking", "tokenizer"),
        "LOG_LEVEL": ("logging", "log_level"),
    }

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or "config.yaml"
        self._config: Optional[AppConfig] = None

    def load_config(self) -> AppConfig:
        """
        Load configuration from YAML file with fallback to defaults.

        Raises:
            ConfigurationError: If a value is malformed or limits are invalid
        """
        if self._config is not None:
            return self._config

        config_data = self._load_yaml_config() or {}

        sections: Dict[str, Any] = {}
        for key in ("chunking", "scanner", "logging"):
            value = config_data.get(key)
            if isinstance(value, dict):
                sections[key] = dict(value)
            elif value is not None:
                logger.warning(f"Ignoring config section '{key}': expected a mapping")

        ensure_env_loaded(Path(self.config_path).resolve().parent / ".env")
        self._apply_env_overrides(sections)

        try:
            config = AppConfig(**sections)
        except ValueError as e:
            raise ConfigurationError(f"Invalid configuration in {self.config_path}: {e}") from e

        config.chunking.check_limits()
        self._config = config
        return self._config

    def _apply_env_overrides(self, sections: Dict[str, Any]) -> None:
        """Apply environment variable overrides to the raw configuration."""
        for env_name, (section, key) in self.ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value:
                sections.setdefault(section, {})[key] = value
                logger.debug(f"Config override from {env_name}: {section}.{key}={value}")

    def _load_yaml_config(self) -> Optional[Dict[str, Any]]:
        """Load configuration from YAML file."""
        config_file = Path(self.config_path)

        if not config_file.exists():
            logger.debug(f"Config file {config_file} not found, using defaults")
            return None

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Could not load config file {self.config_path}: {e}")
            return None

        if data is not None and not isinstance(data, dict):
            logger.warning(f"Config file {self.config_path} does not contain a mapping, ignoring")
            return None
        return data
