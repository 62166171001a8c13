"""
Configuration management for the report merger.
"""

import logging
import os
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

# Module-level lock for thread-safe config loading
_config_lock = threading.Lock()

REPORT_FORMATS = ["mochawesome", "junit"]


class ConfigurationError(Exception):
    """Raised when configuration is invalid or cannot be loaded."""

    pass


@dataclass
class MergeConfig:
    """Main configuration for a merge run.

    Example config YAML::

        sources:
          - shards/report-1.json
          - shards/report-2.json
          - https://artifacts.example.com/ci/1234/report-3.json
        output: merged/report.json
        report_format: mochawesome
        indent: 2
        timeout_seconds: 30
    """

    # Inputs and output
    sources: List[str] = field(default_factory=list)
    output: Optional[str] = None

    # Output rendering
    report_format: str = "mochawesome"  # mochawesome, junit
    indent: Optional[int] = None
    summary: bool = True

    # Remote sources
    timeout_seconds: int = 10
    auth_token: Optional[str] = None

    def __post_init__(self) -> None:
        """Normalize values that YAML may deliver in a looser shape."""
        if isinstance(self.sources, str):
            self.sources = [self.sources]


def _parse_env_int(var_name: str) -> Optional[int]:
    """
    Safely parse an integer from an environment variable.

    Args:
        var_name: Name of the environment variable

    Returns:
        Parsed integer value, or None if the variable is not set

    Raises:
        ConfigurationError: If the value cannot be parsed as an integer
    """
    value = os.environ.get(var_name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(
            f"Environment variable {var_name} must be a valid integer, got: '{value}'"
        )


def _parse_env_bool(var_name: str) -> Optional[bool]:
    """Parse a boolean environment variable (1/0, true/false, yes/no, on/off)."""
    value = os.environ.get(var_name)
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ConfigurationError(
        f"Environment variable {var_name} must be a boolean, got: '{value}'"
    )


def load_config(config_file: Optional[str] = None) -> MergeConfig:
    """
    Load configuration from file and environment variables.

    Configuration precedence (highest to lowest):
    1. Environment variables
    2. Configuration file
    3. Default values

    Args:
        config_file: Path to YAML configuration file (optional)

    Returns:
        MergeConfig object with merged configuration

    Raises:
        FileNotFoundError: If config_file is specified but doesn't exist
        ConfigurationError: If config file has invalid YAML or env vars are invalid
    """
    with _config_lock:
        config_data: Dict[str, Any] = {}

        if config_file:
            logger.info("Loading configuration from %s", config_file)
            try:
                with open(config_file, "r") as f:
                    file_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in config file '{config_file}': {e}")
            except FileNotFoundError:
                raise FileNotFoundError(f"Configuration file not found: {config_file}")
            except PermissionError:
                raise ConfigurationError(f"Permission denied reading config file '{config_file}'")
            except OSError as e:
                raise ConfigurationError(f"Unable to read config file '{config_file}': {e}")
            if not isinstance(file_config, dict):
                raise ConfigurationError(
                    f"Config file '{config_file}' must contain a mapping at the top level"
                )
            config_data.update(file_config)

        env_overrides = _load_from_env()
        config_data.update(env_overrides)
        if env_overrides:
            logger.debug("Applied environment variable overrides: %s", list(env_overrides.keys()))

        try:
            return MergeConfig(**config_data)
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration: {e}")


def _load_from_env() -> Dict[str, Any]:
    """
    Load configuration from environment variables.

    Supported environment variables:
    - MERGE_OUTPUT: Path of the merged report
    - MERGE_REPORT_FORMAT: Output format (mochawesome, junit)
    - MERGE_INDENT: JSON indentation
    - MERGE_TIMEOUT: Request timeout in seconds for remote sources
    - MERGE_AUTH_TOKEN: Bearer token for remote sources
    - MERGE_SUMMARY: Print a console summary after merging

    Returns:
        Dictionary of configuration values from environment

    Raises:
        ConfigurationError: If environment variable values are invalid
    """
    env_config: Dict[str, Any] = {}

    if "MERGE_OUTPUT" in os.environ:
        env_config["output"] = os.environ["MERGE_OUTPUT"]

    if "MERGE_REPORT_FORMAT" in os.environ:
        env_config["report_format"] = os.environ["MERGE_REPORT_FORMAT"]

    indent = _parse_env_int("MERGE_INDENT")
    if indent is not None:
        env_config["indent"] = indent

    timeout = _parse_env_int("MERGE_TIMEOUT")
    if timeout is not None:
        if timeout <= 0:
            raise ConfigurationError(
                f"Environment variable MERGE_TIMEOUT must be a positive integer, got: {timeout}"
            )
        env_config["timeout_seconds"] = timeout

    if "MERGE_AUTH_TOKEN" in os.environ:
        env_config["auth_token"] = os.environ["MERGE_AUTH_TOKEN"]

    summary = _parse_env_bool("MERGE_SUMMARY")
    if summary is not None:
        env_config["summary"] = summary

    return env_config


def validate_config(config: MergeConfig) -> List[str]:
    """
    Validate configuration and return list of errors.

    Source and output checks are left to the merge itself, which reports
    them with their own messages.

    Args:
        config: MergeConfig to validate

    Returns:
        List of error messages (empty if valid)
    """
    errors: List[str] = []

    if config.report_format not in REPORT_FORMATS:
        errors.append(f"report_format must be one of {REPORT_FORMATS}: {config.report_format}")

    if config.indent is not None and (
        not isinstance(config.indent, int) or isinstance(config.indent, bool) or config.indent < 0
    ):
        errors.append(f"indent must be a non-negative integer: {config.indent}")

    if config.timeout_seconds <= 0:
        errors.append(f"timeout_seconds must be positive: {config.timeout_seconds}")
    elif config.timeout_seconds > 300:
        errors.append(f"timeout_seconds is too large (max 300): {config.timeout_seconds}")

    return errors
