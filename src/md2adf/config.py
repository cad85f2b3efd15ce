"""Configuration loader for md2adf.toml."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

CONFIG_FILENAME = "md2adf.toml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """Raised when a config file holds an invalid value."""


@dataclass
class LexerConfig:
    """Markdown lexer extensions."""
    tables: bool = True
    strikethrough: bool = True


@dataclass
class ConvertConfig:
    """Conversion defaults."""
    mentions: bool = True
    detect: bool = False


@dataclass
class OutputConfig:
    """JSON output settings."""
    indent: int = 2


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "WARNING"
    file: Path | None = None


@dataclass
class Md2AdfConfig:
    """Complete md2adf configuration."""
    lexer: LexerConfig
    convert: ConvertConfig
    output: OutputConfig
    logging: LoggingConfig


def load_config(config_path: Path | None = None) -> Md2AdfConfig:
    """
    Load configuration from md2adf.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/md2adf.toml

    Args:
        config_path: Explicit path to config file

    Returns:
        Md2AdfConfig with resolved settings

    Raises:
        ConfigError: if a value has the wrong type or is out of range
    """
    toml_data: dict[str, Any] = {}

    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / CONFIG_FILENAME)

    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            break

    lexer_data = toml_data.get("lexer", {})
    lexer_config = LexerConfig(
        tables=_bool(lexer_data, "tables", True),
        strikethrough=_bool(lexer_data, "strikethrough", True),
    )

    convert_data = toml_data.get("convert", {})
    convert_config = ConvertConfig(
        mentions=_bool(convert_data, "mentions", True),
        detect=_bool(convert_data, "detect", False),
    )

    output_data = toml_data.get("output", {})
    indent = output_data.get("indent", 2)
    if not isinstance(indent, int) or isinstance(indent, bool) or indent < 0:
        raise ConfigError(f"output.indent must be a non-negative integer, got {indent!r}")
    output_config = OutputConfig(indent=indent)

    logging_data = toml_data.get("logging", {})
    level = str(logging_data.get("level", "WARNING")).upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {level!r}")
    log_file = logging_data.get("file") or None
    logging_config = LoggingConfig(
        level=level,
        file=Path(log_file) if log_file else None,
    )

    return Md2AdfConfig(
        lexer=lexer_config,
        convert=convert_config,
        output=output_config,
        logging=logging_config,
    )


def _bool(section: dict[str, Any], key: str, default: bool) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be true or false, got {value!r}")
    return value
