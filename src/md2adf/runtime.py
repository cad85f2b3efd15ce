"""Runtime wiring helper for the CLI and API."""

from dataclasses import dataclass
from pathlib import Path

from .config import Md2AdfConfig, load_config
from .converter import ConvertOptions, get_lexer
from .core.ports import Lexer


@dataclass
class Runtime:
    """Container for all wired components."""
    config: Md2AdfConfig
    lexer: Lexer
    options: ConvertOptions


def build_runtime(config_path: Path | None = None) -> Runtime:
    """Load configuration and build the lexer and default options."""
    config = load_config(config_path=config_path)

    lexer = get_lexer(
        tables=config.lexer.tables,
        strikethrough=config.lexer.strikethrough,
    )
    options = ConvertOptions(
        mentions=config.convert.mentions,
        detect=config.convert.detect,
    )

    return Runtime(config=config, lexer=lexer, options=options)
