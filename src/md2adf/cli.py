"""CLI for md2adf - Markdown to Atlassian Document Format."""

import argparse
import dataclasses
import json
import platform
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .adapters.frontmatter import YamlFrontmatter
from .body import coerce_body
from .converter import convert_markdown
from .convert.mentions import collect_mentions
from .detect import looks_like_markdown
from .logging_config import get_logger, setup_logging
from .runtime import Runtime, build_runtime

logger = get_logger("cli")


def _read_input(source: str) -> str:
    """Read text from a file path, or stdin for '-'."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _dump(payload: Any, rt: Runtime, compact: bool = False) -> None:
    indent = rt.config.output.indent
    if compact or indent == 0:
        print(json.dumps(payload, ensure_ascii=False, separators=(",", ":")))
    else:
        print(json.dumps(payload, ensure_ascii=False, indent=indent))


def _markdown_input(args: argparse.Namespace) -> str:
    text = _read_input(args.input)
    if not getattr(args, "keep_frontmatter", False):
        meta, text = YamlFrontmatter().decode(text)
        if meta:
            logger.debug("stripped frontmatter keys: %s", ", ".join(map(str, meta)))
    return text


def cmd_convert(args: argparse.Namespace, rt: Runtime) -> int:
    """Convert Markdown to ADF JSON."""
    text = _markdown_input(args)

    options = rt.options
    if args.detect:
        options = dataclasses.replace(options, detect=True)
    if args.no_mentions:
        options = dataclasses.replace(options, mentions=False)

    doc = convert_markdown(text, options=options, lexer=rt.lexer)
    _dump(doc.to_dict(), rt, compact=args.compact)
    return 0


def cmd_detect(args: argparse.Namespace, rt: Runtime) -> int:
    """Report whether the input looks like Markdown."""
    text = _read_input(args.input)
    is_markdown = looks_like_markdown(text)

    if args.quiet:
        # grep -q style: the exit status is the answer
        return 0 if is_markdown else 1
    if args.json:
        _dump({"markdown": is_markdown}, rt)
    else:
        print("markdown" if is_markdown else "plain")
    return 0


def cmd_body(args: argparse.Namespace, rt: Runtime) -> int:
    """Coerce a body field (text, Markdown or ADF JSON) into ADF."""
    text = _read_input(args.input)
    payload = coerce_body(text, options=rt.options, lexer=rt.lexer)
    _dump(payload, rt, compact=args.compact)
    return 0


def cmd_mentions(args: argparse.Namespace, rt: Runtime) -> int:
    """List mentions found outside code."""
    text = _markdown_input(args)
    options = dataclasses.replace(rt.options, mentions=True, detect=False)
    doc = convert_markdown(text, options=options, lexer=rt.lexer)
    mentions = collect_mentions(doc)

    if args.json:
        _dump([{"id": m.id, "text": m.text} for m in mentions], rt)
    else:
        for m in mentions:
            print(f"{m.id}\t{m.text}")
    return 0


def cmd_serve(args: argparse.Namespace, rt: Runtime) -> int:
    """Start local JSON API server."""
    try:
        import uvicorn

        from .api.app import create_app, generate_token
    except ImportError as e:
        print(
            "Error: API dependencies not installed. "
            "Install with: pip install md2adf[api]",
            file=sys.stderr
        )
        print(f"Details: {e}", file=sys.stderr)
        return 1

    token_arg = getattr(args, 'token', 'auto')
    token = None

    if token_arg == 'auto':
        token = generate_token()
        print(f"Generated bearer token: {token}")
        print(f"Use in requests: Authorization: Bearer {token}")
    elif token_arg == 'none':
        print("Warning: Running without authentication. Only use in trusted environments.")
        token = None
    else:
        token = token_arg

    app = create_app(rt, token=token, enable_cors=getattr(args, 'cors', False))

    host = getattr(args, 'host', '127.0.0.1')
    port = getattr(args, 'port', 8766)

    print(f"Starting server on http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level="info")

    return 0


def version_string() -> str:
    return (
        f"md2adf {__version__}\n"
        f"python {platform.python_version()}\n"
        f"platform {platform.platform()}"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="md2adf", description="Convert Markdown to Atlassian Document Format"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd/md2adf.toml)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true",
        help="Minimize output (detect answers through the exit status)"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging"
    )
    parser.add_argument(
        "--version", action="version", version=version_string()
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # convert command
    parser_convert = subparsers.add_parser("convert", help="Convert Markdown to ADF JSON")
    parser_convert.add_argument(
        "input", nargs="?", default="-", help="Markdown file (default: stdin)"
    )
    parser_convert.add_argument(
        "--detect", action="store_true",
        help="Wrap input that does not look like Markdown as a plain paragraph"
    )
    parser_convert.add_argument(
        "--no-mentions", action="store_true",
        help="Leave @[id:name] patterns as text"
    )
    parser_convert.add_argument(
        "--compact", action="store_true", help="Single-line JSON"
    )
    parser_convert.add_argument(
        "--keep-frontmatter", action="store_true",
        help="Convert a leading YAML frontmatter block instead of dropping it"
    )

    # detect command
    parser_detect = subparsers.add_parser("detect", help="Check whether input looks like Markdown")
    parser_detect.add_argument(
        "input", nargs="?", default="-", help="Text file (default: stdin)"
    )
    parser_detect.add_argument(
        "--json", action="store_true", help="Machine-readable output"
    )

    # body command
    parser_body = subparsers.add_parser(
        "body", help="Coerce an issue/comment body (text, Markdown or ADF JSON) to ADF"
    )
    parser_body.add_argument(
        "input", nargs="?", default="-", help="Body file (default: stdin)"
    )
    parser_body.add_argument(
        "--compact", action="store_true", help="Single-line JSON"
    )

    # mentions command
    parser_mentions = subparsers.add_parser("mentions", help="List mentions outside code")
    parser_mentions.add_argument(
        "input", nargs="?", default="-", help="Markdown file (default: stdin)"
    )
    parser_mentions.add_argument(
        "--json", action="store_true", help="Machine-readable output"
    )
    parser_mentions.add_argument(
        "--keep-frontmatter", action="store_true",
        help="Scan a leading YAML frontmatter block too"
    )

    # serve command
    parser_serve = subparsers.add_parser("serve", help="Start local JSON API server")
    parser_serve.add_argument(
        "--host", default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)"
    )
    parser_serve.add_argument(
        "--port", type=int, default=8766,
        help="Port to bind to (default: 8766)"
    )
    parser_serve.add_argument(
        "--token", default="auto",
        help="Bearer token (auto|<string>|none, default: auto)"
    )
    parser_serve.add_argument(
        "--cors", action="store_true",
        help="Enable CORS (default: false)"
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        rt = build_runtime(config_path=args.config)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(
        level="DEBUG" if args.verbose else rt.config.logging.level,
        log_file=rt.config.logging.file,
    )

    handlers = {
        "convert": cmd_convert,
        "detect": cmd_detect,
        "body": cmd_body,
        "mentions": cmd_mentions,
        "serve": cmd_serve,
    }

    handler = handlers.get(args.cmd)
    if handler:
        try:
            exit_code = handler(args, rt)
            sys.exit(exit_code)
        except Exception as e:
            logger.debug("command %s failed", args.cmd, exc_info=True)
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
