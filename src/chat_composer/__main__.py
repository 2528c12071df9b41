"""CLI entrypoint for the chat composer."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from importlib import metadata
from pathlib import Path

from .app import ComposerApp
from .config import ensure_config_dir


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chat-composer",
        description="Chat composer with live transliteration suggestions",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a config.toml overriding the default location",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Ensure configuration exists, handle CLI flags, and run the TUI."""

    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.version:
        try:
            version = metadata.version("chat-composer")
        except metadata.PackageNotFoundError:
            version = "0.0.0"
        print(f"chat-composer {version}")
        return

    ensure_config_dir()
    app = ComposerApp(config_path=args.config)
    app.run()


if __name__ == "__main__":
    main()
