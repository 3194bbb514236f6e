"""
Probe CLI entry point - implements the extprobe command
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import LOG_LEVELS, ProbeConfig
from .errors import ProbeError
from .run import ProbeService


def _attach_file_logging(log_path: Path, level: str) -> None:
    """Attach a file handler to root logger if not already present."""
    logger = logging.getLogger()
    for h in logger.handlers:
        if isinstance(h, logging.FileHandler) and Path(h.baseFilename) == log_path.resolve():
            return

    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s',
                                  datefmt='%Y-%m-%d %H:%M:%S')
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)


def setup_logging(config: ProbeConfig) -> None:
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper()),
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    if config.log_file:
        _attach_file_logging(Path(config.log_file).expanduser(), config.log_level)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="extprobe",
        description="Download an extension catalog and check which sources are reachable"
    )
    parser.add_argument("--config", help="Path to configuration YAML")
    parser.add_argument("--index-url", help="Catalog URL to download")
    parser.add_argument("--output", help="Where to store the downloaded catalog")
    parser.add_argument("--lang", help="Language code of the extensions to probe")
    parser.add_argument("--url", help="Probe a single URL and skip the catalog")
    parser.add_argument("--log-level", choices=LOG_LEVELS, type=str.upper,
                        help="Logging level for diagnostics on stderr")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point"""
    args = build_parser().parse_args(argv)

    try:
        config = ProbeConfig.from_yaml(args.config) if args.config else ProbeConfig()
        config = config.with_overrides(
            index_url=args.index_url,
            output_path=args.output,
            lang=args.lang,
            log_level=args.log_level,
        )
        setup_logging(config)

        service = ProbeService(config)
        if args.url:
            asyncio.run(service.probe_single(args.url))
        else:
            asyncio.run(service.run())

    except ProbeError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
