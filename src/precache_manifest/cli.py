from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from precache_manifest.config import load_config
from precache_manifest.io.logging import make_logger
from precache_manifest.manifest import build_manifest


def _generate(args: argparse.Namespace) -> int:
    options = load_config(args.config_path)
    if args.root_directory is not None:
        options["root_directory"] = args.root_directory
    logger = None
    if args.log_jsonl:
        root = options.get("root_directory")
        logger = make_logger(
            log_path=Path(args.log_jsonl),
            config_path=args.config_path,
            root_directory=str(root) if root is not None else None,
        )

    entries = build_manifest(options, logger=logger)
    json.dump([e.to_dict() for e in entries], sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="precache-manifest")
    sp = p.add_subparsers(dest="cmd", required=True)

    gen = sp.add_parser("generate", help="print the manifest for a config as JSON")
    gen.add_argument("--config", dest="config_path", required=True)
    gen.add_argument("--root-directory", dest="root_directory", default=None)
    gen.add_argument("--log-jsonl", dest="log_jsonl", default=None)
    gen.set_defaults(func=_generate)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        return int(args.func(args))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
