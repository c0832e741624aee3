from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .compiler import Compiler
from .config import CompilerConfig, DEFAULT_CONFIG, find_config, load_config
from .errors import TplUserError
from .io import FileReader
from .report import FragmentInfo, NodeInfo, TokensReport, TreeReport
from .template.nodes import format_tree
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tplc",
        description="Template compiler: parse templates into node trees",
        add_help=True,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Common arguments for all subcommands
    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--config",
            metavar="PATH",
            help="configuration file (default: ./tplc.yaml if present)",
        )
        sp.add_argument(
            "--strict",
            action="store_true",
            help="closing tags must name the tag they close (endif, endfor, ...)",
        )
        sp.add_argument(
            "-I", "--path",
            action="append",
            metavar="DIR",
            help="additional include/extends search directory (repeatable)",
        )
        sp.add_argument("-v", "--verbose", action="store_true", help="debug logging to stderr")

    sp_tree = sub.add_parser("tree", help="compile a template and print its node tree")
    add_common(sp_tree)
    sp_tree.add_argument("file", help="template file")
    sp_tree.add_argument("--json", action="store_true", help="print the tree as JSON")

    sp_tokens = sub.add_parser("tokens", help="print template fragments (JSON)")
    add_common(sp_tokens)
    sp_tokens.add_argument("file", help="template file")

    sp_paths = sub.add_parser("paths", help="print include/extends search paths")
    add_common(sp_paths)

    return p


def _load_config(ns: argparse.Namespace) -> CompilerConfig:
    if ns.config:
        cfg = load_config(ns.config)
    else:
        found = find_config(Path.cwd())
        cfg = load_config(found) if found else DEFAULT_CONFIG

    extra_paths = list(ns.path or [])
    if ns.strict or extra_paths:
        cfg = CompilerConfig(
            delimiters=cfg.delimiters,
            strict_close_tags=cfg.strict_close_tags or ns.strict,
            paths=tuple(cfg.paths) + tuple(extra_paths),
        )
    return cfg


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="[%(levelname)s] %(message)s", stream=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(bool(getattr(ns, "verbose", False)))

    try:
        compiler = Compiler(_load_config(ns))

        if ns.cmd == "paths":
            for entry in compiler.search_paths.paths():
                sys.stdout.write(entry + "\n")
            return 0

        reader = FileReader(ns.file)

        if ns.cmd == "tokens":
            fragments = compiler.tokenize(reader.read_all())
            report = TokensReport(
                source_id=reader.id(),
                fragments=[FragmentInfo.from_fragment(f) for f in fragments],
            )
            sys.stdout.write(report.model_dump_json(indent=2) + "\n")
            return 0

        if ns.cmd == "tree":
            root = compiler.compile(reader)
            if ns.json:
                tree = TreeReport(
                    source_id=root.source_id,
                    node_count=sum(1 for _ in root.walk()),
                    root=NodeInfo.from_node(root),
                )
                sys.stdout.write(tree.model_dump_json(indent=2) + "\n")
            else:
                sys.stdout.write(format_tree(root) + "\n")
            return 0

    except TplUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except (OSError, UnicodeDecodeError) as e:
        sys.stderr.write(f"Cannot read template: {e}\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
