from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional

from .builder import SwiftUIParseError, build_tree, extract_declarations, list_root_candidates
from .exporter import export_json, export_outline
from .settings import ParserSettings, load_settings

logger = logging.getLogger(__name__)


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="swiftui-tree",
        description="Show the view hierarchy of SwiftUI source without compiling it.",
    )
    p.add_argument("file", nargs="?", help="Swift source file to open")
    p.add_argument("--root", help="view to use as the tree root (default: best candidate)")
    p.add_argument("--dump", action="store_true", help="print the tree instead of opening the window")
    p.add_argument("--format", choices=("outline", "json"), default="outline", help="output format for --dump")
    p.add_argument("--config", help="YAML file with parser settings")
    p.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return p


def dump(text: str, root: Optional[str], fmt: str, settings: ParserSettings) -> int:
    if not text.strip():
        print("No input: the source is empty.", file=sys.stderr)
        return 1
    declarations = extract_declarations(text, settings)
    candidates = list_root_candidates(declarations, settings)
    if not candidates:
        print("No root candidates: no `struct ... : View` with a `body` was found.", file=sys.stderr)
        return 1
    name = root or candidates[0]
    tree = build_tree(declarations, name, settings)
    if tree is None:
        print(f"Selected root has no body: {name}", file=sys.stderr)
        return 1
    sys.stdout.write(export_json(tree) if fmt == "json" else export_outline(tree))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = load_settings(args.config) if args.config else ParserSettings()

    if args.dump:
        if args.file:
            with open(args.file, "r", encoding="utf-8", errors="ignore") as f:
                text = f.read()
        else:
            text = sys.stdin.read()
        try:
            return dump(text, args.root, args.format, settings)
        except SwiftUIParseError as e:
            logger.error("%s", e)
            return 2

    # Qt is only needed for the window
    from PySide6.QtWidgets import QApplication
    from .ui_mainwindow import MainWindow

    app = QApplication(sys.argv[:1])
    win = MainWindow(settings)
    if args.file:
        win.load_file(args.file)
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
