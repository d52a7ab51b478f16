from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from km_actions.actions import VirtualAction, load_action_script
from km_actions.app.configuration import load_runtime_config
from km_actions.app.environment import build_default_paths
from km_actions.app.settings import HarnessSettings
from km_actions.exceptions import KMError, StyledTextError, UnknownTokenError
from km_actions.kmet import (
    compile_search,
    encode_text_for_json,
    encode_text_for_xml,
    json_to_xml,
    search_replace_in_text,
    xml_to_json,
)
from km_actions.macro import ExportTarget, generate_macro
from km_actions.plist import decode_styled_text, encode_styled_text
from km_actions.tokens import default_lookup

logger = logging.getLogger("km_actions.cli")


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="km-actions", description="Keyboard Maestro action serializer CLI")
    parser.add_argument("--config", type=Path, help="Runtime INI file (defaults to km_actions.ini lookup)")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    render_parser = subparsers.add_parser("render", help="Render a JSON action script to plist XML")
    render_parser.add_argument("script", type=Path, help="JSON action script")
    render_parser.add_argument("--plist", action="store_true", help="Wrap the actions in a plist envelope")
    render_parser.add_argument("--output", type=Path, help="Write a .kmmacros file instead of printing")

    run_parser = subparsers.add_parser("run", help="Execute a JSON action script as a virtual macro")
    run_parser.add_argument("script", type=Path, help="JSON action script")
    run_parser.add_argument("--return-text", help="Append a Return action and print its value")

    validate_parser = subparsers.add_parser("validate", help="Round-trip each action through the engine")
    validate_parser.add_argument("script", type=Path, help="JSON action script")
    validate_parser.add_argument("--report", type=Path, help="CSV or JSON report path")

    tokens_parser = subparsers.add_parser("tokens", help="Look up or search engine tokens")
    tokens_parser.add_argument("query", nargs="?", default="", help="Token name, token text or search fragment")

    styled_parser = subparsers.add_parser("styled-text", help="Encode or decode StyledText payloads from stdin")
    styled_parser.add_argument("direction", choices=("decode", "encode"))

    kmet_parser = subparsers.add_parser("kmet", help="Edit Keyboard Maestro XML as text")
    kmet_sub = kmet_parser.add_subparsers(dest="operation", required=True)
    encode_json_parser = kmet_sub.add_parser("encode-json", help="Escape text for a JSON string literal")
    encode_json_parser.add_argument("--text", required=True)
    encode_xml_parser = kmet_sub.add_parser("encode-xml", help="Escape text for XML inside JXA")
    encode_xml_parser.add_argument("--text", required=True)
    xml2json_parser = kmet_sub.add_parser("xml2json", help="Convert an XML file to JSON")
    xml2json_parser.add_argument("file", type=Path)
    xml2json_parser.add_argument("--compact", action="store_true", help="Print JSON on one line")
    json2xml_parser = kmet_sub.add_parser("json2xml", help="Convert a JSON file to XML")
    json2xml_parser.add_argument("file", type=Path)
    json2xml_parser.add_argument("--minify", action="store_true", help="Print XML without indentation")
    replace_parser = kmet_sub.add_parser("replace", help="Search and replace within a file")
    replace_parser.add_argument("file", type=Path)
    replace_parser.add_argument("--find", required=True, help="Literal text, or a pattern with --regex")
    replace_parser.add_argument("--to", required=True, help="Replacement text")
    replace_parser.add_argument("--regex", action="store_true", help="Treat --find as a regular expression")
    replace_parser.add_argument("--ignore-case", action="store_true")

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s - %(message)s")

    try:
        if args.command == "render":
            return _handle_render(args)
        if args.command == "run":
            return _handle_run(args)
        if args.command == "validate":
            return _handle_validate(args)
        if args.command == "tokens":
            return _handle_tokens(args.query)
        if args.command == "styled-text":
            return _handle_styled_text(args.direction)
        if args.command == "kmet":
            return _handle_kmet(args)
    except (KMError, OSError, json.JSONDecodeError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        return 2
    parser.print_help()
    return 1


def _handle_render(args: argparse.Namespace) -> int:
    actions = load_action_script(args.script)
    if args.output:
        generate_macro(actions, export_target=ExportTarget(file_path=args.output), macro_name=args.script.stem)
        return 0
    print(generate_macro(actions, add_plist_wrapping=args.plist))
    return 0


def _handle_run(args: argparse.Namespace) -> int:
    from km_actions.engine import EngineLogWatcher, run_virtual_macro

    settings, _ = _load_settings(args.config)
    actions = load_action_script(args.script)
    capture = args.return_text is not None
    value = run_virtual_macro(
        actions,
        name=args.script.stem,
        return_text=args.return_text,
        capture=capture,
        watcher=EngineLogWatcher(settings.engine_log_path),
        osascript=settings.osascript_path,
    )
    if value is not None:
        print(value)
    return 0


def _handle_validate(args: argparse.Namespace) -> int:
    from km_actions.harness import RoundTripHarness, summarize, write_report

    settings, paths = _load_settings(args.config)
    harness = RoundTripHarness(settings, failures_dir=paths.failures_dir)
    results = harness.run(_named_cases(load_action_script(args.script)))
    if args.report:
        write_report(results, args.report)
    summary = summarize(results)
    print(
        f"{summary['passed']}/{summary['total']} passed"
        f" ({summary['mismatched']} mismatched, {summary['failed']} failed)"
    )
    return 0 if summary["total"] and not summary["failed"] else 1


def _handle_tokens(query: str) -> int:
    if query:
        try:
            entry = default_lookup.lookup(query)
        except UnknownTokenError:
            entry = None
        if entry is not None:
            print(json.dumps(entry, indent=2))
            return 0
    matches = default_lookup.search(query)
    if not matches:
        print(f"No tokens match {query!r}.", file=sys.stderr)
        return 1
    for human, token in matches.items():
        print(f"{human}\t{token}")
    return 0


def _handle_styled_text(direction: str) -> int:
    payload = sys.stdin.read()
    if direction == "encode":
        print(encode_styled_text(payload))
        return 0
    try:
        decoded = decode_styled_text(payload)
    except StyledTextError as exc:
        logger.error("%s", exc)
        return 2
    print(decoded.rtf)
    return 0


def _handle_kmet(args: argparse.Namespace) -> int:
    if args.operation == "encode-json":
        print(encode_text_for_json(args.text))
    elif args.operation == "encode-xml":
        print(encode_text_for_xml(args.text))
    elif args.operation == "xml2json":
        print(xml_to_json(args.file.read_text(encoding="utf-8"), pretty=not args.compact))
    elif args.operation == "json2xml":
        print(json_to_xml(args.file.read_text(encoding="utf-8"), minify=args.minify))
    elif args.operation == "replace":
        pattern = compile_search(args.find, regex=args.regex, ignore_case=args.ignore_case)
        text = args.file.read_text(encoding="utf-8")
        print(search_replace_in_text(text, pattern, args.to, ignore_case=args.ignore_case), end="")
    return 0


def _named_cases(actions: List[VirtualAction]) -> List[Tuple[str, VirtualAction]]:
    return [(f"{index:03d}-{getattr(action, 'kind', type(action).__name__)}", action) for index, action in enumerate(actions, 1)]


def _load_settings(config_path: Optional[Path]):
    runtime_cfg = load_runtime_config(config_path=config_path)
    logger.debug("Loaded runtime config overrides: %s", runtime_cfg)
    paths = build_default_paths(failures_dir=runtime_cfg.failures_dir)
    settings = HarnessSettings.load(paths.settings_file)
    runtime_cfg.apply_to_settings(settings)
    return settings, paths


if __name__ == "__main__":
    sys.exit(main())
