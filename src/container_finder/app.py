from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from tqdm.auto import tqdm

from container_finder.core.errors import ContainerFinderError
from container_finder.core.managers.config_manager import config_manager
from container_finder.core.utils.configure_logging import configure_logger
from container_finder.dom.soup import DEFAULT_FEATURES, parse_html
from container_finder.identifier.container_identifier import ContainerIdentifier

logger = logging.getLogger(__name__)

STDIN_SOURCE = "-"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="container-finder",
        description="Guess the repeating product card element of an e-commerce listing page.",
    )
    parser.add_argument("files", metavar="FILE", nargs="*", default=[STDIN_SOURCE],
                        help="HTML files to analyse ('-' reads stdin, the default).")
    parser.add_argument("--parser", dest="features", default=None,
                        help="BeautifulSoup tree builder (default: parser.features setting).")
    parser.add_argument("--trace", action="store_true",
                        help="Print all intermediate stages instead of only the result.")
    parser.add_argument("--log-level", default=None,
                        help="Root log level (default: debug.level setting).")
    parser.add_argument("--set", dest="overrides", metavar="KEY=VALUE", action="append", default=[],
                        help="Override a setting for this run, e.g. --set output.indent=4 (repeatable).")
    parser.add_argument("--show-config", action="store_true",
                        help="Print the effective configuration and exit.")
    return parser


def _read_source(source: str) -> str:
    if source == STDIN_SOURCE:
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8", errors="replace")


def analyse_source(source: str, features: str, with_trace: bool,
                   identifier: Optional[ContainerIdentifier] = None) -> Dict[str, Any]:
    """Reads, parses and identifies one input. Raises OSError or ContainerFinderError."""
    identifier = identifier or ContainerIdentifier()
    document = parse_html(_read_source(source), features)
    trace = identifier.identify_with_trace(document)

    if with_trace:
        return {"source": source, "trace": trace.model_dump(by_alias=True)}
    result = trace.result.model_dump(by_alias=True) if trace.result else None
    return {"source": source, "result": result}


def run(files: List[str], features: str, with_trace: bool) -> Tuple[List[Dict[str, Any]], int]:
    """Analyses every input; failures are reported and counted, not raised."""
    identifier = ContainerIdentifier()
    reports: List[Dict[str, Any]] = []
    failures = 0

    iterator = files if len(files) < 2 else tqdm(files, desc="Analysing pages", unit="page", leave=False)
    for source in iterator:
        try:
            reports.append(analyse_source(source, features, with_trace, identifier))
        except (OSError, ContainerFinderError) as e:
            failures += 1
            logger.error("Could not analyse %s: %s", source, e)
            print(f"❌ Error: {source}: {e}", file=sys.stderr)

    return reports, failures


def main(argv: Optional[List[str]] = None) -> int:
    """Entrypoint for the container-finder command."""
    pargs = build_parser().parse_args(argv)

    try:
        config_manager.apply_overrides(pargs.overrides)
    except ContainerFinderError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    configure_logger(
        pargs.log_level or config_manager.get_nested("debug.level", "WARNING"),
        module_specific_levels=config_manager.get_nested("debug.module_levels"),
        silenced_loggers=config_manager.get_nested("debug.silenced_loggers"),
    )
    if pargs.show_config:
        print(json.dumps(config_manager.get_all(), indent=2, ensure_ascii=False))
        return 0

    features = pargs.features or config_manager.get_nested("parser.features", DEFAULT_FEATURES)
    indent = config_manager.get_nested("output.indent", 2)

    reports, failures = run(pargs.files, features, pargs.trace)
    for report in reports:
        print(json.dumps(report, indent=indent, ensure_ascii=False))

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
