"""Descriptor discovery, batch scanning and report export."""

from __future__ import annotations

import csv
import json
import logging
import os
from typing import Iterable, List, Sequence

from analysis.check_config import CheckConfig
from analysis.engine import Diagnostic, ScanResult, Violation, ecosystem_for, scan_document
from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants

logger = logging.getLogger(__name__)

_DIAGNOSTIC_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
}


def discover_files(dir_name: str, recursive: bool = False) -> List[str]:
    """Find Maven and NPM descriptor files in a directory.

    Args:
        dir_name (str): Directory to scan.
        recursive (bool, optional): Whether to scan recursively. Defaults to False.

    Returns:
        Sorted list of descriptor paths.
    """
    found: List[str] = []
    if recursive:
        for root, dirs, files in os.walk(dir_name):
            dirs[:] = sorted(d for d in dirs if d not in Constants.SKIP_DIRECTORIES)
            found.extend(os.path.join(root, f) for f in files if ecosystem_for(f) is not None)
    else:
        for entry in os.listdir(dir_name):
            path = os.path.join(dir_name, entry)
            if os.path.isfile(path) and ecosystem_for(entry) is not None:
                found.append(path)
    return sorted(found)


def log_diagnostics(diagnostics: Iterable[Diagnostic]) -> None:
    """Forward engine diagnostics to the logging system."""
    for diagnostic in diagnostics:
        level = _DIAGNOSTIC_LEVELS.get(diagnostic.level, logging.WARNING)
        logger.log(level, "%s: %s", diagnostic.path or "<input>", diagnostic.message)


def scan_paths(paths: Sequence[str], checks: Sequence[CheckConfig]) -> ScanResult:
    """Run every check against every descriptor file, one document at a time."""
    result = ScanResult()
    for path in paths:
        if is_debug_enabled(logger):
            logger.debug("Scanning file", extra=extra_context(
                event="function_entry", component="scan", action="scan_document", target=path
            ))
        document_result = scan_document(path, checks)
        log_diagnostics(document_result.diagnostics)
        result.extend(document_result)
    return result


def report_violations(violations: Iterable[Violation]) -> None:
    """Log one line per violation, anchored at its source position."""
    for v in violations:
        location = v.path or "<input>"
        if v.line is not None:
            location = f"{location}:{v.line}"
        logger.warning("%s: [%s] %s", location, v.rule, v.message)


def export_json(violations: Sequence[Violation], path: str) -> None:
    """Exports the violations to a JSON file.

    Raises:
        OSError: if the file cannot be written.
    """
    with open(path, "w", encoding="utf-8") as file:
        json.dump([v.to_dict() for v in violations], file, ensure_ascii=False, indent=4)
    logger.info("JSON file has been successfully exported at: %s", path)


def export_csv(violations: Sequence[Violation], path: str) -> None:
    """Exports the violations to a CSV file.

    Raises:
        OSError: if the file cannot be written.
    """
    headers = ["Identifier", "Rule", "Path", "Line", "Column", "Message"]

    def _nv(value):
        return "" if value is None else value

    rows = [headers]
    for v in violations:
        rows.append([v.identifier, v.rule, _nv(v.path), _nv(v.line), _nv(v.column), v.message])
    with open(path, "w", newline="", encoding="utf-8") as file:
        csv.writer(file).writerows(rows)
    logger.info("CSV file has been successfully exported at: %s", path)


def output_format(output: str, requested: str = None) -> str:
    """Resolve the export format: explicit flag, else file extension, else json."""
    if requested:
        return requested
    if output.lower().endswith(".csv"):
        return "csv"
    return "json"
