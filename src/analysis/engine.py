"""Violation engine: runs check configurations against descriptor documents.

The engine does not log. Anything worth reporting besides violations comes
back as Diagnostic records in the ScanResult, for the caller to forward.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from constants import Constants, PackageManagers
from registry.maven.extract import (
    PomDocument,
    PomParseError,
    extract_dependencies,
    is_maven_descriptor,
    parse_pom,
)
from registry.npm.blocks import extract_block, inline_block_line, is_npm_descriptor
from .check_config import CheckConfig


@dataclass(frozen=True)
class Violation:
    """A dependency missing from a check's allow-list."""
    identifier: str
    rule: str
    path: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None

    @property
    def message(self) -> str:
        return Constants.ISSUE_MESSAGE % self.identifier

    def to_dict(self) -> dict:
        return {
            "identifier": self.identifier,
            "rule": self.rule,
            "path": self.path,
            "line": self.line,
            "column": self.column,
            "message": self.message,
        }


@dataclass(frozen=True)
class Diagnostic:
    """Non-fatal event raised while scanning a document."""
    level: str  # "debug" | "info" | "warning"
    message: str
    path: Optional[str] = None


@dataclass
class ScanResult:
    """Violations and diagnostics collected for one or more documents."""
    violations: List[Violation] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def extend(self, other: "ScanResult") -> None:
        self.violations.extend(other.violations)
        self.diagnostics.extend(other.diagnostics)


def ecosystem_for(path: str) -> Optional[PackageManagers]:
    """Pick the extractor for a file by its name alone."""
    if is_maven_descriptor(path):
        return PackageManagers.MAVEN
    if is_npm_descriptor(path):
        return PackageManagers.NPM
    return None


def evaluate_maven(document: PomDocument, config: CheckConfig,
                   path: Optional[str] = None) -> List[Violation]:
    """Return a Violation for every in-scope dependency not on the allow-list."""
    violations = []
    for dependency in extract_dependencies(document.root):
        if not config.applies_to_scope(dependency.scope):
            continue
        if config.allowed(dependency.identifier):
            continue
        line, column = document.position_of(dependency.node)
        violations.append(Violation(
            identifier=dependency.identifier,
            rule=config.name,
            path=path,
            line=line,
            column=column,
        ))
    return violations


def evaluate_npm(text: str, config: CheckConfig,
                 path: Optional[str] = None) -> List[Violation]:
    """Return a Violation for every package in the check's block not on the allow-list."""
    return [
        Violation(identifier=name, rule=config.name, path=path, line=line)
        for name, line in extract_block(text, config.block).items()
        if not config.allowed(name)
    ]


def evaluate_text(text: str, ecosystem: PackageManagers, configs: Iterable[CheckConfig],
                  path: Optional[str] = None) -> ScanResult:
    """Evaluate every applicable check against already loaded document text."""
    result = ScanResult()
    applicable = [c for c in configs if c.ecosystem is ecosystem]
    if not applicable:
        return result

    if ecosystem is PackageManagers.MAVEN:
        try:
            document = parse_pom(text)
        except PomParseError as e:
            result.diagnostics.append(Diagnostic("warning", f"Unable to analyse file: {e}", path))
            return result
        for config in applicable:
            result.violations.extend(evaluate_maven(document, config, path))
    else:
        for block in sorted({c.block for c in applicable}):
            line = inline_block_line(text, block)
            if line is not None:
                result.diagnostics.append(Diagnostic(
                    "debug",
                    f"Block '{block}' on line {line} is written on a single line; its entries are not checked",
                    path,
                ))
        for config in applicable:
            result.violations.extend(evaluate_npm(text, config, path))
    return result


def scan_document(path: str, configs: Iterable[CheckConfig]) -> ScanResult:
    """Read a descriptor file and evaluate every applicable check against it.

    Read failures are recovered: the document yields no violations and a
    warning diagnostic instead.
    """
    ecosystem = ecosystem_for(path)
    if ecosystem is None:
        return ScanResult(diagnostics=[
            Diagnostic("debug", f"Not a supported descriptor: {os.path.basename(path)}", path)
        ])

    try:
        with open(path, "r", encoding="utf-8") as file:
            text = file.read()
    except (OSError, UnicodeDecodeError) as e:
        return ScanResult(diagnostics=[Diagnostic("warning", f"Error reading file: {e}", path)])

    return evaluate_text(text, ecosystem, configs, path)
