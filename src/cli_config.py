"""Check configuration loading from config files, environment and CLI flags.

Config file shape (YAML or JSON):

    maven:
      allowed: |
        org.slf4j:slf4j-api
    npm:
      allowed: [react, react-dom]
    checks:
      - rule: maven-allowed-dependencies-main
      - rule: maven-allowed-dependencies
        name: runtime-only
        scopes: runtime
        allowed: "regex:org\\.apache\\..*"

A check without its own ``allowed`` list uses the global list of its ecosystem.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional

import yaml

from analysis.check_config import CheckConfig, build_check_config
from analysis.errors import ConfigurationError
from analysis.rules import Rule
from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants, PackageManagers

logger = logging.getLogger(__name__)

_ENV_ALLOWED = {
    PackageManagers.MAVEN: Constants.ENV_MAVEN_ALLOWED,
    PackageManagers.NPM: Constants.ENV_NPM_ALLOWED,
}


def load_config_file(config_path: str) -> Dict[str, Any]:
    """Load a YAML or JSON configuration file.

    Raises:
        OSError: if the file cannot be read.
        ConfigurationError: if the content is not a mapping or cannot be parsed.
    """
    with open(config_path, "r", encoding="utf-8") as fh:
        body = fh.read()
    try:
        if config_path.lower().endswith(".json"):
            data = json.loads(body)
        else:
            data = yaml.safe_load(body)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Unable to parse config file '{config_path}': {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file '{config_path}' must contain a mapping")
    return data


def _as_text(value: Any, where: str) -> Optional[str]:
    """Accept allow-lists and scopes written either as text or as a list."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return "\n".join(str(item) for item in value)
    raise ConfigurationError(f"{where} must be a string or a list, got {type(value).__name__}")


def _scopes_text(value: Any, where: str) -> Optional[str]:
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value)
    return _as_text(value, where)


def global_allowed(config: Dict[str, Any], ecosystem: PackageManagers) -> Optional[str]:
    """Global allow-list for an ecosystem: config file first, then environment."""
    section = config.get(ecosystem.value) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"'{ecosystem.value}' section must be a mapping")
    allowed = _as_text(section.get("allowed"), f"{ecosystem.value}.allowed")
    if allowed is None:
        allowed = os.environ.get(_ENV_ALLOWED[ecosystem])
    return allowed


def checks_from_config(config: Dict[str, Any]) -> List[CheckConfig]:
    """Build every check declared in a loaded config mapping.

    Raises:
        ConfigurationError: on the first invalid check entry.
    """
    entries = config.get("checks") or []
    if not isinstance(entries, list):
        raise ConfigurationError("'checks' must be a list")

    checks = []
    for index, entry in enumerate(entries):
        if isinstance(entry, str):
            entry = {"rule": entry}
        if not isinstance(entry, dict) or "rule" not in entry:
            raise ConfigurationError(f"checks[{index}] must be a mapping with a 'rule' key")
        rule = Rule.from_key(str(entry["rule"]))
        allowed = _as_text(entry.get("allowed"), f"checks[{index}].allowed")
        if allowed is None:
            allowed = global_allowed(config, rule.ecosystem)
        checks.append(build_check_config(
            rule,
            allowed=allowed,
            scopes=_scopes_text(entry.get("scopes"), f"checks[{index}].scopes"),
            name=entry.get("name"),
        ))
    return checks


def checks_from_args(args, config: Optional[Dict[str, Any]] = None) -> List[CheckConfig]:
    """Build checks for rules named on the command line (--rule)."""
    rules = getattr(args, "RULES", None) or []
    if not rules:
        return []

    allowed_override = None
    allowed_file = getattr(args, "ALLOWED_FILE", None)
    if allowed_file:
        with open(allowed_file, "r", encoding="utf-8") as fh:
            allowed_override = fh.read()

    checks = []
    for key in rules:
        rule = Rule.from_key(key)
        allowed = allowed_override
        if allowed is None:
            allowed = global_allowed(config or {}, rule.ecosystem)
        checks.append(build_check_config(rule, allowed=allowed, scopes=getattr(args, "SCOPES", None)))
    return checks


def build_checks(args) -> List[CheckConfig]:
    """Collect all active checks from the config file and CLI flags.

    Raises:
        OSError: if the config or allow-list file cannot be read.
        ConfigurationError: if any check is invalid.
    """
    config: Dict[str, Any] = {}
    config_path = getattr(args, "CONFIG", None)
    if config_path:
        config = load_config_file(config_path)

    checks = checks_from_config(config) + checks_from_args(args, config)
    for check in checks:
        logger.info("Check '%s' (%s) allows %d entr%s%s",
                    check.name, check.rule.key, len(check.allowed),
                    "y" if len(check.allowed) == 1 else "ies",
                    f", scopes: {', '.join(check.scopes)}" if check.scopes else "")
        if is_debug_enabled(logger):
            logger.debug(
                "Allowed dependencies: %s", list(check.allowed.entries),
                extra=extra_context(event="decision", component="config", action="build_check",
                                    rule=check.rule.key),
            )
    return checks
