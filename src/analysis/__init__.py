"""Allow-list analysis package.

- allowlist.py: allow-list compilation into a predicate
- rules.py: rule catalog and Maven scope resolution
- check_config.py: immutable per-check configuration
- engine.py: violation engine over Maven and NPM descriptors
"""

from .errors import ConfigurationError
from .allowlist import AllowList, compile_allow_list
from .rules import Rule, RuleDefinition, ScopeSet, resolve_scopes
from .check_config import CheckConfig, build_check_config
from .engine import Diagnostic, ScanResult, Violation, evaluate_maven, evaluate_npm, scan_document

__all__ = [
    "ConfigurationError",
    "AllowList",
    "compile_allow_list",
    "Rule",
    "RuleDefinition",
    "ScopeSet",
    "resolve_scopes",
    "CheckConfig",
    "build_check_config",
    "Diagnostic",
    "ScanResult",
    "Violation",
    "evaluate_maven",
    "evaluate_npm",
    "scan_document",
]
