"""Immutable per-check configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from constants import PackageManagers
from .allowlist import AllowList, compile_allow_list
from .rules import Rule, ScopeSet, resolve_scopes


@dataclass(frozen=True)
class CheckConfig:
    """Configuration for one active check.

    Built once by build_check_config() and never modified afterwards, so a
    single instance can be used for any number of documents.
    """
    rule: Rule
    name: str
    allowed: AllowList
    scopes: ScopeSet = ()

    @property
    def ecosystem(self) -> PackageManagers:
        return self.rule.ecosystem

    @property
    def block(self) -> Optional[str]:
        """NPM dependency block this check reads, None for Maven checks."""
        return self.rule.value.block

    def applies_to_scope(self, scope: str) -> bool:
        return not self.scopes or scope in self.scopes


def build_check_config(
    rule: Union[Rule, str],
    allowed: Optional[str] = None,
    scopes: Optional[str] = None,
    name: Optional[str] = None,
) -> CheckConfig:
    """Build a check configuration, compiling everything up front.

    Args:
        rule: rule or rule key.
        allowed: newline separated allow-list text.
        scopes: comma separated scopes, only read by the Maven template rule.
        name: instance name used in reports; defaults to the rule key.

    Raises:
        ConfigurationError: for unknown rules or invalid allow-list regexes.
    """
    if not isinstance(rule, Rule):
        rule = Rule.from_key(rule)

    allow_list = compile_allow_list(allowed)
    if rule.ecosystem is PackageManagers.MAVEN:
        scope_set = resolve_scopes(rule, scopes)
    else:
        scope_set = ()

    return CheckConfig(
        rule=rule,
        name=name or rule.key,
        allowed=allow_list,
        scopes=scope_set,
    )
