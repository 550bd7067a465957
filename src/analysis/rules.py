"""Rule catalog and Maven scope resolution.

Every check is an instance of one of the rules below. The rule decides which
extractor runs and what it is restricted to: a scope set for Maven rules, a
dependency block for NPM rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from constants import Constants, PackageManagers
from .errors import ConfigurationError

ScopeSet = Tuple[str, ...]


@dataclass(frozen=True)
class RuleDefinition:
    """Static description of a rule."""
    key: str
    ecosystem: PackageManagers
    name: str
    description: str
    fixed_scopes: Optional[str] = None  # Maven: comma separated, None for template
    block: Optional[str] = None  # NPM: dependency block name
    template: bool = False
    severity: str = "MINOR"
    tags: Tuple[str, ...] = ()


class Rule(Enum):
    """Closed set of supported rules."""

    MAVEN_ALLOWED = RuleDefinition(
        key="maven-allowed-dependencies",
        ecosystem=PackageManagers.MAVEN,
        name="Allowed Dependencies (template)",
        description=(
            "Template rule; each instance checks the Maven scopes given in its "
            "scopes parameter. Instances for the same scope are not combined."
        ),
        template=True,
        tags=("maven", "dependency"),
    )
    MAVEN_ALLOWED_MAIN = RuleDefinition(
        key="maven-allowed-dependencies-main",
        ecosystem=PackageManagers.MAVEN,
        name="Allowed Dependencies (Main Scopes)",
        description=f"Checks Maven dependencies in the scopes: {Constants.MAIN_SCOPES}.",
        fixed_scopes=Constants.MAIN_SCOPES,
        tags=("maven", "dependency"),
    )
    MAVEN_ALLOWED_TEST = RuleDefinition(
        key="maven-allowed-dependencies-test",
        ecosystem=PackageManagers.MAVEN,
        name="Allowed Dependencies (Test Scope)",
        description="Checks Maven dependencies in the \"test\" scope only.",
        fixed_scopes=Constants.TEST_SCOPES,
        tags=("maven", "dependency"),
    )
    NPM_ALLOWED = RuleDefinition(
        key="allowed-dependencies-main",
        ecosystem=PackageManagers.NPM,
        name="Allowed Dependencies (NPM)",
        description="Checks packages in the main \"dependencies\" block.",
        block=Constants.NPM_DEPENDENCIES_BLOCK,
        tags=("npm", "dependency"),
    )
    NPM_ALLOWED_DEV = RuleDefinition(
        key="allowed-dependencies-dev",
        ecosystem=PackageManagers.NPM,
        name="Allowed Development Dependencies (NPM)",
        description="Checks packages in the \"devDependencies\" block.",
        block=Constants.NPM_DEV_DEPENDENCIES_BLOCK,
        tags=("npm", "dependency"),
    )
    NPM_ALLOWED_PEER = RuleDefinition(
        key="allowed-dependencies-peer",
        ecosystem=PackageManagers.NPM,
        name="Allowed Peer Dependencies (NPM)",
        description="Checks packages in the \"peerDependencies\" block.",
        block=Constants.NPM_PEER_DEPENDENCIES_BLOCK,
        tags=("npm", "dependency"),
    )

    @property
    def key(self) -> str:
        return self.value.key

    @property
    def ecosystem(self) -> PackageManagers:
        return self.value.ecosystem

    @classmethod
    def from_key(cls, key: str) -> "Rule":
        """Look up a rule by its textual key.

        Raises:
            ConfigurationError: if no rule has this key.
        """
        normalized = (key or "").strip()
        for rule in cls:
            if rule.value.key == normalized:
                return rule
        raise ConfigurationError(f"Unsupported rule: {key!r}")


def split_scopes(raw_scopes: Optional[str]) -> ScopeSet:
    """Split a comma separated scope list into a canonical ScopeSet."""
    if raw_scopes is None:
        return ()
    tokens = {token.strip() for token in raw_scopes.split(",")}
    tokens.discard("")
    return tuple(sorted(tokens))


def resolve_scopes(rule: Union[Rule, str], raw_scopes: Optional[str] = None) -> ScopeSet:
    """Resolve the scopes a Maven check restricts itself to.

    Args:
        rule: the rule (or its key) the check is an instance of.
        raw_scopes: user supplied, comma separated scopes. Only used by the
            template rule.

    Returns:
        ScopeSet: sorted, deduplicated scope names. Empty means every scope.

    Raises:
        ConfigurationError: for unknown rules and for non-Maven rules.
    """
    if not isinstance(rule, Rule):
        rule = Rule.from_key(rule)

    definition = rule.value
    if definition.ecosystem is not PackageManagers.MAVEN:
        raise ConfigurationError(f"Rule {definition.key!r} does not support Maven scopes")
    if definition.fixed_scopes is not None:
        return split_scopes(definition.fixed_scopes)
    if definition.template:
        return split_scopes(raw_scopes)
    raise ConfigurationError(f"Unsupported rule: {definition.key!r}")
