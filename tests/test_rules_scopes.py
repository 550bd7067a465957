"""Tests for the rule catalog, scope resolution and check configuration."""

import dataclasses

import pytest

from analysis.check_config import build_check_config
from analysis.errors import ConfigurationError
from analysis.rules import Rule, resolve_scopes, split_scopes
from constants import PackageManagers


def test_main_rule_scopes():
    assert resolve_scopes(Rule.MAVEN_ALLOWED_MAIN) == ("compile", "provided", "runtime")


def test_test_rule_scopes():
    assert resolve_scopes(Rule.MAVEN_ALLOWED_TEST) == ("test",)


def test_fixed_rules_ignore_user_scopes():
    assert resolve_scopes(Rule.MAVEN_ALLOWED_TEST, "compile") == ("test",)


def test_template_scopes_trimmed_and_sorted():
    assert resolve_scopes(Rule.MAVEN_ALLOWED, "provided , compile") == ("compile", "provided")


def test_template_scopes_deduplicated():
    assert resolve_scopes(Rule.MAVEN_ALLOWED, "test,compile, test ,compile") == ("compile", "test")


def test_template_absent_scopes_unrestricted():
    assert resolve_scopes(Rule.MAVEN_ALLOWED, None) == ()


def test_blank_tokens_dropped():
    assert split_scopes(" , runtime,, ") == ("runtime",)
    assert split_scopes("") == ()


def test_resolve_by_key():
    assert resolve_scopes("maven-allowed-dependencies-main") == ("compile", "provided", "runtime")
    assert resolve_scopes("maven-allowed-dependencies", "system") == ("system",)


def test_unknown_rule_key_raises():
    with pytest.raises(ConfigurationError):
        resolve_scopes("maven-allowed-dependencies-banana")


def test_npm_rule_has_no_scopes():
    with pytest.raises(ConfigurationError):
        resolve_scopes(Rule.NPM_ALLOWED_DEV)


def test_rule_from_key():
    assert Rule.from_key("allowed-dependencies-peer") is Rule.NPM_ALLOWED_PEER
    assert Rule.from_key(" allowed-dependencies-dev ") is Rule.NPM_ALLOWED_DEV
    with pytest.raises(ConfigurationError):
        Rule.from_key("")


def test_npm_rule_blocks():
    assert Rule.NPM_ALLOWED.value.block == "dependencies"
    assert Rule.NPM_ALLOWED_DEV.value.block == "devDependencies"
    assert Rule.NPM_ALLOWED_PEER.value.block == "peerDependencies"


def test_every_rule_has_ecosystem_specific_target():
    for rule in Rule:
        definition = rule.value
        if definition.ecosystem is PackageManagers.NPM:
            assert definition.block
        else:
            assert definition.template or definition.fixed_scopes


class TestBuildCheckConfig:
    """Checks are compiled once and immutable."""

    def test_maven_template_check(self):
        check = build_check_config("maven-allowed-dependencies", allowed="junit:junit",
                                   scopes="runtime, compile", name="runtime-check")
        assert check.rule is Rule.MAVEN_ALLOWED
        assert check.name == "runtime-check"
        assert check.scopes == ("compile", "runtime")
        assert check.allowed("JUnit:JUnit")
        assert check.applies_to_scope("runtime")
        assert not check.applies_to_scope("test")

    def test_name_defaults_to_rule_key(self):
        check = build_check_config(Rule.NPM_ALLOWED)
        assert check.name == "allowed-dependencies-main"
        assert check.block == "dependencies"
        assert check.scopes == ()

    def test_unrestricted_scopes_apply_everywhere(self):
        check = build_check_config(Rule.MAVEN_ALLOWED)
        assert check.applies_to_scope("test")
        assert check.applies_to_scope("anything")

    def test_invalid_regex_fails_construction(self):
        with pytest.raises(ConfigurationError):
            build_check_config(Rule.NPM_ALLOWED, allowed="regex:(")

    def test_unknown_rule_fails_construction(self):
        with pytest.raises(ConfigurationError):
            build_check_config("npm-everything")

    def test_check_is_frozen(self):
        check = build_check_config(Rule.MAVEN_ALLOWED_MAIN)
        with pytest.raises(dataclasses.FrozenInstanceError):
            check.scopes = ("test",)
