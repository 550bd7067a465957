"""Tests for configuration loading and check construction."""

import json
from types import SimpleNamespace

import pytest

from analysis.errors import ConfigurationError
from analysis.rules import Rule
from cli_config import (
    build_checks,
    checks_from_args,
    checks_from_config,
    global_allowed,
    load_config_file,
)
from constants import PackageManagers

YAML_CONFIG = """
maven:
  allowed: |
    # logging
    org.slf4j:slf4j-api
npm:
  allowed:
    - react
    - react-dom
checks:
  - rule: maven-allowed-dependencies-main
  - rule: maven-allowed-dependencies
    name: runtime-only
    scopes: [runtime, provided]
    allowed: "regex:org\\\\.apache\\\\..*"
  - allowed-dependencies-dev
"""


def _args(**overrides):
    values = {"CONFIG": None, "RULES": [], "ALLOWED_FILE": None, "SCOPES": None}
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    monkeypatch.delenv("ALLOWDEPS_MAVEN_ALLOWED", raising=False)
    monkeypatch.delenv("ALLOWDEPS_NPM_ALLOWED", raising=False)


class TestLoadConfigFile:
    """YAML and JSON config files."""

    def test_yaml(self, tmp_path):
        path = tmp_path / "allowdeps.yml"
        path.write_text(YAML_CONFIG, encoding="utf-8")
        config = load_config_file(str(path))
        assert len(config["checks"]) == 3

    def test_json(self, tmp_path):
        path = tmp_path / "allowdeps.json"
        path.write_text(json.dumps({"checks": [{"rule": "allowed-dependencies-main"}]}), encoding="utf-8")
        assert load_config_file(str(path))["checks"][0]["rule"] == "allowed-dependencies-main"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("", encoding="utf-8")
        assert load_config_file(str(path)) == {}

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config_file(str(path))

    def test_unparseable(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config_file(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_config_file(str(tmp_path / "nope.yml"))


class TestChecksFromConfig:
    """Check entries and global allow-list fallback."""

    def test_checks_built_in_order(self, tmp_path):
        path = tmp_path / "allowdeps.yml"
        path.write_text(YAML_CONFIG, encoding="utf-8")
        checks = checks_from_config(load_config_file(str(path)))

        main, runtime, dev = checks
        assert main.rule is Rule.MAVEN_ALLOWED_MAIN
        assert main.allowed("org.slf4j:slf4j-api")
        assert main.scopes == ("compile", "provided", "runtime")

        assert runtime.name == "runtime-only"
        assert runtime.scopes == ("provided", "runtime")
        assert runtime.allowed("org.apache.commons:commons-lang3")
        assert not runtime.allowed("org.slf4j:slf4j-api")

        assert dev.rule is Rule.NPM_ALLOWED_DEV
        assert dev.allowed("react-dom")

    def test_unknown_rule(self):
        with pytest.raises(ConfigurationError):
            checks_from_config({"checks": [{"rule": "gradle-allowed"}]})

    def test_invalid_regex(self):
        with pytest.raises(ConfigurationError):
            checks_from_config({"checks": [{"rule": "allowed-dependencies-main", "allowed": "regex:["}]})

    def test_bad_shapes(self):
        with pytest.raises(ConfigurationError):
            checks_from_config({"checks": {"rule": "allowed-dependencies-main"}})
        with pytest.raises(ConfigurationError):
            checks_from_config({"checks": [{"name": "no-rule"}]})
        with pytest.raises(ConfigurationError):
            checks_from_config({"checks": [{"rule": "allowed-dependencies-main", "allowed": 5}]})
        with pytest.raises(ConfigurationError):
            checks_from_config({"npm": "react", "checks": ["allowed-dependencies-main"]})

    def test_no_checks(self):
        assert checks_from_config({}) == []

    def test_environment_fallback(self, monkeypatch):
        monkeypatch.setenv("ALLOWDEPS_NPM_ALLOWED", "react\nvue")
        assert global_allowed({}, PackageManagers.NPM) == "react\nvue"
        checks = checks_from_config({"checks": ["allowed-dependencies-main"]})
        assert checks[0].allowed("vue")

    def test_config_file_wins_over_environment(self, monkeypatch):
        monkeypatch.setenv("ALLOWDEPS_MAVEN_ALLOWED", "junit:junit")
        assert global_allowed({"maven": {"allowed": "a:b"}}, PackageManagers.MAVEN) == "a:b"


class TestChecksFromArgs:
    """Rules activated with --rule."""

    def test_no_rules(self):
        assert checks_from_args(_args()) == []

    def test_allowed_file_and_scopes(self, tmp_path):
        allowed = tmp_path / "allowed.txt"
        allowed.write_text("junit:junit\nreact\n", encoding="utf-8")
        args = _args(RULES=["maven-allowed-dependencies", "allowed-dependencies-main"],
                     ALLOWED_FILE=str(allowed), SCOPES="test")
        maven, npm = checks_from_args(args)
        assert maven.scopes == ("test",)
        assert maven.allowed("junit:junit")
        assert npm.scopes == ()
        assert npm.allowed("react")

    def test_without_allowed_file_uses_global_list(self):
        args = _args(RULES=["allowed-dependencies-peer"])
        check = checks_from_args(args, {"npm": {"allowed": "react"}})[0]
        assert check.allowed("react")

    def test_build_checks_combines_sources(self, tmp_path):
        path = tmp_path / "allowdeps.yml"
        path.write_text(YAML_CONFIG, encoding="utf-8")
        checks = build_checks(_args(CONFIG=str(path), RULES=["maven-allowed-dependencies-test"]))
        assert [c.name for c in checks] == [
            "maven-allowed-dependencies-main",
            "runtime-only",
            "allowed-dependencies-dev",
            "maven-allowed-dependencies-test",
        ]
        assert checks[-1].allowed("org.slf4j:slf4j-api")
