"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONFIG_ERROR = 2
    VIOLATIONS = 3


class PackageManagers(Enum):
    """Package managers supported by the program.

    Args:
        Enum (string): Package managers supported by the program.
    """

    NPM = "npm"
    MAVEN = "maven"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """


    # Descriptor file names (compared case-insensitively)
    PACKAGE_JSON_FILE = "package.json"
    POM_XML_FILE = "pom.xml"
    FLATTENED_POM_XML_FILE = ".flattened-pom.xml"
    MAVEN_DESCRIPTOR_FILES = (POM_XML_FILE, FLATTENED_POM_XML_FILE)
    SKIP_DIRECTORIES = ("node_modules", ".git", ".hg", ".svn")

    # Allow-list specification format
    REGEX_PREFIX = "regex:"
    COMMENT_LINE_PREFIX = "#"

    # Maven scopes
    DEFAULT_MAVEN_SCOPE = "compile"
    MAIN_SCOPES = "compile, provided, runtime"
    TEST_SCOPES = "test"

    # NPM dependency blocks
    NPM_DEPENDENCIES_BLOCK = "dependencies"
    NPM_DEV_DEPENDENCIES_BLOCK = "devDependencies"
    NPM_PEER_DEPENDENCIES_BLOCK = "peerDependencies"

    ISSUE_MESSAGE = "Remove this forbidden dependency: %s."

    # Environment
    ENV_LOG_LEVEL = "ALLOWDEPS_LOG_LEVEL"
    ENV_MAVEN_ALLOWED = "ALLOWDEPS_MAVEN_ALLOWED"
    ENV_NPM_ALLOWED = "ALLOWDEPS_NPM_ALLOWED"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    DEBUG_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
