"""Argument parsing functionality for AllowDeps."""

import argparse

from analysis.rules import Rule


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="allowdeps",
        description=(
            "AllowDeps - Report Maven and NPM dependencies missing from an allow-list"
        ),
        add_help=True,
    )

    parser.add_argument("-d", "--directory",
                        dest="FROM_SRC",
                        help="Scan descriptor files (pom.xml, package.json) in this directory",
                        action="append",
                        type=str,
                        default=[])
    parser.add_argument("-r", "--recursive",
                        dest="RECURSIVE",
                        help="Recursively scan directories.",
                        action="store_true")

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--rule",
                        dest="RULES",
                        help="Activate a rule by key (can be used multiple times)",
                        action="append",
                        type=str,
                        choices=[rule.key for rule in Rule],
                        default=[])
    parser.add_argument("--allowed-file",
                        dest="ALLOWED_FILE",
                        help="Allow-list file used by rules activated with --rule",
                        action="store",
                        type=str)
    parser.add_argument("--scopes",
                        dest="SCOPES",
                        help="Comma separated Maven scopes for the template rule",
                        action="store",
                        type=str)
    parser.add_argument("--list-rules",
                        dest="LIST_RULES",
                        help="List the available rules and exit.",
                        action="store_true")

    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to output file (JSON or CSV)",
                        action="store",
                        type=str)
    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (json or csv). If not specified, inferred from --output extension; defaults to json.",
                        action="store",
                        type=str.lower,
                        choices=['json', 'csv'])

    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("--error-on-violations",
                        dest="ERROR_ON_VIOLATIONS",
                        help="Exit with a non-zero status code if violations are found.",
                        action="store_true")
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not output to console.",
                        action="store_true")

    return parser.parse_args(argv)
