"""AllowDeps - Dependency allow-list checker for Maven and NPM projects.

    Returns:
        int: Exit code
"""
import logging
import os
import sys

from analysis.errors import ConfigurationError
from analysis.rules import Rule
from args import parse_args
from cli_config import build_checks
from cli_scan import discover_files, export_csv, export_json, output_format, report_violations, scan_paths
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes

logger = logging.getLogger(__name__)


def list_rules():
    """Log the rule catalog."""
    for rule in Rule:
        definition = rule.value
        logger.info("%-34s %-6s %s", definition.key, definition.ecosystem.value, definition.name)
        logger.info("%-34s        %s", "", definition.description)
        logger.info("%-34s        severity: %s, tags: %s", "", definition.severity,
                    ", ".join(definition.tags) or "-")


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    # Honor CLI --loglevel by passing it to centralized logger via env
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging(log_file=args.LOG_FILE, quiet=args.QUIET)

    if is_debug_enabled(logger):
        logger.debug("CLI start", extra=extra_context(event="function_entry", component="cli", action="main"))

    if args.LIST_RULES:
        list_rules()
        sys.exit(ExitCodes.SUCCESS.value)

    if not args.FROM_SRC:
        logger.error("No directory given, use -d/--directory.")
        sys.exit(ExitCodes.FILE_ERROR.value)

    try:
        checks = build_checks(args)
    except ConfigurationError as e:
        logger.error("Invalid configuration: %s", e)
        sys.exit(ExitCodes.CONFIG_ERROR.value)
    except OSError as e:
        logger.error("Couldn't read configuration, error: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    if not checks:
        logger.error("No checks configured. Use --rule or a config file with 'checks'.")
        sys.exit(ExitCodes.CONFIG_ERROR.value)

    paths = []
    for dir_name in args.FROM_SRC:
        if not os.path.isdir(dir_name):
            logger.error("Directory not found: %s, unable to continue.", dir_name)
            sys.exit(ExitCodes.FILE_ERROR.value)
        try:
            paths.extend(discover_files(dir_name, args.RECURSIVE))
        except OSError as e:
            logger.error("Couldn't list directory %s, error: %s", dir_name, e)
            sys.exit(ExitCodes.FILE_ERROR.value)
    logger.info("Found %d descriptor file(s).", len(paths))

    result = scan_paths(paths, checks)
    report_violations(result.violations)

    if args.OUTPUT:
        try:
            if output_format(args.OUTPUT, args.OUTPUT_FORMAT) == "csv":
                export_csv(result.violations, args.OUTPUT)
            else:
                export_json(result.violations, args.OUTPUT)
        except OSError as e:
            logger.error("Report couldn't be written to disk: %s", e)
            sys.exit(ExitCodes.FILE_ERROR.value)

    if result.violations:
        logger.warning("%d forbidden dependenc%s found.", len(result.violations),
                       "y" if len(result.violations) == 1 else "ies")
        if args.ERROR_ON_VIOLATIONS:
            logger.error("Violations present, exiting with non-zero status code.")
            sys.exit(ExitCodes.VIOLATIONS.value)
    else:
        logger.info("No forbidden dependencies found.")
    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
