"""mvnreleases - list published releases of a Maven dependency.

    Returns:
        int: Exit code
"""
import json
import logging
import sys

from constants import ExitCodes, Constants
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from cli_config import ConfigError, apply_config_overrides, load_config, resolve_config_path
from registry.maven import LookupStatus, lookup_releases


def run(argv=None) -> int:
    """Resolve the requested dependency and print it as JSON.

    Args:
        argv (list, optional): Arguments to parse instead of sys.argv.

    Returns:
        int: Exit code
    """
    logger = logging.getLogger(__name__)

    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL)

    try:
        apply_config_overrides(load_config(resolve_config_path(args.CONFIG)))
    except ConfigError as e:
        logger.error("%s", e)
        return ExitCodes.FILE_ERROR.value

    repositories = args.REPOSITORIES or Constants.DEFAULT_REPOSITORY_URLS
    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="run",
                                count=len(repositories))
        )

    outcome = lookup_releases(args.PACKAGE, repositories)
    if outcome.status is LookupStatus.REGISTRY_FAILURE:
        logger.error("Registry failure while resolving %s", args.PACKAGE)
        return ExitCodes.CONNECTION_ERROR.value
    if outcome.result is None:
        logger.warning("No releases found for %s", args.PACKAGE)
        return ExitCodes.NOT_FOUND.value

    print(json.dumps(outcome.result.to_dict(), indent=2))
    return ExitCodes.SUCCESS.value


def main():
    """Main function of the program."""
    sys.exit(run())


if __name__ == "__main__":
    main()
