"""Argument parsing functionality for mvnreleases."""

import argparse


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="mvnreleases",
        description=(
            "mvnreleases - list published releases of a Maven dependency across repositories"
        ),
        add_help=True,
    )

    parser.add_argument("-p", "--package",
                        dest="PACKAGE",
                        help="Dependency coordinate as group:name",
                        action="store", type=str,
                        required=True)
    parser.add_argument("-r", "--repository",
                        dest="REPOSITORIES",
                        help="Repository base URL (file://, http:// or https://). "
                             "Repeat to query several repositories in order.",
                        action="append", type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to a YAML configuration file",
                        action="store", type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        default=None)

    return parser.parse_args(argv)
