"""Argument parsing functionality for relwatch."""

import argparse

from constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="relwatch",
        description=(
            "relwatch - report the latest release of each minor version line"
        ),
        add_help=True,
    )

    parser.add_argument("REPOS_FILE",
                        help="File with one 'owner/name,minVersion' entry per line",
                        action="store", type=str)

    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to YAML configuration file",
                        action="store",
                        type=str)
    parser.add_argument("-w", "--workers",
                        dest="WORKERS",
                        help=f"Number of repositories queried concurrently (default: {Constants.MAX_WORKERS})",
                        action="store",
                        type=int)
    parser.add_argument("--api-base",
                        dest="API_BASE",
                        help=f"GitHub API base URL (default: {Constants.GITHUB_API_BASE})",
                        action="store",
                        type=str)
    parser.add_argument("--per-page",
                        dest="PER_PAGE",
                        help=f"Releases requested per API page (default: {Constants.REPO_API_PER_PAGE})",
                        action="store",
                        type=int)

    return parser.parse_args(argv)
