"""relwatch - report the newest release of every maintained minor line.

Reads ``owner/name,minVersion`` lines, lists each repository's GitHub
releases and prints the latest stable release per (major, minor) line at or
above the minimum version.

    Returns:
        int: Exit code
"""
import logging
import os
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

from args import parse_args
from cli_config import configure
from constants import Constants, ExitCodes
from common.logging_utils import add_file_handler, configure_logging, extra_context, is_debug_enabled
from repository.github import GitHubClient, RemoteFetchError
from versioning.models import RepoSpec, SemanticVersion
from versioning.parser import parse_repo_line, parse_tag
from versioning.selector import select

logger = logging.getLogger(__name__)


class InputReadError(OSError):
    """Raised when the repos file cannot be read."""


def load_repos_file(file_name: str) -> List[RepoSpec]:
    """Loads the repository descriptors from a file.

    Blank lines and '#' comments are ignored; malformed lines are reported
    and skipped.

    Args:
        file_name (str): File path containing one 'owner/name,minVersion' per line.

    Raises:
        InputReadError: If the file cannot be read.

    Returns:
        list: RepoSpec entries in file order.
    """
    try:
        with open(file_name, encoding='utf-8') as file:
            lines = file.readlines()
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(f"cannot read repos file {file_name}: {e}") from e

    repos = []
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith('#'):
            continue
        outcome = parse_repo_line(line)
        if not outcome.ok:
            logger.warning("%s:%d: skipping line: %s", file_name, lineno, outcome.error)
            continue
        repos.append(outcome.value)
    return repos


def parse_releases(repo: RepoSpec, tags: Iterable[str]) -> List[SemanticVersion]:
    """Parse raw tag names, warning about and skipping the invalid ones."""
    versions = []
    for tag in tags:
        outcome = parse_tag(tag)
        if not outcome.ok:
            logger.warning("%s: skipping release tag %r: %s", repo.path, tag, outcome.error)
            continue
        versions.append(outcome.value)
    return versions


def format_result(repo: RepoSpec, versions: Iterable[SemanticVersion]) -> str:
    """Render the output line for one repository."""
    return Constants.OUTPUT_LINE.format(
        path=repo.path,
        versions=" ".join(str(v) for v in versions),
    )


def process_repo(client: GitHubClient, repo: RepoSpec) -> Optional[str]:
    """Fetch, parse and select releases for one repository.

    Returns:
        The output line, or None when the release listing failed.
    """
    try:
        tags = client.list_release_tags(repo.owner, repo.name)
    except RemoteFetchError as e:
        logger.error("[Repository Error] %s", e)
        return None

    releases = parse_releases(repo, tags)
    latest = select(releases, repo.min_version)
    if is_debug_enabled(logger):
        logger.debug(
            "Processed repository",
            extra=extra_context(
                event="function_exit",
                component="cli",
                action="process_repo",
                target=repo.path,
                count=len(latest),
            )
        )
    return format_result(repo, latest)


def run(repos: List[RepoSpec], client: GitHubClient, out=None) -> int:
    """Process every repository and print results in input order.

    Returns:
        int: Exit code
    """
    out = out if out is not None else sys.stdout
    failures = 0
    workers = max(1, min(Constants.MAX_WORKERS, len(repos)))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        for line in pool.map(lambda r: process_repo(client, r), repos):
            if line is None:
                failures += 1
                continue
            print(line, file=out)
    if failures:
        logger.warning("%d of %d repositories could not be queried.", failures, len(repos))
        return ExitCodes.EXIT_WARNINGS.value
    return ExitCodes.SUCCESS.value


def _setup_logging(args) -> None:
    """Configure logging based on CLI arguments."""
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging()
    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        try:
            add_file_handler(log_file)
        except OSError as e:
            logger.warning("Cannot open log file %s: %s", log_file, e)


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)
    configure(args)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    try:
        repos = load_repos_file(args.REPOS_FILE)
    except InputReadError as e:
        logger.error("[File Read Error] %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    if not repos:
        logger.warning("No repositories provided in file.")
        sys.exit(ExitCodes.SUCCESS.value)

    logger.info("Loaded %d repositories from %s", len(repos), args.REPOS_FILE)

    client = GitHubClient()
    sys.exit(run(repos, client))


if __name__ == "__main__":
    main()
