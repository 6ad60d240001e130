"""git-req entry point.

Usage: git-req REQUEST_ID | git-req --list | git-req --set-project-id ID |
git-req --clear-project-id.
"""

import argparse
import logging
import sys
from pathlib import Path

from gitreq.config import load_config
from gitreq.logging import GitReqLogging
from gitreq.origin import get_domain
from gitreq.remotes.base import Remote, RemoteError
from gitreq.resolver import PROJECT_ID_KEY, resolve_remote
from gitreq.services.git import GitConfig, GitRunnerError, fetch_and_checkout_request, get_origin_url

logger = logging.getLogger("gitreq")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="git-req",
        description="Check out merge/pull requests of the origin remote (GitHub, GitLab, Bitbucket)",
    )
    parser.add_argument("request_id", nargs="?", type=int, help="ID of the request to check out")
    action = parser.add_mutually_exclusive_group()
    action.add_argument("-l", "--list", action="store_true", help="List open requests")
    action.add_argument("--set-project-id", metavar="ID", help="Store the project ID for this repository")
    action.add_argument("--clear-project-id", action="store_true", help="Forget the stored project ID")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: $GITREQ_CONFIG or ~/.config/gitreq/config.yaml)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debugging output")
    args = parser.parse_args(argv)
    if args.request_id is None and not (args.list or args.set_project_id or args.clear_project_id):
        parser.error("a request ID or one of --list, --set-project-id, --clear-project-id is required")
    if args.request_id is not None and (args.list or args.set_project_id or args.clear_project_id):
        parser.error("a request ID cannot be combined with other actions")
    return args


def print_requests(remote: Remote) -> None:
    """Print one line per open request."""
    merge_requests = remote.list_requests()
    if not merge_requests:
        print("No open requests")
        return
    width = max(len(str(req.id)) for req in merge_requests)
    for req in merge_requests:
        if remote.has_useful_branch_names:
            print(f"{req.id:>{width}}  [{req.source_branch}]  {req.title}")
        else:
            print(f"{req.id:>{width}}  {req.title}")


def checkout_request(remote: Remote, request_id: int) -> None:
    """Fetch the request's head from origin and check it out."""
    local_branch = remote.get_request_branch(request_id)
    remote_ref = remote.get_remote_request_ref(request_id)
    logger.info("Checking out request %s as %s", request_id, local_branch)
    fetch_and_checkout_request(remote_ref, local_branch, log=logger)


def main(argv: list[str] | None = None) -> int:
    """Entry point: list, check out, or manage the cached project ID."""
    args = parse_args(argv)
    config = load_config(args.config)
    GitReqLogging(config.logging, verbose=args.verbose).setup()

    try:
        origin = get_origin_url(log=logger)
        git_config = GitConfig()
        if args.set_project_id or args.clear_project_id:
            domain = get_domain(origin)
            if args.set_project_id:
                git_config.set_scoped(domain, PROJECT_ID_KEY, args.set_project_id)
                print(f"Project ID for {domain} set to {args.set_project_id}")
            elif git_config.unset_scoped(domain, PROJECT_ID_KEY):
                print(f"Project ID for {domain} cleared")
            else:
                print(f"No project ID stored for {domain}")
            return 0

        remote = resolve_remote(origin, config=config, git_config=git_config)
        if args.list:
            print_requests(remote)
        else:
            checkout_request(remote, args.request_id)
    except KeyboardInterrupt:
        return 1
    except (RemoteError, GitRunnerError) as e:
        logger.error("%s", e)
        return 1
    return 0


def run() -> None:
    """Console script wrapper."""
    sys.exit(main())


if __name__ == "__main__":
    run()
