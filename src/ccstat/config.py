import os
import sys
import shutil
import logging
import dotenv
from .ui import styled, RED, BOLD

LOG = logging.getLogger("ccstat")

GROUPINGS = ("scope", "type")


def load_config():
    dotenv.load_dotenv()

    git_bin = os.getenv("CCSTAT_GIT_BIN") or "git"
    group_by = (os.getenv("CCSTAT_GROUP_BY") or "scope").lower()

    return git_bin, group_by


def setup_logging(verbose: bool = False) -> None:
    """Enable debug logging when CCSTAT_DEBUG=1 or --verbose."""
    level = logging.DEBUG if (verbose or os.getenv("CCSTAT_DEBUG")) else logging.WARNING
    LOG.setLevel(level)
    if level == logging.DEBUG and not LOG.handlers:
        h = logging.StreamHandler(sys.stderr)
        h.setLevel(logging.DEBUG)
        LOG.addHandler(h)


def validate_config():
    git_bin, group_by = load_config()
    if not shutil.which(git_bin):
        print(styled("Error: ", RED, BOLD) + f'"{git_bin}" not found.', file=sys.stderr)
        print("  Install git or point CCSTAT_GIT_BIN at a git executable.", file=sys.stderr)
        sys.exit(1)
    if group_by not in GROUPINGS:
        print(styled("Error: ", RED, BOLD) + f"CCSTAT_GROUP_BY must be one of {', '.join(GROUPINGS)}.",
              file=sys.stderr)
        sys.exit(1)
