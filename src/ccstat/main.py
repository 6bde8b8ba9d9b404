import argparse
import sys
import textwrap

from .aggregate import aggregate, sorted_rows
from .config import GROUPINGS, LOG, load_config, setup_logging, validate_config
from .git_ops import LogOptions, get_commits
from .models import CcstatError
from .ui import styled, print_rows, print_error, YELLOW


def cmd_stat(args) -> None:
    git_bin, _ = load_config()
    options = LogOptions(after=args.after, before=args.before, follow_path=args.follow)

    commits = get_commits(options, cwd=args.repo_path, git_bin=git_bin)
    LOG.debug("%d commit(s) in %s", len(commits), args.repo_path)
    if not commits:
        print(styled("No commits found.", YELLOW), file=sys.stderr)

    result = aggregate(commits, args.group_by)
    print_rows(sorted_rows(result))


def build_parser() -> argparse.ArgumentParser:
    _, default_group_by = load_config()

    parser = argparse.ArgumentParser(
        prog="ccstat",
        description="ccstat - git conventional commit analyzer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            examples:
              %(prog)s                              Sum line changes per scope (current repo)
              %(prog)s ../other-repo                Analyze another repository
              %(prog)s -A 2024-01-01 -B 2024-07-01  Limit to a date range
              %(prog)s -f src/parser.py             Only commits touching a path
        """),
    )
    parser.add_argument("repo_path", nargs="?", default=".", metavar="REPO_PATH",
                        help="Path of the git repository to analyze (default: .)")
    parser.add_argument("-A", "--after", type=str, default="",
                        help="Show commits more recent than a specific date")
    parser.add_argument("-B", "--before", type=str, default="",
                        help="Show commits older than a specific date")
    parser.add_argument("-f", "--follow", type=str, default="",
                        help="Only count commits touching this path")
    parser.add_argument("-g", "--group-by", choices=GROUPINGS, default=default_group_by,
                        help="Aggregate commits by this segment (default: %(default)s)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log git invocations and parse counts to stderr")
    return parser


def main(argv: list[str] | None = None) -> None:
    validate_config()

    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        cmd_stat(args)
    except CcstatError as e:
        print_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
