import os
import shutil
import subprocess
from dataclasses import dataclass

from .config import LOG
from .conventional import classify_all
from .models import CcstatError, ConventionalCommit
from .parser import (
    SEPARATOR, DELIMITER,
    HASH_KEY, TREE_KEY, AUTHOR_KEY, COMMITTER_KEY, SUBJECT_KEY, BODY_KEY, STAT_KEY,
    parse_commits,
)

# One record per commit; git prints the --shortstat line right after "STAT:".
LOG_FORMAT = SEPARATOR + DELIMITER.join([
    f"{HASH_KEY}:%H",
    f"{TREE_KEY}:%T",
    f"{AUTHOR_KEY}:%an",
    f"{COMMITTER_KEY}:%cn",
    f"{SUBJECT_KEY}:%s",
    f"{BODY_KEY}:%b",
    f"{STAT_KEY}:",
])


class GitError(CcstatError):
    pass


@dataclass
class LogOptions:
    after: str = ""
    before: str = ""
    follow_path: str = ""


def can_exec(git_bin: str = "git") -> None:
    if shutil.which(git_bin) is None:
        raise GitError(f'"{git_bin}" not found')


def run_git(args: list[str], cwd: str | None = None, git_bin: str = "git") -> str:
    """Run git in *cwd* and return its stdout.

    A non-zero exit is not an error here: the output is treated as empty.
    Only a missing executable or an unusable *cwd* raise ``GitError``.
    """
    LOG.debug("running %s %s (cwd=%s)", git_bin, " ".join(args), cwd or ".")
    try:
        result = subprocess.run(
            [git_bin] + args,
            capture_output=True, text=True, cwd=cwd,
            encoding="utf-8", errors="replace",
        )
    except FileNotFoundError as e:
        if cwd and not os.path.isdir(cwd):
            raise GitError(f'"{cwd}" does not exist') from e
        raise GitError(f'"{git_bin}" not found') from e
    except NotADirectoryError as e:
        raise GitError(f'"{cwd}" is not a directory') from e
    except PermissionError as e:
        raise GitError(f"cannot run git in {cwd or os.getcwd()}: {e}") from e

    if result.returncode != 0:
        LOG.debug("git %s exited with %d: %s", args[0] if args else "", result.returncode,
                  result.stderr.strip())
        return ""
    return result.stdout.strip().rstrip("\x00").rstrip()


def is_inside_work_tree(cwd: str | None = None, git_bin: str = "git") -> None:
    out = run_git(["rev-parse", "--is-inside-work-tree"], cwd=cwd, git_bin=git_bin)
    if out != "true":
        path = os.path.abspath(cwd or os.getcwd())
        raise GitError(f'"{path}" is not git repository')


def build_log_args(options: LogOptions | None = None) -> list[str]:
    args = [
        "log",
        f"--pretty=tformat:{LOG_FORMAT}",
        "--no-decorate",
        "--no-merges",
        "--shortstat",
    ]
    if options is not None:
        if options.after:
            args.append(f"--after={options.after}")
        if options.before:
            args.append(f"--before={options.before}")
        if options.follow_path:
            args += ["--", options.follow_path]
    return args


def get_logs(options: LogOptions | None = None, cwd: str | None = None, git_bin: str = "git") -> str:
    return run_git(build_log_args(options), cwd=cwd, git_bin=git_bin)


def get_commits(options: LogOptions | None = None, cwd: str | None = None,
                git_bin: str = "git") -> list[ConventionalCommit]:
    """Return the classified commits of the repo at *cwd*, newest first."""
    can_exec(git_bin)
    is_inside_work_tree(cwd, git_bin)
    return classify_all(parse_commits(get_logs(options, cwd, git_bin)))
