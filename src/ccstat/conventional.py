import re

from .models import Commit, ConventionalCommit

# <type>[(<scope>)]: <subject>
HEADER_RE = re.compile(r"^(?P<type>\w+)(?:\((?P<scope>[^)]*)\))?: (?P<subject>.*)$")


def classify(commit: Commit) -> ConventionalCommit:
    """Wrap *commit* with its Conventional Commits header, if it has one."""
    m = HEADER_RE.match(commit.subject)
    if not m:
        return ConventionalCommit(raw=commit)
    return ConventionalCommit(
        raw=commit,
        type=m.group("type"),
        scope=m.group("scope") or "",
        subject=m.group("subject"),
    )


def classify_all(commits) -> list[ConventionalCommit]:
    return [classify(c) for c in commits]
