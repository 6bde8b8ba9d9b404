"""Decode the custom ``git log`` format emitted by :mod:`ccstat.git_ops`.

The history text is one stream of records. Every record is introduced by
``SEPARATOR`` and holds ``KEY:VALUE`` fields joined by ``DELIMITER``.
Nothing in here raises on malformed input: missing fields keep their zero
values and an unreadable shortstat line becomes an empty ``CommitStat``.
"""
import re

from .config import LOG
from .models import Commit, CommitStat

SEPARATOR = "@@__GIT_LOG_SEPARATOR__@@"
DELIMITER = "@@__GIT_LOG_DELIMITER__@@"

HASH_KEY = "HASH"
TREE_KEY = "TREE"
AUTHOR_KEY = "AUTHOR"
COMMITTER_KEY = "COMMITTER"
SUBJECT_KEY = "SUBJECT"
BODY_KEY = "BODY"
STAT_KEY = "STAT"

# Commit field each plain-text key is stored in.
_TEXT_FIELDS = {
    HASH_KEY: "hash",
    TREE_KEY: "tree",
    AUTHOR_KEY: "author",
    COMMITTER_KEY: "committer",
    SUBJECT_KEY: "subject",
}

# git log --shortstat summary, e.g. " 3 files changed, 10 insertions(+), 2 deletions(-)"
STAT_RE = re.compile(
    r"(?P<files>\d+) files? changed"
    r"(?:, (?P<insertions>\d+) insertions?\(\+\))?"
    r"(?:, (?P<deletions>\d+) deletions?\(-\))?"
)


def parse_commits(text: str) -> list[Commit]:
    """Split raw log output into commits, keeping git's order."""
    # Whatever precedes the first separator is not a record.
    chunks = text.split(SEPARATOR)[1:]
    commits = [parse_commit(chunk) for chunk in chunks]
    LOG.debug("parsed %d commit(s)", len(commits))
    return commits


def parse_commit(chunk: str) -> Commit:
    fields = {}
    stat = CommitStat()

    for segment in chunk.split(DELIMITER):
        key, sep, value = segment.partition(":")
        if not sep:
            continue
        key = key.strip()
        if key in _TEXT_FIELDS:
            fields[_TEXT_FIELDS[key]] = value
        elif key == BODY_KEY:
            fields["body"] = parse_body(value)
        elif key == STAT_KEY:
            stat = parse_stat(value)
        else:
            LOG.debug("ignoring unknown log field %r", key)

    return Commit(stat=stat, **fields)


def _strip_quotes(text: str) -> str:
    if text.startswith('"'):
        text = text[1:]
    if text.endswith('"'):
        text = text[:-1]
    return text


def parse_body(body: str) -> str:
    body = body.replace("\r\n", "\n").replace("\r", "\n")

    # Two separate passes: one layer of quotes each, never all of them.
    body = body.strip()
    body = _strip_quotes(body).strip()
    body = _strip_quotes(body).strip()
    return body


def parse_stat(text: str) -> CommitStat:
    m = STAT_RE.search(text or "")
    if not m:
        return CommitStat()
    return CommitStat(
        files_changed=int(m.group("files")),
        insertions=int(m.group("insertions") or 0),
        deletions=int(m.group("deletions") or 0),
    )
