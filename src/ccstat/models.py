from dataclasses import dataclass, field


class CcstatError(RuntimeError):
    """Base error for failures that should stop the run."""


@dataclass(frozen=True)
class CommitStat:
    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0


@dataclass(frozen=True)
class Commit:
    hash: str = ""
    tree: str = ""
    author: str = ""
    committer: str = ""
    subject: str = ""
    body: str = ""
    stat: CommitStat = field(default_factory=CommitStat)


@dataclass(frozen=True)
class ConventionalCommit:
    raw: Commit
    type: str = ""
    scope: str = ""
    subject: str = ""

    @property
    def is_conventional(self) -> bool:
        return bool(self.type)

    @property
    def display_subject(self) -> str:
        return self.subject if self.is_conventional else self.raw.subject

    @property
    def insertions(self) -> int:
        return self.raw.stat.insertions

    @property
    def deletions(self) -> int:
        return self.raw.stat.deletions


@dataclass
class ScopeRow:
    scope: str
    insertions: int = 0
    deletions: int = 0
    total: int = 0

    def add(self, insertions: int, deletions: int) -> None:
        self.insertions += insertions
        self.deletions += deletions
        # Always recomputed, never adjusted by a delta.
        self.total = self.insertions + self.deletions
