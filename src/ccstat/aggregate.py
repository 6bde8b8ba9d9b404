from .models import CcstatError, ConventionalCommit, ScopeRow

NO_SCOPE = "None"


class UnsupportedGrouping(CcstatError):
    pass


def scope_key(commit: ConventionalCommit) -> str:
    return commit.scope or NO_SCOPE


def aggregate_by_scope(commits) -> dict[str, ScopeRow]:
    """Sum insertions/deletions of *commits* per scope."""
    rows: dict[str, ScopeRow] = {}
    for c in commits:
        key = scope_key(c)
        row = rows.get(key)
        if row is None:
            row = rows[key] = ScopeRow(scope=key)
        row.add(c.insertions, c.deletions)
    return rows


def sorted_rows(result: dict[str, ScopeRow]) -> list[ScopeRow]:
    return [result[key] for key in sorted(result)]


def aggregate(commits, group_by: str = "scope") -> dict[str, ScopeRow]:
    if group_by == "scope":
        return aggregate_by_scope(commits)
    if group_by == "type":
        raise UnsupportedGrouping("grouping by type is not implemented yet")
    raise ValueError(f"unknown grouping: {group_by!r}")
