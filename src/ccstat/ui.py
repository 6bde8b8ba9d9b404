import sys

# ──────────────────────────────────────────────
# ANSI helpers
# ──────────────────────────────────────────────
BOLD = "\033[1m"
RED = "\033[91m"
YELLOW = "\033[93m"
RESET = "\033[0m"


def styled(text: str, *codes: str) -> str:
    return "".join(codes) + text + RESET


def format_row(row) -> str:
    return f"SCOPE:{row.scope}\tINSERT:{row.insertions}\tDELETE:{row.deletions}\tSUM:{row.total}"


def print_rows(rows, out=None) -> None:
    # Rows stay unstyled so the output can be piped into cut/awk.
    out = out or sys.stdout
    for row in rows:
        print(format_row(row), file=out)


def print_error(message: str) -> None:
    print(styled("Error: ", RED, BOLD) + message, file=sys.stderr)
