"""Tests for the git history source."""

import os
import shutil
import subprocess
import tempfile
import unittest
from unittest import mock

from ccstat.aggregate import aggregate_by_scope
from ccstat.git_ops import (
    LOG_FORMAT, GitError, LogOptions,
    build_log_args, can_exec, get_commits, is_inside_work_tree, run_git,
)
from ccstat.parser import DELIMITER, SEPARATOR


def completed(stdout: str = "", returncode: int = 0, stderr: str = ""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestBuildLogArgs(unittest.TestCase):

    def test_defaults(self):
        self.assertEqual(build_log_args(), [
            "log",
            f"--pretty=tformat:{LOG_FORMAT}",
            "--no-decorate",
            "--no-merges",
            "--shortstat",
        ])

    def test_options(self):
        args = build_log_args(LogOptions(after="2024-01-01", before="2024-02-01", follow_path="src/x.py"))
        self.assertEqual(args[-5:], ["--shortstat", "--after=2024-01-01", "--before=2024-02-01", "--", "src/x.py"])

    def test_format_fields(self):
        self.assertTrue(LOG_FORMAT.startswith(SEPARATOR))
        self.assertTrue(LOG_FORMAT.endswith(DELIMITER + "STAT:"))
        for key in ("HASH:%H", "TREE:%T", "AUTHOR:%an", "COMMITTER:%cn", "SUBJECT:%s", "BODY:%b"):
            self.assertIn(key, LOG_FORMAT)


class TestRunGit(unittest.TestCase):

    @mock.patch("ccstat.git_ops.subprocess.run")
    def test_output_stripped(self, run):
        run.return_value = completed("  out\n\x00")
        self.assertEqual(run_git(["status"]), "out")
        self.assertEqual(run.call_args.args[0], ["git", "status"])

    @mock.patch("ccstat.git_ops.subprocess.run")
    def test_non_zero_exit_is_empty(self, run):
        run.return_value = completed("partial", returncode=128, stderr="fatal: bad revision")
        self.assertEqual(run_git(["log"]), "")

    @mock.patch("ccstat.git_ops.subprocess.run", side_effect=FileNotFoundError())
    def test_missing_binary(self, run):
        with self.assertRaises(GitError):
            run_git(["log"], git_bin="/notfound/bin/git")

    def test_missing_cwd(self):
        with self.assertRaisesRegex(GitError, "does not exist"):
            run_git(["log"], cwd="/notfound/repo")

    def test_can_exec_invalid_bin(self):
        with self.assertRaises(GitError):
            can_exec("/notfound/bin/git")

    @mock.patch("ccstat.git_ops.subprocess.run")
    def test_not_inside_work_tree(self, run):
        run.return_value = completed("", returncode=128)
        with self.assertRaisesRegex(GitError, "is not git repository"):
            is_inside_work_tree("/tmp")


class TestGetCommits(unittest.TestCase):

    @mock.patch("ccstat.git_ops.can_exec")
    @mock.patch("ccstat.git_ops.subprocess.run")
    def test_parses_and_classifies(self, run, _can_exec):
        record = SEPARATOR + DELIMITER.join([
            "HASH:abc", "TREE:def", "AUTHOR:a", "COMMITTER:c",
            "SUBJECT:fix(cli): exit code", "BODY:", "STAT:\n\n 1 file changed, 2 insertions(+)",
        ])
        run.side_effect = [completed("true\n"), completed(record + "\n")]

        commits = get_commits(cwd="/repo")

        self.assertEqual(len(commits), 1)
        self.assertEqual(commits[0].scope, "cli")
        self.assertEqual(commits[0].insertions, 2)

    @mock.patch("ccstat.git_ops.can_exec")
    @mock.patch("ccstat.git_ops.subprocess.run")
    def test_failed_query_gives_no_commits(self, run, _can_exec):
        run.side_effect = [completed("true\n"), completed("", returncode=128)]
        self.assertEqual(get_commits(cwd="/repo"), [])


@unittest.skipUnless(shutil.which("git"), "git is not installed")
class TestGetCommitsIntegration(unittest.TestCase):
    """Run the whole pipeline against a throwaway repository."""

    def setUp(self):
        self.repo = tempfile.mkdtemp(prefix="ccstat_test_")
        self.git("init", "-q")

    def tearDown(self):
        shutil.rmtree(self.repo, ignore_errors=True)

    def git(self, *args):
        subprocess.run(
            ["git", "-c", "user.name=Test", "-c", "user.email=test@example.com",
             "-c", "commit.gpgsign=false", *args],
            cwd=self.repo, check=True, capture_output=True,
        )

    def commit(self, name: str, content: str, message: str):
        with open(os.path.join(self.repo, name), "w") as f:
            f.write(content)
        self.git("add", name)
        self.git("commit", "-q", "-m", message)

    def test_scopes(self):
        self.commit("a.txt", "1\n", "chore: init")
        self.commit("b.txt", "x\ny\n", "feat(core): add b")
        self.commit("b.txt", "x\n", "fix(core): trim b")
        self.commit("c.txt", "z\n", 'docs(readme): "quoted" subject')

        commits = get_commits(cwd=self.repo)

        self.assertEqual(len(commits), 4)
        self.assertEqual(commits[0].scope, "readme")
        self.assertEqual(commits[-1].raw.subject, "chore: init")
        rows = aggregate_by_scope(commits)
        self.assertEqual((rows["core"].insertions, rows["core"].deletions, rows["core"].total), (2, 1, 3))
        self.assertEqual(rows["readme"].insertions, 1)

    def test_not_a_repository(self):
        plain = tempfile.mkdtemp(prefix="ccstat_plain_")
        self.addCleanup(shutil.rmtree, plain, True)
        with mock.patch.dict(os.environ, {"GIT_CEILING_DIRECTORIES": os.path.dirname(plain)}):
            with self.assertRaises(GitError):
                get_commits(cwd=plain)


if __name__ == "__main__":
    unittest.main()
