"""Unit tests for the git status check and the dirty-tree gate."""

from unittest.mock import Mock, patch

import pytest
from git.exc import GitCommandNotFound, InvalidGitRepositoryError

from conftest import diff_entry, fake_repo, git, requires_git
from kebab_core.errors import DirtyTreeError, RootNotFoundError
from kebab_core.models_fs import GitCheck, GitStatus, VcsState
from kebab_core.safety_checks import check_git_status, ensure_safe_to_modify, modified_paths


class TestModifiedPaths:
    """Test cases for modified_paths."""

    def test_modified_and_renamed(self, tmp_path):
        repo = fake_repo(
            tmp_path,
            unstaged=[diff_entry("M", "src/FooBar.ts"), diff_entry("D", "gone.ts")],
            staged=[
                diff_entry("M", "src/FooBar.ts"),
                diff_entry("A", "added.ts"),
                diff_entry("R", "old.ts", "new.ts"),
            ],
        )

        assert modified_paths(repo) == ["src/FooBar.ts", "new.ts"]

    def test_limited_to_directory(self, tmp_path):
        repo = fake_repo(
            tmp_path,
            unstaged=[diff_entry("M", "src/a.ts"), diff_entry("M", "srcOther/b.ts"), diff_entry("M", "c.ts")],
        )

        assert modified_paths(repo, "src") == ["src/a.ts"]

    def test_repository_without_commits(self, tmp_path):
        repo = fake_repo(tmp_path, has_commits=False)

        assert modified_paths(repo) == []
        repo.head.commit.diff.assert_not_called()


class TestCheckGitStatus:
    """Test cases for check_git_status."""

    @patch("kebab_core.safety_checks.Repo")
    def test_not_a_repository(self, mock_repo_class, tmp_path):
        mock_repo_class.side_effect = InvalidGitRepositoryError(str(tmp_path))

        check = check_git_status([tmp_path])

        assert check.state is VcsState.NOT_VERSION_CONTROLLED
        assert check.status is None
        assert check.is_version_controlled is False
        mock_repo_class.assert_called_once_with(tmp_path.resolve(), search_parent_directories=True)

    @patch("kebab_core.safety_checks.Repo")
    def test_git_not_installed(self, mock_repo_class, tmp_path):
        repo = fake_repo(tmp_path)
        repo.index.diff.side_effect = GitCommandNotFound("git", "not found")
        mock_repo_class.return_value = repo

        check = check_git_status([tmp_path])

        assert check.state is VcsState.NOT_VERSION_CONTROLLED

    @patch("kebab_core.safety_checks.Repo")
    def test_bare_repository(self, mock_repo_class, tmp_path):
        mock_repo_class.return_value = Mock(working_tree_dir=None)

        assert check_git_status([tmp_path]).state is VcsState.NOT_VERSION_CONTROLLED

    @patch("kebab_core.safety_checks.Repo")
    def test_ignored_directory(self, mock_repo_class, tmp_path):
        target = tmp_path / "vendor" / "lib"
        target.mkdir(parents=True)
        repo = fake_repo(tmp_path, ignored=["vendor/lib"])
        mock_repo_class.return_value = repo

        check = check_git_status([target])

        assert check.state is VcsState.NOT_VERSION_CONTROLLED
        repo.ignored.assert_called_once_with("vendor/lib")
        repo.index.diff.assert_not_called()

    @patch("kebab_core.safety_checks.Repo")
    def test_clean(self, mock_repo_class, tmp_path):
        repo = fake_repo(tmp_path, staged=[diff_entry("A", "new-file.ts")])
        mock_repo_class.return_value = repo

        check = check_git_status([tmp_path / "."])

        assert check.state is VcsState.CLEAN
        assert check.is_version_controlled is True
        assert check.status.is_dirty is False
        assert check.status.git_repositories == [str(tmp_path.resolve())]
        assert check.status.checked_directories == [str(tmp_path.resolve())]
        # The top level itself is never checked against ignore rules
        repo.ignored.assert_not_called()

    @patch("kebab_core.safety_checks.Repo")
    def test_dirty(self, mock_repo_class, tmp_path):
        sub = tmp_path / "src"
        sub.mkdir()
        mock_repo_class.return_value = fake_repo(tmp_path, unstaged=[diff_entry("M", "src/FooBar.ts")])

        check = check_git_status([sub])

        assert check.state is VcsState.DIRTY
        assert check.is_dirty is True
        assert check.status.dirty_files == [str(tmp_path.resolve() / "src" / "FooBar.ts")]
        assert check.status.dirty_repositories() == [str(tmp_path.resolve())]

    @patch("kebab_core.safety_checks.Repo")
    def test_changes_outside_directory_ignored(self, mock_repo_class, tmp_path):
        sub = tmp_path / "src"
        sub.mkdir()
        mock_repo_class.return_value = fake_repo(tmp_path, unstaged=[diff_entry("M", "docs/Readme.md")])

        assert check_git_status([sub]).state is VcsState.CLEAN

    @patch("kebab_core.safety_checks.Repo")
    def test_dirty_files_deduplicated_across_directories(self, mock_repo_class, tmp_path):
        (tmp_path / "a").mkdir()
        (tmp_path / "b").mkdir()
        mock_repo_class.return_value = fake_repo(
            tmp_path, unstaged=[diff_entry("M", "a/shared.ts")], staged=[diff_entry("M", "a/shared.ts")]
        )

        check = check_git_status([tmp_path / "a", tmp_path / "a", tmp_path / "b"])

        assert len(check.status.dirty_files) == 1
        assert len(check.status.checked_directories) == 3
        assert len(check.status.git_repositories) == 1

    @patch("kebab_core.safety_checks.Repo")
    def test_missing_directory(self, mock_repo_class, tmp_path):
        with pytest.raises(RootNotFoundError):
            check_git_status([tmp_path / "missing"])
        mock_repo_class.assert_not_called()


@requires_git
class TestCheckGitStatusWithGit:
    """Test cases against a real git repository."""

    def setup_method(self):
        self.files = {"src/fooBar.ts": "a\n", "src/other.ts": "b\n"}

    def init_repo(self, root):
        for rel, content in self.files.items():
            (root / rel).parent.mkdir(parents=True, exist_ok=True)
            (root / rel).write_text(content)
        git(root, "init", "-q")
        git(root, "add", "-A")
        git(root, "commit", "-q", "-m", "initial")
        return root

    def test_clean(self, tmp_path):
        root = self.init_repo(tmp_path)
        (root / "untracked.ts").write_text("")

        assert check_git_status([root / "src"]).state is VcsState.CLEAN

    def test_unstaged_modification(self, tmp_path):
        root = self.init_repo(tmp_path)
        (root / "src" / "fooBar.ts").write_text("changed\n")

        check = check_git_status([root])

        assert check.state is VcsState.DIRTY
        assert check.status.dirty_files == [str(root.resolve() / "src" / "fooBar.ts")]

    def test_staged_rename(self, tmp_path):
        root = self.init_repo(tmp_path)
        git(root, "mv", "src/other.ts", "src/renamed.ts")

        check = check_git_status([root])

        assert check.state is VcsState.DIRTY
        assert check.status.dirty_files == [str(root.resolve() / "src" / "renamed.ts")]


class TestEnsureSafeToModify:
    """Test cases for ensure_safe_to_modify."""

    def setup_method(self):
        self.dirty = GitCheck(
            VcsState.DIRTY,
            GitStatus(
                is_dirty=True,
                dirty_files=["/work/repo/src/fooBar.ts"],
                checked_directories=["/work/repo/src", "/work/other"],
                git_repositories=["/work/repo", "/work/other"],
            ),
        )

    def test_dirty_raises_naming_repository(self):
        with pytest.raises(DirtyTreeError) as exc_info:
            ensure_safe_to_modify(self.dirty, force=False)

        assert exc_info.value.repositories == ["/work/repo"]
        assert "/work/repo" in str(exc_info.value)
        assert "/work/other" not in str(exc_info.value)
        assert exc_info.value.status is self.dirty.status

    def test_dirty_with_force(self):
        ensure_safe_to_modify(self.dirty, force=True)

    @pytest.mark.parametrize(
        "check",
        [GitCheck(VcsState.CLEAN, GitStatus()), GitCheck(VcsState.NOT_VERSION_CONTROLLED)],
    )
    def test_clean_or_not_version_controlled(self, check):
        ensure_safe_to_modify(check, force=False)
