"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path

import pytest

from commitctx.git.status import FileStatus, StatusEntry


class FakeRepository:
    """In-memory RepositoryProvider that records every call."""

    def __init__(self, root, git_path="/usr/bin/git"):
        self._root = Path(root)
        self._git_path = git_path
        self.staged_diff = ""
        self.unstaged_diff = ""
        self.untracked = []
        self.working = []
        self.logs = {}
        self.log_errors = {}
        self.calls = []

    @property
    def root(self):
        return self._root

    @property
    def git_path(self):
        return self._git_path

    def refresh_status(self):
        self.calls.append("refresh_status")

    def diff(self, staged):
        self.calls.append(("diff", staged))
        return self.staged_diff if staged else self.unstaged_diff

    def untracked_changes(self):
        self.calls.append("untracked_changes")
        return list(self.untracked)

    def working_tree_changes(self):
        self.calls.append("working_tree_changes")
        return list(self.working)

    def log(self, path, max_entries):
        self.calls.append(("log", path, max_entries))
        if path in self.log_errors:
            raise self.log_errors[path]
        return list(self.logs.get(path, []))

    def add_untracked(self, rel_path, content=None, status=FileStatus.UNTRACKED):
        """Register an untracked file, writing it to disk when content is given."""
        path = self._root / rel_path
        if content is not None:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        self.untracked.append(StatusEntry(path=path, status=status))
        return path


class FakeRunner:
    """ProcessRunner returning canned stdout or raising a canned error."""

    def __init__(self, stdout=b"", error=None):
        self.stdout = stdout
        self.error = error
        self.calls = []

    def execute(self, args, working_dir):
        self.calls.append((list(args), working_dir))
        if self.error is not None:
            raise self.error
        return self.stdout


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_repo(temp_dir):
    """A fake repository rooted in a temporary directory."""
    return FakeRepository(temp_dir)


@pytest.fixture
def fake_runner():
    """A process runner that reports no untracked files."""
    return FakeRunner()


@pytest.fixture
def sample_diff():
    """Sample unified diff output with two files."""
    return """diff --git a/src/main.py b/src/main.py
index 1234567..abcdefg 100644
--- a/src/main.py
+++ b/src/main.py
@@ -10,6 +10,8 @@ def main():
     print("Hello")
+    print("World")
+    print("!")
     return 0
diff --git a/tests/test_main.py b/tests/test_main.py
new file mode 100644
index 0000000..1234567
--- /dev/null
+++ b/tests/test_main.py
@@ -0,0 +1,4 @@
+import pytest
+
+def test_main():
+    assert True
"""


@pytest.fixture
def make_runner():
    """Factory for fake process runners."""
    return FakeRunner


@pytest.fixture
def make_repo():
    """Factory for fake repositories."""
    return FakeRepository
