"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path

import pytest

from commitment.eval.models import AttemptMetrics, FailureKind, FailureOutcome, Fixture, SuccessOutcome


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_repo_root(temp_dir):
    """Create a mock git repository root directory."""
    # Create .git directory to simulate a git repo
    git_dir = temp_dir / ".git"
    git_dir.mkdir()
    return temp_dir


@pytest.fixture
def config_dir(temp_dir, mocker):
    """Point the global config directory at a temp dir."""
    config_dir = temp_dir / ".commitment"
    mocker.patch("commitment.global_config._CONFIG_DIR", config_dir)
    return config_dir


@pytest.fixture
def sample_status():
    """Porcelain status with staged changes."""
    return "M  src/parser.py\nA  tests/test_parser.py\n"


@pytest.fixture
def sample_diff():
    """Staged diff matching sample_status."""
    return """diff --git a/src/parser.py b/src/parser.py
index 3b18e51..9c2f1d4 100644
--- a/src/parser.py
+++ b/src/parser.py
@@ -1,5 +1,5 @@
 def parse_input(text):
-    trimmed = text.strip()
+    trimmed = (text or "").strip()
     return trimmed
diff --git a/tests/test_parser.py b/tests/test_parser.py
new file mode 100644
--- /dev/null
+++ b/tests/test_parser.py
@@ -0,0 +1,3 @@
+def test_parse_none():
+    assert parse_input(None) == ""
"""


@pytest.fixture
def sample_fixture(sample_status, sample_diff):
    """A mocked evaluation fixture."""
    return Fixture(name="simple", status=sample_status, diff=sample_diff)


@pytest.fixture
def metrics():
    """Judge metrics averaging 8.0."""
    return AttemptMetrics(clarity=8, specificity=7, conventional_format=9, scope=8)


@pytest.fixture
def make_success(metrics):
    """Factory for successful attempt outcomes."""
    def _make(attempt_number, score=8.0, message="feat: add parser"):
        return SuccessOutcome(
            attempt_number=attempt_number,
            commit_message=message,
            metrics=metrics,
            overall_score=score,
            response_time_ms=1200,
        )
    return _make


@pytest.fixture
def make_failure():
    """Factory for failed attempt outcomes."""
    def _make(attempt_number, failure_type=FailureKind.GENERATION, reason="boom"):
        return FailureOutcome(
            attempt_number=attempt_number,
            failure_type=failure_type,
            failure_reason=reason,
            response_time_ms=50,
        )
    return _make


@pytest.fixture
def mock_git_commands(mocker):
    """Mock subprocess.run for git commands."""
    mock_run = mocker.patch("subprocess.run")
    return mock_run
