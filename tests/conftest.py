import pytest


@pytest.fixture(autouse=True)
def _session_dir(tmp_path, monkeypatch):
    # Server-side session files stay inside each test's tmp dir.
    monkeypatch.setenv("SESSION_FILE_DIR", str(tmp_path / "sessions"))
