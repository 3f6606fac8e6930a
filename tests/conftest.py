from __future__ import annotations

import pytest

from orchestrator import log

VALID_GRID = (
    "123456789"
    "456789123"
    "789123456"
    "214365897"
    "365897214"
    "897214365"
    "531642978"
    "642978531"
    "978531642"
)


@pytest.fixture(autouse=True)
def _isolated_log(tmp_path):
    log.configure(tmp_path / "logs")
    yield
    log.configure(tmp_path / "logs")


@pytest.fixture
def valid_grid() -> list[list[int]]:
    return [[int(VALID_GRID[r * 9 + c]) for c in range(9)] for r in range(9)]


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Point the project config at a TOML file written from ``text`` for one test."""

    import project_config

    def _use(text: str):
        path = tmp_path / "override.toml"
        path.write_text(text, encoding="utf-8")
        monkeypatch.setenv("KANDOKU_CONFIG", str(path))
        project_config.reload()
        return path

    yield _use
    monkeypatch.delenv("KANDOKU_CONFIG", raising=False)
    project_config.reload()
