"""Shared pytest fixtures for devwatch tests."""
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator

import pytest
import yaml

from devwatch.infrastructure import logger


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def repo_dir(temp_dir: Path) -> Path:
    """Create a source tree with an ignore file."""
    repo = temp_dir / "repo"
    repo.mkdir()

    (repo / "src").mkdir()
    (repo / "src" / "main.go").write_text("package main\n")
    (repo / "docs").mkdir()
    (repo / "docs" / "readme.md").write_text("# Docs\n")
    (repo / "web").mkdir()
    (repo / "web" / "package.json").write_text("{}\n")
    (repo / "web" / ".dockerignore").write_text("# deps\nnode_modules/\n\n*.log\n")

    return repo


@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """Provide a sample devwatch configuration."""
    return {
        "devwatch": {
            "version": "1.0",
            "resources": [
                {
                    "name": "api",
                    "deps": ["src/"],
                    "ignore": ["*.tmp"],
                },
                {
                    "name": "web",
                    "base_dir": "web",
                    "deps": ["."],
                    "ignore_files": [".dockerignore"],
                    "live_update": {
                        "fall_back_on": ["package.json"],
                        "sync": [{"local": "src", "remote": "/app/src"}],
                        "run": [
                            {"cmd": "npm run build", "trigger": ["src/assets"]},
                        ],
                    },
                },
            ],
            "logging": {
                "level": "DEBUG",
                "file": None,
            },
        }
    }


@pytest.fixture
def config_file(repo_dir: Path, sample_config: Dict[str, Any]) -> Path:
    """Create a configuration file at the root of the source tree."""
    config_path = repo_dir / "devwatch.yaml"
    with open(config_path, "w") as f:
        yaml.safe_dump(sample_config, f)
    return config_path


@pytest.fixture
def quiet_logger() -> logger.Logger:
    """Logger without handlers."""
    return logger.Logger(name="devwatch.test", level="DEBUG", handlers=[])


@pytest.fixture(autouse=True)
def reset_global_logger():
    """Reset the global logger between tests."""
    yield
    logger.set_global_logger(None)
