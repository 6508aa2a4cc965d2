"""Pytest configuration for integration tests against a real GitHub repository."""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent.parent


@pytest.fixture(autouse=True, scope="session")
def load_env() -> None:
    """Load REPO and GITHUB_PAT_TOKEN from .env.integration or .env, skipping when absent.

    Values in .env.integration take precedence over .env.
    """
    for env_file in (".env.integration", ".env"):
        path = PROJECT_ROOT / env_file
        if path.exists():
            load_dotenv(dotenv_path=path)

    missing_vars = [var for var in ("REPO", "GITHUB_PAT_TOKEN") if not os.getenv(var)]
    if missing_vars:
        pytest.skip(f"Label sync integration tests need {', '.join(missing_vars)} set in .env.integration or .env")
