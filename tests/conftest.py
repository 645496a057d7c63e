"""Shared fixtures for the test suite."""

from __future__ import annotations

import pytest

from resume_patch.clients import reset_clients_cache
from resume_patch.schema import default_resume, dump_resume, sample_resume
from resume_patch.settings import reset_settings_cache
from resume_patch.storage import InMemoryResumeStore, LocalResumeStore


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch, tmp_path):
    """Isolate every test from the developer's environment and .env file."""
    monkeypatch.chdir(tmp_path)
    for name in ("MAX_PATCH_OPERATIONS", "STORAGE_BACKEND", "STORAGE_ROOT", "MAX_AGENT_ITERATIONS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    reset_clients_cache()
    yield
    reset_settings_cache()
    reset_clients_cache()


@pytest.fixture
def empty_resume():
    """The default resume: every section present and empty."""
    return default_resume()


@pytest.fixture
def empty_tree(empty_resume):
    return dump_resume(empty_resume)


@pytest.fixture
def populated_resume():
    """A resume with items in most sections."""
    return sample_resume()


@pytest.fixture
def populated_tree(populated_resume):
    return dump_resume(populated_resume)


@pytest.fixture
def custom_section():
    """A custom experience section, as it appears in the JSON tree."""
    return {
        "id": "freelance",
        "type": "experience",
        "title": "Freelance",
        "columns": 1,
        "hidden": False,
        "items": [{"id": "gig1", "company": "Studio North"}],
    }


@pytest.fixture
def memory_store():
    return InMemoryResumeStore()


@pytest.fixture
def local_store(tmp_path):
    return LocalResumeStore(root_dir=str(tmp_path / "resumes"))
