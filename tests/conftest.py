"""
Pytest configuration and shared fixtures.
"""

import json
import pytest
from pathlib import Path
from typing import Dict, Any

from jobmatch.logger import reset_logger


@pytest.fixture(autouse=True)
def quiet_logger(monkeypatch):
    """Fresh global logger per test, console only (no log files)."""
    monkeypatch.setenv("JOBMATCH_LOG_FILE", "0")
    monkeypatch.setenv("JOBMATCH_LOG_LEVEL", "INFO")
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def candidate_record() -> Dict[str, Any]:
    """Job seeker profile row as stored in the profiles table."""
    return {
        "id": "p-1",
        "first_name": "Ana",
        "last_name": "Reyes",
        "location": "Manila",
        "experience_level": "mid",
        "skills": ["Python", "SQL"],
        "technical_skills": "Docker, AWS",
        "soft_skills": ["Communication"],
        "bio": "Backend developer working with python, django and docker every day.",
        "preferred_role": "Backend Engineer",
        "work_type": "Remote, Full-time",
        "salary_min": 50000,
        "salary_max": 80000,
        "availability": "Immediate",
    }


@pytest.fixture
def job_record() -> Dict[str, Any]:
    """Active job posting row as stored in the jobs table."""
    return {
        "id": "j-1",
        "title": "Backend Engineer",
        "company": "acme",
        "location": "Manila",
        "experience_level": "mid",
        "required_skills": ["python", "sql"],
        "description": (
            "python django python django postgres postgres "
            "docker docker kubernetes kubernetes"
        ),
        "work_type": "Full-time",
        "salary_min": 55000,
        "salary_max": 85000,
        "availability": "immediate",
        "status": "active",
    }


@pytest.fixture
def import_file(tmp_path, candidate_record, job_record) -> Path:
    """Import file with two profiles and two jobs (one closed)."""
    data = {
        "profiles": [
            candidate_record,
            {
                "id": "p-2",
                "first_name": "Ben",
                "location": "Cebu",
                "experience_level": "entry",
                "skills": "Excel, Sales",
                "bio": "Sales associate.",
            },
        ],
        "jobs": [
            job_record,
            {
                "id": "j-2",
                "title": "Data Analyst",
                "location": "Cebu",
                "required_skills": "excel, sql",
                "description": "Analyse data.",
                "status": "closed",
            },
        ],
    }
    path = tmp_path / "records.json"
    path.write_text(json.dumps(data))
    return path
