"""
Profile and job repository on top of database.py.

Upserts report ``new``, ``updated`` or ``no-change`` so import runs can be
summarised.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from .database import Job, Profile
from .normalize import split_list

PROFILE_COLUMNS = ("first_name", "last_name") + Profile.SCORED_FIELDS
JOB_COLUMNS = ("company", "status") + Job.SCORED_FIELDS
PROFILE_LIST_COLUMNS = {"skills", "technical_skills", "soft_skills", "work_type"}
JOB_LIST_COLUMNS = {"required_skills"}


def load_records(path: Path) -> Dict[str, List[Dict[str, Any]]]:
    """Read an import file of the form {"profiles": [...], "jobs": [...]}."""
    with path.open("r", encoding="utf-8") as f:
        content = f.read().strip()
    if not content:
        return {"profiles": [], "jobs": []}
    data = json.loads(content)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object with 'profiles' and/or 'jobs'")
    return {
        "profiles": list(data.get("profiles") or []),
        "jobs": list(data.get("jobs") or []),
    }


def _column_values(columns, list_columns, record: Dict[str, Any]) -> Dict[str, Any]:
    values = {}
    for c in columns:
        if c not in record:
            continue
        v = record[c]
        if c in list_columns and v is not None:
            v = split_list(v)
        elif c == "status" and v is None:
            continue
        values[c] = v
    return values


def _upsert(session, model, columns, list_columns, record: Dict[str, Any]) -> Dict[str, Any]:
    record_id = str(record["id"])
    values = _column_values(columns, list_columns, record)
    row = session.get(model, record_id)
    if row is None:
        session.add(model(id=record_id, **values))
        session.flush()
        return {"id": record_id, "status": "new"}

    changed = {c: v for c, v in values.items() if getattr(row, c) != v}
    if not changed:
        return {"id": record_id, "status": "no-change"}
    for c, v in changed.items():
        setattr(row, c, v)
    return {"id": record_id, "status": "updated", "changed": sorted(changed)}


def upsert_profile(session, record: Dict[str, Any]) -> Dict[str, Any]:
    return _upsert(session, Profile, PROFILE_COLUMNS, PROFILE_LIST_COLUMNS, record)


def upsert_job(session, record: Dict[str, Any]) -> Dict[str, Any]:
    return _upsert(session, Job, JOB_COLUMNS, JOB_LIST_COLUMNS, record)


def get_profile(session, profile_id: str) -> Optional[Profile]:
    return session.get(Profile, profile_id)


def get_job(session, job_id: str) -> Optional[Job]:
    return session.get(Job, job_id)


def list_profiles(session) -> List[Profile]:
    return session.query(Profile).order_by(Profile.created_at, Profile.id).all()


def list_active_jobs(session) -> List[Job]:
    return (
        session.query(Job)
        .filter(Job.status == "active")
        .order_by(Job.created_at.desc(), Job.id)
        .all()
    )
