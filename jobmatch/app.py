import argparse
import json
from pathlib import Path

from .env import ConfigError, Settings, load_env

from . import __version__
from .database import init_database, get_session
from .facets import candidate_from_record, job_from_record
from .keywords import MAX_KEYWORDS, extract_keywords
from .logger import get_logger
from .policies import UnknownPolicyError, get_policy
from .ranking import rank_candidates, rank_jobs, match_band
from .schema import (
    InvalidRecordError,
    require_valid_candidate,
    require_valid_job,
    validate_candidate_record,
    validate_candidate_record_strict,
    validate_job_record,
    validate_job_record_strict,
)
from .scoring import MatchScorer
from .storage import (
    get_job,
    get_profile,
    list_active_jobs,
    list_profiles,
    load_records,
    upsert_job,
    upsert_profile,
)


def _read_json(path_str: str):
    input_path = Path(path_str)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise SystemExit(f"Invalid JSON in {input_path}: {e}")


def _db_path(args: argparse.Namespace) -> Path:
    return Path(args.db) if args.db else Settings.from_env().db_path


def _workers(args: argparse.Namespace) -> int:
    return args.workers if args.workers else Settings.from_env().workers


def cmd_score(args: argparse.Namespace) -> None:
    logger = get_logger()
    candidate = _read_json(args.candidate)
    job = _read_json(args.job)
    try:
        policy = get_policy(args.variant)
        require_valid_candidate(candidate)
        require_valid_job(job)
    except UnknownPolicyError as e:
        raise SystemExit(e.args[0])
    except InvalidRecordError as e:
        logger.record_rejection(f"invalid_{e.kind}")
        logger.warning("Rejected record", kind=e.kind, errors=e.errors)
        raise SystemExit(str(e))

    result = MatchScorer(policy).score(candidate_from_record(candidate), job_from_record(job))
    logger.record_score(result.policy, result.skipped)
    print(f"Match: {result.percent}% ({match_band(result.percent)})")
    if args.breakdown:
        for name, s in result.breakdown.items():
            if s.applicable:
                print(f"  {name}: {s.earned:g}/{s.possible:g}")
            else:
                print(f"  {name}: skipped ({s.possible:g} possible)")


def cmd_keywords(args: argparse.Namespace) -> None:
    if args.text is not None:
        text = args.text
    elif args.input:
        input_path = Path(args.input)
        if not input_path.exists():
            raise SystemExit(f"Input file not found: {input_path}")
        text = input_path.read_text(encoding="utf-8")
    else:
        raise SystemExit("Provide --text or --input.")
    words = extract_keywords(text, limit=args.limit)
    if not words:
        print("No repeated keywords found.")
        return
    for word in words:
        print(word)


def cmd_validate(args: argparse.Namespace) -> None:
    data = _read_json(args.input)
    if args.kind == "candidate":
        errors = validate_candidate_record_strict(data)[1] if args.strict else validate_candidate_record(data)
    else:
        errors = validate_job_record_strict(data)[1] if args.strict else validate_job_record(data)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print("Valid")


def import_records(records: dict, db_path: Path) -> dict:
    """Validate and upsert profiles and jobs. Returns per-status counts."""
    logger = get_logger()
    counts = {"new": 0, "updated": 0, "no-change": 0, "rejected": 0}
    init_database(db_path)
    session = get_session(db_path)
    try:
        for kind, validate, upsert in (
            ("profile", validate_candidate_record, upsert_profile),
            ("job", validate_job_record, upsert_job),
        ):
            for record in records[f"{kind}s"]:
                errors = validate(record)
                if not errors and not record.get("id"):
                    errors = ["Missing required field: id"]
                if errors:
                    counts["rejected"] += 1
                    logger.record_rejection(f"invalid_{kind}")
                    logger.warning("Skipping record", kind=kind, id=record.get("id") if isinstance(record, dict) else None, errors=errors)
                    continue
                outcome = upsert(session, record)
                counts[outcome["status"]] += 1
                logger.debug("Imported record", kind=kind, **outcome)
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
    logger.info("Import complete", db=str(db_path), **counts)
    return counts


def cmd_import(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    try:
        records = load_records(input_path)
    except (ValueError, json.JSONDecodeError) as e:
        raise SystemExit(str(e))
    counts = import_records(records, _db_path(args))
    print(
        f"Done. new={counts['new']} updated={counts['updated']} "
        f"no-change={counts['no-change']} rejected={counts['rejected']}"
    )
    get_logger().log_metrics_summary()


def _print_ranked(ranked, labels, limit) -> None:
    if limit is not None:
        ranked = ranked[:limit]
    for match in ranked:
        print(f"{match.percent:>3}% [{match.band}] {labels[match.index]}")


def cmd_rank_candidates(args: argparse.Namespace) -> None:
    db_path = _db_path(args)
    if not db_path.exists():
        raise SystemExit(f"Database not found: {db_path}")
    session = get_session(db_path)
    try:
        job = get_job(session, args.job_id)
        if job is None:
            raise SystemExit(f"Job not found: {args.job_id}")
        profiles = list_profiles(session)
        labels = [f"{p.id}  {p.display_name}" for p in profiles]
        candidates = [candidate_from_record(p.to_record()) for p in profiles]
        job_facet = job_from_record(job.to_record())
    finally:
        session.close()

    if not candidates:
        print("No candidates in database.")
        return
    ranked = rank_candidates(job_facet, candidates, min_percent=args.min, workers=_workers(args))
    print(f"Candidates for {job_facet.title} ({len(ranked)}/{len(candidates)}):")
    _print_ranked(ranked, labels, args.limit)
    get_logger().log_metrics_summary()


def cmd_rank_jobs(args: argparse.Namespace) -> None:
    db_path = _db_path(args)
    if not db_path.exists():
        raise SystemExit(f"Database not found: {db_path}")
    session = get_session(db_path)
    try:
        profile = get_profile(session, args.profile_id)
        if profile is None:
            raise SystemExit(f"Profile not found: {args.profile_id}")
        jobs = list_active_jobs(session)
        labels = [f"{j.id}  {j.title}" + (f" @ {j.company}" if j.company else "") for j in jobs]
        job_facets = [job_from_record(j.to_record()) for j in jobs]
        candidate = candidate_from_record(profile.to_record())
    finally:
        session.close()

    if not job_facets:
        print("No active jobs in database.")
        return
    ranked = rank_jobs(candidate, job_facets, min_percent=args.min, workers=_workers(args))
    print(f"Jobs for {args.profile_id} ({len(ranked)}/{len(job_facets)}):")
    _print_ranked(ranked, labels, args.limit)
    get_logger().log_metrics_summary()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jobmatch", description="Candidate/job match scoring")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    sc = subparsers.add_parser("score", help="Score one candidate record against one job record")
    sc.add_argument("--candidate", required=True, help="Path to candidate profile JSON")
    sc.add_argument("--job", required=True, help="Path to job posting JSON")
    sc.add_argument("--variant", default="hr", choices=["hr", "seeker"], help="Rubric to apply (default: hr)")
    sc.add_argument("--breakdown", action="store_true", help="Show per-criterion points")
    sc.set_defaults(func=cmd_score)

    kw = subparsers.add_parser("keywords", help="Extract repeated keywords from text")
    kw.add_argument("--text", help="Text to analyse")
    kw.add_argument("--input", help="Path to a text file to analyse")
    kw.add_argument("--limit", type=int, default=MAX_KEYWORDS, help=f"Maximum keywords (default {MAX_KEYWORDS})")
    kw.set_defaults(func=cmd_keywords)

    val = subparsers.add_parser("validate", help="Validate a candidate or job record JSON")
    val.add_argument("--input", required=True, help="Path to record JSON")
    val.add_argument("--kind", required=True, choices=["candidate", "job"], help="Record type")
    val.add_argument("--strict", action="store_true", help="Reject unknown experience levels")
    val.set_defaults(func=cmd_validate)

    imp = subparsers.add_parser("import", help="Import profiles and jobs from JSON into the database")
    imp.add_argument("--input", required=True, help='JSON file: {"profiles": [...], "jobs": [...]}')
    imp.add_argument("--db", help="SQLite database path (default: JOBMATCH_DB_PATH or data/jobmatch.db)")
    imp.set_defaults(func=cmd_import)

    rc = subparsers.add_parser("rank-candidates", help="Rank stored candidates for a job (HR rubric)")
    rc.add_argument("--job-id", required=True, help="Job id")
    rc.set_defaults(func=cmd_rank_candidates)

    rj = subparsers.add_parser("rank-jobs", help="Rank active jobs for a job seeker (seeker rubric)")
    rj.add_argument("--profile-id", required=True, help="Profile id")
    rj.set_defaults(func=cmd_rank_jobs)

    for sub in (rc, rj):
        sub.add_argument("--db", help="SQLite database path (default: JOBMATCH_DB_PATH or data/jobmatch.db)")
        sub.add_argument("--min", type=int, help="Only show matches at or above this percent")
        sub.add_argument("--limit", type=int, help="Show at most N matches")
        sub.add_argument("--workers", type=int, help="Score in parallel with N threads (default: JOBMATCH_WORKERS)")

    return parser


def main(argv=None):
    # Load .env if present (JOBMATCH_DB_PATH, JOBMATCH_LOG_LEVEL, etc.)
    load_env()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        try:
            Settings.from_env()
        except ConfigError as e:
            raise SystemExit(f"Configuration error: {e}")
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
