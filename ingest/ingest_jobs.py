import json
import logging
from typing import List
from pydantic import TypeAdapter
from domain.schemas import JobCreate
from infra.db.seed import create_jobs, seed_demo_jobs
from infra.db.session import init_db
from infra.repositories.record_store import RecordStore

log = logging.getLogger("ingest_jobs")
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)

JOB_LIST = TypeAdapter(List[JobCreate])


def load_jobs_file(path: str) -> List[JobCreate]:
    """Read a JSON array of job objects (camelCase or snake_case keys)."""
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    if isinstance(raw, dict):
        raw = [raw]
    return JOB_LIST.validate_python(raw)


def main(path: str | None, demo: bool, store: RecordStore | None = None) -> int:
    if store is None:
        init_db()
        store = RecordStore()
    created = 0
    if demo:
        created += len(seed_demo_jobs(store))
    if path:
        jobs = load_jobs_file(path)
        created += len(create_jobs(store, jobs))
        log.info(f"Loaded {len(jobs)} jobs from {path}")
    log.info(f"Ingestion completed: {created} job(s) created.")
    return created


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(
        description="Load job postings into the screening database")
    parser.add_argument("--file", help="Path to a JSON file with an array of jobs")
    parser.add_argument("--demo", action="store_true",
                        help="Seed the demo jobs if the jobs table is empty")
    args = parser.parse_args()
    if not args.file and not args.demo:
        parser.error("nothing to do: pass --file and/or --demo")
    main(args.file, args.demo)
