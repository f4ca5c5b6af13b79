import logging
from typing import Iterable, List
from domain.schemas import Job, JobCreate
from infra.repositories.record_store import RecordStore

logger = logging.getLogger(__name__)

DEMO_JOBS = [
    JobCreate(
        title="Senior Full Stack Engineer",
        department="Engineering",
        description=(
            "We are looking for an experienced Full Stack Engineer to join our team. "
            "You will be building scalable web applications using React and Node.js."
        ),
        requirements=(
            "- 5+ years of experience with JavaScript/TypeScript\n"
            "- Experience with React, Node.js, and PostgreSQL\n"
            "- Knowledge of cloud infrastructure (AWS/GCP)\n"
            "- Strong communication skills"
        ),
    ),
    JobCreate(
        title="Product Marketing Manager",
        department="Marketing",
        description="Join our marketing team to lead product launches and go-to-market strategies.",
        requirements=(
            "- 3+ years in product marketing\n"
            "- Experience in B2B SaaS\n"
            "- Excellent writing and storytelling skills\n"
            "- Data-driven mindset"
        ),
    ),
]


def create_jobs(store: RecordStore, jobs: Iterable[JobCreate]) -> List[Job]:
    return [store.create_job(job) for job in jobs]


def seed_demo_jobs(store: RecordStore) -> List[Job]:
    """Insert the demo jobs, but only into an empty jobs table."""
    if store.jobs.count() > 0:
        return []
    logger.info("Seeding database with %d demo jobs", len(DEMO_JOBS))
    return create_jobs(store, DEMO_JOBS)
