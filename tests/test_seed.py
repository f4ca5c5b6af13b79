import json

from domain.schemas import JobCreate
from infra.db.seed import DEMO_JOBS, seed_demo_jobs
from ingest.ingest_jobs import load_jobs_file, main


def test_seed_demo_jobs_only_into_empty_table(store):
    created = seed_demo_jobs(store)
    assert [j.title for j in created] == [j.title for j in DEMO_JOBS]

    assert seed_demo_jobs(store) == []
    assert len(store.list_jobs()) == len(DEMO_JOBS)


def test_seed_skipped_when_jobs_exist(store):
    store.create_job(JobCreate(title="Existing", description="d"))
    assert seed_demo_jobs(store) == []
    assert [j.title for j in store.list_jobs()] == ["Existing"]


def test_load_jobs_file(tmp_path):
    path = tmp_path / "jobs.json"
    path.write_text(json.dumps([
        {"title": "Data Analyst", "description": "SQL and dashboards", "requirements": "SQL"},
        {"title": "Designer", "department": "Product", "description": "Design things"},
    ]), encoding="utf-8")

    jobs = load_jobs_file(str(path))

    assert [j.title for j in jobs] == ["Data Analyst", "Designer"]
    assert jobs[1].department == "Product"


def test_ingest_main_with_file_and_demo(tmp_path, store):
    path = tmp_path / "jobs.json"
    path.write_text(json.dumps({"title": "Data Analyst", "description": "SQL"}), encoding="utf-8")

    created = main(str(path), demo=True, store=store)

    assert created == len(DEMO_JOBS) + 1
    assert store.list_jobs()[0].title == "Data Analyst"
