"""Job board: posting, listing and closing jobs."""

import logging
import uuid

from models.context import UserContext
from models.requests import JobCreateRequest
from models.schemas import Job
from services.errors import NotFoundError, PermissionDeniedError
from services.store import Store, utc_now

logger = logging.getLogger(__name__)


def _require_recruiter(ctx: UserContext) -> None:
    if not ctx.is_recruiter:
        raise PermissionDeniedError("Only recruiters can manage jobs")


def create_job(ctx: UserContext, request: JobCreateRequest, store: Store) -> Job:
    _require_recruiter(ctx)
    job = Job(
        id=str(uuid.uuid4()),
        recruiter_id=ctx.user_id,
        title=request.title,
        company=request.company or ctx.profile.company_name or "",
        location=request.location,
        job_type=request.job_type,
        experience_required=request.experience_required,
        description=request.description,
        requirements=request.requirements,
        salary_range=request.salary_range,
        status="open",
        created_at=utc_now(),
    )
    store.insert_job(job)
    logger.info("Recruiter %s posted job %s (%s)", ctx.user_id, job.id, job.title)
    return job


def list_open_jobs(store: Store) -> list[Job]:
    return store.list_jobs(status="open")


def list_recruiter_jobs(ctx: UserContext, store: Store) -> list[Job]:
    _require_recruiter(ctx)
    return store.list_jobs(recruiter_id=ctx.user_id)


def get_owned_job(ctx: UserContext, job_id: str, store: Store) -> Job:
    """Load a job the calling recruiter owns."""
    _require_recruiter(ctx)
    job = store.get_job(job_id)
    if job is None:
        raise NotFoundError(f"Job {job_id} not found")
    if job.recruiter_id != ctx.user_id:
        raise PermissionDeniedError("Job belongs to another recruiter")
    return job


def update_job_status(ctx: UserContext, job_id: str, status: str, store: Store) -> Job:
    job = get_owned_job(ctx, job_id, store)
    store.update_job_status(job_id, status)
    logger.info("Job %s status %s -> %s", job_id, job.status, status)
    return job.model_copy(update={"status": status})
