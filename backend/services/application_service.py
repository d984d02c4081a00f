"""Orchestrator: application submission and review.

Submission pipeline:
1. Check the caller is a job seeker and the job is open
2. Resume analysis (skills, experience, highlights, match score)
3. GitHub lookup -> external profile with social score
4. Attrition risk from employment date ranges
5. Store the application and all three derived records in one transaction

Steps 2-4 only need the submitted form and the job, so everything is
computed before the first write and nothing is stored if any step fails.
SQLite calls run in the threadpool so the event loop stays free.
"""

import logging
import uuid

from fastapi.concurrency import run_in_threadpool

from config import settings
from models.context import UserContext
from models.requests import ApplicationRequest
from models.responses import ApplicantInfo, ApplicationDetail, ApplicationSummary, JobInfo
from models.schemas import Application
from services import resume_analyzer
from services.attrition import calculate_attrition_risk
from services.errors import ConflictError, NotFoundError, PermissionDeniedError
from services.github_client import GitHubClient, build_external_profile
from services.job_service import get_owned_job
from services.store import Store, utc_now

logger = logging.getLogger(__name__)


async def submit_application(
    ctx: UserContext,
    job_id: str,
    form: ApplicationRequest,
    store: Store,
    github: GitHubClient,
) -> ApplicationDetail:
    """Score a submission and persist it with its derived records."""
    if ctx.is_recruiter:
        raise PermissionDeniedError("Only job seekers can apply to jobs")

    job = await run_in_threadpool(store.get_job, job_id)
    if job is None:
        raise NotFoundError(f"Job {job_id} not found")
    if job.status != "open":
        raise ConflictError("Job is no longer accepting applications")

    application = Application(
        id=str(uuid.uuid4()),
        job_id=job.id,
        applicant_id=ctx.user_id,
        resume_text=form.resume_text,
        cover_letter=form.cover_letter or None,
        status="submitted",
        created_at=utc_now(),
    )

    analysis = resume_analyzer.analyze_resume(
        form.resume_text, job, mode=settings.keyword_match_mode
    )
    analysis.application_id = application.id

    stats = await github.fetch_stats(form.github_username)
    external_profile = build_external_profile(
        stats,
        github_username=form.github_username,
        linkedin_url=form.linkedin_url,
    )
    external_profile.application_id = application.id

    attrition_risk = calculate_attrition_risk(form.resume_text)
    attrition_risk.application_id = application.id

    await run_in_threadpool(
        store.create_application_bundle, application, analysis, external_profile, attrition_risk
    )
    logger.info(
        "Application %s submitted to job %s (match=%d, social=%.1f, risk=%d)",
        application.id,
        job.id,
        analysis.match_score,
        external_profile.social_score,
        attrition_risk.risk_score,
    )

    return ApplicationDetail(
        application=application,
        applicant=ApplicantInfo(full_name=ctx.profile.full_name, email=ctx.profile.email),
        job=JobInfo(title=job.title, company=job.company),
        resume_analysis=analysis,
        external_profile=external_profile,
        attrition_risk=attrition_risk,
    )


def list_applications_for_applicant(ctx: UserContext, store: Store) -> list[ApplicationSummary]:
    if ctx.is_recruiter:
        raise PermissionDeniedError("Only job seekers have applications")
    return store.list_applications_for_applicant(ctx.user_id)


def list_applications_for_recruiter(ctx: UserContext, store: Store) -> list[ApplicationDetail]:
    if not ctx.is_recruiter:
        raise PermissionDeniedError("Only recruiters can review applications")
    return store.list_applications_for_recruiter(ctx.user_id)


def update_application_status(
    ctx: UserContext, application_id: str, status: str, store: Store
) -> Application:
    application = store.get_application(application_id)
    if application is None:
        raise NotFoundError(f"Application {application_id} not found")
    get_owned_job(ctx, application.job_id, store)

    store.update_application_status(application_id, status)
    logger.info("Application %s status %s -> %s", application_id, application.status, status)
    return application.model_copy(update={"status": status})


def get_application_detail(
    ctx: UserContext, application_id: str, store: Store
) -> ApplicationDetail:
    """One application with its derived records, for the recruiter owning the job."""
    application = store.get_application(application_id)
    if application is None:
        raise NotFoundError(f"Application {application_id} not found")
    get_owned_job(ctx, application.job_id, store)

    detail = store.get_application_detail(application_id)
    if detail is None:
        raise NotFoundError(f"Application {application_id} not found")
    return detail
