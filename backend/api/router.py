from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_current_user, get_github_client, get_store, get_user_id
from config import settings
from models.context import UserContext
from models.requests import (
    ApplicationRequest,
    ApplicationStatusRequest,
    JobCreateRequest,
    JobStatusRequest,
    ProfileRequest,
)
from models.responses import ApplicationDetail, ApplicationSummary
from models.schemas import Application, Job, Profile
from services import application_service, job_service, pdf_parser, profile_service
from services.errors import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    PersistenceError,
    ServiceError,
)
from services.github_client import GitHubClient
from services.store import Store

router = APIRouter()
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

_STATUS_CODES: dict[type[ServiceError], int] = {
    NotFoundError: 404,
    PermissionDeniedError: 403,
    ConflictError: 409,
    PersistenceError: 500,
}


def _to_http(error: ServiceError) -> HTTPException:
    return HTTPException(status_code=_STATUS_CODES.get(type(error), 400), detail=str(error))


# Routes that only touch SQLite are plain ``def`` so FastAPI runs them in its
# threadpool; the submit routes are async because they await the GitHub lookup.


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "github_api_url": settings.github_api_url,
    }


# --- Profiles ---


@router.put("/profiles/me", response_model=Profile)
def put_profile(
    body: ProfileRequest,
    user_id: str = Depends(get_user_id),
    store: Store = Depends(get_store),
):
    if body.role == "recruiter" and not (body.company_name or "").strip():
        raise HTTPException(status_code=400, detail="Recruiters must provide a company name")
    try:
        return profile_service.save_profile(user_id, body, store)
    except ServiceError as e:
        raise _to_http(e)


@router.get("/profiles/me", response_model=Profile)
def get_profile(user: UserContext = Depends(get_current_user)):
    return user.profile


# --- Jobs ---


@router.get("/jobs", response_model=list[Job])
def list_jobs(
    user: UserContext = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    return job_service.list_open_jobs(store)


@router.post("/jobs", response_model=Job, status_code=201)
def create_job(
    body: JobCreateRequest,
    user: UserContext = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    try:
        return job_service.create_job(user, body, store)
    except ServiceError as e:
        raise _to_http(e)


@router.get("/jobs/mine", response_model=list[Job])
def list_my_jobs(
    user: UserContext = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    try:
        return job_service.list_recruiter_jobs(user, store)
    except ServiceError as e:
        raise _to_http(e)


@router.patch("/jobs/{job_id}/status", response_model=Job)
def update_job_status(
    job_id: str,
    body: JobStatusRequest,
    user: UserContext = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    try:
        return job_service.update_job_status(user, job_id, body.status, store)
    except ServiceError as e:
        raise _to_http(e)


# --- Applications ---


@router.post("/jobs/{job_id}/applications", response_model=ApplicationDetail, status_code=201)
@limiter.limit(settings.submit_rate_limit)
async def submit_application(
    request: Request,
    job_id: str,
    body: ApplicationRequest,
    user: UserContext = Depends(get_current_user),
    store: Store = Depends(get_store),
    github: GitHubClient = Depends(get_github_client),
):
    try:
        return await application_service.submit_application(user, job_id, body, store, github)
    except ServiceError as e:
        raise _to_http(e)


@router.post(
    "/jobs/{job_id}/applications/upload",
    response_model=ApplicationDetail,
    status_code=201,
)
@limiter.limit(settings.submit_rate_limit)
async def submit_application_upload(
    request: Request,
    job_id: str,
    resume_file: UploadFile = File(...),
    cover_letter: str | None = Form(None),
    github_username: str | None = Form(None),
    linkedin_url: str | None = Form(None),
    user: UserContext = Depends(get_current_user),
    store: Store = Depends(get_store),
    github: GitHubClient = Depends(get_github_client),
):
    # Validate file type
    if not resume_file.filename or not resume_file.filename.lower().endswith(".pdf"):
        raise HTTPException(status_code=400, detail="Only PDF files are accepted")

    # Read and validate size
    content = await resume_file.read()
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Max size: {settings.max_upload_size_mb}MB",
        )

    # Extract text from PDF
    try:
        resume_text = await run_in_threadpool(pdf_parser.extract_text, content)
    except Exception:
        raise HTTPException(status_code=400, detail="Could not parse PDF file")

    if not resume_text.strip():
        raise HTTPException(status_code=400, detail="No text could be extracted from PDF")

    try:
        body = ApplicationRequest(
            resume_text=resume_text,
            cover_letter=cover_letter,
            github_username=github_username,
            linkedin_url=linkedin_url,
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=e.errors(include_url=False, include_context=False, include_input=False),
        )

    try:
        return await application_service.submit_application(user, job_id, body, store, github)
    except ServiceError as e:
        raise _to_http(e)


@router.get("/applications/mine", response_model=list[ApplicationSummary])
def list_my_applications(
    user: UserContext = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    try:
        return application_service.list_applications_for_applicant(user, store)
    except ServiceError as e:
        raise _to_http(e)


@router.get("/applications/{application_id}", response_model=ApplicationDetail)
def get_application(
    application_id: str,
    user: UserContext = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    try:
        return application_service.get_application_detail(user, application_id, store)
    except ServiceError as e:
        raise _to_http(e)


@router.get("/recruiter/applications", response_model=list[ApplicationDetail])
def list_recruiter_applications(
    user: UserContext = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    try:
        return application_service.list_applications_for_recruiter(user, store)
    except ServiceError as e:
        raise _to_http(e)


@router.patch("/applications/{application_id}/status", response_model=Application)
def update_application_status(
    application_id: str,
    body: ApplicationStatusRequest,
    user: UserContext = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    try:
        return application_service.update_application_status(
            user, application_id, body.status, store
        )
    except ServiceError as e:
        raise _to_http(e)
