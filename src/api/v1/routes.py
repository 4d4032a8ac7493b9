"""
API v1 routes.

User endpoints register and log in, each returning a freshly issued bearer
credential. Job endpoints browse the external catalog and require a valid
bearer token. Domain errors are translated to HTTP responses by the
exception handlers registered in src.api.main.

Handlers are plain functions: bcrypt, psycopg and the catalog client all
block, so FastAPI runs them in its threadpool.
"""

from fastapi import APIRouter, Depends, status

from src.adapters.jobs import HttpJobCatalog
from src.api.dependencies import (
    get_authentication_service,
    get_authenticated_user_id,
    get_credential_issuer,
    get_job_catalog,
    get_registration_service,
)
from src.api.models import (
    ErrorResponse,
    JobResponse,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    ValidationErrorResponse,
)
from src.domain.authentication import AuthenticationService
from src.domain.credentials import CredentialIssuer
from src.domain.ports import AuthenticationRequest, Job, JobsListOptions, RegistrationRequest
from src.domain.registration import RegistrationService

user_router = APIRouter(prefix="/user", tags=["user"])
job_router = APIRouter(
    prefix="/job",
    tags=["job"],
    dependencies=[Depends(get_authenticated_user_id)],
    responses={401: {"model": ErrorResponse, "description": "Invalid or expired token"}},
)


@user_router.post(
    "/registration",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    responses={
        422: {"model": ValidationErrorResponse, "description": "Validation rule violated"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Register a new user",
    description="Create an account from username, password and password confirmation. "
    "Returns an access token for the new user.",
)
def register(
    request_data: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
    issuer: CredentialIssuer = Depends(get_credential_issuer),
) -> TokenResponse:
    """
    Register a new user and issue an access token.

    - **username**: 3-15 alphanumeric characters, must be unused
    - **password**: 6 characters to 72 bytes
    - **password_confirmation**: Must equal password
    """
    user = service.register_user(
        RegistrationRequest(
            username=request_data.username,
            password=request_data.password,
            password_confirmation=request_data.password_confirmation,
        )
    )
    credential = issuer.issue(user)
    return TokenResponse(access_token=credential.access_token, expires_in=credential.expires_in)


@user_router.post(
    "/login",
    response_model=TokenResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Invalid username or password"},
        422: {"model": ValidationErrorResponse, "description": "Validation rule violated"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Authenticate a user",
    description="Exchange username and password for an access token.",
)
def login(
    request_data: LoginRequest,
    service: AuthenticationService = Depends(get_authentication_service),
    issuer: CredentialIssuer = Depends(get_credential_issuer),
) -> TokenResponse:
    """
    Authenticate a user and issue an access token.

    Unknown usernames and wrong passwords produce the same 401 response.
    """
    user = service.authenticate_user(
        AuthenticationRequest(username=request_data.username, password=request_data.password)
    )
    credential = issuer.issue(user)
    return TokenResponse(access_token=credential.access_token, expires_in=credential.expires_in)


@user_router.get(
    "/me",
    responses={401: {"model": ErrorResponse, "description": "Invalid or expired token"}},
    summary="Identify the bearer",
    description="Return the user id bound to the presented access token.",
)
def me(user_id: int = Depends(get_authenticated_user_id)) -> dict[str, int]:
    """Return the id of the authenticated user."""
    return {"id": user_id}


def _job_response(job: Job) -> JobResponse:
    return JobResponse(
        id=str(job.id),
        type=job.type,
        url=job.url,
        created_at=job.created_at,
        company=job.company,
        company_url=job.company_url,
        location=job.location,
        title=job.title,
        description=job.description,
        how_to_apply=job.how_to_apply,
        company_logo=job.company_logo,
    )


@job_router.get(
    "",
    response_model=list[JobResponse],
    responses={500: {"model": ErrorResponse, "description": "Job catalog unavailable"}},
    summary="List jobs",
    description="Search the job catalog. Filters left empty are not applied.",
)
def list_jobs(
    description: str = "",
    location: str = "",
    full_time: bool = False,
    page: int = 0,
    catalog: HttpJobCatalog = Depends(get_job_catalog),
) -> list[JobResponse]:
    """
    List catalog positions.

    - **description**: Free-text match on title and description
    - **location**: Free-text match on location
    - **full_time**: Only full-time positions when true
    - **page**: 1-based page; values below 1 request the first page
    """
    options = JobsListOptions(
        description=description,
        location=location,
        full_time=full_time,
        page=page,
    )
    return [_job_response(job) for job in catalog.list_jobs(options)]


@job_router.get(
    "/{job_id}",
    response_model=JobResponse,
    responses={
        422: {"model": ValidationErrorResponse, "description": "job_id is not a UUID"},
        500: {"model": ErrorResponse, "description": "Job catalog unavailable"},
    },
    summary="Get a job",
    description="Fetch one catalog position by its UUID.",
)
def get_job(job_id: str, catalog: HttpJobCatalog = Depends(get_job_catalog)) -> JobResponse:
    """Fetch a single catalog position."""
    return _job_response(catalog.get_job_by_id(job_id))


router = APIRouter()
router.include_router(user_router)
router.include_router(job_router)
