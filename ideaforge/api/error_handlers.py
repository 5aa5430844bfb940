"""Error handlers for consistent API error responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ideaforge.ai.exceptions import (
    ArtifactNotFound,
    FixtureNotFound,
    JobNotFound,
    ProviderOutputMalformed,
    ProviderUnsupportedOperation,
    SectionValidationFailed,
)
from ideaforge.ai.providers.llm import PromptNotFound
from ideaforge.api.exceptions import (
    APIError,
    InternalError,
    NotFoundError,
    OutputValidationError,
    ProviderError,
    UnsupportedOperationError,
)
from ideaforge.llm.models import LLMException
from ideaforge.persistence.repositories import TransactionFailure

logger = logging.getLogger(__name__)


def to_api_error(exc: Exception) -> APIError:
    """Map a pipeline exception to the API error it is reported as."""
    if isinstance(exc, APIError):
        return exc
    if isinstance(exc, SectionValidationFailed):
        return OutputValidationError(str(exc), section=exc.label, issues=exc.issues)
    if isinstance(exc, ProviderUnsupportedOperation):
        return UnsupportedOperationError(
            str(exc), details={"provider": exc.provider, "operation": exc.operation}
        )
    if isinstance(exc, ProviderOutputMalformed):
        return ProviderError(
            str(exc),
            error_code="PROVIDER_OUTPUT_MALFORMED",
            details={"kind": exc.kind, "sample": exc.sample},
        )
    if isinstance(exc, LLMException):
        return ProviderError(
            f"AI provider request failed: {exc.error.message}",
            details={"error_type": exc.error.error_type},
        )
    if isinstance(exc, (FixtureNotFound, PromptNotFound)):
        return ProviderError(str(exc))
    if isinstance(exc, ArtifactNotFound):
        details = {"id": exc.artifact_id} if exc.artifact_id else {"projectId": exc.project_id}
        return NotFoundError("artifact", str(exc), details=details)
    if isinstance(exc, JobNotFound):
        return NotFoundError("job", "Job not found", details={"jobId": exc.job_id})
    # TransactionFailure: details stay in the server log
    return InternalError()


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle custom API errors."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.to_dict(),
        },
    )


async def pipeline_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle exceptions raised by the generation pipeline."""
    api_error = to_api_error(exc)
    if api_error.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {api_error.error_code}")
    return await api_error_handler(request, api_error)


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Handle FastAPI validation errors."""
    errors = []
    for error in exc.errors():
        errors.append({
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        })

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": {
                "error_code": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": {"errors": errors},
            },
        },
    )


PIPELINE_EXCEPTIONS = (
    SectionValidationFailed,
    ProviderUnsupportedOperation,
    ProviderOutputMalformed,
    LLMException,
    FixtureNotFound,
    PromptNotFound,
    ArtifactNotFound,
    JobNotFound,
    TransactionFailure,
)


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers with the app."""
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    for exc_class in PIPELINE_EXCEPTIONS:
        app.add_exception_handler(exc_class, pipeline_error_handler)
