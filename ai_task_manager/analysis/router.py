"""
AI Task Manager - Process Task Router

Turns natural-language input into an analyzed task bundle without
persisting anything.
"""

import logging
from typing import Annotated, Callable, Union

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from ai_task_manager.errors import InputValidationError
from ai_task_manager.llm.backend import CompletionBackend, get_completion_backend
from ai_task_manager.analysis.schemas import ErrorResponse, ProcessedTask, ProcessTaskRequest
from ai_task_manager.analysis.service import TaskAnalysisService

logger = logging.getLogger(__name__)


def describe_validation_error(exc: RequestValidationError) -> str:
    """One-line message for the first problem in a rejected request body."""
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    return f"Invalid request body: {field}: {message}" if field else f"Invalid request body: {message}"


class ErrorBodyRoute(APIRoute):
    """Route that reports request validation failures as 400 with an `error` body."""

    def get_route_handler(self) -> Callable:
        handler = super().get_route_handler()

        async def route_handler(request: Request) -> Response:
            try:
                return await handler(request)
            except RequestValidationError as e:
                error = describe_validation_error(e)
                logger.warning(f"Rejected request to {request.url.path}: {error}")
                return JSONResponse(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    content={"error": error},
                )

        return route_handler


router = APIRouter(tags=["Analysis"], route_class=ErrorBodyRoute)


async def get_analysis_service(
    backend: Annotated[CompletionBackend, Depends(get_completion_backend)]
) -> TaskAnalysisService:
    """Dependency to get analysis service instance."""
    return TaskAnalysisService(backend)


@router.post(
    "/process-task",
    response_model=ProcessedTask,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Analyze a natural-language task",
)
async def process_task(
    request: ProcessTaskRequest,
    service: Annotated[TaskAnalysisService, Depends(get_analysis_service)],
) -> Union[ProcessedTask, JSONResponse]:
    """
    Detect language, translate, analyze and redact a task description.

    Backend failures degrade to fallback data; only empty input or an
    unexpected error produce an error response.
    """
    try:
        return await service.process(request.input, request.current_date)
    except InputValidationError as e:
        logger.warning(f"Rejected task input: {e.message}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": e.message},
        )
    except Exception as e:
        logger.error(f"Unexpected error processing task: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(e) or "Unknown error"},
        )
