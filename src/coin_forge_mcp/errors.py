"""Structured error handling — failure types, classification, and the tool error model."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ValidationError

if TYPE_CHECKING:
    from .orchestrator import TaskRecord


class ErrorCategory(str, Enum):
    """Categories of errors for diagnostics."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    TASK_FAILED = "TASK_FAILED"
    RUN_FAILED = "RUN_FAILED"
    SCHEMA_VALIDATION_FAILED = "SCHEMA_VALIDATION_FAILED"
    EMPTY_MEDIA = "EMPTY_MEDIA"
    API_PERMISSION_DENIED = "API_PERMISSION_DENIED"
    API_QUOTA_EXCEEDED = "API_QUOTA_EXCEEDED"
    API_INVALID_ARGUMENT = "API_INVALID_ARGUMENT"
    API_NOT_FOUND = "API_NOT_FOUND"
    NETWORK_ERROR = "NETWORK_ERROR"
    PROJECT_NOT_FOUND = "PROJECT_NOT_FOUND"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    UNKNOWN = "UNKNOWN"


class GenerationFailure(Exception):
    """A single AI-backed generation call did not yield a usable, schema-valid output."""

    def __init__(self, template: str, reason: str, *, category: ErrorCategory = ErrorCategory.TASK_FAILED) -> None:
        self.template = template
        self.reason = reason
        self.category = category
        super().__init__(f"{template}: {reason}")


class RunFailure(Exception):
    """Terminal outcome of a generation run in which at least one task failed.

    Carries the first failure plus every task record and whatever artifacts the
    successful tasks produced, so callers can show what was generated anyway.
    """

    def __init__(
        self,
        *,
        run_id: str,
        task_name: str,
        message: str,
        tasks: dict[str, TaskRecord],
        partial_artifacts: dict[str, str],
    ) -> None:
        self.run_id = run_id
        self.task_name = task_name
        self.message = message
        self.tasks = tasks
        self.partial_artifacts = partial_artifacts
        super().__init__(f"Failed at step: {task_name} — {message}")

    @property
    def failed_tasks(self) -> list[str]:
        """Names of every task whose terminal status is ``error``."""
        from .orchestrator import TaskStatus

        return [name for name, rec in self.tasks.items() if rec.status is TaskStatus.ERROR]


class ProjectNotFoundError(LookupError):
    """No project with this id exists for this owner."""


class SessionNotFoundError(LookupError):
    """Chat session id is unknown or has expired."""


class ToolError(BaseModel):
    """Structured error returned from any tool."""

    error: str
    category: str
    hint: str
    retryable: bool = False
    retry_after_seconds: int | None = None


def categorize_error(error: Exception) -> tuple[ErrorCategory, str]:
    """Map an exception to an ErrorCategory + human-readable hint."""
    if isinstance(error, ValidationError):
        return (
            ErrorCategory.VALIDATION_FAILED,
            "Input failed validation — fix the listed fields and resubmit",
        )
    if isinstance(error, RunFailure):
        return (
            ErrorCategory.RUN_FAILED,
            f"Step '{error.task_name}' failed — retry the whole generation run",
        )
    if isinstance(error, ProjectNotFoundError):
        return (
            ErrorCategory.PROJECT_NOT_FOUND,
            "Project not found for this user — check project_list for valid ids",
        )
    if isinstance(error, SessionNotFoundError):
        return (
            ErrorCategory.SESSION_NOT_FOUND,
            "Chat session expired or unknown — start a new one with chat_create_session",
        )
    if isinstance(error, PermissionError):
        return (ErrorCategory.PERMISSION_DENIED, str(error))
    if isinstance(error, (TimeoutError, ConnectionError)):
        return (
            ErrorCategory.NETWORK_ERROR,
            "Request timed out or connection failed — try again",
        )

    s = str(error).lower()

    if "403" in s or "permission_denied" in s or "api key not valid" in s:
        return (
            ErrorCategory.API_PERMISSION_DENIED,
            "Gemini rejected the API key — check GEMINI_API_KEY and model access",
        )
    if "429" in s or "quota" in s or "resource_exhausted" in s:
        return (
            ErrorCategory.API_QUOTA_EXCEEDED,
            "Rate limit hit — wait and retry, or switch models with infra_configure(preset='stable')",
        )
    if "404" in s and "model" in s:
        return (
            ErrorCategory.API_NOT_FOUND,
            "Model not found — check GEMINI_MODEL / GEMINI_IMAGE_MODEL / GEMINI_TTS_MODEL",
        )
    if "400" in s or "invalid thinking level" in s or "invalid_argument" in s:
        return (
            ErrorCategory.API_INVALID_ARGUMENT,
            "Bad request — check input format and configuration values",
        )
    if "timeout" in s or "timed out" in s or "connection" in s:
        return (
            ErrorCategory.NETWORK_ERROR,
            "Request timed out or connection failed — try again",
        )
    if isinstance(error, GenerationFailure):
        return (error.category, f"Generation step '{error.template}' failed — retry the run")

    return (ErrorCategory.UNKNOWN, str(error))


def make_tool_error(error: Exception) -> dict:
    """Create a serialisable ToolError dict from an exception."""
    cat, hint = categorize_error(error)
    retryable = cat in {
        ErrorCategory.API_QUOTA_EXCEEDED,
        ErrorCategory.NETWORK_ERROR,
        ErrorCategory.RUN_FAILED,
        ErrorCategory.TASK_FAILED,
        ErrorCategory.SCHEMA_VALIDATION_FAILED,
        ErrorCategory.EMPTY_MEDIA,
    }
    return ToolError(
        error=str(error),
        category=cat.value,
        hint=hint,
        retryable=retryable,
        retry_after_seconds=60 if cat == ErrorCategory.API_QUOTA_EXCEEDED else None,
    ).model_dump(mode="json")


def make_run_failure(failure: RunFailure) -> dict:
    """Render a RunFailure as a tool error that still exposes per-step outcomes."""
    payload = make_tool_error(failure)
    payload.update(
        run_id=failure.run_id,
        failed_task=failure.task_name,
        failed_tasks=failure.failed_tasks,
        tasks={name: rec.as_dict() for name, rec in failure.tasks.items()},
        partial_artifacts=failure.partial_artifacts,
    )
    return payload
