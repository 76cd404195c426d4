"""Generation orchestrator — runs the task DAG with live per-task status.

Root tasks are dispatched together; a dependent task is dispatched the moment
its last upstream succeeds. A failing task never cancels its siblings: the
run waits for everything already in flight, then raises ``RunFailure`` with
the first error, every task record and the artifacts that did get produced.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel

from .backend import GenerationBackend
from .errors import RunFailure
from .models.params import ProjectParameters
from .models.project import GenerationResult
from .tasks import GenerationTask, TaskGraph

logger = logging.getLogger(__name__)


class TaskStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    ERROR = "error"


TaskObserver = Callable[[str, TaskStatus, str | None], None]


@dataclass
class TaskRecord:
    """Mutable status of one task within one run."""

    name: str
    label: str
    status: TaskStatus = TaskStatus.PENDING
    error: str | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None

    @property
    def terminal(self) -> bool:
        return self.status in (TaskStatus.SUCCESS, TaskStatus.ERROR)

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "label": self.label,
            "status": self.status.value,
            "error": self.error,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
        }


class _Run:
    """State of a single ``run()`` call. Only touched from the event loop thread."""

    def __init__(self, graph: TaskGraph, on_task_update: TaskObserver | None) -> None:
        self.run_id = uuid.uuid4().hex[:12]
        self.records = {task.name: TaskRecord(task.name, task.label) for task in graph}
        self.outputs: dict[str, BaseModel] = {}
        self.artifacts: dict[str, str] = {}
        self.first_failure: tuple[str, str] | None = None
        self._observer = on_task_update

    def transition(self, name: str, status: TaskStatus, error: str | None = None) -> None:
        rec = self.records[name]
        rec.status = status
        rec.error = error
        now = datetime.now(timezone.utc)
        if status is TaskStatus.RUNNING:
            rec.started_at = now
        elif rec.terminal:
            rec.finished_at = now
        self.notify(name, status, error)

    def notify(self, name: str, status: TaskStatus, error: str | None = None) -> None:
        if self._observer is None:
            return
        try:
            self._observer(name, status, error)
        except Exception:
            logger.warning("Task observer raised for %s -> %s", name, status.value, exc_info=True)


class GenerationOrchestrator:
    """Executes a ``TaskGraph`` against a ``GenerationBackend``.

    Stateless between runs: every ``run()`` gets fresh task records, a fresh
    artifact bundle and a new run id.
    """

    def __init__(self, graph: TaskGraph, backend: GenerationBackend) -> None:
        self.graph = graph
        self.backend = backend

    async def run(
        self,
        params: ProjectParameters,
        on_task_update: TaskObserver | None = None,
    ) -> GenerationResult:
        """Run every task in the graph and return the merged artifacts.

        Args:
            params: Already-validated project parameters.
            on_task_update: Optional ``(task_name, status, error)`` callback,
                invoked synchronously on every status transition.

        Returns:
            GenerationResult with every task's output fields.

        Raises:
            RunFailure: At least one task ended in ``error``. Dependents of a
                failed task stay ``pending``.
        """
        state = _Run(self.graph, on_task_update)
        started = time.monotonic()
        logger.info("Run %s: starting %d task(s)", state.run_id, len(self.graph))

        for name in state.records:
            state.notify(name, TaskStatus.PENDING)

        in_flight: dict[asyncio.Task, str] = {}

        def dispatch(task: GenerationTask) -> None:
            state.transition(task.name, TaskStatus.RUNNING)
            upstream = {dep: state.outputs[dep] for dep in task.depends_on}
            logger.debug("Run %s: dispatching %s", state.run_id, task.name)
            in_flight[asyncio.create_task(task.invoke(self.backend, params, upstream))] = task.name

        try:
            for task in self.graph.roots():
                dispatch(task)

            while in_flight:
                done, _ = await asyncio.wait(in_flight, return_when=asyncio.FIRST_COMPLETED)
                for fut in done:
                    name = in_flight.pop(fut)
                    exc = fut.exception()
                    if exc is not None:
                        if not isinstance(exc, Exception):
                            raise exc
                        message = str(exc) or type(exc).__name__
                        logger.warning("Run %s: task %s failed: %s", state.run_id, name, message)
                        if state.first_failure is None:
                            state.first_failure = (name, message)
                        state.transition(name, TaskStatus.ERROR, message)
                        continue

                    output = fut.result()
                    state.outputs[name] = output
                    state.artifacts.update(output.model_dump(mode="json"))
                    state.transition(name, TaskStatus.SUCCESS)
                    logger.info("Run %s: task %s succeeded", state.run_id, name)

                    for child in self.graph.dependents(name):
                        if state.records[child.name].status is not TaskStatus.PENDING:
                            continue
                        if all(state.records[dep].status is TaskStatus.SUCCESS for dep in child.depends_on):
                            dispatch(child)
        finally:
            for fut in in_flight:
                fut.cancel()
            if in_flight:
                await asyncio.gather(*in_flight, return_exceptions=True)

        duration = round(time.monotonic() - started, 3)
        if state.first_failure is not None:
            task_name, message = state.first_failure
            logger.info(
                "Run %s: failed after %.1fs (first failure: %s)", state.run_id, duration, task_name,
            )
            raise RunFailure(
                run_id=state.run_id,
                task_name=task_name,
                message=message,
                tasks=state.records,
                partial_artifacts=state.artifacts,
            )

        logger.info("Run %s: completed %d task(s) in %.1fs", state.run_id, len(state.records), duration)
        return GenerationResult(
            run_id=state.run_id,
            artifacts=state.artifacts,
            tasks={name: rec.as_dict() for name, rec in state.records.items()},
            duration_seconds=duration,
        )
