"""Sequential workflow runner with per-step rollback.

A workflow is an ordered list of steps sharing a context dict:

  step_1.action → step_2.action → ... → done
        on failure of step_n: step_{n-1}.rollback → ... → step_1.rollback

Each action receives the context and its return value is stored in the
context under the step name, so later steps (and rollbacks) can read it.
Best-effort steps log a warning on failure and the workflow carries on.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import structlog

logger = structlog.get_logger()

StepFn = Callable[[dict[str, Any]], Awaitable[Any]]


@dataclass
class WorkflowStep:
    name: str
    action: StepFn
    rollback: StepFn | None = None
    best_effort: bool = False


class WorkflowFailed(Exception):
    """Raised when a required step fails, after rollbacks have run."""

    def __init__(
        self,
        workflow: str,
        step: str,
        error: BaseException,
        rollback_errors: dict[str, BaseException] | None = None,
    ):
        super().__init__(f"{workflow}: step '{step}' failed: {error}")
        self.workflow = workflow
        self.step = step
        self.error = error
        self.rollback_errors = rollback_errors or {}

    @property
    def rolled_back(self) -> bool:
        return not self.rollback_errors


@dataclass
class Workflow:
    name: str
    steps: list[WorkflowStep]

    async def run(self, context: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run every step in order and return the populated context."""
        ctx: dict[str, Any] = dict(context or {})
        completed: list[WorkflowStep] = []

        for step in self.steps:
            try:
                ctx[step.name] = await step.action(ctx)
            except Exception as e:
                if step.best_effort:
                    logger.warning(
                        "workflow_step_skipped",
                        workflow=self.name, step=step.name, error=str(e),
                    )
                    ctx[step.name] = None
                    continue

                logger.error(
                    "workflow_step_failed",
                    workflow=self.name, step=step.name, error=str(e),
                )
                rollback_errors = await self._rollback(completed, ctx)
                raise WorkflowFailed(
                    workflow=self.name,
                    step=step.name,
                    error=e,
                    rollback_errors=rollback_errors,
                ) from e
            completed.append(step)

        return ctx

    async def _rollback(
        self, completed: list[WorkflowStep], ctx: dict[str, Any]
    ) -> dict[str, BaseException]:
        errors: dict[str, BaseException] = {}
        for step in reversed(completed):
            if step.rollback is None:
                continue
            try:
                await step.rollback(ctx)
                logger.info("workflow_step_rolled_back", workflow=self.name, step=step.name)
            except Exception as e:
                logger.error(
                    "workflow_rollback_failed",
                    workflow=self.name, step=step.name, error=str(e),
                )
                errors[step.name] = e
        return errors
