"""
Lifecycle transition engine.

Reacts to a single observation of the target instance (or its absence) and
issues at most one state-changing call. It keeps no history and never
waits for the provider to finish the transition.

    start:   absent -> InstanceNotFoundError
             ACTIVE -> nothing to do
             STOPPED -> start
             other -> UnexpectedStateError
    stop:    absent -> nothing to do
             any status -> delete
    shelve:  absent -> nothing to do
             ACTIVE, SHUTOFF, STOPPED -> shelve
             other -> nothing to do, with a diagnostic
    create:  always create
"""

from __future__ import annotations

from typing import NamedTuple

from instancectl.base.async_support import AsyncMixin
from instancectl.base.compute import ComputeBlueprint
from instancectl.base.exceptions import InstanceNotFoundError, UnexpectedStateError
from instancectl.base.logger import BoundLogger, ic_logger
from instancectl.base.models import Action, CreateRequest, Instance, TransitionOutcome

ACTIVE = "ACTIVE"
STOPPED = "STOPPED"
SHUTOFF = "SHUTOFF"

SHELVABLE_STATUSES = frozenset({ACTIVE, SHUTOFF, STOPPED})


class Decision(NamedTuple):
    action: Action
    detail: str


def decide(operation: str, instance: Instance | None, name: str = "") -> Decision:
    """Choose the call to issue for *operation* given the observed instance.

    Args:
        operation: ``create``, ``start``, ``stop`` or ``shelve``.
        instance: The instance as just observed, or None if absent.
        name: Instance name, used in diagnostics when it is absent.

    Raises:
        InstanceNotFoundError: Starting an instance that does not exist.
        UnexpectedStateError: Starting an instance neither ACTIVE nor STOPPED.
        ValueError: Unknown operation.
    """
    if operation == "create":
        return Decision(Action.CREATE, f"Creating instance {name}")

    if operation == "start":
        if instance is None:
            raise InstanceNotFoundError(name)
        if instance.status == ACTIVE:
            return Decision(Action.NONE, "Instance is already running. Nothing to do.")
        if instance.status == STOPPED:
            return Decision(Action.START, "Starting instance")
        raise UnexpectedStateError(instance.status, instance.id)

    if operation == "stop":
        if instance is None:
            return Decision(Action.NONE, f"Instance {name} not found.")
        return Decision(Action.DELETE, f"Deleting instance {instance.name} ({instance.id})")

    if operation == "shelve":
        if instance is None:
            return Decision(Action.NONE, f"Instance {name} not found.")
        if instance.status in SHELVABLE_STATUSES:
            return Decision(Action.SHELVE, f"Shelving instance {instance.name} ({instance.id})")
        return Decision(
            Action.NONE,
            f"Instance {instance.name} is {instance.status}, which cannot be shelved.",
        )

    raise ValueError(f"Unknown operation: {operation}")


class LifecycleEngine(AsyncMixin):
    """Applies :func:`decide` through a compute service.

    Attributes:
        compute: Service the transition call is issued through.
        log: Context-bound logger; one is bound per call when omitted.
    """

    def __init__(self, compute: ComputeBlueprint, log: BoundLogger | None = None) -> None:
        self.compute = compute
        self.log = log

    def apply(
        self,
        operation: str,
        project: str,
        instance: Instance | None,
        name: str,
        request: CreateRequest | None = None,
    ) -> TransitionOutcome:
        """Decide and issue at most one transition call.

        Args:
            operation: Requested operation.
            project: Project the instance lives in.
            instance: Freshly observed instance, or None if absent.
            name: Target instance name.
            request: Create body, required when *operation* is ``create``.

        Returns:
            What was decided and whether a call was issued.
        """
        decision = decide(operation, instance, name)
        log = self.log or ic_logger.bind(project=project, instance=name, operation=operation)
        instance_id = instance.id if instance else None

        if decision.action is Action.NONE:
            if instance is not None and operation == "shelve":
                log.warning(decision.detail)
            else:
                log.info(decision.detail)
            return TransitionOutcome(
                operation=operation,
                action=decision.action,
                instance_id=instance_id,
                detail=decision.detail,
            )

        log.info(f"{decision.detail}...")
        if decision.action is Action.CREATE:
            if request is None:
                raise ValueError("A create request is required to create an instance")
            created = self.compute.create_instance(project, request)
            instance_id = created.id
        elif decision.action is Action.START:
            self.compute.start_instance(project, instance_id)  # type: ignore[arg-type]
        elif decision.action is Action.DELETE:
            self.compute.delete_instance(project, instance_id)  # type: ignore[arg-type]
        elif decision.action is Action.SHELVE:
            self.compute.shelve_instance(project, instance_id)  # type: ignore[arg-type]
        log.info(f"Instance {decision.action.value} initiated successfully")

        return TransitionOutcome(
            operation=operation,
            action=decision.action,
            instance_id=instance_id,
            issued=True,
            detail=decision.detail,
        )
