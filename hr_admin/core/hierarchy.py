"""
Manager hierarchy guard.

Keeps the employee -> manager relation an acyclic forest. The guard only
reads the relation through a lookup callable; the caller writes the new
manager pointer after a successful validation, inside the same transaction.
"""

import logging
from typing import Any, Callable, List, Optional

from hr_admin.core.errors import (
    ConflictError,
    CycleError,
    NotFoundError,
    Result,
    SelfAssignmentError,
)

logger = logging.getLogger(__name__)

ManagerLookup = Callable[[Any], Optional[Any]]


def ancestor_chain(employee_id: Any, manager_lookup: ManagerLookup, max_nodes: Optional[int] = None) -> List[Any]:
    """
    Managers of ``employee_id`` from the direct manager up to the root.

    Stops at a repeated node (or after ``max_nodes`` steps), so a relation that
    is already corrupt still yields a finite chain. ``manager_lookup`` raising
    ``LookupError`` propagates to the caller.
    """
    chain: List[Any] = []
    seen = {employee_id}
    current = manager_lookup(employee_id)
    while current is not None and current not in seen:
        if max_nodes is not None and len(chain) >= max_nodes:
            break
        chain.append(current)
        seen.add(current)
        current = manager_lookup(current)
    return chain


def validate_assignment(
    employee_id: Any,
    candidate_manager_id: Optional[Any],
    manager_lookup: ManagerLookup,
    max_nodes: Optional[int] = None,
) -> Result[None]:
    """
    Check that making ``candidate_manager_id`` the manager of ``employee_id``
    keeps the relation acyclic.

    Removing a manager (``None``) is always valid.
    """
    if candidate_manager_id is None:
        return Result.success()

    if candidate_manager_id == employee_id:
        return Result.failure(SelfAssignmentError("Employee cannot be their own manager"))

    visited = set()
    current = candidate_manager_id
    while current is not None:
        if current == employee_id:
            return Result.failure(
                CycleError("Assignment would create a circular management chain")
            )
        if current in visited:
            # pre-existing loop above the candidate that does not include employee_id
            logger.warning("Manager chain above %s already contains a cycle at %s", candidate_manager_id, current)
            break
        if max_nodes is not None and len(visited) >= max_nodes:
            logger.warning("Manager chain above %s exceeds %d nodes", candidate_manager_id, max_nodes)
            break
        visited.add(current)
        try:
            current = manager_lookup(current)
        except LookupError:
            return Result.failure(NotFoundError(f"Employee not found: {current}"))

    return Result.success()


def can_delete(employee_id: Any, active_child_count: int) -> bool:
    return active_child_count <= 0


def check_delete(employee_id: Any, active_child_count: int) -> Result[None]:
    if can_delete(employee_id, active_child_count):
        return Result.success()
    return Result.failure(
        ConflictError(
            f"Cannot delete manager with {active_child_count} active subordinate(s). "
            "Reassign subordinates first."
        )
    )
