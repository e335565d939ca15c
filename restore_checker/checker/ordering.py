"""Dependency ordering of a snapshot's projects."""

from collections import deque
from typing import List

from ..schemas.models import ProjectDescriptor, SolutionGraphSnapshot
from ..utils.identifiers import ProjectIdMap, ProjectIdSet
from ..utils.logging import get_logger

logger = get_logger("dependency-orderer")


def sort_by_dependency_order(snapshot: SolutionGraphSnapshot) -> List[ProjectDescriptor]:
    """
    Order projects so that every project comes after the projects it references.

    Kahn's algorithm seeded in snapshot order, so the result is stable for a
    given snapshot. References to projects outside the snapshot and references
    of a project to itself are ignored. Cyclic references are not expected;
    projects the queue never releases are placed by a depth-first walk over
    what is left, so a project that depends on a cycle still follows it.
    """
    comparer = snapshot.comparer
    in_degree = ProjectIdMap(comparer, ((p.project_id, 0) for p in snapshot))
    dependents = ProjectIdMap(comparer, ((p.project_id, []) for p in snapshot))

    for project in snapshot:
        for reference_id in project.project_reference_ids(comparer):
            if reference_id not in in_degree or comparer.equals(reference_id, project.project_id):
                continue
            dependents[reference_id].append(project.project_id)
            in_degree[project.project_id] += 1

    queue = deque(p.project_id for p in snapshot if in_degree[p.project_id] == 0)
    ordered: List[ProjectDescriptor] = []
    while queue:
        project_id = queue.popleft()
        ordered.append(snapshot.get_project(project_id))
        for dependent_id in dependents[project_id]:
            in_degree[dependent_id] -= 1
            if in_degree[dependent_id] == 0:
                queue.append(dependent_id)

    if len(ordered) != len(snapshot):
        logger.warning(
            "Cyclic project references detected",
            projects=[p.project_id for p in snapshot if in_degree[p.project_id] > 0],
        )
        ordered.extend(_order_leftovers(snapshot, ordered))

    return ordered


def _order_leftovers(
    snapshot: SolutionGraphSnapshot, placed: List[ProjectDescriptor]
) -> List[ProjectDescriptor]:
    """Post-order walk over the unplaced projects; back edges of a cycle are skipped."""
    comparer = snapshot.comparer
    visited = ProjectIdSet(comparer, (p.project_id for p in placed))
    leftovers: List[ProjectDescriptor] = []

    for root in snapshot:
        if root.project_id in visited:
            continue
        visited.add(root.project_id)
        stack = [(root, iter(root.project_reference_ids(comparer)))]
        while stack:
            current, references = stack[-1]
            for reference_id in references:
                if reference_id in visited or reference_id not in snapshot:
                    continue
                visited.add(reference_id)
                child = snapshot.get_project(reference_id)
                stack.append((child, iter(child.project_reference_ids(comparer))))
                break
            else:
                stack.pop()
                leftovers.append(current)

    return leftovers
