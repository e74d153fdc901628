"""
Project Analytics

Progress, cost, resource and schedule analysis over a project snapshot,
report builders, and project and task-dependency validation.

Functions that depend on the current date take an explicit ``as_of`` date
and default it to today.
"""

import enum
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence, Tuple, Type, Union
from uuid import UUID

from budget_engine.calculations.numeric import percent_of, safe_divide
from budget_engine.calculations.variance import remaining_budget

# Progress may trail the calendar by this many points and still be on schedule
SCHEDULE_TOLERANCE_PERCENT = 5.0


class ProjectType(str, enum.Enum):
    CONSTRUCTION = "construction"
    FILM_PRODUCTION = "film_production"
    MANUFACTURING = "manufacturing"
    HOME_IMPROVEMENT = "home_improvement"
    CUSTOM = "custom"


class ProjectStatus(str, enum.Enum):
    PLANNING = "planning"
    IN_PROGRESS = "in_progress"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TaskStatus(str, enum.Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    BLOCKED = "blocked"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TaskPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class BudgetCategory(str, enum.Enum):
    LABOR = "labor"
    MATERIALS = "materials"
    EQUIPMENT = "equipment"
    PERMITS = "permits"
    OVERHEAD = "overhead"
    CONTINGENCY = "contingency"
    OTHER = "other"


@dataclass(frozen=True)
class LaborDetails:
    skill: str
    hourly_rate: float
    certification_required: bool = False


@dataclass(frozen=True)
class MaterialDetails:
    unit: str
    unit_cost: float
    supplier: Optional[str] = None
    lead_time_days: int = 0


@dataclass(frozen=True)
class EquipmentDetails:
    daily_rate: float
    requires_operator: bool = False
    maintenance_cost: float = 0.0


ResourceType = Union[LaborDetails, MaterialDetails, EquipmentDetails]


@dataclass(frozen=True)
class Expense:
    id: UUID
    category: BudgetCategory
    description: str
    amount: float
    incurred_on: date
    approved_by: Optional[str] = None
    other_category: Optional[str] = None  # Label when category is OTHER

    @property
    def category_label(self) -> str:
        if self.category == BudgetCategory.OTHER and self.other_category:
            return self.other_category
        return self.category.value


@dataclass(frozen=True)
class ProjectPhase:
    id: UUID
    name: str
    planned_duration_days: int
    budget: float
    actual_cost: float = 0.0
    description: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    actual_duration_days: Optional[int] = None
    depends_on: Tuple[UUID, ...] = ()


@dataclass(frozen=True)
class ProjectTask:
    id: UUID
    phase_id: UUID
    name: str
    status: TaskStatus = TaskStatus.NOT_STARTED
    priority: TaskPriority = TaskPriority.MEDIUM
    planned_hours: float = 0.0
    actual_hours: float = 0.0
    completion_percentage: int = 0
    depends_on: Tuple[UUID, ...] = ()
    assigned_to: Tuple[str, ...] = ()
    description: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass(frozen=True)
class ResourceAllocation:
    id: UUID
    task_id: UUID
    resource: ResourceType
    quantity: float
    allocated_date: date
    consumed_quantity: float = 0.0
    notes: Optional[str] = None


@dataclass(frozen=True)
class InventoryItem:
    id: UUID
    name: str
    category: str
    unit: str
    quantity_on_hand: float
    reorder_point: float
    unit_cost: float
    last_restocked: Optional[date] = None
    location: Optional[str] = None


@dataclass(frozen=True)
class Project:
    id: UUID
    name: str
    project_type: ProjectType
    status: ProjectStatus
    start_date: date
    planned_end_date: date
    budget: float
    owner: str = ""
    description: str = ""
    custom_type: Optional[str] = None  # Label when project_type is CUSTOM
    actual_end_date: Optional[date] = None
    phases: Tuple[ProjectPhase, ...] = ()
    tasks: Tuple[ProjectTask, ...] = ()
    resources: Tuple[ResourceAllocation, ...] = ()
    expenses: Tuple[Expense, ...] = ()
    inventory: Tuple[InventoryItem, ...] = ()


# ==================== PROGRESS ====================


def _average_completion(tasks: Sequence[ProjectTask]) -> float:
    if not tasks:
        return 0.0
    return sum(t.completion_percentage for t in tasks) / len(tasks)


def project_progress(project: Project) -> float:
    """Unweighted mean completion percentage across all tasks."""
    return _average_completion(project.tasks)


def phase_progress(project: Project, phase_id: UUID) -> float:
    """Unweighted mean completion percentage of the tasks in one phase."""
    return _average_completion([t for t in project.tasks if t.phase_id == phase_id])


def tasks_by_status(project: Project, status: TaskStatus) -> List[ProjectTask]:
    return [t for t in project.tasks if t.status == status]


def blocked_tasks(project: Project) -> List[ProjectTask]:
    return tasks_by_status(project, TaskStatus.BLOCKED)


def _planned_days(project: Project) -> int:
    return (project.planned_end_date - project.start_date).days


def _expected_progress(project: Project, as_of: date) -> float:
    """Percent of the planned calendar elapsed at as_of."""
    planned_days = _planned_days(project)
    if planned_days <= 0:
        return 0.0
    elapsed = (as_of - project.start_date).days
    return elapsed / planned_days * 100


def is_on_schedule(project: Project, as_of: Optional[date] = None) -> bool:
    """
    True if task progress keeps up with elapsed calendar time.

    Progress may trail the elapsed share of the plan by up to five points.
    """
    if as_of is None:
        as_of = date.today()
    expected = _expected_progress(project, as_of)
    return project_progress(project) >= expected - SCHEDULE_TOLERANCE_PERCENT


# ==================== COST ====================


def total_actual_cost(project: Project) -> float:
    return sum(e.amount for e in project.expenses)


def costs_by_category(project: Project) -> Dict[str, float]:
    """Total expenses keyed by category label."""
    totals: Dict[str, float] = {}
    for expense in project.expenses:
        label = expense.category_label
        totals[label] = totals.get(label, 0.0) + expense.amount
    return totals


def budget_variance(project: Project) -> float:
    """Budget left after expenses; positive means under budget."""
    return remaining_budget(project.budget, total_actual_cost(project))


def budget_variance_percent(project: Project) -> Optional[float]:
    return percent_of(budget_variance(project), project.budget)


def is_over_budget(project: Project) -> bool:
    return budget_variance(project) < 0


def project_cpi(project: Project) -> Optional[float]:
    """
    Cost performance index using task progress as earned value.

    EV = budget * progress; CPI = EV / actual cost. None before any cost is
    recorded. Above 1 means under budget for the work done.
    """
    earned_value = project.budget * (project_progress(project) / 100)
    return safe_divide(earned_value, total_actual_cost(project))


def forecast_total_cost(project: Project) -> float:
    """Estimate at completion, falling back to the budget without a usable CPI."""
    cpi = project_cpi(project)
    if not cpi:
        return project.budget
    return project.budget / cpi


def estimate_cost_to_complete(project: Project) -> float:
    return max(0.0, forecast_total_cost(project) - total_actual_cost(project))


# ==================== RESOURCES ====================


def total_labor_hours(project: Project) -> float:
    return sum(t.actual_hours for t in project.tasks)


def labor_hours_by_task(project: Project) -> Dict[UUID, float]:
    return {t.id: t.actual_hours for t in project.tasks}


def resources_by_type(
    project: Project, resource_type: Type[ResourceType]
) -> List[ResourceAllocation]:
    """Allocations whose resource is of the given details type."""
    return [r for r in project.resources if isinstance(r.resource, resource_type)]


def labor_costs(project: Project) -> float:
    return sum(
        r.consumed_quantity * r.resource.hourly_rate
        for r in resources_by_type(project, LaborDetails)
    )


def material_costs(project: Project) -> float:
    return sum(
        r.consumed_quantity * r.resource.unit_cost
        for r in resources_by_type(project, MaterialDetails)
    )


def equipment_costs(project: Project) -> float:
    return sum(
        r.consumed_quantity * r.resource.daily_rate
        for r in resources_by_type(project, EquipmentDetails)
    )


def check_resource_availability(
    inventory: Sequence[InventoryItem], item_id: UUID, required_quantity: float
) -> bool:
    """True if the item is stocked in at least the required quantity."""
    for item in inventory:
        if item.id == item_id:
            return item.quantity_on_hand >= required_quantity
    return False


def items_below_reorder_point(inventory: Sequence[InventoryItem]) -> List[InventoryItem]:
    return [i for i in inventory if i.quantity_on_hand <= i.reorder_point]


# ==================== SCHEDULE ====================


def project_duration(project: Project, as_of: Optional[date] = None) -> int:
    """Days from start to actual end, or to as_of for a running project."""
    if project.actual_end_date is not None:
        return (project.actual_end_date - project.start_date).days
    if as_of is None:
        as_of = date.today()
    return (as_of - project.start_date).days


def schedule_variance_days(project: Project, as_of: Optional[date] = None) -> int:
    """Planned days minus days taken so far; negative once the plan is overrun."""
    return _planned_days(project) - project_duration(project, as_of)


def project_spi(project: Project, as_of: Optional[date] = None) -> float:
    """
    Schedule performance index: actual progress over calendar progress.

    Returns 1.0 before any planned time has elapsed. Above 1 means ahead of
    schedule.
    """
    if as_of is None:
        as_of = date.today()
    planned_progress = _expected_progress(project, as_of)
    if planned_progress == 0:
        return 1.0
    return project_progress(project) / planned_progress


def estimate_completion_date(project: Project, as_of: Optional[date] = None) -> date:
    """
    Project the finish date by stretching the remaining plan by 1 / SPI.

    Falls back to the planned end date when no progress has been made.
    """
    if as_of is None:
        as_of = date.today()
    spi = project_spi(project, as_of)
    if spi == 0:
        return project.planned_end_date
    remaining_days = (project.planned_end_date - as_of).days
    return as_of + timedelta(days=round(remaining_days / spi))


# ==================== REPORTS ====================


@dataclass(frozen=True)
class ProgressReport:
    project_name: str
    completion_percentage: float
    tasks_total: int
    tasks_completed: int
    tasks_in_progress: int
    tasks_blocked: int
    on_schedule: bool
    schedule_variance_days: int
    estimated_completion_date: date


@dataclass(frozen=True)
class CostAnalysisReport:
    project_name: str
    budget: float
    actual_cost: float
    variance: float
    variance_percent: Optional[float]
    is_over_budget: bool
    costs_by_category: Dict[str, float]
    cpi: Optional[float]
    forecasted_total: float
    estimated_to_complete: float


@dataclass(frozen=True)
class ResourceUtilizationReport:
    project_name: str
    total_labor_hours: float
    labor_costs: float
    material_costs: float
    equipment_costs: float
    low_inventory_items: List[InventoryItem] = field(default_factory=list)


def progress_report(project: Project, as_of: Optional[date] = None) -> ProgressReport:
    if as_of is None:
        as_of = date.today()
    return ProgressReport(
        project_name=project.name,
        completion_percentage=project_progress(project),
        tasks_total=len(project.tasks),
        tasks_completed=len(tasks_by_status(project, TaskStatus.COMPLETED)),
        tasks_in_progress=len(tasks_by_status(project, TaskStatus.IN_PROGRESS)),
        tasks_blocked=len(blocked_tasks(project)),
        on_schedule=is_on_schedule(project, as_of),
        schedule_variance_days=schedule_variance_days(project, as_of),
        estimated_completion_date=estimate_completion_date(project, as_of),
    )


def cost_analysis_report(project: Project) -> CostAnalysisReport:
    return CostAnalysisReport(
        project_name=project.name,
        budget=project.budget,
        actual_cost=total_actual_cost(project),
        variance=budget_variance(project),
        variance_percent=budget_variance_percent(project),
        is_over_budget=is_over_budget(project),
        costs_by_category=costs_by_category(project),
        cpi=project_cpi(project),
        forecasted_total=forecast_total_cost(project),
        estimated_to_complete=estimate_cost_to_complete(project),
    )


def resource_utilization_report(project: Project) -> ResourceUtilizationReport:
    return ResourceUtilizationReport(
        project_name=project.name,
        total_labor_hours=total_labor_hours(project),
        labor_costs=labor_costs(project),
        material_costs=material_costs(project),
        equipment_costs=equipment_costs(project),
        low_inventory_items=items_below_reorder_point(project.inventory),
    )


# ==================== VALIDATION ====================

CIRCULAR_DEPENDENCY_ERROR = "Circular task dependencies detected"


def has_circular_dependencies(tasks: Sequence[ProjectTask]) -> bool:
    """
    Detect a cycle in the task dependency graph.

    Depth-first search from every task with an explicit stack. ``path`` holds
    the tasks on the current branch; reaching one of them again is a back
    edge. Dependencies on ids outside ``tasks`` are treated as leaves.
    """
    edges = {t.id: tuple(t.depends_on) for t in tasks}
    visited = set()

    for root in edges:
        if root in visited:
            continue

        path = {root}
        stack = [(root, iter(edges[root]))]
        visited.add(root)

        while stack:
            node, children = stack[-1]
            child = next(children, None)
            if child is None:
                stack.pop()
                path.discard(node)
                continue
            if child in path:
                return True
            if child in visited or child not in edges:
                continue
            visited.add(child)
            path.add(child)
            stack.append((child, iter(edges[child])))

    return False


def validate_task_dependencies(tasks: Sequence[ProjectTask]) -> Optional[str]:
    """Return an error message if task dependencies are circular, else None."""
    if has_circular_dependencies(tasks):
        return CIRCULAR_DEPENDENCY_ERROR
    return None


def validate_project(project: Project) -> List[str]:
    """
    Validate a project snapshot.

    Returns:
        Human-readable error messages; an empty list means the project is valid
    """
    errors = []

    if not project.name or not project.name.strip():
        errors.append("Project name is required")
    if project.budget <= 0:
        errors.append("Budget must be greater than zero")
    if project.planned_end_date <= project.start_date:
        errors.append("Planned end date must be after start date")
    if not project.phases:
        errors.append("Project must have at least one phase")

    dependency_error = validate_task_dependencies(project.tasks)
    if dependency_error:
        errors.append(dependency_error)

    return errors
