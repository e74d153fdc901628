"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os
from datetime import date, timedelta
from uuid import uuid4

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from budget_engine.main import app
from budget_engine.calculations.projects import (
    BudgetCategory,
    EquipmentDetails,
    Expense,
    InventoryItem,
    LaborDetails,
    MaterialDetails,
    Project,
    ProjectPhase,
    ProjectStatus,
    ProjectTask,
    ProjectType,
    ResourceAllocation,
    TaskStatus,
)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line(
        "markers",
        "known_simplification: pins behaviour that is simplified on purpose",
    )


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


PROJECT_START = date(2025, 1, 1)


@pytest.fixture
def sample_project():
    """A 100-day construction project, half done, with mixed costs."""
    foundation = ProjectPhase(
        id=uuid4(), name="Foundation", planned_duration_days=40, budget=4000
    )
    framing = ProjectPhase(
        id=uuid4(), name="Framing", planned_duration_days=60, budget=6000
    )

    dig = ProjectTask(
        id=uuid4(),
        phase_id=foundation.id,
        name="Excavation",
        status=TaskStatus.COMPLETED,
        planned_hours=40,
        actual_hours=38,
        completion_percentage=100,
    )
    pour = ProjectTask(
        id=uuid4(),
        phase_id=foundation.id,
        name="Pour concrete",
        status=TaskStatus.IN_PROGRESS,
        planned_hours=24,
        actual_hours=12,
        completion_percentage=60,
        depends_on=(dig.id,),
    )
    walls = ProjectTask(
        id=uuid4(),
        phase_id=framing.id,
        name="Frame walls",
        status=TaskStatus.IN_PROGRESS,
        planned_hours=80,
        actual_hours=30,
        completion_percentage=40,
        depends_on=(pour.id,),
    )
    roof = ProjectTask(
        id=uuid4(),
        phase_id=framing.id,
        name="Roof trusses",
        status=TaskStatus.BLOCKED,
        planned_hours=60,
        completion_percentage=0,
        depends_on=(walls.id,),
    )

    lumber = InventoryItem(
        id=uuid4(),
        name="2x4 lumber",
        category="Materials",
        unit="board",
        quantity_on_hand=50,
        reorder_point=100,
        unit_cost=3.0,
    )
    nails = InventoryItem(
        id=uuid4(),
        name="Framing nails",
        category="Materials",
        unit="box",
        quantity_on_hand=40,
        reorder_point=10,
        unit_cost=12.0,
    )

    return Project(
        id=uuid4(),
        name="Garage Build",
        project_type=ProjectType.CONSTRUCTION,
        status=ProjectStatus.IN_PROGRESS,
        start_date=PROJECT_START,
        planned_end_date=PROJECT_START + timedelta(days=100),
        budget=10000,
        phases=(foundation, framing),
        tasks=(dig, pour, walls, roof),
        resources=(
            ResourceAllocation(
                id=uuid4(),
                task_id=walls.id,
                resource=LaborDetails(skill="Carpenter", hourly_rate=50),
                quantity=40,
                allocated_date=PROJECT_START,
                consumed_quantity=10,
            ),
            ResourceAllocation(
                id=uuid4(),
                task_id=walls.id,
                resource=MaterialDetails(unit="board", unit_cost=3),
                quantity=100,
                allocated_date=PROJECT_START,
                consumed_quantity=20,
            ),
            ResourceAllocation(
                id=uuid4(),
                task_id=dig.id,
                resource=EquipmentDetails(daily_rate=200, requires_operator=True),
                quantity=3,
                allocated_date=PROJECT_START,
                consumed_quantity=2,
            ),
        ),
        expenses=(
            Expense(
                id=uuid4(),
                category=BudgetCategory.LABOR,
                description="Crew wages",
                amount=2500,
                incurred_on=PROJECT_START + timedelta(days=20),
            ),
            Expense(
                id=uuid4(),
                category=BudgetCategory.MATERIALS,
                description="Concrete",
                amount=1000,
                incurred_on=PROJECT_START + timedelta(days=25),
            ),
            Expense(
                id=uuid4(),
                category=BudgetCategory.OTHER,
                description="Dumpster rental",
                amount=300,
                incurred_on=PROJECT_START + timedelta(days=30),
                other_category="Waste removal",
            ),
            Expense(
                id=uuid4(),
                category=BudgetCategory.OTHER,
                description="Dumpster swap",
                amount=200,
                incurred_on=PROJECT_START + timedelta(days=40),
                other_category="Waste removal",
            ),
        ),
        inventory=(lumber, nails),
    )
