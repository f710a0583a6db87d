"""Core test fixtures — ready-made habits for the pure domain tests."""

from datetime import datetime, timezone

import pytest

from habit_tracking.core.binary_habit import create_binary_habit
from habit_tracking.core.quantity_habit import create_quantity_habit
from habit_tracking.core.value_objects import QuantityProps, ScheduleProps

START = datetime(2025, 1, 1, tzinfo=timezone.utc)


def daily_schedule() -> ScheduleProps:
    return ScheduleProps(start_date=START, interval="daily")


@pytest.fixture
def binary_habit():
    return create_binary_habit(
        name="Meditate", description="Ten minutes", schedule=daily_schedule(),
    )


@pytest.fixture
def goal_habit():
    return create_quantity_habit(
        name="Read",
        description="Pages per day",
        quantity=QuantityProps(amount=30, unit="pages", target_type="goal"),
        schedule=daily_schedule(),
    )


@pytest.fixture
def limit_habit():
    return create_quantity_habit(
        name="Coffee",
        description="Cups per day",
        quantity=QuantityProps(amount=2, unit="cups", target_type="limit"),
        schedule=daily_schedule(),
    )
