"""Savings goal data models."""
from datetime import date, datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from finzen.utils.timestamp import parse_calendar_date


class GoalIcon(str, Enum):
    """Icon tags a goal can be displayed with."""

    TARGET = "target"
    HOME = "home"
    CAR = "car"
    PLANE = "plane"
    GRADUATION_CAP = "graduation-cap"
    HEART = "heart"
    GIFT = "gift"
    SMARTPHONE = "smartphone"


GOAL_ICON_LABELS = {
    GoalIcon.TARGET: "General",
    GoalIcon.HOME: "House",
    GoalIcon.CAR: "Car",
    GoalIcon.PLANE: "Travel",
    GoalIcon.GRADUATION_CAP: "Education",
    GoalIcon.HEART: "Health",
    GoalIcon.GIFT: "Gift",
    GoalIcon.SMARTPHONE: "Technology",
}


class SavingsGoalCreate(BaseModel):
    """Savings goal creation model."""

    model_config = ConfigDict(use_enum_values=True)

    user_id: str = Field(..., description="Owning user identifier")
    title: str = Field(..., min_length=1)
    target_amount: float = Field(..., gt=0, allow_inf_nan=False)
    current_amount: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    deadline: Optional[date] = None
    icon: GoalIcon = GoalIcon.TARGET

    @field_validator("deadline", mode="before")
    @classmethod
    def _coerce_deadline(cls, v):
        if v in (None, ""):
            return None
        return parse_calendar_date(v)


class SavingsGoal(SavingsGoalCreate):
    """Stored savings goal.

    ``target_amount`` is relaxed to ``>= 0`` here: rows already stored are
    accepted as-is and the progress calculator handles a zero target.
    """

    id: str
    target_amount: float = Field(..., ge=0, allow_inf_nan=False)
    completed: bool = False
    created_at: Optional[datetime] = None
