"""Financial tip model."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class FinancialTip(BaseModel):
    """Read-only reference content shown on the dashboard."""

    id: str
    title: str
    content: str
    category: str = Field(default="", description="Tip topic")
    created_at: Optional[datetime] = None
