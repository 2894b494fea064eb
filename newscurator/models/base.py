"""Base model for rows read back from the article store."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class DBModel(BaseModel):
    """Row model with a surrogate key and insert timestamp."""

    id: Optional[int] = Field(None, description="Primary key")
    created_at: Optional[datetime] = Field(None, description="Insert timestamp")

    class Config:
        """Pydantic config."""

        from_attributes = True
        use_enum_values = False
