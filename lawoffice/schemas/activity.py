from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ActivityOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    user_id: str
    action_type: str
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    description: str
    metadata: Dict[str, Any] = Field(default_factory=dict, validation_alias="details")
    created_at: datetime
