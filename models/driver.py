from pydantic import BaseModel, ConfigDict
from typing import Any, Optional


class AvailabilityUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    available: Optional[bool] = None


class RatingUpdate(BaseModel):
    # Rating is stored as sent; no range or type checks.
    model_config = ConfigDict(extra="ignore")

    rating: Any = None
