from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EstimateIn(BaseModel):
    # The hire page posts camelCase keys; snake_case is accepted too.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    project_type: str = ""
    selected_features: List[str] = Field(default_factory=list)
    selected_additional_services: List[str] = Field(default_factory=list)
    timeline: str = "normal"
    needs_maintenance: bool = False
    maintenance_level: str = ""


class BreakdownLineOut(BaseModel):
    item: str
    price: str
    included_in_total: bool = True


class EstimateOut(BaseModel):
    min: int
    max: int
    currency: str = "GBP"
    breakdown: List[BreakdownLineOut] = Field(default_factory=list)
