from pydantic import BaseModel, ConfigDict, Field

from app.models.venue import VenueType


class AvailableVenueOut(BaseModel):
    code: str
    short_name: str = Field(alias="shortName")
    name: str
    capacity: int
    type: VenueType

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)
