from pydantic import BaseModel, ConfigDict, Field


class StudentSearchOut(BaseModel):
    matric_no: str = Field(alias="matricNo")
    name: str

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)
