from enum import Enum

from sqlalchemy import Enum as SAEnum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class VenueType(str, Enum):
    lecture = "lecture"
    lab = "lab"
    none = "none"


class Venue(Base):
    __tablename__ = "venues"

    code: Mapped[str] = mapped_column(String(50), primary_key=True)
    short_name: Mapped[str] = mapped_column(String(50), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    type: Mapped[VenueType] = mapped_column(SAEnum(VenueType, name="venue_type"), nullable=False)
