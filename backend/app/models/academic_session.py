from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class AcademicSession(Base):
    __tablename__ = "sessions"

    session: Mapped[str] = mapped_column(String(9), primary_key=True)
    semester: Mapped[int] = mapped_column(Integer, primary_key=True)
