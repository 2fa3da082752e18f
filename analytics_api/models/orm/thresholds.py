from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import mapped_column

from .base import Base


class Threshold(Base):
    __tablename__ = "thresholds"
    id = mapped_column(Integer, primary_key=True, autoincrement=True)
    dataset_id = mapped_column(
        Integer,
        ForeignKey("datasets.id", onupdate="CASCADE", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    dimension1 = mapped_column(String, nullable=False)
    option = mapped_column(String, nullable=False)
    value = mapped_column(String, nullable=False)
    severity = mapped_column(Integer, nullable=False, default=1)
