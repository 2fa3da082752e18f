from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import mapped_column

from .base import Base


class DataRow(Base):
    __tablename__ = "data"
    id = mapped_column(Integer, primary_key=True, autoincrement=True)
    dataset_id = mapped_column(
        Integer,
        ForeignKey("datasets.id", onupdate="CASCADE", ondelete="CASCADE"),
        nullable=False,
    )
    dimension1 = mapped_column(String, nullable=False, default="")
    dimension2 = mapped_column(String, nullable=False, default="")
    value = mapped_column(String, nullable=True)

    __table_args__ = (
        UniqueConstraint(
            "dataset_id", "dimension1", "dimension2", name="data_dimensions_uc"
        ),
    )
