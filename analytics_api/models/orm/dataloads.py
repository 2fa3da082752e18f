from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import mapped_column

from .base import Base, JSONType


class Dataload(Base):
    __tablename__ = "dataloads"
    id = mapped_column(Integer, primary_key=True, autoincrement=True)
    dataset_id = mapped_column(
        Integer,
        ForeignKey("datasets.id", onupdate="CASCADE", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    datasource_id = mapped_column(Integer, nullable=False)
    name = mapped_column(String, nullable=False, default="New")
    schedule = mapped_column(String, nullable=False, default="", index=True)
    option = mapped_column(JSONType, nullable=False, default=dict)
