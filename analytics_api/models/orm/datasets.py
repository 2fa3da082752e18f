from sqlalchemy import Integer, String
from sqlalchemy.orm import mapped_column

from .base import Base


class Dataset(Base):
    __tablename__ = "datasets"
    id = mapped_column(Integer, primary_key=True, autoincrement=True)
    name = mapped_column(String, nullable=False)
    owner_id = mapped_column(String, nullable=False, index=True)
    type = mapped_column(Integer, nullable=False, default=2)
    dimension1 = mapped_column(String, nullable=True)
    dimension2 = mapped_column(String, nullable=True)
    value = mapped_column(String, nullable=True)
