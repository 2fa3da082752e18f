from sqlalchemy import Integer, String
from sqlalchemy.orm import mapped_column

from .base import Base


class Activity(Base):
    __tablename__ = "activities"
    id = mapped_column(Integer, primary_key=True, autoincrement=True)
    # no foreign key, the audit trail outlives the dataset
    dataset_id = mapped_column(Integer, nullable=False, index=True)
    object_type = mapped_column(String, nullable=False)
    subject = mapped_column(String, nullable=False)
    user_id = mapped_column(String, nullable=True)
