from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import mapped_column

from .base import Base


class Share(Base):
    __tablename__ = "shares"
    id = mapped_column(Integer, primary_key=True, autoincrement=True)
    dataset_id = mapped_column(
        Integer,
        ForeignKey("datasets.id", onupdate="CASCADE", ondelete="CASCADE"),
        nullable=False,
    )
    type = mapped_column(Integer, nullable=False)
    target = mapped_column(String, nullable=True)
    token = mapped_column(String(32), nullable=True, unique=True)
    password = mapped_column(String, nullable=True)
    initiator_id = mapped_column(String, nullable=True)

    __table_args__ = (
        Index("shares_dataset_id_idx", "dataset_id"),
        Index("shares_type_target_idx", "type", "target"),
    )
