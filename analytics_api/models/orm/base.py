from datetime import datetime

from sqlalchemy import JSON, DateTime, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, mapped_column

# JSONB on PostgreSQL, plain JSON everywhere else
JSONType = JSON().with_variant(JSONB(), "postgresql")


class Model(DeclarativeBase):
    pass


class Base(Model):
    __abstract__ = True
    created_on = mapped_column(
        DateTime, default=datetime.utcnow, server_default=func.now()
    )
    updated_on = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        pk = ", ".join(
            f"{c.name}={getattr(self, c.key, None)!r}" for c in self.__table__.primary_key
        )
        return f"<{type(self).__name__} {pk}>"
