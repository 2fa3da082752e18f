from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from sqlalchemy.engine.url import URL
from starlette.datastructures import Secret


class DatabaseURL(BaseModel):
    drivername: str = Field(..., alias="driver", description="The database driver.")
    host: str = Field("localhost", description="Server host.")
    port: Optional[Union[str, int]] = Field(None, description="Server access port.")
    username: Optional[str] = Field(None, alias="user", description="Username")
    password: Optional[Union[str, Secret]] = Field(None, description="Password")
    database: str = Field(..., description="Database name.")
    url: Optional[URL] = None

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    @model_validator(mode="after")
    def build_url(self) -> "DatabaseURL":
        if isinstance(self.url, URL):
            return self
        self.url = URL.create(
            drivername=self.drivername,
            username=self.username,
            password=str(self.password) if self.password is not None else None,
            host=self.host,
            port=int(self.port) if self.port is not None else None,
            database=self.database,
        )
        return self
