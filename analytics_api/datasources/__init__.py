from .base import Datasource
from .registry import DatasourceKey, DatasourceRegistry, get_registry

__all__ = ["Datasource", "DatasourceKey", "DatasourceRegistry", "get_registry"]
