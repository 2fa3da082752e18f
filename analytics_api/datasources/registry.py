"""Registry resolving datasource ids to datasource handlers.

Built-in datasources own the codes 1 to 6. Datasources shipped by other
packages are registered through the ``analytics_api.datasources`` entry
point group when the application starts and live in their own key
space, so they can never shadow a built-in. On the wire an external key
is rendered as ``99`` followed by the id the datasource reports.
"""
from importlib.metadata import entry_points
from typing import Any, Dict, List, Mapping, NamedTuple, Optional

from fastapi.logger import logger

from ..errors import DuplicateRegistrationError, RecordNotFoundError
from ..models.enum.datasources import DatasourceKind, DatasourceType
from ..models.pydantic.authentication import User
from ..models.pydantic.datasources import DatasourceResult, TemplateField
from ..settings.globals import DATASOURCE_ENTRY_POINT_GROUP
from .base import Datasource
from .external_file import ExternalFile
from .file import File
from .github import Github
from .internal_db import InternalDB
from .json_feed import Json
from .regex import Regex

EXTERNAL_PREFIX = "99"
BUILTIN_CODES = frozenset(int(t) for t in DatasourceType)


class DatasourceKey(NamedTuple):
    kind: DatasourceKind
    code: int

    @property
    def wire_id(self) -> int:
        if self.kind == DatasourceKind.builtin:
            return self.code
        return int(f"{EXTERNAL_PREFIX}{self.code}")

    @classmethod
    def parse(cls, datasource_id: int) -> "DatasourceKey":
        """Inverse of `wire_id`."""
        if datasource_id in BUILTIN_CODES:
            return cls(DatasourceKind.builtin, datasource_id)
        digits = str(datasource_id)
        if digits.startswith(EXTERNAL_PREFIX) and len(digits) > len(EXTERNAL_PREFIX):
            return cls(DatasourceKind.external, int(digits[len(EXTERNAL_PREFIX) :]))
        raise RecordNotFoundError(f"Datasource with id {datasource_id} does not exist")


class DatasourceRegistry:
    def __init__(self) -> None:
        self._datasources: Dict[DatasourceKey, Datasource] = dict()

    def _add(self, key: DatasourceKey, datasource: Datasource) -> None:
        if key in self._datasources:
            raise DuplicateRegistrationError(
                f"Datasource with the same ID already registered: {datasource.name}"
            )
        self._datasources[key] = datasource

    def register_builtin(self, datasource: Datasource) -> None:
        code = int(datasource.id)
        if code not in BUILTIN_CODES:
            raise ValueError(f"{code} is not a built-in datasource type")
        self._add(DatasourceKey(DatasourceKind.builtin, code), datasource)

    def register(self, datasource: Datasource) -> bool:
        """Register an external datasource.

        A datasource reporting an id that is already taken is dropped,
        the first registration wins. A datasource whose id is not a
        non-negative integer is dropped as well.
        """
        try:
            code = int(datasource.id)
        except (TypeError, ValueError):
            code = -1
        if code < 0:
            logger.warning(
                f"Invalid datasource id {datasource.id!r}; ignoring {datasource!r}"
            )
            return False

        key = DatasourceKey(DatasourceKind.external, code)
        try:
            self._add(key, datasource)
        except DuplicateRegistrationError as e:
            logger.warning(f"{e}; ignoring {datasource!r}")
            return False
        logger.info(f"Registered datasource {datasource.name} as {key.wire_id}")
        return True

    def resolve(self, datasource_id: int) -> Datasource:
        key = DatasourceKey.parse(datasource_id)
        try:
            return self._datasources[key]
        except KeyError:
            raise RecordNotFoundError(
                f"Datasource with id {datasource_id} does not exist"
            )

    def list_all(self) -> Dict[int, str]:
        return {key.wire_id: ds.name for key, ds in self._datasources.items()}

    def list_templates(self) -> Dict[int, List[TemplateField]]:
        return {key.wire_id: ds.template() for key, ds in self._datasources.items()}

    async def read(
        self, datasource_id: int, options: Mapping[str, Any], user: User
    ) -> DatasourceResult:
        """Read through the resolved datasource on behalf of ``user``.

        Failures of the datasource itself are not caught here.
        """
        datasource = self.resolve(datasource_id)
        await datasource.authorize(options, user)
        logger.debug(f"Reading datasource {datasource!r}")
        return await datasource.read_data(options)

    def __contains__(self, datasource_id: int) -> bool:
        try:
            self.resolve(datasource_id)
        except RecordNotFoundError:
            return False
        return True

    def __len__(self) -> int:
        return len(self._datasources)


def builtin_registry() -> DatasourceRegistry:
    registry = DatasourceRegistry()
    for datasource in (File(), InternalDB(), Github(), ExternalFile(), Regex(), Json()):
        registry.register_builtin(datasource)
    return registry


def load_plugins(
    registry: DatasourceRegistry, group: str = DATASOURCE_ENTRY_POINT_GROUP
) -> int:
    """Register the datasources advertised by installed packages.

    Each entry point refers to a Datasource class or a factory returning
    one. Returns the number of datasources registered.
    """
    registered = 0
    for entry_point in entry_points(group=group):
        try:
            factory = entry_point.load()
            datasource = factory()
        except Exception as e:
            logger.error(f"Could not load datasource plugin {entry_point.name}: {e}")
            continue
        if not isinstance(datasource, Datasource):
            logger.error(
                f"Datasource plugin {entry_point.name} does not provide a Datasource"
            )
            continue
        if registry.register(datasource):
            registered += 1
    return registered


REGISTRY: Optional[DatasourceRegistry] = None


def init_registry() -> DatasourceRegistry:
    """Build the process wide registry: built-ins plus plugins."""
    global REGISTRY

    registry = builtin_registry()
    count = load_plugins(registry)
    logger.info(f"Datasource registry ready with {len(registry)} datasources ({count} plugins)")
    REGISTRY = registry
    return registry


def get_registry() -> DatasourceRegistry:
    if REGISTRY is None:
        return init_registry()
    return REGISTRY
