from enum import IntEnum, StrEnum


class DatasourceType(IntEnum):
    file = 1
    internal_db = 2
    git = 3
    external_file = 4
    regex = 5
    json = 6


class DatasourceKind(StrEnum):
    builtin = "builtin"
    external = "external"


class TemplateFieldType(StrEnum):
    """Free text input or a `/`-delimited list of choices."""

    text = "text"
    choice = "tf"
