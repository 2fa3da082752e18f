import logging

import pytest

from analytics_api.datasources import registry as registry_module
from analytics_api.datasources.registry import (
    DatasourceKey,
    DatasourceRegistry,
    builtin_registry,
    load_plugins,
)
from analytics_api.errors import RecordNotFoundError
from analytics_api.models.enum.datasources import DatasourceKind
from analytics_api.models.pydantic.datasources import TemplateField

from .. import USER_1
from ..utils import StaticDatasource


def test_builtins_only():
    registry = builtin_registry()

    datasources = registry.list_all()
    assert sorted(datasources.keys()) == [1, 2, 3, 4, 5, 6]
    assert datasources[1] == "Local file"
    assert datasources[3] == "GitHub"

    templates = registry.list_templates()
    assert sorted(templates.keys()) == [1, 2, 3, 4, 5, 6]
    for fields in templates.values():
        assert all(isinstance(field, TemplateField) for field in fields)
    assert [field.id for field in templates[5]] == [
        "url",
        "name",
        "regex",
        "limit",
        "timestamp",
    ]


def test_timestamp_choices():
    registry = builtin_registry()
    timestamp = [f for f in registry.list_templates()[1] if f.id == "timestamp"][0]
    assert timestamp.type == "tf"
    assert timestamp.choices == ["false", "true"]


def test_datasource_key_wire_ids():
    assert DatasourceKey(DatasourceKind.builtin, 4).wire_id == 4
    assert DatasourceKey(DatasourceKind.external, 7).wire_id == 997
    assert DatasourceKey(DatasourceKind.external, 12).wire_id == 9912

    assert DatasourceKey.parse(4) == (DatasourceKind.builtin, 4)
    assert DatasourceKey.parse(997) == (DatasourceKind.external, 7)

    with pytest.raises(RecordNotFoundError):
        DatasourceKey.parse(8)
    with pytest.raises(RecordNotFoundError):
        DatasourceKey.parse(99)


def test_external_registration():
    registry = builtin_registry()
    plugin = StaticDatasource(id=1, name="Plugin with a builtin id")

    assert registry.register(plugin) is True

    # the plugin lives next to the builtin with the same id
    assert registry.resolve(1).name == "Local file"
    assert registry.resolve(991) is plugin
    assert 991 in registry
    assert len(registry.list_all()) == 7


def test_duplicate_registration_keeps_first(caplog):
    registry = builtin_registry()
    first = StaticDatasource(id=7, name="First")
    second = StaticDatasource(id=7, name="Second")

    with caplog.at_level(logging.WARNING):
        assert registry.register(first) is True
        assert registry.register(second) is False

    assert registry.resolve(997) is first
    assert registry.list_all()[997] == "First"
    assert "already registered" in caplog.text


def test_register_builtin_rejects_unknown_code():
    registry = DatasourceRegistry()
    with pytest.raises(ValueError):
        registry.register_builtin(StaticDatasource(id=7))


def test_resolve_unknown():
    registry = builtin_registry()

    with pytest.raises(RecordNotFoundError):
        registry.resolve(999)
    assert 999 not in registry


@pytest.mark.asyncio
async def test_read_unknown_datasource():
    registry = builtin_registry()

    with pytest.raises(RecordNotFoundError):
        await registry.read(999, {}, USER_1)


@pytest.mark.asyncio
async def test_read_dispatches_options():
    registry = DatasourceRegistry()
    plugin = StaticDatasource(id=3, rows=[["x", 5]])
    registry.register(plugin)

    result = await registry.read(993, {"rows": "anything"}, USER_1)

    assert result.data == [["x", 5]]
    assert plugin.calls == [{"rows": "anything"}]


class FakeEntryPoint:
    def __init__(self, name, factory):
        self.name = name
        self.factory = factory

    def load(self):
        if isinstance(self.factory, Exception):
            raise self.factory
        return self.factory


def test_load_plugins(monkeypatch, caplog):
    entry_points = [
        FakeEntryPoint("static", lambda: StaticDatasource(id=7)),
        FakeEntryPoint("broken", ImportError("no module named broken")),
        FakeEntryPoint("not_a_datasource", lambda: object()),
        FakeEntryPoint("duplicate", lambda: StaticDatasource(id=7, name="Again")),
    ]
    monkeypatch.setattr(
        registry_module, "entry_points", lambda group: entry_points
    )
    registry = builtin_registry()

    with caplog.at_level(logging.WARNING):
        count = load_plugins(registry)

    assert count == 1
    assert registry.list_all()[997] == "Static"
    assert len(registry.list_all()) == 7
    assert "broken" in caplog.text
    assert "not_a_datasource" in caplog.text


def test_init_registry(monkeypatch):
    monkeypatch.setattr(registry_module, "entry_points", lambda group: [])
    monkeypatch.setattr(registry_module, "REGISTRY", None)

    registry = registry_module.get_registry()

    assert registry is registry_module.get_registry()
    assert sorted(registry.list_all()) == [1, 2, 3, 4, 5, 6]


@pytest.mark.parametrize("bad_id", ["abc", -5, None])
def test_load_plugins_skips_invalid_ids(monkeypatch, caplog, bad_id):
    entry_points = [
        FakeEntryPoint("bad_id", lambda: StaticDatasource(id=bad_id, name="Bad")),
        FakeEntryPoint("static", lambda: StaticDatasource(id=8)),
    ]
    monkeypatch.setattr(
        registry_module, "entry_points", lambda group: entry_points
    )
    registry = builtin_registry()

    with caplog.at_level(logging.WARNING):
        count = load_plugins(registry)

    assert count == 1
    assert registry.list_all()[998] == "Static"
    assert "Bad" not in registry.list_all().values()
    assert "Invalid datasource id" in caplog.text
