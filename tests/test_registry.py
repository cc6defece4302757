import inspect
from types import ModuleType

import pytest
from mcp.server.fastmcp import FastMCP
from planka_mcp.core.errors import PlankaToolError
from planka_mcp.core.registry import (
    TOOLS_PACKAGE,
    discover_tool_modules,
    register_discovered_tools,
)
from planka_mcp.server import create_app

EXPECTED_TOOLS = {
    "planka_get_structure",
    "planka_get_board",
    "planka_create_card",
    "planka_get_card",
    "planka_update_card",
    "planka_move_card",
    "planka_delete_card",
    "planka_create_tasks",
    "planka_update_task",
    "planka_delete_task",
    "planka_manage_labels",
    "planka_set_card_labels",
    "planka_add_comment",
    "planka_get_comments",
    "planka_manage_lists",
}


def _make_module(name: str, code: str) -> ModuleType:
    module = ModuleType(name)
    exec(code, module.__dict__)
    return module


def _recording_app():
    app = FastMCP("test")
    registered = []

    def record_tool(name):
        def decorator(fn):
            registered.append((name, fn))
            return fn

        return decorator

    app.tool = record_tool  # type: ignore[attr-defined]
    return app, registered


@pytest.mark.asyncio
async def test_register_discovered_tools_registers_valid_tools_only(client):
    code = """
async def tool_fn(client, *, foo:int=1):
    return (client.base_url, foo)

async def _private(client):
    return None

async def wrong_first(arg1, client):
    return None

def sync_func(client):
    return None
"""
    mod = _make_module("fake_mod", code)
    app, registered = _recording_app()

    register_discovered_tools(app, client, modules=[mod])

    assert [n for n, _ in registered] == ["tool_fn"]

    # wrapper signature should not expose client
    sig = inspect.signature(registered[0][1])
    assert "client" not in sig.parameters

    async with client:
        result = await registered[0][1](foo=5)
    assert result == ("https://planka.example.com", 5)


@pytest.mark.asyncio
async def test_planka_errors_become_tool_errors(client):
    code = """
from planka_mcp.core.errors import PlankaNotFoundError

async def failing(client):
    raise PlankaNotFoundError("Resource not found: GET /api/cards/c1", status=404)

async def broken(client):
    raise RuntimeError("bug")
"""
    mod = _make_module("failing_mod", code)
    app, registered = _recording_app()
    register_discovered_tools(app, client, modules=[mod])
    tools = dict(registered)

    with pytest.raises(PlankaToolError) as exc:
        await tools["failing"]()
    assert str(exc.value) == "Resource not found: GET /api/cards/c1"
    assert exc.value.__cause__ is not None

    with pytest.raises(RuntimeError):
        await tools["broken"]()

    await client.aclose()


def test_register_discovered_tools_duplicate_names_raise(client):
    mod1 = _make_module("mod1", "async def tool_fn(client): return None")
    mod2 = _make_module("mod2", "async def tool_fn(client): return None")

    with pytest.raises(ValueError):
        register_discovered_tools(FastMCP("test"), client, modules=[mod1, mod2])


def test_discover_tool_modules_skips_import_failures(monkeypatch, caplog):
    import importlib
    import pkgutil

    class Info:
        def __init__(self, name):
            self.name = name

    def fake_iter_modules(path, prefix):
        return [Info(prefix + "good"), Info(prefix + "bad")]

    good_mod = _make_module(
        f"{TOOLS_PACKAGE}.good", "async def tool_fn(client): return None"
    )
    real_import_module = importlib.import_module

    def fake_import_module(name, *args, **kwargs):
        if name == f"{TOOLS_PACKAGE}.bad":
            raise ImportError("boom")
        if name == f"{TOOLS_PACKAGE}.good":
            return good_mod
        return real_import_module(name, *args, **kwargs)

    monkeypatch.setattr(pkgutil, "iter_modules", fake_iter_modules)
    monkeypatch.setattr(importlib, "import_module", fake_import_module)

    with caplog.at_level("ERROR"):
        modules = discover_tool_modules()

    assert [m.__name__ for m in modules] == [f"{TOOLS_PACKAGE}.good"]
    assert any("Failed importing tool module" in rec.message for rec in caplog.records)


@pytest.mark.asyncio
async def test_create_app_exposes_every_tool(client):
    app = create_app(client)

    tools = await app.list_tools()

    assert {t.name for t in tools} == EXPECTED_TOOLS
    by_name = {t.name: t for t in tools}
    assert "client" not in by_name["planka_get_board"].inputSchema["properties"]
    assert set(by_name["planka_create_card"].inputSchema["required"]) == {
        "list_id",
        "name",
    }
    await client.aclose()
