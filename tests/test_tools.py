"""Tool registry payloads and the Agents SDK bindings."""

import asyncio
import json

from agents import FunctionTool

from customer_manager.tools import TOOL_REGISTRY, build_function_tools, invoke_tool


def _call(service, tool_name, **arguments):
    return json.loads(invoke_tool(service, tool_name, arguments))


def test_registry_exposes_six_described_tools():
    assert set(TOOL_REGISTRY) == {
        "get_all_customers",
        "get_customer_by_id",
        "search_customer_by_name",
        "create_customer",
        "update_customer",
        "delete_customer",
    }
    for spec in TOOL_REGISTRY.values():
        assert spec.description
        assert spec.params_json_schema["type"] == "object"


def test_get_all_and_get_by_id(service):
    customers = _call(service, "get_all_customers")
    assert [c["id"] for c in customers] == [1, 2, 3]
    assert _call(service, "get_customer_by_id", id=3)["name"] == "Bob Wilson"


def test_lookup_errors_are_inline(service):
    assert _call(service, "get_customer_by_id", id=0) == {"error": "Invalid customer ID"}
    assert _call(service, "get_customer_by_id", id=9) == {"error": "Customer with ID 9 not found"}
    assert _call(service, "search_customer_by_name", name=" ") == {"error": "Customer name is required"}
    assert _call(service, "search_customer_by_name", name="zzz") == {"error": "Customer 'zzz' not found"}


def test_search(service):
    assert _call(service, "search_customer_by_name", name="wIlSoN")["id"] == 3


def test_create_update_delete(service):
    created = _call(service, "create_customer", name="Ann Lee", email="ann@x.com")
    assert created["id"] == 4
    assert "createdAt" in created

    updated = _call(service, "update_customer", id=4, name="Ann Kim", email="ann@y.com")
    assert updated["name"] == "Ann Kim"
    assert updated["createdAt"] == created["createdAt"]

    assert _call(service, "delete_customer", id=4)["success"] is True
    assert _call(service, "delete_customer", id=4) == {"error": "Customer with ID 4 not found"}


def test_write_validation_errors(service):
    assert _call(service, "create_customer", name="", email="a@b.c") == {"error": "Name and email are required"}
    assert _call(service, "update_customer", id=77, name="A", email="a@b.c") == {
        "error": "Customer with ID 77 not found"
    }
    assert len(service.get_all()) == 3


def test_unknown_tool_and_bad_arguments(service):
    assert _call(service, "drop_table") == {"error": "Tool 'drop_table' not found"}
    assert "error" in _call(service, "get_customer_by_id", customer="1")
    assert "error" in _call(service, "get_customer_by_id")
    assert "error" in _call(service, "create_customer", name="Ann", email="a@b.c", id=9)


def test_wrongly_typed_arguments_return_error_payloads(service):
    assert _call(service, "search_customer_by_name", name=5) == {"error": "Customer name is required"}
    assert _call(service, "create_customer", name=["a"], email="a@b.c") == {"error": "Name and email are required"}
    assert _call(service, "update_customer", id=1, name="Ann", email=None) == {"error": "Name and email are required"}
    for bad_id in ("1", 1.0, True, None):
        assert _call(service, "get_customer_by_id", id=bad_id) == {"error": "Invalid customer ID"}
        assert _call(service, "delete_customer", id=bad_id) == {"error": "Invalid customer ID"}
    assert len(service.get_all()) == 3
    assert service.get_by_id(1).name == "John Doe"


def test_function_tools_bind_to_service(service):
    tools = build_function_tools(service)
    assert all(isinstance(tool, FunctionTool) for tool in tools)
    by_name = {tool.name: tool for tool in tools}
    assert set(by_name) == set(TOOL_REGISTRY)

    payload = asyncio.run(by_name["create_customer"].on_invoke_tool(None, '{"name": "Ann Lee", "email": "ann@x.com"}'))
    assert json.loads(payload)["id"] == 4
    assert service.get_by_id(4).name == "Ann Lee"

    payload = asyncio.run(by_name["get_customer_by_id"].on_invoke_tool(None, "not json"))
    assert json.loads(payload) == {"error": "Tool arguments must be a JSON object"}
