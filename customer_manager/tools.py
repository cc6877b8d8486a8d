"""
Agent tool registry
===================

Purpose:
- Expose the customer directory operations as named, described tools for the
  agent: a plain table of `ToolSpec` entries plus a converter to Agents SDK
  `FunctionTool` objects.

Dependencies:
- `agents` SDK (`FunctionTool`, `RunContextWrapper`)

Notes:
- Handlers always return JSON text. Expected failures (bad input, unknown customer)
  come back inline as `{"error": ...}` and never raise to the agent.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from agents import FunctionTool, RunContextWrapper

from .models import Customer
from .service import CustomerService
from .validators import (
    CustomerInputError,
    validate_customer_fields,
    validate_customer_id,
    validate_search_name,
)

logger = logging.getLogger(__name__)

ToolHandler = Callable[..., str]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    params_json_schema: Dict[str, Any]
    handler: ToolHandler


def _object_schema(**properties: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties),
        "additionalProperties": False,
    }


_ID = {"type": "integer", "description": "Customer ID (positive integer)."}
_NAME = {"type": "string", "description": "Customer full name."}
_EMAIL = {"type": "string", "description": "Customer email address."}


def _dump(payload: Any) -> str:
    if isinstance(payload, Customer):
        payload = payload.model_dump(mode="json", by_alias=True)
    elif isinstance(payload, list):
        payload = [item.model_dump(mode="json", by_alias=True) for item in payload]
    return json.dumps(payload, ensure_ascii=False)


def _error(message: str) -> str:
    return json.dumps({"error": message}, ensure_ascii=False)


def get_all_customers(service: CustomerService) -> str:
    return _dump(service.get_all())


def get_customer_by_id(service: CustomerService, id: int) -> str:
    validate_customer_id(id)
    customer = service.get_by_id(id)
    if customer is None:
        return _error(f"Customer with ID {id} not found")
    return _dump(customer)


def search_customer_by_name(service: CustomerService, name: str) -> str:
    name = validate_search_name(name)
    customer = service.search_by_name(name)
    if customer is None:
        return _error(f"Customer '{name}' not found")
    return _dump(customer)


def create_customer(service: CustomerService, name: str, email: str) -> str:
    name, email = validate_customer_fields(name, email)
    return _dump(service.create(name, email))


def update_customer(service: CustomerService, id: int, name: str, email: str) -> str:
    validate_customer_id(id)
    name, email = validate_customer_fields(name, email)
    customer = service.update(id, name, email)
    if customer is None:
        return _error(f"Customer with ID {id} not found")
    return _dump(customer)


def delete_customer(service: CustomerService, id: int) -> str:
    validate_customer_id(id)
    if not service.delete(id):
        return _error(f"Customer with ID {id} not found")
    return _dump({"success": True, "message": f"Customer with ID {id} deleted"})


TOOL_REGISTRY: Dict[str, ToolSpec] = {
    spec.name: spec
    for spec in (
        ToolSpec(
            "get_all_customers",
            "List every customer in the directory.",
            _object_schema(),
            get_all_customers,
        ),
        ToolSpec(
            "get_customer_by_id",
            "Look up a single customer by numeric ID.",
            _object_schema(id=_ID),
            get_customer_by_id,
        ),
        ToolSpec(
            "search_customer_by_name",
            "Find the first customer whose name contains the given text (case-insensitive).",
            _object_schema(name={"type": "string", "description": "Full or partial customer name."}),
            search_customer_by_name,
        ),
        ToolSpec(
            "create_customer",
            "Create a new customer. Name and email are required.",
            _object_schema(name=_NAME, email=_EMAIL),
            create_customer,
        ),
        ToolSpec(
            "update_customer",
            "Replace the name and email of an existing customer.",
            _object_schema(id=_ID, name=_NAME, email=_EMAIL),
            update_customer,
        ),
        ToolSpec(
            "delete_customer",
            "Delete a customer by numeric ID.",
            _object_schema(id=_ID),
            delete_customer,
        ),
    )
}


def invoke_tool(service: CustomerService, name: str, arguments: Dict[str, Any]) -> str:
    """
    Run a registered tool against `service`.

    Parameters:
    - service: `CustomerService`
    - name: `str` registry key.
    - arguments: `Dict[str, Any]` keyword arguments from the model.

    Returns:
    - `str`: JSON payload; `{"error": ...}` for unknown tools, bad input or absence.
    """
    spec = TOOL_REGISTRY.get(name)
    if spec is None:
        return _error(f"Tool '{name}' not found")
    expected = set(spec.params_json_schema["properties"])
    if set(arguments) != expected:
        return _error(f"Invalid arguments for tool '{name}'; expected {sorted(expected)}")
    try:
        return spec.handler(service, **arguments)
    except CustomerInputError as exc:
        logger.debug("Tool %s rejected input: %s", name, exc.message)
        return _error(exc.message)


def build_function_tools(service: CustomerService) -> List[FunctionTool]:
    """Bind every registry entry to `service` as an Agents SDK `FunctionTool`."""

    def _make(spec: ToolSpec) -> FunctionTool:
        async def on_invoke(_ctx: RunContextWrapper[Any], args_json: str) -> str:
            try:
                arguments = json.loads(args_json) if args_json else {}
            except json.JSONDecodeError:
                return _error("Tool arguments must be a JSON object")
            if not isinstance(arguments, dict):
                return _error("Tool arguments must be a JSON object")
            return invoke_tool(service, spec.name, arguments)

        return FunctionTool(
            name=spec.name,
            description=spec.description,
            params_json_schema=spec.params_json_schema,
            on_invoke_tool=on_invoke,
        )

    return [_make(spec) for spec in TOOL_REGISTRY.values()]
