"""
Customer HTTP API
=================

Purpose:
- Controller-style routes over `CustomerService`: health check, list, search,
  get, create, update and delete.

Dependencies:
- `fastapi` routing and responses
- `customer_manager.validators` for caller-side checks; `CustomerInputError` is turned
  into a 400 `{error}` body by the handler registered in `main.create_app`.

Example:
```bash
curl -X POST http://localhost:8000/api/customers \
  -H 'Content-Type: application/json' \
  -d '{"name": "Ann Lee", "email": "ann@example.com"}'
```
"""

from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from .models import Customer, CustomerRequest, ErrorResponse, HealthResponse
from .service import CustomerService
from .validators import validate_customer_fields, validate_customer_id, validate_search_name

health_router = APIRouter(tags=["Health"])
router = APIRouter(prefix="/api/customers", tags=["Customers"])

NOT_FOUND = {404: {"model": ErrorResponse}}
BAD_REQUEST = {400: {"model": ErrorResponse}}


def get_customer_service(request: Request) -> CustomerService:
    """Return the service instance owned by the running app."""
    return request.app.state.customer_service


def _not_found(message: str) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": message})


@health_router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Return basic service health information."""
    return HealthResponse(
        status="Healthy",
        message="Customer Manager API is running",
        timestamp=datetime.now(timezone.utc),
    )


@router.get("", response_model=List[Customer])
def list_customers(service: CustomerService = Depends(get_customer_service)) -> List[Customer]:
    return service.get_all()


# Declared before `/{customer_id}` so "search" is not parsed as an id.
@router.get("/search", response_model=Customer, responses={**BAD_REQUEST, **NOT_FOUND})
def search_customer(name: str | None = None, service: CustomerService = Depends(get_customer_service)):
    """Return the first customer whose name contains `name` (case-insensitive)."""
    name = validate_search_name(name)
    customer = service.search_by_name(name)
    if customer is None:
        return _not_found(f"Customer '{name}' not found")
    return customer


@router.get("/{customer_id}", response_model=Customer, responses={**BAD_REQUEST, **NOT_FOUND})
def get_customer(customer_id: int, service: CustomerService = Depends(get_customer_service)):
    validate_customer_id(customer_id)
    customer = service.get_by_id(customer_id)
    if customer is None:
        return _not_found(f"Customer with ID {customer_id} not found")
    return customer


@router.post(
    "",
    response_model=Customer,
    status_code=status.HTTP_201_CREATED,
    responses=BAD_REQUEST,
)
def create_customer(
    body: CustomerRequest,
    response: Response,
    service: CustomerService = Depends(get_customer_service),
) -> Customer:
    """Create a customer; the response carries a `Location` header for the new record."""
    name, email = validate_customer_fields(body.name, body.email)
    customer = service.create(name, email)
    response.headers["Location"] = f"{router.prefix}/{customer.id}"
    return customer


@router.put("/{customer_id}", response_model=Customer, responses={**BAD_REQUEST, **NOT_FOUND})
def update_customer(
    customer_id: int,
    body: CustomerRequest,
    service: CustomerService = Depends(get_customer_service),
):
    validate_customer_id(customer_id)
    name, email = validate_customer_fields(body.name, body.email)
    customer = service.update(customer_id, name, email)
    if customer is None:
        return _not_found(f"Customer with ID {customer_id} not found")
    return customer


@router.delete(
    "/{customer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**BAD_REQUEST, **NOT_FOUND},
)
def delete_customer(customer_id: int, service: CustomerService = Depends(get_customer_service)):
    validate_customer_id(customer_id)
    if not service.delete(customer_id):
        return _not_found(f"Customer with ID {customer_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
