"""
Customer Manager data models
============================

Purpose:
- Pydantic models shared by the directory service, the HTTP API and the agent tools.

Notes:
- Wire field names are camelCase (`createdAt`, `sessionId`); Python attributes are
  snake_case and mapped through aliases.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Customer(BaseModel):
    """A single customer record owned by the directory service."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    created_at: datetime = Field(alias="createdAt")


class CustomerRequest(BaseModel):
    """
    Request body for create/update.

    Both fields are optional in the schema so that missing or blank values are
    rejected by `validators.validate_customer_fields` with the API's own 400
    message instead of a framework 422.
    """

    name: Optional[str] = None
    email: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    message: str
    timestamp: datetime


class ErrorResponse(BaseModel):
    error: str


class ChatRequest(BaseModel):
    """Request model for `/api/chat`."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = ""
    session_id: Optional[str] = Field(default=None, alias="sessionId")


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    response: str
    session_id: Optional[str] = Field(default=None, alias="sessionId")
