"""
Request and response schemas for the Rashed API.

Resource fields travel in camelCase (``techStack``, ``deployedAt``) on the
wire; request bodies accept either camelCase or snake_case names.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

ApprovalStatus = Literal["pending", "approved", "rejected"]


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


# Users


class UserResponse(CamelModel):
    """Public view of a user; the password hash is never included."""

    id: int
    username: str
    name: Optional[str] = None
    created_at: Optional[datetime] = None


class RegisterRequest(CamelModel):
    username: str = Field(..., min_length=3, max_length=150)
    password: str = Field(..., min_length=1)
    name: Optional[str] = None


class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ProfileUpdateRequest(CamelModel):
    username: Optional[str] = Field(None, min_length=3, max_length=150)
    name: Optional[str] = None


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8)
    confirm_password: Optional[str] = None

    @model_validator(mode="after")
    def passwords_match(self) -> "ChangePasswordRequest":
        if self.confirm_password is not None and (
            self.confirm_password != self.new_password
        ):
            raise ValueError("Passwords do not match")
        return self


# Projects


class ProjectCreate(CamelModel):
    name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    description: Optional[str] = None
    tech_stack: Optional[List[str]] = None


class ProjectResponse(CamelModel):
    id: int
    name: str
    type: str
    description: Optional[str] = None
    tech_stack: Optional[List[str]] = None
    created_at: Optional[datetime] = None
    user_id: Optional[int] = None


# Deployments and environments


class DeploymentCreate(CamelModel):
    project_id: Optional[int] = None
    environment: str = Field(..., min_length=1)
    status: str = Field(..., min_length=1)
    logs: Optional[str] = None


class DeploymentResponse(CamelModel):
    id: int
    project_id: Optional[int] = None
    environment: str
    status: str
    logs: Optional[str] = None
    deployed_at: Optional[datetime] = None
    deployed_by: Optional[str] = None


class EnvironmentUpdate(CamelModel):
    """Partial environment update; only fields sent are changed."""

    name: Optional[str] = None
    type: Optional[str] = None
    config: Optional[Dict[str, Any]] = None
    status: Optional[str] = None
    last_deployed: Optional[datetime] = None

    @field_validator("name", "type", "status")
    @classmethod
    def not_null(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("Field cannot be null")
        return value


class EnvironmentResponse(CamelModel):
    id: int
    name: str
    type: str
    config: Optional[Dict[str, Any]] = None
    status: str
    last_deployed: Optional[datetime] = None


class DeployRequest(CamelModel):
    """Body of a deploy-to-environment request; every field is optional."""

    project_id: Optional[int] = None
    logs: Optional[str] = None


# Integrations


class IntegrationCreate(CamelModel):
    name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    config: Optional[Dict[str, Any]] = None
    status: str = Field(..., min_length=1)


class IntegrationResponse(CamelModel):
    id: int
    name: str
    type: str
    config: Optional[Dict[str, Any]] = None
    status: str
    last_used: Optional[datetime] = None
    request_count: int = 0


# Feeds


class ActivityResponse(CamelModel):
    id: int
    type: str
    description: str
    project_id: Optional[int] = None
    timestamp: Optional[datetime] = None
    metadata: Optional[Dict[str, Any]] = None


class ApprovalResponse(CamelModel):
    id: int
    title: str
    description: str
    type: str
    priority: str
    status: str
    created_at: Optional[datetime] = None
    metadata: Optional[Dict[str, Any]] = None


class ApprovalStatusUpdate(CamelModel):
    status: ApprovalStatus


class CountResponse(BaseModel):
    count: int


class LogResponse(CamelModel):
    id: int
    type: str
    message: str
    timestamp: Optional[datetime] = None
    metadata: Optional[Dict[str, Any]] = None


# Chat


class ChatMessage(CamelModel):
    id: str
    role: Literal["user", "assistant"]
    content: str
    timestamp: str


class MessageCreate(CamelModel):
    content: str = Field(..., min_length=1)


# Settings


class ApiKeysUpdate(CamelModel):
    openai_api_key: str = Field(..., min_length=1)


class NotificationSettings(CamelModel):
    email_notifications: bool
    deployment_alerts: bool
    security_alerts: bool
    weekly_reports: bool


DEFAULT_NOTIFICATIONS = NotificationSettings(
    email_notifications=True,
    deployment_alerts=True,
    security_alerts=True,
    weekly_reports=False,
)


class SettingsResponse(CamelModel):
    """Settings of the current session; the API key is only shown masked."""

    notifications: NotificationSettings
    openai_api_key: Optional[str] = None


# AI proxy


class CompletionMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ChatCompletionRequest(CamelModel):
    messages: List[CompletionMessage] = Field(..., min_length=1)
    temperature: Optional[float] = Field(None, ge=0, le=2)
    max_tokens: Optional[int] = Field(None, gt=0)


class CodeGenerationRequest(CamelModel):
    prompt: str = Field(..., min_length=1)
    language: str = Field(..., min_length=1)
    additional_instructions: Optional[str] = None


class CodeRequest(CamelModel):
    """Body of the analyze and document operations."""

    code: str = Field(..., min_length=1)
    language: str = Field(..., min_length=1)


class RequirementsRequest(CamelModel):
    description: str = Field(..., min_length=1)


class DocumentationResponse(BaseModel):
    documentation: str
