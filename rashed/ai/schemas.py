"""
Structured results returned by the code review and requirements operations.

Field names follow the camelCase keys the prompts ask for. Unknown keys are
kept so nothing the model adds is lost on the way to the client.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _ModelOutput(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump with camelCase keys, extras included."""
        return self.model_dump(by_alias=True)


class CodeIssue(_ModelOutput):
    """A single finding of a code review."""

    severity: Optional[str] = None
    type: Optional[str] = None
    description: str = ""
    suggestion: Optional[str] = None
    line_numbers: List[Any] = Field(default_factory=list)


class CodeAnalysis(_ModelOutput):
    """Code review result."""

    issues: List[CodeIssue] = Field(default_factory=list)
    summary: str = ""
    score: Optional[float] = None


class TechnicalSpecifications(_ModelOutput):
    suggested_architecture: Any = ""
    key_components: List[Any] = Field(default_factory=list)
    data_model: List[Any] = Field(default_factory=list)
    api_endpoints: List[Any] = Field(default_factory=list)


class TechnicalRequirements(_ModelOutput):
    """Requirements extracted from a natural language project description."""

    functional_requirements: List[Any] = Field(default_factory=list)
    non_functional_requirements: List[Any] = Field(default_factory=list)
    technical_specifications: TechnicalSpecifications = Field(
        default_factory=TechnicalSpecifications
    )
    implementation_plan: List[Any] = Field(default_factory=list)
