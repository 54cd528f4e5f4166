"""Pydantic argument models for the callable operations."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ToolArguments(BaseModel):
    """Base model: accepts camelCase wire names and snake_case field names."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class QueryComponentArgs(ToolArguments):
    component_name: str = Field(..., alias="componentName", description="Component name (case-insensitive, partial match)")

    @field_validator("component_name")
    @classmethod
    def validate_component_name(cls, v: str) -> str:
        """Ensure the name is not just whitespace."""
        if not v.strip():
            raise ValueError('Component name is required. Example: "Button", "Dialog", "Input"')
        return v.strip()


class SearchDocsArgs(ToolArguments):
    query: str = Field(..., description="Search query text")
    module: Optional[str] = Field(None, description="Restrict the search to one module")
    limit: Optional[int] = Field(None, description="Maximum results (default 10, max 50)")

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        """Ensure query text is not just whitespace."""
        if not v.strip():
            raise ValueError('Search query is required. Example: "form validation", "dialog patterns"')
        return v.strip()

    @field_validator("module")
    @classmethod
    def normalize_module(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()


class ListByCategoryArgs(ToolArguments):
    category: Optional[str] = Field(None, description="Component category; omit to list categories")


class GetFoundationArgs(ToolArguments):
    topic: Optional[str] = Field(None, description="Foundation topic or alias; omit for an overview")


class GetPatternArgs(ToolArguments):
    pattern_category: Optional[str] = Field(None, alias="patternCategory", description="Pattern category folder")
    pattern_name: Optional[str] = Field(None, alias="patternName", description="Specific pattern in the category")


class GetEnterpriseArgs(ToolArguments):
    topic: Optional[str] = Field(None, description="Enterprise topic or alias; omit for an overview")


class ComponentNameArgs(QueryComponentArgs):
    """Arguments shared by the example and props sub-extractions."""


class SuggestComponentsArgs(ToolArguments):
    ui_description: str = Field(..., alias="uiDescription", description="Free-text description of the UI")

    @field_validator("ui_description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        if not v.strip():
            raise ValueError(
                'A UI description is required. Example: "a settings page with toggles and a save button"'
            )
        return v.strip()


class ImplementationGuideArgs(ToolArguments):
    goal: str = Field(..., description="Description of the UI goal")

    @field_validator("goal")
    @classmethod
    def validate_goal(cls, v: str) -> str:
        if not v.strip():
            raise ValueError(
                'An implementation goal is required. Example: "build a login form with email and password"'
            )
        return v.strip()


class ListAllDocsArgs(ToolArguments):
    pass


class ReindexArgs(ToolArguments):
    force: bool = Field(True, description="Rebuild even if nothing changed")
