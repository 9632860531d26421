"""
Learning context schema.

The structured summary of a user's goals, experience, preferences and
project history, as produced by onboarding/profile code. Every field
is optional: missing or null values become empty, so partially filled
profiles still produce a query.

Accepts both snake_case names and the camelCase keys the onboarding
payloads use (learningStyle, currentProjects, completedTasks).
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LearningContext(BaseModel):
    """A user's learning context, the input to personalized retrieval."""

    model_config = ConfigDict(populate_by_name=True)

    goals: list[str] = Field(
        default_factory=list,
        description="What the user wants to achieve",
    )
    experience: str = Field(
        default="",
        description="Self-described experience level",
    )
    learning_style: str = Field(
        default="",
        alias="learningStyle",
        description="How the user prefers to learn",
    )
    preferences: list[str] = Field(
        default_factory=list,
        description="Technologies or topics the user prefers",
    )
    current_projects: list[str] = Field(
        default_factory=list,
        alias="currentProjects",
        description="Titles of projects in progress",
    )
    completed_projects: list[str] = Field(
        default_factory=list,
        alias="completedTasks",
        description="Titles of completed projects",
    )

    @field_validator(
        "goals", "preferences", "current_projects", "completed_projects", mode="before"
    )
    @classmethod
    def _coerce_list(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [value] if value else []
        return value

    @field_validator("experience", "learning_style", mode="before")
    @classmethod
    def _coerce_text(cls, value):
        if value is None:
            return ""
        if isinstance(value, (list, tuple)):
            return ", ".join(str(item) for item in value)
        return value
