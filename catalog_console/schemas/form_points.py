"""Structured exercise instructions."""

from pydantic import BaseModel, Field


class FormPoints(BaseModel):
    """Instruction text split into its four ordered sections."""

    setup: list[str] = Field(default_factory=list)
    execution: list[str] = Field(default_factory=list)
    breathing: list[str] = Field(default_factory=list)
    alignment: list[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.setup or self.execution or self.breathing or self.alignment)


class InstructionsText(BaseModel):
    text: str = ""
