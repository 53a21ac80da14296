from typing import Any, Optional
from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    prompt: Any = Field(None, description="Free-text request for the content writer")


class DiagramRequest(BaseModel):
    # Left untyped so a wrong-typed prompt gets the route's own 400 message
    prompt: Any = Field(None, description="Description of the diagram, at most 1000 characters")


class DiagramResponse(BaseModel):
    mermaidCode: str
    success: bool = True
    generated: Optional[bool] = None
    warning: Optional[str] = None
    validationError: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
    stack: Optional[str] = None
