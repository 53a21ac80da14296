import logging
from typing import Any

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from mermaid_app.agents.diagram_agent import DiagramAgent
from mermaid_app.agents.gemini_client import ModelCallError
from mermaid_app.config import get_settings
from mermaid_app.models import DiagramRequest, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter()

diagram_agent = DiagramAgent()

MAX_PROMPT_LENGTH = 1000


@router.post("/generate-mermaid")
def generate_mermaid(body: Any = Body(None)):
    """
    Generate Mermaid code for the prompt, falling back to a static diagram
    when the model output does not pass validation.
    """
    # Any JSON value is accepted here; non-object bodies fall through to the 400 below
    prompt = DiagramRequest.model_validate(body).prompt if isinstance(body, dict) else None

    if not prompt or not isinstance(prompt, str):
        return JSONResponse(status_code=400, content={"error": "Valid prompt string is required"})

    if len(prompt) > MAX_PROMPT_LENGTH:
        return JSONResponse(
            status_code=400,
            content={"error": f"Prompt too long (max {MAX_PROMPT_LENGTH} characters)"},
        )

    logger.info(f"Diagram prompt received: {prompt[:50]}")

    try:
        result = diagram_agent.generate_diagram(prompt)
    except ModelCallError as e:
        logger.error(f"Error generating Mermaid diagram: {e.message}")
        error = ErrorResponse(error="Failed to generate diagram", details=e.message)
        if get_settings().is_development:
            error.stack = e.stack
        return JSONResponse(status_code=500, content=error.model_dump(exclude_none=True))

    return result.model_dump(exclude_none=True)
