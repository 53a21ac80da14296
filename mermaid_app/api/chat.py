import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from mermaid_app.agents.content_agent import ContentAgent
from mermaid_app.agents.gemini_client import ModelCallError
from mermaid_app.models import ChatRequest

logger = logging.getLogger(__name__)

router = APIRouter()

content_agent = ContentAgent()


@router.post("/chat")
def chat(request: ChatRequest):
    """Return lightly formatted prose for the prompt."""
    logger.info(f"Prompt received at server (GEMINI): {request.prompt}")
    try:
        text = content_agent.generate_text(request.prompt)
    except ModelCallError as e:
        logger.error(f"Error: {e.message}")
        return JSONResponse(status_code=500, content={"error": "Failed to generate response"})
    return {"text": text}
