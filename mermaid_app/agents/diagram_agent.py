import logging
from typing import Optional

from mermaid_app.agents.gemini_client import GeminiClient
from mermaid_app.models import DiagramResponse
from mermaid_app.utils.mermaid_utils import (
    create_fallback_diagram,
    extract_mermaid_code,
    validate_mermaid_syntax,
)

logger = logging.getLogger(__name__)

FALLBACK_WARNING = "Generated diagram was invalid, using fallback"

MERMAID_SYSTEM_INSTRUCTION = """You are an expert in creating Mermaid diagrams. Follow these rules strictly:

1. Analyze the user's requirements carefully
2. Choose the most appropriate Mermaid diagram type (flowchart, sequenceDiagram, classDiagram, gantt, erDiagram, etc.)
3. Generate ONLY valid Mermaid syntax code, nothing else

4. CRITICAL SYNTAX RULE FOR SEQUENCE DIAGRAMS:
   ANY participant name containing parentheses (), commas, spaces, or special characters MUST be wrapped in double quotes.

   CORRECT examples:
   participant "Education (Courses, Books, Videos)"
   participant "User Service"
   participant "Payment Gateway (Stripe)"

   WRONG examples (NEVER do this):
   participant Education (Courses, Books, Videos)
   participant User Service

   If the name has NO special characters, quotes are optional:
   participant User
   participant Database

5. Use proper indentation and formatting
6. Include meaningful labels and descriptions
7. Make the diagram comprehensive but not overly complex
8. Ensure all syntax follows Mermaid.js specifications exactly

CRITICAL RULES:
- Return ONLY the Mermaid code
- NO explanations before or after
- NO markdown code blocks (no ```)
- NO additional text or comments outside the diagram
- Start directly with the diagram type (e.g., "flowchart TD" or "sequenceDiagram")
- ALWAYS wrap participant names with parentheses or commas in double quotes"""


class DiagramAgent:
    def __init__(self, client: Optional[GeminiClient] = None):
        self.client = client or GeminiClient()

    def generate_diagram(self, user_prompt: str) -> DiagramResponse:
        """
        Generate a Mermaid diagram for an already validated prompt.

        Makes exactly one model call. Structural problems in the generated text
        are recovered with a fallback diagram built from ``user_prompt``.

        Raises:
            ModelCallError: when the model call fails
        """
        settings = self.client.settings
        raw_text = self.client.generate_text(
            f"Create a Mermaid diagram for: {user_prompt}",
            system_instruction=MERMAID_SYSTEM_INSTRUCTION,
            temperature=settings.diagram_temperature,
            max_output_tokens=settings.diagram_max_output_tokens,
            model=settings.diagram_model,
        )

        mermaid_code = extract_mermaid_code(raw_text)
        logger.debug(f"Cleaned diagram code:\n{mermaid_code}")

        validation = validate_mermaid_syntax(mermaid_code)
        if not validation.is_valid:
            logger.warning(f"Generated invalid Mermaid syntax: {validation.error}")
            logger.warning(f"Generated code: {mermaid_code}")
            return DiagramResponse(
                mermaidCode=create_fallback_diagram(user_prompt),
                success=True,
                warning=FALLBACK_WARNING,
                validationError=validation.error,
            )

        return DiagramResponse(mermaidCode=mermaid_code, success=True, generated=True)
