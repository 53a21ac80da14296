from typing import Optional

from mermaid_app.agents.gemini_client import GeminiClient

CONTENT_SYSTEM_INSTRUCTION = (
    "You are a professional content writer. "
    "You need to highlight heavy tasks, bold important points and make sure "
    "that the content is easily digestible and easy to understand."
)


class ContentAgent:
    def __init__(self, client: Optional[GeminiClient] = None):
        self.client = client or GeminiClient()

    def generate_text(self, prompt: str) -> str:
        return self.client.generate_text(
            prompt,
            system_instruction=CONTENT_SYSTEM_INSTRUCTION,
            model=self.client.settings.chat_model,
        )
