import json
from typing import Any, ClassVar

import httpx
import openai

from docbrief.analysis.client_base import BaseAnalysisClient
from docbrief.analysis.exceptions import AnalysisNetworkError, AnalysisValidationError
from docbrief.analysis.models import RATE_LIMIT_CODE
from docbrief.analysis.prompt_loader import load_prompt
from docbrief.intake.models import DocumentKind


class OpenAIAnalysisClient(BaseAnalysisClient):
    """Analysis client that calls an OpenAI-compatible chat API directly.

    Produces the same wire payloads as the hosted analysis functions so the
    rest of the pipeline cannot tell the transports apart.
    """

    PROMPTS: ClassVar[dict[DocumentKind, tuple[str, str]]] = {
        DocumentKind.CONTRACT: ("analysis_prompt.txt", "qa_prompt.txt"),
        DocumentKind.OFFER_LETTER: (
            "offer_letter_analysis_prompt.txt",
            "offer_letter_qa_prompt.txt",
        ),
    }

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        timeout_seconds: float,
        base_url: str | None = None,
        temperature: float = 0.2,
        kind: DocumentKind = DocumentKind.CONTRACT,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self._kind = kind
        analysis_prompt, qa_prompt = self.PROMPTS[kind]
        self._analysis_prompt = load_prompt(analysis_prompt)
        self._qa_prompt_template = load_prompt(qa_prompt)

    async def analyze(self, document_text: str, *, identity_token: str | None = None) -> Any:
        messages = [
            {"role": "system", "content": self._analysis_prompt},
            {
                "role": "user",
                "content": f"Here is my {self._kind.label}. Please analyze it:\n\n{document_text}",
            },
        ]
        content = await self._complete(messages, json_mode=True)
        if content is None:
            return {"success": False, "error": "AI returned empty response"}
        if isinstance(content, dict):
            return content
        return {"success": True, "analysis": parse_json_content(content)}

    async def ask(
        self,
        *,
        original_text: str,
        analysis_result: dict[str, Any],
        messages: list[dict[str, str]],
    ) -> Any:
        system_prompt = self._qa_prompt_template.format(
            original_text=original_text or "Not available",
            analysis_json=json.dumps(analysis_result, indent=2),
        )
        content = await self._complete(
            [{"role": "system", "content": system_prompt}, *messages],
            json_mode=False,
        )
        if content is None:
            return {"success": False, "error": "AI returned empty response"}
        if isinstance(content, dict):
            return content
        return {"success": True, "reply": content}

    async def _complete(
        self,
        messages: list[dict[str, str]],
        *,
        json_mode: bool,
    ) -> str | dict[str, Any] | None:
        """Run one chat completion.

        Returns the message content, None for an empty answer, or a ready
        failure payload when the provider rate-limits the request.
        """
        extra: dict[str, Any] = {}
        if json_mode:
            extra["response_format"] = {"type": "json_object"}
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                temperature=self._temperature,
                messages=messages,  # type: ignore[arg-type]
                **extra,
            )
        except openai.RateLimitError as exc:
            return {"success": False, "error": str(exc), "errorCode": RATE_LIMIT_CODE}
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise AnalysisNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise AnalysisNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            return None
        return response.choices[0].message.content


def parse_json_content(raw: str) -> dict[str, Any]:
    """Decode a JSON object from model output, tolerating markdown fences.

    Raises:
        AnalysisValidationError: if the content is not a JSON object.
    """
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise AnalysisValidationError(f"Invalid JSON response: {exc}") from exc

    if not isinstance(parsed, dict):
        raise AnalysisValidationError("JSON response must be an object")
    return parsed
