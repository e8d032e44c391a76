import httpx
import openai

from lexdocs.enrichment.client_base import BaseEnrichmentClient
from lexdocs.enrichment.exceptions import EnrichmentError, EnrichmentNetworkError
from lexdocs.enrichment.models import ChatCompletion


class OpenAIClientAdapter(BaseEnrichmentClient):
    """Enrichment AI client adapter built on OpenAI-compatible chat API.

    The SDK client is created on the first call and reused afterwards.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._api_key = api_key
        self._timeout_seconds = timeout_seconds
        self._base_url = base_url
        self._client: openai.OpenAI | None = None

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> ChatCompletion:
        try:
            response = self._get_client().chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "legal_document_metadata",
                        "strict": True,
                        "schema": json_schema,
                    },
                },
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise EnrichmentNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise EnrichmentNetworkError(f"AI provider API error: {exc}") from exc
        except openai.OpenAIError as exc:
            raise EnrichmentError(f"AI provider client error: {exc}") from exc

        if not response.choices:
            raise EnrichmentError("AI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise EnrichmentError("AI returned empty response")

        usage = getattr(response, "usage", None)
        return ChatCompletion(
            content=content,
            prompt_tokens=getattr(usage, "prompt_tokens", None),
            completion_tokens=getattr(usage, "completion_tokens", None),
        )

    def _get_client(self) -> openai.OpenAI:
        if self._client is None:
            self._client = openai.OpenAI(
                api_key=self._api_key,
                timeout=self._timeout_seconds,
                base_url=self._base_url,
            )
        return self._client
