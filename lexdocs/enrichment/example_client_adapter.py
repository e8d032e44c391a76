"""Offline enrichment client adapter.

Returns a fixed, schema-valid payload with every field unknown. Useful for
local development and for running the upload pipeline without an API key
while still exercising the enrichment path end to end.
"""

import json
from typing import ClassVar

from lexdocs.enrichment.client_base import BaseEnrichmentClient
from lexdocs.enrichment.models import ChatCompletion


class ExampleClientAdapter(BaseEnrichmentClient):
    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "title": None,
        "date": None,
        "court": None,
        "caseNumber": None,
        "summary": None,
        "caseType": None,
        "area": None,
        "areaData": None,
        "metadata": None,
    }

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> ChatCompletion:
        _ = model, temperature, system_prompt, user_prompt, json_schema
        return ChatCompletion(content=json.dumps(self.DEFAULT_RESPONSE))
