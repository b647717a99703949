import logging
from typing import Optional

from openai import OpenAI, OpenAIError

from tripcraft import config
from tripcraft.integrations.exceptions import IntegrationError, UpstreamAPIError

logger = logging.getLogger(__name__)

_client: Optional[OpenAI] = None


def get_client() -> OpenAI:
    global _client
    if _client is not None:
        return _client
    if not config.OPENAI_API_KEY:
        raise IntegrationError("OPENAI_API_KEY not set; external generation unavailable")
    _client = OpenAI(
        api_key=config.OPENAI_API_KEY,
        base_url=config.OPENAI_BASE_URL or None,
        timeout=config.LLM_TIMEOUT_SECONDS,
        max_retries=0,  # a failed call goes straight to the local synthesizer
    )
    return _client


def call_gpt(
    system: str,
    prompt: str,
    model: str = config.LLM_MODEL,
    temperature: float = config.LLM_TEMPERATURE,
    max_tokens: int = config.LLM_MAX_TOKENS,
) -> str:
    """Run one chat completion and return the message text.

    Transport errors, timeouts, non-2xx statuses and empty answers all raise
    UpstreamAPIError; a missing API key raises IntegrationError.
    """
    client = get_client()
    try:
        resp = client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            temperature=temperature,
            max_tokens=max_tokens,
        )
    except OpenAIError as e:
        raise UpstreamAPIError(f"Generation request failed: {e}") from e

    if not resp.choices or not resp.choices[0].message.content:
        raise UpstreamAPIError("No response generated")
    return resp.choices[0].message.content
