"""
LLM client for contract scoring through an OpenAI-compatible chat API.
"""
import json
import logging
import re
import time

import openai
from openai import OpenAI
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from analyzer.config import Settings
from analyzer.errors import AnalysisFailedError, UpstreamFormatError
from analyzer.prompts import build_messages

logger = logging.getLogger(__name__)

# Errors worth another attempt when LLM_MAX_ATTEMPTS > 1
TRANSIENT_ERRORS = (openai.RateLimitError, openai.APIConnectionError)

_FENCE_RE = re.compile(r"^```(?:json|JSON)?\s*(.*?)\s*```$", re.DOTALL)


def _build_client(settings: Settings) -> OpenAI:
    """Create an SDK client for the configured provider."""
    return OpenAI(
        api_key=settings.require_api_key(),
        base_url=settings.provider.base_url,
        timeout=settings.timeout,
        max_retries=0,
    )


@retry(
    stop=stop_after_attempt(1),
    wait=wait_exponential(multiplier=1, min=1, max=5),
    retry=retry_if_exception_type(TRANSIENT_ERRORS),
    reraise=True
)
def _call_llm(client: OpenAI, settings: Settings, messages: list) -> str:
    """
    Send one chat completion request and return the reply text.

    Retries are governed by the caller through ``retry_with``.
    """
    request = {
        'model': settings.model,
        'messages': messages,
        'temperature': settings.temperature,
        'max_tokens': settings.max_tokens,
    }
    if settings.json_mode:
        request['response_format'] = {"type": "json_object"}

    response = client.chat.completions.create(**request)

    if not response.choices:
        raise AnalysisFailedError("AI service returned no choices")
    return response.choices[0].message.content or ""


def request_completion(settings: Settings, contract_text: str) -> str:
    """
    Submit the scoring prompt for a contract and return the raw reply.

    Args:
        settings: Provider, model and sampling settings for this request.
        contract_text: The contract text, embedded verbatim in the prompt.

    Returns:
        Raw reply text from the model.

    Raises:
        ConfigurationError: If the provider credential is missing.
        openai.OpenAIError: On backend failures (after any retries).
    """
    client = _build_client(settings)
    messages = build_messages(contract_text)

    start_time = time.time()
    call = _call_llm.retry_with(stop=stop_after_attempt(settings.max_attempts))
    try:
        return call(client, settings, messages)
    finally:
        duration = time.time() - start_time
        logger.info(
            f"LLM call finished: provider={settings.provider.name}, "
            f"model={settings.model}, duration={duration:.2f}s"
        )


def parse_json_reply(response_text: str) -> dict:
    """
    Parse the model reply as a JSON object.

    Tolerates surrounding whitespace, a Markdown code fence, and prose around
    the outermost braces.

    Raises:
        UpstreamFormatError: If no JSON object can be recovered.
    """
    text = (response_text or "").strip()

    fenced = _FENCE_RE.match(text)
    if fenced:
        text = fenced.group(1)

    candidates = [text]
    start, end = text.find('{'), text.rfind('}')
    if start != -1 and end > start and (start, end) != (0, len(text) - 1):
        candidates.append(text[start:end + 1])

    last_error = None
    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except ValueError as e:
            # JSONDecodeError, or an integer past the int-conversion digit limit
            last_error = e
            continue
        if not isinstance(data, dict):
            raise UpstreamFormatError(details=f"Expected a JSON object, got {type(data).__name__}")
        return data

    preview = text[:200].replace('\n', '\\n')
    logger.error(f"Failed to parse JSON response: {last_error}; preview: {preview}")
    raise UpstreamFormatError(details=str(last_error))
