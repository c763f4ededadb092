# moviesearch/llm_manager.py  -- openai>=1.0.0
"""
One-shot chat completion against the OpenAI API.

No retries, no streaming, no conversation state kept between calls.
"""

import logging
from typing import Dict, List, Optional

import openai

from moviesearch.config import Settings, load_settings, make_openai_client
from moviesearch.errors import CompletionProviderError

logger = logging.getLogger(__name__)

PROMPT_SYSTEM = "You are an AI assistant, answer any questions to the best of your ability"

DEFAULT_QUESTION = "What is the difference between types any and unknown when it comes to using Typescript?"


def build_messages(question: str = DEFAULT_QUESTION) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": PROMPT_SYSTEM},
        {"role": "user", "content": question},
    ]


def complete(
    messages: List[Dict[str, str]],
    client: Optional[openai.OpenAI] = None,
    settings: Optional[Settings] = None,
) -> str:
    """
    Send messages to the chat-completions endpoint and return the first choice's text.

    Raises:
        ConfigurationError: no client given and OPENAI_API_KEY is missing
        CompletionProviderError: the request failed or returned no choices
    """
    settings = settings or load_settings()
    if client is None:
        client = make_openai_client(settings)

    kwargs = {"model": settings.llm_model, "messages": messages}
    if settings.llm_temperature is not None:
        kwargs["temperature"] = settings.llm_temperature

    logger.info(f"[llm] Sending {len(messages)} messages to {settings.llm_model}")
    try:
        resp = client.chat.completions.create(**kwargs)
    except openai.OpenAIError as e:
        raise CompletionProviderError(f"Chat completion request failed: {e}") from e

    if not resp.choices:
        raise CompletionProviderError("Chat completion returned no choices")
    # response shape: .choices[0].message.content
    content = resp.choices[0].message.content
    return content if content is not None else ""


def ask_default_question(client: Optional[openai.OpenAI] = None, settings: Optional[Settings] = None) -> str:
    return complete(build_messages(), client=client, settings=settings)
