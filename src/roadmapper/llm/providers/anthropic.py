"""Anthropic LLM provider using Claude Agent SDK."""

import asyncio
import logging
import os
from collections.abc import AsyncIterator, Iterator
from typing import Any

from claude_agent_sdk import (
    AssistantMessage,
    ClaudeAgentOptions,
    ResultMessage,
    TextBlock,
    query,
)

from roadmapper.llm.providers.base import LLMProvider, StreamChunk, StreamComplete

logger = logging.getLogger(__name__)

WEB_SEARCH_TOOLS = ["WebSearch", "WebFetch"]


def _extract_token_usage(message: ResultMessage) -> tuple[int | None, int | None]:
    """Best-effort extraction of token usage from SDK result messages."""
    usage: Any = getattr(message, "usage", None)
    if usage is None:
        return None, None
    if isinstance(usage, dict):
        tokens_in = usage.get("input_tokens")
        tokens_out = usage.get("output_tokens")
    else:
        tokens_in = getattr(usage, "input_tokens", None)
        tokens_out = getattr(usage, "output_tokens", None)
    return (
        int(tokens_in) if tokens_in is not None else None,
        int(tokens_out) if tokens_out is not None else None,
    )


class AnthropicProvider(LLMProvider):
    """Anthropic provider using Claude Agent SDK.

    Supports both web auth (default) and API key authentication.
    """

    provider_name = "anthropic"

    def __init__(
        self,
        model: str = "claude-sonnet-4-5",
        api_key: str | None = None,
        use_web_auth: bool = True,
        web_search: bool = True,
    ) -> None:
        """Initialize Anthropic provider.

        Args:
            model: Model identifier.
            api_key: Optional API key. If None and use_web_auth=True, uses web auth.
            use_web_auth: Whether to use web auth (default True).
            web_search: Allow the model to search the web for sources.
        """
        super().__init__(model=model, api_key=api_key)
        self.use_web_auth = use_web_auth and api_key is None
        self.web_search = web_search
        logger.info(
            "AnthropicProvider initialized (model=%s, web_auth=%s, web_search=%s)",
            model,
            self.use_web_auth,
            web_search,
        )

    def stream_message(
        self,
        messages: list[dict[str, str]],
        system: str = "",
        max_tokens: int = 4096,
    ) -> Iterator[StreamChunk | StreamComplete]:
        """Stream response chunks from Claude via Agent SDK.

        The SDK's async message stream is pumped one message at a time so
        text blocks reach the caller as they arrive.
        """
        prompt = self._format_messages_as_prompt(messages)
        logger.info(
            "stream_message: prompt=%d chars, system=%d chars",
            len(prompt),
            len(system),
        )

        env_backup = os.environ.get("ANTHROPIC_API_KEY")
        override_env = self.use_web_auth or bool(self.api_key)
        if self.use_web_auth:
            # Clear API key to force web auth
            os.environ.pop("ANTHROPIC_API_KEY", None)
        elif self.api_key:
            os.environ["ANTHROPIC_API_KEY"] = self.api_key

        options = ClaudeAgentOptions(
            allowed_tools=WEB_SEARCH_TOOLS if self.web_search else [],
            system_prompt=system if system else None,
            model=self.model,
        )
        loop = asyncio.new_event_loop()
        stream: AsyncIterator[Any] = query(prompt=prompt, options=options)
        full_text = ""
        cost: float | None = None
        tokens_in: int | None = None
        tokens_out: int | None = None
        try:
            logger.info("Starting agent query")
            while True:
                try:
                    message = loop.run_until_complete(anext(stream))
                except StopAsyncIteration:
                    break
                if isinstance(message, AssistantMessage):
                    for block in message.content:
                        if isinstance(block, TextBlock):
                            full_text += block.text
                            logger.debug("Got chunk: %d chars", len(block.text))
                            yield StreamChunk(text=block.text)
                elif isinstance(message, ResultMessage):
                    cost = message.total_cost_usd
                    tokens_in, tokens_out = _extract_token_usage(message)
                    logger.info("Query complete, cost: $%.4f", cost or 0)

            yield StreamComplete(
                full_text=full_text,
                cost_usd=cost,
                tokens_in=tokens_in,
                tokens_out=tokens_out,
            )
        except Exception as e:
            logger.exception("Error in stream_message: %s", e)
            raise
        finally:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                loop.run_until_complete(aclose())
            loop.close()
            if override_env:
                if env_backup is None:
                    os.environ.pop("ANTHROPIC_API_KEY", None)
                else:
                    os.environ["ANTHROPIC_API_KEY"] = env_backup

    def _format_messages_as_prompt(self, messages: list[dict[str, str]]) -> str:
        """Format message history as a prompt for the agent."""
        if not messages:
            return ""

        parts: list[str] = []
        for msg in messages:
            role = msg.get("role", "user")
            content = msg.get("content", "")
            if role == "user":
                parts.append(f"User: {content}")
            elif role == "assistant":
                parts.append(f"Assistant: {content}")

        return "\n\n".join(parts)
