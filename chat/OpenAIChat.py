# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-05
# Description: OpenAIChat
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from openai import OpenAI

from config.Config import Config
from utility.exceptions import ExternalServiceError, ServiceNotConfiguredError
from utility.logging_utils import get_class_logger

Message = Dict[str, str]  # {"role": "system"|"user"|"assistant", "content": "..."}


@dataclass
class OpenAIChat:
    """
    Chat-completions client used to rephrase a templated invoice answer.

    Only the first choice is read. Transport and format errors surface as
    ExternalServiceError so the caller can keep its templated answer.
    """

    cfg: Config
    client: Any = None
    logger: Any = None
    request_timeout: float = 30.0

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

        if not self.cfg.openai_configured:
            raise ServiceNotConfiguredError("chat")
        self.model = self.cfg.openai_chat_model

        if self.client is None:
            self.client = OpenAI(
                api_key=self.cfg.openai_api_key,
                base_url=self.cfg.openai_base_url or None,
                timeout=self.request_timeout,
            )
        self.logger.info("OpenAIChat initialised (model=%s)", self.model)

    @staticmethod
    def build_messages(user_text: str, system_text: Optional[str] = None) -> List[Message]:
        messages: List[Message] = []
        if system_text:
            messages.append({"role": "system", "content": system_text})
        messages.append({"role": "user", "content": user_text})
        return messages

    def chat(
            self,
            messages: List[Message],
            temperature: float = 0.7,
            max_tokens: int = 150,
            **extra: Any,
    ) -> Any:
        """Raw ChatCompletion for `messages`."""
        if not messages:
            raise ValueError("messages must be non-empty")

        self.logger.debug(
            "chat: model=%s messages=%d temperature=%s max_tokens=%s",
            self.model, len(messages), temperature, max_tokens,
        )
        try:
            return self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
                **extra,
            )
        except Exception as e:
            raise ExternalServiceError("chat completion failed", {"model": self.model}) from e

    def simple_chat(
            self,
            user_text: str,
            system_text: Optional[str] = None,
            **kwargs: Any,
    ) -> Dict[str, Any]:
        resp = self.chat(self.build_messages(user_text, system_text), **kwargs)

        choices = getattr(resp, "choices", None) or []
        if not choices or getattr(choices[0], "message", None) is None:
            raise ExternalServiceError("chat response had no choices", {"model": self.model})

        answer = choices[0].message.content or ""
        usage = getattr(resp, "usage", None)
        self.logger.info(
            "simple_chat: answer_chars=%d total_tokens=%s",
            len(answer),
            getattr(usage, "total_tokens", None),
        )
        return {
            "answer": answer,
            "raw": resp,
            "usage": usage,
            "model": getattr(resp, "model", self.model),
        }

    def healthcheck(self) -> bool:
        try:
            self.simple_chat("ping", temperature=0.0, max_tokens=5)
        except ExternalServiceError as e:
            self.logger.warning("Chat healthcheck failed: %s", e)
            return False
        return True
