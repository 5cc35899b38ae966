from typing import List, Optional

import httpx

from truthlens.config import LLM_CONFIG, logger, settings
from truthlens.exceptions import ConfigurationException
from truthlens.models.analysis import AnalysisResult
from truthlens.models.chat import ChatMessage
from .errors import ErrorKind, classify_error
from .notify import Notifier
from .streaming import EventStreamParser
from .usage import UsageLimiter

CHAT_FUNCTION = "chat-assistant"

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later."
PAYMENT_MESSAGE = "Usage limit reached. Please try again later."
FAILURE_MESSAGE = "Failed to send message. Please try again."
TRIAL_EXHAUSTED_MESSAGE = "Free trial exhausted. Please sign in to continue."


class ChatStreamError(Exception):
    def __init__(self, kind: ErrorKind, status_code: Optional[int] = None):
        self.kind = kind
        self.status_code = status_code
        super().__init__(f"chat stream failed ({kind.value}, status={status_code})")


def greeting(context: AnalysisResult) -> ChatMessage:
    """Opening assistant message for a chat seeded with an analysis."""
    return ChatMessage(
        role="assistant",
        content=(
            f"I've analyzed your content and found it to be **{context.verdict}** "
            f"with {context.confidence}% confidence.\n\n{context.explanation}\n\n"
            "Feel free to ask me any questions about this analysis or anything "
            "related to fact-checking and misinformation!"
        ),
    )


class ChatClient:
    """Streams assistant replies from the chat-assistant function into a transcript.

    The transcript is a plain list owned by the caller. ``send`` appends the
    user message, then one assistant entry that grows as deltas arrive, in
    arrival order. If the stream fails the assistant entry is removed again
    and the user message stays. There is no cancellation; a started stream runs
    to completion or failure.
    """

    def __init__(
        self,
        notifier: Notifier,
        limiter: Optional[UsageLimiter] = None,
        base_url: Optional[str] = None,
        anon_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        base_url = base_url or settings.SUPABASE_URL
        if not base_url:
            raise ConfigurationException("SUPABASE_URL")
        self.url = f"{base_url.rstrip('/')}/functions/v1/{CHAT_FUNCTION}"
        self.anon_key = anon_key or settings.SUPABASE_ANON_KEY
        self.notifier = notifier
        self.limiter = limiter
        self.transport = transport
        self.is_loading = False

    def _headers(self):
        headers = {"Content-Type": "application/json"}
        if self.anon_key:
            headers["Authorization"] = f"Bearer {self.anon_key}"
        return headers

    async def send(
        self,
        transcript: List[ChatMessage],
        text: str,
        context: Optional[AnalysisResult] = None,
    ) -> Optional[ChatMessage]:
        """Send ``text`` and stream the reply into ``transcript``.

        Returns the finished assistant message, or None when nothing was sent
        or the stream failed.
        """
        text = (text or "").strip()
        if not text or self.is_loading:
            return None

        if self.limiter is not None:
            if not self.limiter.can_use():
                self.notifier.error(TRIAL_EXHAUSTED_MESSAGE)
                return None
            self.limiter.increment()

        user_message = ChatMessage(role="user", content=text)
        transcript.append(user_message)
        body = {
            "messages": [m.model_dump() for m in transcript],
            "analysisContext": context.to_wire() if context else None,
        }

        self.is_loading = True
        assistant: Optional[ChatMessage] = None
        try:
            async with httpx.AsyncClient(
                timeout=LLM_CONFIG.STREAM_TIMEOUT, transport=self.transport
            ) as client:
                async with client.stream("POST", self.url, headers=self._headers(), json=body) as response:
                    if response.status_code != 200:
                        await response.aread()
                        raise ChatStreamError(classify_error(response.status_code), response.status_code)

                    assistant = ChatMessage(role="assistant", content="")
                    transcript.append(assistant)
                    parser = EventStreamParser()
                    async for chunk in response.aiter_bytes():
                        _apply(assistant, parser.feed(chunk))
                        if parser.done:
                            break
                    _apply(assistant, parser.finish())
        except ChatStreamError as e:
            logger.error("Chat error: %s", e)
            self._fail(transcript, assistant, e.kind)
            return None
        except httpx.HTTPError as e:
            logger.error("Chat error: %s", e)
            self._fail(transcript, assistant, ErrorKind.GENERIC)
            return None
        finally:
            self.is_loading = False

        return assistant

    def _fail(self, transcript: List[ChatMessage], assistant: Optional[ChatMessage], kind: ErrorKind) -> None:
        if assistant is not None:
            # identity, not equality: an earlier reply may have the same text
            for i in range(len(transcript) - 1, -1, -1):
                if transcript[i] is assistant:
                    del transcript[i]
                    break
        if kind is ErrorKind.RATE_LIMIT:
            self.notifier.error(RATE_LIMIT_MESSAGE)
        elif kind is ErrorKind.PAYMENT_REQUIRED:
            self.notifier.error(PAYMENT_MESSAGE)
        else:
            self.notifier.error(FAILURE_MESSAGE)


def _apply(message: ChatMessage, deltas: List[str]) -> None:
    for delta in deltas:
        message.content += delta
