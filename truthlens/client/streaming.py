import codecs
import json
from typing import Any, List, Optional

from truthlens.config import logger
from truthlens.utils.parsing import extract_delta_content

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


class EventStreamParser:
    """Incremental parser for a chat-completion text-event-stream.

    Bytes are fed as they arrive, in any split. Each complete ``data:`` line
    carrying JSON yields the text at ``choices[0].delta.content``; ``[DONE]``
    ends the stream and anything after it is ignored.

    A ``data:`` line whose JSON does not parse is treated as a fragment. If it
    is the last buffered line it waits for more bytes. Otherwise it is joined
    with the following line and retried once. If that still fails the fragment
    is dropped and parsing resumes at the following line.
    """

    def __init__(self):
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self.done = False

    def feed(self, chunk: bytes) -> List[str]:
        if self.done:
            return []
        self._buffer += self._decoder.decode(chunk)
        return self._drain(final=False)

    def finish(self) -> List[str]:
        """Flush the decoder and whatever trails the last newline."""
        if self.done:
            return []
        self._buffer += self._decoder.decode(b"", final=True)
        if self._buffer and not self._buffer.endswith("\n"):
            self._buffer += "\n"
        deltas = self._drain(final=True)
        if self._buffer.strip():
            logger.warning("Dropping unterminated stream data: %r", self._buffer)
        self._buffer = ""
        return deltas

    def _drain(self, final: bool) -> List[str]:
        deltas: List[str] = []
        while not self.done:
            newline = self._buffer.find("\n")
            if newline == -1:
                break
            line = _strip_cr(self._buffer[:newline])
            rest = self._buffer[newline + 1:]

            payload = _data_payload(line)
            if payload is None:
                self._buffer = rest
                continue
            if payload == DONE_SENTINEL:
                self._buffer = ""
                self.done = True
                break

            event = _loads(payload)
            if event is not None:
                self._buffer = rest
                _append_delta(deltas, event)
                continue

            next_newline = rest.find("\n")
            if next_newline == -1:
                if final:
                    logger.warning("Dropping unparseable stream line: %r", line)
                    self._buffer = rest
                    continue
                # wait for the rest of the fragment
                break

            continuation = _strip_cr(rest[:next_newline])
            joined = _loads(payload + continuation)
            if joined is not None:
                self._buffer = rest[next_newline + 1:]
                _append_delta(deltas, joined)
            else:
                logger.warning("Dropping unparseable stream line: %r", line)
                self._buffer = rest
        return deltas


def _strip_cr(line: str) -> str:
    return line[:-1] if line.endswith("\r") else line


def _data_payload(line: str) -> Optional[str]:
    if not line.strip() or line.startswith(":"):
        return None
    if not line.startswith(DATA_PREFIX):
        return None
    return line[len(DATA_PREFIX):].strip()


def _loads(payload: str) -> Optional[Any]:
    try:
        return json.loads(payload)
    except json.JSONDecodeError:
        return None


def _append_delta(deltas: List[str], event: Any) -> None:
    content = extract_delta_content(event)
    if content:
        deltas.append(content)
