from helpers import delta, sse
from truthlens.client import EventStreamParser

TWO_DELTAS = (
    b'data: {"choices":[{"delta":{"content":"A"}}]}\n\n'
    b'data: {"choices":[{"delta":{"content":"B"}}]}\n\n'
    b"data: [DONE]\n\n"
)


def run(*chunks):
    parser = EventStreamParser()
    out = []
    for chunk in chunks:
        out.extend(parser.feed(chunk))
    out.extend(parser.finish())
    return "".join(out), parser


class TestEventStreamParser:

    def test_single_chunk(self):
        text, parser = run(TWO_DELTAS)
        assert text == "AB"
        assert parser.done is True

    def test_every_pair_of_split_points(self):
        n = len(TWO_DELTAS)
        for i in range(n + 1):
            for j in range(i, n + 1):
                text, _ = run(TWO_DELTAS[:i], TWO_DELTAS[i:j], TWO_DELTAS[j:])
                assert text == "AB", (i, j)

    def test_byte_at_a_time(self):
        text, _ = run(*[TWO_DELTAS[i:i + 1] for i in range(len(TWO_DELTAS))])
        assert text == "AB"

    def test_multibyte_characters_split(self):
        body = (
            "data: {\"choices\":[{\"delta\":{\"content\":\"héllo \"}}]}\n\n"
            "data: {\"choices\":[{\"delta\":{\"content\":\"wörld ✓\"}}]}\n\n"
        ).encode("utf-8")
        text, _ = run(*[body[i:i + 1] for i in range(len(body))])
        assert text == "héllo wörld ✓"

    def test_crlf_line_endings(self):
        body = TWO_DELTAS.replace(b"\n", b"\r\n")
        assert run(body)[0] == "AB"

    def test_comments_and_other_fields_skipped(self):
        body = (
            b": keep-alive\n"
            b"event: message\n"
            b"id: 7\n"
            b'data: {"choices":[{"delta":{"role":"assistant"}}]}\n\n'
            b'data: {"choices":[{"delta":{"content":"ok"}}]}\n\n'
            b"data: [DONE]\n\n"
        )
        assert run(body)[0] == "ok"

    def test_input_after_done_ignored(self):
        body = TWO_DELTAS + b'data: {"choices":[{"delta":{"content":"late"}}]}\n\n'
        parser = EventStreamParser()
        assert "".join(parser.feed(TWO_DELTAS)) == "AB"
        assert parser.feed(body) == []
        assert parser.finish() == []

    def test_missing_trailing_newline(self):
        body = b'data: {"choices":[{"delta":{"content":"A"}}]}\n\ndata: {"choices":[{"delta":{"content":"B"}}]}'
        text, parser = run(body)
        assert text == "AB"
        assert parser.done is False

    def test_partial_line_waits_for_more_bytes(self):
        parser = EventStreamParser()
        assert parser.feed(b'data: {"choices":[{"delta":{"con') == []
        assert parser.feed(b'tent":"A"}}]}\n') == ["A"]

    def test_fragment_split_across_lines_is_recombined(self):
        parser = EventStreamParser()
        assert parser.feed(b'data: {"choices":[{"delta":\n') == []
        assert parser.feed(b'{"content":"A"}}]}\n\n') == ["A"]
        assert parser.feed(b'data: {"choices":[{"delta":{"content":"B"}}]}\n\n') == ["B"]

    def test_unrecoverable_line_dropped(self):
        body = (
            b"data: {this is not json}\n\n"
            b'data: {"choices":[{"delta":{"content":"B"}}]}\n\n'
            b"data: [DONE]\n\n"
        )
        assert run(body)[0] == "B"

    def test_bad_line_followed_by_good_line(self):
        body = (
            b"data: {broken\n"
            b'data: {"choices":[{"delta":{"content":"B"}}]}\n'
        )
        assert run(body)[0] == "B"

    def test_trailing_fragment_dropped_at_finish(self):
        parser = EventStreamParser()
        assert parser.feed(b'data: {"choices":[{"delta":{"content":"A"}}]}\n\ndata: {"choi') == ["A"]
        assert parser.finish() == []

    def test_done_requires_data_prefix(self):
        parser = EventStreamParser()
        parser.feed(b"data:[DONE]\n")
        assert parser.done is False

        parser.feed(b"data: [DONE]   \n")
        assert parser.done is True

    def test_many_events_in_arbitrary_chunks(self):
        body = sse(*[delta(str(n)) for n in range(20)])
        chunks = [body[i:i + 7] for i in range(0, len(body), 7)]
        text, parser = run(*chunks)
        assert text == "".join(str(n) for n in range(20))
        assert parser.done is True
