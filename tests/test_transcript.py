"""Unit tests for the transcript codec."""
import io

import pytest
from hypothesis import given
from hypothesis import strategies as st

from airchat.llm import Message, Role
from airchat.transcript import (
    Transcript,
    TranscriptError,
    dumps,
    iter_messages,
    load,
    loads,
    role_pattern,
)
from airchat.transcript.markers import match_marker

CONVERSATION = [
    Message.user("Hello, assistant!"),
    Message.assistant("Hello, user!"),
    Message.assistant("Hello again, user!"),
]

CONVERSATION_TEXT = (
    "USER:\nHello, assistant!\n\n"
    "ASSISTANT:\nHello, user!\n\n"
    "ASSISTANT:\nHello again, user!\n\n"
)


MARKER_LINES = {role.marker for role in Role}


def is_round_trippable(content: str) -> bool:
    """Content survives the codec unless it ends in whitespace or holds a marker line."""
    return content == content.rstrip() and not any(
        line in MARKER_LINES for line in content.split("\n")
    )


message_contents = st.text(
    alphabet=st.characters(exclude_categories=("Cs",), exclude_characters="\r"),
    max_size=200,
).filter(is_round_trippable)

messages = st.builds(Message, role=st.sampled_from(list(Role)), content=message_contents)


class TestMarkers:
    """Tests for the role marker pattern."""

    def test_pattern_covers_exactly_the_roles(self):
        markers = set(role_pattern().split("|"))
        assert markers == {role.value.upper() + ":" for role in Role}

    @pytest.mark.parametrize("line, role", [
        ("USER:\n", Role.USER),
        ("SYSTEM:", Role.SYSTEM),
        ("ASSISTANT:\r\n", Role.ASSISTANT),
    ])
    def test_marker_lines(self, line, role):
        assert match_marker(line) is role

    @pytest.mark.parametrize("line", [
        "user:\n",
        "USER: hello\n",
        "I said USER:\n",
        "USER\n",
        "USER: \n",
        "ASSISTANT:\t\r\n",
        "\n",
    ])
    def test_content_lines(self, line):
        assert match_marker(line) is None


class TestTranscriptWriter:
    """Tests for Transcript.record and dumps."""

    def test_single_message_format(self):
        sink = io.StringIO()
        Transcript(sink).record(Message.user("Hello, world!"))
        assert sink.getvalue() == "USER:\nHello, world!\n\n"

    def test_interleaved_format(self):
        sink = io.StringIO()
        transcript = Transcript(sink)
        for message in CONVERSATION:
            transcript.record(message)
        assert sink.getvalue() == CONVERSATION_TEXT

    def test_multiline_content(self):
        assert dumps([Message.system("line one\n\nline three")]) == "SYSTEM:\nline one\n\nline three\n\n"

    def test_empty_content(self):
        assert dumps([Message.assistant("")]) == "ASSISTANT:\n\n"

    def test_no_messages(self):
        assert dumps([]) == ""

    def test_without_sink_is_noop(self):
        transcript = Transcript()
        assert not transcript.enabled
        transcript.record(Message.user("ignored"))

    def test_flushes_after_each_record(self):
        class CountingSink(io.StringIO):
            flushes = 0

            def flush(self):
                self.flushes += 1
                super().flush()

        sink = CountingSink()
        transcript = Transcript(sink)
        transcript.record(Message.user("a"))
        transcript.record(Message.user("b"))
        assert sink.flushes == 2

    def test_write_errors_propagate(self):
        sink = io.StringIO()
        sink.close()
        with pytest.raises(ValueError):
            Transcript(sink).record(Message.user("a"))

    def test_os_errors_propagate(self):
        class FullDisk(io.StringIO):
            def write(self, s):
                raise OSError(28, "No space left on device")

        with pytest.raises(OSError):
            Transcript(FullDisk()).record(Message.user("a"))


class TestTranscriptReader:
    """Tests for load/loads."""

    def test_single_message(self):
        assert loads("USER:\nHello, world!\n\n") == [Message.user("Hello, world!")]

    def test_empty_source(self):
        assert loads("") == []
        assert load(io.StringIO()) == []

    def test_interleaved(self):
        assert loads(CONVERSATION_TEXT) == CONVERSATION

    def test_first_line_is_case_insensitive(self):
        assert loads("user:\nhi\n") == [Message.user("hi")]

    def test_malformed_start(self):
        with pytest.raises(TranscriptError, match="role marker"):
            loads("Hello there\nUSER:\nhi\n")

    def test_unknown_role_start(self):
        with pytest.raises(TranscriptError):
            loads("ROBOT:\nbeep\n")

    def test_trailing_marker_without_body(self):
        assert loads("USER:\nhi\n\nASSISTANT:\n") == [Message.user("hi"), Message.assistant("")]

    def test_marker_only(self):
        assert loads("SYSTEM:") == [Message.system("")]

    def test_missing_final_newline(self):
        assert loads("USER:\nhi\nASSISTANT:\nhello") == [Message.user("hi"), Message.assistant("hello")]

    def test_content_is_right_trimmed(self):
        assert loads("USER:\nhi   \n\n\n\n") == [Message.user("hi")]

    def test_leading_blank_lines_kept(self):
        assert loads("USER:\n\n  indented\n\n") == [Message.user("\n  indented")]

    def test_marker_mid_line_is_content(self):
        text = "USER:\nplease print USER: and ASSISTANT:\nUSER: is a label\n\n"
        assert loads(text) == [Message.user("please print USER: and ASSISTANT:\nUSER: is a label")]

    def test_marker_line_in_content_splits_block(self):
        """Known format limitation: a content line equal to a marker starts a new block."""
        message = Message.user("the word\nASSISTANT:\nappears alone")
        assert loads(dumps([message])) == [
            Message.user("the word"),
            Message.assistant("appears alone"),
        ]

    def test_marker_with_trailing_spaces_is_content(self):
        message = Message.user("label:\nUSER: \nend")
        assert loads(dumps([message])) == [message]

    def test_windows_line_endings(self):
        assert loads("USER:\r\nhi\r\n\r\nASSISTANT:\r\nhello\r\n\r\n") == [
            Message.user("hi"),
            Message.assistant("hello"),
        ]

    def test_streams_lazily(self):
        source = io.StringIO(CONVERSATION_TEXT)
        stream = iter_messages(source)

        assert next(stream) == CONVERSATION[0]
        assert source.tell() < len(CONVERSATION_TEXT)

    def test_reads_file(self, tmp_path):
        path = tmp_path / "chat.txt"
        path.write_text(CONVERSATION_TEXT, encoding="utf-8")
        with open(path, encoding="utf-8") as f:
            assert load(f) == CONVERSATION


class TestRoundTrip:
    """Tests that encoding then decoding gives the messages back."""

    def test_conversation(self):
        assert loads(dumps(CONVERSATION)) == CONVERSATION

    @given(st.lists(messages, min_size=1, max_size=10))
    def test_round_trip(self, conversation):
        """Property test: decode(encode(M)) == M."""
        assert loads(dumps(conversation)) == conversation
