from gembot.transcript import Transcript
from gembot.types import Speaker, Turn


def test_append_returns_new_transcript_and_keeps_old_one() -> None:
    empty = Transcript()
    one = empty.append(Turn.user("hello"))
    two = one.append(Turn.model("hi"))

    assert len(empty) == 0
    assert list(one) == [Turn.user("hello")]
    assert list(two) == [Turn(Speaker.USER, "hello"), Turn(Speaker.MODEL, "hi")]


def test_append_keeps_duplicates_in_arrival_order() -> None:
    transcript = Transcript().append(Turn.user("same")).append(Turn.user("same")).append(Turn.model("x"))

    assert [turn.text for turn in transcript] == ["same", "same", "x"]
    assert [turn.role for turn in transcript] == [Speaker.USER, Speaker.USER, Speaker.MODEL]


def test_transcript_supports_indexing_and_equality() -> None:
    transcript = Transcript([Turn.user("a"), Turn.model("b")])

    assert transcript[0] == Turn.user("a")
    assert transcript[1:] == (Turn.model("b"),)
    assert transcript == Transcript([Turn.user("a"), Turn.model("b")])
