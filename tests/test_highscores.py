"""Tests for the leaderboard store and initials entry."""
import json
import random

import pytest

from signalhunt.sim.highscores import (
    EMPTY_INITIALS_WARNING, TAKEN_INITIALS_WARNING, DuplicateInitialsError, DuplicatePolicy,
    HighScoreEntry, HighScoreStore, InitialsPrompt, format_entry, pad_initials, sanitize_initials,
)
from signalhunt.sim.schedule import Scheduler
from signalhunt.storage import MemoryStore


def board(policy=DuplicatePolicy.Replace, data=None):
    return HighScoreStore(MemoryStore(data), policy=policy)


class TestInitials:
    @pytest.mark.parametrize("raw,expected", [
        ("abc", "ABC"),
        ("a1b2c3d", "ABC"),
        ("  x-y ", "XY"),
        ("", ""),
        ("éz", "Z"),
    ])
    def test_sanitize(self, raw, expected):
        assert sanitize_initials(raw) == expected

    def test_pad(self):
        assert pad_initials("ab") == "AB_"
        assert pad_initials("q") == "Q__"
        assert pad_initials("abc") == "ABC"


class TestLoad:
    def test_missing_key(self):
        assert board().load() == []

    @pytest.mark.parametrize("raw", ["not json", "{\"a\": 1}", "42", "null"])
    def test_corrupt_value_treated_as_empty(self, raw):
        assert board(data={"highScores": raw}).load() == []

    def test_malformed_entries_skipped(self):
        raw = json.dumps([
            {"initials": "AAA", "score": 5, "difficulty": "EASY"},
            {"initials": "BBB"},
            "junk",
            {"initials": "CCC", "score": True},
            {"initials": "DDD", "score": 2},
        ])
        entries = board(data={"highScores": raw}).load()
        assert [e.initials for e in entries] == ["AAA", "DDD"]
        assert entries[1].difficulty == "UNKNOWN"


class TestSave:
    def test_sorted_descending(self):
        b = board()
        for initials, score in [("AAA", 3), ("BBB", 9), ("CCC", 5)]:
            b.save(initials, score, "normal")
        assert [e.score for e in b.load()] == [9, 5, 3]

    def test_truncated_to_ten(self):
        b = board()
        for i in range(15):
            b.save(chr(ord("A") + i) * 3, i, "normal")
        entries = b.load()
        assert len(entries) == 10
        assert entries[0].score == 14
        assert entries[-1].score == 5

    def test_stores_padded_initials_and_upper_difficulty(self):
        b = board()
        b.save("jd", 4, "chaos")
        assert b.load() == [HighScoreEntry("JD_", 4, "CHAOS")]

    def test_written_as_json_array(self):
        store = MemoryStore()
        HighScoreStore(store).save("AAA", 1, "easy")
        assert json.loads(store.get("highScores")) == [
            {"initials": "AAA", "score": 1, "difficulty": "EASY"}]

    def test_replace_overwrites_same_initials(self):
        b = board()
        b.save("AAA", 10, "normal")
        b.save("AAA", 3, "hard")
        assert b.load() == [HighScoreEntry("AAA", 3, "HARD")]

    def test_reject_refuses_same_initials(self):
        b = board(DuplicatePolicy.Reject)
        b.save("AAA", 10, "normal")
        with pytest.raises(DuplicateInitialsError):
            b.save("aaa", 20, "normal")
        assert len(b.load()) == 1

    def test_allow_keeps_both(self):
        b = board(DuplicatePolicy.Allow)
        b.save("AAA", 10, "normal")
        b.save("AAA", 3, "normal")
        assert [e.score for e in b.load()] == [10, 3]

    def test_empty_initials_rejected(self):
        with pytest.raises(ValueError):
            board().save("123", 5, "normal")

    def test_recovers_from_corrupt_value(self):
        b = board(data={"highScores": "{{{"})
        b.save("AAA", 1, "easy")
        assert len(b.load()) == 1

    @pytest.mark.parametrize("policy", [DuplicatePolicy.Replace, DuplicatePolicy.Reject])
    def test_board_invariants_hold_after_many_saves(self, policy):
        rng = random.Random(5)
        b = board(policy)
        for _ in range(200):
            initials = "".join(rng.choice("ABC") for _ in range(rng.randint(1, 3)))
            try:
                b.save(initials, rng.randint(0, 100), "normal")
            except DuplicateInitialsError:
                pass
            entries = b.load()
            scores = [e.score for e in entries]
            assert len(entries) <= 10
            assert scores == sorted(scores, reverse=True)
            assert len({e.initials for e in entries}) == len(entries)


class TestFormat:
    def test_format_entry(self):
        assert format_entry(1, HighScoreEntry("ABC", 12, "HARD")) == "1. ABC - 12 / HARD"


class TestInitialsPrompt:
    def test_typing_is_filtered(self):
        prompt = InitialsPrompt(Scheduler())
        prompt.type("x9")
        prompt.type("y!zq")
        assert prompt.text == "XYZ"
        prompt.backspace()
        assert prompt.text == "XY"

    def test_empty_submit_warns_then_clears(self):
        sched = Scheduler()
        prompt = InitialsPrompt(sched)
        assert not prompt.submit(board(), 5, "normal")
        assert prompt.warning == EMPTY_INITIALS_WARNING

        sched.advance(1999)
        assert prompt.warning == EMPTY_INITIALS_WARNING
        sched.advance(1)
        assert prompt.warning is None

    def test_typing_dismisses_warning(self):
        sched = Scheduler()
        prompt = InitialsPrompt(sched)
        prompt.submit(board(), 5, "normal")
        prompt.type("a")
        assert prompt.warning is None

    def test_taken_initials_warn_under_reject_policy(self):
        b = board(DuplicatePolicy.Reject)
        b.save("ABC", 1, "normal")
        prompt = InitialsPrompt(Scheduler())
        prompt.type("abc")
        assert not prompt.submit(b, 5, "normal")
        assert prompt.warning == TAKEN_INITIALS_WARNING
        assert prompt.text == "ABC"

    def test_successful_submit_clears_text(self):
        b = board()
        prompt = InitialsPrompt(Scheduler())
        prompt.type("ab")
        assert prompt.submit(b, 7, "easy")
        assert prompt.text == ""
        assert b.has_initials("AB")
