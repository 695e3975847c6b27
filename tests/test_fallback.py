"""Tests for the local storyteller used without an API key."""

import random

import pytest

from storyteller.logging.interaction_logger import InteractionLogger
from storyteller.narrator.fallback import (
    BACKGROUND_COLORS,
    FOLLOW_UPS,
    LISTENING_PROMPT,
    OPENERS,
    STICKERS,
    FallbackGenerator,
    tool_call_for_roll,
)
from storyteller.state.conversation import Turn, coerce_history
from storyteller.state.tools import get_tool

NO_TOOL = 0.9


def follow_up_draw(index):
    """Random value that picks FOLLOW_UPS[index]."""
    return (index + 0.5) / len(FOLLOW_UPS)


def chat(*pairs):
    return [Turn(role=role, content=content) for role, content in pairs]


# ---------------------------------------------------------------------------
# Text selection
# ---------------------------------------------------------------------------

class TestOpening:
    @pytest.mark.parametrize("draw, expected", [(0.0, 0), (0.34, 1), (0.5, 1), (0.7, 2), (0.9999, 2)])
    def test_empty_history_picks_opener(self, scripted_random, draw, expected):
        generator = FallbackGenerator(rng=scripted_random([draw, NO_TOOL]))
        reply = generator.generate([])
        assert reply.content == OPENERS[expected]
        assert reply.tool_call is None

    def test_no_assistant_turn_yet(self, scripted_random):
        generator = FallbackGenerator(rng=scripted_random([0.0, NO_TOOL]))
        reply = generator.generate(chat(("user", "hello?")))
        assert reply.content == OPENERS[0]

    def test_openers_for_any_seed(self):
        for seed in range(50):
            reply = FallbackGenerator(rng=random.Random(seed)).generate([])
            assert reply.content in OPENERS


class TestListening:
    def test_empty_user_turn(self, scripted_random):
        rng = scripted_random([NO_TOOL])
        history = chat(("assistant", "What do you see?"), ("user", ""))
        reply = FallbackGenerator(rng=rng).generate(history)
        assert reply.content == LISTENING_PROMPT
        assert rng.calls == 1

    def test_whitespace_user_turn_gets_follow_up(self, scripted_random):
        history = chat(("assistant", "Hi"), ("user", "   "))
        reply = FallbackGenerator(rng=scripted_random([0.0, NO_TOOL])).generate(history)
        assert reply.content == FOLLOW_UPS[0]

    def test_no_user_turn(self, scripted_random):
        history = chat(("assistant", "What do you see?"))
        reply = FallbackGenerator(rng=scripted_random([NO_TOOL])).generate(history)
        assert reply.content == LISTENING_PROMPT

    def test_listening_prompt_text(self):
        assert LISTENING_PROMPT == "I am listening. Can you tell me one thing you notice in the picture?"


class TestFollowUp:
    def test_picks_follow_up(self, scripted_random):
        history = chat(("assistant", OPENERS[0]), ("user", "a sandcastle"))
        reply = FallbackGenerator(rng=scripted_random([follow_up_draw(1), NO_TOOL])).generate(history)
        assert reply.content == FOLLOW_UPS[1]

    @pytest.mark.parametrize("index", range(len(FOLLOW_UPS)))
    def test_never_repeats_last_assistant_line(self, scripted_random, index):
        history = chat(("assistant", FOLLOW_UPS[index]), ("user", "a dragon"))
        reply = FallbackGenerator(rng=scripted_random([follow_up_draw(index), NO_TOOL])).generate(history)
        assert reply.content != FOLLOW_UPS[index]
        assert reply.content == FOLLOW_UPS[(index + 1) % len(FOLLOW_UPS)]

    def test_wraps_to_first_entry(self, scripted_random):
        last = len(FOLLOW_UPS) - 1
        history = chat(("assistant", FOLLOW_UPS[last]), ("user", "a dragon"))
        reply = FallbackGenerator(rng=scripted_random([follow_up_draw(last), NO_TOOL])).generate(history)
        assert reply.content == FOLLOW_UPS[0]

    def test_sequential_calls_never_repeat(self):
        generator = FallbackGenerator(rng=random.Random(7))
        history = chat(("assistant", OPENERS[0]))
        for _ in range(40):
            history.append(Turn(role="user", content="more!"))
            reply = generator.generate(history)
            assert reply.content != history[-2].content
            history.append(Turn(role="assistant", content=reply.content))

    def test_uses_latest_turns(self, scripted_random):
        history = chat(
            ("assistant", OPENERS[0]),
            ("user", ""),
            ("assistant", LISTENING_PROMPT),
            ("user", "a red kite"),
        )
        reply = FallbackGenerator(rng=scripted_random([follow_up_draw(0), NO_TOOL])).generate(history)
        assert reply.content == FOLLOW_UPS[0]

    def test_accepts_coerced_history(self, scripted_random):
        history = coerce_history([
            {"role": "assistant", "content": "What is that?"},
            {"role": "user", "content": "a boat"},
        ])
        reply = FallbackGenerator(rng=scripted_random([follow_up_draw(2), NO_TOOL])).generate(history)
        assert reply.content == FOLLOW_UPS[2]


# ---------------------------------------------------------------------------
# Tool-call sampling
# ---------------------------------------------------------------------------

class TestToolSampling:
    @pytest.mark.parametrize("roll", [0.0, 0.1, 0.2499999])
    def test_background_range(self, scripted_random, roll):
        invocation = tool_call_for_roll(roll, scripted_random([0.0]))
        assert invocation.name == "changeBackgroundColor"
        assert invocation.arguments == {"color": BACKGROUND_COLORS[0]}

    @pytest.mark.parametrize("roll", [0.25, 0.3, 0.3499999])
    def test_sticker_range(self, scripted_random, roll):
        invocation = tool_call_for_roll(roll, scripted_random([0.99]))
        assert invocation.name == "showRewardSticker"
        assert invocation.arguments == {"sticker": STICKERS[-1]}

    @pytest.mark.parametrize("roll", [0.35, 0.5, 0.9999999])
    def test_no_tool_range(self, scripted_random, roll):
        rng = scripted_random([])
        assert tool_call_for_roll(roll, rng) is None
        assert rng.calls == 0

    @pytest.mark.parametrize("draw, color", [(0.0, "#0f172a"), (0.26, "#1e293b"), (0.5, "#312e81"), (0.8, "#134e4a")])
    def test_color_palette(self, scripted_random, draw, color):
        assert tool_call_for_roll(0.1, scripted_random([draw])).arguments["color"] == color

    def test_reply_carries_sampled_tool(self, scripted_random):
        rng = scripted_random([0.0, 0.3, 0.5])
        reply = FallbackGenerator(rng=rng).generate([])
        assert reply.content == OPENERS[0]
        assert reply.tool_call.name == "showRewardSticker"
        assert reply.tool_call.arguments == {"sticker": "unicorn"}

    def test_tool_calls_always_valid(self):
        generator = FallbackGenerator(rng=random.Random(1234))
        seen = set()
        for _ in range(500):
            reply = generator.generate([])
            if reply.tool_call is None:
                seen.add(None)
                continue
            spec = get_tool(reply.tool_call.name)
            assert spec is not None
            assert spec.accepts(reply.tool_call.arguments)
            seen.add(reply.tool_call.name)
        assert seen == {None, "changeBackgroundColor", "showRewardSticker"}


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

class TestFallbackLogging:
    def test_logs_branch_and_roll(self, scripted_random, tmp_path):
        logger = InteractionLogger(log_dir=str(tmp_path))
        generator = FallbackGenerator(rng=scripted_random([0.0, 0.1, 0.0]), logger=logger)
        generator.generate([])

        entry = logger.read_interactions()[0]
        assert entry["branch"] == "opening"
        assert entry["tool_roll"] == 0.1
        assert entry["response"]["tool_call"] == {
            "name": "changeBackgroundColor",
            "arguments": {"color": "#0f172a"},
        }
