"""
tests/unit/test_classifier.py — Turn Classifier Unit Tests

Covers:
  - every planning keyword → COMPLEX_TASK, regardless of case
  - calculator / web_search trigger words → TOOL_CALL
  - planning keywords win over tool triggers
  - plain chat → CONVERSATION
  - known substring false positives are preserved

Run with:
    pytest tests/unit/test_classifier.py -v
"""

from __future__ import annotations

import pytest

from agent.classifier import (
    TASK_KEYWORDS,
    Classification,
    TurnKind,
    classify,
    is_complex_task,
    select_tool,
)


class TestComplexTask:
    @pytest.mark.parametrize("keyword", TASK_KEYWORDS)
    def test_each_keyword_routes_to_task(self, keyword):
        assert classify(f"please {keyword} my week").kind == TurnKind.COMPLEX_TASK

    @pytest.mark.parametrize("message", [
        "PLAN my vacation",
        "Can you Organize the garage?",
        "SCHEDULE a meeting",
        "Break Down this project",
        "what are the STEPS",
        "Sequence these tasks",
    ])
    def test_case_insensitive(self, message):
        assert is_complex_task(message)
        assert classify(message) == Classification.complex_task()

    def test_task_beats_tool(self):
        result = classify("plan how to calculate taxes and search for forms")
        assert result.kind == TurnKind.COMPLEX_TASK
        assert result.tool_name is None

    def test_substring_inside_word_matches(self):
        # "explanation" contains "plan"
        assert classify("I need an explanation").kind == TurnKind.COMPLEX_TASK


class TestToolCall:
    @pytest.mark.parametrize("message", [
        "calculate 3 + 4",
        "do some MATH for me",
        "Calculate 10 / 0",
    ])
    def test_calculator(self, message):
        result = classify(message)
        assert result.kind == TurnKind.TOOL_CALL
        assert result.tool_name == "calculator"

    @pytest.mark.parametrize("message", [
        "search python docs",
        "FIND me a restaurant",
        "search for meaning in life",
    ])
    def test_web_search(self, message):
        result = classify(message)
        assert result.kind == TurnKind.TOOL_CALL
        assert result.tool_name == "web_search"

    def test_calculator_checked_before_search(self):
        assert select_tool("find the math answer") == "calculator"

    def test_no_trigger(self):
        assert select_tool("hello there") is None


class TestConversation:
    @pytest.mark.parametrize("message", [
        "hello",
        "How are you today?",
        "",
        "tell me a joke",
    ])
    def test_plain_chat(self, message):
        assert classify(message) == Classification.conversation()

    def test_independent_of_repetition(self):
        assert classify("hi") == classify("hi")
