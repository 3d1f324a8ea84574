"""
Tests for CommandParser: prefix commands, natural-language fallback and
the plain-chat default.
"""

import pytest

from caproute.commands import CommandParser
from caproute.core.types import Capability, CommandKind


def test_parse_prefix_commands():
    p = CommandParser()
    c = p.parse("/generate python function")
    assert c.kind == CommandKind.GENERATE
    assert c.arguments == ["python", "function"]
    assert c.capability == Capability.CODE_GENERATION

    c = p.parse("/explain this code")
    assert c.kind == CommandKind.EXPLAIN
    assert c.capability == Capability.CHAT

def test_parse_generate_args():
    c = CommandParser().parse("/generate x y")
    assert c.kind == CommandKind.GENERATE
    assert c.capability == Capability.CODE_GENERATION
    assert c.arguments == ["x", "y"]

def test_prefix_is_case_insensitive():
    c = CommandParser().parse("  /DEBUG this rust code ")
    assert c.kind == CommandKind.DEBUG
    assert c.arguments == ["this", "rust", "code"]
    assert c.capability == Capability.DEBUGGING
    assert c.full_input == "  /DEBUG this rust code "

def test_parse_natural_language_commands():
    p = CommandParser()
    c = p.parse("generate a rust struct")
    assert c.kind == CommandKind.GENERATE
    assert c.arguments == ["a", "rust", "struct"]
    assert c.capability == Capability.CODE_GENERATION

    assert p.parse("Create a class").kind == CommandKind.GENERATE
    assert p.parse("explain what this function does").kind == CommandKind.EXPLAIN
    assert p.parse("what is a monad").capability == Capability.CHAT

def test_fix_is_debug():
    c = CommandParser().parse("fix my bug")
    assert c.kind == CommandKind.DEBUG
    assert c.capability == Capability.DEBUGGING
    assert c.arguments == ["my", "bug"]

def test_unknown_input_is_chat_with_all_tokens():
    c = CommandParser().parse("Hello there, how are you?")
    assert c.kind == CommandKind.UNKNOWN
    assert c.capability == Capability.CHAT
    assert c.arguments == ["Hello", "there,", "how", "are", "you?"]

def test_unregistered_prefix_is_chat():
    c = CommandParser().parse("/deploy now")
    assert c.kind == CommandKind.UNKNOWN
    assert c.arguments == ["/deploy", "now"]

def test_parse_empty_input():
    p = CommandParser()
    for text in ("", "   ", "\t\n"):
        c = p.parse(text)
        assert c.kind == CommandKind.UNKNOWN
        assert c.arguments == []
        assert c.capability == Capability.CHAT
        assert c.full_input == text

def test_help_has_no_capability():
    c = CommandParser().parse("/help")
    assert c.kind == CommandKind.HELP
    assert c.capability is None
    with pytest.raises(ValueError):
        c.to_request()

def test_to_request_uses_full_input():
    req = CommandParser().parse("/generate a sorter").to_request()
    assert req.capability == Capability.CODE_GENERATION
    assert req.prompt == "/generate a sorter"

def test_get_help():
    text = CommandParser().get_help()
    assert "Available commands:" in text
    for prefix in ("/generate", "/explain", "/debug", "/help"):
        assert prefix in text
    assert "natural language" in text

def test_register_command_adds_prefix():
    p = CommandParser()
    p.register_command("gen", CommandKind.GENERATE)
    c = p.parse("/gen tests")
    assert c.kind == CommandKind.GENERATE
    assert c.arguments == ["tests"]
    assert "/gen" in p.get_help()

def test_register_command_rejects_multi_token_keyword():
    p = CommandParser()
    with pytest.raises(ValueError):
        p.register_command("foo bar", CommandKind.GENERATE)
    with pytest.raises(ValueError):
        p.register_command("  ", CommandKind.GENERATE)
    assert "/foo bar" not in p.get_help()
