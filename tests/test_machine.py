import time

import pytest

import engine.machine as machine_module
from agents.pattern_agent import PatternAgent
from engine.keys import Key, KeyEvent, KeyKind
from engine.machine import EditStateMachine
from engine.transform import NO_MATCHES, MatchView
from models.buffer import TextBuffer
from models.state import EditorMode, EditorState
from wrappers.provider import ProviderResponse, SuggestionProvider


class StubProvider(SuggestionProvider):
    name = "Stub"

    def __init__(self, response):
        self.response = response
        self.prompts = []

    def suggest(self, prompt):
        self.prompts.append(prompt)
        return self.response


def _make(source="cat bat hat", **kwargs):
    state = EditorState(source=TextBuffer(source))
    machine = EditStateMachine(state, **kwargs)
    machine.refresh()
    return state, machine


def _feed(machine, keys):
    for k in keys:
        if isinstance(k, Key):
            machine.handle_event(KeyEvent.press(k))
        else:
            for ch in k:
                machine.handle_event(KeyEvent.char_press(ch))


def test_initial_refresh_shows_source():
    state, _ = _make("hello")
    assert state.mode == EditorMode.BROWSING
    assert state.output == "hello"


def test_every_mode_has_a_handler():
    _, machine = _make()
    assert set(machine.handlers) == set(EditorMode)


def test_edit_source_replaces_previous_text():
    state, machine = _make("old text")
    _feed(machine, ["s", "abc", Key.ESCAPE])
    assert state.source.text == "abc"
    assert state.mode == EditorMode.BROWSING
    assert state.output == "abc"


def test_enter_in_source_appends_newline():
    state, machine = _make()
    _feed(machine, ["s", "a", Key.ENTER, "b"])
    assert state.source.text == "a\nb"
    assert state.mode == EditorMode.EDITING_SOURCE


@pytest.mark.parametrize(
    "mode_key, mode",
    [("r", EditorMode.EDITING_PATTERN), ("t", EditorMode.EDITING_REPLACEMENT)],
)
def test_enter_confirms_single_line_buffers(mode_key, mode):
    state, machine = _make()
    _feed(machine, [mode_key])
    assert state.mode == mode
    _feed(machine, ["x", Key.ENTER])
    assert state.mode == EditorMode.BROWSING
    assert state.buffer_for(mode).text == "x"


def test_escape_keeps_buffer_content():
    state, machine = _make()
    _feed(machine, ["r", "[cb]at", Key.ESCAPE])
    assert state.pattern.text == "[cb]at"
    assert state.mode == EditorMode.BROWSING


def test_backspace_on_empty_buffer_is_noop():
    state, machine = _make()
    _feed(machine, ["s", Key.BACKSPACE, Key.BACKSPACE])
    assert state.source.text == ""
    assert state.mode == EditorMode.EDITING_SOURCE


def test_backspace_removes_last_character():
    state, machine = _make()
    _feed(machine, ["r", "abc", Key.BACKSPACE])
    assert state.pattern.text == "ab"


def test_entering_mode_clears_only_that_buffer():
    state, machine = _make()
    _feed(machine, ["r", "at", Key.ENTER, "t", "XX", Key.ENTER])
    _feed(machine, ["r"])
    assert state.pattern.text == ""
    assert state.replacement.text == "XX"
    assert state.source.text == "cat bat hat"


def test_output_follows_each_keystroke():
    state, machine = _make()
    _feed(machine, ["r", "[cb]"])
    assert state.output == "c | b"
    _feed(machine, ["at"])
    assert state.output == "cat | bat"
    _feed(machine, ["("])
    assert state.output.startswith("Regex Error: ")
    _feed(machine, [Key.BACKSPACE, Key.ENTER, "t", "XX"])
    assert state.output == "XX XX hat"


def test_line_view_is_used_without_replacement():
    state, machine = _make("line1\nfoo\nline3", match_view=MatchView.LINES)
    _feed(machine, ["r", "foo", Key.ENTER])
    assert state.output == "foo\n"
    _feed(machine, ["r", "zzz"])
    assert state.output == NO_MATCHES


def test_transform_runs_once_per_event(monkeypatch):
    calls = []
    real_transform = machine_module.transform

    def counting_transform(*args):
        calls.append(args)
        return real_transform(*args)

    monkeypatch.setattr(machine_module, "transform", counting_transform)
    agent = PatternAgent(StubProvider(ProviderResponse("at", True)))
    state, machine = _make(agent=agent)
    calls.clear()

    for event in [
        KeyEvent.char_press("r"),
        KeyEvent.char_press("a"),
        KeyEvent.press(Key.ENTER),
        KeyEvent.press(Key.TAB),
        KeyEvent.char_press("x"),
    ]:
        before = len(calls)
        machine.handle_event(event)
        assert len(calls) == before + 1


@pytest.mark.parametrize("kind", [KeyKind.REPEAT, KeyKind.RELEASE])
def test_non_press_events_are_ignored(kind):
    state, machine = _make()
    machine.handle_event(KeyEvent(Key.CHAR, "s", kind))
    assert state.mode == EditorMode.BROWSING
    assert state.source.text == "cat bat hat"

    _feed(machine, ["s"])
    machine.handle_event(KeyEvent(Key.CHAR, "a", kind))
    machine.handle_event(KeyEvent(Key.BACKSPACE, kind=kind))
    assert state.source.text == ""


def test_quit_stops_session():
    state, machine = _make()
    _feed(machine, ["q"])
    assert state.running is False


def test_quit_key_is_text_while_editing():
    state, machine = _make()
    _feed(machine, ["s", "q"])
    assert state.running is True
    assert state.source.text == "q"


@pytest.mark.parametrize(
    "event",
    [
        KeyEvent.char_press("x"),
        KeyEvent.press(Key.ENTER),
        KeyEvent.press(Key.BACKSPACE),
        KeyEvent.press(Key.ESCAPE),
        KeyEvent.press(Key.OTHER),
    ],
)
def test_other_keys_do_nothing_while_browsing(event):
    state, machine = _make()
    machine.handle_event(event)
    assert state.mode == EditorMode.BROWSING
    assert state.source.text == "cat bat hat"
    assert state.pattern.text == ""
    assert state.running is True


def test_tab_applies_suggestion():
    provider = StubProvider(ProviderResponse("```regex\n[cb]at\n```", True))
    busy = []
    state, machine = _make(
        agent=PatternAgent(provider),
        on_busy=lambda: busy.append(state.status),
    )
    _feed(machine, ["r", "words ending in at", Key.ENTER, Key.TAB])

    assert busy == ["Asking Stub..."]
    assert state.pattern.text == "[cb]at"
    assert state.status == "Suggestion applied!"
    assert state.output == "cat | bat"
    assert "words ending in at" in provider.prompts[0]
    assert "cat bat hat" in provider.prompts[0]


def test_tab_failure_leaves_pattern_untouched():
    provider = StubProvider(
        ProviderResponse("", False, "Stub error: quota exceeded")
    )
    state, machine = _make(agent=PatternAgent(provider))
    _feed(machine, ["r", "at", Key.ENTER])
    output = state.output
    _feed(machine, [Key.TAB])

    assert state.pattern.text == "at"
    assert state.output == output
    assert state.status == "Stub error: quota exceeded"


def test_tab_ignored_while_editing():
    provider = StubProvider(ProviderResponse("x", True))
    state, machine = _make(agent=PatternAgent(provider))
    _feed(machine, ["r", Key.TAB])
    assert provider.prompts == []
    assert state.pattern.text == ""


def test_tab_without_agent_sets_status():
    state, machine = _make()
    _feed(machine, [Key.TAB])
    assert state.status == "No suggestion provider configured."
    assert state.pattern.text == ""


def test_backtracking_pattern_does_not_block_typing():
    state, machine = _make("a" * 30 + "!")
    _feed(machine, ["r"])
    for ch in "(a+)+$":
        started = time.monotonic()
        machine.handle_event(KeyEvent.char_press(ch))
        assert time.monotonic() - started < 2.0
    assert state.output.startswith("Regex Error: ") or state.output == NO_MATCHES

    _feed(machine, [Key.BACKSPACE, Key.BACKSPACE])
    assert state.pattern.text == "(a+)"
    assert state.output == "a" * 30
