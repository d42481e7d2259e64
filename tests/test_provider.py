import sys
from types import SimpleNamespace

import pytest

from wrappers.provider import CommandLineProvider, OpenAICompatibleProvider


def _python(code):
    """Command that runs a snippet; the prompt arrives as sys.argv[1]."""
    return [sys.executable, "-c", code]


def test_command_receives_prompt_as_last_argument():
    provider = CommandLineProvider(
        _python("import sys; print('got:' + sys.argv[1])")
    )
    response = provider.suggest("find digits")
    assert response.success
    assert response.text.strip() == "got:find digits"


def test_command_nonzero_exit_reports_stderr_preview():
    provider = CommandLineProvider(
        _python("import sys; sys.stderr.write('x' * 100); sys.exit(3)"),
        name="Gemini",
    )
    response = provider.suggest("p")
    assert not response.success
    assert response.error == "Gemini error: " + "x" * 30


def test_command_empty_output_is_a_failure():
    provider = CommandLineProvider(_python("print('   ')"), name="Gemini")
    response = provider.suggest("p")
    assert not response.success
    assert response.error == "Gemini returned nothing."


def test_missing_binary_is_execution_error():
    provider = CommandLineProvider(["no-such-suggestion-binary-8d1f"])
    response = provider.suggest("p")
    assert not response.success
    assert response.error.startswith("Execution error: ")


def test_command_timeout_is_a_failure():
    provider = CommandLineProvider(
        _python("import time; time.sleep(10)"), name="Slow", timeout=0.2
    )
    response = provider.suggest("p")
    assert not response.success
    assert response.error == "Slow timed out."


def test_from_string_splits_shell_words():
    provider = CommandLineProvider.from_string("gemini -p --model 'pro x'")
    assert provider.command == ["gemini", "-p", "--model", "pro x"]


def _fake_client(content=None, error=None):
    def create(**kwargs):
        if error:
            raise error
        message = SimpleNamespace(content=content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    completions = SimpleNamespace(create=create)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


@pytest.fixture
def api_provider():
    pytest.importorskip("openai")
    return OpenAICompatibleProvider(
        api_key="",
        base_url="http://localhost:1234/v1",
        model="test-model",
        name="AI",
    )


def test_api_provider_returns_message_content(api_provider):
    api_provider.client = _fake_client(content="`\\d+`")
    response = api_provider.suggest("digits")
    assert response.success
    assert response.text == "`\\d+`"


def test_api_provider_error_is_reported(api_provider):
    api_provider.client = _fake_client(error=RuntimeError("connection refused"))
    response = api_provider.suggest("digits")
    assert not response.success
    assert response.error == "AI error: connection refused"


def test_api_provider_empty_content_is_a_failure(api_provider):
    api_provider.client = _fake_client(content=None)
    response = api_provider.suggest("digits")
    assert not response.success
    assert response.error == "AI returned nothing."
