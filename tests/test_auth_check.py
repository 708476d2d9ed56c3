"""Tests for credential-presence detection. No filesystem, no network."""

from storyof import auth_check
from storyof.auth_check import AuthCheckResult, check_auth, resolve_env_credential


class FakeAuthStorage:
    def __init__(self, credentials: dict | None = None) -> None:
        self._credentials = credentials or {}
        self.requested: list[str] = []

    def get(self, provider: str):
        self.requested.append(provider)
        return self._credentials.get(provider)


def test_detects_credential_in_storage() -> None:
    storage = FakeAuthStorage({"anthropic": {"type": "api_key", "key": "sk-ant-xxx"}})

    result = check_auth(storage, environ={})

    assert result == AuthCheckResult(has_auth=True, provider="anthropic", source="storage")


def test_storage_lookup_follows_provider_priority() -> None:
    storage = FakeAuthStorage({"openai": {"key": "a"}, "mistral": {"key": "b"}})

    result = check_auth(storage, environ={})

    assert result.provider == "openai"
    assert storage.requested == ["anthropic", "openai"]


def test_detects_prefixed_env_var() -> None:
    result = check_auth(FakeAuthStorage(), environ={"STORYOF_ANTHROPIC_API_KEY": "sk-ant-test"})

    assert result == AuthCheckResult(has_auth=True, provider="anthropic", source="env")


def test_detects_standard_env_var_as_fallback() -> None:
    result = check_auth(FakeAuthStorage(), environ={"ANTHROPIC_OAUTH_TOKEN": "tok"})

    assert result.provider == "anthropic"
    assert result.source == "env"


def test_env_lookup_follows_declaration_order() -> None:
    environ = {"GITHUB_TOKEN": "gh", "OPENAI_API_KEY": "sk-openai"}

    result = check_auth(FakeAuthStorage(), environ=environ)

    assert result.provider == "openai"


def test_empty_env_value_counts_as_absent() -> None:
    result = check_auth(FakeAuthStorage(), environ={"ANTHROPIC_API_KEY": "", "GH_TOKEN": "gh"})

    assert result.provider == "github-copilot"


def test_storage_wins_over_env() -> None:
    storage = FakeAuthStorage({"groq": {"key": "from-storage"}})

    result = check_auth(storage, environ={"ANTHROPIC_API_KEY": "sk-from-env"})

    assert result.provider == "groq"
    assert result.source == "storage"


def test_nothing_configured() -> None:
    result = check_auth(FakeAuthStorage(), environ={})

    assert result == AuthCheckResult(has_auth=False)
    assert result.provider is None
    assert result.source is None


def test_resolve_env_credential_prefers_prefixed_var() -> None:
    environ = {"STORYOF_ANTHROPIC_API_KEY": "sk-storyof", "ANTHROPIC_API_KEY": "sk-standard"}

    assert resolve_env_credential("anthropic", environ) == "sk-storyof"
    assert resolve_env_credential("anthropic", {"ANTHROPIC_API_KEY": "sk-standard"}) == "sk-standard"
    assert resolve_env_credential("unknown", environ) is None


def test_env_lookup_goes_through_resolve_env_credential(monkeypatch) -> None:
    asked: list[str] = []

    def fake_resolve(provider, environ=None):
        asked.append(provider)
        return "token" if provider == "xai" else None

    monkeypatch.setattr(auth_check, "resolve_env_credential", fake_resolve)

    result = check_auth(FakeAuthStorage(), environ={})

    assert result == AuthCheckResult(has_auth=True, provider="xai", source="env")
    assert asked == ["anthropic", "openai", "google", "groq", "xai"]
