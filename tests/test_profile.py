import pytest

from locenv.loaders.profile import resolve_profile


def test_resolve_profile_reads_variable_verbatim() -> None:
    assert resolve_profile({"APP_ENV": " Production "}) == " Production "


def test_resolve_profile_defaults_to_empty_string() -> None:
    assert resolve_profile({}) == ""


def test_resolve_profile_custom_variable() -> None:
    assert resolve_profile({"DEPLOY_ENV": "qa", "APP_ENV": "dev"}, "DEPLOY_ENV") == "qa"


def test_resolve_profile_uses_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "test")

    assert resolve_profile() == "test"
