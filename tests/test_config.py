import pytest

from jobmatch.config import PROFILE_PATH, get_bool_env, get_int_env, read_profile


def test_read_nested_profile(tmp_path):
    path = tmp_path / "profile.yaml"
    path.write_text(
        "profile:\n  name: Ada\n  location: Paris\n  skills: [Python, React]\n",
        encoding="utf-8",
    )
    profile = read_profile(path)
    assert profile.name == "Ada"
    assert profile.skills == ("Python", "React")


def test_read_flat_profile(tmp_path):
    path = tmp_path / "profile.yaml"
    path.write_text("name: Ada\nskills:\n  - Go\n", encoding="utf-8")
    assert read_profile(path).skills == ("Go",)


def test_missing_profile(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_profile(tmp_path / "nope.yaml")


def test_invalid_profile(tmp_path):
    path = tmp_path / "profile.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        read_profile(path)


def test_shipped_profile_loads():
    profile = read_profile(PROFILE_PATH)
    assert "React" in profile.skills
    assert profile.preferred_contract_types == ("CDI", "CDD")


def test_int_env(monkeypatch):
    monkeypatch.setenv("PAGE_SIZE", "50")
    assert get_int_env("PAGE_SIZE", 20) == 50
    monkeypatch.setenv("PAGE_SIZE", "fifty")
    assert get_int_env("PAGE_SIZE", 20) == 20
    monkeypatch.delenv("PAGE_SIZE")
    assert get_int_env("PAGE_SIZE", 20) == 20


def test_bool_env(monkeypatch):
    monkeypatch.setenv("USE_MOCK_DATA", "True")
    assert get_bool_env("USE_MOCK_DATA") is True
    monkeypatch.setenv("USE_MOCK_DATA", "no")
    assert get_bool_env("USE_MOCK_DATA") is False
