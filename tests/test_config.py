import pytest

from pslconvert.config import ReaderConfig
from pslconvert.utils import get_counts


def test_defaults():
    config = ReaderConfig()
    assert config.max_walls_per_link == 10
    assert config.max_reactor_trigger_targets == 10
    assert config.num_ai_flags == 11
    assert config.max_submodels == 10


def test_ini_overrides(tmp_path):
    path = tmp_path / "reader.ini"
    path.write_text("[format]\nmax_walls_per_link = 12\nnum_ai_flags = 9\n")

    config = ReaderConfig.from_ini(path)

    assert config == ReaderConfig(max_walls_per_link=12, num_ai_flags=9)
    assert get_counts() == (0, 0)


def test_missing_section_uses_defaults(tmp_path):
    path = tmp_path / "reader.ini"
    path.write_text("[other]\nkey = 1\n")

    assert ReaderConfig.from_ini(path) == ReaderConfig()
    assert get_counts() == (0, 1)


def test_unknown_key_warns(tmp_path):
    path = tmp_path / "reader.ini"
    path.write_text("[format]\nmax_sides = 4\n")

    assert ReaderConfig.from_ini(path) == ReaderConfig()
    assert get_counts() == (0, 1)


def test_invalid_value(tmp_path):
    path = tmp_path / "reader.ini"
    path.write_text("[format]\nmax_submodels = many\n")

    with pytest.raises(ValueError, match="max_submodels"):
        ReaderConfig.from_ini(path)


def test_non_positive_value(tmp_path):
    path = tmp_path / "reader.ini"
    path.write_text("[format]\nmax_reactor_trigger_targets = 0\n")

    with pytest.raises(ValueError):
        ReaderConfig.from_ini(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ReaderConfig.from_ini(tmp_path / "absent.ini")
