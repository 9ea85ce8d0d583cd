import logging

import pytest

from factori.game_api import example


def test_example_returns_one_and_logs(caplog):
    caplog.set_level(logging.DEBUG, logger="factori.game_api")
    assert example(5) == 1
    assert any("This value: 5" in r.getMessage() for r in caplog.records)


@pytest.mark.parametrize("bad", ["x", 1.5, None])
def test_example_rejects_non_integers(bad):
    with pytest.raises(TypeError):
        example(bad)


def test_example_range_limits():
    assert example(2**31 - 1) == 1
    assert example(-(2**31)) == 1
    with pytest.raises(OverflowError):
        example(2**31)