# tests/test_deadline.py
from __future__ import annotations

import pytest

from secureshare.core.deadline import Deadline, remaining_or_none
from secureshare.core.errors import StorageTimeout, StorageUnavailable


def test_future_deadline_has_time_left() -> None:
    deadline = Deadline.after(30)
    assert not deadline.expired
    assert 0 < deadline.remaining() <= 30
    deadline.check("noop")


def test_expired_deadline_raises_storage_timeout() -> None:
    deadline = Deadline.after(-0.5)
    assert deadline.expired
    assert deadline.remaining() == 0.0
    with pytest.raises(StorageTimeout) as exc_info:
        deadline.check("create_user")
    assert isinstance(exc_info.value, StorageUnavailable)
    assert "create_user" in exc_info.value.message


def test_remaining_or_none() -> None:
    assert remaining_or_none(None) is None
    assert remaining_or_none(Deadline.after(5)) > 0
