from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _no_session_idle_sleep(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unrecognized keys make the session pause briefly; skip that in tests."""

    import tac_config.session as session

    monkeypatch.setattr(session.time, "sleep", lambda _seconds: None)
