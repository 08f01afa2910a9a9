from __future__ import annotations

import pytest

from recall_app.core.briefing_script import BriefingScript


def test_messages_mention_the_list_size():
    script = BriefingScript(target_count=7)
    assert len(script.messages) == 6
    assert "find 7 items" in script.messages[2]


def test_message_advances_each_interval():
    script = BriefingScript(target_count=5)
    assert script.message_index_at(0) == 0
    assert script.message_index_at(2.4) == 0
    assert script.message_index_at(2.5) == 1
    assert script.message_index_at(100) == 5
    assert script.message_at(14) == "Good luck, and happy shopping!"


def test_finished_after_last_message_interval():
    script = BriefingScript(target_count=5)
    assert not script.is_finished(14.9)
    assert script.is_finished(15)


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        BriefingScript(target_count=5, interval_seconds=0)
