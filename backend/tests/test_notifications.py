import asyncio

import pytest

from portfolio_contact.client.notifications import ERROR, SUCCESS, Notification, NotificationCenter


@pytest.mark.asyncio
async def test_notification_clears_itself_after_duration():
    center = NotificationCenter(duration=0.01)
    center.show(SUCCESS, "Message sent successfully!")
    assert center.current == Notification(SUCCESS, "Message sent successfully!")
    assert center.pending is True

    await asyncio.sleep(0.05)

    assert center.current is None
    assert center.pending is False


@pytest.mark.asyncio
async def test_new_notification_replaces_and_restarts_timer():
    center = NotificationCenter(duration=0.2)
    center.show(ERROR, "first")
    await asyncio.sleep(0.12)
    center.show(SUCCESS, "second")
    await asyncio.sleep(0.12)

    # the first timer would have fired by now
    assert center.current == Notification(SUCCESS, "second")

    await asyncio.sleep(0.2)
    assert center.current is None


@pytest.mark.asyncio
async def test_close_cancels_pending_dismiss():
    with NotificationCenter(duration=0.01) as center:
        center.show(ERROR, "Please fill all fields before sending.")
    assert center.closed is True
    assert center.pending is False

    await asyncio.sleep(0.03)
    # timer was cancelled, so nothing touched the state after teardown
    assert center.current == Notification(ERROR, "Please fill all fields before sending.")

    with pytest.raises(RuntimeError):
        center.show(SUCCESS, "late")


@pytest.mark.asyncio
async def test_dismiss_and_unknown_kind():
    center = NotificationCenter()
    center.show(SUCCESS, "ok")
    center.dismiss()
    assert center.current is None
    assert center.pending is False

    with pytest.raises(ValueError):
        center.show("warning", "nope")
    center.close()
