import pytest

from giftbuyer.id_cache import IdCache
from giftbuyer.models import Channel, User


def test_set_and_get_user():
    cache = IdCache()
    user = User(id=123456789, first_name="Test", last_name="User", username="testuser")
    cache.set_user("testuser", user)
    retrieved = cache.get_user("testuser")
    assert retrieved.id == user.id
    assert retrieved.first_name == user.first_name
    assert retrieved.last_name == user.last_name
    assert retrieved.username == user.username


def test_get_non_existent_user():
    with pytest.raises(KeyError, match="user not found"):
        IdCache().get_user("nonexistentuser")


def test_set_and_get_channel():
    cache = IdCache()
    channel = Channel(id=987654321, title="Test Channel", username="testchannel")
    cache.set_channel("testchannel", channel)
    retrieved = cache.get_channel("testchannel")
    assert retrieved.id == channel.id
    assert retrieved.title == channel.title
    assert retrieved.username == channel.username


def test_get_non_existent_channel():
    with pytest.raises(KeyError, match="channel not found"):
        IdCache().get_channel("nonexistentchannel")


def test_set_nil_user_is_ignored():
    cache = IdCache()
    cache.set_user("testkey", None)
    with pytest.raises(KeyError, match="user not found"):
        cache.get_user("testkey")


def test_set_nil_channel_is_ignored():
    cache = IdCache()
    cache.set_channel("testkey", None)
    with pytest.raises(KeyError, match="channel not found"):
        cache.get_channel("testkey")


def test_overwrite_user():
    cache = IdCache()
    cache.set_user("testuser", User(id=123456789, first_name="First", last_name="User", username="testuser"))
    cache.set_user("testuser", User(id=123456789, first_name="Second", last_name="User", username="testuser"))
    assert cache.get_user("testuser").first_name == "Second"


def test_overwrite_channel():
    cache = IdCache()
    cache.set_channel("testchannel", Channel(id=987654321, title="First Channel", username="testchannel"))
    cache.set_channel("testchannel", Channel(id=987654321, title="Second Channel", username="testchannel"))
    assert cache.get_channel("testchannel").title == "Second Channel"


def test_multiple_users():
    cache = IdCache()
    users = [
        User(id=111, first_name="User1", username="user1"),
        User(id=222, first_name="User2", username="user2"),
        User(id=333, first_name="User3", username="user3"),
    ]
    for user in users:
        cache.set_user(user.username, user)
    for expected in users:
        assert cache.get_user(expected.username).first_name == expected.first_name


def test_multiple_channels():
    cache = IdCache()
    channels = [
        Channel(id=111, title="Channel1", username="channel1"),
        Channel(id=222, title="Channel2", username="channel2"),
        Channel(id=333, title="Channel3", username="channel3"),
    ]
    for channel in channels:
        cache.set_channel(channel.username, channel)
    for expected in channels:
        assert cache.get_channel(expected.username).title == expected.title


def test_users_and_channels_are_separate():
    cache = IdCache()
    cache.set_user("shared", User(id=1, username="shared"))
    with pytest.raises(KeyError, match="channel not found"):
        cache.get_channel("shared")
    assert cache.get_user("shared").id == 1