import pytest

from errors import NotFoundError, ValidationError
from models import NotificationType, RoleEnum
from user_directory import UserDirectory


@pytest.fixture
def users(db):
    return UserDirectory(db)


def test_create_user_hashes_password_and_defaults_role(users):
    user = users.create_user("alice", "alice@example.com", "pw")

    assert user.role == RoleEnum.regular
    assert user.is_blocked is False
    assert user.password_hash != "pw"
    assert users.authenticate("alice@example.com", "pw") == user
    assert users.authenticate("alice@example.com", "wrong") is None


def test_create_user_rejects_duplicate_email(users):
    users.create_user("alice", "alice@example.com", "pw")

    with pytest.raises(ValidationError):
        users.create_user("alice2", "alice@example.com", "pw")
    assert len(users.list_users()) == 1


def test_lookups(users):
    alice = users.create_user("alice", "alice@example.com", "pw")

    assert users.get_by_id(alice.id) == alice
    assert users.get_by_id(str(alice.id)) == alice
    assert users.get_by_id("not-an-id") is None
    assert users.get_by_username("alice") == alice
    assert users.get_by_username("bob") is None


def test_follow_records_relationship_and_notifies(users):
    alice = users.create_user("alice", "alice@example.com", "pw")
    bob = users.create_user("bob", "bob@example.com", "pw")

    followed = users.follow(str(alice.id), bob.id)

    assert followed.follower_ids == [alice.id]
    assert users.following_ids(alice.id) == [bob.id]
    [note] = users.unread_notifications(bob.id)
    assert note.type == NotificationType.follow
    assert note.actor_id == alice.id


def test_follow_rules(users):
    alice = users.create_user("alice", "alice@example.com", "pw")
    bob = users.create_user("bob", "bob@example.com", "pw")
    users.follow(alice.id, bob.id)

    with pytest.raises(ValidationError):
        users.follow(alice.id, alice.id)
    with pytest.raises(ValidationError):
        users.follow(alice.id, bob.id)
    with pytest.raises(NotFoundError):
        users.follow(alice.id, 404)


def test_notifications_marked_seen(users):
    alice = users.create_user("alice", "alice@example.com", "pw")
    bob = users.create_user("bob", "bob@example.com", "pw")
    users.add_notification(alice.id, NotificationType.comment, actor_id=bob.id)
    users.add_notification(alice.id, NotificationType.follow, actor_id=bob.id)

    assert users.mark_notifications_seen(alice.id) == 2
    assert users.unread_notifications(alice.id) == []
    assert users.mark_notifications_seen(alice.id) == 0


def test_set_blocked(users):
    alice = users.create_user("alice", "alice@example.com", "pw")

    assert users.set_blocked(alice.id).is_blocked is True
    with pytest.raises(NotFoundError):
        users.set_blocked(9999)
