import pytest
from sqlalchemy import event

from app.db.models.channel import Channel, channel_subscribers
from app.db.models.user import User
from app.services.channel_service import channel_service, new_default_channel
from conftest import auth_headers


def my_channel(client, token):
    return client.get("/api/channels/user/current", headers=auth_headers(token)).json()


def test_get_channel_by_id_with_stats(client, register, upload):
    token, user = register("alice")
    first = upload(token)
    upload(token, title="Second")
    client.get(f"/api/videos/{first['id']}")
    client.get(f"/api/videos/{first['id']}")
    channel_id = first["channel"]["id"]

    response = client.get(f"/api/channels/{channel_id}")

    assert response.status_code == 200
    channel = response.json()
    assert channel["owner"] == {"id": user["id"], "username": "alice", "avatar": user["avatar"]}
    assert channel["video_count"] == 2
    assert channel["total_views"] == 2


def test_get_channel_by_name(client, register):
    register("alice")
    register("bob")

    response = client.get("/api/channels/ALICE")

    assert response.status_code == 200
    assert response.json()["name"] == "alice's Channel"


def test_get_missing_channel(client):
    assert client.get("/api/channels/9999").status_code == 404
    assert client.get("/api/channels/nobody").json() == {"message": "Channel not found"}


def test_current_channel_is_recreated_when_missing(client, register, db_session):
    token, user = register("alice")
    db_session.query(Channel).filter(Channel.owner_id == user["id"]).delete()
    db_session.commit()

    first = my_channel(client, token)
    second = my_channel(client, token)

    assert first["name"] == "alice's Channel"
    assert first["id"] == second["id"]
    assert db_session.query(Channel).filter(Channel.owner_id == user["id"]).count() == 1


def test_current_channel_id(client, register):
    token, _ = register("alice")

    response = client.get("/api/channels/user/id", headers=auth_headers(token))

    assert response.status_code == 200
    assert response.json()["channel_name"] == "alice's Channel"
    assert response.json()["channel_id"] == my_channel(client, token)["id"]


def test_current_channel_requires_token(client):
    assert client.get("/api/channels/user/current").status_code == 401


def test_owner_updates_channel(client, register):
    token, _ = register("alice")
    channel = my_channel(client, token)

    response = client.put(
        f"/api/channels/{channel['id']}",
        json={
            "name": "Alice Cooks",
            "description": "",
            "social_links": {"website": "https://alice.example.com"},
        },
        headers=auth_headers(token),
    )

    assert response.status_code == 200
    updated = response.json()["channel"]
    assert updated["name"] == "Alice Cooks"
    assert updated["description"] == channel["description"]
    assert updated["social_links"]["website"] == "https://alice.example.com"


def test_other_user_cannot_update_channel(client, register):
    alice_token, _ = register("alice")
    bob_token, _ = register("bob")
    channel = my_channel(client, alice_token)

    response = client.put(f"/api/channels/{channel['id']}", json={"name": "Bob's now"}, headers=auth_headers(bob_token))

    assert response.status_code == 403
    assert response.json()["message"] == "Not authorized to update this channel"
    assert my_channel(client, alice_token)["name"] == "alice's Channel"


def test_subscribe_toggle_is_its_own_inverse(client, register):
    alice_token, _ = register("alice")
    bob_token, bob = register("bob")
    channel = my_channel(client, alice_token)
    url = f"/api/channels/{channel['id']}/subscribe"

    subscribed = client.post(url, headers=auth_headers(bob_token)).json()
    assert subscribed == {"message": "Subscribed successfully", "subscribers": 1, "subscribed": True}
    assert my_channel(client, alice_token)["subscriber_ids"] == [bob["id"]]

    unsubscribed = client.post(url, headers=auth_headers(bob_token)).json()
    assert unsubscribed == {"message": "Unsubscribed successfully", "subscribers": 0, "subscribed": False}
    assert my_channel(client, alice_token)["subscriber_ids"] == []


def test_subscriber_count_shows_on_videos(client, register, upload):
    alice_token, _ = register("alice")
    bob_token, _ = register("bob")
    video = upload(alice_token)
    client.post(f"/api/channels/{video['channel']['id']}/subscribe", headers=auth_headers(bob_token))

    fetched = client.get(f"/api/videos/{video['id']}").json()

    assert fetched["channel"]["subscriber_count"] == 1


def test_cannot_subscribe_to_own_channel(client, register):
    token, _ = register("alice")
    channel = my_channel(client, token)

    for _ in range(2):
        response = client.post(f"/api/channels/{channel['id']}/subscribe", headers=auth_headers(token))
        assert response.status_code == 400
        assert response.json()["message"] == "Cannot subscribe to your own channel"

    assert my_channel(client, token)["subscriber_count"] == 0


def test_subscribe_to_missing_channel(client, register):
    token, _ = register("alice")

    response = client.post("/api/channels/9999/subscribe", headers=auth_headers(token))

    assert response.status_code == 404


@pytest.mark.parametrize("lookup", ["²", "99999999999999999999", "1" * 5000])
def test_lookup_by_odd_numeric_strings_is_not_found(client, lookup):
    response = client.get(f"/api/channels/{lookup}")

    assert response.status_code == 404
    assert response.json() == {"message": "Channel not found"}


@pytest.mark.parametrize("fields", [
    {"name": "n" * 101},
    {"description": "d" * 1001},
])
def test_update_rejects_overlong_channel_fields(client, register, fields):
    token, _ = register("alice")
    channel = my_channel(client, token)

    response = client.put(f"/api/channels/{channel['id']}", json=fields, headers=auth_headers(token))

    assert response.status_code == 400
    assert my_channel(client, token)["name"] == "alice's Channel"


def add_user(db, username):
    user = User(username=username, email=f"{username}@example.com", hashed_password="x")
    db.add(user)
    db.commit()
    return user


def test_provisioning_race_reuses_the_winning_channel(db_session, session_factory):
    alice = add_user(db_session, "alice")
    winner = {}

    @event.listens_for(db_session, "before_commit", once=True)
    def create_concurrently(session):
        other = session_factory()
        channel = Channel(name="Made elsewhere", owner_id=alice.id, social_links={})
        other.add(channel)
        other.commit()
        winner["id"] = channel.id
        other.close()

    channel = channel_service.get_or_create_channel(db_session, alice)

    assert channel.id == winner["id"]
    assert channel.name == "Made elsewhere"
    assert db_session.query(Channel).filter(Channel.owner_id == alice.id).count() == 1


def test_concurrent_subscribe_counts_once(db_session, session_factory):
    alice = add_user(db_session, "alice")
    bob = add_user(db_session, "bob")
    channel = new_default_channel(alice)
    db_session.add(channel)
    db_session.commit()
    pending = [True]

    @event.listens_for(db_session, "do_orm_execute")
    def subscribe_concurrently(orm_execute_state):
        if orm_execute_state.is_insert and pending:
            pending.pop()
            other = session_factory()
            other.execute(channel_subscribers.insert().values(channel_id=channel.id, user_id=bob.id))
            other.commit()
            other.close()

    subscribed, count = channel_service.toggle_subscription(db_session, channel.id, bob)

    assert (subscribed, count) == (True, 1)
    rows = db_session.execute(channel_subscribers.select()).all()
    assert [(row.channel_id, row.user_id) for row in rows] == [(channel.id, bob.id)]
