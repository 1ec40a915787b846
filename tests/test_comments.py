from app.db.models.comment import Comment
from conftest import auth_headers


def add_comment(client, token, video_id, text, parent_id=None):
    payload = {"text": text}
    if parent_id is not None:
        payload["parent_comment_id"] = parent_id
    response = client.post(f"/api/comments/video/{video_id}", json=payload, headers=auth_headers(token))
    assert response.status_code == 201, response.text
    return response.json()


def test_list_returns_top_level_comments_newest_first(client, register, upload):
    token, user = register("alice")
    video = upload(token)
    first = add_comment(client, token, video["id"], "first")
    second = add_comment(client, token, video["id"], "second")
    add_comment(client, token, video["id"], "a reply", parent_id=first["id"])

    response = client.get(f"/api/comments/video/{video['id']}")

    assert response.status_code == 200
    comments = response.json()
    assert [c["id"] for c in comments] == [second["id"], first["id"]]
    assert comments[0]["user"] == {"id": user["id"], "username": "alice", "avatar": user["avatar"]}


def test_comment_text_is_trimmed(client, register, upload):
    token, _ = register("alice")
    video = upload(token)

    comment = add_comment(client, token, video["id"], "  hello  ")

    assert comment["text"] == "hello"
    assert comment["is_edited"] is False
    assert comment["parent_id"] is None


def test_blank_comment_rejected(client, register, upload):
    token, _ = register("alice")
    video = upload(token)

    response = client.post(f"/api/comments/video/{video['id']}", json={"text": "   "}, headers=auth_headers(token))

    assert response.status_code == 400
    assert response.json()["message"] == "Comment text is required"


def test_comment_on_missing_video(client, register):
    token, _ = register("alice")

    response = client.post("/api/comments/video/9999", json={"text": "hi"}, headers=auth_headers(token))

    assert response.status_code == 404


def test_comment_requires_token(client, register, upload):
    token, _ = register("alice")
    video = upload(token)

    response = client.post(f"/api/comments/video/{video['id']}", json={"text": "hi"})

    assert response.status_code == 401


def test_author_edits_comment(client, register, upload):
    token, _ = register("alice")
    video = upload(token)
    comment = add_comment(client, token, video["id"], "typo")

    response = client.put(f"/api/comments/{comment['id']}", json={"text": "fixed"}, headers=auth_headers(token))

    assert response.status_code == 200
    assert response.json()["text"] == "fixed"
    assert response.json()["is_edited"] is True


def test_other_user_cannot_edit_or_delete_comment(client, register, upload):
    alice_token, _ = register("alice")
    bob_token, _ = register("bob")
    video = upload(alice_token)
    comment = add_comment(client, alice_token, video["id"], "mine")

    edit = client.put(f"/api/comments/{comment['id']}", json={"text": "yours"}, headers=auth_headers(bob_token))
    delete = client.delete(f"/api/comments/{comment['id']}", headers=auth_headers(bob_token))

    assert edit.status_code == 403
    assert delete.status_code == 403
    assert delete.json()["message"] == "Not authorized to delete this comment"
    assert client.get(f"/api/comments/video/{video['id']}").json()[0]["text"] == "mine"


def test_delete_cascades_to_direct_replies_only(client, register, upload, db_session):
    token, _ = register("alice")
    video = upload(token)
    top = add_comment(client, token, video["id"], "top")
    reply = add_comment(client, token, video["id"], "reply", parent_id=top["id"])
    nested = add_comment(client, token, video["id"], "reply to reply", parent_id=reply["id"])
    other = add_comment(client, token, video["id"], "other thread")

    response = client.delete(f"/api/comments/{top['id']}", headers=auth_headers(token))

    assert response.status_code == 200
    assert response.json() == {"message": "Comment deleted successfully", "comment_id": top["id"]}
    remaining = {c.id for c in db_session.query(Comment).all()}
    assert remaining == {nested["id"], other["id"]}


def test_deleting_reply_leaves_parent_and_siblings(client, register, upload, db_session):
    token, _ = register("alice")
    video = upload(token)
    top = add_comment(client, token, video["id"], "top")
    doomed = add_comment(client, token, video["id"], "reply 1", parent_id=top["id"])
    sibling = add_comment(client, token, video["id"], "reply 2", parent_id=top["id"])

    client.delete(f"/api/comments/{doomed['id']}", headers=auth_headers(token))

    remaining = {c.id for c in db_session.query(Comment).all()}
    assert remaining == {top["id"], sibling["id"]}


def test_delete_missing_comment(client, register):
    token, _ = register("alice")

    assert client.delete("/api/comments/9999", headers=auth_headers(token)).status_code == 404


def test_like_comment_without_token(client, register, upload):
    token, _ = register("alice")
    video = upload(token)
    comment = add_comment(client, token, video["id"], "nice")

    client.post(f"/api/comments/{comment['id']}/like")
    response = client.post(f"/api/comments/{comment['id']}/like")

    assert response.status_code == 200
    assert response.json() == {"message": "Comment liked successfully", "likes": 2}


def test_like_missing_comment(client):
    response = client.post("/api/comments/9999/like")

    assert response.status_code == 404
    assert response.json()["message"] == "Comment not found"


def test_overlong_comment_rejected(client, register, upload, db_session):
    token, _ = register("alice")
    video = upload(token)

    response = client.post(f"/api/comments/video/{video['id']}", json={"text": "x" * 1001}, headers=auth_headers(token))

    assert response.status_code == 400
    assert "message" in response.json()
    assert db_session.query(Comment).count() == 0


def test_comment_at_the_limit_accepted(client, register, upload):
    token, _ = register("alice")
    video = upload(token)

    comment = add_comment(client, token, video["id"], "x" * 1000)

    assert len(comment["text"]) == 1000


def test_overlong_edit_rejected(client, register, upload):
    token, _ = register("alice")
    video = upload(token)
    comment = add_comment(client, token, video["id"], "short")

    response = client.put(f"/api/comments/{comment['id']}", json={"text": "x" * 1001}, headers=auth_headers(token))

    assert response.status_code == 400
    assert client.get(f"/api/comments/video/{video['id']}").json()[0]["text"] == "short"


def test_out_of_range_parent_rejected(client, register, upload):
    token, _ = register("alice")
    video = upload(token)

    response = client.post(
        f"/api/comments/video/{video['id']}",
        json={"text": "reply", "parent_comment_id": 2**63},
        headers=auth_headers(token),
    )

    assert response.status_code == 400


def test_like_out_of_range_comment_rejected(client):
    assert client.post("/api/comments/99999999999999999999/like").status_code == 400
