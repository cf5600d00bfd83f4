"""Test the HTTP surface: envelope, status codes, camelCase keys and auth."""

import uuid

from vidtube.auth import create_access_token

VIDEO_BODY = {
    "title": "Launch",
    "description": "Our first video",
    "videoFileUrl": "https://cdn.example.com/launch.mp4",
    "thumbnailUrl": "https://cdn.example.com/launch.jpg",
    "duration": 42,
}


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_create_video_envelope(client, alice, auth_headers):
    response = client.post("/api/v1/videos", json=VIDEO_BODY, headers=auth_headers(alice))

    assert response.status_code == 201
    body = response.json()
    assert set(body) == {"statusCode", "success", "message", "data"}
    assert body["statusCode"] == 201
    assert body["success"] is True
    assert body["data"]["videoFileUrl"] == VIDEO_BODY["videoFileUrl"]
    assert body["data"]["ownerId"] == str(alice["id"])
    assert body["data"]["isPublished"] is True


def test_comment_scenario_over_http(client, alice, bob, carol, make_video, auth_headers):
    video = make_video(alice, "scenario")

    created = client.post(
        f"/api/v1/comments/{video['id']}", json={"content": "hi"}, headers=auth_headers(bob)
    )
    assert created.status_code == 201
    comment = created.json()["data"]
    assert comment["content"] == "hi"
    assert comment["parentCommentId"] is None

    reply = client.post(
        f"/api/v1/comments/reply/{comment['id']}", json={"content": "thanks"}, headers=auth_headers(alice)
    ).json()["data"]
    assert reply["parentCommentId"] == comment["id"]
    assert reply["videoId"] == str(video["id"])

    liked = client.post(f"/api/v1/likes/toggle/c/{comment['id']}", headers=auth_headers(bob))
    assert liked.json()["data"] == {"isLiked": True}

    as_bob = client.get(f"/api/v1/comments/{video['id']}", headers=auth_headers(bob)).json()["data"]
    as_carol = client.get(f"/api/v1/comments/{video['id']}", headers=auth_headers(carol)).json()["data"]
    assert as_bob["totalItems"] == 1
    assert as_bob["items"][0]["likesCount"] == 1
    assert as_bob["items"][0]["isLiked"] is True
    assert as_bob["items"][0]["repliesCount"] == 1
    assert as_carol["items"][0]["isLiked"] is False

    replies = client.get(f"/api/v1/comments/replies/{comment['id']}").json()["data"]
    assert replies["limit"] == 2
    assert replies["items"][0]["content"] == "thanks"


def test_paginated_payload_keys(client, alice, make_video):
    for i in range(3):
        make_video(alice, f"v{i}")

    body = client.get(f"/api/v1/videos/channel/{alice['id']}", params={"page": 2, "limit": 2}).json()

    assert body["success"] is True
    assert set(body["data"]) == {"items", "page", "limit", "totalItems", "totalPages", "hasNext", "hasPrev"}
    assert body["data"]["totalPages"] == 2
    assert body["data"]["hasPrev"] is True
    assert len(body["data"]["items"]) == 1


def test_mutation_without_token_is_401(client, alice, make_video):
    video = make_video(alice)
    response = client.post(f"/api/v1/comments/{video['id']}", json={"content": "hi"})

    assert response.status_code == 401
    assert response.json()["success"] is False
    assert response.json()["data"] is None


def test_token_for_unknown_user_is_401(client):
    headers = {"Authorization": f"Bearer {create_access_token(uuid.uuid4())}"}
    assert client.post("/api/v1/tweets", json={"content": "x"}, headers=headers).status_code == 401


def test_bad_token_is_anonymous_on_reads(client, alice):
    response = client.get("/api/v1/tweets", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 200


def test_malformed_id_is_400(client):
    response = client.get("/api/v1/videos/not-a-uuid")

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert response.json()["message"] == "Invalid videoId"


def test_bad_page_values_are_400(client):
    assert client.get("/api/v1/tweets", params={"page": 0}).status_code == 400
    assert client.get("/api/v1/tweets", params={"limit": "many"}).status_code == 400


def test_missing_resource_is_404(client):
    response = client.get(f"/api/v1/tweets/{uuid.uuid4()}")
    assert response.status_code == 404
    assert response.json()["message"] == "Tweet not found"


def test_non_owner_mutation_is_403(client, alice, bob, auth_headers):
    tweet = client.post("/api/v1/tweets", json={"content": "mine"}, headers=auth_headers(alice)).json()["data"]

    response = client.patch(f"/api/v1/tweets/{tweet['id']}", json={"content": "ours"}, headers=auth_headers(bob))

    assert response.status_code == 403
    assert response.json()["statusCode"] == 403


def test_playlist_scenario_over_http(client, alice, make_video, auth_headers):
    v1 = make_video(alice, "one")
    v2 = make_video(alice, "two")
    headers = auth_headers(alice)
    playlist = client.post(
        "/api/v1/playlist", json={"name": "Mix", "description": "Stuff"}, headers=headers
    ).json()["data"]

    for video in (v1, v1, v2):
        response = client.patch(f"/api/v1/playlist/add/{video['id']}/{playlist['id']}", headers=headers)
        assert response.status_code == 200

    data = client.get(f"/api/v1/playlist/{playlist['id']}").json()["data"]
    assert data["videoIds"] == [str(v1["id"]), str(v2["id"])]
    assert data["totalVideos"] == 2


def test_subscription_and_dashboard(client, alice, bob, auth_headers):
    toggled = client.post(f"/api/v1/subscriptions/c/{alice['id']}", headers=auth_headers(bob))
    assert toggled.json()["data"] == {"subscribed": True}

    self_sub = client.post(f"/api/v1/subscriptions/c/{alice['id']}", headers=auth_headers(alice))
    assert self_sub.status_code == 400

    stats = client.get("/api/v1/dashboard/stats", headers=auth_headers(alice)).json()["data"]
    assert stats["totalSubscribers"] == 1

    profile = client.get("/api/v1/users/c/alice", headers=auth_headers(bob)).json()["data"]
    assert profile["isSubscribed"] is True
    assert profile["subscribersCount"] == 1


def test_missing_body_is_400(client, alice, auth_headers):
    response = client.post("/api/v1/tweets", headers=auth_headers(alice))
    assert response.status_code == 400
    assert response.json()["success"] is False
