from datetime import datetime

from coffeechat.db.models.message import Message
from coffeechat.services.conversations import list_conversations
from coffeechat.services.messages import send_message


def _seed_example(db, alice, bob, carol):
    for text in ("hi Bob", "are you free?", "for algebra"):
        send_message(db, alice.id, bob.id, text)
    send_message(db, bob.id, alice.id, "sure, tomorrow")
    send_message(db, alice.id, carol.id, "hello Carol")


def test_conversations_latest_partner_first(client, auth, db, alice, bob, carol):
    _seed_example(db, alice, bob, carol)

    resp = client.get("/api/messages/conversations", headers=auth(alice))

    assert resp.status_code == 200
    conversations = resp.json()["conversations"]
    assert [c["partnerId"] for c in conversations] == [carol.id, bob.id]

    bob_entry = conversations[1]
    assert bob_entry["partnerName"] == "Bob"
    assert bob_entry["lastMessage"]["content"] == "sure, tomorrow"
    assert bob_entry["lastMessage"]["senderId"] == bob.id

    times = [c["lastMessage"]["createdAt"] for c in conversations]
    assert times == sorted(times, reverse=True)


def test_conversations_from_the_other_side(db, alice, bob, carol):
    _seed_example(db, alice, bob, carol)

    entries = list_conversations(db, bob.id)

    assert len(entries) == 1
    assert entries[0].partner_id == alice.id
    assert entries[0].partner_profile_picture == alice.image
    assert entries[0].last_message.content == "sure, tomorrow"


def test_conversations_empty_inbox(client, auth, alice, bob):
    resp = client.get("/api/messages/conversations", headers=auth(alice))
    assert resp.status_code == 200
    assert resp.json() == {"conversations": []}


def test_conversations_only_list_partners_with_messages(db, alice, bob, carol):
    send_message(db, bob.id, carol.id, "not involving alice")

    assert list_conversations(db, alice.id) == []
    assert {e.partner_id for e in list_conversations(db, carol.id)} == {bob.id}


def test_thread_returns_pair_messages_oldest_first(client, auth, db, alice, bob, carol):
    _seed_example(db, alice, bob, carol)

    resp = client.get(f"/api/messages/conversations/{bob.id}", headers=auth(alice))

    assert resp.status_code == 200
    body = resp.json()
    assert [m["content"] for m in body["messages"]] == [
        "hi Bob",
        "are you free?",
        "for algebra",
        "sure, tomorrow",
    ]
    assert body["otherUser"] == {"id": bob.id, "name": "Bob", "image": None}
    assert body["pagination"] == {"page": 1, "limit": 50, "total": 4, "totalPages": 1}


def test_thread_pages_do_not_overlap(client, auth, db, alice, bob):
    for i in range(5):
        send_message(db, alice.id, bob.id, f"message {i}")

    page1 = client.get(f"/api/messages/conversations/{bob.id}?page=1&limit=2", headers=auth(alice)).json()
    page2 = client.get(f"/api/messages/conversations/{bob.id}?page=2&limit=2", headers=auth(alice)).json()
    page3 = client.get(f"/api/messages/conversations/{bob.id}?page=3&limit=2", headers=auth(alice)).json()

    ids1 = [m["id"] for m in page1["messages"]]
    ids2 = [m["id"] for m in page2["messages"]]
    assert len(ids1) == 2 and len(ids2) == 2
    assert not set(ids1) & set(ids2)
    assert ids1 + ids2 == sorted(ids1 + ids2)
    assert [m["content"] for m in page3["messages"]] == ["message 4"]
    assert page1["pagination"]["totalPages"] == 3


def test_thread_limit_is_clamped(client, auth, db, alice, bob):
    send_message(db, alice.id, bob.id, "hello")

    high = client.get(f"/api/messages/conversations/{bob.id}?limit=1000", headers=auth(alice)).json()
    low = client.get(f"/api/messages/conversations/{bob.id}?limit=0", headers=auth(alice)).json()

    assert high["pagination"]["limit"] == 100
    assert low["pagination"]["limit"] == 1


def test_thread_unknown_partner(client, auth, alice):
    resp = client.get("/api/messages/conversations/user-nobody", headers=auth(alice))
    assert resp.status_code == 404


def test_thread_rejects_page_zero(client, auth, alice, bob):
    resp = client.get(f"/api/messages/conversations/{bob.id}?page=0", headers=auth(alice))
    assert resp.status_code == 400


def test_equal_timestamps_break_ties_by_id(db, alice, bob, carol):
    stamp = datetime(2026, 1, 1, 12, 0, 0)
    older = Message(sender_id=alice.id, recipient_id=bob.id, content="to bob", created_at=stamp)
    newer = Message(sender_id=carol.id, recipient_id=alice.id, content="from carol", created_at=stamp)
    db.add(older)
    db.commit()
    db.add(newer)
    db.commit()

    entries = list_conversations(db, alice.id)

    assert [e.partner_id for e in entries] == [carol.id, bob.id]
    assert entries[0].last_message.content == "from carol"
