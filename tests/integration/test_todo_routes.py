"""Integration tests for the /todos HTTP API."""

import pytest
import pytest_asyncio


@pytest_asyncio.fixture
async def seeded(client):
    """Create three todos through the API; the second one is completed."""
    for text, completed in [("Buy milk", False), ("Walk dog", True), ("Read", False)]:
        response = await client.post(
            "/todos", json={"text": text, "completed": completed}
        )
        assert response.status_code == 201
    return client


@pytest.mark.asyncio
async def test_healthcheck(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert await response.get_data(as_text=True) == "ok"


@pytest.mark.asyncio
async def test_create_returns_new_record(client):
    response = await client.post("/todos", json={"text": "  Buy milk  "})

    assert response.status_code == 201
    body = await response.get_json()
    assert body["id"] == 1
    assert body["text"] == "Buy milk"
    assert body["completed"] is False
    assert body["createdAt"] == body["updatedAt"]


@pytest.mark.asyncio
async def test_create_with_blank_text_is_bad_request(client):
    response = await client.post("/todos", json={"text": "   "})

    assert response.status_code == 400
    assert await response.get_json() == {
        "name": "BadRequest",
        "message": "Todo text is required and must be a non-empty string",
        "code": 400,
        "className": "bad-request",
    }


@pytest.mark.asyncio
async def test_create_with_long_text_is_bad_request(client):
    response = await client.post("/todos", json={"text": "a" * 501})
    assert response.status_code == 400
    body = await response.get_json()
    assert body["message"] == "Todo text must be less than 500 characters"


@pytest.mark.asyncio
async def test_create_without_json_body_is_bad_request(client):
    response = await client.post("/todos", data="not json")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_find_lists_all_todos(seeded):
    response = await seeded.get("/todos")

    assert response.status_code == 200
    body = await response.get_json()
    assert [todo["text"] for todo in body] == ["Buy milk", "Walk dog", "Read"]


@pytest.mark.asyncio
async def test_find_filters_by_completed(seeded):
    response = await seeded.get("/todos", query_string={"completed": "true"})
    body = await response.get_json()
    assert [todo["id"] for todo in body] == [2]


@pytest.mark.asyncio
async def test_find_filters_by_other_fields(seeded):
    response = await seeded.get("/todos", query_string={"id": "3"})
    assert [todo["text"] for todo in await response.get_json()] == ["Read"]

    response = await seeded.get("/todos", query_string={"priority": "high"})
    assert response.status_code == 200
    assert await response.get_json() == []


@pytest.mark.asyncio
async def test_find_sorts_and_paginates(seeded):
    response = await seeded.get(
        "/todos",
        query_string={"$sort[completed]": "-1", "$sort[id]": "-1", "$limit": "2"},
    )
    body = await response.get_json()
    assert [todo["id"] for todo in body] == [2, 3]

    response = await seeded.get("/todos", query_string={"$skip": "1", "$limit": "1"})
    body = await response.get_json()
    assert [todo["id"] for todo in body] == [2]


@pytest.mark.asyncio
async def test_find_with_invalid_limit_is_bad_request(seeded):
    response = await seeded.get("/todos", query_string={"$limit": "-3"})
    assert response.status_code == 400
    body = await response.get_json()
    assert body["name"] == "BadRequest"


@pytest.mark.asyncio
async def test_get_returns_record(seeded):
    response = await seeded.get("/todos/2")
    assert response.status_code == 200
    assert (await response.get_json())["text"] == "Walk dog"


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["get", "put", "patch", "delete"])
async def test_unknown_id_is_not_found(client, method):
    kwargs = {} if method in ("get", "delete") else {"json": {"text": "x"}}
    response = await getattr(client, method)("/todos/9999", **kwargs)

    assert response.status_code == 404
    assert await response.get_json() == {
        "name": "NotFound",
        "message": "Todo with id 9999 not found",
        "code": 404,
        "className": "not-found",
    }


@pytest.mark.asyncio
async def test_non_integer_id_is_not_found(client):
    response = await client.patch("/todos/abc", json={"completed": True})
    assert response.status_code == 404
    assert (await response.get_json())["message"] == "Todo with id abc not found"


@pytest.mark.asyncio
async def test_update_replaces_record(seeded):
    response = await seeded.put("/todos/1", json={"text": "Buy oat milk"})

    assert response.status_code == 200
    body = await response.get_json()
    assert body["text"] == "Buy oat milk"
    assert body["completed"] is False
    assert body["updatedAt"] >= body["createdAt"]


@pytest.mark.asyncio
async def test_update_without_text_is_bad_request(seeded):
    response = await seeded.put("/todos/1", json={"completed": True})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_patch_marks_completed(seeded):
    response = await seeded.patch("/todos/1", json={"completed": True})

    assert response.status_code == 200
    body = await response.get_json()
    assert body["completed"] is True
    assert body["text"] == "Buy milk"

    listed = await (await seeded.get("/todos", query_string={"completed": "true"})).get_json()
    assert [todo["id"] for todo in listed] == [1, 2]


@pytest.mark.asyncio
async def test_patch_with_blank_text_is_bad_request(seeded):
    response = await seeded.patch("/todos/1", json={"text": ""})
    assert response.status_code == 400
    body = await response.get_json()
    assert body["message"] == "Todo text must be a non-empty string"


@pytest.mark.asyncio
async def test_delete_returns_removed_record(seeded):
    response = await seeded.delete("/todos/2")

    assert response.status_code == 200
    assert (await response.get_json())["text"] == "Walk dog"
    assert (await seeded.get("/todos/2")).status_code == 404

    created = await (await seeded.post("/todos", json={"text": "New"})).get_json()
    assert created["id"] == 4


@pytest.mark.asyncio
async def test_mutations_are_logged(client, caplog):
    with caplog.at_level("INFO", logger="todolist"):
        await client.post("/todos", json={"text": "Buy milk"})
        await client.patch("/todos/1", json={"completed": True})
        await client.delete("/todos/1")

    assert "A new todo has been created" in caplog.text
    assert "A todo has been patched" in caplog.text
    assert "A todo has been removed" in caplog.text


@pytest.mark.asyncio
async def test_responses_carry_cors_headers(client):
    response = await client.get("/todos")
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert "PATCH" in response.headers["Access-Control-Allow-Methods"]


@pytest.mark.asyncio
async def test_unsupported_method_is_json_error(client):
    response = await client.post("/todos/1", json={"text": "x"})
    assert response.status_code == 405
    assert (await response.get_json())["name"] == "MethodNotAllowed"
