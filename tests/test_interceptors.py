import pytest

from chapar import ChaparClient, ResultEnvelope

BASE_URL = "https://api.x"


def build_client(**kwargs):
    return ChaparClient(base_url=BASE_URL, **kwargs)


def register_all(client, calls):
    client.setup_interceptors(
        on_400=lambda res: calls.append((400, res)),
        on_401=lambda res: calls.append((401, res)),
        on_404=lambda res: calls.append((404, res)),
        on_500=lambda res: calls.append((500, res)),
    )


@pytest.mark.asyncio
async def test_401_callback_fires_once_with_partial_result(requests_mock):
    client = build_client()
    calls = []
    register_all(client, calls)
    requests_mock.get(f"{BASE_URL}/me", status_code=401, json={"message": "expired"})

    await client.send("me")

    assert calls == [
        (401, ResultEnvelope(success=False, data=None, meta_data=None, message="expired"))
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [400, 404, 500])
async def test_each_registered_status_routes_to_its_callback(requests_mock, status_code):
    client = build_client()
    calls = []
    register_all(client, calls)
    requests_mock.get(f"{BASE_URL}/thing", status_code=status_code, json={})

    await client.send("thing")

    assert [status for status, _ in calls] == [status_code]
    assert calls[0][1].message is None


@pytest.mark.asyncio
async def test_unmatched_status_invokes_no_callback(requests_mock):
    client = build_client()
    calls = []
    register_all(client, calls)
    requests_mock.get(f"{BASE_URL}/busy", status_code=503, json={"message": "later"})

    result = await client.send("busy")

    assert calls == []
    assert result.status_code == 503


@pytest.mark.asyncio
async def test_successful_response_is_not_observed(requests_mock):
    client = build_client()
    calls = []
    register_all(client, calls)
    requests_mock.get(f"{BASE_URL}/ok", json={"data": 1})

    await client.send("ok")

    assert calls == []


@pytest.mark.asyncio
async def test_interceptor_runs_before_failure_branch_and_keeps_rejection(requests_mock):
    order = []
    client = build_client(on_error=lambda err: order.append(("on_error", err.status_code)))
    client.setup_interceptors(on_404=lambda res: order.append(("on_404", res.success)))
    requests_mock.get(f"{BASE_URL}/missing", status_code=404, json={"message": "nope"})

    result = await client.send("missing")

    assert order == [("on_404", False), ("on_error", 404)]
    assert result == ResultEnvelope(success=False, status_code=404)


@pytest.mark.asyncio
async def test_interceptor_uses_configured_message_key(requests_mock):
    client = build_client(message_key="detail")
    seen = []
    client.setup_interceptors(on_400=seen.append)
    requests_mock.post(f"{BASE_URL}/orders", status_code=400, json={"detail": "bad qty"})

    await client.send("orders", method="post", body={"qty": -1})

    assert seen[0].message == "bad qty"


@pytest.mark.asyncio
async def test_non_json_failure_body_yields_no_message(requests_mock):
    client = build_client()
    seen = []
    client.setup_interceptors(on_500=seen.append)
    requests_mock.get(f"{BASE_URL}/boom", status_code=500, text="Internal Server Error")

    await client.send("boom")

    assert len(seen) == 1
    assert seen[0].message is None


@pytest.mark.asyncio
async def test_raising_callback_does_not_replace_failure(caplog, requests_mock):
    errors = []
    client = build_client(on_error=errors.append)

    def explode(result):
        raise RuntimeError("callback blew up")

    client.setup_interceptors(on_401=explode)
    requests_mock.get(f"{BASE_URL}/me", status_code=401, json={"message": "expired"})

    with caplog.at_level("ERROR", logger="chapar.interceptors"):
        result = await client.send("me")

    assert result == ResultEnvelope(success=False, status_code=401)
    assert len(errors) == 1
    assert errors[0].status_code == 401
    assert "Interceptor callback for status 401 failed" in caplog.text


@pytest.mark.asyncio
async def test_repeated_registration_stacks_callbacks(requests_mock):
    client = build_client()
    calls = []
    client.setup_interceptors(on_404=lambda res: calls.append("first"))
    client.setup_interceptors(on_404=lambda res: calls.append("second"))
    requests_mock.get(f"{BASE_URL}/gone", status_code=404, json={})

    await client.send("gone")

    assert calls == ["first", "second"]
