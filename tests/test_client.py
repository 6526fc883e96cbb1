import json, pathlib
import pytest, respx, httpx
from clinic_frontend import client as cl


FIX = pathlib.Path(__file__).parent / "fixtures"
BASE = cl._BASE_URL

@pytest.mark.asyncio
async def test_list_records_returns_body_untouched():
    bundle = json.loads((FIX / "doctors_list.json").read_text())
    with respx.mock(base_url=BASE) as m:
        m.get("/doctors").respond(200, json=bundle)

        body = await cl.list_records("doctors")
        assert body == bundle

@pytest.mark.asyncio
async def test_list_records_raises_on_error_status():
    with respx.mock(base_url=BASE) as m:
        m.get("/patients").respond(500, json={"error": "boom"})

        with pytest.raises(httpx.HTTPStatusError):
            await cl.list_records("patients")

@pytest.mark.asyncio
async def test_create_record_posts_json():
    with respx.mock(base_url=BASE) as m:
        route = m.post("/doctors").respond(201, json={"_id": "d9"})

        await cl.create_record("doctors", {"name": "Dr. Z", "specialty": "ENT"})
        assert route.called
        assert json.loads(route.calls.last.request.content) == {"name": "Dr. Z", "specialty": "ENT"}

@pytest.mark.asyncio
async def test_update_record_targets_identity():
    with respx.mock(base_url=BASE) as m:
        route = m.put("/patients/p1").respond(200, json={})

        await cl.update_record("patients", "p1", {"name": "Ada"})
        assert route.call_count == 1
        assert any(call.request.method == "PUT" for call in m.calls)

@pytest.mark.asyncio
async def test_delete_record():
    with respx.mock(base_url=BASE) as m:
        route = m.delete("/appointments/a1").respond(204)

        await cl.delete_record("appointments", "a1")
        assert route.called

@pytest.mark.asyncio
async def test_network_failure_propagates():
    with respx.mock(base_url=BASE) as m:
        m.get("/doctors").mock(side_effect=httpx.ConnectError("unreachable"))

        with pytest.raises(httpx.ConnectError):
            await cl.list_records("doctors")
