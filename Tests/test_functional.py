import json
import pytest
from fastapi.testclient import TestClient
from Routes.functional import flux_values
from Routes.streaming import json_array_stream, ndjson_stream, prefetch
from main import app

client = TestClient(app)

async def collect(values):
    return [value async for value in values]

async def source(*values):
    for value in values:
        yield value

def test_mono():
    response = client.get("/functional/mono", headers={"Accept": "application/json"})
    assert response.status_code == 200
    assert response.json() == 1

def test_flux():
    response = client.get("/functional/flux", headers={"Accept": "application/json"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    assert response.json() == [1, 2, 3, 4]

def test_flux_streams_one_element_per_line():
    with client.stream("GET", "/functional/flux", headers={"Accept": "application/x-ndjson"}) as response:
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/x-ndjson")
        values = [json.loads(line) for line in response.iter_lines() if line]
    assert values == [1, 2, 3, 4]

@pytest.mark.anyio
async def test_flux_values_in_order():
    assert await collect(flux_values()) == [1, 2, 3, 4]

@pytest.mark.anyio
async def test_json_array_stream_chunks():
    assert await collect(json_array_stream(flux_values())) == ["[", "1", ",2", ",3", ",4", "]"]

@pytest.mark.anyio
async def test_json_array_stream_empty():
    assert "".join(await collect(json_array_stream(source()))) == "[]"

@pytest.mark.anyio
async def test_ndjson_stream():
    assert await collect(ndjson_stream(source("a", 2))) == ['"a"\n', '2\n']

@pytest.mark.anyio
async def test_prefetch_keeps_every_element():
    assert await collect(await prefetch(source(1, 2, 3))) == [1, 2, 3]
    assert await collect(await prefetch(source())) == []

@pytest.mark.anyio
async def test_prefetch_raises_before_streaming():
    async def failing():
        raise RuntimeError("store unavailable")
        yield

    with pytest.raises(RuntimeError):
        await prefetch(failing())
