import json
from typing import AsyncIterator, Callable
from fastapi.responses import StreamingResponse

JSON_MEDIA_TYPE = "application/json"
NDJSON_MEDIA_TYPE = "application/x-ndjson"

# JSON array delivered one element per chunk
async def json_array_stream(values: AsyncIterator, encode: Callable = json.dumps) -> AsyncIterator[str]:
    yield "["
    first = True
    async for value in values:
        yield encode(value) if first else "," + encode(value)
        first = False
    yield "]"

async def ndjson_stream(values: AsyncIterator, encode: Callable = json.dumps) -> AsyncIterator[str]:
    async for value in values:
        yield encode(value) + "\n"

def streaming_response(values: AsyncIterator, accept: str | None = None, encode: Callable = json.dumps,
                       status_code: int = 200) -> StreamingResponse:
    if accept and NDJSON_MEDIA_TYPE in accept:
        return StreamingResponse(ndjson_stream(values, encode), status_code=status_code, media_type=NDJSON_MEDIA_TYPE)
    return StreamingResponse(json_array_stream(values, encode), status_code=status_code, media_type=JSON_MEDIA_TYPE)

async def _chain(first, rest: AsyncIterator) -> AsyncIterator:
    yield first
    async for value in rest:
        yield value

async def _empty() -> AsyncIterator:
    return
    yield

async def prefetch(values: AsyncIterator) -> AsyncIterator:
    """Pull the first element now so a failing source raises before the response starts."""
    iterator = values.__aiter__()
    try:
        first = await iterator.__anext__()
    except StopAsyncIteration:
        return _empty()
    return _chain(first, iterator)
