import asyncio
from typing import Annotated, AsyncIterator
from fastapi import APIRouter, Header
from Routes.streaming import streaming_response

router = APIRouter(prefix="/functional", tags=["Functional"])

async def flux_values() -> AsyncIterator[int]:
    for value in (1, 2, 3, 4):
        # hand control back to the loop between elements
        await asyncio.sleep(0)
        yield value

# GET /functional/mono : a single value
@router.get("/mono")
async def mono() -> int:
    return 1

# GET /functional/flux : 1, 2, 3, 4 streamed element by element
@router.get("/flux")
async def flux(accept: Annotated[str | None, Header()] = None):
    return streaming_response(flux_values(), accept)
