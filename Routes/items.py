from typing import Annotated
from fastapi import APIRouter, Depends, Header, HTTPException, status
from DB.ItemRepository import ItemReactiveRepository
from Models.Item import Item
from Routes.streaming import prefetch, streaming_response

router = APIRouter(tags=["Items"])

def get_item_repository() -> ItemReactiveRepository:
    return ItemReactiveRepository()

def encode_item(item: Item) -> str:
    return item.model_dump_json()

# GET /v1/items : all items, or the ones matching one description filter
@router.get("/v1/items")
async def get_items(repository: ItemReactiveRepository = Depends(get_item_repository),
                    accept: Annotated[str | None, Header()] = None,
                    description: str | None = None, contains: str | None = None, ending_with: str | None = None):
    filters = [value for value in (description, contains, ending_with) if value is not None]
    if len(filters) > 1:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                            detail="Use only one of 'description', 'contains' or 'ending_with'.")

    if description is not None:
        items = repository.find_by_description(description)
    elif contains is not None:
        items = repository.find_by_description_contains(contains)
    elif ending_with is not None:
        items = repository.find_by_description_ending_with(ending_with)
    else:
        items = repository.find_all()

    try:
        items = await prefetch(items)
    except Exception as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return streaming_response(items, accept, encode_item)

# GET /v1/items/uuid
@router.get("/v1/items/{item_id}", response_model=Item)
async def get_item(item_id: str, repository: ItemReactiveRepository = Depends(get_item_repository)):
    try:
        item = await repository.find_by_id(item_id)
    except Exception as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    return item

# POST /v1/items : create an item, the id is assigned unless the body carries one
@router.post("/v1/items", response_model=Item, status_code=status.HTTP_201_CREATED)
async def create_item(item: Item, repository: ItemReactiveRepository = Depends(get_item_repository)):
    try:
        return await repository.save(item)
    except Exception as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

# PUT /v1/items/uuid : replace description and price of an existing item
@router.put("/v1/items/{item_id}", response_model=Item)
async def update_item(item_id: str, item: Item, repository: ItemReactiveRepository = Depends(get_item_repository)):
    try:
        existing_item = await repository.find_by_id(item_id)
    except Exception as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    if existing_item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")

    updated_item = existing_item.model_copy(update={"description": item.description, "price": item.price})
    try:
        return await repository.save(updated_item)
    except Exception as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

# DELETE /v1/items/uuid : missing ids are not an error
@router.delete("/v1/items/{item_id}", response_description="Item deleted successfully")
async def delete_item(item_id: str, repository: ItemReactiveRepository = Depends(get_item_repository)):
    try:
        await repository.delete_by_id(item_id)
    except Exception as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return {"detail": "Item deleted successfully"}
