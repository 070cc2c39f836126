from decimal import Decimal
from pydantic import BaseModel

class Item(BaseModel):
    id: str | None = None
    description: str
    price: Decimal

    @classmethod
    def from_dynamodb_item(cls, dynamodb_item: dict):
        return cls(
            id=dynamodb_item.get('id'),
            description=dynamodb_item.get('description', ''),
            price=Decimal(str(dynamodb_item.get('price', 0)))
        )

    def to_dynamodb_item(self) -> dict:
        if not self.id:
            raise ValueError("Item has no id, save it through the repository first.")
        return {'id': self.id, 'description': self.description, 'price': self.price}
