from pydantic import BaseModel, Field


class ReorderItem(BaseModel):
    id: int
    position: int = Field(ge=0)


class ReorderRequest(BaseModel):
    # Body: { "orders": [ {"id": 1, "position": 0}, {"id": 3, "position": 1} ] }
    orders: list[ReorderItem] = Field(min_length=1)
