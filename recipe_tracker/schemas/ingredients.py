from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class IngredientBase(BaseModel):
    name: str = Field(max_length=120)
    unit: str = Field(max_length=40)


class IngredientCreate(IngredientBase):
    pass


class IngredientUpdate(IngredientBase):
    id: int


class IngredientRead(IngredientBase):
    id: int
    owner_user_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
