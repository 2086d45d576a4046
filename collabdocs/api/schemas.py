from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """Успешный ответ API: ``{"data": ...}``"""
    data: T


class SuccessResponse(BaseModel):
    success: bool = True
