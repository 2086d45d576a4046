from typing import List, Optional

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from collabdocs.api.http.errors import handle_errors, not_found
from collabdocs.api.schemas import DataResponse, SuccessResponse
from collabdocs.core.db import get_db
from collabdocs.domains.documents.schemas import DocumentCreate, DocumentUpdate, DocumentResponse
from collabdocs.domains.documents.services import DocumentService

router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("", response_model=DataResponse[List[DocumentResponse]])
async def list_documents(db: AsyncSession = Depends(get_db)):
    """Список всех документов, последние измененные первыми"""
    document_service = DocumentService(db)

    with handle_errors("fetch documents"):
        documents = await document_service.list_documents()

    return {"data": [DocumentResponse.model_validate(doc) for doc in documents]}


@router.post("", response_model=DataResponse[DocumentResponse], status_code=status.HTTP_201_CREATED)
async def create_document(
    document_data: Optional[DocumentCreate] = Body(None),
    db: AsyncSession = Depends(get_db)
):
    """Создание нового документа"""
    document_service = DocumentService(db)

    with handle_errors("create document"):
        document = await document_service.create_document(document_data)

    return {"data": DocumentResponse.model_validate(document)}


@router.get("/{document_id}", response_model=DataResponse[DocumentResponse])
async def get_document(document_id: str, db: AsyncSession = Depends(get_db)):
    """Получение документа по id"""
    document_service = DocumentService(db)

    with handle_errors("fetch document"):
        document = await document_service.get_document(document_id)

    if not document:
        raise not_found("Document")

    return {"data": DocumentResponse.model_validate(document)}


@router.patch("/{document_id}", response_model=DataResponse[DocumentResponse])
async def update_document(
    document_id: str,
    update_data: Optional[DocumentUpdate] = Body(None),
    db: AsyncSession = Depends(get_db)
):
    """Частичное обновление документа: заголовок и/или содержимое"""
    document_service = DocumentService(db)

    with handle_errors("update document"):
        document = await document_service.update_document(document_id, update_data or DocumentUpdate())

    if not document:
        raise not_found("Document")

    return {"data": DocumentResponse.model_validate(document)}


@router.delete("/{document_id}", response_model=DataResponse[SuccessResponse])
async def delete_document(document_id: str, db: AsyncSession = Depends(get_db)):
    """Удаление документа вместе с комментариями"""
    document_service = DocumentService(db)

    with handle_errors("delete document"):
        deleted = await document_service.delete_document(document_id)

    if not deleted:
        raise not_found("Document")

    return {"data": {"success": True}}
