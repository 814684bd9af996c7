from fastapi import APIRouter, Depends, File, Form, Path, Query, UploadFile
from fastapi.responses import PlainTextResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, List

from docvault.core.db import get_db
from docvault.db.base import MAX_ID
from docvault.domains.documents.schemas import (
    CATEGORY_MAX_LENGTH, DocumentUpdate, DocumentResponse, DocumentStatsResponse
)
from docvault.domains.documents.services import DocumentService

router = APIRouter(prefix="/api/documents", tags=["documents"])


def _to_responses(documents) -> List[DocumentResponse]:
    return [DocumentResponse.from_entity(doc) for doc in documents]


@router.post("/upload", response_model=DocumentResponse)
async def upload_document(
    file: UploadFile = File(...),
    user_id: int = Form(..., alias="userId", ge=1, le=MAX_ID),
    category: str = Form(..., min_length=1, max_length=CATEGORY_MAX_LENGTH),
    description: Optional[str] = Form(None),
    db: AsyncSession = Depends(get_db)
):
    """Upload a file with its metadata"""
    file_data = await file.read()
    # size comes from the upload metadata when the server provides it
    file_size = file.size if file.size is not None else len(file_data)

    document = await DocumentService(db).upload_document(
        file_data=file_data,
        file_name=file.filename,
        content_type=file.content_type,
        file_size=file_size,
        user_id=user_id,
        category=category,
        description=description
    )
    return DocumentResponse.from_entity(document)


@router.get("/admin/all", response_model=List[DocumentResponse])
async def get_all_documents(db: AsyncSession = Depends(get_db)):
    """Every stored document (admin)"""
    documents = await DocumentService(db).list_documents()
    return _to_responses(documents)


@router.get("/admin/stats", response_model=DocumentStatsResponse)
async def get_document_stats(db: AsyncSession = Depends(get_db)):
    """Document count and total stored bytes"""
    stats = await DocumentService(db).get_stats()
    return DocumentStatsResponse(**stats)


@router.get("/user/{user_id}", response_model=List[DocumentResponse])
async def get_user_documents(
    user_id: int = Path(..., ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db)
):
    documents = await DocumentService(db).get_user_documents(user_id)
    return _to_responses(documents)


@router.get("/user/{user_id}/category/{category}", response_model=List[DocumentResponse])
async def get_documents_by_category(
    *,
    user_id: int = Path(..., ge=1, le=MAX_ID),
    category: str,
    db: AsyncSession = Depends(get_db)
):
    documents = await DocumentService(db).get_documents_by_category(user_id, category)
    return _to_responses(documents)


@router.get("/user/{user_id}/search", response_model=List[DocumentResponse])
async def search_documents(
    user_id: int = Path(..., ge=1, le=MAX_ID),
    file_name: str = Query(..., alias="fileName"),
    db: AsyncSession = Depends(get_db)
):
    """Owner's documents whose file name contains the query"""
    documents = await DocumentService(db).search_documents(user_id, file_name)
    return _to_responses(documents)


@router.get("/download/{document_id}")
async def download_document(
    document_id: int = Path(..., ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db)
):
    file_data = await DocumentService(db).download_document(document_id)

    return Response(
        content=file_data,
        media_type="application/octet-stream",
        headers={"Content-Disposition": f"attachment; filename=document_{document_id}.bin"}
    )


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: int = Path(..., ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db)
):
    document = await DocumentService(db).get_document(document_id)
    return DocumentResponse.from_entity(document)


@router.put("/{document_id}", response_model=DocumentResponse)
async def update_document(
    *,
    document_id: int = Path(..., ge=1, le=MAX_ID),
    update_data: DocumentUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Update file name, category or description"""
    document = await DocumentService(db).update_document(document_id, update_data)
    return DocumentResponse.from_entity(document)


@router.delete("/{document_id}", response_class=PlainTextResponse)
async def delete_document(
    document_id: int = Path(..., ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db)
):
    await DocumentService(db).delete_document(document_id)
    return "Document deleted successfully"
