"""
Password entry endpoints.

Entries carry ciphertext produced by the client; the server stores and returns
``encryptedPassword`` as-is and never decrypts it.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status

from app.core.errors import NotFoundError
from app.schemas.password_vault import (
    PasswordEntryCreateRequest,
    PasswordEntryResponse,
    PasswordEntryUpdateRequest,
)
from app.storage import Storage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[PasswordEntryResponse])
def list_password_entries(
    vault_id: Optional[int] = Query(None, alias="vaultId", ge=1, description="Only entries in this vault"),
    storage: Storage = Depends(get_storage),
):
    return storage.list_password_entries(vault_id=vault_id)


@router.get("/{entry_id}", response_model=PasswordEntryResponse)
def get_password_entry(
    entry_id: int = Path(..., ge=1),
    storage: Storage = Depends(get_storage),
):
    entry = storage.get_password_entry(entry_id)
    if entry is None:
        raise NotFoundError("Password entry", entry_id)
    return entry


@router.post("", response_model=PasswordEntryResponse, status_code=status.HTTP_201_CREATED)
def create_password_entry(
    request: PasswordEntryCreateRequest,
    storage: Storage = Depends(get_storage),
):
    """Create an entry in an existing vault."""
    entry = storage.create_password_entry(request)
    # Never log the ciphertext
    logger.info(f"Created password entry: id={entry.id}, vault_id={entry.vault_id}")
    return entry


@router.put("/{entry_id}", response_model=PasswordEntryResponse)
def update_password_entry(
    request: PasswordEntryUpdateRequest,
    entry_id: int = Path(..., ge=1),
    storage: Storage = Depends(get_storage),
):
    entry = storage.update_password_entry(entry_id, request)
    if entry is None:
        raise NotFoundError("Password entry", entry_id)
    logger.info(f"Updated password entry: id={entry_id}, fields={sorted(request.changes())}")
    return entry


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_password_entry(
    entry_id: int = Path(..., ge=1),
    storage: Storage = Depends(get_storage),
):
    if not storage.delete_password_entry(entry_id):
        raise NotFoundError("Password entry", entry_id)
    logger.info(f"Deleted password entry: id={entry_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
