"""
Password vault endpoints.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Response, status

from app.core.errors import NotFoundError
from app.schemas.password_vault import (
    PasswordVaultCreateRequest,
    PasswordVaultResponse,
    PasswordVaultUpdateRequest,
)
from app.storage import Storage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[PasswordVaultResponse])
def list_password_vaults(storage: Storage = Depends(get_storage)):
    return storage.list_password_vaults()


@router.get("/{vault_id}", response_model=PasswordVaultResponse)
def get_password_vault(
    vault_id: int = Path(..., ge=1),
    storage: Storage = Depends(get_storage),
):
    vault = storage.get_password_vault(vault_id)
    if vault is None:
        raise NotFoundError("Password vault", vault_id)
    return vault


@router.post("", response_model=PasswordVaultResponse, status_code=status.HTTP_201_CREATED)
def create_password_vault(
    request: PasswordVaultCreateRequest,
    storage: Storage = Depends(get_storage),
):
    vault = storage.create_password_vault(request)
    logger.info(f"Created password vault: id={vault.id}, name={vault.name}")
    return vault


@router.put("/{vault_id}", response_model=PasswordVaultResponse)
def update_password_vault(
    request: PasswordVaultUpdateRequest,
    vault_id: int = Path(..., ge=1),
    storage: Storage = Depends(get_storage),
):
    vault = storage.update_password_vault(vault_id, request)
    if vault is None:
        raise NotFoundError("Password vault", vault_id)
    logger.info(f"Updated password vault: id={vault_id}, fields={sorted(request.changes())}")
    return vault


@router.delete("/{vault_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_password_vault(
    vault_id: int = Path(..., ge=1),
    storage: Storage = Depends(get_storage),
):
    """Delete a vault together with every entry it holds."""
    if not storage.delete_password_vault(vault_id):
        raise NotFoundError("Password vault", vault_id)
    logger.info(f"Deleted password vault and its entries: id={vault_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
