"""
IDS rule endpoints.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Response, status

from app.core.errors import NotFoundError
from app.schemas.ids_rule import IdsRuleCreateRequest, IdsRuleResponse, IdsRuleUpdateRequest
from app.storage import Storage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[IdsRuleResponse])
def list_ids_rules(storage: Storage = Depends(get_storage)):
    """List all IDS rules, newest first."""
    return storage.list_ids_rules()


@router.get("/{rule_id}", response_model=IdsRuleResponse)
def get_ids_rule(
    rule_id: int = Path(..., ge=1),
    storage: Storage = Depends(get_storage),
):
    rule = storage.get_ids_rule(rule_id)
    if rule is None:
        raise NotFoundError("IDS rule", rule_id)
    return rule


@router.post("", response_model=IdsRuleResponse, status_code=status.HTTP_201_CREATED)
def create_ids_rule(
    request: IdsRuleCreateRequest,
    storage: Storage = Depends(get_storage),
):
    rule = storage.create_ids_rule(request)
    logger.info(f"Created IDS rule: id={rule.id}, name={rule.name}, severity={rule.severity.value}")
    return rule


@router.put("/{rule_id}", response_model=IdsRuleResponse)
def update_ids_rule(
    request: IdsRuleUpdateRequest,
    rule_id: int = Path(..., ge=1),
    storage: Storage = Depends(get_storage),
):
    """
    Partially update a rule.

    Only supplied fields change; updatedAt always moves forward.
    """
    rule = storage.update_ids_rule(rule_id, request)
    if rule is None:
        raise NotFoundError("IDS rule", rule_id)
    logger.info(f"Updated IDS rule: id={rule_id}, fields={sorted(request.changes())}")
    return rule


@router.delete("/{rule_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_ids_rule(
    rule_id: int = Path(..., ge=1),
    storage: Storage = Depends(get_storage),
):
    if not storage.delete_ids_rule(rule_id):
        raise NotFoundError("IDS rule", rule_id)
    logger.info(f"Deleted IDS rule: id={rule_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
