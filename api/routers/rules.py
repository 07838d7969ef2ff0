"""
Router: GET /rules
Listuje nazwy wbudowanych reguł.
"""
from fastapi import APIRouter

from adapters.rule_library.builtin_rules import BUILTIN_RULES
from api.schemas import RulesResponse

router = APIRouter(prefix="/rules", tags=["rules"])


@router.get("", response_model=RulesResponse)
async def list_rules() -> RulesResponse:
    return RulesResponse(rules=list(BUILTIN_RULES))
