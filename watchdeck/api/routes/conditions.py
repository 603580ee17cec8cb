"""Action condition popup routes."""

from fastapi import APIRouter, Depends, Request

from ...conditions.popup import ConditionPopupAssembler
from ...dependencies import get_condition_popup, get_current_identity
from ...identity import Identity
from ...middleware.error_handler import api_error_to_http

router = APIRouter(prefix="/popup/condition", tags=["conditions"])


def _popup_params(request: Request) -> dict:
    """Flatten query parameters; a repeated ``value`` becomes a list."""
    params: dict = {}
    for key in request.query_params.keys():
        values = request.query_params.getlist(key)
        params[key] = values if key == "value" and len(values) > 1 else values[-1]
    return params


@router.get("/actions")
async def condition_actions_popup(
    request: Request,
    identity: Identity = Depends(get_current_identity),
    popup: ConditionPopupAssembler = Depends(get_condition_popup),
):
    """Data for the "new condition" popup of an action form."""
    result = await popup.assemble(identity, _popup_params(request))
    if not result.ok:
        raise api_error_to_http(result.error)
    return result.value.to_response()
