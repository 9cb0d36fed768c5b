from fastapi import APIRouter, Request

from activator.domain.entities import ACTIVATE, PASSWORD_RESET, Phase
from activator.presentation.middleware import respond
from activator.schemas.responses import ERROR_RESPONSES, CreatedOut, OkOut

router = APIRouter(prefix="/users", tags=["Users"])

ISSUED = dict(status_code=201, response_model=CreatedOut, responses=ERROR_RESPONSES)
COMPLETED = dict(response_model=OkOut, responses=ERROR_RESPONSES)


@router.post("/activate", **ISSUED)
async def post_create_activate(request: Request):
    """Issue an activation code for the user set upstream or given as `user`."""
    return await respond(request, ACTIVATE, Phase.ISSUE)


@router.put("/activate/{user}", **COMPLETED)
@router.put("/activate/{user}/{code}", **COMPLETED)
@router.put("/activate/{user}/{code}/{email}", **COMPLETED)
async def put_complete_activate(request: Request):
    return await respond(request, ACTIVATE, Phase.COMPLETE)


@router.post("/passwordreset", **ISSUED)
async def post_create_password_reset(request: Request):
    return await respond(request, PASSWORD_RESET, Phase.ISSUE)


@router.put("/passwordreset/{user}", **COMPLETED)
@router.put("/passwordreset/{user}/{code}", **COMPLETED)
@router.put("/passwordreset/{user}/{code}/{email}", **COMPLETED)
async def put_complete_password_reset(request: Request):
    return await respond(request, PASSWORD_RESET, Phase.COMPLETE)
