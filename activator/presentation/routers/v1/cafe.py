from fastapi import APIRouter, Request

from activator.domain.entities import CAFE_AUTH, CAFE_RESET, Phase
from activator.presentation.middleware import respond
from activator.schemas.responses import ERROR_RESPONSES, CreatedOut, OkOut

router = APIRouter(prefix="/cafe", tags=["Cafe"])

ISSUED = dict(status_code=201, response_model=CreatedOut, responses=ERROR_RESPONSES)
COMPLETED = dict(response_model=OkOut, responses=ERROR_RESPONSES)


@router.post("/auth", **ISSUED)
async def post_create_cafe_auth(request: Request):
    return await respond(request, CAFE_AUTH, Phase.ISSUE)


@router.put("/auth/{user}", **COMPLETED)
@router.put("/auth/{user}/{code}", **COMPLETED)
@router.put("/auth/{user}/{code}/{email}", **COMPLETED)
async def put_complete_cafe_auth(request: Request):
    return await respond(request, CAFE_AUTH, Phase.COMPLETE)


@router.post("/passwordreset", **ISSUED)
async def post_create_cafe_reset(request: Request):
    return await respond(request, CAFE_RESET, Phase.ISSUE)


@router.put("/passwordreset/{user}", **COMPLETED)
@router.put("/passwordreset/{user}/{code}", **COMPLETED)
@router.put("/passwordreset/{user}/{code}/{email}", **COMPLETED)
async def put_complete_cafe_reset(request: Request):
    return await respond(request, CAFE_RESET, Phase.COMPLETE)
