"""POST /v1/scouts: persistent scout management (pass-through to Yutori)."""

from fastapi import APIRouter, Depends, HTTPException, status

from api.yutori_client import YutoriClient
from server.dependencies import get_api_key, get_yutori_client
from server.schemas.requests import ScoutActionRequest

router = APIRouter(prefix="/v1", tags=["Scouts"])


def _require(value: str | None, message: str) -> str:
    if not value:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
    return value


@router.post("/scouts")
async def scout_action(
    request: ScoutActionRequest,
    api_key: str = Depends(get_api_key),
    client: YutoriClient = Depends(get_yutori_client),
):
    if request.action == "create":
        query = _require(request.query, "Query is required for creation")
        scout = await client.create_scout(query, request.schedule)
        return scout.to_dict()

    if request.action == "list":
        return [s.to_dict() for s in await client.list_scouts()]

    scout_id = _require(request.scout_id, "Scout ID is required")
    if request.action == "status":
        return await client.get_scout_status(scout_id)
    return await client.get_scout_updates(scout_id)
