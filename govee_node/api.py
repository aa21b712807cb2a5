import httpx
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any
from .description import NODE_DESCRIPTION
from .errors import GoveeError, GoveeApiError, NotFoundError
from .govee_client import make_client, check_credentials
from .node import NodeContext, execute
from .options import LOAD_OPTIONS, load_options

router = APIRouter(prefix="/api/v1")

class ExecuteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    resource: str = "device"
    operation: str = "getAll"
    parameters: Dict[str, Any] = Field(default_factory=dict)
    items: List[Dict[str, Any]] = Field(default_factory=lambda: [{}])
    item_parameters: List[Dict[str, Any]] = Field(default_factory=list, alias="itemParameters")
    continue_on_fail: bool = Field(default=False, alias="continueOnFail")

def get_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Overridden in tests to route requests to a fake Govee API."""
    return None

def _status_for(e: GoveeError) -> int:
    if isinstance(e, NotFoundError):
        return 404
    if isinstance(e, GoveeApiError):
        return 502
    return 400

@router.get("/description")
def get_description():
    return NODE_DESCRIPTION

@router.post("/execute")
async def run(req: ExecuteRequest, transport=Depends(get_transport)):
    ctx = NodeContext(
        {**req.parameters, "resource": req.resource, "operation": req.operation},
        items=req.items,
        item_parameters=req.item_parameters,
        continue_on_fail=req.continue_on_fail,
    )
    try:
        out = await execute(ctx, transport)
    except GoveeError as e:
        detail = {"message": e.message, "itemIndex": e.item_index}
        if isinstance(e, GoveeApiError):
            detail["upstream"] = e.payload
        raise HTTPException(_status_for(e), detail)
    return [o.model_dump(by_alias=True) for o in out]

@router.get("/options/{method}")
async def get_options(method: str, device: str = Query(""), transport=Depends(get_transport)):
    if method not in LOAD_OPTIONS:
        raise HTTPException(404, f"Unknown options method {method}")
    return [o.model_dump() for o in await load_options(method, device, transport)]

@router.get("/credentials/test")
async def test_credentials(transport=Depends(get_transport)):
    async with make_client(transport) as c:
        return await check_credentials(c)
