from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from llmproxy.core.cors import ALLOW_ORIGIN
from llmproxy.core.providers import PROVIDERS

router = APIRouter()


@router.get("/")
def service_status(request: Request):
    settings = request.app.state.settings
    providers = [
        {
            "id": provider.name,
            "path": provider.path,
            "model": provider.model(settings),
            "configured": bool(provider.api_key(settings)),
            "accepts_request_key": provider.allow_request_key,
        }
        for provider in PROVIDERS.values()
    ]
    return JSONResponse(
        content={"ok": True, "service": "llmproxy", "providers": providers},
        status_code=200,
        headers=ALLOW_ORIGIN,
    )
