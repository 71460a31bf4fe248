from fastapi import Depends, FastAPI, Request, Response
from fastapi.concurrency import run_in_threadpool
from typing import Dict, Any, Optional
import logging
from users_api.handler import dispatch
from users_api.store import get_table, log_level

logging.basicConfig(level=log_level())

app = FastAPI(title="Users API")

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]

async def _to_event(request: Request, user_id: Optional[str]) -> Dict[str, Any]:
    body = await request.body()
    return {
        "httpMethod": request.method,
        "path": request.url.path,
        "pathParameters": {"userId": user_id} if user_id is not None else None,
        "headers": dict(request.headers),
        # Undecodable bytes are left for the dispatcher to reject as bad JSON
        "body": body.decode("utf-8", errors="replace") if body else None,
    }

def _to_response(result: Dict[str, Any]) -> Response:
    return Response(
        content=result.get("body") or "",
        status_code=result["statusCode"],
        headers=result.get("headers"),
    )

@app.api_route("/users", methods=PROXY_METHODS)
async def users(request: Request, table=Depends(get_table)):
    event = await _to_event(request, None)
    return _to_response(await run_in_threadpool(dispatch, event, table))

@app.api_route("/users/{user_id}", methods=PROXY_METHODS)
async def user(user_id: str, request: Request, table=Depends(get_table)):
    event = await _to_event(request, user_id)
    return _to_response(await run_in_threadpool(dispatch, event, table))

@app.get("/health")
def health():
    return {"status": "ok"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
