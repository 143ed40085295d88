from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import subdomain_routes
from app.core.lifecycle import setup_startup_tasks

app = FastAPI(title="Subdomain provisioning")

setup_startup_tasks(app)

# Every error leaves as {"error": "..."}
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    headers = dict(exc.headers or {})
    if exc.status_code == 405:
        headers["Allow"] = ", ".join(subdomain_routes.ALLOWED_METHODS)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=headers,
    )

# Routes
app.include_router(subdomain_routes.router, prefix="/api")
