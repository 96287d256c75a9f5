from fastapi import FastAPI

from trustpilot_auth.infra.routes import (
    auth,
    health
)

app = FastAPI(title="Trustpilot OAuth API")

app.include_router(health.router)
app.include_router(auth.router)
