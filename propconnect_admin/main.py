from contextlib import asynccontextmanager
from propconnect_admin.utils.logger import setup_logging
from propconnect_admin.core.config import get_settings, parse_comma_separated_origins
from propconnect_admin.core.error_handlers import register_exception_handlers
from propconnect_admin.core.state import ConsoleState
from propconnect_admin.core.telemetry import setup_telemetry
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from propconnect_admin.routers import (
    agents,
    auth,
    dashboard,
    inquiries,
    notification,
    properties,
    sold_properties,
    users,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Start and stop the console around the serving period.

    On startup: configure logging, build the console state (session store, backend client,
    page caches), resolve the persisted operator session, start the dashboard poller and
    initialize telemetry. On shutdown: stop the poller and close the backend client.
    """
    setup_logging()
    console = ConsoleState(get_settings())
    app.state.console = console
    await console.startup()
    setup_telemetry(app)
    yield
    await console.shutdown()


app = FastAPI(
    title="PropConnect Admin",
    description="Admin console for the PropConnect real-estate platform",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        str(origin).rstrip("/")
        for origin in parse_comma_separated_origins(get_settings().BACKEND_CORS_ORIGINS)
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/health", include_in_schema=False)
def health_check():
    """
    Provide the application's liveness state for health checks.

    Returns:
        dict: A mapping with key "status" and value "ok" indicating the service is healthy.
    """
    return {"status": "ok"}


app.include_router(auth.router)
app.include_router(notification.router)
app.include_router(dashboard.router)
app.include_router(agents.router)
app.include_router(properties.router)
app.include_router(sold_properties.router)
app.include_router(users.router)
app.include_router(inquiries.router)
