# main.py

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import Optional
import logging
import os
from dotenv import load_dotenv

from database.connection import create_store
from database.store import DocumentStore

# Import routers
from rides.rides import router as rides_router
from admin.admin import router as admin_router
from drivers.drivers import router as drivers_router
from users.users import router as users_router
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

HOST = "0.0.0.0"
PORT = 3000


async def invalid_request_handler(request: Request, exc: RequestValidationError):
    # Unparseable bodies are client data errors, same as a rejected insert.
    return JSONResponse(status_code=400, content={"detail": "Invalid request data"})


def create_app(store: Optional[DocumentStore] = None) -> FastAPI:
    app = FastAPI(title="Ride Hailing API", version="1.0.0")

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, invalid_request_handler)

    # One store per process, never reassigned.
    app.store = store if store is not None else create_store()

    @app.on_event("startup")
    async def startup_db_client():
        logger.info("Connecting to MongoDB...")
        if not await app.store.ping():
            logger.error("Continuing without a database; storage calls will fail")

    @app.on_event("shutdown")
    async def shutdown_db_client():
        app.store.close()

    # Include all routers
    app.include_router(rides_router)
    app.include_router(admin_router)
    app.include_router(drivers_router)
    app.include_router(users_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    logger.info("Server listening at http://localhost:%d", PORT)
    uvicorn.run(app, host=HOST, port=PORT)
