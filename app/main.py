# Run from project root: uvicorn app.main:app --reload

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.routes import router
from app.clients.cloudinary import CloudinaryClient
from app.clients.wolfram import WolframClient

logging.basicConfig(level=logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.wolfram = WolframClient()
    app.state.image_host = CloudinaryClient()
    try:
        yield
    finally:
        await app.state.wolfram.close()
        await app.state.image_host.close()


app = FastAPI(title="Query Backend", lifespan=lifespan)
app.include_router(router)
