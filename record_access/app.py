from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI

from record_access.applications.interfaces.dtos.message import Message
from record_access.infrastructure.logging.logger import setup_logging
from record_access.infrastructure.persistence.database import dispose_engine
from record_access.presentation.error_handlers import register_error_handlers
from record_access.presentation.routers import products, users

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        yield
    finally:
        await dispose_engine()


app = FastAPI(lifespan=lifespan)

register_error_handlers(app)
app.include_router(products.router)
app.include_router(users.router)


@app.get("/", status_code=HTTPStatus.OK, response_model=Message)
def read_root():
    return {"message": "record-access is running"}
