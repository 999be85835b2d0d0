# app/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .catalog import catalog_router
from .config import LOG_LEVEL
from .storage import StorageUnavailable


logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


app = FastAPI(
    title="Book Catalog API",
    description=(
        "Catalogue of books stored in a JSON file, with filtering by "
        "id, language, format, topic, title and author, sorting by "
        "downloads, pagination and create/update/delete."
    ),
    version="1.0.0",
)

app.include_router(catalog_router)


@app.exception_handler(StorageUnavailable)
async def storage_unavailable_handler(request: Request, exc: StorageUnavailable):
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})


# 🔹 Health check
@app.get("/")
def health_check():
    return {"status": "ok", "message": "Book catalog live 🚀"}
