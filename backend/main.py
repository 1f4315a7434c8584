# backend/main.py
import logging
import os

from dotenv import load_dotenv

load_dotenv()

# Configured before anything else so configuration errors at import time are visible
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from config import load_settings_or_exit  # noqa: E402
from database import init_db  # noqa: E402
from utils.dates import utcnow  # noqa: E402
from utils.responses import setup_exception_handlers, setup_request_logging  # noqa: E402

# Import routerów
from routes.auth import router as auth_router  # noqa: E402
from routes.inventory import router as inventory_router  # noqa: E402
from routes.suppliers import router as suppliers_router  # noqa: E402
from routes.customers import router as customers_router  # noqa: E402
from routes.sales_orders import router as sales_orders_router  # noqa: E402
from routes.purchase_orders import router as purchase_orders_router  # noqa: E402
from routes.dashboard import router as dashboard_router  # noqa: E402

logger = logging.getLogger(__name__)

settings = load_settings_or_exit()

# Inicjalizacja
init_db()

app = FastAPI(title="Inventory & Orders API", version="1.0.0")

# CORS: the configured frontend plus the local Vite dev server
origins = [
    settings.FRONTEND_URL,
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(dict.fromkeys(origins)),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_request_logging(app)
setup_exception_handlers(app)

# Rejestracja routerów
app.include_router(auth_router)
app.include_router(inventory_router)
app.include_router(suppliers_router)
app.include_router(customers_router)
app.include_router(sales_orders_router)
app.include_router(purchase_orders_router)
app.include_router(dashboard_router)


@app.get("/health")
def health():
    return {"success": True, "data": {"status": "OK", "timestamp": utcnow().isoformat() + "Z"}}


def run():
    import uvicorn

    logger.info("Starting API on port %s (%s)", settings.PORT, settings.ENVIRONMENT)
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.PORT,
        timeout_keep_alive=settings.REQUEST_TIMEOUT_SECONDS,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
