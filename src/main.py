from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.apps.payment_settings.api import router as payment_settings_router
from src.apps.payment_settings.exception_handlers import (
    EXCEPTION_HANDLERS as PAYMENT_SETTINGS_EXCEPTION_HANDLERS,
)
from src.apps.uniteller.api import api_router as uniteller_api_router
from src.apps.uniteller.api import router as uniteller_router
from src.apps.uniteller.exception_handlers import (
    EXCEPTION_HANDLERS as UNITELLER_EXCEPTION_HANDLERS,
)
from src.core.database import db_manager, init_db
from src.core.logging_config import setup_logging

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    yield
    await db_manager.dispose()


app = FastAPI(
    title="Uniteller: платёжный модуль магазина",
    lifespan=lifespan,
)

for exc_class, handler in UNITELLER_EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

for exc_class, handler in PAYMENT_SETTINGS_EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)


app.include_router(uniteller_router, prefix="/Plugins/Uniteller", tags=["uniteller"])
app.include_router(uniteller_api_router, prefix="/api/uniteller", tags=["uniteller"])
app.include_router(payment_settings_router, prefix="/api/uniteller", tags=["payment_settings"])
