from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.router import api_router
from app.core.config import settings
from app.services.employee_service import employee_service
from app.services.ticket_service import ticket_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    try:
        await employee_service.initialize(settings)
    except Exception:
        logger.exception("Failed to initialize EmployeeService — continuing without employees")
    try:
        await ticket_service.initialize(settings)
    except Exception:
        logger.exception("Failed to initialize TicketService — continuing without tickets")
    yield
    await employee_service.close()
    await ticket_service.close()


app = FastAPI(
    title="Staff Directory API",
    description="Employee directory, org chart and profile service",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "Staff Directory API"}
