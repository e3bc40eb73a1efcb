from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from hr_admin.api.endpoints import employees, bookings, vacations, calendar
from hr_admin.api.errors import domain_error_handler
from hr_admin.core.config import settings
from hr_admin.core.errors import DomainError
from hr_admin.core.logging import configure_logging

configure_logging(settings.LOG_LEVEL)

app = FastAPI(
    title="HR Administration System",
    description="API for managing employees, leave bookings and vacation requests",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(DomainError, domain_error_handler)


# Include routers
app.include_router(employees.router)
app.include_router(bookings.router)
app.include_router(vacations.router)
app.include_router(calendar.router)


@app.get("/")
def root():
    return {
        "message": "HR Administration System API",
        "docs": "/docs",
        "version": "1.0.0"
    }


@app.get("/health")
def health_check():
    return {"status": "healthy"}
