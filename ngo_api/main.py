"""FastAPI application entry point."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from ngo_api.core.config import settings
from ngo_api.core.errors import register_error_handlers
from ngo_api.core.structured_logging import configure_logging
from ngo_api.db.session import engine

configure_logging()

# ============================================================================
# Sentry Integration (optional, for production error tracking)
# ============================================================================

if settings.SENTRY_DSN and settings.ENV != "dev":
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENV,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
        traces_sample_rate=0.1,
        send_default_pii=False,
    )
    logging.info("Sentry initialized for error tracking")

# ============================================================================
# Rate Limiting
# ============================================================================

from slowapi.middleware import SlowAPIMiddleware
from ngo_api.core.rate_limit import limiter


# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="NGO Dashboard API",
    description="Forms, submissions, section extras and beneficiaries for the NGO dashboard",
    version=settings.VERSION,
    docs_url="/docs" if settings.ENV == "dev" else None,
    redoc_url="/redoc" if settings.ENV == "dev" else None,
)

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

register_error_handlers(app)

# CORS middleware - must be added before routers
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,  # Required for cookies
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
)

# ============================================================================
# Routers
# ============================================================================

from ngo_api.routers import (
    auth,
    beneficiaries,
    board_extras,
    communities,
    forms,
    forms_public,
    question_types,
    section_permissions,
    statistics,
    submissions,
    users,
    volunteer_extras,
    volunteers,
)

# Auth and user administration
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(section_permissions.router)  # /admin/users/..., /me/permissions, /sections

# Form builder (public routes take anonymous submissions)
app.include_router(question_types.router)
app.include_router(forms.router)
app.include_router(forms_public.router)

# Submissions and section extras
app.include_router(submissions.router)
app.include_router(volunteer_extras.router)
app.include_router(board_extras.router)

# Dashboards
app.include_router(statistics.router)
app.include_router(beneficiaries.router)
app.include_router(communities.router)
app.include_router(volunteers.router)


# ============================================================================
# Health Check
# ============================================================================

@app.get("/health")
def health():
    """
    Health check endpoint.

    Verifies database connectivity and returns environment info.
    """
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    return {"status": "ok", "env": settings.ENV, "version": settings.VERSION}
