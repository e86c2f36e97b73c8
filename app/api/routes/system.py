from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from core.config import settings
from api.dependencies.rate_limits import get_limiter

router = APIRouter(tags=["System"])
limiter = get_limiter()


def readiness_checks() -> dict:
    """Report which collaborators have the configuration they need."""
    return {
        "supabase": bool(
            settings.supabase.SUPABASE_URL and settings.supabase.SUPABASE_SERVICE_ROLE_KEY
        ),
        "fcm_credentials": bool(settings.fcm.FCM_SERVICE_ACCOUNT.get("private_key")),
        "fcm_project": bool(settings.fcm.project_id),
    }


# Load balancer health checks hit these every few seconds
@router.get("/version")
@limiter.limit("50/minute")
def get_version(request: Request):  # pylint: disable=unused-argument
    """Get the version of the application."""
    return {"version": settings.GIT_SHA}


@router.get("/health")
@limiter.limit("50/minute")
def get_health(request: Request):  # pylint: disable=unused-argument
    """Liveness check."""
    return {"status": "ok"}


@router.get("/ready")
@limiter.limit("50/minute")
def get_ready(request: Request):  # pylint: disable=unused-argument
    """Readiness check: 503 until Supabase and FCM are configured."""
    checks = readiness_checks()
    ready = all(checks.values())
    return JSONResponse(
        status_code=200 if ready else 503,
        content={"status": "ready" if ready else "not_ready", "checks": checks},
    )
