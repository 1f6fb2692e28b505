from django.utils.deprecation import MiddlewareMixin
from django.conf import settings
from .utils import log_event, request_meta

DEFAULT_IGNORED_PREFIXES = (
    "/static/", "/media/", "/favicon.ico",
    "/api/schema", "/api/docs",
    "/admin",
)


class AuditRequestMiddleware(MiddlewareMixin):
    """Records every API request as a VIEW event when AUDIT_LOG_HTTP is on."""

    def process_response(self, request, response):
        if not getattr(settings, "AUDIT_ENABLED", True):
            return response
        if not getattr(settings, "AUDIT_LOG_HTTP", False):
            return response

        path = request.path or ""
        ignored = getattr(settings, "AUDIT_IGNORED_PATHS", DEFAULT_IGNORED_PREFIXES)
        if any(path.startswith(p) for p in ignored):
            return response

        user = getattr(request, "user", None)
        ip, ua = request_meta(request)

        # object_type = HTTP <METHOD>
        log_event(
            actor=user if getattr(user, "is_authenticated", False) else None,
            action="VIEW",
            object_type=f"HTTP {request.method}",
            object_id=None,
            diff_json={"path": path, "status": int(getattr(response, "status_code", 0))},
            ip=ip, user_agent=ua,
        )
        return response
