from rest_framework.routers import DefaultRouter

from apps.users.views import EngineerProfileViewSet
from apps.projects.views import ProjectViewSet
from apps.assignments.views import AssignmentViewSet
from apps.insights.views import AnalyticsViewSet
from apps.audit.views import AuditLogViewSet

router = DefaultRouter()

# Engineers
router.register(r'engineers', EngineerProfileViewSet, basename='engineer')

# Projects
router.register(r'projects', ProjectViewSet, basename='project')

# Assignments
router.register(r'assignments', AssignmentViewSet, basename='assignment')

# Analytics
router.register(r'analytics', AnalyticsViewSet, basename='analytics')

# Audit
router.register(r'audit/logs', AuditLogViewSet, basename='audit-logs')

urlpatterns = router.urls
