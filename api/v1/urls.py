from django.urls import path, include
from rest_framework.permissions import IsAuthenticated
from rest_framework_simplejwt.views import TokenRefreshView

from .routers import urlpatterns as router_urls
from apps.users.views_auth import CustomTokenObtainPairView
from apps.users.views import AuthViewSet, SeedDataView

urlpatterns = [
    path('', include(router_urls)),
    path('auth/login/', CustomTokenObtainPairView.as_view(), name='login'),
    path('auth/refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    path('auth/register/', AuthViewSet.as_view({'post': 'register'}), name='register'),
    path('auth/profile/', AuthViewSet.as_view({'get': 'profile'}, permission_classes=[IsAuthenticated]), name='profile'),
    path('seed/', SeedDataView.as_view(), name='seed'),
]
