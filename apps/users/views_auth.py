# apps/users/views_auth.py
from rest_framework_simplejwt.views import TokenObtainPairView

from .auth import EmailTokenObtainPairSerializer


class CustomTokenObtainPairView(TokenObtainPairView):
    """POST /api/v1/auth/login/ {email, password} → {access, refresh, user}"""
    serializer_class = EmailTokenObtainPairSerializer
