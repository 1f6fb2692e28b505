# Users and engineer profiles
from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.contrib.auth.base_user import BaseUserManager
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _


class CustomUserManager(BaseUserManager):
    use_in_migrations = True

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("Email is required")
        email = self.normalize_email(email)
        extra_fields.setdefault("is_active", True)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", CustomUser.UserRole.MANAGER)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True")

        return self.create_user(email, password, **extra_fields)


class CustomUser(AbstractUser):
    """User that logs in by email and carries a role."""

    class UserRole(models.TextChoices):
        ENGINEER = 'ENGINEER', _('Engineer')
        MANAGER = 'MANAGER', _('Manager')

    username = None
    email = models.EmailField(unique=True)
    name = models.CharField(max_length=255, blank=True)
    role = models.CharField(max_length=20, choices=UserRole.choices, default=UserRole.ENGINEER)
    department = models.CharField(max_length=128, blank=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    objects = CustomUserManager()

    @property
    def display_name(self):
        return self.name or self.get_full_name() or self.email

    def __str__(self):
        return self.display_name


class EngineerProfile(models.Model):
    class Seniority(models.TextChoices):
        JUNIOR = 'junior', _('Junior')
        MID = 'mid', _('Mid')
        SENIOR = 'senior', _('Senior')

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='engineer_profile')
    skills = models.JSONField(default=list, blank=True)  # ["Python", "React"]
    seniority = models.CharField(max_length=16, choices=Seniority.choices, default=Seniority.MID)
    # 100 = full time, 50 = part time
    max_capacity = models.PositiveSmallIntegerField(
        default=100, validators=[MinValueValidator(0), MaxValueValidator(100)]
    )

    class Meta:
        ordering = ['user__name', 'id']

    @property
    def name(self):
        return self.user.display_name

    def __str__(self):
        return f"{self.name} ({self.seniority}, {self.max_capacity}%)"
