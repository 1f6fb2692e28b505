from django.db.models.signals import post_save
from django.dispatch import receiver
from django.contrib.auth import get_user_model
from .models import EngineerProfile

User = get_user_model()


@receiver(post_save, sender=User)
def ensure_profile_exists(sender, instance, created, **kwargs):
    """Engineers always have a profile holding their capacity and skills"""
    if instance.role == User.UserRole.ENGINEER:
        EngineerProfile.objects.get_or_create(user=instance)
