# Projects
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django_fsm import FSMField, transition


class Project(models.Model):
    class ProjectStatus(models.TextChoices):
        PLANNING = 'planning', 'Planning'
        ACTIVE = 'active', 'Active'
        COMPLETED = 'completed', 'Completed'

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    start_date = models.DateField()
    end_date = models.DateField()
    required_skills = models.JSONField(default=list, blank=True)  # ["Python", "React"]
    team_size = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])
    status = FSMField(default='planning', choices=ProjectStatus.choices, protected=True)
    manager = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True,
                                related_name='managed_projects')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [models.Index(fields=['status'], name='projects_status_idx')]

    def __str__(self):
        return f"{self.name} [{self.status}]"

    @transition(field=status, source='planning', target='active')
    def start(self):
        pass

    @transition(field=status, source='active', target='completed')
    def complete(self):
        pass
