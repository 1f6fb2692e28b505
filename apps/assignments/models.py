# Assignments of engineers to projects
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models


class Assignment(models.Model):
    """A time-bounded claim on an engineer's capacity"""
    engineer = models.ForeignKey('users.EngineerProfile', on_delete=models.CASCADE, related_name='assignments')
    project = models.ForeignKey('projects.Project', on_delete=models.CASCADE, related_name='assignments')
    allocation_percentage = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(100)]
    )
    start_date = models.DateField()
    end_date = models.DateField()
    role = models.CharField(max_length=100, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-start_date', '-id']
        indexes = [
            models.Index(fields=['engineer', 'start_date', 'end_date'], name='assignments_eng_range_idx'),
        ]

    def __str__(self):
        return f"{self.engineer.name} → {self.project.name} ({self.allocation_percentage}%)"
