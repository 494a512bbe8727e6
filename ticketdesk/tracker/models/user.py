# ============================================
# tracker/models/user.py
# ============================================
from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    class Role(models.TextChoices):
        ADMIN = 'admin', 'Admin'
        DEVELOPER = 'developer', 'Developer'
        USER = 'user', 'User'

    name = models.CharField(max_length=150, blank=True)
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.USER, db_index=True)
    avatar = models.CharField(max_length=500, blank=True, default='')

    class Meta:
        db_table = 'users'
        ordering = ['username']

    @property
    def display_name(self) -> str:
        return self.name or self.get_full_name() or self.username

    def __str__(self):
        return self.display_name
