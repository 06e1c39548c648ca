from django.contrib.auth.models import AbstractUser, UserManager as DjangoUserManager
from django.db import models
from django.db.models import Q
from django.db.models.functions import Lower


class UserManager(DjangoUserManager):
    use_in_migrations = True

    def create_user(self, username, email=None, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        extra_fields.setdefault("role", User.Roles.MEMBER)
        if email:
            email = email.strip().lower()
        return super().create_user(username, email, password, **extra_fields)

    def create_superuser(self, username, email=None, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", User.Roles.ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")
        if extra_fields.get("role") != User.Roles.ADMIN:
            raise ValueError("Superuser must have role=ADMIN.")
        if email:
            email = email.strip().lower()
        return super().create_superuser(username, email, password, **extra_fields)


class User(AbstractUser):
    """
    Club back-office account with a single role. Admin and staff can use the
    back-office; members can only sign in.
    """
    class Roles(models.TextChoices):
        ADMIN = "admin", "Admin"
        STAFF = "staff", "Staff"
        MEMBER = "member", "Member"  # Default

    role = models.CharField(
        max_length=20, choices=Roles.choices, default=Roles.MEMBER, db_index=True
    )
    phone = models.CharField(max_length=20, blank=True)
    avatar_url = models.CharField(max_length=255, blank=True)

    objects = UserManager()

    def is_admin_like(self) -> bool:
        return bool(self.is_staff or self.role in {self.Roles.ADMIN, self.Roles.STAFF})

    def __str__(self) -> str:
        return f"{self.username} ({self.get_role_display()})"

    class Meta:
        constraints = [
            # If is_superuser then role must be 'admin'
            models.CheckConstraint(
                name="superuser_requires_admin_role",
                condition=Q(is_superuser=False) | Q(role="admin"),
            ),
            # Blank emails are allowed more than once
            models.UniqueConstraint(
                Lower("email"),
                condition=~Q(email=""),
                name="unique_user_email_ci",
            ),
        ]
