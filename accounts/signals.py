from django.db.models.signals import pre_save
from django.dispatch import receiver

from .models import User


@receiver(pre_save, sender=User)
def normalize_email(sender, instance: User, **kwargs):
    # Be consistent, lowercase emails everywhere
    if instance.email:
        instance.email = instance.email.strip().lower()


@receiver(pre_save, sender=User)
def ensure_superuser_role(sender, instance: User, **kwargs):
    """
    A superuser is always an admin. Fixed before the row is written so the
    superuser_requires_admin_role constraint never trips on a plain save().
    """
    if instance.is_superuser and instance.role != User.Roles.ADMIN:
        instance.role = User.Roles.ADMIN
