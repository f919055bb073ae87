"""Keep session durations and program totals in step with their children"""
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver

from .models import ProgramSession, SessionMedia
from .services import refresh_program_totals, refresh_session_duration


@receiver([post_save, post_delete], sender=ProgramSession)
def update_program_totals(sender, instance, **kwargs):
    refresh_program_totals(instance.program_id)


@receiver([post_save, post_delete], sender=SessionMedia)
def update_session_duration(sender, instance, **kwargs):
    refresh_session_duration(instance.session_id)
