"""
Applications Validators - Business Rule Validation

This module provides:
- APPLICATION_STATUS_TRANSITIONS: the reviewable status policy
- ApplicationValidator: submission and status change checks
- STATUS_MESSAGES: notification text sent to the freelancer per status

The transition policy may be replaced through the
``APPLICATION_STATUS_TRANSITIONS`` setting, a mapping of status to the
list of statuses it may move to.
"""

from typing import Dict, Set

from django.conf import settings

from core.exceptions import InvalidInputError

from .models import Application

Status = Application.ApplicationStatus

# Status transitions that are allowed
APPLICATION_STATUS_TRANSITIONS = {
    Status.PENDING: {Status.SHORTLISTED, Status.ACCEPTED, Status.REJECTED},
    Status.SHORTLISTED: {Status.PENDING, Status.ACCEPTED, Status.REJECTED},
    Status.ACCEPTED: set(),
    Status.REJECTED: set(),
}

STATUS_MESSAGES = {
    Status.ACCEPTED: 'Your application for "{title}" has been accepted!',
    Status.REJECTED: 'Your application for "{title}" has been declined.',
    Status.SHORTLISTED: 'Your application for "{title}" has been shortlisted.',
}
DEFAULT_STATUS_MESSAGE = 'The status of your application for "{title}" has been updated.'


def status_message(status: str, project_title: str) -> str:
    return STATUS_MESSAGES.get(status, DEFAULT_STATUS_MESSAGE).format(title=project_title)


class ApplicationValidator:
    """
    Validator for applications.

    Provides validation for:
    - Cover letter presence
    - Status values and transitions
    """

    @staticmethod
    def get_transitions() -> Dict[str, Set[str]]:
        policy = getattr(settings, 'APPLICATION_STATUS_TRANSITIONS', None)
        if policy is None:
            policy = APPLICATION_STATUS_TRANSITIONS
        return {str(status): {str(t) for t in targets} for status, targets in policy.items()}

    @staticmethod
    def clean_cover_letter(cover_letter) -> str:
        cover_letter = (cover_letter or '').strip()
        if not cover_letter:
            raise InvalidInputError('Cover letter is required', field='cover_letter')
        return cover_letter

    @staticmethod
    def validate_status(new_status) -> None:
        if new_status not in Status.values:
            raise InvalidInputError('Invalid status', field='status')

    @classmethod
    def can_transition(cls, current_status: str, new_status: str) -> bool:
        return new_status in cls.get_transitions().get(current_status, set())

    @classmethod
    def validate_transition(cls, application: Application, new_status: str) -> None:
        if not cls.can_transition(application.status, new_status):
            raise InvalidInputError(
                f"Cannot change application status from {application.status} to {new_status}",
                field='status'
            )
