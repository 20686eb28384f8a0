"""
Projects Validators - Business Rule Validation

This module provides validator classes for enforcing business rules
in the projects module:

- ProjectValidator: Required fields and status transitions
- CommentValidator: Comment content and threading
"""

from typing import Dict

from core.exceptions import BusinessRuleViolationError, InvalidInputError

from .models import Comment, Project


# =============================================================================
# PROJECT VALIDATOR
# =============================================================================

Status = Project.Status

# Status transitions that are allowed
PROJECT_STATUS_TRANSITIONS = {
    Status.DRAFT: {Status.OPEN, Status.CANCELLED},
    Status.OPEN: {Status.DRAFT, Status.IN_PROGRESS, Status.CANCELLED},
    Status.IN_PROGRESS: {Status.COMPLETED, Status.CANCELLED},
    Status.COMPLETED: set(),
    Status.CANCELLED: set(),
}


class ProjectValidator:
    """
    Validator for projects.

    Provides validation for:
    - Required fields on create
    - Status transitions
    - Deletion
    """

    REQUIRED_FIELDS = ('title', 'description', 'category', 'budget', 'deadline')

    ALLOWED_TRANSITIONS = PROJECT_STATUS_TRANSITIONS

    @classmethod
    def validate_required(cls, data: Dict) -> None:
        missing = [
            name for name in cls.REQUIRED_FIELDS
            if data.get(name) in (None, '') or (isinstance(data.get(name), str) and not data[name].strip())
        ]
        if missing:
            raise InvalidInputError(
                'Missing required fields',
                extra_data={'missing': missing}
            )

    @classmethod
    def can_transition(cls, current_status: str, new_status: str) -> bool:
        """Same-status updates are allowed and have no effect."""
        if current_status == new_status:
            return True
        allowed = cls.ALLOWED_TRANSITIONS.get(current_status, set())
        return new_status in {str(s) for s in allowed}

    @classmethod
    def validate_transition(cls, project: Project, new_status: str) -> None:
        if new_status not in Status.values:
            raise InvalidInputError('Invalid status', field='status')
        if not cls.can_transition(project.status, new_status):
            raise InvalidInputError(
                f"Cannot change project status from {project.status} to {new_status}",
                field='status'
            )

    @classmethod
    def validate_deletable(cls, project: Project) -> None:
        if project.status == Status.IN_PROGRESS:
            raise BusinessRuleViolationError(
                'Cannot delete a project that is in progress',
                rule_name='in_progress_not_deletable'
            )


# =============================================================================
# COMMENT VALIDATOR
# =============================================================================

class CommentValidator:

    @staticmethod
    def clean_content(content) -> str:
        content = (content or '').strip()
        if not content:
            raise InvalidInputError('Comment content is required', field='content')
        return content

    @staticmethod
    def resolve_parent(project: Project, parent_id) -> 'Comment | None':
        """
        Return the comment a reply should attach to.

        Replies to replies attach to the top-level comment of the thread.
        """
        if parent_id in (None, ''):
            return None
        parent = Comment.objects.filter(pk=parent_id, project=project).first()
        if parent is None:
            raise InvalidInputError(
                'Parent comment does not belong to this project',
                field='parent'
            )
        return parent.parent if parent.parent_id else parent


def parse_skills(value) -> list:
    """Normalise skills given as a list, repeated params or a comma-separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    skills = []
    for item in value:
        skills.extend(part.strip() for part in str(item).split(','))
    return [s for s in skills if s]


def parse_budget_bound(value, field: str):
    """Integer-parse an optional budget filter bound."""
    if value in (None, ''):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{field} must be an integer", field=field)

