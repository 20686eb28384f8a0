"""
FreelanceHub Test Configuration - pytest fixtures and factories

This module provides:
- pytest-django configuration
- factory_boy factories for the marketplace models
- Shared fixtures for API clients and user roles

RUNNING TESTS:
# Run all tests
pytest -v

# Run one app
pytest projects/tests -v
pytest applications/tests -v
"""

import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone

import factory
from factory import fuzzy
from factory.django import DjangoModelFactory


# ============================================================================
# USER FACTORIES
# ============================================================================

class UserFactory(DjangoModelFactory):
    """Factory for the auth User model."""

    class Meta:
        model = 'auth.User'
        django_get_or_create = ('username',)

    username = factory.LazyAttribute(lambda o: f"user_{uuid.uuid4().hex[:8]}")
    email = factory.LazyAttribute(lambda o: f"{o.username}@example.com")
    first_name = factory.Faker('first_name')
    last_name = factory.Faker('last_name')
    is_active = True

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """Override create to handle password properly."""
        password = kwargs.pop('password', 'testpass123')
        user = super()._create(model_class, *args, **kwargs)
        user.set_password(password)
        user.save(update_fields=['password'])
        return user


# ============================================================================
# PROJECT FACTORIES
# ============================================================================

class SkillFactory(DjangoModelFactory):

    class Meta:
        model = 'projects.Skill'
        django_get_or_create = ('slug',)

    name = factory.Sequence(lambda n: f"Skill {n}")
    slug = factory.LazyAttribute(lambda o: o.name.lower().replace(' ', '-'))


class ProjectFactory(DjangoModelFactory):
    """Factory for open projects."""

    class Meta:
        model = 'projects.Project'
        skip_postgeneration_save = True

    title = factory.Faker('sentence', nb_words=4)
    description = factory.Faker('paragraph')
    client = factory.SubFactory(UserFactory)
    category = 'Development'
    budget = fuzzy.FuzzyDecimal(100, 5000, precision=2)
    deadline = factory.LazyFunction(lambda: (timezone.now() + timedelta(days=30)).date())
    status = 'open'

    @factory.post_generation
    def skills(self, create, extracted, **kwargs):
        if not create or not extracted:
            return
        self.skills.set(extracted)


class DraftProjectFactory(ProjectFactory):
    status = 'draft'


class CommentFactory(DjangoModelFactory):

    class Meta:
        model = 'projects.Comment'

    project = factory.SubFactory(ProjectFactory)
    user = factory.SubFactory(UserFactory)
    content = factory.Faker('sentence')


# ============================================================================
# APPLICATION FACTORIES
# ============================================================================

class ApplicationFactory(DjangoModelFactory):
    """Factory for applications, bypassing the bid counter."""

    class Meta:
        model = 'applications.Application'

    project = factory.SubFactory(ProjectFactory)
    freelancer = factory.SubFactory(UserFactory)
    cover_letter = factory.Faker('paragraph')
    proposed_budget = Decimal('750.00')
    estimated_duration = '2 weeks'
    status = 'pending'


# ============================================================================
# NOTIFICATION FACTORIES
# ============================================================================

class NotificationFactory(DjangoModelFactory):

    class Meta:
        model = 'notifications.Notification'

    recipient = factory.SubFactory(UserFactory)
    notification_type = 'system'
    message = factory.Faker('sentence')
    is_read = False


# ============================================================================
# MEMBERSHIP FACTORIES
# ============================================================================

class MembershipFactory(DjangoModelFactory):
    """Factory for an active membership with a full allowance."""

    class Meta:
        model = 'memberships.Membership'
        django_get_or_create = ('user',)

    user = factory.SubFactory(UserFactory)
    plan = 'basic'
    started_at = factory.LazyFunction(timezone.now)
    ends_at = factory.LazyFunction(lambda: timezone.now() + timedelta(days=30))
    bids_remaining = 10
    auto_renew = True


# ============================================================================
# UPLOAD HELPERS
# ============================================================================

# Leading bytes of real files, enough for content type detection
PDF_BYTES = b'%PDF-1.4\n%\xe2\xe3\xcf\xd3\n1 0 obj\n<< /Type /Catalog >>\nendobj\n'
PNG_BYTES = (
    b'\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR'
    b'\x00\x00\x00\x01\x00\x00\x00\x01\x08\x02\x00\x00\x00\x90wS\xde'
)
JPEG_BYTES = b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
HTML_BYTES = b'<!DOCTYPE html>\n<html><body><script>alert(1)</script></body></html>\n'


def make_upload(name='proposal.pdf', content=PDF_BYTES, content_type='application/pdf'):
    """In-memory upload as received from a multipart request."""
    return SimpleUploadedFile(name, content, content_type=content_type)


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def user(db):
    """Create a standard test user."""
    return UserFactory()


@pytest.fixture
def client_user(db):
    """A user who posts projects."""
    return UserFactory(username=f"client_{uuid.uuid4().hex[:8]}")


@pytest.fixture
def freelancer(db):
    """A user who applies to projects."""
    return UserFactory(username=f"freelancer_{uuid.uuid4().hex[:8]}")


@pytest.fixture
def project(db, client_user):
    """An open project owned by ``client_user``."""
    return ProjectFactory(client=client_user, budget=Decimal('1000.00'))


@pytest.fixture
def application(db, project, freelancer):
    """A pending application by ``freelancer`` to ``project``."""
    return ApplicationFactory(project=project, freelancer=freelancer)


@pytest.fixture
def api_client(db):
    """Provide a DRF API test client."""
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def authenticated_api_client(db, api_client, user):
    """Provide an authenticated DRF API test client."""
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def client_api(db, client_user):
    """API client authenticated as the project owner."""
    from rest_framework.test import APIClient
    api = APIClient()
    api.force_authenticate(user=client_user)
    return api


@pytest.fixture
def freelancer_api(db, freelancer):
    """API client authenticated as the freelancer."""
    from rest_framework.test import APIClient
    api = APIClient()
    api.force_authenticate(user=freelancer)
    return api
