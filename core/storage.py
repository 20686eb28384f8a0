"""
Core Storage - File storage for uploads that must not be publicly served.

Application attachments are only handed out by the attachment download
endpoint after the applicant-or-owner check. They are stored under
PRIVATE_MEDIA_ROOT, which no URL route serves, and the storage refuses to
build public URLs for them.
"""

from django.conf import settings
from django.core.files.storage import FileSystemStorage
from django.utils.functional import cached_property


class PrivateFileSystemStorage(FileSystemStorage):
    """FileSystemStorage rooted at PRIVATE_MEDIA_ROOT with no public URL."""

    @cached_property
    def base_location(self):
        return self._value_or_setting(self._location, settings.PRIVATE_MEDIA_ROOT)

    def url(self, name):
        raise ValueError(
            'Private files have no public URL; serve them through the download endpoint'
        )


_private_storage = PrivateFileSystemStorage()


def private_storage():
    """Storage callable for FileFields holding private uploads."""
    return _private_storage
