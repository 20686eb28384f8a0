"""
Tests for upload validation, storage naming and amount parsing.
"""

import re
from decimal import Decimal

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from conftest import HTML_BYTES, JPEG_BYTES, PDF_BYTES, PNG_BYTES
from core import validators
from core.exceptions import InvalidInputError
from core.validators import (
    INVALID_TYPE_MESSAGE,
    application_upload_to,
    parse_amount,
    randomized_filename,
    validate_file_upload,
    validate_upload_batch,
)


def _file(name='cv.pdf', content=PDF_BYTES, content_type='application/pdf'):
    return SimpleUploadedFile(name, content, content_type=content_type)


class TestValidateFileUpload:

    @pytest.mark.parametrize('name, content, content_type', [
        ('cv.pdf', PDF_BYTES, 'application/pdf'),
        ('shot.png', PNG_BYTES, 'image/png'),
        ('photo.jpg', JPEG_BYTES, 'image/jpeg'),
    ])
    def test_allowed_types(self, name, content, content_type):
        assert validate_file_upload(_file(name, content, content_type)) == (True, None)

    @pytest.mark.parametrize('name, content_type', [
        ('cv.docx', 'application/vnd.openxmlformats-officedocument.wordprocessingml.document'),
        ('deck.pptx', 'application/vnd.openxmlformats-officedocument.presentationml.presentation'),
    ])
    def test_office_documents_detected_as_zip(self, name, content_type, monkeypatch):
        monkeypatch.setattr(validators.magic, 'from_buffer', lambda head, mime: 'application/zip')

        assert validate_file_upload(_file(name, b'PK\x03\x04' + b'\x00' * 26, content_type)) == (True, None)

    def test_zip_is_not_accepted_as_pdf(self, monkeypatch):
        monkeypatch.setattr(validators.magic, 'from_buffer', lambda head, mime: 'application/zip')

        assert validate_file_upload(_file()) == (False, INVALID_TYPE_MESSAGE)

    def test_rejects_unlisted_extension(self):
        is_valid, error = validate_file_upload(_file('script.exe'))
        assert is_valid is False
        assert error == INVALID_TYPE_MESSAGE

    def test_rejects_mismatched_declared_type(self):
        is_valid, error = validate_file_upload(_file('cv.pdf', content_type='text/html'))
        assert is_valid is False
        assert error == INVALID_TYPE_MESSAGE

    def test_rejects_content_that_does_not_match_the_declared_type(self):
        disguised = _file('cv.pdf', HTML_BYTES, 'application/pdf')

        is_valid, error = validate_file_upload(disguised)

        assert is_valid is False
        assert error == INVALID_TYPE_MESSAGE

    def test_detection_rewinds_the_file(self):
        upload = _file()

        validate_file_upload(upload)

        assert upload.read() == PDF_BYTES

    def test_rejects_oversized_file(self):
        is_valid, error = validate_file_upload(_file(content=PDF_BYTES * 100), max_size=1024)
        assert is_valid is False
        assert 'exceeds maximum' in error


class TestValidateUploadBatch:

    def test_too_many_files(self):
        files = [_file(f'cv{i}.pdf') for i in range(6)]
        with pytest.raises(InvalidInputError) as exc_info:
            validate_upload_batch(files, max_files=5)
        assert 'maximum of 5' in str(exc_info.value.detail)

    def test_first_invalid_file_fails_the_batch(self):
        with pytest.raises(InvalidInputError):
            validate_upload_batch([_file(), _file('evil.exe')])

    def test_valid_batch_is_returned(self):
        files = [_file(), _file('b.png', PNG_BYTES, 'image/png')]
        assert validate_upload_batch(files) == files


class TestStorageNames:

    def test_randomized_filename_format(self):
        name = randomized_filename('My CV.PDF')
        assert re.fullmatch(r'attachments-\d+-\d+\.pdf', name)

    def test_names_do_not_collide(self):
        assert randomized_filename('a.pdf') != randomized_filename('a.pdf')

    def test_application_upload_dir(self, settings):
        settings.APPLICATION_UPLOAD_DIR = 'uploads/applications'
        path = application_upload_to(None, 'cv.pdf')
        assert path.startswith('uploads/applications/attachments-')


class TestParseAmount:

    @pytest.mark.parametrize('value, expected', [
        ('700', Decimal('700.00')),
        (250, Decimal('250.00')),
        ('10.005', Decimal('10.01')),
        (' 99.5 ', Decimal('99.50')),
    ])
    def test_valid_amounts(self, value, expected):
        assert parse_amount(value, 'budget', 'Budget') == expected

    @pytest.mark.parametrize('value', ['NaN', 'nan', 'sNaN', 'Infinity', '-Infinity', 'abc', None])
    def test_rejects_values_that_are_not_finite_numbers(self, value):
        with pytest.raises(InvalidInputError, match='Budget must be a number'):
            parse_amount(value, 'budget', 'Budget')

    def test_rejects_negative(self):
        with pytest.raises(InvalidInputError, match='must not be negative'):
            parse_amount('-1', 'budget', 'Budget')

    @pytest.mark.parametrize('value', ['1e20', '10000000000', '9999999999.999'])
    def test_rejects_amounts_beyond_column_precision(self, value):
        with pytest.raises(InvalidInputError, match='must be less than'):
            parse_amount(value, 'budget', 'Budget')

    def test_largest_amount(self):
        assert parse_amount('9999999999.99', 'budget', 'Budget') == Decimal('9999999999.99')

    def test_error_names_the_field(self):
        with pytest.raises(InvalidInputError) as exc_info:
            parse_amount('NaN', 'proposedBudget', 'Proposed budget')
        assert exc_info.value.extra_data['field'] == 'proposedBudget'
