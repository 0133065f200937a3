"""Unit tests for the LinkService

Test coverage includes:

1. Target URL handling
   - Normalizes scheme-less URLs to https.
   - Rejects empty and malformed URLs (InvalidUrlError).

2. Generated codes
   - Produces alphanumeric codes of the configured length.
   - Retries on collisions and concurrent claims.
   - Gives up after max_attempts (GenerationExhaustedError).

3. Custom codes
   - Stores custom codes flagged as custom.
   - Rejects invalid formats and codes held by live records.
   - Reclaims codes whose record has expired.

4. Expiry handling
   - Accepts absolute instants and (value, unit) durations.
   - Rejects naive, past and ambiguous expiry arguments.

5. Lookup and formatting
   - is_custom_code_available(), lookup(), get_full_short_url().
"""

import logging
from datetime import datetime, timedelta, UTC
from unittest.mock import MagicMock

import pytest
from beartype.roar import BeartypeCallHintParamViolation
from freezegun import freeze_time

from linkregistry.constants import LogEvent
from linkregistry.models import LinkRecord
from linkregistry.dao.base import LinkRecordBaseDAO
from linkregistry.dao.exceptions import ConflictError
from linkregistry.exceptions import (
    InvalidUrlError,
    InvalidCodeFormatError,
    CodeUnavailableError,
    InvalidDurationError,
    GenerationExhaustedError,
    NotFoundError,
)
from linkregistry.services import LinkService
from linkregistry.utils.shortener import CodeGenerator
from linkregistry.utils.expiration import ExpirationPolicy


@pytest.fixture
def mock_store(now) -> MagicMock:
    store = MagicMock(spec=LinkRecordBaseDAO)
    store.policy = ExpirationPolicy(clock=lambda: now)
    store.contains_live.return_value = False
    return store


# -------------------------------
# 1. Target URL handling
# -------------------------------


def test_create_normalizes_scheme(service, store):
    record = service.create('example.com')

    assert record.target_url == 'https://example.com'
    assert record.expires_at is None
    assert record.is_custom is False
    assert store.get(record.code) == record


@pytest.mark.parametrize(
    'raw, expected',
    [
        ('  https://example.com/page?q=1  ', 'https://example.com/page?q=1'),
        ('http://example.com', 'http://example.com'),
        ('HTTPS://Example.com', 'HTTPS://Example.com'),
    ],
)
def test_create_keeps_explicit_scheme(service, raw, expected):
    assert service.create(raw).target_url == expected


@pytest.mark.parametrize('raw', ['', '   ', '\n'])
def test_create_rejects_empty_url(service, store, raw):
    with pytest.raises(InvalidUrlError, match='Please enter a URL.'):
        service.create(raw)
    assert len(store) == 0


@pytest.mark.parametrize('raw', ['not a url', 'https://', 'http://exa mple.com', 'ftp://example.com'])
def test_create_rejects_invalid_url(service, store, raw):
    with pytest.raises(InvalidUrlError, match='Invalid URL'):
        service.create(raw)
    assert len(store) == 0


def test_create_rejects_non_string_url(service):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        service.create(None)


# -------------------------------
# 2. Generated codes
# -------------------------------


def test_generated_code_shape(service):
    record = service.create('https://example.com')

    assert 6 <= len(record.code) <= 8
    assert record.code.isalnum()
    assert record.code.isascii()


def test_generated_codes_are_distinct(service, store):
    codes = {service.create(f'https://example.com/{i}').code for i in range(50)}

    assert len(codes) == 50
    assert len(store) == 50


def test_generation_skips_live_codes(mock_store, now):
    generator = MagicMock(spec=CodeGenerator)
    generator.generate.side_effect = ['taken01', 'free001']
    mock_store.contains_live.side_effect = [True, False]
    service = LinkService(mock_store, generator=generator)

    record = service.create('https://example.com')

    assert record.code == 'free001'
    assert record.created_at == now
    mock_store.put.assert_called_once_with(record)


def test_generation_retries_on_concurrent_claim(mock_store):
    generator = MagicMock(spec=CodeGenerator)
    generator.generate.side_effect = ['raced01', 'free001']
    mock_store.put.side_effect = [ConflictError('claimed'), mock_store]
    service = LinkService(mock_store, generator=generator)

    record = service.create('https://example.com')

    assert record.code == 'free001'
    assert mock_store.put.call_count == 2


def test_generation_exhausted(store, caplog):
    generator = CodeGenerator(length=1, alphabet='ab')
    service = LinkService(store, generator=generator, max_attempts=5)
    service.create('https://a.com', custom_code='a')
    service.create('https://b.com', custom_code='b')

    with caplog.at_level(logging.ERROR, logger='linkregistry.services.link_service'):
        with pytest.raises(GenerationExhaustedError, match='No free code found after 5 attempts'):
            service.create('https://c.com')

    assert len(store) == 2
    assert any(getattr(entry, 'event', None) == LogEvent.GENERATION_EXHAUSTED for entry in caplog.records)


@pytest.mark.parametrize('max_attempts', [0, -3])
def test_invalid_max_attempts(store, max_attempts):
    with pytest.raises(ValueError):
        LinkService(store, max_attempts=max_attempts)


# -------------------------------
# 3. Custom codes
# -------------------------------


def test_create_with_custom_code(service, store):
    record = service.create('https://example.com/spring', custom_code='spring-sale_2025')

    assert record.code == 'spring-sale_2025'
    assert record.is_custom is True
    assert store.get('spring-sale_2025') == record


def test_custom_code_unavailable(service, store):
    service.create('https://a.com', custom_code='sale')

    with pytest.raises(CodeUnavailableError, match="Custom code 'sale' is already in use."):
        service.create('https://b.com', custom_code='sale')

    assert store.get('sale').target_url == 'https://a.com'


@pytest.mark.parametrize('code', ['', 'my code', 'a/b', 'emoji🙂', 'dot.ted'])
def test_custom_code_invalid_format(service, store, code):
    with pytest.raises(InvalidCodeFormatError):
        service.create('https://example.com', custom_code=code)
    assert len(store) == 0


def test_custom_code_claimed_concurrently(mock_store):
    mock_store.put.side_effect = ConflictError('claimed')
    service = LinkService(mock_store)

    with pytest.raises(CodeUnavailableError, match="Custom code 'sale' is already in use."):
        service.create('https://example.com', custom_code='sale')


def test_custom_code_reclaimed_after_expiry(service, store):
    with freeze_time('2025-10-15 12:00:00') as frozen:
        service.create('https://a.com', custom_code='flash', expires_in=(30, 'minutes'))

        frozen.tick(timedelta(minutes=31))
        record = service.create('https://b.com', custom_code='flash')

    assert record.target_url == 'https://b.com'
    assert store.get('flash') == record


# -------------------------------
# 4. Expiry handling
# -------------------------------


@freeze_time('2025-10-15 12:00:00')
def test_create_with_expires_at(service):
    expires_at = datetime(2025, 10, 22, 12, 0, tzinfo=UTC)

    record = service.create('https://a.com', expires_at=expires_at)

    assert record.created_at == datetime(2025, 10, 15, 12, 0, tzinfo=UTC)
    assert record.expires_at == expires_at


@freeze_time('2025-10-15 12:00:00')
@pytest.mark.parametrize(
    'expires_in, expected',
    [
        ((15, 'minutes'), datetime(2025, 10, 15, 12, 15, tzinfo=UTC)),
        ((2, 'hours'), datetime(2025, 10, 15, 14, 0, tzinfo=UTC)),
        ((7, 'days'), datetime(2025, 10, 22, 12, 0, tzinfo=UTC)),
    ],
)
def test_create_with_expires_in(service, expires_in, expected):
    assert service.create('https://a.com', expires_in=expires_in).expires_at == expected


def test_create_one_millisecond_expiry(service, resolver):
    with freeze_time('2025-10-15 12:00:00') as frozen:
        expires_at = datetime(2025, 10, 15, 12, 0, tzinfo=UTC) + timedelta(milliseconds=1)
        record = service.create('https://a.com', expires_at=expires_at)

        assert resolver.resolve(record.code) == 'https://a.com'

        frozen.tick(timedelta(milliseconds=1))
        with pytest.raises(NotFoundError):
            resolver.resolve(record.code)


@pytest.mark.parametrize(
    'expires_in',
    [(0, 'days'), (-1, 'hours'), (1.5, 'hours'), ('7', 'days'), (True, 'days'), (7, 'weeks'), (7, ''), (7,), (7, 'days', 'extra')],
)
def test_create_rejects_invalid_duration(service, store, expires_in):
    with pytest.raises(InvalidDurationError):
        service.create('https://a.com', expires_in=expires_in)
    assert len(store) == 0


@freeze_time('2025-10-15 12:00:00')
@pytest.mark.parametrize(
    'expires_at, message',
    [
        (datetime(2025, 10, 22, 12, 0), 'timezone-aware'),
        (datetime(2025, 10, 15, 12, 0, tzinfo=UTC), 'not in the future'),
        (datetime(2025, 10, 14, 12, 0, tzinfo=UTC), 'not in the future'),
    ],
)
def test_create_rejects_invalid_expires_at(service, expires_at, message):
    with pytest.raises(InvalidDurationError, match=message):
        service.create('https://a.com', expires_at=expires_at)


def test_create_rejects_both_expiry_forms(service, now):
    with pytest.raises(InvalidDurationError, match='not both'):
        service.create('https://a.com', expires_at=now + timedelta(days=400), expires_in=(7, 'days'))


def test_invalid_custom_code_with_invalid_url_reports_url(service):
    with pytest.raises(InvalidUrlError):
        service.create('', custom_code='bad code')


# -------------------------------
# 5. Lookup and formatting
# -------------------------------


def test_is_custom_code_available(service):
    assert service.is_custom_code_available('sale') is True

    service.create('https://a.com', custom_code='sale')

    assert service.is_custom_code_available('sale') is False
    assert service.is_custom_code_available('bad code') is False
    assert service.is_custom_code_available('') is False


def test_validators_exposed_on_service(service):
    assert service.is_valid_url('https://example.com') is True
    assert service.is_valid_custom_code('my-sale') is True
    assert service.is_valid_custom_code('my sale') is False


def test_lookup_returns_live_record(service):
    record = service.create('https://a.com', custom_code='sale')
    assert service.lookup('sale') == record


def test_lookup_missing_or_expired(service):
    with pytest.raises(NotFoundError, match="Short link 'missing' not found."):
        service.lookup('missing')

    with freeze_time('2025-10-15 12:00:00') as frozen:
        service.create('https://a.com', custom_code='brief', expires_in=(1, 'minutes'))
        frozen.tick(timedelta(minutes=1))

        with pytest.raises(NotFoundError, match="Short link 'brief' not found."):
            service.lookup('brief')


@pytest.mark.parametrize(
    'base_url, path_segment, expected',
    [
        ('https://sho.rt', 'r', 'https://sho.rt/r/sale'),
        ('https://sho.rt/', 'r', 'https://sho.rt/r/sale'),
        ('http://localhost:3000', 'go', 'http://localhost:3000/go/sale'),
    ],
)
def test_get_full_short_url(store, base_url, path_segment, expected):
    service = LinkService(store, base_url=base_url, path_segment=path_segment)

    assert service.get_full_short_url('sale') == expected
    assert service.get_full_short_url('sale') == expected
    assert len(store) == 0


def test_get_full_short_url_for_created_record(service):
    record = service.create('example.com')
    assert service.get_full_short_url(record.code).endswith(f'/{record.code}')


def test_get_full_short_url_default_path_segment(service):
    assert service.get_full_short_url('sale') == 'https://sho.rt/r/sale'
