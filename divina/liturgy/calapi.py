"""
HTTP client for the CalAPI liturgical calendar service
(http://calapi.inadiutorium.cz).
"""
import logging

import requests
from django.conf import settings

logger = logging.getLogger(__name__)

VALID_LANGUAGES = ['cs', 'en', 'fr', 'it', 'la']


class CalendarServiceError(Exception):
    """The remote calendar could not be reached or returned an error"""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class CalAPIClient:
    def __init__(self, base_url=None, calendar=None, timeout=None, session=None):
        self.base_url = (base_url or settings.CALAPI_BASE_URL).rstrip('/')
        self.calendar = calendar or settings.CALAPI_CALENDAR
        self.timeout = timeout or settings.CALAPI_TIMEOUT
        self.session = session or requests.Session()

    def _get(self, lang, *parts):
        if lang not in VALID_LANGUAGES:
            raise ValueError(f"Invalid language. Supported: {', '.join(VALID_LANGUAGES)}")
        path = '/'.join(str(part) for part in parts)
        url = f"{self.base_url}/{lang}/calendars/{self.calendar}/{path}"
        logger.debug(f"Fetching from CalAPI: {url}")
        try:
            response = self.session.get(url, headers={'Accept': 'application/json'}, timeout=self.timeout)
        except requests.exceptions.Timeout:
            logger.error(f"CalAPI request timed out: {url}")
            raise CalendarServiceError('Calendar service timed out')
        except requests.exceptions.RequestException as e:
            logger.error(f"CalAPI request failed: {url}: {str(e)}")
            raise CalendarServiceError(f'Calendar service unavailable: {str(e)}')

        if response.status_code != 200:
            logger.warning(f"CalAPI error {response.status_code} for {url}")
            raise CalendarServiceError(
                f'CalAPI error: {response.status_code} {response.reason}',
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError:
            raise CalendarServiceError('Calendar service returned invalid JSON')

    def lectionary(self, year, lang='cs'):
        data = self._get(lang, year)
        return {
            'year': int(year),
            'lectionary': data.get('lectionary'),
            'ferial_lectionary': data.get('ferial_lectionary'),
        }

    def month(self, year, month, lang='cs'):
        return self._get(lang, year, month)

    def year(self, year, lang='cs'):
        """All days of a civil year; months that fail to load are skipped and logged"""
        days = []
        for month in range(1, 13):
            try:
                days.extend(self.month(year, month, lang))
            except CalendarServiceError as e:
                logger.error(f"Failed to fetch month {month}/{year}: {str(e)}")
        return days

    def day(self, year, month, day, lang='cs'):
        return self._get(lang, year, month, day)

    def today(self, lang='cs'):
        return self._get(lang, 'today')

    def multi_day(self, year, month, day, languages=None):
        """
        The same day from several language calendars. Returns ``(days, errors)``
        keyed by language; a failing language does not fail the others.
        """
        days, errors = {}, {}
        for lang in languages or VALID_LANGUAGES:
            try:
                days[lang] = self.day(year, month, day, lang)
            except CalendarServiceError as e:
                logger.warning(f"CalAPI {lang} day {year}-{month}-{day} failed: {str(e)}")
                errors[lang] = str(e)
        return days, errors
