from typing import Optional


class ParseError(Exception):
    """Base class for every decode failure.

    ``report`` holds the raw report text once the decoder has attached it.
    """

    kind = "parse_error"

    def __init__(self, message: str, report: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.report = report

    def __str__(self) -> str:
        if self.report:
            return f"{self.message} (report: {self.report!r})"
        return self.message


class MalformedReport(ParseError):
    """No tokens, or no usable station identifier."""

    kind = "malformed"


class InvalidDate(ParseError):
    """The external ``YYYY/MM/DD HH:MM`` date line could not be parsed."""

    kind = "invalid_date"


class GroupDecodeError(ParseError):
    """A grammar group matched its token but could not extract its values."""

    kind = "group_decode_error"

    def __init__(self, group: str, token: str, cause: Optional[BaseException] = None,
                 report: Optional[str] = None):
        message = f"unable to decode {group} group {token!r}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message, report)
        self.group = group
        self.token = token
        self.cause = cause


class MetarFetchError(Exception):
    """Transport failure or unexpected status while fetching a station report."""

    def __init__(self, station: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{station}: {message}")
        self.station = station
        self.status_code = status_code
