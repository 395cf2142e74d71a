import logging
from datetime import datetime
from typing import Iterator, Optional
from metar_decoder.errors import GroupDecodeError, ParseError
from metar_decoder.models.response import BatchResult, DecodeFailure
from .decoder import decode_record

logger = logging.getLogger(__name__)


def iter_records(text: str) -> Iterator[str]:
    """Split a NOAA cycle file into records.

    Records are separated by blank lines; each is a date line followed by a
    report, or a bare report line.
    """
    block = []
    for line in (text or "").splitlines():
        if line.strip():
            block.append(line.strip())
        elif block:
            yield "\n".join(block)
            block = []
    if block:
        yield "\n".join(block)


def failure_from_error(record: str, error: ParseError) -> DecodeFailure:
    failure = DecodeFailure(record=record, error=error.kind, message=error.message)
    if isinstance(error, GroupDecodeError):
        failure.group = error.group
        failure.token = error.token
    return failure


def decode_batch(text: str, now: Optional[datetime] = None) -> BatchResult:
    """Decode every record of a cycle file; a bad record does not stop the rest."""
    result = BatchResult()
    for record in iter_records(text):
        try:
            result.observations.append(decode_record(record, now))
        except ParseError as e:
            logger.warning(f"⚠️ Skipping undecodable record: {e}")
            result.failures.append(failure_from_error(record, e))
    logger.info(f"📈 Decoded {len(result.observations)} reports, {len(result.failures)} failures")
    return result
