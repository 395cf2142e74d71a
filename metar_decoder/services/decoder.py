"""METAR/SPECI report decoder.

Examples:
    KCNO 060653Z 32004KT 10SM BKN043 13/11 A2993 RMK AO2 SLP133 T01280106
    KCNO 231653Z VRB04KT 1 3/4SM HZ BKN010 18/15 A2997 RMK AO2 SLP145 HZ FEW000 T01780150
    EGDL 030050Z 19006KT CAVOK 14/11 Q1018 BECMG 7000 HZ

Body of a report, in order (every group after the date is optional):
    METAR/SPECI  CCCC  DDHHMMZ  AUTO/COR  dddff(f)Gff(f)KT [dddVddd]
    visibility  RVR...  weather...  sky...  TT/TdTd  APPPP|QPPPP
    [BECMG ...] [RMK ...]

The report is read in a single left-to-right pass. Each grammar group is
tried once at the cursor (RVR, weather and sky repeat while they match);
a group that does not match is skipped and the next one is tried. Whatever
is left after the pressure group is swept for remarks content.
"""
import logging
import re
from datetime import datetime
from functools import partial
from typing import Callable, Dict, List, NamedTuple, Optional

from metar_decoder.errors import GroupDecodeError, MalformedReport, ParseError
from metar_decoder.grammar import (
    BECOMING,
    CAVOK,
    COMPASS_POINTS,
    COVER_AMOUNTS,
    DESCRIPTOR_CODES,
    INTENSITY_CODES,
    KILOMETERS_SUFFIX,
    KNOTS_SUFFIXES,
    MPS_SUFFIX,
    NO_SIGNIFICANT_CHANGE,
    OBSCURATION_CODES,
    PHENOMENA_CODES,
    REMARKS,
    REPORT_TYPES,
    RVR_FEET_SUFFIX,
    SKY_PREFIXES,
    STATION_RE,
    STATUTE_MILES_SUFFIX,
    TEN_KILOMETERS,
    VARIABLE_WIND,
    WEATHER_PREFIXES,
    Descriptor,
    Intensity,
    Phenomena,
    ReportModifier,
    RvrModifier,
    SkyCover,
    SpeedUnit,
    sky_cover_for,
)
from metar_decoder.models.observation import Observation
from metar_decoder.models.sky import SkyCondition
from metar_decoder.models.visibility import RunwayVisualRange, Visibility
from metar_decoder.models.weather import Obscuration, WeatherCondition
from metar_decoder.models.wind import Wind
from .dates import parse_record_date, resolve_observation_time

logger = logging.getLogger(__name__)

HPA_TO_IN_HG = 0.02953

VARIABLE_RANGE_RE = re.compile(r"(\d{3})V(\d{3})")
METERS_VISIBILITY_RE = re.compile(r"M?\d+(?:%s)?" % "|".join(COMPASS_POINTS))
PRECISE_TEMPERATURE_RE = re.compile(r"T\d{8}")


# slicing and number parsing failures inside a matched group
DECODE_FAILURES = (ValueError, IndexError, ZeroDivisionError)


class TokenCursor:
    """Forward-only cursor over the whitespace separated tokens of a report."""

    def __init__(self, tokens: List[str]):
        self.tokens = tokens
        self.index = 0

    @property
    def current(self) -> Optional[str]:
        return self.peek(0)

    def peek(self, offset: int = 1) -> Optional[str]:
        position = self.index + offset
        if position < len(self.tokens):
            return self.tokens[position]
        return None

    def advance(self, count: int = 1) -> None:
        self.index = min(self.index + count, len(self.tokens))

    def rest(self) -> List[str]:
        return self.tokens[self.index:]


class GrammarGroup(NamedTuple):
    name: str
    matches: Callable[[TokenCursor], bool]
    decode: Callable[[TokenCursor, Dict], None]
    repeat: bool = False


def _number(text: str) -> int:
    if not text.isdigit():
        raise ValueError(f"expected digits, got {text!r}")
    return int(text)


def _run(group: GrammarGroup, cursor: TokenCursor, fields: Dict) -> None:
    token = cursor.current
    logger.debug("MetarDecoder: %s: %s", group.name, token)
    try:
        group.decode(cursor, fields)
    except DECODE_FAILURES as e:
        raise GroupDecodeError(group.name, token, e) from e


def _is_date(cursor: TokenCursor) -> bool:
    return cursor.current.endswith("Z")


def _decode_date(cursor: TokenCursor, fields: Dict, now: Optional[datetime] = None) -> None:
    fields["observed_at"] = resolve_observation_time(cursor.current, now)
    cursor.advance()


def _is_report_modifier(cursor: TokenCursor) -> bool:
    return cursor.current in (ReportModifier.AUTOMATED.value, ReportModifier.CORRECTED.value)


def _decode_report_modifier(cursor: TokenCursor, fields: Dict) -> None:
    fields["report_modifier"] = ReportModifier(cursor.current)
    cursor.advance()


# wind: dddff(f)Gff(f)KT, VRBff(f)KT, dddffMPS, optionally followed by dddVddd
def _is_wind(cursor: TokenCursor) -> bool:
    token = cursor.current
    return token.endswith(KNOTS_SUFFIXES + (MPS_SUFFIX,)) or token.startswith(VARIABLE_WIND)


def _decode_wind(cursor: TokenCursor, fields: Dict) -> None:
    token = cursor.current

    # VRB groups without a unit show up in US reports; those are knots
    in_knots = token.endswith(KNOTS_SUFFIXES) or (
        token.startswith(VARIABLE_WIND) and not token.endswith(MPS_SUFFIX)
    )

    direction = None
    is_variable = token.startswith(VARIABLE_WIND)
    if not is_variable:
        direction = _number(token[0:3])

    # a digit right after the two digit field means a three digit speed
    if len(token) > 5 and token[5].isdigit():
        speed = _number(token[3:6])
        pos = 6
    else:
        speed = _number(token[3:5])
        pos = 5

    gust_speed = None
    if token[pos:pos + 1] == "G":
        pos += 1
        width = 3 if token[pos + 2:pos + 3].isdigit() else 2
        gust_speed = _number(token[pos:pos + width])

    cursor.advance()

    variable_range = None
    match = VARIABLE_RANGE_RE.fullmatch(cursor.current or "")
    if match:
        variable_range = (int(match.group(1)), int(match.group(2)))
        cursor.advance()

    fields["wind"] = Wind(
        direction=direction,
        is_variable=is_variable,
        speed=speed,
        gust_speed=gust_speed,
        unit=SpeedUnit.KNOTS if in_knots else SpeedUnit.METERS_PER_SECOND,
        variable_range=variable_range,
    )


# visibility: CAVOK, 9999, (M)V V/VSM, (M)VVKM, (M)VVVV[compass]
def _has_distance_unit(token: Optional[str]) -> bool:
    return token is not None and token.endswith((STATUTE_MILES_SUFFIX, KILOMETERS_SUFFIX))


def _is_visibility(cursor: TokenCursor) -> bool:
    token = cursor.current
    if token in (CAVOK, TEN_KILOMETERS):
        return True
    if _has_distance_unit(token) or _has_distance_unit(cursor.peek()):
        return True
    return METERS_VISIBILITY_RE.fullmatch(token) is not None


def _fraction(text: str) -> float:
    numerator, denominator = text.split("/")
    return _number(numerator) / _number(denominator)


def _decode_visibility(cursor: TokenCursor, fields: Dict) -> None:
    token = cursor.current

    if token == CAVOK:
        # visibility >= 10 km, no cloud below 5000 ft, no significant weather
        fields["visibility"] = Visibility(kilometers=10.0, is_cavok=True)
        cursor.advance()
        return

    if token == TEN_KILOMETERS:
        fields["visibility"] = Visibility(kilometers=10.0)
        cursor.advance()
        return

    next_token = cursor.peek()
    less_than = token.startswith("M")
    if less_than:
        token = token[1:]

    if _has_distance_unit(token) or _has_distance_unit(next_token):
        statute = token.endswith(STATUTE_MILES_SUFFIX) or (
            next_token is not None and next_token.endswith(STATUTE_MILES_SUFFIX)
        )

        if _has_distance_unit(token):
            amount = token[:-2]
            if "/" in amount:
                value = _fraction(amount)
            else:
                value = float(_number(amount))
            consumed = 1
        else:
            # whole part and fraction are separate tokens, e.g. "1 1/2SM"
            value = _number(token) + _fraction(next_token[:-2])
            consumed = 2

        if statute:
            fields["visibility"] = Visibility(statute_miles=value, less_than=less_than)
        else:
            fields["visibility"] = Visibility(kilometers=value, less_than=less_than)
        cursor.advance(consumed)
        return

    # meters, some countries append the direction of the minimum (not kept)
    digits = token.rstrip("NESW")
    fields["visibility"] = Visibility(meters=float(_number(digits)), less_than=less_than)
    cursor.advance()


# runway visual range: RDD[LRC]/[PM]VVVV[V[P]VVVV][FT]
def _is_rvr(cursor: TokenCursor) -> bool:
    token = cursor.current
    # R followed by a digit, otherwise this is the RA weather code
    return token.startswith("R") and len(token) > 1 and token[1].isdigit()


def _decode_rvr(cursor: TokenCursor, fields: Dict) -> None:
    token = cursor.current

    runway_number = _number(token[1:3])
    pos = 3

    approach_direction = None
    if token[pos] in "LRC":
        approach_direction = token[pos]
        pos += 1
    if token[pos] == "/":
        pos += 1

    modifier = None
    if token[pos] in (RvrModifier.ABOVE_MAX.value, RvrModifier.BELOW_MIN.value):
        modifier = RvrModifier(token[pos])
        pos += 1

    lowest = _number(token[pos:pos + 4])
    pos += 4

    highest = None
    if token[pos:pos + 1] == "V":
        pos += 1
        if token[pos:pos + 1] == RvrModifier.ABOVE_MAX.value:
            modifier = modifier or RvrModifier.ABOVE_MAX
            pos += 1
        highest = _number(token[pos:pos + 4])

    fields["runway_visual_ranges"].append(RunwayVisualRange(
        runway_number=runway_number,
        approach_direction=approach_direction,
        modifier=modifier,
        lowest_reportable=lowest,
        highest_reportable=highest,
        in_feet=token.endswith(RVR_FEET_SUFFIX),
    ))
    cursor.advance()


# present weather: (+/-)(descriptor)phenomena
def _is_weather(cursor: TokenCursor) -> bool:
    return cursor.current.startswith(WEATHER_PREFIXES)


def _decode_weather(cursor: TokenCursor, fields: Dict) -> None:
    token = cursor.current
    pos = 0

    intensity = None
    if token[:1] in INTENSITY_CODES:
        intensity = Intensity(token[0])
        pos += 1

    descriptor = None
    if token[pos:pos + 2] in DESCRIPTOR_CODES:
        descriptor = Descriptor(token[pos:pos + 2])
        pos += 2

    phenomena = token[pos:pos + 2]
    if phenomena in PHENOMENA_CODES:
        fields["weather_conditions"].append(WeatherCondition(
            intensity=intensity,
            descriptor=descriptor,
            phenomena=Phenomena(phenomena),
        ))
    else:
        logger.debug("MetarDecoder: weather group %s has no phenomena, dropped", token)
    cursor.advance()


# sky condition: NNNhhh(type), VVhhh, CLR, SKC, NSC
def _is_sky(cursor: TokenCursor) -> bool:
    return cursor.current.startswith(SKY_PREFIXES)


def _decode_sky(cursor: TokenCursor, fields: Dict) -> None:
    token = cursor.current

    if token.startswith(COVER_AMOUNTS):
        condition = SkyCondition(
            contraction=SkyCover(token[0:3]),
            height_hundreds_of_feet=_number(token[3:6]),
            modifier=token[6:] or None,
        )
    elif token.startswith(SkyCover.VERTICAL_VISIBILITY.value):
        condition = SkyCondition(
            contraction=SkyCover.VERTICAL_VISIBILITY,
            height_hundreds_of_feet=_number(token[2:5]),
        )
    else:
        # CLR, SKC and NSC carry no height
        condition = SkyCondition(contraction=sky_cover_for(token[0:3]))

    fields["sky_conditions"].append(condition)
    cursor.advance()


# temperature / dew point: (M)TT/(M)DD, either side may be missing
def _is_temperature(cursor: TokenCursor) -> bool:
    return "/" in cursor.current


def _whole_degrees(part: str) -> Optional[float]:
    if not part:
        return None
    if part.startswith("M"):
        return -float(_number(part[1:3]))
    return float(_number(part))


def _decode_temperature(cursor: TokenCursor, fields: Dict) -> None:
    parts = cursor.current.split("/", 1)
    fields["temperature_c"] = _whole_degrees(parts[0])
    fields["dew_point_c"] = _whole_degrees(parts[1]) if len(parts) > 1 else None
    cursor.advance()


# pressure: APPPP (inHg, hundredths) or QPPPP (hPa)
def _is_pressure(cursor: TokenCursor) -> bool:
    return cursor.current.startswith(("A", "Q"))


def _decode_pressure(cursor: TokenCursor, fields: Dict) -> None:
    token = cursor.current
    value = _number(token[1:5])
    if token.startswith("A"):
        fields["pressure_in_hg"] = value / 100
    else:
        fields["pressure_hpa"] = value
        fields["pressure_in_hg"] = value * HPA_TO_IN_HG
    cursor.advance()


# BECMG trend, kept verbatim up to the remarks
def _is_becoming(cursor: TokenCursor) -> bool:
    return cursor.current.upper() == BECOMING


def _decode_becoming(cursor: TokenCursor, fields: Dict) -> None:
    trend = []
    while cursor.current is not None and cursor.current.upper() != REMARKS:
        trend.append(cursor.current)
        cursor.advance()
    fields["becoming_trend"] = " ".join(trend)


def _is_remarks_marker(cursor: TokenCursor) -> bool:
    return cursor.current == REMARKS


def _decode_remarks_marker(cursor: TokenCursor, fields: Dict) -> None:
    if fields.get("remarks") is None:
        fields["remarks"] = " ".join(cursor.rest()[1:]) or None
    cursor.advance()


def _is_precise_temperature(cursor: TokenCursor) -> bool:
    return PRECISE_TEMPERATURE_RE.fullmatch(cursor.current) is not None


def _tenths(sign: str, digits: str) -> float:
    value = _number(digits) / 10
    return -value if sign == "1" else value


def _decode_precise_temperature(cursor: TokenCursor, fields: Dict) -> None:
    # TsTTTsDDD, s is 1 below zero
    token = cursor.current
    fields["temperature_precise_c"] = _tenths(token[1], token[2:5])
    fields["dew_point_precise_c"] = _tenths(token[5], token[6:9])
    cursor.advance()


def _is_obscuration(cursor: TokenCursor) -> bool:
    return cursor.current in OBSCURATION_CODES


def _decode_obscuration(cursor: TokenCursor, fields: Dict) -> None:
    phenomena = Phenomena(cursor.current)
    cursor.advance()

    contraction = None
    height = None
    layer = cursor.current
    if layer is not None and layer.startswith(COVER_AMOUNTS):
        contraction = SkyCover(layer[0:3])
        height = _number(layer[3:6])
        cursor.advance()

    fields["obscurations"].append(Obscuration(
        phenomena=phenomena,
        contraction=contraction,
        height_hundreds_of_feet=height,
    ))


def _is_no_significant_change(cursor: TokenCursor) -> bool:
    return cursor.current == NO_SIGNIFICANT_CHANGE


def _decode_no_significant_change(cursor: TokenCursor, fields: Dict) -> None:
    fields["is_no_significant_change"] = True
    cursor.advance()


BODY_GROUPS = (
    GrammarGroup("report modifier", _is_report_modifier, _decode_report_modifier),
    GrammarGroup("wind", _is_wind, _decode_wind),
    GrammarGroup("visibility", _is_visibility, _decode_visibility),
    GrammarGroup("runway visual range", _is_rvr, _decode_rvr, repeat=True),
    GrammarGroup("weather", _is_weather, _decode_weather, repeat=True),
    GrammarGroup("sky condition", _is_sky, _decode_sky, repeat=True),
    GrammarGroup("temperature", _is_temperature, _decode_temperature),
    GrammarGroup("pressure", _is_pressure, _decode_pressure),
    GrammarGroup("becoming", _is_becoming, _decode_becoming),
)

REMARKS_GROUPS = (
    GrammarGroup("remarks", _is_remarks_marker, _decode_remarks_marker),
    GrammarGroup("precise temperature", _is_precise_temperature, _decode_precise_temperature),
    GrammarGroup("obscuration", _is_obscuration, _decode_obscuration),
    GrammarGroup("no significant change", _is_no_significant_change, _decode_no_significant_change),
)


def _decode(report_line: str, now: Optional[datetime], **initial) -> Observation:
    tokens = (report_line or "").split()
    if not tokens:
        raise MalformedReport("empty metar data")

    logger.debug("MetarDecoder: raw: %s (%d tokens)", report_line, len(tokens))

    cursor = TokenCursor(tokens)
    fields: Dict = {
        "raw_report_string": report_line,
        "runway_visual_ranges": [],
        "weather_conditions": [],
        "sky_conditions": [],
        "obscurations": [],
    }
    fields.update(initial)

    if cursor.current in REPORT_TYPES:
        fields["report_type"] = cursor.current
        cursor.advance()

    station = cursor.current
    if station is None or not STATION_RE.fullmatch(station):
        raise MalformedReport(f"missing or invalid station id {station!r}")
    fields["station_id"] = station
    cursor.advance()

    date_group = GrammarGroup("date", _is_date, partial(_decode_date, now=now))
    for group in (date_group,) + BODY_GROUPS:
        while cursor.current is not None and group.matches(cursor):
            _run(group, cursor, fields)
            if not group.repeat:
                break

    while cursor.current is not None:
        for group in REMARKS_GROUPS:
            if group.matches(cursor):
                _run(group, cursor, fields)
                break
        else:
            cursor.advance()

    logger.debug("MetarDecoder: done processing %s", fields["station_id"])
    return Observation(**fields)


def decode(report_line: str, now: Optional[datetime] = None) -> Observation:
    """Decode a single METAR/SPECI report line.

    ``now`` anchors the year and month of the DDHHMMZ group; it defaults to
    the current UTC time. Raises a ParseError subclass on failure.
    """
    try:
        return _decode(report_line, now)
    except ParseError as e:
        e.report = report_line
        raise


def decode_with_date(date_line: str, report_line: str, now: Optional[datetime] = None) -> Observation:
    """Decode a report together with the ``YYYY/MM/DD HH:MM`` line found above it.

    The date line is kept as provenance (``raw_date_line``/``recorded_at``);
    ``observed_at`` still comes from the report's own DDHHMMZ group.
    """
    try:
        recorded_at = parse_record_date(date_line)
        return _decode(
            report_line,
            now,
            raw_date_line=date_line.strip(),
            recorded_at=recorded_at,
        )
    except ParseError as e:
        e.report = report_line
        raise


def decode_record(text: str, now: Optional[datetime] = None) -> Observation:
    """Decode the one or two line form: an optional date line, then the report."""
    lines = [line.strip() for line in (text or "").splitlines() if line.strip()]
    if not lines:
        raise MalformedReport("empty metar data", report=text)
    if len(lines) == 1:
        return decode(lines[0], now)
    return decode_with_date(lines[0], lines[1], now)
