from metar_decoder.grammar import (
    DESCRIPTOR_NAMES,
    INTENSITY_NAMES,
    PHENOMENA_NAMES,
    SKY_COVER_NAMES,
    SpeedUnit,
)
from metar_decoder.models.observation import Observation
from metar_decoder.models.sky import SkyCondition
from metar_decoder.models.visibility import RunwayVisualRange, Visibility
from metar_decoder.models.weather import Obscuration, WeatherCondition
from metar_decoder.models.wind import Wind
from typing import List


def _number(value: float) -> str:
    return f"{value:g}"


def describe_weather(condition: WeatherCondition) -> str:
    """e.g. ``light showers of rain``; moderate intensity is left unsaid."""
    words = []
    if condition.intensity is not None:
        words.append(INTENSITY_NAMES[condition.intensity])
    if condition.descriptor is not None:
        words.append(DESCRIPTOR_NAMES[condition.descriptor])
    words.append(PHENOMENA_NAMES[condition.phenomena])
    return " ".join(words)


def describe_sky(condition: SkyCondition) -> str:
    text = SKY_COVER_NAMES[condition.contraction]
    if condition.height_feet is not None:
        text += f" at {condition.height_feet} ft"
    if condition.modifier:
        text += f" ({condition.modifier})"
    return text


def describe_obscuration(obscuration: Obscuration) -> str:
    text = PHENOMENA_NAMES[obscuration.phenomena]
    if obscuration.contraction is not None:
        text += f" forming {SKY_COVER_NAMES[obscuration.contraction]}"
        if obscuration.height_feet is not None:
            text += f" at {obscuration.height_feet} ft"
    return text


def describe_wind(wind: Wind) -> str:
    unit = "kt" if wind.unit == SpeedUnit.KNOTS else "m/s"
    if wind.speed == 0 and not wind.is_variable:
        return "calm"
    if wind.is_variable:
        text = f"variable at {wind.speed} {unit}"
    else:
        text = f"{wind.direction:03d}° at {wind.speed} {unit}"
    if wind.gust_speed is not None:
        text += f" gusting {wind.gust_speed} {unit}"
    if wind.variable_range is not None:
        text += f", varying {wind.variable_range[0]:03d}°-{wind.variable_range[1]:03d}°"
    return text


def describe_visibility(visibility: Visibility) -> str:
    if visibility.is_cavok:
        return "CAVOK (10 km or more, no significant cloud or weather)"
    prefix = "less than " if visibility.less_than else ""
    if visibility.statute_miles is not None:
        return f"{prefix}{_number(visibility.statute_miles)} SM"
    if visibility.kilometers is not None:
        if visibility.kilometers == 10.0:
            return f"{prefix}10 km or more"
        return f"{prefix}{_number(visibility.kilometers)} km"
    return f"{prefix}{_number(visibility.meters)} m"


def describe_rvr(rvr: RunwayVisualRange) -> str:
    unit = "ft" if rvr.in_feet else "m"
    runway = f"{rvr.runway_number:02d}{rvr.approach_direction or ''}"
    text = f"runway {runway}: {rvr.lowest_reportable} {unit}"
    if rvr.highest_reportable is not None:
        text += f" to {rvr.highest_reportable} {unit}"
    if rvr.modifier is not None:
        text += f" ({rvr.modifier.name.lower().replace('_', ' ')})"
    return text


def describe_observation(obs: Observation) -> str:
    """Plain-English multi-line rendering of a decoded report."""
    lines: List[str] = [f"Station: {obs.station_id}"]

    if obs.observed_at is not None:
        lines.append(f"Observed: {obs.observed_at:%Y-%m-%d %H:%M} UTC")
    if obs.report_modifier is not None:
        lines.append(f"Report: {obs.report_modifier.name.lower()}")
    if obs.wind is not None:
        lines.append(f"Wind: {describe_wind(obs.wind)}")
    if obs.visibility is not None:
        lines.append(f"Visibility: {describe_visibility(obs.visibility)}")
    if obs.runway_visual_ranges:
        lines.append("RVR: " + "; ".join(describe_rvr(r) for r in obs.runway_visual_ranges))
    if obs.weather_conditions:
        lines.append("Weather: " + ", ".join(describe_weather(w) for w in obs.weather_conditions))
    if obs.sky_conditions:
        lines.append("Sky: " + ", ".join(describe_sky(s) for s in obs.sky_conditions))

    temperature = obs.temperature_most_precise_c
    dew_point = obs.dew_point_most_precise_c
    if temperature is not None or dew_point is not None:
        parts = []
        if temperature is not None:
            parts.append(f"temperature {_number(temperature)}°C")
        if dew_point is not None:
            parts.append(f"dew point {_number(dew_point)}°C")
        lines.append("Temperature: " + ", ".join(parts))

    if obs.pressure_hpa is not None:
        lines.append(f"Pressure: {obs.pressure_hpa} hPa ({obs.pressure_in_hg:.2f} inHg)")
    elif obs.pressure_in_hg is not None:
        lines.append(f"Pressure: {obs.pressure_in_hg:.2f} inHg")

    if obs.becoming_trend:
        lines.append(f"Trend: {obs.becoming_trend}")
    if obs.is_no_significant_change:
        lines.append("Trend: no significant change")
    if obs.obscurations:
        lines.append("Obscurations: " + ", ".join(describe_obscuration(o) for o in obs.obscurations))

    return "\n".join(lines)
