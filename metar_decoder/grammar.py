"""Closed token vocabulary of the METAR body and remarks.

Present weather (up to three groups per report):

    Intensity   Descriptor        Precipitation          Obscuration       Other
    - Light     MI Shallow        DZ Drizzle             BR Mist           PO Dust/sand whirls
      Moderate  PR Partial        RA Rain                FG Fog            SQ Squalls
    + Heavy     BC Patches        SN Snow                FU Smoke          FC Funnel cloud
                DR Low drifting   SG Snow grains         VA Volcanic ash   SS Sandstorm
                BL Blowing        IC Ice crystals        DU Widespread dust DS Duststorm
                SH Shower(s)      PL Ice pellets         SA Sand
                TS Thunderstorm   GR Hail                HZ Haze
                FZ Freezing       GS Small hail          PY Spray
                                  UP Unknown precip.
"""
import re
from enum import Enum
from typing import Dict, FrozenSet, Tuple


class ReportModifier(str, Enum):
    AUTOMATED = "AUTO"
    CORRECTED = "COR"


class SpeedUnit(str, Enum):
    KNOTS = "KT"
    METERS_PER_SECOND = "MPS"


class Intensity(str, Enum):
    LIGHT = "-"
    HEAVY = "+"


class Descriptor(str, Enum):
    SHALLOW = "MI"
    PARTIAL = "PR"
    PATCHES = "BC"
    LOW_DRIFTING = "DR"
    BLOWING = "BL"
    SHOWERS = "SH"
    THUNDERSTORM = "TS"
    FREEZING = "FZ"


class Phenomena(str, Enum):
    DRIZZLE = "DZ"
    RAIN = "RA"
    SNOW = "SN"
    SNOW_GRAINS = "SG"
    ICE_CRYSTALS = "IC"
    ICE_PELLETS = "PL"
    HAIL = "GR"
    SMALL_HAIL = "GS"
    UNKNOWN_PRECIPITATION = "UP"
    MIST = "BR"
    FOG = "FG"
    SMOKE = "FU"
    VOLCANIC_ASH = "VA"
    WIDESPREAD_DUST = "DU"
    SAND = "SA"
    HAZE = "HZ"
    SPRAY = "PY"
    DUST_SAND_WHIRLS = "PO"
    SQUALLS = "SQ"
    FUNNEL_CLOUD = "FC"
    SAND_STORM = "SS"
    DUST_STORM = "DS"


class SkyCover(str, Enum):
    FEW = "FEW"
    SCATTERED = "SCT"
    BROKEN = "BKN"
    OVERCAST = "OVC"
    CLEAR = "CLR"
    VERTICAL_VISIBILITY = "VV"
    NO_SIGNIFICANT_CLOUDS = "NSC"


class RvrModifier(str, Enum):
    ABOVE_MAX = "P"
    BELOW_MIN = "M"


REPORT_TYPES: Tuple[str, ...] = ("METAR", "SPECI")
# ICAO location indicator; digits occur in US identifiers such as K12N
STATION_RE = re.compile(r"[A-Z0-9]{4}")

CAVOK = "CAVOK"
TEN_KILOMETERS = "9999"
REMARKS = "RMK"
BECOMING = "BECMG"
NO_SIGNIFICANT_CHANGE = "NOSIG"

STATUTE_MILES_SUFFIX = "SM"
KILOMETERS_SUFFIX = "KM"
KNOTS_SUFFIXES: Tuple[str, ...] = ("KT", "KTS")
MPS_SUFFIX = "MPS"
VARIABLE_WIND = "VRB"
RVR_FEET_SUFFIX = "FT"

COMPASS_POINTS: Tuple[str, ...] = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")

INTENSITY_CODES: FrozenSet[str] = frozenset(i.value for i in Intensity)
DESCRIPTOR_CODES: FrozenSet[str] = frozenset(d.value for d in Descriptor)
PHENOMENA_CODES: FrozenSet[str] = frozenset(p.value for p in Phenomena)

# any token starting with one of these opens a present weather group
WEATHER_PREFIXES: Tuple[str, ...] = tuple(
    sorted(INTENSITY_CODES | DESCRIPTOR_CODES | PHENOMENA_CODES)
)

# remarks-section obscurations are whole-token matches
OBSCURATION_CODES: FrozenSet[str] = frozenset({
    Phenomena.MIST.value,
    Phenomena.FOG.value,
    Phenomena.SMOKE.value,
    Phenomena.VOLCANIC_ASH.value,
    Phenomena.WIDESPREAD_DUST.value,
    Phenomena.SAND.value,
    Phenomena.HAZE.value,
    Phenomena.SPRAY.value,
})

COVER_AMOUNTS: Tuple[str, ...] = (
    SkyCover.FEW.value,
    SkyCover.SCATTERED.value,
    SkyCover.BROKEN.value,
    SkyCover.OVERCAST.value,
)
# SKC (manual) and CLR (automated) both mean clear skies
CLEAR_SKY_CODES: Tuple[str, ...] = ("CLR", "SKC")
SKY_PREFIXES: Tuple[str, ...] = (
    COVER_AMOUNTS
    + CLEAR_SKY_CODES
    + (SkyCover.VERTICAL_VISIBILITY.value, SkyCover.NO_SIGNIFICANT_CLOUDS.value)
)


INTENSITY_NAMES: Dict[Intensity, str] = {
    Intensity.LIGHT: "light",
    Intensity.HEAVY: "heavy",
}

DESCRIPTOR_NAMES: Dict[Descriptor, str] = {
    Descriptor.SHALLOW: "shallow",
    Descriptor.PARTIAL: "partial",
    Descriptor.PATCHES: "patches of",
    Descriptor.LOW_DRIFTING: "low drifting",
    Descriptor.BLOWING: "blowing",
    Descriptor.SHOWERS: "showers of",
    Descriptor.THUNDERSTORM: "thunderstorms with",
    Descriptor.FREEZING: "freezing",
}

PHENOMENA_NAMES: Dict[Phenomena, str] = {
    Phenomena.DRIZZLE: "drizzle",
    Phenomena.RAIN: "rain",
    Phenomena.SNOW: "snow",
    Phenomena.SNOW_GRAINS: "snow grains",
    Phenomena.ICE_CRYSTALS: "ice crystals",
    Phenomena.ICE_PELLETS: "ice pellets",
    Phenomena.HAIL: "hail",
    Phenomena.SMALL_HAIL: "small hail",
    Phenomena.UNKNOWN_PRECIPITATION: "unknown precipitation",
    Phenomena.MIST: "mist",
    Phenomena.FOG: "fog",
    Phenomena.SMOKE: "smoke",
    Phenomena.VOLCANIC_ASH: "volcanic ash",
    Phenomena.WIDESPREAD_DUST: "widespread dust",
    Phenomena.SAND: "sand",
    Phenomena.HAZE: "haze",
    Phenomena.SPRAY: "spray",
    Phenomena.DUST_SAND_WHIRLS: "dust/sand whirls",
    Phenomena.SQUALLS: "squalls",
    Phenomena.FUNNEL_CLOUD: "funnel cloud",
    Phenomena.SAND_STORM: "sandstorm",
    Phenomena.DUST_STORM: "duststorm",
}

SKY_COVER_NAMES: Dict[SkyCover, str] = {
    SkyCover.FEW: "few clouds",
    SkyCover.SCATTERED: "scattered clouds",
    SkyCover.BROKEN: "broken clouds",
    SkyCover.OVERCAST: "overcast",
    SkyCover.CLEAR: "clear skies",
    SkyCover.VERTICAL_VISIBILITY: "vertical visibility",
    SkyCover.NO_SIGNIFICANT_CLOUDS: "no significant clouds",
}


def sky_cover_for(code: str) -> SkyCover:
    """Map a 2-3 character sky contraction onto its SkyCover member."""
    if code in CLEAR_SKY_CODES:
        return SkyCover.CLEAR
    return SkyCover(code)
