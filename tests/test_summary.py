from metar_decoder.models.sky import SkyCondition
from metar_decoder.models.visibility import RunwayVisualRange, Visibility
from metar_decoder.models.weather import Obscuration, WeatherCondition
from metar_decoder.grammar import Descriptor, Intensity, Phenomena, RvrModifier, SkyCover
from metar_decoder.services.decoder import decode
from metar_decoder.services.summary import (
    describe_obscuration,
    describe_observation,
    describe_rvr,
    describe_sky,
    describe_visibility,
    describe_weather,
    describe_wind,
)


def test_describe_weather():
    condition = WeatherCondition(
        intensity=Intensity.HEAVY, descriptor=Descriptor.THUNDERSTORM, phenomena=Phenomena.RAIN,
    )
    assert describe_weather(condition) == "heavy thunderstorms with rain"
    assert describe_weather(WeatherCondition(phenomena=Phenomena.MIST)) == "mist"


def test_describe_sky():
    layer = SkyCondition(contraction=SkyCover.FEW, height_hundreds_of_feet=60, modifier="SC")
    assert describe_sky(layer) == "few clouds at 6000 ft (SC)"
    assert describe_sky(SkyCondition(contraction=SkyCover.CLEAR)) == "clear skies"


def test_describe_obscuration():
    haze = Obscuration(phenomena=Phenomena.HAZE, contraction=SkyCover.FEW, height_hundreds_of_feet=0)
    assert describe_obscuration(haze) == "haze forming few clouds at 0 ft"
    assert describe_obscuration(Obscuration(phenomena=Phenomena.SMOKE)) == "smoke"


def test_describe_wind(now):
    assert describe_wind(decode("KVCB 300615Z 00000KT", now).wind) == "calm"
    assert describe_wind(decode("KCNO 231653Z VRB04KT", now).wind) == "variable at 4 kt"
    assert describe_wind(decode("EGBJ 200850Z 23007G17KT", now).wind) == "230° at 7 kt gusting 17 kt"
    assert describe_wind(decode("LFPG 061200Z 24012KT 200V280", now).wind) == "240° at 12 kt, varying 200°-280°"
    assert describe_wind(decode("UUEE 061200Z 03005MPS", now).wind) == "030° at 5 m/s"


def test_describe_visibility():
    assert describe_visibility(Visibility(statute_miles=0.25, less_than=True)) == "less than 0.25 SM"
    assert describe_visibility(Visibility(kilometers=10.0)) == "10 km or more"
    assert describe_visibility(Visibility(kilometers=1.5)) == "1.5 km"
    assert describe_visibility(Visibility(meters=4000)) == "4000 m"
    assert describe_visibility(Visibility(kilometers=10.0, is_cavok=True)).startswith("CAVOK")


def test_describe_rvr():
    assert describe_rvr(RunwayVisualRange(
        runway_number=26, approach_direction="L", lowest_reportable=550,
    )) == "runway 26L: 550 m"
    assert describe_rvr(RunwayVisualRange(
        runway_number=28, approach_direction="R", lowest_reportable=1200,
        highest_reportable=4000, in_feet=True,
    )) == "runway 28R: 1200 ft to 4000 ft"
    assert describe_rvr(RunwayVisualRange(
        runway_number=9, modifier=RvrModifier.ABOVE_MAX, lowest_reportable=6000, in_feet=True,
    )) == "runway 09: 6000 ft (above max)"


def test_describe_observation(now):
    obs = decode("KLAX 060250Z 34010KT 10SM CLR 14/M07 A3012 RMK AO2 SLP199 T01441072 55003", now)
    assert describe_observation(obs).splitlines() == [
        "Station: KLAX",
        "Observed: 2004-01-06 02:50 UTC",
        "Wind: 340° at 10 kt",
        "Visibility: 10 SM",
        "Sky: clear skies",
        "Temperature: temperature 14.4°C, dew point -7.2°C",
        "Pressure: 30.12 inHg",
    ]


def test_describe_observation_with_trend(now):
    obs = decode("EGDL 030050Z 19006KT CAVOK 14/11 Q1018 BECMG 7000 HZ", now)
    text = describe_observation(obs)
    assert "Pressure: 1018 hPa (30.06 inHg)" in text
    assert "Trend: BECMG 7000 HZ" in text
    assert "Visibility: CAVOK" in text


def test_describe_observation_minimal(now):
    assert describe_observation(decode("KLAX", now)) == "Station: KLAX"
