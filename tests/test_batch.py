from metar_decoder.services.batch import decode_batch, iter_records

CYCLE_FILE = """2004/01/06 02:50
KLAX 060250Z 34010KT 10SM CLR 14/M07 A3012 RMK AO2 SLP199 T01441072

2004/01/06 02:53
KSFO 060253Z 3X010KT 10SM FEW010 12/09 A3001


EGPF 280320Z 30008KT CAVOK 01/M03 Q1006

2004/01/06 02:55
"""


def test_iter_records():
    records = list(iter_records(CYCLE_FILE))
    assert records == [
        "2004/01/06 02:50\nKLAX 060250Z 34010KT 10SM CLR 14/M07 A3012 RMK AO2 SLP199 T01441072",
        "2004/01/06 02:53\nKSFO 060253Z 3X010KT 10SM FEW010 12/09 A3001",
        "EGPF 280320Z 30008KT CAVOK 01/M03 Q1006",
        "2004/01/06 02:55",
    ]


def test_iter_records_empty():
    assert list(iter_records("")) == []
    assert list(iter_records("\n\n  \n")) == []


def test_decode_batch_keeps_going(now):
    result = decode_batch(CYCLE_FILE, now)

    assert [o.station_id for o in result.observations] == ["KLAX", "EGPF"]
    assert result.observations[0].raw_date_line == "2004/01/06 02:50"
    assert result.observations[1].is_cavok

    wind_failure, date_only = result.failures
    assert wind_failure.error == "group_decode_error"
    assert wind_failure.group == "wind"
    assert wind_failure.token == "3X010KT"
    assert wind_failure.record.startswith("2004/01/06 02:53")

    # a lone date line is read as a report with an invalid station
    assert date_only.error == "malformed"
    assert date_only.group is None
