import pytest

from shipping_estimator.errors import NegativeDistanceError
from shipping_estimator.services.shipping.transport import (
    DEFAULT_BANDS,
    TransportBand,
    TransportRateSelector,
)


@pytest.mark.parametrize(
    "distance, mode, rate",
    [
        (0.0, "Mini Van", 3.0),
        (50.0, "Mini Van", 3.0),
        (99.999, "Mini Van", 3.0),
        (100.0, "Truck", 2.0),
        (499.999, "Truck", 2.0),
        (500.0, "Aeroplane", 1.0),
        (20015.0, "Aeroplane", 1.0),
    ],
)
def test_default_bands(distance: float, mode: str, rate: float):
    selected = TransportRateSelector().select(distance)
    assert selected.mode == mode
    assert selected.rate_per_km_per_kg == rate


@pytest.mark.parametrize("distance", [-1.0, -0.0001, float("nan")])
def test_negative_distance_is_rejected(distance: float):
    with pytest.raises(NegativeDistanceError):
        TransportRateSelector().select(distance)


def test_every_distance_maps_to_exactly_one_band():
    for step in range(0, 2000):
        distance = step * 0.5
        assert sum(band.covers(distance) for band in DEFAULT_BANDS) == 1


def test_adding_a_band_is_a_table_change():
    bands = (
        TransportBand(mode="Drone", min_km=0.0, max_km=10.0, rate_per_km_per_kg=5.0),
        TransportBand(mode="Mini Van", min_km=10.0, max_km=100.0, rate_per_km_per_kg=3.0),
        *DEFAULT_BANDS[1:],
    )
    selector = TransportRateSelector(bands)
    assert selector.select(9.99).mode == "Drone"
    assert selector.select(10.0).mode == "Mini Van"
    assert [band.mode for band in selector.bands] == ["Drone", "Mini Van", "Truck", "Aeroplane"]


def _band(mode: str, min_km: float, max_km: float | None, rate: float = 1.0) -> TransportBand:
    return TransportBand(mode=mode, min_km=min_km, max_km=max_km, rate_per_km_per_kg=rate)


@pytest.mark.parametrize(
    "bands",
    [
        (),
        (_band("A", 5, None),),
        (_band("A", 0, 100), _band("B", 150, None)),
        (_band("A", 0, None), _band("B", 100, None)),
        (_band("A", 0, 100), _band("B", 100, 500)),
        (_band("A", 0, 100, rate=-1), _band("B", 100, None)),
        (_band("A", 0, 0), _band("B", 0, None)),
    ],
)
def test_invalid_band_tables_are_rejected(bands):
    with pytest.raises(ValueError):
        TransportRateSelector(bands)
