import pytest

from app.core.catalog import COASTAL_SITES
from app.core.contracts import BBox4
from app.core.errors import InvalidEnum
from app.core.geo_registry import region_bbox, region_for_point


class TestRegions:
    @pytest.mark.parametrize(
        "site,region",
        [
            ("Dwarka, Gujarat", "gujarat"),
            ("Mumbai, Maharashtra", "maharashtra"),
            ("Colva Beach, Goa", "goa"),
            ("Kovalam, Kerala", "kerala"),
            ("Chennai Port, Tamil Nadu", "tamil_nadu"),
            ("Visakhapatnam, Andhra Pradesh", "andhra_pradesh"),
            ("Puri, Odisha", "odisha"),
            ("Salt Lake, Kolkata, West Bengal", "west_bengal"),
        ],
    )
    def test_coastal_sites_resolve_to_their_region(self, site, region):
        lat, lng = COASTAL_SITES[site]
        assert region_for_point(lat, lng) == region

    def test_overlap_goes_to_smallest_region(self):
        # inside both the Goa and Karnataka boxes
        assert region_for_point(15.0, 74.2) == "goa"

    def test_open_ocean_has_no_region(self):
        assert region_for_point(-40.0, 20.0) is None

    def test_region_bbox_accepts_labels(self):
        assert region_bbox("Tamil Nadu") == region_bbox("tamil_nadu")
        with pytest.raises(InvalidEnum):
            region_bbox("atlantis")


class TestBBox:
    def test_inverted_box_is_invalid(self):
        with pytest.raises(ValueError):
            BBox4(minLng=80.0, minLat=10.0, maxLng=70.0, maxLat=20.0)

    def test_contains_is_inclusive(self):
        box = BBox4(minLng=70.0, minLat=10.0, maxLng=80.0, maxLat=20.0)
        assert box.contains(10.0, 70.0)
        assert box.contains(20.0, 80.0)
        assert not box.contains(20.01, 75.0)
