"""
Tests for the four metric calculators.

Point values are business constants; the concrete scenarios below pin them.
"""
import pytest

from storeintel_agent.models import ProductListing, StoreSnapshot
from storeintel_agent.normalizer import normalize_snapshot
from storeintel_agent.scoring import (
    calculate_design_score,
    calculate_marketing_score,
    calculate_metrics,
    calculate_pricing_score,
    calculate_product_score,
    round_half_up,
)

from conftest import FLAG_FIELDS

CALCULATORS = (
    calculate_design_score,
    calculate_product_score,
    calculate_pricing_score,
    calculate_marketing_score,
)


def _listing(title="Item", price="$10", image_url="https://img", has_discount=False):
    return ProductListing(title=title, price=price, image_url=image_url, has_discount=has_discount)


class TestEmptySnapshot:
    def test_default_metrics(self):
        metrics = calculate_metrics(StoreSnapshot())
        assert metrics.design_score == 0
        assert metrics.product_score == 0
        assert metrics.pricing_score == 50
        assert metrics.marketing_score == 0


class TestDesignScore:
    def test_full_marks(self):
        snap = StoreSnapshot(
            mobile_optimized=True, page_load_time_ms=1450, has_ssl=True,
            has_chat_widget=False, has_email_capture=True, has_reviews=True,
        )
        assert calculate_design_score(snap) == 100

    def test_clamped_when_everything_present(self):
        snap = StoreSnapshot(
            mobile_optimized=True, page_load_time_ms=900, has_ssl=True,
            has_chat_widget=True, has_email_capture=True, has_reviews=True,
        )
        assert calculate_design_score(snap) == 100

    @pytest.mark.parametrize("load_ms,expected", [
        (None, 0), (1999, 35), (2000, 25), (2999, 25), (3000, 0), (12000, 0),
    ])
    def test_load_time_tiers(self, load_ms, expected):
        assert calculate_design_score(StoreSnapshot(page_load_time_ms=load_ms)) == expected

    def test_single_signals(self):
        assert calculate_design_score(StoreSnapshot(mobile_optimized=True)) == 25
        assert calculate_design_score(StoreSnapshot(has_ssl=True)) == 15
        assert calculate_design_score(StoreSnapshot(has_chat_widget=True)) == 10
        assert calculate_design_score(StoreSnapshot(has_email_capture=True)) == 15
        assert calculate_design_score(StoreSnapshot(has_reviews=True)) == 10


class TestProductScore:
    def test_five_listings_all_imaged_two_discounted(self):
        snap = StoreSnapshot(
            product_count=47,
            products=[_listing(has_discount=i < 2) for i in range(5)],
        )
        # 20 (catalog >= 20) + 30 (images) + 20 (discount mix 0.4) + 20 (descriptions)
        assert calculate_product_score(snap) == 90

    @pytest.mark.parametrize("count,expected", [
        (0, 0), (9, 0), (10, 10), (19, 10), (20, 20), (49, 20), (50, 30), (1000, 30),
    ])
    def test_catalog_tiers_are_exclusive(self, count, expected):
        assert calculate_product_score(StoreSnapshot(product_count=count)) == expected

    @pytest.mark.parametrize("title,price,valid", [
        ("Mug", "$1", True), ("   ", "$1", False), ("Mug", " \t", False), ("", "$1", False), (None, "$1", False),
    ])
    def test_listing_validity_ignores_whitespace(self, title, price, valid):
        assert ProductListing(title=title, price=price).is_valid is valid

    def test_blank_listings_built_directly_give_no_bonus(self):
        snap = StoreSnapshot(products=[_listing(title="   "), _listing(price="  ")])
        assert calculate_product_score(snap) == 0

    def test_invalid_listings_give_no_bonus(self):
        snap = StoreSnapshot(products=[
            _listing(title=None, has_discount=True),
            _listing(price="", has_discount=True),
        ])
        assert calculate_product_score(snap) == 0

    def test_image_ratio_is_proportional(self):
        snap = StoreSnapshot(products=[_listing(), _listing(image_url=None), _listing(image_url=None)])
        # 30 * 1/3 = 10, + 20 description credit
        assert calculate_product_score(snap) == 30

    def test_fractional_points_round_half_up(self):
        snap = StoreSnapshot(products=[_listing(image_url=None) for _ in range(3)] + [_listing()])
        # 30 * 1/4 = 7.5 -> 20 + 7.5 = 27.5 -> 28
        assert calculate_product_score(snap) == 28

    def test_discount_ratio_must_exceed_threshold(self):
        exactly_fifth = [_listing(has_discount=i == 0) for i in range(5)]
        assert calculate_product_score(StoreSnapshot(products=exactly_fifth)) == 50
        above = [_listing(has_discount=i < 2) for i in range(5)]
        assert calculate_product_score(StoreSnapshot(products=above)) == 70

    def test_ratios_ignore_invalid_listings(self):
        products = [_listing(has_discount=True)] + [_listing(title=None, image_url=None) for _ in range(10)]
        # one valid listing: full image coverage, discount ratio 1.0
        assert calculate_product_score(StoreSnapshot(products=products)) == 70


class TestPricingScore:
    def test_base(self):
        assert calculate_pricing_score(StoreSnapshot()) == 50

    def test_any_discount_counts_invalid_listings(self):
        snap = StoreSnapshot(products=[_listing(title=None, has_discount=True)])
        assert calculate_pricing_score(snap) == 70

    def test_more_than_five_listings(self):
        assert calculate_pricing_score(StoreSnapshot(products=[_listing() for _ in range(5)])) == 50
        assert calculate_pricing_score(StoreSnapshot(products=[_listing(price=None) for _ in range(6)])) == 65

    def test_all_signals(self):
        snap = StoreSnapshot(
            has_urgency_messages=True,
            products=[_listing(has_discount=True) for _ in range(6)],
        )
        assert calculate_pricing_score(snap) == 100


class TestMarketingScore:
    @pytest.mark.parametrize("count,expected", [(0, 0), (1, 20), (5, 20), (6, 30), (40, 30)])
    def test_social_proof_stacks(self, count, expected):
        assert calculate_marketing_score(StoreSnapshot(social_proof_count=count)) == expected

    def test_all_signals_clamped(self):
        snap = StoreSnapshot(
            has_email_capture=True, social_proof_count=8, has_guarantees=True,
            has_reviews=True, has_urgency_messages=True,
        )
        # 25 + 30 + 15 + 15 + 15 = 100
        assert calculate_marketing_score(snap) == 100


class TestProperties:
    def test_metrics_in_range(self, random_snapshots):
        for snap in random_snapshots:
            for calc in CALCULATORS:
                value = calc(snap)
                assert isinstance(value, int)
                assert 0 <= value <= 100
            assert calculate_pricing_score(snap) >= 50

    @pytest.mark.parametrize("flag", FLAG_FIELDS)
    def test_flipping_flag_on_never_lowers_a_metric(self, flag, random_snapshots):
        for snap in random_snapshots:
            off = snap.model_copy(update={flag: False})
            on = snap.model_copy(update={flag: True})
            for calc in CALCULATORS:
                assert calc(on) >= calc(off)

    def test_product_discount_flag_never_lowers_metrics(self, random_snapshots):
        for snap in random_snapshots:
            if not snap.products:
                continue
            first = snap.products[0]
            off = snap.model_copy(update={"products": [first.model_copy(update={"has_discount": False})] + snap.products[1:]})
            on = snap.model_copy(update={"products": [first.model_copy(update={"has_discount": True})] + snap.products[1:]})
            for calc in CALCULATORS:
                assert calc(on) >= calc(off)

    def test_normalized_payload_scores(self, sample_payload):
        metrics = calculate_metrics(normalize_snapshot(sample_payload))
        assert metrics.as_tuple() == (100, 90, 85, 100)


@pytest.mark.parametrize("value,expected", [(0.5, 1), (1.5, 2), (2.5, 3), (12.25, 12), (12.75, 13), (93.75, 94)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected
