from datetime import datetime, timedelta, timezone

import pytest
from bson import ObjectId

from jewelry_admin.models.coupon import CouponRuleError, check_coupon_rules, remaining_uses, with_remaining_uses
from jewelry_admin.services.coupons import (
    EMPTY_STATS,
    build_coupon_filter,
    coupon_stats_pipeline,
    stats_from_result,
)

NOW = datetime(2025, 6, 1, tzinfo=timezone.utc)


def coupon_payload(**overrides):
    payload = {
        "name": "Festive Offer",
        "code": "festive10",
        "type": "percentage",
        "amount": 10,
        "minValue": 1000,
        "maxValue": 5000,
        "usageLimit": 100,
    }
    payload.update(overrides)
    return payload


# Filter and stats builders

def test_filter_all_is_empty():
    assert build_coupon_filter(None, None, "all", NOW) == {}
    assert build_coupon_filter("", "all", "all", NOW) == {}


def test_filter_type_only():
    assert build_coupon_filter(None, "flat", "all", NOW) == {"type": "flat"}


def test_filter_scheduled():
    assert build_coupon_filter(None, None, "scheduled", NOW) == {"startDate": {"$gt": NOW}}


def test_filter_active_rules():
    query = build_coupon_filter(None, None, "active", NOW)

    clauses = query["$and"]
    assert {"isActive": True} in clauses
    assert {"$expr": {"$lt": ["$usedCount", "$usageLimit"]}} in clauses
    assert {"$or": [{"startDate": None}, {"startDate": {"$lte": NOW}}]} in clauses
    assert {"$or": [{"expiryDate": None}, {"expiryDate": {"$gte": NOW}}]} in clauses


def test_filter_search_and_expired_are_combined():
    query = build_coupon_filter("fest.", None, "expired", NOW)

    search_clause, status_clause = query["$and"]
    assert search_clause == {"$or": [
        {"name": {"$regex": r"fest\.", "$options": "i"}},
        {"code": {"$regex": r"fest\.", "$options": "i"}},
    ]}
    assert status_clause == {"$or": [
        {"isActive": False},
        {"$expr": {"$gte": ["$usedCount", "$usageLimit"]}},
        {"expiryDate": {"$lt": NOW}},
    ]}


def test_stats_pipeline_is_a_single_group():
    [stage] = coupon_stats_pipeline(NOW)

    group = stage["$group"]
    assert group["_id"] is None
    assert group["totalCoupons"] == {"$sum": 1}
    assert set(group) == {"_id", "totalCoupons", "activeCoupons", "scheduledCoupons", "expiredCoupons"}


def test_stats_from_result():
    assert stats_from_result([]) == EMPTY_STATS
    assert stats_from_result([{"_id": None, "totalCoupons": 3, "activeCoupons": 1,
                               "scheduledCoupons": 1, "expiredCoupons": 1}]) == {
        "totalCoupons": 3, "activeCoupons": 1, "scheduledCoupons": 1, "expiredCoupons": 1,
    }


# Cross-field rules

def test_rules_reject_min_not_below_max():
    with pytest.raises(CouponRuleError, match="Maximum value must be greater than minimum value"):
        check_coupon_rules({"minValue": 500, "maxValue": 500})


def test_rules_compare_naive_and_aware_dates():
    with pytest.raises(CouponRuleError, match="Start date must be before expiry date"):
        check_coupon_rules({
            "startDate": datetime(2025, 7, 1),
            "expiryDate": datetime(2025, 6, 1, tzinfo=timezone.utc),
        })

    check_coupon_rules({"startDate": datetime(2025, 5, 1), "minValue": 1, "maxValue": 2})


def test_remaining_uses():
    assert remaining_uses({"usageLimit": 10, "usedCount": 4}) == 6
    assert remaining_uses({"usageLimit": 5, "usedCount": None}) == 5
    assert with_remaining_uses({"code": "X", "usageLimit": 3, "usedCount": 3}) == {
        "code": "X", "usageLimit": 3, "usedCount": 3, "remainingUses": 0,
    }


# Endpoints

def test_create_coupon_uppercases_code(client):
    response = client.post("/api/admin/coupons", json=coupon_payload(startDate="", expiryDate=""))

    assert response.status_code == 201
    coupon = response.json()["data"]
    assert coupon["code"] == "FESTIVE10"
    assert coupon["usedCount"] == 0
    assert coupon["remainingUses"] == 100
    assert coupon["isActive"] is True
    assert "startDate" not in coupon and "expiryDate" not in coupon


def test_create_coupon_min_value_must_be_below_max(client):
    response = client.post("/api/admin/coupons", json=coupon_payload(minValue=5000, maxValue=1000))

    assert response.status_code == 400
    assert response.json()["message"] == "Maximum value must be greater than minimum value"


def test_create_coupon_start_must_precede_expiry(client):
    response = client.post("/api/admin/coupons", json=coupon_payload(
        startDate="2025-08-01T00:00:00Z",
        expiryDate="2025-07-01T00:00:00Z",
    ))

    assert response.status_code == 400
    assert response.json()["message"] == "Start date must be before expiry date"


def test_create_coupon_duplicate_code_is_case_insensitive(client):
    assert client.post("/api/admin/coupons", json=coupon_payload()).status_code == 201

    response = client.post("/api/admin/coupons", json=coupon_payload(code="FESTIVE10"))

    assert response.status_code == 400
    assert response.json()["message"] == "Coupon code already exists"


def test_create_coupon_validates_fields(client):
    response = client.post("/api/admin/coupons", json=coupon_payload(type="bogo", usageLimit=0))

    assert response.status_code == 400
    fields = {error["field"] for error in response.json()["errors"]}
    assert fields == {"type", "usageLimit"}


def test_update_coupon_checks_merged_document(client):
    coupon_id = client.post("/api/admin/coupons", json=coupon_payload()).json()["data"]["_id"]

    response = client.put(f"/api/admin/coupons/{coupon_id}", json={"maxValue": 500})

    assert response.status_code == 400
    assert response.json()["message"] == "Maximum value must be greater than minimum value"


def test_update_coupon_coerces_and_ignores_protected_fields(client):
    coupon_id = client.post("/api/admin/coupons", json=coupon_payload()).json()["data"]["_id"]

    response = client.put(f"/api/admin/coupons/{coupon_id}", json={
        "amount": "15",
        "code": "newcode",
        "usedCount": 99,
    })

    assert response.status_code == 200
    coupon = response.json()["data"]
    assert coupon["amount"] == 15
    assert coupon["code"] == "NEWCODE"
    assert coupon["usedCount"] == 0


def test_update_coupon_empty_date_clears_it(client):
    coupon_id = client.post("/api/admin/coupons", json=coupon_payload(
        expiryDate="2030-01-01T00:00:00Z",
    )).json()["data"]["_id"]

    response = client.put(f"/api/admin/coupons/{coupon_id}", json={"expiryDate": ""})

    assert response.status_code == 200
    assert "expiryDate" not in response.json()["data"]


def test_update_and_delete_missing_coupon(client):
    missing = str(ObjectId())

    assert client.put(f"/api/admin/coupons/{missing}", json={"amount": 5}).status_code == 404
    assert client.delete(f"/api/admin/coupons/{missing}").status_code == 404
    assert client.delete("/api/admin/coupons/bad-id").status_code == 400


# Listing

@pytest.fixture
def listed_coupons(seed):
    now = datetime.now(timezone.utc)
    day = timedelta(days=1)
    base = {
        "type": "percentage",
        "amount": 10,
        "minValue": 100,
        "maxValue": 1000,
        "usageLimit": 10,
        "usedCount": 0,
        "isActive": True,
    }
    seed(
        "coupons",
        {**base, "name": "Live", "code": "LIVE", "usedCount": 4,
         "startDate": now - day, "expiryDate": now + day, "createdAt": now - 4 * day},
        {**base, "name": "Later", "code": "LATER",
         "startDate": now + day, "expiryDate": now + 2 * day, "createdAt": now - 3 * day},
        {**base, "name": "Lapsed", "code": "LAPSED", "type": "flat",
         "startDate": now - 2 * day, "expiryDate": now - day, "createdAt": now - 2 * day},
        {**base, "name": "Used up", "code": "USEDUP", "usedCount": 10,
         "startDate": now - day, "expiryDate": now + day, "createdAt": now - day},
    )


@pytest.mark.parametrize("status, codes", [
    ("active", ["LIVE"]),
    ("scheduled", ["LATER"]),
    ("expired", ["USEDUP", "LAPSED"]),
    ("all", ["USEDUP", "LAPSED", "LATER", "LIVE"]),
])
def test_list_coupons_by_status(client, listed_coupons, status, codes):
    response = client.get("/api/admin/coupons", params={"status": status})

    assert response.status_code == 200
    data = response.json()["data"]
    assert [coupon["code"] for coupon in data["coupons"]] == codes
    assert data["pagination"]["totalCoupons"] == len(codes)
    assert data["stats"] == {
        "totalCoupons": 4,
        "activeCoupons": 1,
        "scheduledCoupons": 1,
        "expiredCoupons": 2,
    }


def test_list_coupons_search_type_and_remaining_uses(client, listed_coupons):
    data = client.get("/api/admin/coupons", params={"search": "l", "type": "flat"}).json()["data"]
    assert [coupon["code"] for coupon in data["coupons"]] == ["LAPSED"]

    active = client.get("/api/admin/coupons", params={"status": "active"}).json()["data"]["coupons"]
    assert active[0]["remainingUses"] == 6


def test_list_coupons_on_empty_collection(client):
    data = client.get("/api/admin/coupons").json()["data"]

    assert data["coupons"] == []
    assert data["stats"] == EMPTY_STATS
