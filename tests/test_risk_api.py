"""
Risk Management API Tests
=========================

Due diligence upsert, IRO register and action plans with their IRO link.
"""

import pytest


class TestDueDiligence:

    @pytest.mark.asyncio
    async def test_empty_returns_null_then_upserts_single_row(self, client, signup, create_org):
        headers = await signup("owner@acme.com")
        await create_org(headers)

        empty = await client.get("/api/due-diligence-process", headers=headers)
        first = await client.post(
            "/api/due-diligence-process",
            json={"frameworks": ["UNGPs"], "scopeDescription": "Tier 1"},
            headers=headers,
        )
        second = await client.post(
            "/api/due-diligence-process",
            json={"frameworks": ["UNGPs", "OECD Guidelines"]},
            headers=headers,
        )

        assert empty.status_code == 200
        assert empty.json() is None
        assert second.json()["id"] == first.json()["id"]
        assert second.json()["frameworks"] == ["UNGPs", "OECD Guidelines"]


class TestIroAndActionPlans:

    @pytest.mark.asyncio
    async def test_iro_crud(self, client, signup, create_org):
        headers = await signup("owner@acme.com")
        await create_org(headers)

        created = await client.post(
            "/api/iro-register",
            json={"iroTitle": "Flooding", "iroType": "Risk", "likelihood": 4},
            headers=headers,
        )
        iro_id = created.json()["id"]
        updated = await client.put(
            f"/api/iro-register/{iro_id}", json={"severityMagnitude": 5}, headers=headers
        )
        listed = await client.get("/api/iro-register", headers=headers)

        assert created.status_code == 201
        assert updated.json()["severityMagnitude"] == 5
        assert updated.json()["likelihood"] == 4
        assert [i["id"] for i in listed.json()] == [iro_id]

    @pytest.mark.asyncio
    async def test_invalid_iro_type_is_rejected(self, client, signup, create_org):
        headers = await signup("owner@acme.com")
        await create_org(headers)

        response = await client.post(
            "/api/iro-register", json={"iroTitle": "X", "iroType": "Threat"}, headers=headers
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_action_plans_by_iro(self, client, signup, create_org):
        headers = await signup("owner@acme.com")
        await create_org(headers)
        iro = await client.post(
            "/api/iro-register", json={"iroTitle": "Flooding", "iroType": "Risk"}, headers=headers
        )
        iro_id = iro.json()["id"]

        linked = await client.post(
            "/api/action-plans",
            json={"iroId": iro_id, "responseType": "Mitigation", "budgetAmount": 25000},
            headers=headers,
        )
        await client.post(
            "/api/action-plans", json={"responseType": "Remediation"}, headers=headers
        )

        assert linked.status_code == 201
        assert linked.json()["budgetCurrency"] == "EUR"
        assert linked.json()["budgetAmount"] == 25000

        by_iro = await client.get(f"/api/action-plans/iro/{iro_id}", headers=headers)
        all_plans = await client.get("/api/action-plans", headers=headers)
        assert [p["id"] for p in by_iro.json()] == [linked.json()["id"]]
        assert len(all_plans.json()) == 2

    @pytest.mark.asyncio
    async def test_action_plan_cannot_link_foreign_iro(self, client, signup, create_org):
        owner = await signup("owner@acme.com")
        stranger = await signup("stranger@acme.com")
        await create_org(owner)
        await create_org(stranger, "Stranger Inc")
        foreign = await client.post(
            "/api/iro-register", json={"iroTitle": "Theirs", "iroType": "Risk"}, headers=stranger
        )

        response = await client.post(
            "/api/action-plans",
            json={"iroId": foreign.json()["id"], "responseType": "Mitigation"},
            headers=owner,
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_foreign_iro_update_is_forbidden(self, client, signup, create_org):
        owner = await signup("owner@acme.com")
        stranger = await signup("stranger@acme.com")
        await create_org(owner)
        await create_org(stranger, "Stranger Inc")
        iro = await client.post(
            "/api/iro-register", json={"iroTitle": "Mine", "iroType": "Risk"}, headers=owner
        )

        response = await client.put(
            f"/api/iro-register/{iro.json()['id']}", json={"iroTitle": "Hijacked"}, headers=stranger
        )

        assert response.status_code == 403
