"""
Governance and ESG Data API Tests
=================================
"""

import pytest


def _kpi(**overrides) -> dict:
    payload = {
        "kpiName": "Scope 1 emissions",
        "esgSection": "environment",
        "esrsTopic": "E1",
        "topicTitle": "Climate Change",
        "metricType": "quantitative",
        "unitOfMeasure": "tCO2e",
        "dataOwner": "Sustainability Team",
        "collectionFrequency": "Annual",
        "collectionMethod": "Manual",
        "assuranceLevel": "Limited",
        "verificationStatus": "Verified",
        "confidentialityLevel": "Internal",
    }
    payload.update(overrides)
    return payload


# =============================================================================
# Governance structure
# =============================================================================

class TestGovernanceStructure:

    @pytest.mark.asyncio
    async def test_missing_then_upserted_once(self, client, signup, create_org):
        headers = await signup("owner@acme.com")
        await create_org(headers)

        missing = await client.get("/api/governance-structure", headers=headers)
        first = await client.post(
            "/api/governance-structure",
            json={"boardOversightMechanism": "Quarterly review", "committeeName": "ESG Committee"},
            headers=headers,
        )
        second = await client.post(
            "/api/governance-structure",
            json={
                "boardOversightMechanism": "Monthly review",
                "committeeResponsibilities": ["Climate strategy"],
            },
            headers=headers,
        )
        fetched = await client.get("/api/governance-structure", headers=headers)

        assert missing.status_code == 404
        assert second.json()["id"] == first.json()["id"]
        assert fetched.json()["boardOversightMechanism"] == "Monthly review"
        assert fetched.json()["committeeResponsibilities"] == ["Climate strategy"]


# =============================================================================
# ESG data KPIs
# =============================================================================

class TestEsgDataKpis:

    @pytest.mark.asyncio
    async def test_create_and_filter(self, client, signup, create_org):
        headers = await signup("owner@acme.com")
        await create_org(headers)

        created = await client.post("/api/esg-data-kpis", json=_kpi(), headers=headers)
        await client.post(
            "/api/esg-data-kpis",
            json=_kpi(kpiName="Headcount", esgSection="social", esrsTopic="S1", topicTitle="Own Workforce"),
            headers=headers,
        )

        assert created.status_code == 201
        assert created.json()["completionStatus"] == "missing"
        assert created.json()["isActive"] is True

        by_section = await client.get("/api/esg-data-kpis/section/social", headers=headers)
        by_topic = await client.get("/api/esg-data-kpis/topic/E1", headers=headers)
        everything = await client.get("/api/esg-data-kpis", headers=headers)
        assert [k["kpiName"] for k in by_section.json()] == ["Headcount"]
        assert [k["kpiName"] for k in by_topic.json()] == ["Scope 1 emissions"]
        assert len(everything.json()) == 2

    @pytest.mark.asyncio
    async def test_update_and_delete(self, client, signup, create_org):
        headers = await signup("owner@acme.com")
        await create_org(headers)
        created = await client.post("/api/esg-data-kpis", json=_kpi(), headers=headers)
        kpi_id = created.json()["id"]

        updated = await client.put(
            f"/api/esg-data-kpis/{kpi_id}",
            json={"currentValue": "1150", "completionStatus": "complete"},
            headers=headers,
        )
        deleted = await client.delete(f"/api/esg-data-kpis/{kpi_id}", headers=headers)

        assert updated.json()["currentValue"] == "1150"
        assert updated.json()["completionStatus"] == "complete"
        assert updated.json()["kpiName"] == "Scope 1 emissions"
        assert deleted.status_code == 204

    @pytest.mark.asyncio
    async def test_unknown_section_is_rejected(self, client, signup, create_org):
        headers = await signup("owner@acme.com")
        await create_org(headers)

        response = await client.get("/api/esg-data-kpis/section/finance", headers=headers)

        assert response.status_code == 422
