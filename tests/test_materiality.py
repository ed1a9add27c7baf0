"""
Materiality Tests
=================

Scoring formula, threshold, and upsert-by-topic-name behavior.
"""

from types import SimpleNamespace

import pytest

from app.services.materiality_service import apply_scoring, materiality_index


# =============================================================================
# Scoring
# =============================================================================

class TestScoring:

    def test_high_concern(self):
        assert materiality_index(4, 3, "high") == 3.8

    def test_medium_concern_lands_on_threshold(self):
        assert materiality_index(3, 3, "medium") == 3.0

    def test_low_or_missing_concern_scores_one(self):
        assert materiality_index(1, 1, "low") == 1.0
        assert materiality_index(1, 1, None) == 1.0

    def test_apply_scoring_derives_index_and_flag(self):
        values = apply_scoring(
            {"financial_impact_score": 3, "impact_on_stakeholders": 3, "stakeholder_concern_level": "medium"}
        )

        assert values["materiality_index"] == 3.0
        assert values["is_material"] is True

    def test_explicit_index_wins(self):
        values = apply_scoring(
            {"financial_impact_score": 5, "impact_on_stakeholders": 5, "materiality_index": 1.5}
        )

        assert values["materiality_index"] == 1.5
        assert values["is_material"] is False

    def test_without_scores_nothing_is_derived(self):
        values = apply_scoring({"why_material": "Regulatory pressure"})

        assert "materiality_index" not in values
        assert "is_material" not in values


# =============================================================================
# API
# =============================================================================

class TestMaterialityTopics:

    @pytest.mark.asyncio
    async def test_upsert_same_topic_twice_keeps_one_row(self, client, signup, create_org):
        headers = await signup("owner@acme.com")
        await create_org(headers)

        first = await client.post(
            "/api/materiality-topics",
            json={
                "topic": "Climate Risk",
                "category": "environmental",
                "financialImpactScore": 2,
                "impactOnStakeholders": 2,
                "stakeholderConcernLevel": "low",
            },
            headers=headers,
        )
        second = await client.post(
            "/api/materiality-topics",
            json={
                "topic": "Climate Risk",
                "financialImpactScore": 4,
                "impactOnStakeholders": 4,
                "stakeholderConcernLevel": "high",
            },
            headers=headers,
        )

        assert first.status_code == 200
        assert first.json()["isMaterial"] is False
        assert second.json()["id"] == first.json()["id"]
        assert second.json()["materialityIndex"] == 4.2
        assert second.json()["isMaterial"] is True
        assert second.json()["category"] == "environmental"

        response = await client.get("/api/materiality-topics", headers=headers)
        assert len(response.json()) == 1

    @pytest.mark.asyncio
    async def test_patch_rescores_from_stored_values(self, client, signup, create_org):
        headers = await signup("owner@acme.com")
        await create_org(headers)
        created = await client.post(
            "/api/materiality-topics",
            json={
                "topic": "Water",
                "financialImpactScore": 3,
                "impactOnStakeholders": 3,
                "stakeholderConcernLevel": "medium",
            },
            headers=headers,
        )

        response = await client.patch(
            f"/api/materiality-topics/{created.json()['id']}",
            json={"stakeholderConcernLevel": "low"},
            headers=headers,
        )

        assert response.status_code == 200
        assert response.json()["materialityIndex"] == 2.6
        assert response.json()["isMaterial"] is False

    @pytest.mark.asyncio
    async def test_out_of_range_score_is_rejected(self, client, signup, create_org):
        headers = await signup("owner@acme.com")
        await create_org(headers)

        response = await client.post(
            "/api/materiality-topics",
            json={"topic": "Water", "financialImpactScore": 9},
            headers=headers,
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_delete_and_foreign_delete(self, client, signup, create_org):
        owner = await signup("owner@acme.com")
        stranger = await signup("stranger@acme.com")
        await create_org(owner)
        await create_org(stranger, "Stranger Inc")
        created = await client.post(
            "/api/materiality-topics", json={"topic": "Water"}, headers=owner
        )
        topic_id = created.json()["id"]

        forbidden = await client.delete(f"/api/materiality-topics/{topic_id}", headers=stranger)
        deleted = await client.delete(f"/api/materiality-topics/{topic_id}", headers=owner)
        missing = await client.delete(f"/api/materiality-topics/{topic_id}", headers=owner)

        assert forbidden.status_code == 403
        assert deleted.status_code == 204
        assert missing.status_code == 404


# =============================================================================
# Explicit values survive later submissions
# =============================================================================

class TestExplicitScoring:

    def test_stored_scores_alone_do_not_rescore(self):
        stored = SimpleNamespace(
            financial_impact_score=1,
            impact_on_stakeholders=1,
            stakeholder_concern_level=None,
        )

        values = apply_scoring({"management_response": "Monitor"}, stored)

        assert "materiality_index" not in values
        assert "is_material" not in values

    def test_one_new_score_rescores_with_stored_ones(self):
        stored = SimpleNamespace(
            financial_impact_score=3,
            impact_on_stakeholders=3,
            stakeholder_concern_level="medium",
        )

        values = apply_scoring({"financial_impact_score": 5}, stored)

        assert values["materiality_index"] == 3.8
        assert values["is_material"] is True

    @pytest.mark.asyncio
    async def test_unrelated_patch_and_reupsert_keep_explicit_index(self, client, signup, create_org):
        headers = await signup("owner@acme.com")
        await create_org(headers)
        created = await client.post(
            "/api/materiality-topics",
            json={
                "topic": "Water",
                "financialImpactScore": 1,
                "impactOnStakeholders": 1,
                "materialityIndex": 4.5,
                "isMaterial": True,
            },
            headers=headers,
        )
        assert created.json()["materialityIndex"] == 4.5

        patched = await client.patch(
            f"/api/materiality-topics/{created.json()['id']}",
            json={"managementResponse": "Monitor"},
            headers=headers,
        )
        reposted = await client.post(
            "/api/materiality-topics",
            json={"topic": "Water", "whyMaterial": "Water stress at two sites"},
            headers=headers,
        )

        assert patched.status_code == 200
        assert patched.json()["materialityIndex"] == 4.5
        assert patched.json()["isMaterial"] is True
        assert patched.json()["managementResponse"] == "Monitor"
        assert reposted.json()["id"] == created.json()["id"]
        assert reposted.json()["materialityIndex"] == 4.5
        assert reposted.json()["isMaterial"] is True

    @pytest.mark.asyncio
    async def test_explicit_flag_kept_in_report_table(self, client, signup, create_org):
        headers = await signup("owner@acme.com")
        await create_org(headers)
        created = await client.post(
            "/api/materiality-topics",
            json={"topic": "Water", "financialImpactScore": 1, "impactOnStakeholders": 1,
                  "materialityIndex": 4.5, "isMaterial": True},
            headers=headers,
        )
        await client.patch(
            f"/api/materiality-topics/{created.json()['id']}",
            json={"managementResponse": "Monitor"},
            headers=headers,
        )
        templates = await client.get("/api/report-templates", headers=headers)
        report = await client.post(
            "/api/generated-reports",
            json={"templateId": templates.json()[0]["id"], "title": "CSRD 2024"},
            headers=headers,
        )

        filled = await client.post(
            f"/api/generated-reports/{report.json()['id']}/autofill", headers=headers
        )

        assert filled.json()["sections"]["materiality_assessment"]["finalMaterialTopicsTable"] == (
            "Water: Material Index 4.5, Stakeholders: N/A"
        )


# =============================================================================
# Topic names
# =============================================================================

class TestTopicNames:

    @pytest.mark.asyncio
    async def test_rename_is_trimmed_and_collides_with_existing(self, client, signup, create_org):
        headers = await signup("owner@acme.com")
        await create_org(headers)
        await client.post("/api/materiality-topics", json={"topic": "Water"}, headers=headers)
        other = await client.post(
            "/api/materiality-topics", json={"topic": "Biodiversity"}, headers=headers
        )

        response = await client.patch(
            f"/api/materiality-topics/{other.json()['id']}",
            json={"topic": "Water "},
            headers=headers,
        )
        listed = await client.get("/api/materiality-topics", headers=headers)

        assert response.status_code == 409
        assert sorted(t["topic"] for t in listed.json()) == ["Biodiversity", "Water"]

    @pytest.mark.asyncio
    async def test_rename_strips_whitespace(self, client, signup, create_org):
        headers = await signup("owner@acme.com")
        await create_org(headers)
        created = await client.post(
            "/api/materiality-topics", json={"topic": "Biodiversity"}, headers=headers
        )

        response = await client.patch(
            f"/api/materiality-topics/{created.json()['id']}",
            json={"topic": "  Land Use  "},
            headers=headers,
        )

        assert response.status_code == 200
        assert response.json()["topic"] == "Land Use"
