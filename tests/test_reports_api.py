"""
Report API Tests
================

Template catalog, the generated report lifecycle (draft -> final) and
auto-fill over HTTP against real organization data.
"""

import pytest


async def _seed_organization_data(client, headers, legal_name: str = "Acme AG") -> None:
    response = await client.post(
        "/api/company-profile",
        json={
            "legalName": legal_name,
            "legalForm": "AG",
            "registeredAddress": "Hauptstrasse 1, Berlin",
            "country": "Germany",
            "naceSectorCode": "C25",
            "fiscalYearEnd": "2024-12-31",
            "keyProducts": ["Widgets", "Gears"],
            "registeredHQ": "Berlin",
            "subsidiaries": [
                {"name": "Acme GmbH", "country": "Germany", "ownershipPercentage": 80},
            ],
        },
        headers=headers,
    )
    assert response.status_code == 200, response.text
    await client.post(
        "/api/materiality-topics",
        json={
            "topic": "Climate Risk",
            "subcategory": "E1",
            "financialImpactScore": 4,
            "impactOnStakeholders": 3,
            "stakeholderConcernLevel": "high",
            "impactedStakeholders": ["Investors"],
        },
        headers=headers,
    )
    await client.post(
        "/api/iro-register",
        json={"iroTitle": "Flooding", "iroType": "Risk", "likelihood": 4, "severityMagnitude": 3},
        headers=headers,
    )
    await client.post(
        "/api/esg-data-kpis",
        json={
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
            "currentValue": "1200",
        },
        headers=headers,
    )


async def _template_id(client, headers) -> str:
    response = await client.get("/api/report-templates", headers=headers)
    return response.json()[0]["id"]


async def _create_report(client, headers, **extra) -> dict:
    payload = {"templateId": await _template_id(client, headers), "title": "CSRD Report 2024"}
    payload.update(extra)
    response = await client.post("/api/generated-reports", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


# =============================================================================
# Templates
# =============================================================================

class TestTemplates:

    @pytest.mark.asyncio
    async def test_esrs_template_is_seeded(self, client, signup):
        headers = await signup("owner@acme.com")

        response = await client.get("/api/report-templates", headers=headers)

        assert response.status_code == 200
        templates = response.json()
        assert len(templates) == 1
        assert templates[0]["type"] == "esrs"
        assert [s["id"] for s in templates[0]["sections"]][:3] == [
            "toc",
            "general_info",
            "governance_strategy",
        ]

    @pytest.mark.asyncio
    async def test_unknown_template_is_not_found(self, client, signup, create_org):
        headers = await signup("owner@acme.com")
        await create_org(headers)

        get_response = await client.get("/api/report-templates/nope", headers=headers)
        create_response = await client.post(
            "/api/generated-reports", json={"templateId": "nope", "title": "X"}, headers=headers
        )

        assert get_response.status_code == 404
        assert create_response.status_code == 404


# =============================================================================
# Auto-fill
# =============================================================================

class TestAutofill:

    @pytest.mark.asyncio
    async def test_autofill_from_organization_data(self, client, signup, create_org):
        headers = await signup("owner@acme.com")
        await create_org(headers)
        await _seed_organization_data(client, headers)
        report = await _create_report(client, headers)
        assert report["status"] == "draft"
        assert report["sections"] == {}

        response = await client.post(
            f"/api/generated-reports/{report['id']}/autofill", headers=headers
        )

        assert response.status_code == 200
        sections = response.json()["sections"]
        assert sections["general_info"]["entityLegalName"] == "Acme AG"
        assert sections["general_info"]["registeredHQ"] == "Berlin"
        assert sections["general_info"]["consolidationScope"] == "Acme GmbH (Germany) - 80%"
        assert sections["general_info"]["reportingPeriod"] == "1 January 2023 - 31 December 2024"
        assert sections["governance_strategy"]["keyProducts"] == "Widgets, Gears"
        assert sections["materiality_assessment"]["listOfAssessedTopics"] == "Climate Risk (E1)"
        assert sections["materiality_assessment"]["finalMaterialTopicsTable"] == (
            "Climate Risk: Material Index 3.8, Stakeholders: Investors"
        )
        assert sections["impacts_risks"]["sustainabilityRisks"].startswith("Title: Flooding")
        assert sections["impacts_risks"]["sustainabilityOpportunities"] == ""
        assert sections["policies_actions_targets_kpis"]["esgDataByTopic"].startswith(
            "E1 - Climate Change:\nKPI: Scope 1 emissions"
        )

    @pytest.mark.asyncio
    async def test_autofill_without_data_yields_empty_fields(self, client, signup, create_org):
        headers = await signup("owner@acme.com")
        await create_org(headers)
        report = await _create_report(client, headers)

        response = await client.post(
            f"/api/generated-reports/{report['id']}/autofill", headers=headers
        )

        assert response.status_code == 200
        sections = response.json()["sections"]
        assert len(sections) == 5
        assert all(v == "" for fields in sections.values() for v in fields.values())

    @pytest.mark.asyncio
    async def test_user_edits_survive_forced_refresh(self, client, signup, create_org):
        headers = await signup("owner@acme.com")
        await create_org(headers)
        await _seed_organization_data(client, headers)
        report = await _create_report(client, headers, sections={"toc": {"content": "1. Intro"}})
        filled = await client.post(
            f"/api/generated-reports/{report['id']}/autofill", headers=headers
        )

        sections = filled.json()["sections"]
        sections["general_info"]["legalForm"] = "Aktiengesellschaft"
        edited = await client.put(
            f"/api/generated-reports/{report['id']}", json={"sections": sections}, headers=headers
        )
        assert edited.status_code == 200

        await _seed_organization_data(client, headers, legal_name="Acme Holding AG")

        guarded = await client.post(
            f"/api/generated-reports/{report['id']}/autofill", headers=headers
        )
        assert guarded.json()["sections"]["general_info"]["entityLegalName"] == "Acme AG"

        forced = await client.post(
            f"/api/generated-reports/{report['id']}/autofill",
            params={"force": "true"},
            headers=headers,
        )
        general = forced.json()["sections"]["general_info"]
        assert general["entityLegalName"] == "Acme Holding AG"
        assert general["legalForm"] == "Aktiengesellschaft"
        assert forced.json()["sections"]["toc"] == {"content": "1. Intro"}


# =============================================================================
# Lifecycle and access
# =============================================================================

class TestReportLifecycle:

    @pytest.mark.asyncio
    async def test_finalize_stamps_server_timestamps(self, client, signup, create_org):
        headers = await signup("owner@acme.com")
        await create_org(headers)
        report = await _create_report(client, headers)

        response = await client.put(
            f"/api/generated-reports/{report['id']}",
            json={
                "status": "final",
                "lastModified": "1999-01-01T00:00:00Z",
                "finalizedAt": "1999-01-01T00:00:00Z",
            },
            headers=headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "final"
        assert body["finalizedAt"] is not None
        assert not body["finalizedAt"].startswith("1999")
        assert not body["lastModified"].startswith("1999")

    @pytest.mark.asyncio
    async def test_final_report_is_frozen(self, client, signup, create_org):
        headers = await signup("owner@acme.com")
        await create_org(headers)
        report = await _create_report(client, headers)
        await client.put(
            f"/api/generated-reports/{report['id']}", json={"status": "final"}, headers=headers
        )

        update = await client.put(
            f"/api/generated-reports/{report['id']}", json={"title": "Changed"}, headers=headers
        )
        reopen = await client.put(
            f"/api/generated-reports/{report['id']}", json={"status": "draft"}, headers=headers
        )
        autofill = await client.post(
            f"/api/generated-reports/{report['id']}/autofill", headers=headers
        )

        assert update.status_code == 409
        assert reopen.status_code == 409
        assert autofill.status_code == 409

    @pytest.mark.asyncio
    async def test_reports_are_scoped_to_their_organization(self, client, signup, create_org):
        owner = await signup("owner@acme.com")
        stranger = await signup("stranger@acme.com")
        await create_org(owner)
        await create_org(stranger, "Stranger Inc")
        report = await _create_report(client, owner)

        foreign_get = await client.get(f"/api/generated-reports/{report['id']}", headers=stranger)
        foreign_fill = await client.post(
            f"/api/generated-reports/{report['id']}/autofill", headers=stranger
        )
        stranger_list = await client.get("/api/generated-reports", headers=stranger)
        owner_list = await client.get("/api/generated-reports", headers=owner)

        assert foreign_get.status_code == 403
        assert foreign_fill.status_code == 403
        assert stranger_list.json() == []
        assert [r["id"] for r in owner_list.json()] == [report["id"]]

    @pytest.mark.asyncio
    async def test_unknown_report_is_not_found(self, client, signup, create_org):
        headers = await signup("owner@acme.com")
        await create_org(headers)

        response = await client.get("/api/generated-reports/does-not-exist", headers=headers)

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_report(self, client, signup, create_org):
        headers = await signup("owner@acme.com")
        await create_org(headers)
        report = await _create_report(client, headers)

        deleted = await client.delete(f"/api/generated-reports/{report['id']}", headers=headers)
        missing = await client.get(f"/api/generated-reports/{report['id']}", headers=headers)

        assert deleted.status_code == 204
        assert missing.status_code == 404
