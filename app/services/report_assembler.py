"""
services/report_assembler.py
----------------------------
Builds the auto-filled sections of a generated report from an
organization's stored data.

Three steps, kept apart so each can be used and tested on its own:

  1. collect_sources()  reads the seven data domains for one organization.
  2. build_sections()   pure: turns those rows into the five section objects,
                        every field a display string.
  3. merge_sections()   pure: folds the built sections over the report's
                        current sections.

Merge rules:
  - If general_info.entityLegalName, governance_strategy.keyProducts,
    materiality_assessment.listOfAssessedTopics and
    impacts_risks.sustainabilityRisks are all non-empty the report counts as
    populated and is returned unchanged, unless force=True.
  - Sections and fields auto-fill does not produce are left untouched.
  - A produced field is written only when the current value is empty or is
    still exactly what auto-fill wrote last time (tracked in the provenance
    map "section.field" -> value). Anything else is a user edit and is kept.

Nothing here writes to the database; saving the result is the caller's job.
Missing upstream records never raise: the affected fields come out empty.
"""

import copy
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.models.esg_data import EsgDataKpi
from app.models.governance import GovernanceStructure
from app.models.materiality import MaterialityTopic
from app.models.risk import ActionPlan, DueDiligenceProcess, IroRegister
from app.services import crud
from app.services.company_profile_service import CompanyProfileService

logger = get_logger(__name__)

Sections = Dict[str, Any]
Provenance = Dict[str, str]

GUARD_FIELDS = (
    ("general_info", "entityLegalName"),
    ("governance_strategy", "keyProducts"),
    ("materiality_assessment", "listOfAssessedTopics"),
    ("impacts_risks", "sustainabilityRisks"),
)

_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

NA = "N/A"


@dataclass
class ReportSources:
    profile: Any = None
    subsidiaries: List[Any] = field(default_factory=list)
    governance: Any = None
    topics: List[Any] = field(default_factory=list)
    iros: List[Any] = field(default_factory=list)
    due_diligence: Any = None
    action_plans: List[Any] = field(default_factory=list)
    kpis: List[Any] = field(default_factory=list)


# ── Display helpers ───────────────────────────────────────────────────────────

def _attr(obj: Any, name: str) -> Any:
    return getattr(obj, name, None) if obj is not None else None


def display(value: Any) -> str:
    """Render a scalar the way it is shown in a report: 3.0 -> "3", None -> ""."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def or_na(value: Any) -> str:
    return display(value) if value else NA


def join(values: Optional[Iterable[Any]], sep: str = ", ") -> str:
    return sep.join(display(v) for v in values) if values else ""


def yes_no(value: Any) -> str:
    return "Yes" if value else "No"


def reporting_period(fiscal_year_end: Optional[date]) -> str:
    """1 January of the year before the fiscal year end, to the fiscal year end."""
    if fiscal_year_end is None:
        return ""
    end = f"{fiscal_year_end.day:02d} {_MONTHS[fiscal_year_end.month - 1]} {fiscal_year_end.year}"
    return f"1 January {fiscal_year_end.year - 1} - {end}"


# ── Line renderers ────────────────────────────────────────────────────────────

def subsidiary_line(sub: Any) -> str:
    return f"{_attr(sub, 'name')} ({_attr(sub, 'country')}) - {display(_attr(sub, 'ownership_percentage'))}%"


def assessed_topic_line(topic: Any) -> str:
    return f"{_attr(topic, 'topic')} ({or_na(_attr(topic, 'subcategory') or _attr(topic, 'category'))})"


def material_topic_line(topic: Any) -> str:
    stakeholders = join(_attr(topic, "impacted_stakeholders")) or NA
    return (
        f"{_attr(topic, 'topic')}: Material Index {or_na(_attr(topic, 'materiality_index'))}, "
        f"Stakeholders: {stakeholders}"
    )


def risk_line(iro: Any) -> str:
    return " | ".join(
        [
            f"Title: {display(_attr(iro, 'iro_title'))}",
            f"Description: {or_na(_attr(iro, 'iro_description'))}",
            f"Category: {or_na(_attr(iro, 'category'))}",
            f"Likelihood: {or_na(_attr(iro, 'likelihood'))}/5",
            f"Impact/Severity: {or_na(_attr(iro, 'severity_magnitude'))}/5",
            f"Time Horizon: {or_na(_attr(iro, 'time_horizon'))}",
            f"Affected Stakeholders: {join(_attr(iro, 'affected_stakeholders')) or NA}",
            f"Value Chain Location: {or_na(_attr(iro, 'value_chain_location'))}",
            f"Financial Materiality: {yes_no(_attr(iro, 'financial_materiality'))}",
            f"Impact Materiality: {yes_no(_attr(iro, 'impact_materiality'))}",
        ]
    )


def opportunity_line(iro: Any) -> str:
    return (
        f"{display(_attr(iro, 'iro_title'))}: {or_na(_attr(iro, 'iro_description'))} "
        f"(Value Chain: {or_na(_attr(iro, 'value_chain_location'))})"
    )


def value_chain_line(iro: Any) -> str:
    stakeholders = join(_attr(iro, "affected_stakeholders")) or NA
    return (
        f"{display(_attr(iro, 'iro_title'))}: Affects {stakeholders} "
        f"- Location: {or_na(_attr(iro, 'value_chain_location'))}"
    )


def remediation_line(plan: Any) -> str:
    return (
        f"{or_na(_attr(plan, 'response_type'))}: {or_na(_attr(plan, 'response_description'))} "
        f"(Target: {or_na(_attr(plan, 'target_outcome'))}, "
        f"Responsible: {or_na(_attr(plan, 'responsible_department'))})"
    )


def kpi_line(kpi: Any) -> str:
    details = [
        f"KPI: {display(_attr(kpi, 'kpi_name'))}",
        f"Type: {display(_attr(kpi, 'metric_type'))}",
        f"Unit: {display(_attr(kpi, 'unit_of_measure'))}",
        f"Current Value: {or_na(_attr(kpi, 'current_value'))}",
        f"Baseline Year: {or_na(_attr(kpi, 'baseline_year'))}",
        f"Data Owner: {display(_attr(kpi, 'data_owner'))}",
        f"Collection Frequency: {display(_attr(kpi, 'collection_frequency'))}",
        f"Collection Method: {display(_attr(kpi, 'collection_method'))}",
        f"Assurance Level: {display(_attr(kpi, 'assurance_level'))}",
        f"Verification Status: {display(_attr(kpi, 'verification_status'))}",
        f"Reference Standards: {join(_attr(kpi, 'reference_standard')) or NA}",
        f"Reporting Period: {or_na(_attr(kpi, 'reporting_period'))}",
        f"Completion Status: {display(_attr(kpi, 'completion_status'))}",
    ]
    notes = _attr(kpi, "notes")
    if notes:
        details.append(f"Notes: {notes}")
    return " | ".join(details)


def esg_data_by_topic(kpis: Iterable[Any]) -> str:
    """KPIs grouped by "{esrsTopic} - {topicTitle}" in order of first appearance."""
    groups: Dict[str, List[Any]] = {}
    for kpi in kpis:
        key = f"{_attr(kpi, 'esrs_topic')} - {_attr(kpi, 'topic_title')}"
        groups.setdefault(key, []).append(kpi)
    return "\n\n\n".join(
        f"{topic}:\n" + "\n\n".join(kpi_line(kpi) for kpi in members)
        for topic, members in groups.items()
    )


# ── Section builder ───────────────────────────────────────────────────────────

def build_sections(sources: ReportSources) -> Sections:
    profile = sources.profile
    governance = sources.governance
    due_diligence = sources.due_diligence
    risks = [i for i in sources.iros if _attr(i, "iro_type") == "Risk"]
    opportunities = [i for i in sources.iros if _attr(i, "iro_type") == "Opportunity"]

    return {
        "general_info": {
            "entityLegalName": display(_attr(profile, "legal_name")),
            "legalForm": display(_attr(profile, "legal_form")),
            "countryOfRegistration": display(_attr(profile, "country")),
            "naceSector": display(_attr(profile, "nace_sector_code")),
            "consolidationScope": ", ".join(subsidiary_line(s) for s in sources.subsidiaries),
            "registeredHQ": display(_attr(profile, "registered_hq")),
            "reportingPeriod": reporting_period(_attr(profile, "fiscal_year_end")),
        },
        "governance_strategy": {
            "businessModelOverview": display(_attr(profile, "supply_chain_description")),
            "keyProducts": join(_attr(profile, "key_products")),
            "primaryMarkets": join(_attr(profile, "primary_markets")),
            "esgStrategyOverview": display(_attr(profile, "sustainability_policies")),
            "transitionPlan": display(_attr(profile, "transition_updates")),
            "netZeroTarget": display(_attr(profile, "net_zero_target")),
            "circularEconomyInitiatives": display(_attr(profile, "circular_economy_initiatives")),
            "governanceRoles": join(_attr(governance, "committee_responsibilities")),
            "boardOversight": display(_attr(governance, "board_oversight_mechanism")),
        },
        "materiality_assessment": {
            "materialityAssessmentMethodology": "",
            "listOfAssessedTopics": ", ".join(assessed_topic_line(t) for t in sources.topics),
            "stakeholderInputInAssessment": "",
            "finalMaterialTopicsTable": "\n".join(
                material_topic_line(t) for t in sources.topics if _attr(t, "is_material")
            ),
        },
        "impacts_risks": {
            "sustainabilityRisks": "\n\n".join(risk_line(r) for r in risks),
            "sustainabilityOpportunities": "\n".join(opportunity_line(o) for o in opportunities),
            "valueChainMapping": "\n".join(value_chain_line(i) for i in sources.iros),
            "dueDiligenceFrameworks": join(_attr(due_diligence, "frameworks")),
            "scopeDescription": display(_attr(due_diligence, "scope_description")),
            "governanceOversight": display(_attr(due_diligence, "governance_oversight")),
            "remediationMechanisms": "\n".join(remediation_line(p) for p in sources.action_plans),
        },
        "policies_actions_targets_kpis": {
            "esgDataByTopic": esg_data_by_topic(sources.kpis),
        },
    }


# ── Merge ─────────────────────────────────────────────────────────────────────

def is_populated(sections: Optional[Sections]) -> bool:
    sections = sections or {}
    for section, name in GUARD_FIELDS:
        content = sections.get(section)
        if not isinstance(content, dict) or not content.get(name):
            return False
    return True


def merge_sections(
    existing: Optional[Sections],
    provenance: Optional[Provenance],
    generated: Sections,
    force: bool = False,
) -> Tuple[Sections, Provenance]:
    existing = copy.deepcopy(existing or {})
    provenance = dict(provenance or {})

    if not force and is_populated(existing):
        return existing, provenance

    for section, fields in generated.items():
        current = existing.get(section)
        current = dict(current) if isinstance(current, dict) else {}
        for name, value in fields.items():
            key = f"{section}.{name}"
            present = current.get(name)
            untouched = key in provenance and present == provenance[key]
            if not present or untouched:
                current[name] = value
                provenance[key] = value
        existing[section] = current
    return existing, provenance


# ── Data collection ───────────────────────────────────────────────────────────

async def collect_sources(db: AsyncSession, organization_id: str) -> ReportSources:
    profile = await CompanyProfileService.find_profile(db, organization_id)
    subsidiaries = (
        await CompanyProfileService.list_subsidiaries(db, profile.id) if profile else []
    )
    return ReportSources(
        profile=profile,
        subsidiaries=subsidiaries,
        governance=await crud.get_one_for_organization(db, GovernanceStructure, organization_id),
        topics=await crud.list_by_organization(db, MaterialityTopic, organization_id),
        iros=await crud.list_by_organization(db, IroRegister, organization_id),
        due_diligence=await crud.get_one_for_organization(db, DueDiligenceProcess, organization_id),
        action_plans=await crud.list_by_organization(db, ActionPlan, organization_id),
        kpis=await crud.list_by_organization(db, EsgDataKpi, organization_id),
    )


class ReportAssembler:

    @staticmethod
    async def assemble(
        db: AsyncSession,
        organization_id: str,
        sections: Optional[Sections],
        provenance: Optional[Provenance] = None,
        force: bool = False,
    ) -> Tuple[Sections, Provenance]:
        """Return (merged sections, updated provenance) without saving anything."""
        if not force and is_populated(sections):
            logger.info("Report already populated, skipping auto-fill", organization_id=organization_id)
            return copy.deepcopy(sections), dict(provenance or {})

        sources = await collect_sources(db, organization_id)
        generated = build_sections(sources)
        merged, new_provenance = merge_sections(sections, provenance, generated, force=force)
        logger.info(
            "Report sections assembled",
            organization_id=organization_id,
            has_profile=sources.profile is not None,
            topics=len(sources.topics),
            iros=len(sources.iros),
            kpis=len(sources.kpis),
        )
        return merged, new_provenance
