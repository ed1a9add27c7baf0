"""
schemas/report.py
-----------------
Report template and generated report payloads.

The five auto-filled sections have typed shapes. Every field is a display
string and unknown fields are kept, so hand-added content survives a round
trip. Section keys stay snake_case (general_info, ...) as stored; field
keys inside a section are camelCase.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.schemas.base import CamelModel

Language = Literal["en", "de"]
Status = Literal["draft", "final"]


# ── Section shapes ────────────────────────────────────────────────────────────

class SectionModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class GeneralInfoSection(SectionModel):
    entity_legal_name: str = ""
    legal_form: str = ""
    country_of_registration: str = ""
    nace_sector: str = ""
    consolidation_scope: str = ""
    registered_hq: str = Field("", alias="registeredHQ")
    reporting_period: str = ""


class GovernanceStrategySection(SectionModel):
    business_model_overview: str = ""
    key_products: str = ""
    primary_markets: str = ""
    esg_strategy_overview: str = ""
    transition_plan: str = ""
    net_zero_target: str = ""
    circular_economy_initiatives: str = ""
    governance_roles: str = ""
    board_oversight: str = ""


class MaterialityAssessmentSection(SectionModel):
    materiality_assessment_methodology: str = ""
    list_of_assessed_topics: str = ""
    stakeholder_input_in_assessment: str = ""
    final_material_topics_table: str = ""


class ImpactsRisksSection(SectionModel):
    sustainability_risks: str = ""
    sustainability_opportunities: str = ""
    value_chain_mapping: str = ""
    due_diligence_frameworks: str = ""
    scope_description: str = ""
    governance_oversight: str = ""
    remediation_mechanisms: str = ""


class PoliciesActionsTargetsKpisSection(SectionModel):
    esg_data_by_topic: str = ""


class ReportSections(BaseModel):
    """Known sections are typed; template-specific extras (toc, appendix, ...) pass through."""

    model_config = ConfigDict(extra="allow")

    general_info: Optional[GeneralInfoSection] = None
    governance_strategy: Optional[GovernanceStrategySection] = None
    materiality_assessment: Optional[MaterialityAssessmentSection] = None
    impacts_risks: Optional[ImpactsRisksSection] = None
    policies_actions_targets_kpis: Optional[PoliciesActionsTargetsKpisSection] = None

    def to_storage(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)


# ── Templates ─────────────────────────────────────────────────────────────────

class TemplateSection(CamelModel):
    id: str
    order: int
    title: str
    content: str = ""


class ReportTemplateRead(CamelModel):
    id: str
    name: str
    framework: str
    type: str
    status: str
    description: Optional[str] = None
    sections: List[TemplateSection] = []
    created_at: datetime


# ── Generated reports ─────────────────────────────────────────────────────────

class GeneratedReportCreate(CamelModel):
    organization_id: Optional[str] = None
    template_id: str
    title: str = Field(..., min_length=1, max_length=255)
    language: Language = "en"
    sections: Optional[ReportSections] = None


class GeneratedReportUpdate(CamelModel):
    """
    Client-supplied timestamps (lastModified, finalizedAt, ...) are not part
    of this model and are dropped on input; the server owns them.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    language: Optional[Language] = None
    sections: Optional[ReportSections] = None
    status: Optional[Status] = None


class GeneratedReportRead(CamelModel):
    id: str
    organization_id: str
    template_id: str
    title: str
    status: Status
    language: Language
    sections: Dict[str, Any] = {}
    autofill_provenance: Dict[str, str] = {}
    generated_at: datetime
    last_modified: datetime
    finalized_at: Optional[datetime] = None
