"""
models/__init__.py
------------------
Re-export all models so create_tables.py (or a migration env) can import
Base and discover every table via a single import:

    from app.models import Base
"""

from app.db.base import Base
from app.models.user import User, UserRole
from app.models.organization import ConsultantOrganization, Organization
from app.models.company_profile import (
    CompanyProfile,
    OwnershipStructure,
    Subsidiary,
    SustainabilityInitiative,
    SustainabilityKPI,
)
from app.models.governance import GovernanceStructure
from app.models.materiality import MaterialityTopic
from app.models.risk import ActionPlan, DueDiligenceProcess, IroRegister
from app.models.esg_data import EsgDataKpi
from app.models.report import GeneratedReport, ReportStatus, ReportTemplate

__all__ = [
    "Base",
    "User",
    "UserRole",
    "Organization",
    "ConsultantOrganization",
    "CompanyProfile",
    "Subsidiary",
    "OwnershipStructure",
    "SustainabilityInitiative",
    "SustainabilityKPI",
    "GovernanceStructure",
    "MaterialityTopic",
    "DueDiligenceProcess",
    "IroRegister",
    "ActionPlan",
    "EsgDataKpi",
    "ReportTemplate",
    "GeneratedReport",
    "ReportStatus",
]
