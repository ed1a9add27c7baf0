"""
schemas/governance.py
---------------------
Governance structure upsert payload and response.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.schemas.base import CamelModel


class GovernanceStructureUpsert(CamelModel):
    organization_id: Optional[str] = None
    board_oversight_mechanism: str = Field(..., min_length=1)
    committee_name: Optional[str] = None
    committee_composition: Optional[List[str]] = None
    committee_responsibilities: Optional[List[str]] = None
    reporting_line: Optional[str] = None
    charter_document: Optional[str] = None


class GovernanceStructureRead(GovernanceStructureUpsert):
    id: str
    organization_id: str
    created_at: datetime
    updated_at: datetime
