"""
CRUD 操作模块
"""
from .account import account_crud, candidate_profile_crud, employer_profile_crud
from .pipeline import pipeline_crud
from .consent import consent_crud
from .quote import quote_crud
from .interview import interview_crud
from .audit import audit_crud
from .document import document_crud
from .profile_view import profile_view_crud
from .demand import demand_crud

__all__ = [
    "account_crud",
    "candidate_profile_crud",
    "employer_profile_crud",
    "pipeline_crud",
    "consent_crud",
    "quote_crud",
    "interview_crud",
    "audit_crud",
    "document_crud",
    "profile_view_crud",
    "demand_crud",
]
