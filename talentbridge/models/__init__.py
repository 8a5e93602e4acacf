"""
SQLModel 模型模块

使用 SQLModel 统一 ORM Model 和 Pydantic Schema
"""
from .base import SQLModelBase, TimestampMixin, IDMixin, TimestampResponse, utcnow
from .account import (
    Account, CandidateProfile, EmployerProfile, Role, VerificationStatus,
    AccountCreate, CandidateProfileUpdate, EmployerProfileUpdate, VerificationDecision, BadgeUpdate,
    AccountResponse, CandidateProfileResponse, EmployerProfileResponse,
    candidate_record, employer_record, party_brief,
)
from .pipeline import PipelineRelation, PipelineStatus, PipelineStatusUpdate, PipelineRelationResponse
from .consent import ConsentRequest, ConsentStatus, ConsentRequestCreate, ConsentDecision, ConsentRequestResponse
from .quote import (
    QuoteRequest, QuoteStatus, OPEN_QUOTE_STATUSES, QuoteItem, QuoteOption,
    QuoteRequestCreate, QuoteResolve, OptionSelect, QuoteRequestResponse,
)
from .interview import (
    InterviewMeeting, InterviewStatus, TERMINAL_INTERVIEW_STATUSES,
    SlotProposal, InterviewSlot, InterviewCreate, SlotAnswer, InterviewResponse,
)
from .audit import AuditEvent, AuditEventResponse
from .document import Document, DocumentType, DocumentStatus, DocumentCreate, DocumentReview, DocumentResponse
from .profile_view import ProfileView, ProfileViewResponse
from .demand import (
    TalentDemand, DemandStatus, TalentDemandCreate, DemandStatusUpdate,
    CandidateSuggestion, TalentDemandResponse,
)

__all__ = [
    # Base
    "SQLModelBase",
    "TimestampMixin",
    "IDMixin",
    "TimestampResponse",
    "utcnow",
    # Account
    "Account",
    "CandidateProfile",
    "EmployerProfile",
    "Role",
    "VerificationStatus",
    "AccountCreate",
    "CandidateProfileUpdate",
    "EmployerProfileUpdate",
    "VerificationDecision",
    "BadgeUpdate",
    "AccountResponse",
    "CandidateProfileResponse",
    "EmployerProfileResponse",
    "candidate_record",
    "employer_record",
    "party_brief",
    # Pipeline
    "PipelineRelation",
    "PipelineStatus",
    "PipelineStatusUpdate",
    "PipelineRelationResponse",
    # Consent
    "ConsentRequest",
    "ConsentStatus",
    "ConsentRequestCreate",
    "ConsentDecision",
    "ConsentRequestResponse",
    # Quote
    "QuoteRequest",
    "QuoteStatus",
    "OPEN_QUOTE_STATUSES",
    "QuoteItem",
    "QuoteOption",
    "QuoteRequestCreate",
    "QuoteResolve",
    "OptionSelect",
    "QuoteRequestResponse",
    # Interview
    "InterviewMeeting",
    "InterviewStatus",
    "TERMINAL_INTERVIEW_STATUSES",
    "SlotProposal",
    "InterviewSlot",
    "InterviewCreate",
    "SlotAnswer",
    "InterviewResponse",
    # Audit
    "AuditEvent",
    "AuditEventResponse",
    # Document
    "Document",
    "DocumentType",
    "DocumentStatus",
    "DocumentCreate",
    "DocumentReview",
    "DocumentResponse",
    # Profile view
    "ProfileView",
    "ProfileViewResponse",
    # Talent demand
    "TalentDemand",
    "DemandStatus",
    "TalentDemandCreate",
    "DemandStatusUpdate",
    "CandidateSuggestion",
    "TalentDemandResponse",
]
