"""
服务层模块
"""
from .audit import (
    AuditSink,
    AuditEventData,
    DatabaseAuditSink,
    LoguruAuditSink,
    CompositeAuditSink,
    RecordingAuditSink,
    build_audit_sink,
)
from .anonymization import anonymize, project_candidate, project_interview_parties
from .pricing import build_quote_options
from .accounts import AccountRegistry
from .pipeline import PipelineTracker
from .consent import ConsentEngine
from .quotes import QuoteEngine
from .interviews import InterviewScheduler, InterviewOutcomeRecorder
from .documents import DocumentRegistry
from .talent_pool import TalentPool
from .demands import TalentDemandBoard

__all__ = [
    # 审计
    "AuditSink",
    "AuditEventData",
    "DatabaseAuditSink",
    "LoguruAuditSink",
    "CompositeAuditSink",
    "RecordingAuditSink",
    "build_audit_sink",
    # 匿名化与定价
    "anonymize",
    "project_candidate",
    "project_interview_parties",
    "build_quote_options",
    # 引擎
    "AccountRegistry",
    "PipelineTracker",
    "ConsentEngine",
    "QuoteEngine",
    "InterviewScheduler",
    "InterviewOutcomeRecorder",
    "DocumentRegistry",
    "TalentPool",
    "TalentDemandBoard",
]
