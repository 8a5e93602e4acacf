"""
API 依赖注入

每个请求共享同一个数据库会话与审计 sink，引擎按需组装
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from talentbridge.core.database import get_db
from talentbridge.services import (
    AuditSink,
    build_audit_sink,
    AccountRegistry,
    PipelineTracker,
    ConsentEngine,
    QuoteEngine,
    InterviewScheduler,
    DocumentRegistry,
    TalentPool,
    TalentDemandBoard,
)


async def get_audit_sink(db: AsyncSession = Depends(get_db)) -> AuditSink:
    return build_audit_sink(db)


async def get_account_registry(
    db: AsyncSession = Depends(get_db),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> AccountRegistry:
    return AccountRegistry(db, audit_sink)


async def get_pipeline_tracker(
    db: AsyncSession = Depends(get_db),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> PipelineTracker:
    return PipelineTracker(db, audit_sink)


async def get_consent_engine(
    db: AsyncSession = Depends(get_db),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> ConsentEngine:
    return ConsentEngine(db, audit_sink)


async def get_quote_engine(
    db: AsyncSession = Depends(get_db),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> QuoteEngine:
    return QuoteEngine(db, audit_sink)


async def get_interview_scheduler(
    db: AsyncSession = Depends(get_db),
    audit_sink: AuditSink = Depends(get_audit_sink),
    pipeline: PipelineTracker = Depends(get_pipeline_tracker),
) -> InterviewScheduler:
    return InterviewScheduler(db, audit_sink, pipeline)


async def get_document_registry(
    db: AsyncSession = Depends(get_db),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> DocumentRegistry:
    return DocumentRegistry(db, audit_sink)


async def get_talent_pool(
    db: AsyncSession = Depends(get_db),
    documents: DocumentRegistry = Depends(get_document_registry),
) -> TalentPool:
    return TalentPool(db, documents)


async def get_demand_board(
    db: AsyncSession = Depends(get_db),
    audit_sink: AuditSink = Depends(get_audit_sink),
    quotes: QuoteEngine = Depends(get_quote_engine),
) -> TalentDemandBoard:
    return TalentDemandBoard(db, audit_sink, quotes)
