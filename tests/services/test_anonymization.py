"""
候选人匿名化测试

纯函数测试，不依赖数据库
"""
import copy

from talentbridge.core.security import Viewer
from talentbridge.models.account import Account, Role
from talentbridge.services.anonymization import (
    anonymize,
    project_candidate,
    project_interview_parties,
    REMOVED_FIELDS,
)


def make_record(**overrides) -> dict:
    record = {
        "id": "cand-1",
        "email": "anna.muster@example.com",
        "role": "candidate",
        "first_name": "Anna",
        "last_name": "Muster",
        "nationality": "Tunisian",
        "birth_date": "1995-04-12",
        "avatar_url": "https://cdn.example.com/a.png",
        "address": "Rue de Marseille 12",
        "sector": "Healthcare",
        "is_verified": True,
        "badge_type": "gold",
        "candidate_profile": {
            "phone": "+216 555 0101",
            "address": "Rue de Marseille 12",
            "city": "Tunis",
            "country": "Tunisia",
            "bio": "ICU nurse",
            "skills": ["Nursing", "German B2"],
            "experience": [{"title": "Nurse", "years": 5}],
            "education": [{"degree": "BSc Nursing"}],
        },
    }
    record.update(overrides)
    return record


def test_anonymize_masks_identity_fields():
    """脱敏后不含身份信息，职业信息保持不变"""
    masked = anonymize(make_record())

    assert masked["full_name"] == "Anna Muster"
    assert masked["email"] == "********@germantalent.de"
    for key in REMOVED_FIELDS:
        assert key not in masked

    profile = masked["candidate_profile"]
    for key in ("phone", "address", "city", "country"):
        assert key not in profile
    assert profile["skills"] == ["Nursing", "German B2"]
    assert profile["experience"] == [{"title": "Nurse", "years": 5}]
    assert masked["is_verified"] is True
    assert masked["badge_type"] == "gold"


def test_anonymize_is_idempotent():
    """重复脱敏结果一致"""
    once = anonymize(make_record())
    twice = anonymize(once)
    assert twice == once


def test_anonymize_does_not_mutate_input():
    record = make_record()
    snapshot = copy.deepcopy(record)
    anonymize(record)
    assert record == snapshot


def test_anonymize_placeholder_name_and_none():
    """姓名为空时显示 Candidate；None 原样返回"""
    masked = anonymize(make_record(first_name=None, last_name=""))
    assert masked["full_name"] == "Candidate"
    assert anonymize(None) is None


def test_anonymize_without_profile():
    masked = anonymize(make_record(candidate_profile=None))
    assert masked["candidate_profile"] is None
    assert "avatar_url" not in masked


def test_project_candidate_by_role():
    """只有雇主视角脱敏，其他角色看到原始记录"""
    record = make_record()

    employer_view = project_candidate(Viewer("emp-1", Role.EMPLOYER), record)
    assert employer_view["email"] == "********@germantalent.de"
    assert "avatar_url" not in employer_view

    for role in (Role.CANDIDATE, Role.STAFF, Role.ADMIN):
        view = project_candidate(Viewer("someone", role), record)
        assert view["email"] == "anna.muster@example.com"
        assert view["avatar_url"] == "https://cdn.example.com/a.png"
        assert view["candidate_profile"]["phone"] == "+216 555 0101"


def test_interview_parties_hide_avatar_from_employer():
    """雇主视角的面试载荷不含候选人头像"""
    candidate = Account(
        id="cand-1",
        email="anna@example.com",
        role="candidate",
        first_name="Anna",
        last_name="Muster",
        avatar_url="https://cdn.example.com/a.png",
    )
    employer = Account(id="emp-1", email="hr@klinik.de", role="employer", company_name="Klinik GmbH")

    employer_fields = project_interview_parties(Viewer("emp-1", Role.EMPLOYER), candidate, employer)
    assert "candidate_avatar" not in employer_fields
    assert "avatar_url" not in employer_fields["candidate"]
    assert employer_fields["candidate_name"] == "Anna Muster"
    assert employer_fields["employer_name"] == "Klinik GmbH"

    candidate_fields = project_interview_parties(Viewer("cand-1", Role.CANDIDATE), candidate, employer)
    assert candidate_fields["candidate_avatar"] == "https://cdn.example.com/a.png"
    assert candidate_fields["candidate"]["avatar_url"] == "https://cdn.example.com/a.png"


def test_interview_parties_missing_accounts():
    fields = project_interview_parties(Viewer("staff-1", Role.STAFF), None, None)
    assert fields["candidate"] is None
    assert fields["candidate_name"] == "Unknown"
    assert fields["employer_name"] == "Unknown"
