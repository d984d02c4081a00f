"""SQLite persistence for profiles, jobs, applications and derived records.

Every public method opens its own connection. Writes that belong together
run inside one transaction (``with conn:``), so a failed application
submission leaves no rows behind.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator

from models.responses import ApplicantInfo, ApplicationDetail, ApplicationSummary, JobInfo
from models.schemas import (
    Application,
    AttritionRisk,
    ExternalProfile,
    Job,
    Profile,
    ResumeAnalysis,
)
from services.errors import PersistenceError

logger = logging.getLogger(__name__)

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS profiles (
        id TEXT PRIMARY KEY,
        email TEXT NOT NULL,
        full_name TEXT NOT NULL,
        role TEXT NOT NULL CHECK (role IN ('job_seeker', 'recruiter')),
        company_name TEXT,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS jobs (
        id TEXT PRIMARY KEY,
        recruiter_id TEXT NOT NULL REFERENCES profiles (id),
        title TEXT NOT NULL,
        company TEXT NOT NULL,
        location TEXT NOT NULL,
        job_type TEXT NOT NULL,
        experience_required TEXT NOT NULL,
        description TEXT NOT NULL,
        requirements_json TEXT NOT NULL,
        salary_range TEXT NOT NULL,
        status TEXT NOT NULL CHECK (status IN ('open', 'closed')),
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS applications (
        id TEXT PRIMARY KEY,
        job_id TEXT NOT NULL REFERENCES jobs (id),
        applicant_id TEXT NOT NULL REFERENCES profiles (id),
        resume_text TEXT NOT NULL,
        cover_letter TEXT,
        status TEXT NOT NULL CHECK (
            status IN ('submitted', 'screening', 'shortlisted', 'interviewed', 'rejected')
        ),
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS resume_analysis (
        application_id TEXT PRIMARY KEY REFERENCES applications (id),
        skills_extracted_json TEXT NOT NULL,
        experience_years INTEGER NOT NULL,
        languages_detected_json TEXT NOT NULL,
        original_language TEXT NOT NULL,
        match_score INTEGER NOT NULL,
        key_highlights_json TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS external_profiles (
        application_id TEXT PRIMARY KEY REFERENCES applications (id),
        github_username TEXT,
        linkedin_url TEXT,
        github_repos_count INTEGER NOT NULL,
        github_stars INTEGER NOT NULL,
        github_contributions INTEGER NOT NULL,
        metrics_synthetic INTEGER NOT NULL,
        social_score REAL NOT NULL,
        verification_status TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS attrition_risk (
        application_id TEXT PRIMARY KEY REFERENCES applications (id),
        risk_score INTEGER NOT NULL,
        job_hopping_frequency REAL NOT NULL,
        average_tenure_months INTEGER NOT NULL,
        recent_job_changes INTEGER NOT NULL,
        career_progression_rate TEXT NOT NULL,
        risk_factors_json TEXT NOT NULL,
        retention_prediction TEXT NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_jobs_recruiter ON jobs (recruiter_id)",
    "CREATE INDEX IF NOT EXISTS idx_applications_job ON applications (job_id)",
    "CREATE INDEX IF NOT EXISTS idx_applications_applicant ON applications (applicant_id)",
)


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class Store:
    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path)

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
        finally:
            conn.close()

    def init_db(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn, conn:
            for statement in SCHEMA:
                conn.execute(statement)
        logger.info("Database ready at %s", self.db_path)

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------

    def upsert_profile(self, profile: Profile) -> Profile:
        with self._connect() as conn, conn:
            conn.execute(
                """
                INSERT INTO profiles (id, email, full_name, role, company_name, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT (id) DO UPDATE SET
                    email = excluded.email,
                    full_name = excluded.full_name,
                    role = excluded.role,
                    company_name = excluded.company_name
                """,
                (
                    profile.id,
                    profile.email,
                    profile.full_name,
                    profile.role,
                    profile.company_name,
                    profile.created_at or utc_now(),
                ),
            )
        return self.get_profile(profile.id) or profile

    def get_profile(self, profile_id: str) -> Profile | None:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM profiles WHERE id = ?", (profile_id,)).fetchone()
        return Profile(**dict(row)) if row else None

    # ------------------------------------------------------------------
    # Jobs
    # ------------------------------------------------------------------

    def insert_job(self, job: Job) -> Job:
        try:
            with self._connect() as conn, conn:
                conn.execute(
                    """
                    INSERT INTO jobs (
                        id, recruiter_id, title, company, location, job_type,
                        experience_required, description, requirements_json,
                        salary_range, status, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        job.id,
                        job.recruiter_id,
                        job.title,
                        job.company,
                        job.location,
                        job.job_type,
                        job.experience_required,
                        job.description,
                        json.dumps(job.requirements, ensure_ascii=False),
                        job.salary_range,
                        job.status,
                        job.created_at,
                    ),
                )
        except sqlite3.Error as e:
            logger.error("Failed to insert job %s: %s", job.id, e)
            raise PersistenceError("Could not save job") from e
        return job

    def get_job(self, job_id: str) -> Job | None:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM jobs WHERE id = ?", (job_id,)).fetchone()
        return _row_to_job(row) if row else None

    def list_jobs(
        self, status: str | None = None, recruiter_id: str | None = None
    ) -> list[Job]:
        """Jobs newest first, optionally filtered by status and owner."""
        clauses: list[str] = []
        params: list[Any] = []
        if status is not None:
            clauses.append("status = ?")
            params.append(status)
        if recruiter_id is not None:
            clauses.append("recruiter_id = ?")
            params.append(recruiter_id)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT * FROM jobs {where} ORDER BY created_at DESC, rowid DESC",
                params,
            ).fetchall()
        return [_row_to_job(r) for r in rows]

    def update_job_status(self, job_id: str, status: str) -> None:
        try:
            with self._connect() as conn, conn:
                conn.execute("UPDATE jobs SET status = ? WHERE id = ?", (status, job_id))
        except sqlite3.Error as e:
            logger.error("Failed to update job %s: %s", job_id, e)
            raise PersistenceError("Could not update job") from e

    # ------------------------------------------------------------------
    # Applications
    # ------------------------------------------------------------------

    def create_application_bundle(
        self,
        application: Application,
        analysis: ResumeAnalysis,
        external_profile: ExternalProfile,
        attrition_risk: AttritionRisk,
    ) -> None:
        """Insert an application and its three derived records atomically."""
        try:
            with self._connect() as conn, conn:
                conn.execute(
                    """
                    INSERT INTO applications (
                        id, job_id, applicant_id, resume_text, cover_letter, status, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        application.id,
                        application.job_id,
                        application.applicant_id,
                        application.resume_text,
                        application.cover_letter,
                        application.status,
                        application.created_at,
                    ),
                )
                conn.execute(
                    """
                    INSERT INTO resume_analysis (
                        application_id, skills_extracted_json, experience_years,
                        languages_detected_json, original_language, match_score,
                        key_highlights_json
                    ) VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        application.id,
                        json.dumps(analysis.skills_extracted, ensure_ascii=False),
                        analysis.experience_years,
                        json.dumps(analysis.languages_detected, ensure_ascii=False),
                        analysis.original_language,
                        analysis.match_score,
                        json.dumps(analysis.key_highlights, ensure_ascii=False),
                    ),
                )
                conn.execute(
                    """
                    INSERT INTO external_profiles (
                        application_id, github_username, linkedin_url, github_repos_count,
                        github_stars, github_contributions, metrics_synthetic,
                        social_score, verification_status
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        application.id,
                        external_profile.github_username,
                        external_profile.linkedin_url,
                        external_profile.github_repos_count,
                        external_profile.github_stars,
                        external_profile.github_contributions,
                        1 if external_profile.metrics_synthetic else 0,
                        external_profile.social_score,
                        external_profile.verification_status,
                    ),
                )
                conn.execute(
                    """
                    INSERT INTO attrition_risk (
                        application_id, risk_score, job_hopping_frequency,
                        average_tenure_months, recent_job_changes,
                        career_progression_rate, risk_factors_json, retention_prediction
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        application.id,
                        attrition_risk.risk_score,
                        attrition_risk.job_hopping_frequency,
                        attrition_risk.average_tenure_months,
                        attrition_risk.recent_job_changes,
                        attrition_risk.career_progression_rate,
                        json.dumps(attrition_risk.risk_factors, ensure_ascii=False),
                        attrition_risk.retention_prediction,
                    ),
                )
        except sqlite3.Error as e:
            logger.error("Failed to store application %s: %s", application.id, e)
            raise PersistenceError("Could not submit application") from e

    def get_application(self, application_id: str) -> Application | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM applications WHERE id = ?", (application_id,)
            ).fetchone()
        return Application(**dict(row)) if row else None

    def update_application_status(self, application_id: str, status: str) -> None:
        try:
            with self._connect() as conn, conn:
                conn.execute(
                    "UPDATE applications SET status = ? WHERE id = ?", (status, application_id)
                )
        except sqlite3.Error as e:
            logger.error("Failed to update application %s: %s", application_id, e)
            raise PersistenceError("Could not update application") from e

    def count_applications(self) -> int:
        with self._connect() as conn:
            return conn.execute("SELECT COUNT(*) FROM applications").fetchone()[0]

    def list_applications_for_applicant(self, applicant_id: str) -> list[ApplicationSummary]:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT a.id, a.job_id, a.status, a.created_at,
                       j.title AS job_title, j.company AS job_company,
                       ra.match_score, ra.skills_extracted_json
                FROM applications a
                JOIN jobs j ON j.id = a.job_id
                LEFT JOIN resume_analysis ra ON ra.application_id = a.id
                WHERE a.applicant_id = ?
                ORDER BY a.created_at DESC, a.rowid DESC
                """,
                (applicant_id,),
            ).fetchall()
        return [
            ApplicationSummary(
                id=r["id"],
                job_id=r["job_id"],
                status=r["status"],
                created_at=r["created_at"],
                job=JobInfo(title=r["job_title"], company=r["job_company"]),
                match_score=r["match_score"],
                skills_extracted=_loads(r["skills_extracted_json"]),
            )
            for r in rows
        ]

    def list_applications_for_recruiter(self, recruiter_id: str) -> list[ApplicationDetail]:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT a.*, j.title AS job_title, j.company AS job_company,
                       p.full_name AS applicant_name, p.email AS applicant_email
                FROM applications a
                JOIN jobs j ON j.id = a.job_id
                LEFT JOIN profiles p ON p.id = a.applicant_id
                WHERE j.recruiter_id = ?
                ORDER BY a.created_at DESC, a.rowid DESC
                """,
                (recruiter_id,),
            ).fetchall()
            return [self._detail_from_row(conn, r) for r in rows]

    def get_application_detail(self, application_id: str) -> ApplicationDetail | None:
        with self._connect() as conn:
            row = conn.execute(
                """
                SELECT a.*, j.title AS job_title, j.company AS job_company,
                       p.full_name AS applicant_name, p.email AS applicant_email
                FROM applications a
                JOIN jobs j ON j.id = a.job_id
                LEFT JOIN profiles p ON p.id = a.applicant_id
                WHERE a.id = ?
                """,
                (application_id,),
            ).fetchone()
            return self._detail_from_row(conn, row) if row else None

    def _detail_from_row(self, conn: sqlite3.Connection, row: sqlite3.Row) -> ApplicationDetail:
        application_id = row["id"]
        analysis = conn.execute(
            "SELECT * FROM resume_analysis WHERE application_id = ?", (application_id,)
        ).fetchone()
        external = conn.execute(
            "SELECT * FROM external_profiles WHERE application_id = ?", (application_id,)
        ).fetchone()
        risk = conn.execute(
            "SELECT * FROM attrition_risk WHERE application_id = ?", (application_id,)
        ).fetchone()

        return ApplicationDetail(
            application=Application(
                id=application_id,
                job_id=row["job_id"],
                applicant_id=row["applicant_id"],
                resume_text=row["resume_text"],
                cover_letter=row["cover_letter"],
                status=row["status"],
                created_at=row["created_at"],
            ),
            applicant=ApplicantInfo(
                full_name=row["applicant_name"] or "",
                email=row["applicant_email"] or "",
            ),
            job=JobInfo(title=row["job_title"], company=row["job_company"]),
            resume_analysis=_row_to_analysis(analysis) if analysis else None,
            external_profile=_row_to_external(external) if external else None,
            attrition_risk=_row_to_risk(risk) if risk else None,
        )


def _loads(raw: str | None) -> list[str]:
    return json.loads(raw) if raw else []


def _row_to_job(row: sqlite3.Row) -> Job:
    data = dict(row)
    data["requirements"] = _loads(data.pop("requirements_json"))
    return Job(**data)


def _row_to_analysis(row: sqlite3.Row) -> ResumeAnalysis:
    return ResumeAnalysis(
        application_id=row["application_id"],
        skills_extracted=_loads(row["skills_extracted_json"]),
        experience_years=row["experience_years"],
        languages_detected=_loads(row["languages_detected_json"]),
        original_language=row["original_language"],
        match_score=row["match_score"],
        key_highlights=_loads(row["key_highlights_json"]),
    )


def _row_to_external(row: sqlite3.Row) -> ExternalProfile:
    data = dict(row)
    data["metrics_synthetic"] = bool(data["metrics_synthetic"])
    return ExternalProfile(**data)


def _row_to_risk(row: sqlite3.Row) -> AttritionRisk:
    data = dict(row)
    data["risk_factors"] = _loads(data.pop("risk_factors_json"))
    return AttritionRisk(**data)
