"""Seed script: demo accounts and a sample CV.

Run with ``python -m cvdash.seed``. Safe to run repeatedly.
"""

import asyncio
import json
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from cvdash.core.config import settings
from cvdash.core.db import SessionLocal, create_tables, engine
from cvdash.core.logging import setup_logging
from cvdash.db.repositories.document_repository import DocumentRepository, DocumentVersionRepository
from cvdash.db.repositories.user_repository import UserRepository
from cvdash.domains.documents.entities import Document, DocumentVersion
from cvdash.domains.identity.entities import User

logger = logging.getLogger(__name__)

SAMPLE_TITLE = "John Smith - Software Engineer CV"

SAMPLE_CV = """JOHN SMITH
Senior Software Engineer | john.smith@email.com | San Francisco, CA

SUMMARY
Experienced Full-Stack Software Engineer with 5+ years developing scalable web applications.

EXPERIENCE
Senior Software Engineer - TechCorp Inc. (2021 - Present)
- Led development of customer portal serving 10,000+ daily users
- Implemented microservices architecture reducing system latency by 50%
- Mentored 3 junior developers and established code review processes

EDUCATION
Bachelor of Science in Computer Science - University of California, Berkeley (2019)

SKILLS
React, TypeScript, Node.js, Python, AWS, Docker, PostgreSQL
"""

SAMPLE_STRUCTURED = {
    "sections": {
        "summary": "Experienced Full-Stack Software Engineer with 5+ years developing scalable web applications.",
        "experience": [
            {
                "title": "Senior Software Engineer",
                "company": "TechCorp Inc.",
                "duration": "2021 - Present",
                "bullets": [
                    "Led development of customer portal serving 10,000+ daily users",
                    "Implemented microservices architecture reducing system latency by 50%",
                    "Mentored 3 junior developers and established code review processes",
                ],
            }
        ],
        "education": [
            {
                "degree": "Bachelor of Science in Computer Science",
                "institution": "University of California, Berkeley",
                "year": "2019",
            }
        ],
        "skills": ["React", "TypeScript", "Node.js", "Python", "AWS", "Docker", "PostgreSQL"],
    },
}


async def ensure_user(session: AsyncSession, **fields) -> User:
    users = UserRepository(session)
    existing = await users.get_by_email(fields["email"])
    if existing:
        return existing
    return await users.create(User.create_user(**fields))


async def seed(session: AsyncSession) -> None:
    demo = await ensure_user(
        session, email="demo@matchmycv.com", name="Demo User", password="Demo!1234"
    )
    logger.info("Demo user: %s", demo.email)

    admin = await ensure_user(
        session,
        email="admin@matchmycv.com",
        name="Admin User",
        password="Admin!1234",
        role="ADMIN",
        plan="PRO",
        credits=-1,
    )
    logger.info("Admin user: %s", admin.email)

    documents = DocumentRepository(session)
    document = await documents.find_by_title(demo.uuid, SAMPLE_TITLE)
    if document is None:
        document = await documents.create(
            Document.create_document(
                user_id=demo.uuid,
                title=SAMPLE_TITLE,
                mime_type="application/pdf",
                file_size=245760,
                storage_key="demo/sample-cv.pdf",
                raw_text=SAMPLE_CV,
                structured=json.dumps(SAMPLE_STRUCTURED),
            )
        )
    logger.info("Sample document: %s", document.title)

    versions = DocumentVersionRepository(session)
    if await versions.find_by_label(document.uuid, "Original") is None:
        await versions.create(
            DocumentVersion.create_version(
                document_id=document.uuid, label="Original", content=SAMPLE_CV, is_active=True
            )
        )
    logger.info("Initial version ready")


async def main() -> None:
    setup_logging(settings.log_level)
    await create_tables()
    async with SessionLocal() as session:
        await seed(session)
    await engine.dispose()
    logger.info("Database seeded successfully")


if __name__ == "__main__":
    asyncio.run(main())
