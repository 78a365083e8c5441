"""Syllabus ingestion: staged processing that yields a new subject."""
import json
import logging
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime

from studygenie.models import Subject, Topic, Unit
from studygenie.processing import Stage, run_stages
from studygenie.seed import CONTENT_DIR
from studygenie.storage import validate_upload

logger = logging.getLogger(__name__)

SYLLABUS_STAGES = (
    Stage("Parsing syllabus document...", 1.5),
    Stage("Extracting subjects and topics...", 1.5),
    Stage("Organizing content with AI...", 2.0),
    Stage("Generating study notes...", 1.5),
)


@dataclass
class ParsedUnit:
    name: str
    topics: list[str] = field(default_factory=list)


@dataclass
class ParsedSyllabus:
    subject: str
    units: list[ParsedUnit] = field(default_factory=list)

    @property
    def topic_count(self) -> int:
        return sum(len(u.topics) for u in self.units)


def load_syllabus_template() -> ParsedSyllabus:
    data = json.loads((CONTENT_DIR / "syllabus_template.json").read_text(encoding="utf-8"))
    return ParsedSyllabus(
        subject=data["subject"],
        units=[ParsedUnit(name=u["name"], topics=list(u["topics"])) for u in data["units"]],
    )


def process_syllabus(file_path=None, text: str = "", on_progress=None,
                     sleep=time.sleep, stages=SYLLABUS_STAGES) -> ParsedSyllabus:
    """Run the syllabus stages for an uploaded file or pasted text.

    The structure returned is the packaged template; no document content is
    read.
    """
    if file_path is None and not text.strip():
        raise ValueError("Provide a syllabus file or paste its text")
    if file_path is not None:
        validate_upload(file_path)
    source = str(file_path) if file_path is not None else f"{len(text)} chars of text"
    logger.info("Processing syllabus from %s", source)
    run_stages(stages, on_progress=on_progress, sleep=sleep)
    return load_syllabus_template()


def build_subject(parsed: ParsedSyllabus, subject_id: str | None = None,
                  uploaded_at: datetime | None = None) -> Subject:
    subject_id = subject_id or uuid.uuid4().hex[:8]
    units = []
    for u_index, parsed_unit in enumerate(parsed.units, 1):
        unit_id = f"{subject_id}-{u_index}"
        topics = [
            Topic(id=f"{unit_id}-{t_index}", name=name)
            for t_index, name in enumerate(parsed_unit.topics, 1)
        ]
        units.append(Unit(id=unit_id, name=parsed_unit.name, topics=topics))
    subject = Subject(
        id=subject_id,
        name=parsed.subject,
        units=units,
        uploaded_at=uploaded_at or datetime.now(),
    )
    subject.recompute()
    return subject


def save_syllabus(store, parsed: ParsedSyllabus, subject_id: str | None = None) -> Subject:
    subject = build_subject(parsed, subject_id=subject_id)
    store.add_subject(subject)
    return subject
