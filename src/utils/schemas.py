from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator
from typing import List, Optional, Tuple

class Document(BaseModel):
    """
    A chapter's text as read from the documentation root for one run.
    A missing chapter is represented with exists=False and empty text.
    """
    model_config = ConfigDict(frozen=True)

    doc_id: str = Field(..., description="Path-like key of the chapter, e.g. 'ros2-robotics/intro'.")
    path: Optional[str] = Field(None, description="The file the text was read from, if any.")
    raw_text: str = ""
    exists: bool = False

    @computed_field
    @property
    def length(self) -> int:
        return len(self.raw_text)

    @computed_field
    @property
    def is_empty(self) -> bool:
        return self.length == 0


class ConceptRule(BaseModel):
    """
    A coverage rule in conjunctive normal form: every group must match,
    and a group matches when any one of its terms appears in the text.

    [["service", "services"]]        -> a term with synonyms
    [["ai", "agent"]]                -> either term
    [["coordinate"], ["frame"]]      -> both terms, anywhere in the text
    """
    model_config = ConfigDict(frozen=True)

    all_of: Tuple[Tuple[str, ...], ...]

    @field_validator('all_of')
    @classmethod
    def _groups_not_empty(cls, groups):
        if not groups:
            raise ValueError("A rule needs at least one term group.")
        for group in groups:
            if not group:
                raise ValueError("A term group cannot be empty.")
            if any(not term.strip() for term in group):
                raise ValueError("Terms must be non-blank strings.")
        return groups


class Concept(BaseModel):
    """A named coverage requirement of a chapter."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Human label used in the report, e.g. 'Nodes'.")
    rule: ConceptRule
    required: bool = True

    @field_validator('required')
    @classmethod
    def _always_required(cls, value):
        if not value:
            raise ValueError("Optional concepts are not supported; every concept is required.")
        return value


class ChapterSpec(BaseModel):
    """Binds one chapter to the ordered concepts it has to cover."""
    model_config = ConfigDict(frozen=True)

    doc_id: str = Field(..., min_length=1)
    title: str = ""
    concepts: Tuple[Concept, ...]

    @model_validator(mode='before')
    @classmethod
    def _default_title(cls, data):
        if isinstance(data, dict) and not data.get('title'):
            data = {**data, 'title': data.get('doc_id', '')}
        return data

    @model_validator(mode='after')
    def _check_concepts(self):
        if not self.concepts:
            raise ValueError(f"Chapter '{self.doc_id}' declares no concepts.")
        names = [c.name for c in self.concepts]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Chapter '{self.doc_id}' repeats concept names: {', '.join(duplicates)}")
        return self


class Verdict(BaseModel):
    model_config = ConfigDict(frozen=True)

    concept_name: str
    satisfied: bool


class ChapterReport(BaseModel):
    """Outcome of checking one chapter."""
    model_config = ConfigDict(frozen=True)

    chapter_id: str
    title: str
    document_exists: bool
    document_empty: bool = False
    verdicts: Tuple[Verdict, ...]

    @computed_field
    @property
    def passed(self) -> bool:
        return self.document_exists and all(v.satisfied for v in self.verdicts)

    @property
    def satisfied_count(self) -> int:
        return sum(1 for v in self.verdicts if v.satisfied)


class RunReport(BaseModel):
    """All chapter reports of one invocation, in registry order."""
    model_config = ConfigDict(frozen=True)

    chapters: Tuple[ChapterReport, ...]

    @computed_field
    @property
    def overall_passed(self) -> bool:
        return all(c.passed for c in self.chapters)

    def failed_chapters(self) -> List[str]:
        return [c.chapter_id for c in self.chapters if not c.passed]
