"""Pydantic models for scenario-grouped test cases."""

from collections.abc import Iterable, Iterator
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .normalizer import to_camel_case, to_short_feature_name

Priority = Literal["P1", "P2", "P3", ""]

PRIORITIES = ("P1", "P2", "P3")


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


class Analysis(BaseModel):
    """Structured enrichment result for one natural-language field."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    action: str | None = None
    target: str | None = None
    validation_type: str | None = Field(default=None, alias="validationType")
    expected_value: str | None = Field(default=None, alias="expectedValue")
    url: str | None = None
    original_text: str = Field(default="", alias="originalText")
    confidence: str | None = None
    entities: list[Any] = Field(default_factory=list)

    @field_validator(
        "target", "expected_value", "url", "confidence", mode="before"
    )
    @classmethod
    def coerce_scalar(cls, value: Any) -> str | None:
        """LLMs occasionally answer with numbers or nested objects."""
        if value is None or isinstance(value, (dict, list)):
            return None
        return str(value).strip() or None

    @field_validator("action", "validation_type", mode="before")
    @classmethod
    def normalize_keyword(cls, value: Any) -> str | None:
        if value is None or isinstance(value, (dict, list)):
            return None
        return str(value).strip().lower() or None

    @field_validator("original_text", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("entities", mode="before")
    @classmethod
    def coerce_entities(cls, value: Any) -> list:
        return value if isinstance(value, list) else []


class CaseAnalysis(BaseModel):
    """Enrichment results attached to a test case, one per analysed field."""

    model_config = ConfigDict(populate_by_name=True)

    steps: list[Analysis] = Field(default_factory=list)
    description: Analysis | None = None
    expected: Analysis | None = Field(default=None, alias="expectedResult")

    @property
    def is_empty(self) -> bool:
        return not self.steps and self.description is None and self.expected is None


class TestCase(BaseModel):
    """A single test case row."""

    __test__ = False  # not a pytest test class

    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    title: str = ""
    description: str = ""
    steps: list[str] = Field(default_factory=list)
    data: str = ""
    expected: str = ""
    priority: Priority = ""
    analysis: CaseAnalysis | None = None

    @field_validator("id", "title", "description", "data", "expected", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("priority", mode="before")
    @classmethod
    def normalize_priority(cls, value: Any) -> str:
        return _as_text(value).upper()

    @field_validator("steps", mode="before")
    @classmethod
    def normalize_steps(cls, value: Any) -> list[str]:
        """Accept a newline-separated cell or a list; drop blank steps."""
        if value is None:
            return []
        if isinstance(value, str):
            value = value.splitlines()
        return [str(step).strip() for step in value if str(step).strip()]


class ScenarioGroup(BaseModel):
    """All test cases sharing one scenario title."""

    model_config = ConfigDict(populate_by_name=True)

    index: int = 0
    identifier_name: str = Field(default="", alias="page")
    scenario_title: str = Field(alias="scenario", min_length=1)
    short_feature_name: str = Field(default="", alias="shortFeatureName")
    tests: list[TestCase] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def derive_names(cls, data: Any) -> Any:
        """Fill in identifier and short name when only the title is given."""
        if not isinstance(data, dict):
            return data

        title = data.get("scenario", data.get("scenario_title"))
        if not isinstance(title, str):
            return data
        title = title.strip()
        data = dict(data)
        data.pop("scenario_title", None)
        data["scenario"] = title

        if not data.get("page") and not data.get("identifier_name"):
            data["page"] = to_camel_case(title)
        if not data.get("shortFeatureName") and not data.get("short_feature_name"):
            data["shortFeatureName"] = to_short_feature_name(title)

        return data

    def has_case(self, case: TestCase) -> bool:
        """Check whether a case with the same id or title is already present."""
        for existing in self.tests:
            if case.id and existing.id == case.id:
                return True
            if existing.title == case.title:
                return True
        return False


class ScenarioCollection:
    """Ordered scenario groups with lookup by short feature name.

    The list view and the mapping view hold the same group objects.
    """

    def __init__(self, groups: Iterable[ScenarioGroup] = ()):
        self._groups: list[ScenarioGroup] = []
        self._by_short_name: dict[str, ScenarioGroup] = {}
        for group in groups:
            self.add(group)

    def add(self, group: ScenarioGroup) -> ScenarioGroup:
        """Append a group; its short feature name must not be taken yet."""
        if group.short_feature_name in self._by_short_name:
            raise ValueError(
                f"Duplicate short feature name '{group.short_feature_name}'"
            )
        self._groups.append(group)
        self._by_short_name[group.short_feature_name] = group
        return group

    def create_group(self, scenario_title: str) -> ScenarioGroup:
        """Create and append a group for a title, assigning the next index."""
        group = ScenarioGroup(scenario=scenario_title, index=len(self._groups))
        return self.add(group)

    def get(self, short_feature_name: str) -> ScenarioGroup | None:
        return self._by_short_name.get(short_feature_name)

    def find_by_title(self, scenario_title: str) -> ScenarioGroup | None:
        """Get a group by its exact scenario title."""
        for group in self._groups:
            if group.scenario_title == scenario_title:
                return group
        return None

    @property
    def groups(self) -> list[ScenarioGroup]:
        """Groups in export order."""
        return list(self._groups)

    def as_mapping(self) -> dict[str, ScenarioGroup]:
        """Groups keyed by short feature name."""
        return dict(self._by_short_name)

    @property
    def total_cases(self) -> int:
        return sum(len(g.tests) for g in self._groups)

    def to_list(self) -> list[dict]:
        """Serialize to the wire format (list of group dicts)."""
        return [g.model_dump(by_alias=True, exclude_none=True) for g in self._groups]

    @classmethod
    def from_list(cls, data: list[dict]) -> "ScenarioCollection":
        collection = cls()
        for position, item in enumerate(data):
            group = ScenarioGroup.model_validate(item)
            if "index" not in item:
                group.index = position
            collection.add(group)
        return collection

    def __iter__(self) -> Iterator[ScenarioGroup]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def __contains__(self, short_feature_name: object) -> bool:
        return short_feature_name in self._by_short_name
