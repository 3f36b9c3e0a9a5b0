"""
chart_insights/schemas/data_mapping.py

Contract for the chart slot -> column mapping proposed by a recommender.
"""

from __future__ import annotations

from typing import Any, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

SlotValue = Union[str, list[str], None]

SLOT_NAMES: tuple[str, ...] = (
    "xAxis",
    "yAxis",
    "yAxis1",
    "yAxis2",
    "values",
    "category",
    "value",
    "metric",
    "comparison",
    "target",
    "columns",
    "cohort",
    "period",
    "actual",
    "comparative",
    "trend",
    "size",
    "color",
    "source",
    "target_node",
)


class DataMapping(BaseModel):
    """
    Named chart slots, each referencing one column or a list of columns.

    Slots are addressed by their wire names (``xAxis``, ``target_node``...).
    Unknown keys are ignored; blank references read as unset.
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    x_axis: SlotValue = Field(default=None, alias="xAxis")
    y_axis: SlotValue = Field(default=None, alias="yAxis")
    y_axis1: SlotValue = Field(default=None, alias="yAxis1")
    y_axis2: SlotValue = Field(default=None, alias="yAxis2")
    values: SlotValue = None
    category: SlotValue = None
    value: SlotValue = None
    metric: SlotValue = None
    comparison: SlotValue = None
    target: SlotValue = None
    columns: SlotValue = None
    cohort: SlotValue = None
    period: SlotValue = None
    actual: SlotValue = None
    comparative: SlotValue = None
    trend: SlotValue = None
    size: SlotValue = None
    color: SlotValue = None
    source: SlotValue = None
    target_node: SlotValue = None

    @field_validator("*", mode="after")
    @classmethod
    def _drop_blank(cls, value: SlotValue) -> SlotValue:
        if isinstance(value, list):
            names = [name for name in value if name]
            return names or None
        return value or None

    @classmethod
    def from_payload(cls, payload: "DataMapping | Mapping[str, Any]") -> "DataMapping":
        """
        Parse a raw mapping; raises pydantic ``ValidationError`` when malformed.
        """

        if isinstance(payload, DataMapping):
            return payload
        return cls.model_validate(payload)

    def columns_for(self, slot: str) -> list[str]:
        """
        Column names referenced by ``slot`` (empty when unset or unknown).
        """

        attribute = _ATTRIBUTE_BY_SLOT.get(slot)
        if attribute is None:
            return []
        value = getattr(self, attribute)
        if value is None:
            return []
        if isinstance(value, list):
            return list(value)
        return [value]

    def is_set(self, slot: str) -> bool:
        return bool(self.columns_for(slot))

    def set_slots(self) -> list[str]:
        return [slot for slot in SLOT_NAMES if self.is_set(slot)]

    def referenced_columns(self, slots: tuple[str, ...] | None = None) -> list[str]:
        """
        Distinct referenced column names, in slot order then list order.
        """

        seen: dict[str, None] = {}
        for slot in slots if slots is not None else SLOT_NAMES:
            for name in self.columns_for(slot):
                seen.setdefault(name, None)
        return list(seen)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


_ATTRIBUTE_BY_SLOT: dict[str, str] = {
    (field.alias or name): name for name, field in DataMapping.model_fields.items()
}
