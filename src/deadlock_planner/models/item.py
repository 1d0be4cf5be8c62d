"""Item and ability data models.

Shop items and hero abilities share the same property-bag shape in the
catalog: a mapping from property key to a descriptor carrying a raw value
(number or numeric text like "5m") plus display hints. Values stay raw here;
the property value resolver turns them into numbers at read time.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ScaleFunction:
    """How an ability property scales with a derived resource."""
    class_name: str = ""
    scale_type: str | None = None    # ScaleType value, e.g. "ETechPower"
    stat_scale: float = 0.0          # linear coefficient


@dataclass(frozen=True, slots=True)
class ItemProperty:
    """One entry of an item/ability property bag."""
    value: float | int | str | None = None
    label: str = ""
    prefix: str = ""
    postfix: str = ""
    is_important: bool = False       # tooltip emphasis only
    scale_function: ScaleFunction | None = None


@dataclass(frozen=True, slots=True)
class Item:
    """A parsed shop upgrade."""
    id: int
    class_name: str
    name: str
    cost: int = 0
    tier: int = 0
    slot_type: str = ""              # "weapon" | "vitality" | "spirit"
    activation: str = "passive"
    is_active_item: bool = False
    shoppable: bool = True
    description: str = ""
    properties: dict[str, ItemProperty] = field(default_factory=dict)

    def __hash__(self) -> int:
        return hash((self.id, self.class_name))


@dataclass(frozen=True, slots=True)
class Ability:
    """A parsed hero ability."""
    id: int
    class_name: str
    name: str
    hero_id: int | None = None
    description: str = ""
    properties: dict[str, ItemProperty] = field(default_factory=dict)

    def __hash__(self) -> int:
        return hash((self.id, self.class_name))
